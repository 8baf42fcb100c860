"""Commands - Write operations that change state.

Commands represent user intent. They are immutable dataclasses with
imperative names (ImportStatement); each has a handler under handlers/.
"""
