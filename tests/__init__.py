"""Test suite for the statement importer.

- unit/: parsers, services, handler and ambient modules in isolation
"""
