"""Infrastructure layer - Adapters for domain protocols.

Structure:
- importers/: CSV and OFX/QFX statement parsers
- logging/: structlog console adapter
- persistence/: In-memory transaction store

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
