"""chatstore - PostgreSQL data access for a small web chat."""

__version__ = "0.1.0"
