"""
Data layer for the matching engine.

Submodules:
- database: MongoDB connection management
- models: Pydantic data models/schemas
- repositories: Read-only data access and the engine's data source interface
"""

from .database import (
    DatabaseManager,
    get_database_manager,
)

__all__ = [
    "DatabaseManager",
    "get_database_manager",
]
