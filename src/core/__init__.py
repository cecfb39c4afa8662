"""
Core Layer - Core business logic.

This package contains the core business logic including:
- Configuration management (settings.py)
- Core data types (types.py) - shared contracts for loaders and the manager
- Error taxonomy (errors.py)
- Dashboard documents (dashboard.py)
- Data loader manager (data_loader_manager.py)
"""

from src.core.types import DataSourceDescriptor, FileRef, HttpResponse, LoaderDefinition

__all__ = ["DataSourceDescriptor", "FileRef", "HttpResponse", "LoaderDefinition"]
