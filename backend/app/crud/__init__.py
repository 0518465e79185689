# backend/app/crud/__init__.py
from .schema import schema_crud

__all__ = ["schema_crud"]
