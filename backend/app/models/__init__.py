# File: app/models/__init__.py
from .base import Base
from .collection import Collection
from .field import Field
from .relation import Relation

__all__ = [
    "Base",
    "Collection",
    "Field",
    "Relation",
]
