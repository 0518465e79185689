# backend/app/schemas/field.py
"""
Pydantic schemas for collection schema metadata and field tree nodes.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, model_validator


def format_title(key: str) -> str:
    """Turn a field key like ``author_name`` into a display label ``Author Name``."""
    words = key.replace("-", " ").replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


class FieldSchema(BaseModel):
    """Database-level schema of a field (only what the picker needs)."""
    foreign_key_table: Optional[str] = None


class FieldMeta(BaseModel):
    """App-level metadata of a field."""
    group: Optional[str] = Field(None, description="Key of the containing group field")
    special: Optional[List[str]] = None
    sort: Optional[int] = None
    hidden: bool = False
    readonly: bool = False
    required: bool = False


class FieldInfo(BaseModel):
    """A field definition as served by the schema directory."""
    collection: str
    field: str
    name: str = ""
    type: str = "alias"
    schema_: Optional[FieldSchema] = Field(None, alias="schema")
    meta: Optional[FieldMeta] = None

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def _default_name(self):
        if not self.name:
            self.name = format_title(self.field)
        return self

    @property
    def foreign_key_table(self) -> Optional[str]:
        return self.schema_.foreign_key_table if self.schema_ else None

    @property
    def is_relational(self) -> bool:
        return self.foreign_key_table is not None

    @property
    def group_key(self) -> Optional[str]:
        return self.meta.group if self.meta else None

    @property
    def specials(self) -> List[str]:
        return list(self.meta.special or []) if self.meta else []

    @property
    def is_group(self) -> bool:
        return "group" in self.specials

    @property
    def is_alias(self) -> bool:
        return self.type == "alias"


class CollectionInfo(BaseModel):
    """Collection-level metadata."""
    collection: str
    versioning: bool = False
    note: Optional[str] = None

    class Config:
        from_attributes = True


class RelationInfo(BaseModel):
    """A foreign-key edge between two collections."""
    many_collection: str
    many_field: str
    one_collection: Optional[str] = None
    one_field: Optional[str] = None

    class Config:
        from_attributes = True


class FieldNode(BaseModel):
    """Tree projection of a field as shown in the picker."""
    field: str
    collection: str
    name: str
    type: str
    key: str = Field(..., description="Dotted path from the root collection")
    group: bool = False
    related_collection: Optional[str] = None
    children: Optional[List["FieldNode"]] = Field(
        None, description="Group children, or a loaded relation branch; null when not loaded"
    )
    disabled: Optional[bool] = None


FieldNode.model_rebuild()
