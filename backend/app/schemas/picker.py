# backend/app/schemas/picker.py
"""
Pydantic schemas for the field picker API.
"""

from typing import List, Optional, Set
from pydantic import BaseModel, Field, model_validator

from .field import CollectionInfo, FieldInfo, FieldNode, RelationInfo


class PickerOptions(BaseModel):
    """Options recognised by the field picker."""
    restrict_to_root_collection_fields: bool = Field(
        False, description="Hide fields of related collections and non-group alias fields"
    )
    single_field_filter: Optional[str] = Field(None, description="Narrow the result to exactly this field")
    explicitly_disabled_keys: Set[str] = Field(default_factory=set)
    allow_bulk_select: bool = False


class FieldTreeResponse(BaseModel):
    """Filtered, annotated field tree of one collection."""
    collection: str
    search: str = ""
    show_search: bool
    allow_select_all: bool
    select_all_disabled: bool
    tree: List[FieldNode]


class BranchResponse(BaseModel):
    """Lazily loaded children of a relational node."""
    collection: str
    key: str
    children: List[FieldNode]


class AddRequest(BaseModel):
    """Pick one field by key, or every top-level field with ``all``."""
    key: Optional[str] = None
    all: bool = False
    search: str = ""
    options: PickerOptions = Field(default_factory=PickerOptions)

    @model_validator(mode="after")
    def _key_or_all(self):
        if not self.all and not self.key:
            raise ValueError("either 'key' or 'all' must be given")
        return self


class AddEvent(BaseModel):
    """Emitted when fields are picked."""
    field_keys: List[str]


class SchemaSnapshot(BaseModel):
    """A complete schema snapshot as imported into the directory tables."""
    collections: List[CollectionInfo] = Field(default_factory=list)
    fields: List[FieldInfo] = Field(default_factory=list)
    relations: List[RelationInfo] = Field(default_factory=list)


class SnapshotImportResponse(BaseModel):
    collections: int
    fields: int
    relations: int
