# app/schemas/__init__.py
from .field import (
    FieldSchema,
    FieldMeta,
    FieldInfo,
    CollectionInfo,
    RelationInfo,
    FieldNode,
)

from .picker import (
    PickerOptions,
    FieldTreeResponse,
    BranchResponse,
    AddRequest,
    AddEvent,
    SchemaSnapshot,
    SnapshotImportResponse,
)
