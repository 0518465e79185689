# app/field_picker/version.py
from typing import List

from app.field_picker.directory import SchemaDirectory
from app.schemas.field import FieldInfo, FieldMeta
from settings import PickerConfig


def version_field(collection: str) -> FieldInfo:
    """Synthetic read-only field standing for the current content version."""
    return FieldInfo(
        collection=collection,
        field=PickerConfig.VERSION_FIELD_KEY,
        name=PickerConfig.VERSION_FIELD_NAME,
        type=PickerConfig.VERSION_FIELD_TYPE,
        meta=FieldMeta(readonly=True, required=False, group=None),
    )


def extra_fields_for(directory: SchemaDirectory, collection: str) -> List[FieldInfo]:
    """Root-level fields merged into the candidate list before the tree is built."""
    if directory.get_collection(collection).versioning:
        return [version_field(collection)]
    return []
