# app/field_picker/visibility.py
from typing import Sequence

from app.schemas.field import FieldInfo
from settings import PickerConfig


def should_show_search(fields: Sequence[FieldInfo], relations_exist: bool) -> bool:
    """Whether the picker offers a search box for this set of fields."""
    if not fields:
        return False
    if len(fields) > PickerConfig.SEARCH_FIELD_THRESHOLD:
        return True
    if any(field.group_key is not None for field in fields):
        return True
    return relations_exist
