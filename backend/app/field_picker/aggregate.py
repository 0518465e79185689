# app/field_picker/aggregate.py
"""Select-all helpers over the top level of an annotated tree."""

from typing import List, Sequence

from app.schemas.field import FieldNode


def is_select_all_disabled(nodes: Sequence[FieldNode]) -> bool:
    return all(node.disabled for node in nodes)


def collect_all(nodes: Sequence[FieldNode]) -> List[str]:
    # first level only, nested keys are never bulk-added
    return [node.key for node in nodes]
