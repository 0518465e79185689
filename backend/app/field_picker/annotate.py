# app/field_picker/annotate.py
"""Disabled-state annotation of field trees."""

from typing import AbstractSet, List, Optional, Sequence

from app.schemas.field import FieldNode


def annotate_node(node: FieldNode, disabled_keys: AbstractSet[str]) -> FieldNode:
    """
    Return a copy of ``node`` with ``disabled`` set on it and every descendant.

    Each node is decided from its own data only: group containers and
    explicitly disabled keys are disabled, nothing is inherited.
    """
    children = node.children
    if children is not None:
        children = [annotate_node(child, disabled_keys) for child in children]
    return node.model_copy(update={
        "disabled": node.group or node.key in disabled_keys,
        "children": children,
    })


def annotate_disabled(nodes: Sequence[FieldNode], disabled_keys: AbstractSet[str] = frozenset()) -> List[FieldNode]:
    return [annotate_node(node, disabled_keys) for node in nodes]


def narrow_to_field(nodes: Sequence[FieldNode], field_key: Optional[str]) -> List[FieldNode]:
    """Keep only the top-level node(s) matching ``field_key`` when one is requested."""
    if not field_key:
        return list(nodes)
    return [node for node in nodes if node.key == field_key]
