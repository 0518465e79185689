# app/field_picker/tree.py
"""
Builds the ordered field tree of a collection.

Groups are expanded eagerly; relational fields get a ``related_collection``
and stay unloaded (``children is None``) until their branch is requested.
Every candidate field goes through the filter callback together with the
tree node it would be placed under.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from app.field_picker.directory import SchemaDirectory, is_candidate
from app.schemas.field import FieldInfo, FieldNode

logger = logging.getLogger("uvicorn")

FieldFilter = Callable[[FieldInfo, Optional[FieldNode]], bool]


def _accept_all(field: FieldInfo, parent: Optional[FieldNode] = None) -> bool:
    return True


def find_node(nodes: Iterable[FieldNode], key: str) -> Optional[FieldNode]:
    """Depth-first lookup of a node by its key."""
    for node in nodes:
        if node.key == key:
            return node
        if node.children:
            found = find_node(node.children, key)
            if found is not None:
                return found
    return None


class FieldTree:
    """Result of a tree build: the visible nodes plus lazy relation loading."""

    def __init__(self, builder: "FieldTreeBuilder", root_collection: str,
                 extra_fields: Sequence[FieldInfo], predicate: FieldFilter):
        self.builder = builder
        self.root_collection = root_collection
        self.extra_fields = list(extra_fields)
        self.predicate = predicate
        self.tree_list: List[FieldNode] = []
        self._loaded_branches: List[str] = []
        self.refresh()

    def refresh(self) -> List[FieldNode]:
        """Rebuild from the directory and re-open the branches loaded so far."""
        self.tree_list = self.builder.get_tree(
            self.root_collection, self.extra_fields, self.predicate
        )
        loaded, self._loaded_branches = self._loaded_branches, []
        for key in loaded:
            self.load_relation_branch(key)
        return self.tree_list

    def load_relation_branch(self, key: str) -> Optional[List[FieldNode]]:
        """Populate the children of the relational node at ``key``."""
        node = find_node(self.tree_list, key)
        if node is None or not node.related_collection:
            logger.debug(f"No relational node '{key}' in {self.root_collection} tree")
            return None

        if node.children is None:
            node.children = self.builder.get_tree(
                node.related_collection, self.extra_fields, self.predicate, parent=node
            )
            logger.debug(f"Loaded relation branch '{key}' -> {node.related_collection} "
                         f"({len(node.children)} nodes)")
        if key not in self._loaded_branches:
            self._loaded_branches.append(key)
        return node.children


class FieldTreeBuilder:
    """Produces field trees from a schema directory."""

    def __init__(self, directory: SchemaDirectory):
        self.directory = directory

    def build_tree(
        self,
        root_collection: str,
        extra_fields: Sequence[FieldInfo] = (),
        predicate: Optional[FieldFilter] = None,
    ) -> FieldTree:
        return FieldTree(self, root_collection, extra_fields, predicate or _accept_all)

    def get_tree(
        self,
        collection: str,
        extra_fields: Sequence[FieldInfo],
        predicate: FieldFilter,
        parent: Optional[FieldNode] = None,
    ) -> List[FieldNode]:
        """Top-level nodes of ``collection``, placed under ``parent``."""
        # extra fields only ever sit at the root level
        candidates = self._candidates(collection, extra_fields if parent is None else ())
        top_level = [f for f in candidates if not f.group_key]
        return self._make_nodes(top_level, candidates, predicate, parent, self._key_prefix(parent))

    def _candidates(self, collection: str, extra_fields: Sequence[FieldInfo]) -> List[FieldInfo]:
        injected = [f for f in extra_fields if f.collection == collection]
        fields = self.directory.get_fields_for_collection(collection) + injected
        return [f for f in fields if is_candidate(f)]

    @staticmethod
    def _key_prefix(parent: Optional[FieldNode]) -> str:
        return f"{parent.key}." if parent is not None else ""

    def _make_nodes(
        self,
        fields: List[FieldInfo],
        candidates: List[FieldInfo],
        predicate: FieldFilter,
        parent: Optional[FieldNode],
        prefix: str,
    ) -> List[FieldNode]:
        nodes: List[FieldNode] = []
        for field in fields:
            if not predicate(field, parent):
                continue
            node = self._make_node(field, prefix)
            if node.group:
                group_children = [f for f in candidates if f.group_key == field.field]
                # group containers don't add a key segment
                node.children = self._make_nodes(group_children, candidates, predicate, node, prefix)
            nodes.append(node)
        return nodes

    def _make_node(self, field: FieldInfo, prefix: str) -> FieldNode:
        is_group = field.is_group
        related = None if is_group else self.directory.get_related_collection(field)
        return FieldNode(
            field=field.field,
            collection=field.collection,
            name=field.name,
            type=field.type,
            key=f"{prefix}{field.field}",
            group=is_group,
            related_collection=related,
            children=[] if is_group else None,
        )
