# app/field_picker/search.py
"""
Search predicate deciding which fields of a collection tree stay visible
under a text query.

The predicate descends into nested groups without a depth limit (group
nesting is acyclic in the directory) and into related collections exactly
one hop away from the root collection. Relational fields found inside a
related collection are never followed, which also keeps self-referencing
and cyclic relations finite.
"""

from typing import List, Optional, Union

from app.field_picker.directory import SchemaDirectory, is_candidate
from app.schemas.field import FieldInfo, FieldNode

Parent = Union[FieldInfo, FieldNode, None]


class SearchPredicate:
    """Filter callback for the field tree builder, bound to one query."""

    def __init__(
        self,
        directory: SchemaDirectory,
        root_collection: str,
        query: str = "",
        include_relations: bool = True,
    ):
        self.directory = directory
        self.root_collection = root_collection
        self.query = (query or "").lower()
        self.include_relations = include_relations

    def __call__(self, field: FieldInfo, parent: Parent = None) -> bool:
        return self.matches(field, parent)

    def matches(self, field: FieldInfo, parent: Parent = None) -> bool:
        if not self.include_relations and self._is_excluded(field):
            return False

        if not self.query:
            return True

        return (
            self.matches_self(field)
            or self.matches_parent(parent)
            or self.matches_descendant(field)
        )

    def _is_excluded(self, field: FieldInfo) -> bool:
        if field.collection != self.root_collection:
            return True
        return field.is_alias and not field.is_group

    def _contains(self, name: Optional[str]) -> bool:
        return bool(name) and self.query in name.lower()

    def matches_self(self, field: FieldInfo) -> bool:
        return self._contains(field.name)

    def matches_parent(self, parent: Parent) -> bool:
        return parent is not None and self._contains(parent.name)

    def children_of(self, field: FieldInfo) -> List[FieldInfo]:
        """Children a field could show in the tree; hidden and presentation fields never count."""
        if not field.is_relational:
            children = self.directory.get_field_group_children(field.collection, field.field)
        else:
            children = self.directory.get_fields_for_collection(field.foreign_key_table)
        return [child for child in children if is_candidate(child)]

    def matches_descendant(self, field: FieldInfo, hopped: bool = False) -> bool:
        """
        True when the field or anything below it matches the query.

        ``hopped`` is set once the search has crossed a relation; from then
        on relational fields are only matched by their own name.
        """
        if field.is_relational:
            # Only relational fields owned by the root collection are followed.
            if hopped or field.collection != self.root_collection:
                return self.matches_self(field)
            children = self.children_of(field)
            if any(self.matches_descendant(child, hopped=True) for child in children):
                return True
            return self.matches_self(field)

        children = self.children_of(field)
        if any(self.matches_descendant(child, hopped) for child in children):
            return True
        return self.matches_self(field)
