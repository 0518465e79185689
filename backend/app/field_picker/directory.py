# app/field_picker/directory.py
"""
In-memory, read-only lookup of schema metadata by collection name.

Every lookup is synchronous and never raises: unknown collections and
fields without children simply yield empty lists.
"""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.crud import schema_crud
from app.schemas.field import CollectionInfo, FieldInfo, RelationInfo
from settings import PickerConfig


def _sort_key(field: FieldInfo):
    sort = field.meta.sort if field.meta and field.meta.sort is not None else None
    return (sort is None, sort if sort is not None else 0)


def is_candidate(field: FieldInfo) -> bool:
    """Whether a field can be shown in a field tree at all."""
    if field.meta and field.meta.hidden:
        return False
    if field.is_group:
        return True
    return not any(s in PickerConfig.PRESENTATION_SPECIALS for s in field.specials)


class SchemaDirectory:
    """Snapshot of collections, fields and relations."""

    def __init__(
        self,
        collections: Iterable[CollectionInfo] = (),
        fields: Iterable[FieldInfo] = (),
        relations: Iterable[RelationInfo] = (),
    ):
        self._collections: Dict[str, CollectionInfo] = {c.collection: c for c in collections}
        self._fields: Dict[str, List[FieldInfo]] = defaultdict(list)
        for field in fields:
            self._fields[field.collection].append(field)
        # stable sort keeps declaration order for fields without an explicit sort
        for collection in self._fields:
            self._fields[collection].sort(key=_sort_key)
        self._relations: List[RelationInfo] = list(relations)

    @classmethod
    def from_db(cls, db: Session) -> "SchemaDirectory":
        return cls(
            collections=schema_crud.get_collections(db),
            fields=schema_crud.get_fields(db),
            relations=schema_crud.get_relations(db),
        )

    def get_collection(self, collection: str) -> CollectionInfo:
        return self._collections.get(collection) or CollectionInfo(collection=collection)

    def get_collections(self) -> List[CollectionInfo]:
        return list(self._collections.values())

    def get_fields_for_collection(self, collection: Optional[str]) -> List[FieldInfo]:
        if not collection:
            return []
        return list(self._fields.get(collection, []))

    def get_field(self, collection: str, field_key: str) -> Optional[FieldInfo]:
        return next((f for f in self._fields.get(collection, []) if f.field == field_key), None)

    def get_field_group_children(self, collection: str, field_key: str) -> List[FieldInfo]:
        """Direct children of a group field."""
        return [f for f in self._fields.get(collection, []) if f.group_key == field_key]

    def get_relations_for_collection(self, collection: str) -> List[RelationInfo]:
        return [
            r for r in self._relations
            if r.many_collection == collection or r.one_collection == collection
        ]

    def get_related_collection(self, field: FieldInfo) -> Optional[str]:
        """
        Collection reached through a relational field: the foreign key table
        for many-to-one fields, the "many" side for one-to-many alias fields.
        """
        if field.is_relational:
            return field.foreign_key_table
        for relation in self._relations:
            if relation.one_collection == field.collection and relation.one_field == field.field:
                return relation.many_collection
        return None
