# backend/app/crud/schema.py
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models import Collection, Field, Relation
from app.schemas.field import CollectionInfo, FieldInfo, FieldMeta, FieldSchema, RelationInfo


def _to_field_info(row: Field) -> FieldInfo:
    return FieldInfo(
        collection=row.collection,
        field=row.field,
        name=row.name or "",
        type=row.type,
        schema=FieldSchema(foreign_key_table=row.foreign_key_table) if row.foreign_key_table else None,
        meta=FieldMeta(
            group=row.group,
            special=row.special,
            sort=row.sort,
            hidden=bool(row.hidden),
            readonly=bool(row.readonly),
            required=bool(row.required),
        ),
    )


class SchemaCRUD:
    """Database operations for collection, field and relation metadata"""

    def get_collections(self, db: Session) -> List[CollectionInfo]:
        rows = db.scalars(select(Collection).order_by(Collection.collection)).all()
        return [CollectionInfo.model_validate(row) for row in rows]

    def get_fields(self, db: Session, collection: Optional[str] = None) -> List[FieldInfo]:
        """Fields in declaration order (optionally of one collection)"""
        query = select(Field).order_by(Field.collection, Field.id)
        if collection:
            query = query.where(Field.collection == collection)
        return [_to_field_info(row) for row in db.scalars(query).all()]

    def get_relations(self, db: Session) -> List[RelationInfo]:
        rows = db.scalars(select(Relation).order_by(Relation.id)).all()
        return [RelationInfo.model_validate(row) for row in rows]

    def count_fields(self, db: Session) -> int:
        return db.scalar(select(func.count(Field.id))) or 0

    def replace_snapshot(
        self,
        db: Session,
        collections: List[CollectionInfo],
        fields: List[FieldInfo],
        relations: List[RelationInfo],
    ) -> dict:
        """Replace all schema metadata with the given snapshot in one transaction"""
        try:
            db.query(Field).delete()
            db.query(Relation).delete()
            db.query(Collection).delete()
            db.flush()

            known = {c.collection for c in collections}
            for c in collections:
                db.add(Collection(collection=c.collection, versioning=c.versioning, note=c.note))

            # fields may reference collections the snapshot doesn't declare
            for name in sorted({f.collection for f in fields} - known):
                db.add(Collection(collection=name, versioning=False))
            db.flush()

            for f in fields:
                meta = f.meta or FieldMeta()
                db.add(Field(
                    collection=f.collection,
                    field=f.field,
                    name=f.name,
                    type=f.type,
                    group=meta.group,
                    special=meta.special,
                    sort=meta.sort,
                    hidden=meta.hidden,
                    readonly=meta.readonly,
                    required=meta.required,
                    foreign_key_table=f.foreign_key_table,
                ))

            for r in relations:
                db.add(Relation(
                    many_collection=r.many_collection,
                    many_field=r.many_field,
                    one_collection=r.one_collection,
                    one_field=r.one_field,
                ))

            db.commit()
        except Exception:
            db.rollback()
            raise

        return {
            "collections": len(known) + len({f.collection for f in fields} - known),
            "fields": len(fields),
            "relations": len(relations),
        }

# Create instance
schema_crud = SchemaCRUD()
