from app.schemas.field import FieldInfo, FieldMeta, FieldSchema


def make_field(collection, field, name=None, type="string", group=None, fk=None, special=None, **meta):
    if special and "group" in special:
        type = "alias"
    return FieldInfo(
        collection=collection,
        field=field,
        name=name or "",
        type=type,
        schema=FieldSchema(foreign_key_table=fk) if fk else None,
        meta=FieldMeta(group=group, special=special, **meta),
    )


def make_group(collection, field, name=None, group=None):
    return make_field(collection, field, name=name, group=group, special=["alias", "no-data", "group"])
