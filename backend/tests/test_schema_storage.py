import json

import pytest
from sqlalchemy.exc import IntegrityError

from app.crud import schema_crud
from app.field_picker import SchemaDirectory
from app.initialization import ApplicationInitializer
from app.preprocessing.loader import SchemaSnapshotLoader

SNAPSHOT = {
    "collections": [{"collection": "articles", "versioning": True}],
    "fields": [
        {"collection": "articles", "field": "title", "type": "string", "meta": {"sort": 2}},
        {"collection": "articles", "field": "id", "type": "integer", "meta": {"sort": 1}},
        {"collection": "articles", "field": "meta", "type": "alias",
         "meta": {"sort": 3, "special": ["alias", "no-data", "group"]}},
        {"collection": "articles", "field": "author_name", "type": "string", "meta": {"group": "meta"}},
        {"collection": "articles", "field": "category", "type": "integer",
         "schema": {"foreign_key_table": "categories"}, "meta": {"sort": 4}},
        {"collection": "categories", "field": "label", "name": "Label", "type": "string"},
    ],
    "relations": [
        {"many_collection": "articles", "many_field": "category", "one_collection": "categories"},
    ],
}


def _store(db_session, data=SNAPSHOT):
    snapshot = SchemaSnapshotLoader.parse(data)
    return schema_crud.replace_snapshot(db_session, snapshot.collections, snapshot.fields, snapshot.relations)


def test_replace_snapshot_counts_undeclared_collections(db_session):
    counts = _store(db_session)
    assert counts == {"collections": 2, "fields": 6, "relations": 1}
    assert [c.collection for c in schema_crud.get_collections(db_session)] == ["articles", "categories"]


def test_stored_fields_round_trip_metadata(db_session):
    _store(db_session)

    fields = {f.field: f for f in schema_crud.get_fields(db_session, "articles")}

    assert fields["category"].foreign_key_table == "categories"
    assert fields["meta"].is_group is True
    assert fields["author_name"].group_key == "meta"
    assert fields["author_name"].name == "Author Name"
    assert fields["title"].schema_ is None


def test_replace_snapshot_replaces_previous_contents(db_session):
    _store(db_session)
    _store(db_session, {"fields": [{"collection": "pages", "field": "slug"}]})

    assert [f.field for f in schema_crud.get_fields(db_session)] == ["slug"]
    assert schema_crud.get_relations(db_session) == []


def test_duplicate_fields_roll_back(db_session):
    _store(db_session)
    duplicate = {"fields": [{"collection": "pages", "field": "slug"}, {"collection": "pages", "field": "slug"}]}

    with pytest.raises(IntegrityError):
        _store(db_session, duplicate)

    assert schema_crud.count_fields(db_session) == 6


def test_directory_from_db_sorts_fields(db_session):
    _store(db_session)

    directory = SchemaDirectory.from_db(db_session)

    assert [f.field for f in directory.get_fields_for_collection("articles")] == [
        "id", "title", "meta", "category", "author_name",
    ]
    assert directory.get_collection("articles").versioning is True
    assert [f.field for f in directory.get_field_group_children("articles", "meta")] == ["author_name"]
    assert len(directory.get_relations_for_collection("categories")) == 1
    assert directory.get_fields_for_collection("unknown") == []


def test_loader_unwraps_data_key():
    snapshot = SchemaSnapshotLoader.parse({"data": SNAPSHOT})
    assert len(snapshot.fields) == 6


def test_loader_missing_file(tmp_path):
    loader = SchemaSnapshotLoader(str(tmp_path / "missing.json"))
    with pytest.raises(FileNotFoundError):
        loader.load()


def test_initializer_imports_snapshot_once(tmp_path, engine, db_session):
    path = tmp_path / "schema.json"
    path.write_text(json.dumps(SNAPSHOT), encoding="utf-8")
    initializer = ApplicationInitializer(str(path), bind=engine)

    status = initializer.initialize_database(db_session)
    assert status["import_completed"] is True
    assert status["fields_count"] == 6

    status = initializer.initialize_database(db_session)
    assert status["needs_import"] is False

    summary = initializer.get_initialization_summary(db_session)
    assert summary["database"] == {"fields": 6, "initialized": True}


def test_initializer_reports_broken_snapshot(tmp_path, engine, db_session):
    path = tmp_path / "schema.json"
    path.write_text("{not json", encoding="utf-8")
    initializer = ApplicationInitializer(str(path), bind=engine)

    status = initializer.initialize_database(db_session)

    assert status["import_completed"] is False
    assert "error" in status
