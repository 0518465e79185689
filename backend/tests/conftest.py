import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.field_picker import SchemaDirectory
from app.models import Base
from app.schemas.field import CollectionInfo, RelationInfo
from helpers import make_field, make_group


@pytest.fixture
def articles_directory() -> SchemaDirectory:
    """articles -> categories -> authors, with a group nested two levels deep."""
    fields = [
        make_field("articles", "id", "ID", type="integer"),
        make_field("articles", "title", "Title"),
        make_group("articles", "meta", "Metadata"),
        make_field("articles", "author_name", "Author Name", group="meta"),
        make_field("articles", "published_on", "Published On", type="date", group="meta"),
        make_group("articles", "seo", "SEO", group="meta"),
        make_field("articles", "keywords", "Keywords", group="seo"),
        make_field("articles", "category", "Category", type="integer", fk="categories", special=["m2o"]),
        make_field("articles", "divider", "Divider", type="alias", special=["alias", "no-data"]),
        make_field("categories", "id", "ID", type="integer"),
        make_field("categories", "label", "Label"),
        make_field("categories", "owner", "Owner", type="integer", fk="authors", special=["m2o"]),
        make_field("categories", "articles", "Articles", type="alias", special=["o2m"]),
        make_field("authors", "id", "ID", type="integer"),
        make_field("authors", "nickname", "Zebra Handle"),
    ]
    relations = [
        RelationInfo(many_collection="articles", many_field="category",
                     one_collection="categories", one_field="articles"),
        RelationInfo(many_collection="categories", many_field="owner", one_collection="authors"),
    ]
    collections = [
        CollectionInfo(collection="articles", versioning=True),
        CollectionInfo(collection="categories"),
        CollectionInfo(collection="authors"),
    ]
    return SchemaDirectory(collections, fields, relations)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    from app.api.api_v1 import fields, schema
    from app.main import app

    def override_get_db():
        yield db_session

    app.dependency_overrides[fields.get_db] = override_get_db
    app.dependency_overrides[schema.get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
