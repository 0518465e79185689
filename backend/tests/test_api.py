from test_schema_storage import SNAPSHOT


def _load(client):
    response = client.post("/api/v1/schema/snapshot", json=SNAPSHOT)
    assert response.status_code == 200
    return response.json()


def test_import_snapshot(client):
    assert _load(client) == {"collections": 2, "fields": 6, "relations": 1}

    fields = client.get("/api/v1/schema/collections/articles/fields").json()
    category = next(f for f in fields if f["field"] == "category")
    assert category["schema"] == {"foreign_key_table": "categories"}


def test_field_tree(client):
    _load(client)

    body = client.get("/api/v1/fields/articles/tree").json()

    assert [n["key"] for n in body["tree"]] == ["id", "title", "meta", "category", "$version"]
    assert body["show_search"] is True
    assert body["select_all_disabled"] is False
    meta = body["tree"][2]
    assert meta["disabled"] is True
    assert [c["key"] for c in meta["children"]] == ["author_name"]


def test_field_tree_search_reaches_related_collection(client):
    _load(client)

    body = client.get("/api/v1/fields/articles/tree", params={"search": "LAB"}).json()

    assert [n["key"] for n in body["tree"]] == ["category"]
    assert body["tree"][0]["children"] is None


def test_field_tree_options(client):
    _load(client)

    params = {"disabled": ["id", "title"], "field": "title"}
    body = client.get("/api/v1/fields/articles/tree", params=params).json()

    assert [(n["key"], n["disabled"]) for n in body["tree"]] == [("title", True)]
    assert body["select_all_disabled"] is True


def test_relation_branch(client):
    _load(client)

    response = client.get("/api/v1/fields/articles/tree/branch", params={"key": "category"})

    assert response.status_code == 200
    assert [n["key"] for n in response.json()["children"]] == ["category.label"]


def test_relation_branch_unknown_key(client):
    _load(client)
    response = client.get("/api/v1/fields/articles/tree/branch", params={"key": "title"})
    assert response.status_code == 404


def test_add_single_field(client):
    _load(client)
    response = client.post("/api/v1/fields/articles/add", json={"key": "category.label"})
    assert response.status_code == 200
    assert response.json() == {"field_keys": ["category.label"]}


def test_add_all(client):
    _load(client)

    refused = client.post("/api/v1/fields/articles/add", json={"all": True})
    accepted = client.post(
        "/api/v1/fields/articles/add",
        json={"all": True, "options": {"allow_bulk_select": True}},
    )

    assert refused.status_code == 409
    assert accepted.json() == {"field_keys": ["id", "title", "meta", "category", "$version"]}


def test_add_requires_key_or_all(client):
    response = client.post("/api/v1/fields/articles/add", json={})
    assert response.status_code == 422
