from sqlalchemy import text


def _by_name(client):
    return {p["name"]: p for p in client.get("/api/products").json()}


def test_import_inserts_new_products(client):
    response = client.post("/api/products/import", json={"products": [
        {"name": "Widget", "unit": "ea", "stock": 10},
        {"name": "Gadget", "brand": "Acme", "stock": 5},
    ]})
    assert response.status_code == 200
    assert response.json() == {"message": "Products imported successfully", "inserted": 2, "skipped": 0}

    products = _by_name(client)
    assert set(products) == {"Widget", "Gadget"}
    assert products["Gadget"]["brand"] == "Acme"


def test_reimport_is_a_no_op(client):
    payload = {"products": [{"name": "Widget", "stock": 10}, {"name": "Gadget", "stock": 5}]}
    client.post("/api/products/import", json=payload)

    response = client.post("/api/products/import", json=payload)
    assert response.status_code == 200
    assert response.json()["inserted"] == 0
    assert response.json()["skipped"] == 2
    assert len(client.get("/api/products").json()) == 2


def test_import_leaves_existing_rows_untouched(client, widget):
    client.post("/api/product/new", json=widget)

    response = client.post("/api/products/import", json={"products": [
        {"name": "Widget", "unit": "kg", "category": "Food", "brand": "Other", "stock": 99, "status": "gone"},
        {"name": "Gadget", "stock": 5},
    ]})
    assert response.status_code == 200
    assert response.json()["inserted"] == 1

    products = _by_name(client)
    assert products["Widget"]["stock"] == 10
    assert products["Widget"]["unit"] == "ea"
    assert products["Widget"]["brand"] == "Acme"
    assert products["Gadget"]["stock"] == 5


def test_import_with_duplicates_inside_payload_keeps_first(client):
    response = client.post("/api/products/import", json={"products": [
        {"name": "Widget", "stock": 1},
        {"name": "Widget", "stock": 2},
    ]})
    assert response.json()["inserted"] == 1
    assert response.json()["skipped"] == 1
    assert _by_name(client)["Widget"]["stock"] == 1


def test_import_failure_keeps_earlier_records(app, client):
    with app.state.engine.begin() as conn:
        conn.execute(text(
            "CREATE TRIGGER reject_broken BEFORE INSERT ON products "
            "WHEN NEW.name = 'Broken' "
            "BEGIN SELECT RAISE(ABORT, 'broken record'); END"
        ))

    response = client.post("/api/products/import", json={"products": [
        {"name": "Widget", "stock": 10},
        {"name": "Broken", "stock": 1},
        {"name": "Gadget", "stock": 5},
    ]})
    assert response.status_code == 500
    assert "broken record" in response.json()["error"]
    assert set(_by_name(client)) == {"Widget"}


def test_import_malformed_record_keeps_earlier_records(client):
    response = client.post("/api/products/import", json={"products": [
        {"name": "Widget", "stock": 10},
        {"name": "Bad", "stock": "not-a-number"},
        {"name": "Gadget", "stock": 5},
    ]})
    assert response.status_code == 500
    assert "products.1.stock" in response.json()["error"]
    assert set(_by_name(client)) == {"Widget"}


def test_import_record_without_stock_stops_import(client):
    response = client.post("/api/products/import", json={"products": [
        {"name": "Widget", "stock": 10},
        {"name": "Nameless stock"},
    ]})
    assert response.status_code == 500
    assert "products.1.stock" in response.json()["error"]
    assert set(_by_name(client)) == {"Widget"}


def test_import_record_that_is_not_an_object(client):
    response = client.post("/api/products/import", json={"products": ["Widget"]})
    assert response.status_code == 500
    assert "error" in response.json()
    assert client.get("/api/products").json() == []


def test_import_requires_products_list(client):
    response = client.post("/api/products/import", json={})
    assert response.status_code == 500
    assert "products" in response.json()["error"]


def test_export_wraps_listing(client, create_product):
    create_product(name="Widget", stock=10)
    create_product(name="Gadget", stock=5)

    exported = client.get("/api/products/export")
    assert exported.status_code == 200
    assert exported.json() == {"products": client.get("/api/products").json()}


def test_export_can_be_imported_back(client, create_product):
    create_product(name="Widget", stock=10, brand="Acme")
    exported = client.get("/api/products/export").json()

    response = client.post("/api/products/import", json=exported)
    assert response.status_code == 200
    assert response.json()["skipped"] == 1

    client.delete("/api/products/all")
    response = client.post("/api/products/import", json=exported)
    assert response.json()["inserted"] == 1
    restored = _by_name(client)["Widget"]
    assert restored["brand"] == "Acme"
    assert restored["stock"] == 10
