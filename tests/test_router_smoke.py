# File: /tests/test_router_smoke.py | Version: 1.0 | Path: /tests/test_router_smoke.py
def test_openapi_has_core_database_routes(client):
    r = client.get("/openapi.json")
    assert r.status_code == 200, r.text
    paths = r.json().get("paths", {})

    expected = {
        "/pages": ["get", "post"],
        "/pages/{page_id}": ["get", "patch", "delete"],
        "/databases/{database_id}": ["get"],
        "/databases/{database_id}/columns": ["post"],
        "/databases/{database_id}/columns/{column_id}": ["patch", "delete"],
        "/databases/{database_id}/columns/{column_id}/options": ["post", "put"],
        "/databases/{database_id}/columns/{column_id}/options/{option_id}": ["patch", "delete"],
        "/databases/{database_id}/rows": ["post"],
        "/databases/{database_id}/rows/{row_id}": ["patch", "delete"],
        "/databases/{database_id}/rows/{row_id}/properties/{column_id}": ["put"],
        "/databases/{database_id}/rows/{row_id}/properties/{column_id}/toggle": ["post"],
        "/databases/{database_id}/board/move": ["post"],
        "/databases/{database_id}/views": ["get", "post"],
        "/databases/{database_id}/views/{view_id}": ["patch", "delete"],
        "/databases/{database_id}/views/{view_id}/activate": ["post"],
        "/databases/{database_id}/views/{view_id}/projection": ["get"],
        "/databases/{database_id}/query": ["get", "put"],
        "/databases/{database_id}/query/sorts": ["post"],
        "/meta/filter-operators": ["get"],
    }

    missing = []
    for p, methods in expected.items():
        if p not in paths:
            missing.append(f"{p} (missing path)")
            continue
        present = {m.lower() for m in paths[p].keys()}
        for m in methods:
            if m not in present:
                missing.append(f"{p} missing {m.upper()}")

    assert not missing, "Missing routes: " + ", ".join(missing)


def test_health_endpoints(client):
    assert client.get("/healthz").json() == {"status": "ok"}
    r = client.get("/readyz")
    assert r.status_code == 200, r.text
    assert r.json()["db"] == "ok"


def test_meta_vocab(client):
    ops = {o["value"]: o for o in client.get("/meta/filter-operators").json()}
    assert ops["is_empty"]["needs_value"] is False
    assert ops["does_not_contain"]["label"] == "does not contain"

    types = [t["label"] for t in client.get("/meta/property-types").json()]
    assert types == ["Text", "Number", "Checkbox", "Date", "URL", "Select", "Multi-select"]

    colors = client.get("/meta/option-colors").json()
    assert len(colors) == 10
    assert colors[0] == {"name": "Default", "hex": "#e5e5e5", "is_light": True}

    assert [v["value"] for v in client.get("/meta/view-types").json()] == ["table", "board", "gallery", "list"]
