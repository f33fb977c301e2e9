from __future__ import annotations


def test_health_endpoint_reports_debug_flag(client) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "debug_endpoints": False}


def test_database_health_endpoint_success(client) -> None:
    response = client.get("/healthz/database")
    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "ok"
    assert payload["backend"] == "sqlite"
    assert "pool" in payload


def test_database_health_endpoint_failure(client, monkeypatch) -> None:
    def raise_runtime_error():
        raise RuntimeError("missing database url")

    monkeypatch.setattr("app.main.get_engine", raise_runtime_error)
    response = client.get("/healthz/database")
    assert response.status_code == 503
    assert response.json()["detail"] == "missing database url"
