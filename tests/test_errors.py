import pytest

from config import ConfigurationError, get_settings
from services import CategoryService


def test_invalid_json_body(client):
    response = client.post("/categories", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid request body", "result": {}}


def test_non_object_body(client):
    response = client.post("/categories", json=["Mithai"])
    assert response.status_code == 400
    assert response.json()["result"] == {}


def test_unknown_route_uses_envelope(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert set(response.json()) == {"message", "result"}


def test_unexpected_error_is_500(client, monkeypatch, caplog):
    def explode(self, *args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(CategoryService, "list", explode)
    response = client.get("/categories", headers={"Origin": "http://shop.example.com"})

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error", "result": {}}
    assert "access-control-allow-origin" in response.headers
    assert len([r for r in caplog.records if r.getMessage().startswith("Unhandled error")]) == 1


def test_health(client):
    assert client.get("/").json() == {"message": "Storefront API is running"}
    report = client.get("/test").json()
    assert report["backend"] == "Running"
    assert report["connection_status"] == "Connected"
    assert report["database_name"] == "storefront_test"


def test_missing_configuration(monkeypatch):
    monkeypatch.delenv("JWT_SECRET", raising=False)
    get_settings.cache_clear()
    try:
        with pytest.raises(ConfigurationError) as exc:
            get_settings()
        assert "JWT_SECRET" in str(exc.value)
    finally:
        monkeypatch.undo()
        get_settings.cache_clear()
