# tests/api/test_health.py
from app.core.settings import settings


def test_ready(client):
    r = client.get(f"{settings.API_PREFIX}/ready")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "ready"
    assert body["name"] == settings.APP_NAME
    assert body["prefix"] == settings.API_PREFIX


def test_openapi_lists_students_endpoint(client):
    r = client.get(f"{settings.API_PREFIX}/openapi.json")
    assert r.status_code == 200
    assert f"{settings.API_PREFIX}/v1/students" in r.json()["paths"]
