# tests/api/test_students.py
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from app.core.settings import settings
from app.v1_0.helper.query import STUDENT_SCHEMA, QueryPolicy, QueryShaper
from app.v1_0.repositories import SEED_STUDENTS, StudentRepository
from app.v1_0.services import StudentService

URL = f"{settings.API_PREFIX}/v1/students"


def test_list_all(client):
    r = client.get(URL)
    assert r.status_code == 200
    body = r.json()
    assert [s["id"] for s in body] == [s.id for s in SEED_STUDENTS]
    assert body[0] == {
        "id": 1,
        "name": "Ada Lovelace",
        "email": "ada@school.edu",
        "enrollment_date": "2020-09-01",
        "year": 2020,
        "gpa": 3.9,
        "is_active": True,
    }


def test_query_options(client):
    r = client.get(URL, params={
        "$filter": "year eq 2020",
        "$orderby": "name desc",
        "$select": "id,name",
    })
    assert r.status_code == 200
    assert r.json() == [{"id": 3, "name": "Grace Hopper"}, {"id": 1, "name": "Ada Lovelace"}]


def test_pagination(client):
    r = client.get(URL, params={"$orderby": "id", "$skip": "2", "$top": "3", "$select": "id"})
    assert r.json() == [{"id": 3}, {"id": 4}, {"id": 5}]


def test_skip_past_end_is_empty(client):
    r = client.get(URL, params={"$skip": "100"})
    assert r.status_code == 200
    assert r.json() == []


def test_no_match_is_empty(client):
    r = client.get(URL, params={"$filter": "year eq 5000"})
    assert r.status_code == 200
    assert r.json() == []


@pytest.mark.parametrize(
    "params,parameter,token",
    [
        ({"$orderby": "bogusField"}, "$orderby", "bogusField"),
        ({"$select": "id,nickname"}, "$select", "nickname"),
        ({"$filter": "name eq 3"}, "$filter", "eq"),
        ({"$filter": "year eq"}, "$filter", None),
        ({"$top": "-1"}, "$top", "-1"),
        ({"$skip": "abc"}, "$skip", "abc"),
        ({"$expand": "courses"}, "$expand", "$expand"),
    ],
)
def test_invalid_query_payload(client, params, parameter, token):
    r = client.get(URL, params=params)
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["error"] == "InvalidQuery"
    assert detail["parameter"] == parameter
    assert detail["message"]
    assert detail.get("token") == token


def test_disabled_option_is_rejected(app):
    policy = QueryPolicy(allowed_options=frozenset({"select", "filter", "orderby"}))
    service = StudentService(
        student_repository=StudentRepository(),
        query_shaper=QueryShaper(STUDENT_SCHEMA, policy),
    )
    with app.state.container.api_container.student_service.override(providers.Object(service)):
        with TestClient(app) as c:
            ok = c.get(URL, params={"$select": "id", "$filter": "id eq 2"})
            assert ok.json() == [{"id": 2}]
            r = c.get(URL, params={"$top": "1"})
    assert r.status_code == 400
    assert r.json()["detail"]["parameter"] == "$top"


def test_unexpected_error_is_500(app):
    class _Broken(StudentRepository):
        async def list_all(self):
            raise RuntimeError("boom")

    service = StudentService(
        student_repository=_Broken(),
        query_shaper=QueryShaper(STUDENT_SCHEMA),
    )
    with app.state.container.api_container.student_service.override(providers.Object(service)):
        with TestClient(app) as c:
            r = c.get(URL)
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to list students"


def test_huge_top_returns_everything(client):
    r = client.get(URL, params={"$top": str(10 ** 20)})
    assert r.status_code == 200
    assert len(r.json()) == len(SEED_STUDENTS)


def test_huge_skip_returns_empty(client):
    r = client.get(URL, params={"$skip": str(10 ** 20)})
    assert r.status_code == 200
    assert r.json() == []


def test_deeply_nested_filter_is_400(client):
    r = client.get(URL, params={"$filter": "(" * 300 + "id eq 1" + ")" * 300})
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["parameter"] == "$filter"
    assert "nested too deeply" in detail["message"]
