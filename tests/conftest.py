# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.v1_0.helper.query import EntitySchema, FieldSpec


SAMPLE_SCHEMA = EntitySchema(
    entity="samples",
    fields=(
        FieldSpec("id", "int"),
        FieldSpec("name", "str"),
        FieldSpec("year", "int"),
    ),
)


@pytest.fixture
def sample_rows():
    return [
        {"id": 1, "name": "A", "year": 2020},
        {"id": 2, "name": "B", "year": 2019},
        {"id": 3, "name": "C", "year": 2020},
    ]


@pytest.fixture
def sample_schema():
    return SAMPLE_SCHEMA


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
