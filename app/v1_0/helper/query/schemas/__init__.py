from .base import EntitySchema, FieldSpec, FieldType
from .student import STUDENT_SCHEMA

__all__ = [
    "EntitySchema",
    "FieldSpec",
    "FieldType",
    "STUDENT_SCHEMA",
]
