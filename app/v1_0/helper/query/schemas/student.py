from .base import EntitySchema, FieldSpec

STUDENT_SCHEMA = EntitySchema(
    entity="students",
    fields=(
        FieldSpec("id", "int"),
        FieldSpec("name", "str"),
        FieldSpec("email", "str"),
        FieldSpec("enrollment_date", "date"),
        FieldSpec("year", "int"),
        FieldSpec("gpa", "number"),
        FieldSpec("is_active", "bool"),
    ),
)
