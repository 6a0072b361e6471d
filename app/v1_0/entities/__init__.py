from .student_DTO import StudentDTO


__all__ = [
    "StudentDTO",
]
