from .student_repository import StudentRepository, SEED_STUDENTS

__all__ = [
    "StudentRepository",
    "SEED_STUDENTS",
]
