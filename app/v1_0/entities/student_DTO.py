from dataclasses import dataclass
from datetime import date

@dataclass(frozen=True, slots=True)
class StudentDTO:
    """Read-only student record served by the students endpoint."""
    id: int
    name: str
    email: str
    enrollment_date: date
    year: int
    gpa: float
    is_active: bool
