from datetime import date
from typing import Iterable, Optional, Tuple

from app.v1_0.entities import StudentDTO

SEED_STUDENTS: Tuple[StudentDTO, ...] = (
    StudentDTO(1, "Ada Lovelace", "ada@school.edu", date(2020, 9, 1), 2020, 3.9, True),
    StudentDTO(2, "Alan Turing", "alan@school.edu", date(2019, 9, 2), 2019, 3.7, True),
    StudentDTO(3, "Grace Hopper", "grace@school.edu", date(2020, 9, 1), 2020, 3.8, True),
    StudentDTO(4, "Edsger Dijkstra", "edsger@school.edu", date(2018, 9, 3), 2018, 3.5, False),
    StudentDTO(5, "Barbara Liskov", "barbara@school.edu", date(2021, 1, 15), 2021, 4.0, True),
    StudentDTO(6, "Donald Knuth", "donald@school.edu", date(2019, 9, 2), 2019, 3.6, False),
    StudentDTO(7, "Margaret Hamilton", "margaret@school.edu", date(2021, 9, 1), 2021, 3.9, True),
    StudentDTO(8, "John McCarthy", "john@school.edu", date(2018, 9, 3), 2018, 3.2, True),
)

class StudentRepository:
    """
    In-memory record store for students.

    The collection is fixed when the repository is built and only handed out
    as an immutable tuple, so concurrent readers need no locking.
    """

    def __init__(self, seed: Optional[Iterable[StudentDTO]] = None) -> None:
        self._students: Tuple[StudentDTO, ...] = tuple(SEED_STUDENTS if seed is None else seed)

    async def list_all(self) -> Tuple[StudentDTO, ...]:
        """
        Return every student in insertion order.
        """
        return self._students
