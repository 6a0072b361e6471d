from typing import Any, List, Mapping, Optional

from app.core.logger import logger
from app.v1_0.helper.query import QueryShaper
from app.v1_0.repositories import StudentRepository


class StudentService:
    """Application service for reading student records."""

    def __init__(
            self,
            student_repository: StudentRepository,
            query_shaper: QueryShaper) -> None:
        self.student_repository = student_repository
        self.query_shaper = query_shaper

    async def list_students(self, options: Mapping[str, Optional[str]]) -> List[Any]:
        """
        Return all students shaped by the request's query options.

        Options are parsed and validated before the store is read. Without
        `$select` the items are StudentDTO instances, with it they are dicts
        holding only the selected fields.

        Args:
            options: Raw `$select`, `$filter`, `$orderby`, `$skip`, `$top`
                values keyed by their parameter name; None means absent.

        Returns:
            The shaped list of students.

        Raises:
            InvalidQuery: If any option is malformed, disabled or references
                an unknown field. Nothing is returned in that case.
        """
        query = self.query_shaper.parse(options)
        logger.debug("[StudentService] list query=%s", query)
        students = await self.student_repository.list_all()
        result = self.query_shaper.apply(students, query)
        logger.debug("[StudentService] returned %s of %s students", len(result), len(students))
        return result
