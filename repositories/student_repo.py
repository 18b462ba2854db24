"""
repositories/student_repo.py
----------------------------
Read-only data access for students and the books they hold.
Both finders query `students LEFT JOIN books` and rebuild the
one-to-many relationship from the flat rows.
"""

from typing import Iterable, Iterator, Optional

import psycopg2

from db.executor import stream_rows
from db.query import JoinQuery
from mapping.flattener import flatten
from mapping.selector import select_one
from models.entity import FlatRow
from models.student import Student
from utils.exceptions import DataAccessError
from utils.logger import get_logger

logger = get_logger(__name__)

STUDENTS_WITH_BOOKS = JoinQuery(
    parent_table="students",
    parent_columns=("id", "name"),
    child_table="books",
    child_columns=("id", "name"),
    foreign_key="student_id",
)


class StudentRepository:
    """Finder methods for students, each returning students with their books."""

    def __init__(self, query: JoinQuery = STUDENTS_WITH_BOOKS):
        self.query = query

    def find_all(self) -> list[Student]:
        """
        Find all students, ordered by id.

        Returns:
            Every student with their books. Empty if there are none.

        Raises:
            DataAccessError: If the rows cannot be read from the database.
        """
        logger.info("Finding all students")
        try:
            with stream_rows(self.query) as rows:
                entities = flatten(self._to_flat_rows(rows))
        except psycopg2.Error as e:
            logger.error(f"Cannot transform query result into a list: {e}")
            raise DataAccessError(
                "Cannot transform query result into a list because an error occurred",
                operation="find_all",
            ) from e

        students = [Student.from_entity(entity) for entity in entities]
        logger.info(f"Found {len(students)} students")
        return students

    def find_by_id(self, student_id: int) -> Optional[Student]:
        """
        Find one student by primary key.

        Args:
            student_id: The id of the requested student.

        Returns:
            The student with their books, or None if no student has this id.

        Raises:
            DataAccessError: If the rows cannot be read from the database.
            AmbiguousResultError: If the rows describe more than one student.
        """
        logger.info(f"Finding student by id: {student_id}")
        try:
            with stream_rows(self.query.where_parent_key(student_id)) as rows:
                entity = select_one(self._to_flat_rows(rows), context=f"student id={student_id}")
        except psycopg2.Error as e:
            logger.error(f"Cannot transform query result into an object: {e}")
            raise DataAccessError(
                "Cannot transform query result into an object because an error occurred",
                operation="find_by_id",
            ) from e

        if entity is None:
            logger.info(f"No student found with id {student_id}")
            return None

        student = Student.from_entity(entity)
        logger.info(f"Found student: {student}")
        return student

    # ── HELPERS ───────────────────────────────────────────

    def _to_flat_rows(self, rows: Iterable[tuple]) -> Iterator[FlatRow]:
        """Lazily convert raw join tuples into FlatRow objects."""
        for row in rows:
            yield FlatRow.from_row(row, self.query.parent_columns, self.query.child_columns)
