"""
services/student_service.py
---------------------------
Presents student lookups as plain text for the command line.
"""

from models.student import Student
from repositories.student_repo import StudentRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class StudentService:
    """Formats students and their books for display."""

    def __init__(self, repo: StudentRepository | None = None):
        self.repo = repo or StudentRepository()

    def list_students(self) -> str:
        """Describe every student, or say that there are none."""
        students = self.repo.find_all()
        if not students:
            return "No students found."
        return "\n\n".join(self._format_student(s) for s in students)

    def show_student(self, student_id: int) -> str:
        """Describe one student; a missing id is reported, not raised."""
        student = self.repo.find_by_id(student_id)
        if student is None:
            return f"Student #{student_id} not found."
        return self._format_student(student)

    @staticmethod
    def _format_student(student: Student) -> str:
        lines = [str(student)]
        if not student.books:
            lines.append("  (no books)")
        lines.extend(f"  - {book}" for book in student.books)
        return "\n".join(lines)
