from contextlib import contextmanager

import psycopg2
import pytest

from models.student import Book, Student
from repositories import student_repo as student_repo_module
from repositories.student_repo import StudentRepository
from utils.exceptions import AmbiguousResultError, DataAccessError


class _FakeStream:
    """Stands in for db.executor.stream_rows and records every query it runs."""

    def __init__(self, rows: list[tuple], *, fail_after: int | None = None) -> None:
        self.rows = rows
        self.fail_after = fail_after
        self.queries: list = []
        self.open = 0

    def _iterate(self):
        for index, row in enumerate(self.rows):
            if self.fail_after is not None and index == self.fail_after:
                raise psycopg2.OperationalError("connection lost while fetching")
            yield row

    @contextmanager
    def __call__(self, query):
        self.queries.append(query)
        self.open += 1
        try:
            yield self._iterate()
        finally:
            self.open -= 1


@pytest.fixture
def use_rows(monkeypatch: pytest.MonkeyPatch):
    def _install(rows: list[tuple], **kwargs) -> _FakeStream:
        stream = _FakeStream(rows, **kwargs)
        monkeypatch.setattr(student_repo_module, "stream_rows", stream)
        return stream

    return _install


def test_find_all_rebuilds_students_with_books(use_rows) -> None:
    stream = use_rows([(1, "Ann", 10, "Go"), (1, "Ann", 11, "Rust"), (2, "Bo", None, None)])

    students = StudentRepository().find_all()

    assert students == [
        Student(id=1, name="Ann", books=[Book(10, "Go"), Book(11, "Rust")]),
        Student(id=2, name="Bo", books=[]),
    ]
    assert stream.queries[0].order_by_parent_key
    assert stream.queries[0].parent_key is None
    assert stream.open == 0


def test_find_all_with_no_rows_is_empty(use_rows) -> None:
    use_rows([])

    assert StudentRepository().find_all() == []


def test_find_all_does_not_reject_many_students(use_rows) -> None:
    use_rows([(1, "Ann", None, None), (2, "Bo", None, None), (3, "Cy", None, None)])

    assert [s.id for s in StudentRepository().find_all()] == [1, 2, 3]


def test_find_by_id_returns_single_student(use_rows) -> None:
    stream = use_rows([(3, "Cy", 20, "X"), (3, "Cy", 21, "Y")])

    student = StudentRepository().find_by_id(3)

    assert student == Student(id=3, name="Cy", books=[Book(20, "X"), Book(21, "Y")])
    assert stream.queries[0].params() == (3,)


def test_find_by_id_missing_returns_none(use_rows) -> None:
    use_rows([])

    assert StudentRepository().find_by_id(42) is None


def test_find_by_id_with_two_students_is_ambiguous(use_rows) -> None:
    stream = use_rows([(3, "Cy", 20, "X"), (4, "Di", None, None)])

    with pytest.raises(AmbiguousResultError, match="found 2") as exc_info:
        StudentRepository().find_by_id(3)

    assert exc_info.value.count == 2
    assert "student id=3" in str(exc_info.value)
    assert stream.open == 0


def test_find_all_wraps_driver_errors(use_rows) -> None:
    stream = use_rows([(1, "Ann", 10, "Go"), (1, "Ann", 11, "Rust")], fail_after=1)

    with pytest.raises(DataAccessError, match="into a list") as exc_info:
        StudentRepository().find_all()

    assert exc_info.value.operation == "find_all"
    assert isinstance(exc_info.value.__cause__, psycopg2.OperationalError)
    assert stream.open == 0


def test_find_by_id_wraps_driver_errors(use_rows) -> None:
    stream = use_rows([(3, "Cy", 20, "X")], fail_after=0)

    with pytest.raises(DataAccessError, match="into an object") as exc_info:
        StudentRepository().find_by_id(3)

    assert exc_info.value.operation == "find_by_id"
    assert stream.open == 0


def test_find_by_id_none_never_runs_unfiltered_query(use_rows) -> None:
    stream = use_rows([(1, "Ann", None, None), (2, "Bo", None, None)])

    with pytest.raises(ValueError):
        StudentRepository().find_by_id(None)

    assert stream.queries == []
