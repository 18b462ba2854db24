"""
models/student.py
-----------------
Domain models for students and the books they have borrowed.
"""

from dataclasses import dataclass, field

from models.entity import ChildEntity, ParentEntity


@dataclass
class Book:
    """
    A book held by a student.

    Attributes:
        id: Database primary key.
        name: Title of the book.
    """
    id: int
    name: str

    @classmethod
    def from_entity(cls, entity: ChildEntity) -> "Book":
        return cls(id=entity.id, name=entity.attributes.get("name"))

    def __str__(self) -> str:
        return f"#{self.id} {self.name}"


@dataclass
class Student:
    """
    A student together with every book they hold.

    Attributes:
        id: Database primary key.
        name: Student name.
        books: Books ordered as they came back from the query.
    """
    id: int
    name: str
    books: list[Book] = field(default_factory=list)

    @classmethod
    def from_entity(cls, entity: ParentEntity) -> "Student":
        """Build a Student from a reconstructed parent entity."""
        return cls(
            id=entity.id,
            name=entity.attributes.get("name"),
            books=[Book.from_entity(child) for child in entity.children],
        )

    def __str__(self) -> str:
        return f"#{self.id} {self.name} ({len(self.books)} books)"
