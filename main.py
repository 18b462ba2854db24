"""
main.py
-------
Command line entry point.

Usage:
    python main.py init-db      Create the students/books schema.
    python main.py list         Print every student with their books.
    python main.py show <id>    Print one student.
"""

import sys
from argparse import ArgumentParser
from typing import Optional, Sequence

from db.connection import close_pool, init_pool
from db.init_db import create_tables
from services.student_service import StudentService
from utils.exceptions import RepositoryError
from utils.logger import get_logger

logger = get_logger(__name__)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Query students and the books they hold.")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("init-db", help="create the database schema")
    commands.add_parser("list", help="list all students")
    show = commands.add_parser("show", help="show a single student")
    show.add_argument("student_id", type=int)
    return parser


def main(args: Optional[Sequence[str]] = None) -> int:
    """Run one command against a freshly initialized pool."""
    options = build_parser().parse_args(args)

    init_pool()
    try:
        if options.command == "init-db":
            create_tables()
            print("Database schema created successfully.")
            return 0

        service = StudentService()
        if options.command == "list":
            print(service.list_students())
        else:
            print(service.show_student(options.student_id))
        return 0
    except RepositoryError as e:
        logger.error(f"Command '{options.command}' failed: {e}")
        return 1
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
