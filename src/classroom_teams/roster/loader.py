"""Loads the roster CSV exported from GitHub Classroom.

The file must have exactly these four columns (any order):
``identifier``, ``github_username``, ``github_id`` and ``name``.

- ``identifier`` holds the roster id, formatted as ``"student name (group)"``.
- ``github_username`` holds the student's GitHub login. Rows without it are
  students that have not joined the classroom yet and are skipped.
- ``github_id`` and ``name`` are ignored.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import TextIO

from . import roster_naming
from .models import Student

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("identifier", "github_username", "github_id", "name")


class InvalidRosterError(Exception):
    """Raised when the roster file does not have the expected format."""


def load_roster(path: str | Path) -> list[Student]:
    """Load the roster from a CSV file path."""
    path = Path(path)
    try:
        with open(path, newline="", encoding="utf-8-sig") as f:
            return parse_roster(f)
    except FileNotFoundError:
        raise InvalidRosterError(f"Roster file not found: '{path}'") from None
    except (InvalidRosterError, UnicodeDecodeError, csv.Error, OSError) as e:
        raise InvalidRosterError(f"'{path}' is not a valid roster file. {e}") from None


def parse_roster(stream: TextIO) -> list[Student]:
    """Parse roster rows from an open text stream.

    Rows with a blank ``github_username`` are skipped. When the same login
    appears more than once, the first occurrence wins.
    """
    reader = csv.DictReader(stream)
    _validate_header(reader.fieldnames)

    students: list[Student] = []
    seen_logins: dict[str, Student] = {}

    for record_num, row in enumerate(reader, start=1):
        login = (row.get("github_username") or "").strip()
        if not login:
            logger.debug("Skipping record #%d: no GitHub username", record_num)
            continue

        roster_id = (row.get("identifier") or "").strip()
        if not roster_id:
            raise InvalidRosterError(
                f"Record #{record_num}: '{_format_row(row)}' -> column 'identifier' cannot be blank"
            )

        try:
            student = Student(
                name=roster_naming.extract_student_name(roster_id),
                group=roster_naming.extract_group(roster_id),
                roster_id=roster_id,
                login=login,
            )
        except ValueError as e:
            raise InvalidRosterError(
                f"Record #{record_num}: '{_format_row(row)}' -> {e}"
            ) from None

        if login in seen_logins:
            logger.warning(
                "Login '%s' appears more than once in the roster (record #%d, '%s'); "
                "keeping '%s'",
                login,
                record_num,
                roster_id,
                seen_logins[login].roster_id,
            )
            continue

        seen_logins[login] = student
        students.append(student)

    if not students:
        raise InvalidRosterError("No students found in the roster file. Please check the content.")

    return students


def _validate_header(fieldnames: list[str] | None) -> None:
    if not fieldnames:
        raise InvalidRosterError("CSV file is empty or has no header")

    if len(fieldnames) != len(REQUIRED_COLUMNS):
        raise InvalidRosterError(
            f"CSV header must contain exactly {len(REQUIRED_COLUMNS)} columns: "
            + ", ".join(REQUIRED_COLUMNS)
        )

    for column in REQUIRED_COLUMNS:
        if column not in fieldnames:
            raise InvalidRosterError(f"CSV does not contain '{column}' column")


def _format_row(row: dict[str, str | None]) -> str:
    return ", ".join(str(value or "") for key, value in row.items() if key is not None)
