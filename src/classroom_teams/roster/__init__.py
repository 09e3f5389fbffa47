"""Classroom roster: students and the CSV loader."""

from .loader import InvalidRosterError, load_roster, parse_roster
from .models import Student

__all__ = [
    "InvalidRosterError",
    "Student",
    "load_roster",
    "parse_roster",
]
