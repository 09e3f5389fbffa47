"""Roster identifier format: ``"student name (group)"``.

Examples:
    "John Doe (A)"                      -> name "John Doe", group "A"
    "Izquierdo Castanedo, Raúl (i02)"   -> name "Izquierdo Castanedo, Raúl", group "i02"
"""

from typing import NoReturn

OPEN = " ("
CLOSE = ")"
EXPECTED_FORMAT = "'student name (group)'"


def generate_roster_id(name: str, group: str) -> str:
    """Build a roster identifier from a student name and a group."""
    if not name or name.isspace():
        raise ValueError("Name must not be blank")
    if not group or group.isspace():
        raise ValueError("Group must not be blank")
    return f"{name}{OPEN}{group}{CLOSE}"


def extract_student_name(roster_id: str) -> str:
    """Return the student name part of *roster_id*."""
    open_idx, _ = _check_structure(roster_id)
    return roster_id[:open_idx]


def extract_group(roster_id: str) -> str:
    """Return the group part of *roster_id*."""
    open_idx, close_idx = _check_structure(roster_id)
    return roster_id[open_idx + len(OPEN) : close_idx]


def _check_structure(roster_id: str) -> tuple[int, int]:
    open_idx = roster_id.rfind(OPEN)
    close_idx = roster_id.rfind(CLOSE)

    if open_idx == -1 or close_idx == -1 or open_idx >= close_idx:
        _invalid(roster_id)
    # nothing before or inside the parentheses
    if open_idx == 0 or open_idx + len(OPEN) == close_idx:
        _invalid(roster_id)
    # trailing text after the closing parenthesis
    if close_idx + len(CLOSE) != len(roster_id):
        _invalid(roster_id)

    return open_idx, close_idx


def _invalid(roster_id: str) -> NoReturn:
    raise ValueError(f"Invalid roster ID '{roster_id}'. Expected format: {EXPECTED_FORMAT}")
