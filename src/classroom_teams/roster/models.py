"""Roster entities."""

from pydantic import BaseModel, ValidationInfo, field_validator


class Student(BaseModel):
    """A student taken from the classroom roster.

    Attributes:
        name: Student name, as written in the roster identifier.
        group: Group the student belongs to (opaque identifier).
        roster_id: Roster identifier as exported, kept for diagnostics.
        login: GitHub username of the student.
    """

    name: str
    group: str
    roster_id: str
    login: str

    model_config = {"frozen": True}

    @field_validator("name", "group", "roster_id", "login")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value or value.isspace():
            raise ValueError(f"{info.field_name} must not be blank")
        return value
