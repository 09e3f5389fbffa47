"""Pydantic models for GitHub organization entities."""

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class Team(BaseModel):
    """A team of the organization, as GitHub reports it."""

    display_name: str = Field(alias="name")
    slug: str

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator("display_name", "slug")
    @classmethod
    def _not_blank(cls, value: str, info: ValidationInfo) -> str:
        if not value or value.isspace():
            raise ValueError(f"{info.field_name} must not be blank")
        return value
