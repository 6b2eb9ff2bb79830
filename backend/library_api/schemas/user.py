"""User Schemas — Pydantic models with field-level validation for the /users boundary.

Invariants:
    - UserCreate.name / UserUpdate.name: string, stripped, non-empty, ≤255 chars
    - Unknown body fields (e.g. id on update) are ignored, not rejected

Design Decisions:
    - field_validator for side-effect-free transforms (strip) — keeps models pure
    - Separate create/update classes even though the shapes match: update may grow
      optional fields without loosening create
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreate(BaseModel):
    """User creation — validates name presence and whitespace."""
    name: str = Field(max_length=255)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name is required and cannot be empty")
        return v


class UserUpdate(UserCreate):
    """User update — full replacement of name (PUT and PATCH alike)."""


class UserResponse(BaseModel):
    """User response — public-facing user row."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
