"""Pydantic models for repository metadata."""
from pydantic import BaseModel, Field, field_validator


class RepoMetadata(BaseModel):
    """
    The cgit/gitweb metadata kept beside a bare repository.

    Fields left at their default are indistinguishable from empty values once
    written; `model_fields_set` tells which ones the caller actually supplied.
    """
    section: str = Field(default="", description="cgit section the repository is grouped under")
    description: str = Field(default="", description="Free-text description shown by cgit/gitweb")
    owner: str = Field(default="", description="Owner shown by gitweb")

    @field_validator('section', 'owner')
    @classmethod
    def validate_single_line(cls, v: str) -> str:
        """Section and owner are single config lines; a line break would inject extra keys."""
        if '\n' in v or '\r' in v:
            raise ValueError("Value cannot contain line breaks")
        return v


class RepositoryInfo(BaseModel):
    """A repository in the registry together with its metadata."""

    name: str
    """Repository name without the .git suffix"""

    path: str
    """Absolute path of the bare repository directory"""

    section: str = ""
    description: str = ""
    owner: str = ""
