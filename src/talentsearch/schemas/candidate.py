"""Candidate record schema consumed by the query engine."""

from __future__ import annotations

from pydantic import ConfigDict, Field

from .base import CamelModel


class CandidateRecord(CamelModel):
    """Searchable view of a candidate profile.

    Only the attributes the search engine can address are declared; any other
    profile data passes through untouched.
    """

    id: str
    name: str = ""
    email: str = ""
    phone: str | None = None
    position: str | None = None
    location: str | None = None
    experience_level: str | None = None
    status: str | None = None
    source: str | None = None
    skills: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    experience_years: float | None = None
    salary_min: float | None = None
    salary_max: float | None = None

    model_config = ConfigDict(extra="allow", frozen=True)
