from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _ResumeModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null means "absent": the field default applies.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ContactInfo(_ResumeModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    github: str = ""


class ExperienceEntry(_ResumeModel):
    job_title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    responsibilities: list[str] = Field(default_factory=list)


class EducationEntry(_ResumeModel):
    degree: str = ""
    institution: str = ""
    graduation_date: str = ""
    cgpa: str = ""


class ProjectEntry(_ResumeModel):
    name: str = ""
    responsibilities: list[str] = Field(default_factory=list)


class NormalizedResume(_ResumeModel):
    """Canonical résumé record.

    Every declared key is always present; absent data is ``""`` or ``[]``.
    Keys outside the schema are kept as extras. ``skills`` is free text.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    contact_info: ContactInfo = Field(default_factory=ContactInfo)
    summary: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)
    skills: str = ""
    certifications: list[str] = Field(default_factory=list)


RESUME_TOP_LEVEL_KEYS: tuple[str, ...] = tuple(NormalizedResume.model_fields)
