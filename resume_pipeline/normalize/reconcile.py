"""
Schema reconciliation for model-produced résumé payloads.

The model is asked for an exact shape but routinely drifts: keys go missing,
sections come back as strings, entries use their own field names
(``title``/``position``, ``school``, ``startDate``), bullet lists arrive as a
single paragraph, and "Not found" shows up where an empty value belongs.
``reconcile_resume_payload`` maps all of that onto the canonical record so
every declared key is present with a value of the declared type. Keys it does
not know are carried through untouched.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from resume_pipeline.schemas.resume import NormalizedResume

from .utils import clean_scalar, normalize_line, split_text_items, strip_bullet_prefix

logger = logging.getLogger(__name__)

Aliases = Mapping[str, tuple[str, ...]]

_TOP_LEVEL_ALIASES: Aliases = {
    "contact_info": ("contact_info", "contact", "contacts", "personal_info", "contact_information"),
    "summary": ("summary", "professional_summary", "profile", "objective", "about"),
    "experience": ("experience", "work_experience", "professional_experience", "employment", "employment_history"),
    "education": ("education", "academics", "academic_background"),
    "projects": ("projects", "personal_projects", "project_experience"),
    "skills": ("skills", "technical_skills", "skill_set", "skillset"),
    "certifications": ("certifications", "certificates", "licenses_and_certifications"),
}

_CONTACT_ALIASES: Aliases = {
    "name": ("name", "full_name", "fullName"),
    "email": ("email", "email_address", "mail"),
    "phone": ("phone", "phone_number", "mobile", "telephone"),
    "linkedin": ("linkedin", "linkedin_url", "linkedIn"),
    "github": ("github", "github_url", "gitHub"),
}

_EXPERIENCE_ALIASES: Aliases = {
    "job_title": ("job_title", "jobTitle", "title", "position", "role", "designation"),
    "company": ("company", "employer", "organization", "organisation", "company_name"),
    "location": ("location", "city", "place"),
    "start_date": ("start_date", "startDate", "start", "from"),
    "end_date": ("end_date", "endDate", "end", "to"),
    "responsibilities": (
        "responsibilities",
        "bullets",
        "highlights",
        "achievements",
        "duties",
        "description",
        "details",
    ),
}

_EDUCATION_ALIASES: Aliases = {
    "degree": ("degree", "qualification", "program", "course", "title"),
    "institution": ("institution", "school", "university", "college", "institute"),
    "graduation_date": (
        "graduation_date",
        "graduationDate",
        "graduation_year",
        "end_date",
        "endDate",
        "year",
        "date",
    ),
    "cgpa": ("cgpa", "gpa", "grade", "grades", "score"),
}

_PROJECT_ALIASES: Aliases = {
    "name": ("name", "title", "project_name", "projectName"),
    "responsibilities": ("responsibilities", "bullets", "highlights", "description", "details", "features"),
}

_RANGE_KEYS = ("dates", "date_range", "duration", "period")
_RANGE_SPLIT_RE = re.compile(r"\s+(?:-|–|—|to)\s+|\s*[–—]\s*", re.IGNORECASE)

_LIST_FIELDS = {"responsibilities"}


def _pick(data: Mapping[str, Any], keys: tuple[str, ...]) -> tuple[str | None, Any]:
    for key in keys:
        if key in data and data[key] is not None:
            return key, data[key]
    return None, None


def _as_text(value: Any) -> str:
    if isinstance(value, list):
        parts = [_as_text(item) for item in value]
        return ", ".join(part for part in parts if part)
    return clean_scalar(value)


def _dict_as_line(value: Mapping[str, Any]) -> str:
    parts = [clean_scalar(item) for item in value.values() if not isinstance(item, (dict, list))]
    return " - ".join(part for part in parts if part)


def _as_text_list(value: Any, *, field: str) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return split_text_items(value)
    if isinstance(value, dict):
        line = _dict_as_line(value)
        return [line] if line else []
    if isinstance(value, list):
        items: list[str] = []
        for item in value:
            if isinstance(item, str):
                items.extend(split_text_items(item))
            elif isinstance(item, dict):
                line = _dict_as_line(item)
                if line:
                    items.append(line)
            elif isinstance(item, list):
                items.extend(_as_text_list(item, field=field))
            else:
                text = clean_scalar(item)
                if text:
                    items.append(text)
        return items
    text = clean_scalar(value)
    if text:
        return [text]
    logger.warning("resume_reconcile_dropped field=%s type=%s", field, type(value).__name__)
    return []


def _skills_as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        lines = [normalize_line(line) for line in value.splitlines()]
        lines = [strip_bullet_prefix(line) for line in lines if line]
        return "\n".join(line for line in lines if line and clean_scalar(line))
    if isinstance(value, list):
        return ", ".join(_as_text_list(value, field="skills"))
    if isinstance(value, dict):
        lines: list[str] = []
        for category, items in value.items():
            joined = _as_text(items)
            if not joined:
                continue
            label = normalize_line(str(category).replace("_", " "))
            lines.append(f"{label[:1].upper()}{label[1:]}: {joined}" if label else joined)
        return "\n".join(lines)
    return clean_scalar(value)


def _split_range(raw: Any) -> tuple[str, str]:
    text = clean_scalar(raw)
    if not text:
        return "", ""
    parts = _RANGE_SPLIT_RE.split(text, maxsplit=1)
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip()
    return text, ""


def _reconcile_entry(raw: Mapping[str, Any], aliases: Aliases) -> dict[str, Any]:
    entry: dict[str, Any] = {}
    consumed: set[str] = set()
    for field, keys in aliases.items():
        key, value = _pick(raw, keys)
        if key is not None:
            consumed.add(key)
        if field in _LIST_FIELDS:
            entry[field] = _as_text_list(value, field=field)
        else:
            entry[field] = _as_text(value)

    if "start_date" in aliases and not entry["start_date"] and not entry["end_date"]:
        key, value = _pick(raw, _RANGE_KEYS)
        if key is not None:
            consumed.add(key)
            entry["start_date"], entry["end_date"] = _split_range(value)

    for key, value in raw.items():
        if key not in consumed and key not in entry:
            entry[key] = value
    return entry


def _is_blank_entry(entry: Mapping[str, Any], aliases: Aliases) -> bool:
    return not any(entry.get(field) for field in aliases)


def _as_entries(value: Any, aliases: Aliases, *, field: str, primary: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if isinstance(value, dict):
        value = [value]
    elif isinstance(value, str):
        value = split_text_items(value)
    if not isinstance(value, list):
        logger.warning("resume_reconcile_dropped field=%s type=%s", field, type(value).__name__)
        return []

    entries: list[dict[str, Any]] = []
    for item in value:
        if isinstance(item, dict):
            entry = _reconcile_entry(item, aliases)
        elif isinstance(item, str):
            entry = _reconcile_entry({primary: strip_bullet_prefix(normalize_line(item))}, aliases)
        else:
            logger.warning("resume_reconcile_dropped_entry field=%s type=%s", field, type(item).__name__)
            continue
        if not _is_blank_entry(entry, aliases):
            entries.append(entry)
    return entries


def _reconcile_contact(value: Any, top_level: Mapping[str, Any], consumed: set[str]) -> dict[str, Any]:
    if value is not None and not isinstance(value, dict):
        logger.warning("resume_reconcile_dropped field=contact_info type=%s", type(value).__name__)
        value = None
    contact = _reconcile_entry(value or {}, _CONTACT_ALIASES)
    # Some answers put name/email beside the sections instead of inside contact_info.
    for field, keys in _CONTACT_ALIASES.items():
        if contact[field]:
            continue
        key, raw = _pick(top_level, keys)
        if key is not None and not isinstance(raw, (dict, list)):
            contact[field] = clean_scalar(raw)
            consumed.add(key)
    return contact


def reconcile_resume_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a dict holding every résumé key with a value of the declared type."""
    consumed: set[str] = set()
    picked: dict[str, Any] = {}
    for field, keys in _TOP_LEVEL_ALIASES.items():
        key, value = _pick(payload, keys)
        if key is not None:
            consumed.add(key)
        picked[field] = value

    missing = [field for field, value in picked.items() if value is None]
    if missing:
        logger.info("resume_reconcile_defaulted keys=%s", ",".join(missing))

    result: dict[str, Any] = {
        "contact_info": _reconcile_contact(picked["contact_info"], payload, consumed),
        "summary": "\n".join(_as_text_list(picked["summary"], field="summary"))
        if isinstance(picked["summary"], list)
        else _as_text(picked["summary"]),
        "experience": _as_entries(picked["experience"], _EXPERIENCE_ALIASES, field="experience", primary="job_title"),
        "education": _as_entries(picked["education"], _EDUCATION_ALIASES, field="education", primary="degree"),
        "projects": _as_entries(picked["projects"], _PROJECT_ALIASES, field="projects", primary="name"),
        "skills": _skills_as_text(picked["skills"]),
        "certifications": _as_text_list(picked["certifications"], field="certifications"),
    }

    for key, value in payload.items():
        if key not in consumed and key not in result:
            result[key] = value
    return result


def to_normalized_resume(payload: Mapping[str, Any]) -> NormalizedResume:
    return NormalizedResume.model_validate(reconcile_resume_payload(payload))
