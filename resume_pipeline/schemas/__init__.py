from .api import ErrorResponse, ResumeUploadResponse, StoredResumeResponse
from .resume import (
    RESUME_TOP_LEVEL_KEYS,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    NormalizedResume,
    ProjectEntry,
)

__all__ = [
    "RESUME_TOP_LEVEL_KEYS",
    "ContactInfo",
    "EducationEntry",
    "ExperienceEntry",
    "ProjectEntry",
    "NormalizedResume",
    "ResumeUploadResponse",
    "StoredResumeResponse",
    "ErrorResponse",
]
