from .normalize_resume import normalize
from .reconcile import reconcile_resume_payload, to_normalized_resume

__all__ = ["normalize", "reconcile_resume_payload", "to_normalized_resume"]
