from .resume_service import ProcessedResume, process_upload

__all__ = ["ProcessedResume", "process_upload"]
