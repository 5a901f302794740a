from __future__ import annotations


class ResumePipelineError(RuntimeError):
    """Base for failures that are reported to the client as-is.

    ``str(exc)`` is the client-safe message; operator detail travels on
    ``__cause__`` and in the logs.
    """

    code = "pipeline_error"
    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class UnsupportedMediaType(ResumePipelineError):
    code = "unsupported_media_type"
    status_code = 415


class ExtractionFailed(ResumePipelineError):
    code = "extraction_failed"
    status_code = 422


class NormalizationFailed(ResumePipelineError):
    code = "normalization_failed"
    status_code = 502


class RenderFailed(ResumePipelineError):
    code = "render_failed"
    status_code = 422


class StoreUnavailable(ResumePipelineError):
    code = "store_unavailable"
    status_code = 503
