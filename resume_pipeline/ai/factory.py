from functools import lru_cache

from resume_pipeline.ai.config import load_ai_config
from resume_pipeline.ai.types import StructuredDataClient

from resume_pipeline.ai.providers.openai_provider import OpenAIProvider


@lru_cache(maxsize=1)
def get_ai_client() -> StructuredDataClient:
    cfg = load_ai_config()

    if cfg.provider == "openai":
        return OpenAIProvider(
            model=cfg.model,
            temperature=cfg.temperature,
            max_output_tokens=cfg.max_output_tokens,
        )

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
