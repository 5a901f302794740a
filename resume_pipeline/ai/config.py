import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    temperature: float
    max_output_tokens: int


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "openai").strip().lower()
    model = (os.getenv("AI_MODEL") or os.getenv("OPENAI_MODEL") or "gpt-4o-mini").strip()
    # Extraction wants the most literal answer the model can give.
    temperature = float(os.getenv("AI_TEMPERATURE", "0"))
    max_output_tokens = int(os.getenv("AI_MAX_OUTPUT_TOKENS", "4096"))
    return AIConfig(
        provider=provider,
        model=model,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
    )
