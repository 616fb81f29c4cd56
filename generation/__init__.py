"""Item generation: prompt composition, response extraction, orchestration"""

from .models import (
    ComposedPrompt,
    GenerationParameters,
    GenerationRequest,
    GenerationResult,
    ItemCategory,
)
from .prompts import compose_description_prompt, compose_prompt, magic_rules
from .extractor import Extraction, extract_generated_text, extract_item, normalize_weight
from .orchestrator import GearGenerator, ResourceServerConfig

__all__ = [
    "ComposedPrompt",
    "Extraction",
    "GearGenerator",
    "GenerationParameters",
    "GenerationRequest",
    "GenerationResult",
    "ItemCategory",
    "ResourceServerConfig",
    "compose_description_prompt",
    "compose_prompt",
    "extract_generated_text",
    "extract_item",
    "magic_rules",
    "normalize_weight",
]
