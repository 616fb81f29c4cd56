"""Data models for item generation"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ItemCategory(str, Enum):
    WEAPON = "Weapon"
    ARMOR = "Armor"
    JEWELRY = "Jewelry"

    @classmethod
    def from_type(cls, item_type: str) -> "ItemCategory":
        """Weapon and Armor map directly; anything else is jewelry"""
        for category in (cls.WEAPON, cls.ARMOR):
            if item_type == category.value:
                return category
        return cls.JEWELRY


@dataclass(frozen=True)
class GenerationRequest:
    """One item to generate

    Attributes:
        category: Weapon, Armor or Jewelry
        name: Item name chosen by the caller
        subtype: Weapon type (e.g. Greatsword), armor class (Light/Medium/Heavy/Shield)
            or jewelry type
        rarity: Common, Uncommon, Rare, Very Rare, Legendary or Artifact
        handedness: One-Handed, Two-Handed or Versatile (weapons)
        clothing_piece: Worn piece for non-shield armor (e.g. Chestplate)
        extra_description: Free-form flavor guidance from the caller
    """
    category: ItemCategory
    name: str = ""
    subtype: str = ""
    rarity: str = ""
    handedness: str = ""
    clothing_piece: str = ""
    extra_description: str = ""


@dataclass(frozen=True)
class GenerationParameters:
    """Sampling configuration sent with a prompt"""
    temperature: float
    top_p: float
    max_output_tokens: int
    top_k: Optional[int] = None

    def to_generation_config(self) -> Dict[str, Any]:
        """Camel-cased parameters for the Resource Server"""
        config: Dict[str, Any] = {
            "temperature": self.temperature,
            "maxOutputTokens": self.max_output_tokens,
            "topP": self.top_p,
        }
        if self.top_k is not None:
            config["topK"] = self.top_k
        return config


@dataclass(frozen=True)
class ComposedPrompt:
    text: str
    parameters: GenerationParameters


@dataclass
class GenerationResult:
    """Either an extracted item or the raw upstream envelope (extraction fallback)"""
    item: Optional[Dict[str, Any]] = None
    passthrough: Optional[Dict[str, Any]] = None

    @property
    def extracted(self) -> bool:
        return self.item is not None

    def to_payload(self) -> Dict[str, Any]:
        """What the caller receives"""
        if self.item is not None:
            return self.item
        return self.passthrough or {}
