"""
Pydantic models for the inbound generation API.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from generation.models import GenerationRequest, ItemCategory


class GearRequest(BaseModel):
    """Item generation request; absent fields default to empty strings"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = ""
    type: str = ""
    subtype: str = ""
    rarity: str = ""
    handedness: str = ""
    clothing_piece: str = Field(default="", alias="clothingPiece")
    description: str = ""
    # Older clients send the weapon fields under these names
    weapon_category: str = Field(default="", alias="weaponCategory")
    weapon_type: str = Field(default="", alias="weaponType")

    def to_generation_request(self, category: Optional[ItemCategory] = None) -> GenerationRequest:
        """Immutable domain request; category is derived from ``type`` unless forced"""
        return GenerationRequest(
            category=category or ItemCategory.from_type(self.type),
            name=self.name,
            subtype=self.subtype or self.weapon_type,
            rarity=self.rarity,
            handedness=self.handedness or self.weapon_category,
            clothing_piece=self.clothing_piece,
            extra_description=self.description,
        )


class DescriptionResponse(BaseModel):
    name: str
    description: str
