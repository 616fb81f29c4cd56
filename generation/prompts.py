"""
Prompt composition for item generation.

Pure functions: a GenerationRequest goes in, prompt text plus fixed sampling
parameters come out. Each category has its own template function; the rarity
rule for magical content lives in one helper shared by all of them.
"""
import json
from typing import Any, Callable, Dict, List, Tuple

from .models import ComposedPrompt, GenerationParameters, GenerationRequest, ItemCategory

COMMON_RARITY = "Common"
CURSE_RARITIES = ("Legendary", "Artifact")

# Free-form generation: high temperature with top-p/top-k sampling
ITEM_PARAMETERS = {
    ItemCategory.WEAPON: GenerationParameters(temperature=1.0, top_p=0.95, top_k=40, max_output_tokens=1024),
    ItemCategory.ARMOR: GenerationParameters(temperature=1.0, top_p=0.95, top_k=40, max_output_tokens=1024),
    ItemCategory.JEWELRY: GenerationParameters(temperature=1.0, top_p=0.95, top_k=40, max_output_tokens=768),
}

# Single-shot lore descriptions: deterministic
DESCRIPTION_PARAMETERS = GenerationParameters(temperature=0.0, top_p=0.95, max_output_tokens=256)

JSON_INSTRUCTION = (
    "Respond with exactly one JSON object and nothing else. "
    "It must match this template, with every value filled in:"
)


def rarity_gate(rarity: str) -> Tuple[bool, bool]:
    """(enchantment allowed, curse allowed) for a rarity

    Anything but Common may be enchanted. Only Legendary and Artifact items
    may carry a curse.
    """
    if rarity == COMMON_RARITY:
        return False, False
    return True, rarity in CURSE_RARITIES


def magic_rules(rarity: str) -> List[str]:
    """Rarity-gated magical content lines for the structured item prompts"""
    enchant, curse = rarity_gate(rarity)
    if not enchant:
        return ["This is a mundane item: give it no magical properties of any kind."]

    lines = [
        f'Include an "Enchantment" field describing one enchantment whose power is scaled to {rarity} rarity.'
    ]
    if curse:
        lines.append('Also include a "Curse" field describing a curse that balances the item\'s power.')
    return lines


def armor_traits(subtype: str) -> Dict[str, str]:
    """Attunement and stealth are decided here, not by the model"""
    if subtype in ("Heavy", "Shield"):
        return {"Attunement": "No", "StealthDisadvantage": "Yes"}
    return {"Attunement": "Yes", "StealthDisadvantage": "No"}


def _render_schema(template: Dict[str, Any]) -> str:
    return json.dumps(template, indent=2, ensure_ascii=False)


def _detail_lines(details: Dict[str, str]) -> List[str]:
    return [f"- {label}: {value}" for label, value in details.items()]


def _assemble(role: str, details: Dict[str, str], rules: List[str], schema: Dict[str, Any],
              request: GenerationRequest) -> str:
    lines = [role, "", "Item details:"]
    lines.extend(_detail_lines(details))
    lines.append("")
    lines.extend(rules)
    lines.extend(magic_rules(request.rarity))
    if request.extra_description:
        lines.append(f"Work in the following flavor from the requester: {request.extra_description}")
    lines.extend(["", JSON_INSTRUCTION, _render_schema(schema)])
    return "\n".join(lines)


def weapon_prompt(request: GenerationRequest) -> str:
    details = {
        "Name": request.name,
        "Type": ItemCategory.WEAPON.value,
        "Handedness": request.handedness,
        "Weapon Type": request.subtype,
        "Rarity": request.rarity,
    }
    schema = {
        "Name": request.name,
        "Type": ItemCategory.WEAPON.value,
        "WeaponType": request.subtype,
        "Handedness": request.handedness,
        "Rarity": request.rarity,
        "DamageDice": "<dice expression, e.g. 2d6>",
        "DamageType": "<Slashing, Piercing or Bludgeoning>",
        "Properties": ["<weapon property>"],
        "Weight": "<weight, e.g. 6 lb.>",
        "Cost": "<cost, e.g. 50 gp>",
        "Description": "<two or three sentences of appearance and history>",
    }
    rules = ["Damage dice and properties must suit the weapon type and handedness."]
    return _assemble("You are a Dungeons & Dragons 5th Edition gear generator.", details, rules, schema, request)


def armor_prompt(request: GenerationRequest) -> str:
    details = {
        "Name": request.name,
        "Type": ItemCategory.ARMOR.value,
        "Armor Class": request.subtype,
    }
    if request.subtype != "Shield":
        details["Piece"] = request.clothing_piece
    details["Rarity"] = request.rarity

    traits = armor_traits(request.subtype)
    schema: Dict[str, Any] = {
        "Name": request.name,
        "Type": ItemCategory.ARMOR.value,
        "ArmorType": request.subtype,
    }
    if request.subtype != "Shield":
        schema["Piece"] = request.clothing_piece
    schema.update({
        "Rarity": request.rarity,
        "ArmorClass": "<armor class, e.g. 14 + Dex modifier (max 2)>",
        "StealthDisadvantage": traits["StealthDisadvantage"],
        "Attunement": traits["Attunement"],
        "StrengthRequirement": "<minimum Strength score or None>",
        "Weight": "<weight, e.g. 20 lb.>",
        "Cost": "<cost, e.g. 400 gp>",
        "Description": "<two or three sentences of appearance and history>",
    })
    rules = [
        f'Use "Attunement": "{traits["Attunement"]}" and '
        f'"StealthDisadvantage": "{traits["StealthDisadvantage"]}" exactly as given.'
    ]
    return _assemble("You are a Dungeons & Dragons 5th Edition gear generator.", details, rules, schema, request)


def jewelry_prompt(request: GenerationRequest) -> str:
    jewelry_type = request.subtype or ItemCategory.JEWELRY.value
    details = {
        "Name": request.name,
        "Type": jewelry_type,
        "Rarity": request.rarity,
    }
    schema = {
        "Name": request.name,
        "Type": jewelry_type,
        "Rarity": request.rarity,
        "Weight": "<weight, e.g. 1 lb.>",
        "Description": "<two or three sentences of appearance and history>",
    }
    rules = [
        "Avoid generic fantasy clichés: no glowing gems, ancient elves or dragon hoards "
        "unless the details above ask for them. Favor specific materials, makers and places."
    ]
    return _assemble("You are a Dungeons & Dragons 5th Edition jewelry generator.", details, rules, schema, request)


PROMPT_BUILDERS: Dict[ItemCategory, Callable[[GenerationRequest], str]] = {
    ItemCategory.WEAPON: weapon_prompt,
    ItemCategory.ARMOR: armor_prompt,
    ItemCategory.JEWELRY: jewelry_prompt,
}


def compose_prompt(request: GenerationRequest) -> ComposedPrompt:
    """Prompt text and sampling parameters for structured item generation"""
    builder = PROMPT_BUILDERS.get(request.category, jewelry_prompt)
    parameters = ITEM_PARAMETERS.get(request.category, ITEM_PARAMETERS[ItemCategory.JEWELRY])
    return ComposedPrompt(text=builder(request), parameters=parameters)


def compose_description_prompt(request: GenerationRequest) -> ComposedPrompt:
    """Prompt for a deterministic prose description of an item"""
    lines = [
        "You are a creative assistant for Dungeons & Dragons 5th Edition.",
        "Generate a vivid, lore-rich description of an item with these details:",
        f"• Name: {request.name}",
        f"• Type: {request.category.value}",
    ]
    if request.category is ItemCategory.WEAPON:
        lines.append(f"• Category: {request.handedness}")
        lines.append(f"• Weapon Type: {request.subtype}")
    elif request.category is ItemCategory.ARMOR:
        lines.append(f"• Armor Class: {request.subtype}")
        if request.subtype != "Shield":
            lines.append(f"• Piece: {request.clothing_piece}")
    elif request.subtype:
        lines.append(f"• Jewelry Type: {request.subtype}")
    lines.append(f"• Rarity: {request.rarity}")
    lines.append("")
    lines.append("Include in your response:")
    lines.append("  – A short piece of in-world history or legend")
    lines.append("  – Its mechanical benefits")
    enchant, curse = rarity_gate(request.rarity)
    if enchant:
        lines.append(f"  – One possible enchantment scaled to {request.rarity} rarity")
    else:
        lines.append("  – Nothing magical: this is a mundane item")
    if curse:
        lines.append("  – One possible curse")
    if request.extra_description:
        lines.append("")
        lines.append(f"Requester notes: {request.extra_description}")
    return ComposedPrompt(text="\n".join(lines), parameters=DESCRIPTION_PARAMETERS)
