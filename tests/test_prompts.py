"""
Tests for generation.prompts: rarity gating of magical content, per-category
templates and the fixed sampling parameters.
"""
import json

import pytest

from generation import GenerationRequest, ItemCategory, compose_description_prompt, compose_prompt
from generation.prompts import DESCRIPTION_PARAMETERS, armor_traits, rarity_gate

ALL_RARITIES = ["Common", "Uncommon", "Rare", "Very Rare", "Legendary", "Artifact"]
CATEGORIES = [ItemCategory.WEAPON, ItemCategory.ARMOR, ItemCategory.JEWELRY]


def make_request(category=ItemCategory.WEAPON, rarity="Rare", **fields) -> GenerationRequest:
    defaults = {"name": "Test Item", "subtype": "Longsword", "handedness": "Versatile"}
    defaults.update(fields)
    return GenerationRequest(category=category, rarity=rarity, **defaults)


def schema_of(prompt_text: str) -> dict:
    """The JSON template is the trailing block of the prompt"""
    return json.loads(prompt_text[prompt_text.index("{"):])


@pytest.mark.parametrize("category", CATEGORIES)
@pytest.mark.parametrize("rarity", [r for r in ALL_RARITIES if r != "Common"])
def test_magical_rarities_ask_for_an_enchantment(category, rarity):
    text = compose_prompt(make_request(category, rarity)).text
    assert '"Enchantment" field' in text
    assert f"scaled to {rarity} rarity" in text


@pytest.mark.parametrize("category", CATEGORIES)
def test_common_items_have_no_magic(category):
    for compose in (compose_prompt, compose_description_prompt):
        text = compose(make_request(category, "Common")).text.lower()
        assert "enchant" not in text
        assert "curse" not in text
        assert "mundane" in text


@pytest.mark.parametrize("category", CATEGORIES)
@pytest.mark.parametrize("rarity", ["Common", "Uncommon", "Rare", "Very Rare"])
def test_curses_only_from_legendary(category, rarity):
    for compose in (compose_prompt, compose_description_prompt):
        assert "curse" not in compose(make_request(category, rarity)).text.lower()


@pytest.mark.parametrize("rarity", ["Legendary", "Artifact"])
def test_legendary_and_above_may_be_cursed(rarity):
    assert '"Curse" field' in compose_prompt(make_request(rarity=rarity)).text
    assert "curse" in compose_description_prompt(make_request(rarity=rarity)).text


@pytest.mark.parametrize("rarity,expected", [
    ("Common", (False, False)),
    ("Uncommon", (True, False)),
    ("Very Rare", (True, False)),
    ("Legendary", (True, True)),
    ("Artifact", (True, True)),
])
def test_rarity_gate_drives_both_prompt_styles(rarity, expected):
    enchant, curse = expected
    assert rarity_gate(rarity) == expected

    for compose in (compose_prompt, compose_description_prompt):
        text = compose(make_request(rarity=rarity)).text.lower()
        assert ("enchantment" in text) is enchant
        assert ("curse" in text) is curse


def test_frostbrand_end_to_end_prompt():
    request = GenerationRequest(
        category=ItemCategory.from_type("Weapon"),
        name="Frostbrand",
        subtype="Greatsword",
        rarity="Rare",
        handedness="Two-Handed",
    )

    composed = compose_prompt(request)

    for expected in ("Greatsword", "Two-Handed", "Rare", "Frostbrand", '"Enchantment" field'):
        assert expected in composed.text
    assert composed.parameters.temperature >= 0.9
    assert composed.parameters.top_p is not None
    assert composed.parameters.top_k is not None


def test_weapon_schema_fields():
    schema = schema_of(compose_prompt(make_request()).text)
    assert {"DamageDice", "DamageType", "Properties", "Weight"} <= set(schema)
    assert "ArmorClass" not in schema


def test_prompt_opens_with_role_and_json_instruction():
    text = compose_prompt(make_request()).text
    assert text.startswith("You are a Dungeons & Dragons 5th Edition gear generator.")
    assert "exactly one JSON object" in text


@pytest.mark.parametrize("subtype,attunement,stealth", [
    ("Heavy", "No", "Yes"),
    ("Shield", "No", "Yes"),
    ("Light", "Yes", "No"),
    ("Medium", "Yes", "No"),
])
def test_armor_traits_are_prefilled(subtype, attunement, stealth):
    request = make_request(ItemCategory.ARMOR, subtype=subtype, clothing_piece="Chestplate")
    schema = schema_of(compose_prompt(request).text)

    assert armor_traits(subtype) == {"Attunement": attunement, "StealthDisadvantage": stealth}
    assert schema["Attunement"] == attunement
    assert schema["StealthDisadvantage"] == stealth
    assert "ArmorClass" in schema


def test_shield_has_no_piece():
    text = compose_prompt(make_request(ItemCategory.ARMOR, subtype="Shield", clothing_piece="Gauntlets")).text
    assert "Piece" not in text
    assert "Gauntlets" not in text


def test_body_armor_has_piece():
    text = compose_prompt(make_request(ItemCategory.ARMOR, subtype="Medium", clothing_piece="Gauntlets")).text
    assert "- Piece: Gauntlets" in text


def test_jewelry_reduced_schema_and_cliche_rule():
    composed = compose_prompt(make_request(ItemCategory.JEWELRY, subtype="Ring"))
    schema = schema_of(composed.text)

    assert set(schema) == {"Name", "Type", "Rarity", "Weight", "Description"}
    assert schema["Type"] == "Ring"
    assert "clichés" in composed.text
    assert composed.text.startswith("You are a Dungeons & Dragons 5th Edition jewelry generator.")


def test_unknown_type_falls_back_to_jewelry():
    assert ItemCategory.from_type("Amulet") is ItemCategory.JEWELRY
    assert ItemCategory.from_type("") is ItemCategory.JEWELRY
    assert ItemCategory.from_type("Armor") is ItemCategory.ARMOR


def test_extra_description_is_included():
    text = compose_prompt(make_request(extra_description="forged by frost giants")).text
    assert "forged by frost giants" in text


def test_empty_fields_still_compose():
    composed = compose_prompt(GenerationRequest(category=ItemCategory.WEAPON))
    assert schema_of(composed.text)["Name"] == ""


def test_description_mode_is_deterministic():
    composed = compose_description_prompt(make_request(ItemCategory.ARMOR, subtype="Heavy", clothing_piece="Helm"))

    assert composed.parameters == DESCRIPTION_PARAMETERS
    assert composed.parameters.temperature == 0.0
    assert composed.parameters.max_output_tokens == 256
    assert "• Armor Class: Heavy" in composed.text
    assert "• Piece: Helm" in composed.text


def test_item_parameters_use_sampling():
    for category in CATEGORIES:
        config = compose_prompt(make_request(category)).parameters.to_generation_config()
        assert config["temperature"] == 1.0
        assert {"topP", "topK", "maxOutputTokens"} <= set(config)


def test_composition_is_pure():
    request = make_request(rarity="Legendary")
    assert compose_prompt(request) == compose_prompt(request)
