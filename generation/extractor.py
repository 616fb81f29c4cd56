"""
Recovery of a JSON object from free-form model output, plus post-processing.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from errors import MalformedResponse

logger = logging.getLogger(__name__)


@dataclass
class Extraction:
    """Outcome of extract_item

    ``item`` is None when no ``{...}`` span was found; ``raw`` always holds
    the text that was searched so the caller can see what the model produced.
    """
    item: Optional[Dict[str, Any]]
    raw: str

    @property
    def found(self) -> bool:
        return self.item is not None


def extract_item(text: str) -> Extraction:
    """Parse the span from the first '{' to the last '}' as a JSON object

    Args:
        text: Raw generated text, possibly wrapped in commentary or code fences

    Returns:
        Extraction with the parsed object, or with item=None when the text
        holds no '{' ... '}' span

    Raises:
        MalformedResponse: If a span was found but is not valid JSON
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        logger.warning("No JSON object found in generated text, returning raw response")
        return Extraction(item=None, raw=text)

    fragment = text[start:end + 1]
    try:
        item = json.loads(fragment)
    except json.JSONDecodeError as e:
        logger.error(f"Generated JSON failed to parse: {e}")
        raise MalformedResponse(f"Generated JSON failed to parse: {e}", fragment=fragment)

    return Extraction(item=item, raw=text)


def extract_generated_text(envelope: Any) -> Optional[str]:
    """Pull the generated text out of a Resource Server response body

    Handles generateContent (``candidates[0].content.parts[*].text``) and the
    legacy predict shape (``predictions[0].content``).
    """
    if not isinstance(envelope, dict):
        return None

    candidates = envelope.get("candidates")
    if isinstance(candidates, list) and candidates:
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if isinstance(parts, list):
            texts = [part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)]
            if texts:
                return "".join(texts)

    predictions = envelope.get("predictions")
    if isinstance(predictions, list) and predictions:
        prediction = predictions[0]
        if isinstance(prediction, dict) and isinstance(prediction.get("content"), str):
            return prediction["content"]
        if isinstance(prediction, str):
            return prediction

    return None


def normalize_weight(item: Dict[str, Any]) -> Dict[str, Any]:
    """Force 'lb.' for a weight of exactly 1 and 'lbs.' otherwise

    Splits on the last space, so "1 1/2 lb." becomes "1 1/2 lbs.". A missing,
    non-string or space-free Weight is left alone.
    """
    weight = item.get("Weight")
    if not isinstance(weight, str) or " " not in weight:
        return item

    amount, _unit = weight.rsplit(" ", 1)
    item["Weight"] = f"{amount} lb." if amount == "1" else f"{amount} lbs."
    return item
