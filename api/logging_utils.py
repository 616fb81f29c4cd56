"""
Logging utilities for request debugging and tracing.
"""
import logging
from typing import Dict, Any

logger = logging.getLogger(__name__)


def log_request(request_id: str, request_data: Dict[str, Any], endpoint: str):
    """Log incoming generation request details"""
    logger.debug(f"[{request_id}] Endpoint: {endpoint}")
    for field in ("name", "type", "subtype", "rarity", "handedness", "clothing_piece"):
        value = request_data.get(field)
        if value:
            logger.debug(f"[{request_id}] {field}: {value}")
    if request_data.get("description"):
        logger.debug(f"[{request_id}] description: {len(request_data['description'])} chars")
