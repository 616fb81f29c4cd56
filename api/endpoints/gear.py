"""
Item generation endpoints.
"""
import logging
import threading
import time
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from errors import CredentialError, GenerationError, MalformedResponse, TransportError, UpstreamError
from generation import GearGenerator, ItemCategory
from ..logging_utils import log_request
from ..models import DescriptionResponse, GearRequest

logger = logging.getLogger(__name__)
router = APIRouter()

ERROR_STATUS = {
    CredentialError: 500,
    TransportError: 502,
    UpstreamError: 502,
    MalformedResponse: 502,
}

_generator = None
_generator_lock = threading.Lock()


def get_generator() -> GearGenerator:
    """Process-wide generator, built from configuration on first use"""
    global _generator
    with _generator_lock:
        if _generator is None:
            try:
                _generator = GearGenerator.from_settings()
            except CredentialError as e:
                logger.error(f"Credential configuration error: {e}")
                raise HTTPException(status_code=500, detail=e.to_dict())
        return _generator


def _to_http_error(request_id: str, error: GenerationError, start_time: float) -> HTTPException:
    elapsed_ms = int((time.time() - start_time) * 1000)
    logger.error(f"[{request_id}] {error.kind} after {elapsed_ms}ms: {error.message}")
    return HTTPException(status_code=ERROR_STATUS.get(type(error), 500), detail=error.to_dict())


async def _generate(request: GearRequest, generator: GearGenerator, endpoint: str,
                    category: Optional[ItemCategory] = None):
    request_id = str(uuid.uuid4())[:8]
    start_time = time.time()
    log_request(request_id, request.model_dump(), endpoint)

    try:
        result = await generator.generate(request.to_generation_request(category), request_id)
    except GenerationError as e:
        raise _to_http_error(request_id, e, start_time)

    elapsed_ms = int((time.time() - start_time) * 1000)
    outcome = "item" if result.extracted else "raw passthrough"
    logger.info(f"[{request_id}] Generation finished in {elapsed_ms}ms ({outcome})")
    return result.to_payload()


@router.post("/api/gear")
async def generate_gear(request: GearRequest, generator: GearGenerator = Depends(get_generator)):
    """Generate a weapon, armor piece or jewelry item from its type"""
    return await _generate(request, generator, "/api/gear")


@router.post("/api/jewelry")
async def generate_jewelry(request: GearRequest, generator: GearGenerator = Depends(get_generator)):
    """Generate a jewelry item regardless of the requested type"""
    return await _generate(request, generator, "/api/jewelry", ItemCategory.JEWELRY)


@router.post("/api/gear/describe", response_model=DescriptionResponse)
async def describe_gear(request: GearRequest, generator: GearGenerator = Depends(get_generator)):
    """Deterministic lore description of an item"""
    request_id = str(uuid.uuid4())[:8]
    start_time = time.time()
    log_request(request_id, request.model_dump(), "/api/gear/describe")

    try:
        description = await generator.describe(request.to_generation_request(), request_id)
    except GenerationError as e:
        raise _to_http_error(request_id, e, start_time)

    if description is None:
        error = MalformedResponse("Resource server response carried no generated text")
        raise _to_http_error(request_id, error, start_time)

    return DescriptionResponse(name=request.name, description=description)
