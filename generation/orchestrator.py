"""Generation orchestrator: credential -> prompt -> Resource Server -> extraction"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

import settings
from errors import MalformedResponse, UpstreamError
from gemini import build_endpoint_url, build_request_body, make_gemini_request
from oauth import CredentialStore
from .extractor import extract_generated_text, extract_item, normalize_weight
from .models import ComposedPrompt, GenerationRequest, GenerationResult
from .prompts import compose_description_prompt, compose_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceServerConfig:
    """Where and how to reach the generation endpoint"""
    project: str
    location: str
    model: str = "gemini-2.0-flash-001"
    api_style: str = "generateContent"
    request_timeout: float = 120.0
    connect_timeout: float = 10.0

    @property
    def endpoint_url(self) -> str:
        return build_endpoint_url(self.project, self.location, self.model, self.api_style)

    @classmethod
    def from_settings(cls) -> "ResourceServerConfig":
        return cls(
            project=settings.GOOGLE_PROJECT_ID,
            location=settings.GOOGLE_PROJECT_LOCATION,
            model=settings.GEMINI_MODEL,
            api_style=settings.GEMINI_API_STYLE,
            request_timeout=settings.REQUEST_TIMEOUT,
            connect_timeout=settings.CONNECT_TIMEOUT,
        )


class GearGenerator:
    """Runs one generation request end to end

    Safe to share across concurrent requests; the credential store's token
    cache is the only mutable state.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        server: ResourceServerConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.server = server
        self.transport = transport

    async def _call(self, prompt: ComposedPrompt, request_id: str) -> Dict[str, Any]:
        """Send one prompt and return the decoded response envelope

        Raises:
            CredentialError, TransportError, UpstreamError, MalformedResponse
        """
        auth = await self.credentials.authorize()
        body = build_request_body(prompt.text, prompt.parameters, self.server.api_style)

        logger.debug(f"[{request_id}] POST {self.server.endpoint_url} ({self.credentials.mode} auth)")
        response = await make_gemini_request(
            self.server.endpoint_url,
            body,
            auth,
            timeout=self.server.request_timeout,
            connect_timeout=self.server.connect_timeout,
            transport=self.transport,
        )

        if not 200 <= response.status_code < 300:
            logger.error(f"[{request_id}] Resource server error {response.status_code}: {response.text}")
            raise UpstreamError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"[{request_id}] Resource server returned a non-JSON body: {e}")
            raise MalformedResponse(f"Resource server returned a non-JSON body: {e}", fragment=response.text)

    async def generate(self, request: GenerationRequest, request_id: str = "-") -> GenerationResult:
        """Generate one structured item

        Returns:
            GenerationResult with the normalized item, or with the raw upstream
            envelope when the generated text holds no JSON object
        """
        prompt = compose_prompt(request)
        logger.info(f"[{request_id}] Generating {request.category.value} '{request.name}' ({request.rarity})")
        envelope = await self._call(prompt, request_id)

        text = extract_generated_text(envelope)
        if text is None:
            logger.warning(f"[{request_id}] Response carried no generated text, passing it through")
            return GenerationResult(passthrough=envelope)

        extraction = extract_item(text)
        if not extraction.found:
            return GenerationResult(passthrough=envelope)

        return GenerationResult(item=normalize_weight(extraction.item))

    async def describe(self, request: GenerationRequest, request_id: str = "-") -> Optional[str]:
        """Generate a deterministic prose description of an item

        Returns:
            The generated text, or None if the response carried none
        """
        prompt = compose_description_prompt(request)
        logger.info(f"[{request_id}] Describing {request.category.value} '{request.name}'")
        envelope = await self._call(prompt, request_id)
        text = extract_generated_text(envelope)
        return text.strip() if text is not None else None

    def status(self) -> Dict[str, Any]:
        return {
            "model": self.server.model,
            "api_style": self.server.api_style,
            "location": self.server.location,
            "credentials": self.credentials.status(),
        }

    @classmethod
    def from_settings(cls) -> "GearGenerator":
        """Generator wired from configuration

        Raises:
            CredentialError: If no usable credentials are configured
        """
        return cls(CredentialStore.from_settings(), ResourceServerConfig.from_settings())
