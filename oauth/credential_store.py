"""Credential store: turns configured credential material into request authorization"""

import json
import logging
from functools import partial
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import httpx

import settings
from errors import CredentialError
from .models import (
    ApiKey,
    AuthContext,
    CredentialMaterial,
    RefreshableOAuth,
    SignedAssertion,
)
from .token_manager import TokenCache
from .token_refresh import exchange_signed_assertion, refresh_access_token

logger = logging.getLogger(__name__)

AUTH_MODES = ("api_key", "oauth", "service_account")


class CredentialStore:
    """Holds one credential material and produces request authorization

    The material is dispatched once, here, into a single refresh capability
    wrapped by a TokenCache. API keys bypass the cache entirely.
    """

    def __init__(
        self,
        material: CredentialMaterial,
        token_uri: str = settings.TOKEN_URI,
        clock: Optional[Callable[[], float]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            material: ApiKey, RefreshableOAuth or SignedAssertion
            token_uri: Token endpoint URL for refreshable materials
            clock: Optional time source (epoch seconds) for the cache and assertions
            transport: Optional httpx transport for the token endpoint (tests)
        """
        self.material = material
        self.token_uri = token_uri
        self.cache: Optional[TokenCache] = None

        if isinstance(material, ApiKey):
            refresher = None
        elif isinstance(material, RefreshableOAuth):
            refresher = partial(refresh_access_token, material, token_uri=token_uri, transport=transport)
        elif isinstance(material, SignedAssertion):
            refresher = partial(exchange_signed_assertion, material, token_uri=token_uri,
                                transport=transport, clock=clock)
        else:
            raise CredentialError(f"Unsupported credential material: {type(material).__name__}")

        if refresher is not None:
            if clock is not None:
                self.cache = TokenCache(refresher, clock=clock)
            else:
                self.cache = TokenCache(refresher)

    @property
    def mode(self) -> str:
        if isinstance(self.material, ApiKey):
            return "api_key"
        if isinstance(self.material, RefreshableOAuth):
            return "oauth"
        return "service_account"

    async def authorize(self) -> AuthContext:
        """Authorization for one Resource Server request

        Raises:
            CredentialError: If a bearer token cannot be obtained
        """
        if isinstance(self.material, ApiKey):
            return AuthContext(params={"key": self.material.key})

        token = await self.cache.get_token()
        return AuthContext(headers={"Authorization": f"Bearer {token}"})

    def status(self) -> Dict[str, Any]:
        """Credential mode and cache state without secrets"""
        status: Dict[str, Any] = {"mode": self.mode}
        if self.cache is not None:
            status["token"] = self.cache.status()
        return status

    @classmethod
    def from_settings(cls, **kwargs) -> "CredentialStore":
        """Build a store from the configured credential material"""
        material = load_credential_material()
        logger.info(f"Using '{type(material).__name__}' credentials for the resource server")
        return cls(material, **kwargs)


def load_service_account_file(path: str) -> SignedAssertion:
    """Load a service identity from a Google service-account JSON key file

    Raises:
        CredentialError: If the file is missing or lacks client_email/private_key
    """
    key_path = Path(path).expanduser()
    try:
        data = json.loads(key_path.read_text())
    except (OSError, ValueError) as e:
        raise CredentialError(f"Unable to read service account file {key_path}: {e}")

    email = data.get("client_email") if isinstance(data, dict) else None
    private_key = data.get("private_key") if isinstance(data, dict) else None
    if not email or not private_key:
        raise CredentialError(f"Service account file {key_path} is missing client_email or private_key")
    return SignedAssertion(issuer_email=email, private_key_pem=private_key)


def _api_key_material() -> Optional[CredentialMaterial]:
    if settings.GOOGLE_API_KEY:
        return ApiKey(key=settings.GOOGLE_API_KEY)
    return None


def _oauth_material() -> Optional[CredentialMaterial]:
    if settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET and settings.GOOGLE_REFRESH_TOKEN:
        return RefreshableOAuth(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            refresh_token=settings.GOOGLE_REFRESH_TOKEN,
        )
    return None


def _service_account_material() -> Optional[CredentialMaterial]:
    if settings.GOOGLE_SERVICE_ACCOUNT_EMAIL and settings.GOOGLE_PRIVATE_KEY:
        return SignedAssertion(
            issuer_email=settings.GOOGLE_SERVICE_ACCOUNT_EMAIL,
            private_key_pem=settings.GOOGLE_PRIVATE_KEY,
        )
    if settings.GOOGLE_APPLICATION_CREDENTIALS:
        return load_service_account_file(settings.GOOGLE_APPLICATION_CREDENTIALS)
    return None


_LOADERS = {
    "api_key": _api_key_material,
    "oauth": _oauth_material,
    "service_account": _service_account_material,
}


def load_credential_material() -> CredentialMaterial:
    """Pick the credential material from configuration

    GOOGLE_AUTH_MODE selects a flow explicitly; otherwise the first complete
    credential set is used in the order api_key, oauth, service_account.

    Raises:
        CredentialError: If the selected (or any) credential set is incomplete
    """
    mode = (settings.GOOGLE_AUTH_MODE or "").strip().lower()
    if mode:
        if mode not in _LOADERS:
            raise CredentialError(f"Unknown GOOGLE_AUTH_MODE '{mode}', expected one of {', '.join(AUTH_MODES)}")
        material = _LOADERS[mode]()
        if material is None:
            raise CredentialError(f"GOOGLE_AUTH_MODE is '{mode}' but its credentials are not configured")
        return material

    for name in AUTH_MODES:
        material = _LOADERS[name]()
        if material is not None:
            return material

    raise CredentialError(
        "No credentials configured: set GOOGLE_API_KEY, the GOOGLE_CLIENT_ID/GOOGLE_CLIENT_SECRET/"
        "GOOGLE_REFRESH_TOKEN triple, or GOOGLE_SERVICE_ACCOUNT_EMAIL/GOOGLE_PRIVATE_KEY"
    )
