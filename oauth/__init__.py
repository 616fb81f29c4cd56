"""Credential acquisition and caching for the Resource Server"""

from .models import (
    ApiKey,
    AuthContext,
    CredentialMaterial,
    RefreshableOAuth,
    SignedAssertion,
    TokenGrant,
)
from .jwt_utils import create_signed_assertion, decode_jwt
from .token_refresh import exchange_signed_assertion, refresh_access_token, request_token
from .token_manager import TokenCache
from .credential_store import CredentialStore, load_credential_material, load_service_account_file

__all__ = [
    "ApiKey",
    "AuthContext",
    "CredentialMaterial",
    "CredentialStore",
    "RefreshableOAuth",
    "SignedAssertion",
    "TokenCache",
    "TokenGrant",
    "create_signed_assertion",
    "decode_jwt",
    "exchange_signed_assertion",
    "load_credential_material",
    "load_service_account_file",
    "refresh_access_token",
    "request_token",
]
