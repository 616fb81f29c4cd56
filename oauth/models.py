"""Data models for Resource Server credentials"""

from dataclasses import dataclass, field
from typing import Dict, Union


@dataclass(frozen=True)
class ApiKey:
    """Bare API key, sent as the ``key`` query parameter

    Attributes:
        key: The API key string
    """
    key: str = field(repr=False)


@dataclass(frozen=True)
class RefreshableOAuth:
    """OAuth client credentials plus a long-lived refresh token

    Attributes:
        client_id: OAuth client identifier
        client_secret: OAuth client secret
        refresh_token: Refresh token exchanged for short-lived access tokens
    """
    client_id: str
    client_secret: str = field(repr=False)
    refresh_token: str = field(repr=False)


@dataclass(frozen=True)
class SignedAssertion:
    """Service identity that signs its own JWT bearer assertions

    Attributes:
        issuer_email: Service account email, used as the ``iss`` claim
        private_key_pem: PEM-encoded RSA private key
    """
    issuer_email: str
    private_key_pem: str = field(repr=False)


CredentialMaterial = Union[ApiKey, RefreshableOAuth, SignedAssertion]


@dataclass(frozen=True)
class TokenGrant:
    """Result of one token endpoint exchange

    Attributes:
        access_token: Bearer token
        expires_in: Lifetime in seconds from the moment of issue
    """
    access_token: str = field(repr=False)
    expires_in: int


@dataclass(frozen=True)
class AuthContext:
    """Authorization to attach to one Resource Server request

    Exactly one of headers/params carries the credential.
    """
    headers: Dict[str, str] = field(default_factory=dict, repr=False)
    params: Dict[str, str] = field(default_factory=dict, repr=False)
