"""
Self-signed JWT bearer assertions (RS256) for the service identity flow
"""
import base64
import json
import time
from typing import Any, Callable, Dict, Optional

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from errors import CredentialError
from settings import ASSERTION_LIFETIME, TOKEN_SCOPE

JWT_HEADER = {"alg": "RS256", "typ": "JWT"}


def base64url_encode(data: bytes) -> str:
    """Base64url-encode without padding ('+' -> '-', '/' -> '_', '=' stripped)"""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def base64url_decode(segment: str) -> bytes:
    """Decode a base64url segment, restoring the stripped padding"""
    padding_needed = 4 - (len(segment) % 4)
    if padding_needed != 4:
        segment += "=" * padding_needed
    return base64.urlsafe_b64decode(segment)


def _encode_segment(obj: Dict[str, Any]) -> str:
    return base64url_encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def load_private_key(private_key_pem: str) -> rsa.RSAPrivateKey:
    """Load an RSA private key from PEM text

    Keys copied out of .env files often carry literal ``\\n`` sequences;
    those are turned back into newlines first.

    Raises:
        CredentialError: If the key cannot be loaded or is not RSA
    """
    pem = private_key_pem.replace("\\n", "\n").strip()
    try:
        key = serialization.load_pem_private_key(pem.encode("utf-8"), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise CredentialError(f"Unable to load service account private key: {e}")

    if not isinstance(key, rsa.RSAPrivateKey):
        raise CredentialError("Service account private key is not an RSA key")
    return key


def build_claims(issuer_email: str, audience: str, now: int) -> Dict[str, Any]:
    """Claims for a one-hour cloud-platform assertion"""
    return {
        "iss": issuer_email,
        "scope": TOKEN_SCOPE,
        "aud": audience,
        "iat": now,
        "exp": now + ASSERTION_LIFETIME,
    }


def create_signed_assertion(
    issuer_email: str,
    private_key_pem: str,
    audience: str,
    clock: Optional[Callable[[], float]] = None,
) -> str:
    """
    Mint an RS256 JWT assertion: header.payload.signature

    Args:
        issuer_email: Service account email (``iss``)
        private_key_pem: PEM-encoded RSA private key
        audience: Token endpoint URL (``aud``)
        clock: Optional time source returning epoch seconds

    Returns:
        Compact serialized JWT

    Raises:
        CredentialError: If the key cannot be loaded or signing fails
    """
    now = int((clock or time.time)())
    key = load_private_key(private_key_pem)

    signing_input = f"{_encode_segment(JWT_HEADER)}.{_encode_segment(build_claims(issuer_email, audience, now))}"
    try:
        signature = key.sign(signing_input.encode("ascii"), padding.PKCS1v15(), hashes.SHA256())
    except (ValueError, TypeError) as e:
        raise CredentialError(f"Failed to sign JWT assertion: {e}")

    return f"{signing_input}.{base64url_encode(signature)}"


def decode_jwt(token: str) -> Optional[Dict[str, Any]]:
    """
    Decode a JWT payload without verifying its signature.

    Args:
        token: Compact serialized JWT

    Returns:
        Decoded payload as dictionary, or None if the token is not a JWT
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None

    try:
        return json.loads(base64url_decode(parts[1]).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
