"""Token endpoint exchanges: refresh-token grant and JWT-bearer grant"""

import logging
from typing import Any, Callable, Dict, Optional

import httpx

from errors import CredentialError
from settings import TOKEN_TIMEOUT, TOKEN_URI
from .jwt_utils import create_signed_assertion
from .models import RefreshableOAuth, SignedAssertion, TokenGrant

logger = logging.getLogger(__name__)

JWT_BEARER_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"


async def request_token(
    form: Dict[str, str],
    token_uri: str = TOKEN_URI,
    timeout: float = TOKEN_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TokenGrant:
    """POST a form-encoded grant to the token endpoint

    Args:
        form: Grant fields
        token_uri: Token endpoint URL
        timeout: Total timeout for the exchange
        transport: Optional httpx transport (tests)

    Returns:
        TokenGrant with the access token and its lifetime

    Raises:
        CredentialError: On transport failure, non-200 status or an unusable body
    """
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(
                token_uri,
                data=form,
                headers={"Accept": "application/json"},
            )
    except httpx.HTTPError as e:
        logger.error(f"Token request to {token_uri} failed: {e}")
        raise CredentialError(f"Token request failed: {e}")

    if response.status_code != 200:
        logger.error(f"Token exchange failed with status {response.status_code}: {response.text}")
        raise CredentialError(
            f"Token endpoint returned status {response.status_code}",
            status_code=response.status_code,
            body=response.text,
        )

    try:
        payload: Dict[str, Any] = response.json()
    except ValueError:
        raise CredentialError("Token endpoint returned a non-JSON body",
                              status_code=response.status_code, body=response.text)

    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not access_token:
        raise CredentialError("Token response missing access_token",
                              status_code=response.status_code, body=response.text)

    try:
        expires_in = int(payload.get("expires_in", 3600))
    except (TypeError, ValueError):
        expires_in = 3600

    logger.info(f"Obtained access token (expires in {expires_in}s)")
    return TokenGrant(access_token=access_token, expires_in=expires_in)


async def refresh_access_token(
    material: RefreshableOAuth,
    token_uri: str = TOKEN_URI,
    timeout: float = TOKEN_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TokenGrant:
    """Exchange a refresh token for a new access token"""
    logger.info("Refreshing OAuth access token...")
    return await request_token(
        {
            "client_id": material.client_id,
            "client_secret": material.client_secret,
            "refresh_token": material.refresh_token,
            "grant_type": "refresh_token",
        },
        token_uri=token_uri,
        timeout=timeout,
        transport=transport,
    )


async def exchange_signed_assertion(
    material: SignedAssertion,
    token_uri: str = TOKEN_URI,
    timeout: float = TOKEN_TIMEOUT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    clock: Optional[Callable[[], float]] = None,
) -> TokenGrant:
    """Mint a JWT assertion for the service identity and exchange it"""
    logger.info(f"Exchanging signed assertion for {material.issuer_email}...")
    assertion = create_signed_assertion(
        material.issuer_email,
        material.private_key_pem,
        audience=token_uri,
        clock=clock,
    )
    return await request_token(
        {
            "grant_type": JWT_BEARER_GRANT_TYPE,
            "assertion": assertion,
        },
        token_uri=token_uri,
        timeout=timeout,
        transport=transport,
    )
