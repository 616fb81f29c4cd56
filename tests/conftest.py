"""
Shared fixtures for the gear generator test suite.

Provides:
- A fixed, manually advanced clock for the token cache
- A throwaway RSA key for signed assertions
- httpx mock transports that record what was sent
"""
import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List
from urllib.parse import parse_qs

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

# Ensure project root is on sys.path so the top-level packages are importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


class FixedClock:
    """Callable clock that only moves when told to"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def form_of(request: httpx.Request) -> Dict[str, str]:
    """Decode a form-encoded request body into a flat dict"""
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


def gemini_envelope(text: str) -> Dict[str, Any]:
    """generateContent response carrying one text part"""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": text}]}, "finishReason": "STOP"}
        ],
        "modelVersion": "gemini-2.0-flash-001",
    }


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


@pytest.fixture
def token_transport():
    """Token endpoint that always grants 'ya29.test-token' for an hour"""
    return RecordingTransport(
        lambda request: httpx.Response(200, json={
            "access_token": "ya29.test-token",
            "expires_in": 3600,
            "token_type": "Bearer",
        })
    )


@pytest.fixture
def weapon_item() -> Dict[str, Any]:
    return {
        "Name": "Frostbrand",
        "Type": "Weapon",
        "WeaponType": "Greatsword",
        "Handedness": "Two-Handed",
        "Rarity": "Rare",
        "DamageDice": "2d6",
        "DamageType": "Slashing",
        "Properties": ["Heavy", "Two-Handed"],
        "Weight": "6 lbs.",
        "Cost": "1,500 gp",
        "Enchantment": "Deals an extra 1d6 cold damage on a hit.",
        "Description": "Rime creeps along the fuller of this blade.",
    }


@pytest.fixture
def gemini_transport(weapon_item):
    """Resource server answering with the weapon wrapped in commentary"""
    text = "Here is your item:\n```json\n" + json.dumps(weapon_item) + "\n```\nEnjoy!"
    return RecordingTransport(lambda request: httpx.Response(200, json=gemini_envelope(text)))
