"""Vertex AI Gemini API integration package"""

from .payloads import build_endpoint_url, build_request_body
from .api_client import make_gemini_request

__all__ = [
    "build_endpoint_url",
    "build_request_body",
    "make_gemini_request",
]
