"""Error taxonomy for the authenticated generation pipeline

Every failure surfaces to the caller as one of these; none are retried.
"""

from typing import Any, Dict, Optional


class GenerationError(Exception):
    """Base class for pipeline failures"""

    kind = "GenerationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        """Structured error payload for the HTTP and CLI layers"""
        return {"error": self.kind, "message": self.message}


class CredentialError(GenerationError):
    """Acquiring a bearer credential failed (refresh, signing or configuration)

    Carries the token endpoint's status and body when one was received.
    """

    kind = "CredentialError"

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.status_code is not None:
            payload["status"] = self.status_code
        if self.body is not None:
            payload["body"] = self.body
        return payload


class TransportError(GenerationError):
    """No response was received from the Resource Server"""

    kind = "TransportError"


class UpstreamError(GenerationError):
    """The Resource Server answered with a non-2xx status"""

    kind = "UpstreamError"

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Resource server returned status {status_code}")
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["status"] = self.status_code
        payload["body"] = self.body
        return payload


class MalformedResponse(GenerationError):
    """A JSON object span was located but could not be parsed"""

    kind = "MalformedResponse"

    def __init__(self, message: str, fragment: Optional[str] = None):
        super().__init__(message)
        self.fragment = fragment
