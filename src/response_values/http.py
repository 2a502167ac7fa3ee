"""
HTTP collaborator types for response_values.

Lightweight request/response records handed to the extractor by the
connector. No I/O happens here: responses are already in memory.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import requests


@dataclass
class Request:
    """The last request made by the connector."""
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    payload: Optional[str] = None

    @classmethod
    def from_requests(cls, prepared: requests.PreparedRequest) -> "Request":
        """Build a Request from a prepared ``requests`` request."""
        body = prepared.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        return cls(
            url=prepared.url or "",
            method=prepared.method or "GET",
            headers=dict(prepared.headers or {}),
            payload=body,
        )


@dataclass
class Response:
    """The last response received by the connector."""
    status_code: int = 200
    payload: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def get_payload(self) -> Optional[str]:
        return self.payload

    @classmethod
    def from_requests(cls, response: requests.Response) -> "Response":
        """Build a Response from an already received ``requests`` response."""
        return cls(
            status_code=response.status_code,
            payload=response.text,
            headers=dict(response.headers),
        )
