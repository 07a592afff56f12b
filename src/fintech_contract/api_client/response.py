"""
Generic API response wrapper for API clients.

Provides consistent interface regardless of underlying HTTP library.
"""
import json as jsonlib
from dataclasses import dataclass, field
from typing import Any, Dict

from .exceptions import ResponseParseError

_UNPARSED = object()


@dataclass
class APIResponse:
    """Unified response wrapper for both in-memory and HTTP transports.

    The body is kept as text and only parsed when a caller asks for JSON,
    so HTML fragments and empty bodies never fail on construction.
    """
    status_code: int
    headers: Dict[str, str]
    text: str = ""
    reason: str = ""
    _parsed: Any = field(default=_UNPARSED, init=False, repr=False, compare=False)

    @classmethod
    def from_transport(cls, raw) -> "APIResponse":
        """Build an envelope from a requests or httpx response object."""
        # requests exposes .reason, httpx exposes .reason_phrase
        reason = getattr(raw, 'reason', None) or getattr(raw, 'reason_phrase', '') or ''
        return cls(
            status_code=raw.status_code,
            headers=dict(raw.headers),
            text=raw.text,
            reason=reason,
        )

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        """Parse the body as JSON, caching the result.

        Raises:
            ResponseParseError: if the body is not valid JSON
        """
        if self._parsed is _UNPARSED:
            try:
                self._parsed = jsonlib.loads(self.text)
            except ValueError:
                raise ResponseParseError(self.status_code, self.text[:200])
        return self._parsed

    @property
    def data(self) -> Any:
        """Return the parsed JSON body, or the raw text if it is not JSON."""
        try:
            return self.json()
        except ResponseParseError:
            return self.text
