"""Response envelope returned by successful API calls."""

import json
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class RawText:
    """Response body that was empty or not valid JSON."""

    text: str


@dataclass(frozen=True)
class Decoded:
    """Response body parsed as JSON."""

    value: Any


ResponseBody = Union[RawText, Decoded]


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"Invalid JSON constant: {name}")


def decode_body(text: str) -> ResponseBody:
    """Decode a response body as JSON, keeping the raw text if it doesn't parse."""
    if not text:
        return RawText(text)
    try:
        return Decoded(json.loads(text, parse_constant=_reject_constant))
    except ValueError:
        return RawText(text)


@dataclass(frozen=True)
class ApiResponse:
    """Success envelope: decoded (or raw) body plus HTTP status code."""

    body: ResponseBody
    status_code: int

    @property
    def data(self) -> Any:
        """Body as plain Python data: the decoded JSON value or the raw text."""
        if isinstance(self.body, Decoded):
            return self.body.value
        return self.body.text
