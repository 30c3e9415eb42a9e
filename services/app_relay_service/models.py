"""Per-request value types for App Relay Service."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, ConfigDict

# Decoded client body: a JSON value, or the raw text when it is not valid JSON
ParsedPayload = Union[dict[str, Any], list[Any], str, int, float, bool, None]


class RelayOutcome(BaseModel):
    """What the caller receives after a completed upstream round trip."""

    status_code: int
    content_type: str
    body: str

    model_config = ConfigDict(frozen=True)


class StaticPage(BaseModel):
    """The rendered HTML page, or None when index.html is missing."""

    html: str | None
    source: str

    model_config = ConfigDict(frozen=True)

    @property
    def available(self) -> bool:
        return self.html is not None
