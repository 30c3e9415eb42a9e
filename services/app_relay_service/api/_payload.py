"""Client body decoding for the relay routes."""

from __future__ import annotations

import json

from services.app_relay_service.models import ParsedPayload


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def parse_client_payload(raw: bytes) -> ParsedPayload:
    """Decode a client body for forwarding.

    An empty body becomes an empty mapping. Text that does not parse as JSON
    is returned unchanged so the relay forwards it verbatim; malformed JSON
    is never rejected here. Nesting deeper than the decoder can recurse is
    treated the same way.
    """
    text = raw.decode("utf-8", errors="replace")
    if not text:
        return {}
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return text
