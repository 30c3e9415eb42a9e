"""HTTP clients for App Relay Service upstream targets."""

from services.app_relay_service.clients.upstream_client import UpstreamRelayClient

__all__ = ["UpstreamRelayClient"]
