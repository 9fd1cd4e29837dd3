"""Node Health API client."""

from avaxapi.health.client import HealthClient, LivenessReply

__all__ = ["HealthClient", "LivenessReply"]
