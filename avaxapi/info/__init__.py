"""Node Info API client."""

from avaxapi.info.client import InfoClient
from avaxapi.info.models import Peer

__all__ = ["InfoClient", "Peer"]
