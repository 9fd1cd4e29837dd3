"""avaxapi - JSON-RPC clients for Avalanche node APIs."""

__version__ = "0.1.0"
__logo__ = "🔺"

from avaxapi.avm import AVMClient
from avaxapi.health import HealthClient
from avaxapi.info import InfoClient
from avaxapi.rpc import EMPTY_PARAMS, EndpointRequester

__all__ = [
    "AVMClient",
    "EMPTY_PARAMS",
    "EndpointRequester",
    "HealthClient",
    "InfoClient",
    "__version__",
]
