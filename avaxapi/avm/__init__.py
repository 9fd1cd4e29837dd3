"""AVM chain API client."""

from avaxapi.avm.client import AVMClient
from avaxapi.avm.models import Balance, Holder, Index, Owners, SendOutput, Status

__all__ = ["AVMClient", "Balance", "Holder", "Index", "Owners", "SendOutput", "Status"]
