"""Client for the node Health API (``/ext/health``)."""

from __future__ import annotations

import time
from typing import Any, Callable

import httpx
from loguru import logger
from pydantic import Field

from avaxapi.models import WireModel
from avaxapi.rpc import DEFAULT_REQUEST_TIMEOUT, EMPTY_PARAMS, EndpointRequester
from avaxapi.utils.exceptions import RPCError

HEALTH_PATH = "/ext/health"
HEALTH_NAMESPACE = "health"


class LivenessReply(WireModel):
    checks: dict[str, Any] = Field(default_factory=dict)
    healthy: bool


class HealthClient:
    def __init__(
        self,
        uri: str,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        *,
        client: httpx.Client | None = None,
    ):
        self.requester = EndpointRequester(uri, HEALTH_PATH, HEALTH_NAMESPACE, request_timeout, client=client)

    def close(self) -> None:
        self.requester.close()

    def get_liveness(self) -> LivenessReply:
        return self.requester.send_request("getLiveness", EMPTY_PARAMS, LivenessReply)

    def await_healthy(
        self,
        checks: int,
        interval: float,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> bool:
        """
        Poll getLiveness up to ``checks`` times, sleeping ``interval`` seconds
        before each call. Returns True on the first healthy reply.

        Failed calls count as "not healthy yet": an unreachable node yields
        False after the budget runs out, never the last error.
        """
        for attempt in range(1, checks + 1):
            sleep(interval)
            try:
                reply = self.get_liveness()
            except RPCError as exc:
                logger.debug(f"liveness check {attempt}/{checks} failed: {exc}")
                continue
            if reply.healthy:
                logger.debug(f"node healthy after {attempt} check(s)")
                return True
            logger.debug(f"liveness check {attempt}/{checks}: not healthy")
        return False
