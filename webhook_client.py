from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
import logging

import httpx

from exceptions import ConfigurationError, WebhookDeliveryError
from model import PushNotificationConfig, TaskResult

logger = logging.getLogger(__name__)


class WebhookClient:
    """Delivers task results to the caller's push-notification URL."""

    def __init__(self, timeout: Optional[float] = None, http_client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._http_client = http_client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                yield client

    async def deliver(self, push_config: PushNotificationConfig, payload: TaskResult) -> None:
        """
        POST the task result with the caller's bearer token.

        Raises:
            ConfigurationError: url or token is missing
            WebhookDeliveryError: transport failure or a non-2xx response
        """
        if not push_config.url or not push_config.token:
            raise ConfigurationError("Missing pushNotificationConfig url or token")

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {push_config.token}",
        }
        try:
            async with self._session() as client:
                response = await client.post(push_config.url, json=payload.to_wire(), headers=headers)
        except httpx.HTTPError as e:
            raise WebhookDeliveryError(push_config.url, str(e) or e.__class__.__name__) from e

        if response.is_error:
            raise WebhookDeliveryError(push_config.url, f"HTTP {response.status_code}", response.status_code)

        logger.info(f"Webhook push for task {payload.result.id} ({payload.result.status.state}) successful")
