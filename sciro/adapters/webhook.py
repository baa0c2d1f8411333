"""
Webhook Delivery Adapter (DeliveryPort implementation).

POSTs insight payloads as JSON to the configured endpoint.

Key behaviors:
- Fire-and-forget: each POST runs on its own daemon thread
- Non-2xx responses and network errors are logged as DeliveryError
- Never retried, never raised to the caller
- No timeout beyond the transport default
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import requests

from sciro.domain.errors import DeliveryError

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class WebhookDelivery:
    """
    Delivers payloads to an HTTP endpoint.

    Args:
        endpoint: Absolute URL receiving the POST
        session: Optional requests.Session (connection reuse, test doubles)
        background: Post on a daemon thread (False posts inline)
        debug: Log successful deliveries
    """

    def __init__(
        self,
        endpoint: str,
        *,
        session: requests.Session | None = None,
        background: bool = True,
        debug: bool = False,
    ) -> None:
        self.endpoint = endpoint
        self._session = session
        self._background = background
        self._debug = debug

    def deliver(self, payload: dict[str, Any]) -> None:
        if self._background:
            thread = threading.Thread(
                target=self.post,
                args=(payload,),
                name="sciro-webhook",
                daemon=True,
            )
            thread.start()
        else:
            self.post(payload)

    def post(self, payload: dict[str, Any]) -> bool:
        """
        POST one payload.

        Returns:
            True on a 2xx response, False otherwise
        """
        try:
            response = self._send(payload)
            if not response.ok:
                raise DeliveryError(
                    f"Webhook failed: {response.status_code}",
                    status=response.status_code,
                    body=_response_body(response),
                )
        except DeliveryError as e:
            logger.warning("%s %s", e, e.body)
            return False
        except requests.RequestException as e:
            logger.warning("%s", DeliveryError(f"Webhook error: {e}"))
            return False

        if self._debug:
            logger.info("Webhook sent (status=%s)", response.status_code)
        return True

    def _send(self, payload: dict[str, Any]) -> requests.Response:
        if self._session is not None:
            return self._session.post(self.endpoint, json=payload, headers=JSON_HEADERS)
        return requests.post(self.endpoint, json=payload, headers=JSON_HEADERS)
