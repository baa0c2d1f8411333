"""
Unit tests for WebhookDelivery.

Tests verify:
- Payloads are POSTed as JSON to the endpoint
- Non-2xx responses and network errors are logged, never raised
- Background delivery runs off the caller's thread
"""

import logging
import threading
from unittest.mock import MagicMock, patch

import pytest
import requests

from sciro.adapters.webhook import JSON_HEADERS, WebhookDelivery

ENDPOINT = "https://api.example.com/insights"
PAYLOAD = {"event_type": "insight", "state": "struggling", "confidence": 0.6}


def _response(status: int, body: object = None) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.ok = 200 <= status < 300
    if body is None:
        response.json.side_effect = ValueError("no json")
        response.text = ""
    else:
        response.json.return_value = body
    return response


class TestPost:
    def test_posts_json(self) -> None:
        session = MagicMock()
        session.post.return_value = _response(204)
        delivery = WebhookDelivery(ENDPOINT, session=session, background=False)

        assert delivery.post(PAYLOAD) is True
        session.post.assert_called_once_with(ENDPOINT, json=PAYLOAD, headers=JSON_HEADERS)

    def test_uses_requests_without_session(self) -> None:
        with patch("sciro.adapters.webhook.requests.post", return_value=_response(200)) as post:
            assert WebhookDelivery(ENDPOINT, background=False).post(PAYLOAD) is True
        post.assert_called_once_with(ENDPOINT, json=PAYLOAD, headers=JSON_HEADERS)

    def test_non_2xx_logged_with_body(self, caplog: pytest.LogCaptureFixture) -> None:
        session = MagicMock()
        session.post.return_value = _response(500, {"error": "boom"})
        delivery = WebhookDelivery(ENDPOINT, session=session, background=False)

        with caplog.at_level(logging.WARNING):
            assert delivery.post(PAYLOAD) is False
        assert "Webhook failed: 500" in caplog.text
        assert "boom" in caplog.text

    def test_network_error_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("refused")
        delivery = WebhookDelivery(ENDPOINT, session=session, background=False)

        with caplog.at_level(logging.WARNING):
            assert delivery.post(PAYLOAD) is False
        assert "Webhook error" in caplog.text

    def test_debug_logs_success(self, caplog: pytest.LogCaptureFixture) -> None:
        session = MagicMock()
        session.post.return_value = _response(201)
        delivery = WebhookDelivery(ENDPOINT, session=session, background=False, debug=True)

        with caplog.at_level(logging.INFO):
            delivery.post(PAYLOAD)
        assert "Webhook sent (status=201)" in caplog.text


class TestDeliver:
    def test_inline_delivery(self) -> None:
        session = MagicMock()
        session.post.return_value = _response(200)
        WebhookDelivery(ENDPOINT, session=session, background=False).deliver(PAYLOAD)
        session.post.assert_called_once()

    def test_background_delivery(self) -> None:
        done = threading.Event()
        caller = threading.current_thread()
        seen: list[threading.Thread] = []

        def post(*args, **kwargs):
            seen.append(threading.current_thread())
            done.set()
            return _response(200)

        session = MagicMock()
        session.post.side_effect = post
        WebhookDelivery(ENDPOINT, session=session).deliver(PAYLOAD)

        assert done.wait(timeout=2.0)
        assert seen[0] is not caller

    def test_failure_never_raises(self) -> None:
        session = MagicMock()
        session.post.side_effect = requests.Timeout("slow")
        WebhookDelivery(ENDPOINT, session=session, background=False).deliver(PAYLOAD)
