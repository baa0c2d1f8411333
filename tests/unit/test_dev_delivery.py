"""
Unit tests for DevDelivery.

Tests cover:
1. Payloads are recorded, not sent
2. Debug logging marks deliveries as simulated
3. Test helper methods
"""

import logging

import pytest

from sciro.adapters.dev_delivery import DevDelivery


class TestDevDelivery:
    def test_records_payloads(self) -> None:
        delivery = DevDelivery()
        delivery.deliver({"state": "ok"})
        delivery.deliver({"state": "struggling"})

        assert delivery.count == 2
        assert delivery.get_last() == {"state": "struggling"}

    def test_get_last_empty(self) -> None:
        assert DevDelivery().get_last() is None

    def test_clear(self) -> None:
        delivery = DevDelivery()
        delivery.deliver({"state": "ok"})
        delivery.clear()
        assert delivery.count == 0

    def test_bounded_history(self) -> None:
        delivery = DevDelivery(max_kept=2)
        for i in range(5):
            delivery.deliver({"n": i})
        assert [p["n"] for p in delivery.delivered] == [3, 4]

    def test_debug_logs_simulated_post(self, caplog: pytest.LogCaptureFixture) -> None:
        delivery = DevDelivery(debug=True)
        with caplog.at_level(logging.INFO):
            delivery.deliver({"state": "confused", "confidence": 0.91})
        assert "(SIMULATED)" in caplog.text
        assert "confused" in caplog.text

    def test_silent_without_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO):
            DevDelivery().deliver({"state": "ok"})
        assert "(SIMULATED)" not in caplog.text
