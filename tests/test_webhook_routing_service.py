import json

import httpx
import pytest

from medichat.core import config
from medichat.services import webhook_routing_service

BOOKING = {
    "patientEmail": "john@example.com",
    "doctorEmail": "somasekar@example.com",
    "doctorName": "Dr. Somasekar",
    "timeSlot": "10:00 AM",
}


def _use_transport(monkeypatch, handler):
    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        webhook_routing_service.httpx, "AsyncClient",
        lambda: real_client(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_webhook_skipped_without_url(monkeypatch):
    monkeypatch.setattr(config, "BOOKING_WEBHOOK_URL", None)
    calls = []
    _use_transport(monkeypatch, lambda request: calls.append(request) or httpx.Response(200))

    await webhook_routing_service.route_booking_via_webhook(BOOKING, session_id="s1")

    assert calls == []


@pytest.mark.asyncio
async def test_webhook_posts_booking_payload(monkeypatch):
    monkeypatch.setattr(config, "BOOKING_WEBHOOK_URL", "https://hooks.example.com/bookings")
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"ok": True})

    _use_transport(monkeypatch, handler)

    await webhook_routing_service.route_booking_via_webhook(BOOKING, session_id="s1")

    assert len(calls) == 1
    payload = json.loads(calls[0].content)
    assert payload["session_id"] == "s1"
    assert payload["doctor_name"] == "Dr. Somasekar"
    assert payload["time_slot"] == "10:00 AM"


@pytest.mark.asyncio
async def test_webhook_transport_errors_are_not_raised(monkeypatch):
    monkeypatch.setattr(config, "BOOKING_WEBHOOK_URL", "https://hooks.example.com/bookings")

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    _use_transport(monkeypatch, handler)

    await webhook_routing_service.route_booking_via_webhook(BOOKING)
