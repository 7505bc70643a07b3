from unittest.mock import AsyncMock, patch

import pytest

from medichat.services import booking_service
from medichat.services.email_service import EmailDeliveryError


@pytest.mark.asyncio
async def test_book_appointment_sends_both_notifications():
    with patch("medichat.services.booking_service.email_service.send_email", new=AsyncMock()) as send, \
            patch("medichat.services.booking_service.webhook_routing_service.route_booking_via_webhook",
                  new=AsyncMock()) as webhook:
        result = await booking_service.book_appointment(
            "john@example.com", "somasekar@example.com", "Dr. Somasekar", "10:00 AM"
        )

    assert result.success is True
    assert result.message == "Appointment booked successfully"
    recipients = [call.args[0] for call in send.await_args_list]
    assert recipients == ["john@example.com", "somasekar@example.com"]
    assert "Dr. Somasekar at 10:00 AM" in send.await_args_list[0].args[2]
    assert "patient john@example.com" in send.await_args_list[1].args[2]
    webhook.assert_awaited_once()


@pytest.mark.asyncio
async def test_book_appointment_fails_if_either_notification_fails():
    send = AsyncMock(side_effect=[None, EmailDeliveryError("mailbox full")])
    with patch("medichat.services.booking_service.email_service.send_email", new=send), \
            patch("medichat.services.booking_service.webhook_routing_service.route_booking_via_webhook",
                  new=AsyncMock()) as webhook:
        result = await booking_service.book_appointment(
            "john@example.com", "somasekar@example.com", "Dr. Somasekar", "10:00 AM"
        )

    assert result.success is False
    assert result.error == "Failed to send confirmation emails"
    assert result.validation_error is False
    assert send.await_count == 2
    webhook.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["patient_email", "doctor_email", "doctor_name", "time_slot"])
async def test_book_appointment_requires_all_fields(missing):
    fields = dict(
        patient_email="john@example.com",
        doctor_email="somasekar@example.com",
        doctor_name="Dr. Somasekar",
        time_slot="10:00 AM",
    )
    fields[missing] = None
    with patch("medichat.services.booking_service.email_service.send_email", new=AsyncMock()) as send:
        result = await booking_service.book_appointment(**fields)

    assert result.success is False
    assert result.validation_error is True
    assert result.error == "Missing required fields"
    send.assert_not_awaited()
