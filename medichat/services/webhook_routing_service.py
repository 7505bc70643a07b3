import httpx
import logging
import datetime

from medichat.core import config

logger = logging.getLogger(__name__)

async def route_booking_via_webhook(booking: dict, session_id: str = None):
    """Forward a confirmed booking to BOOKING_WEBHOOK_URL, if one is configured."""
    webhook_url = config.BOOKING_WEBHOOK_URL
    if not webhook_url:
        logger.info("No booking webhook configured. Skipping webhook.", extra={'session_id': session_id})
        return

    payload = {
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "session_id": session_id,
        "patient_email": booking.get("patientEmail"),
        "doctor_name": booking.get("doctorName"),
        "doctor_email": booking.get("doctorEmail"),
        "time_slot": booking.get("timeSlot"),
    }

    logger.info(f"Sending booking to webhook: {webhook_url}", extra={'session_id': session_id})
    logger.debug(f"Webhook payload: {payload}", extra={'session_id': session_id})

    try:
        async with httpx.AsyncClient() as client_post:
            response = await client_post.post(webhook_url, json=payload, timeout=10.0)

            if response.status_code == 200:
                logger.info("Successfully sent booking to webhook.", extra={'session_id': session_id})
            else:
                logger.error(
                    f"Failed to send booking to webhook. Status: {response.status_code}, Response: {response.text}",
                    extra={'session_id': session_id}
                )
    except httpx.RequestError as e:
        logger.error(f"Error sending booking to webhook: {e}", extra={'session_id': session_id})
    except Exception as e:
        logger.error(f"Error routing booking webhook: {e}", extra={'session_id': session_id})
