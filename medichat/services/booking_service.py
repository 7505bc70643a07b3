import asyncio
import logging
from typing import Optional

from pydantic import BaseModel

from medichat.services import email_service, webhook_routing_service

logger = logging.getLogger(__name__)


class BookingResult(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    validation_error: bool = False


def _patient_notification(doctor_name: str, time_slot: str):
    subject = "Appointment Confirmation"
    body = f"Your appointment with {doctor_name} at {time_slot} has been confirmed."
    return subject, body


def _doctor_notification(patient_email: str, time_slot: str):
    subject = "New Appointment Booking"
    body = f"You have a new appointment at {time_slot} with patient {patient_email}."
    return subject, body


async def book_appointment(
    patient_email: Optional[str],
    doctor_email: Optional[str],
    doctor_name: Optional[str],
    time_slot: Optional[str],
    session_id: Optional[str] = None,
) -> BookingResult:
    """
    Confirm an appointment by notifying both the patient and the doctor.

    Both emails are sent concurrently; the booking fails if either one fails.
    A confirmed booking is also forwarded to the optional booking webhook.

    Returns:
        BookingResult. Never raises for delivery problems.
    """
    if not all([patient_email, doctor_email, doctor_name, time_slot]):
        logger.error(
            f"Missing booking fields: patient_email={patient_email}, doctor_email={doctor_email}, "
            f"doctor_name={doctor_name}, time_slot={time_slot}",
            extra={'session_id': session_id}
        )
        return BookingResult(success=False, error="Missing required fields", validation_error=True)

    patient_subject, patient_body = _patient_notification(doctor_name, time_slot)
    doctor_subject, doctor_body = _doctor_notification(patient_email, time_slot)

    results = await asyncio.gather(
        email_service.send_email(patient_email, patient_subject, patient_body),
        email_service.send_email(doctor_email, doctor_subject, doctor_body),
        return_exceptions=True,
    )
    failures = [r for r in results if isinstance(r, Exception)]
    if failures:
        logger.error(f"Error sending emails: {failures}", extra={'session_id': session_id})
        return BookingResult(success=False, error="Failed to send confirmation emails")

    logger.info(f"Appointment booked with {doctor_name} at {time_slot}", extra={'session_id': session_id})
    await webhook_routing_service.route_booking_via_webhook(
        {
            "patientEmail": patient_email,
            "doctorEmail": doctor_email,
            "doctorName": doctor_name,
            "timeSlot": time_slot,
        },
        session_id=session_id,
    )
    return BookingResult(success=True, message="Appointment booked successfully")
