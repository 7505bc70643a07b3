"""
Appointment Booking API Endpoint

Exposes the booking collaborator over HTTP: validates the four booking
fields and sends the patient and doctor notifications.
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from medichat.schemas.chat import BookingRequest
from medichat.services import booking_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/book-appointment")
async def book_appointment(request: BookingRequest):
    result = await booking_service.book_appointment(
        patient_email=request.patient_email,
        doctor_email=request.doctor_email,
        doctor_name=request.doctor_name,
        time_slot=request.time_slot,
    )

    if result.validation_error:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": result.error},
        )

    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": result.error},
        )

    return {"success": True, "message": result.message}
