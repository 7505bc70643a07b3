from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class ChatRequest(BaseModel):
    session_id: Optional[str] = None
    message: str = Field(..., min_length=1)

class ButtonPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    css_class: str = Field(..., alias="class")
    action: str
    args: List[str] = Field(default_factory=list)
    message: str

class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str
    reply: str
    buttons: List[ButtonPayload] = Field(default_factory=list)
    disable_input: bool = Field(False, alias="disableInput")
    hide_input: bool = Field(False, alias="hideInput")
    is_medical_inquiry: bool = Field(False, alias="isMedicalInquiry")
    silent: Optional[bool] = None

class BookingRequest(BaseModel):
    patient_email: Optional[str] = Field(None, alias="patientEmail")
    doctor_email: Optional[str] = Field(None, alias="doctorEmail")
    doctor_name: Optional[str] = Field(None, alias="doctorName")
    time_slot: Optional[str] = Field(None, alias="timeSlot")
