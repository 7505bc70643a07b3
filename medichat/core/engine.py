"""
Dialogue Engine

Stage-indexed state machine behind the chat widget:

    FRESH -> NAME_PROMPT -> AWAITING_NAME -> AWAITING_EMAIL -> AWAITING_INTENT
          -> SPECIALTY -> DOCTOR -> TIME_SLOT -> CONFIRMED
    AWAITING_INTENT -> MEDICAL_INQUIRY (free-text Q&A, returns to AWAITING_INTENT)

Message handling order is fixed:
1. ``start`` / ``end`` reset the conversation (``end`` answers silently).
2. Guards, in order: greeting, then appointment intent. They override the
   stage logic for free text only, never for control or button tokens.
3. The handler of the current stage.

The engine owns no I/O. Booking and medical answers come from injected
collaborators, and every path returns a well-formed EngineReply.
"""

import logging
from typing import Awaitable, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from medichat.core import agent
from medichat.core.actions import (
    Action,
    ActionKind,
    Button,
    MalformedActionError,
    doctor_buttons,
    intent_buttons,
    is_action_token,
    parse_action,
    return_back_button,
    specialty_buttons,
    time_slot_buttons,
)
from medichat.core.classifiers import (
    is_appointment_related,
    is_greeting,
    is_medical_related,
    is_valid_email,
)
from medichat.core.reference_data import find_doctor, find_specialty, find_time_slot
from medichat.core.state_manager import ConversationState, Stage
from medichat.services import booking_service
from medichat.services.booking_service import BookingResult

logger = logging.getLogger(__name__)

START = "start"
END = "end"
RETURN_BACK = ActionKind.RETURN_BACK.value
MEDICAL_INQUIRY = ActionKind.MEDICAL_INQUIRY.value

INTENT_QUESTION = "Do you want to book an appointment or ask a medical-related question?"
SPECIALTY_PROMPT = "Please select a specialty or return back:"
NAME_PROMPT = "May I know your name?"
MEDICAL_HINT = (
    "Hello! I'm here to help with your medical questions. "
    "Please ask something like 'What causes leg pain?' or select 'Return Back'."
)

Booker = Callable[..., Awaitable[BookingResult]]
Answerer = Callable[[str], Awaitable[str]]


class EngineReply(BaseModel):
    reply: str = ""
    buttons: List[Button] = Field(default_factory=list)
    disable_input: bool = False
    hide_input: bool = False
    is_medical_inquiry: bool = False
    silent: bool = False


def _email_prompt(name: Optional[str]) -> str:
    return f"Hi {name}! Can you please send your email ID for communication?"


def _doctor_prompt(specialty: Optional[str]) -> str:
    return f"Please select a doctor for {specialty} or return back:"


def _time_prompt(doctor: Optional[str]) -> str:
    return f"Please select a time slot for {doctor} or return back:"


class DialogueEngine:
    """
    Computes the next reply for one conversation.

    Args:
        booker: async callable(patient_email, doctor_email, doctor_name, time_slot)
            returning a BookingResult
        answerer: async callable(question) returning the answer text
    """

    def __init__(self, booker: Optional[Booker] = None, answerer: Optional[Answerer] = None):
        self.booker = booker or booking_service.book_appointment
        self.answerer = answerer or agent.answer_medical_question

        self.guards: List[Tuple[Callable[[str], bool], Callable]] = [
            (is_greeting, self._on_greeting),
            (is_appointment_related, self._on_appointment_intent),
        ]
        self.stage_handlers: Dict[Stage, Callable] = {
            Stage.FRESH: self._on_fresh,
            Stage.NAME_PROMPT: self._on_name_prompt,
            Stage.AWAITING_NAME: self._on_name,
            Stage.AWAITING_EMAIL: self._on_email,
            Stage.AWAITING_INTENT: self._on_intent,
            Stage.SPECIALTY: self._on_specialty,
            Stage.DOCTOR: self._on_doctor,
            Stage.TIME_SLOT: self._on_time_slot,
            Stage.CONFIRMED: self._on_confirmed,
            Stage.MEDICAL_INQUIRY: self._on_medical_inquiry,
        }

    async def handle(self, state: ConversationState, message: str, session_id: Optional[str] = None) -> EngineReply:
        log_extra = {'session_id': session_id, 'stage': int(state.stage)}
        logger.info(f"Received message: {message!r}", extra=log_extra)

        if message in (START, END):
            state.reset()
            logger.info("Conversation reset", extra=log_extra)
            if message == END:
                return EngineReply(silent=True)

        try:
            if message == START:
                result = self._on_start(state)
            else:
                result = await self._dispatch(state, message)
        except Exception as e:
            logger.error(f"Server error in dialogue engine: {e}", extra=log_extra, exc_info=True)
            state.stage = Stage.AWAITING_INTENT
            state.is_medical_inquiry = False
            result = EngineReply(
                reply="Server error. Please try again.",
                buttons=[return_back_button()],
                disable_input=True,
                hide_input=True,
            )

        result.is_medical_inquiry = state.is_medical_inquiry
        logger.info(
            f"Sending reply at stage {int(state.stage)}: {[b.text for b in result.buttons]}",
            extra={'session_id': session_id, 'stage': int(state.stage)}
        )
        return result

    async def _dispatch(self, state: ConversationState, message: str) -> EngineReply:
        if message != RETURN_BACK and not is_action_token(message):
            for applies, guard in self.guards:
                if applies(message):
                    logger.info(f"Guard {guard.__name__} matched")
                    return guard(state)

        handler = self.stage_handlers.get(state.stage, self._on_unknown_stage)
        return await handler(state, message)

    # =========================================================================
    # Shared screens
    # =========================================================================

    def _intent_screen(self, state: ConversationState, reply: str = INTENT_QUESTION) -> EngineReply:
        state.stage = Stage.AWAITING_INTENT
        state.is_medical_inquiry = False
        return EngineReply(reply=reply, buttons=intent_buttons(), hide_input=True)

    def _specialty_screen(self, state: ConversationState, reply: str = SPECIALTY_PROMPT) -> EngineReply:
        state.stage = Stage.SPECIALTY
        return EngineReply(reply=reply, buttons=specialty_buttons(), disable_input=True, hide_input=True)

    def _doctor_screen(self, state: ConversationState, reply: Optional[str] = None) -> EngineReply:
        specialty = state.selected_specialty
        if specialty is None:
            raise RuntimeError("Doctor selection reached without a selected specialty")
        state.stage = Stage.DOCTOR
        return EngineReply(
            reply=reply or _doctor_prompt(specialty),
            buttons=doctor_buttons(specialty),
            disable_input=True,
            hide_input=True,
        )

    def _time_screen(self, state: ConversationState, reply: Optional[str] = None) -> EngineReply:
        state.stage = Stage.TIME_SLOT
        return EngineReply(
            reply=reply or _time_prompt(state.selected_doctor),
            buttons=time_slot_buttons(state.selected_doctor, state.selected_specialty),
            disable_input=True,
            hide_input=True,
        )

    def _medical_screen(self, state: ConversationState, reply: str) -> EngineReply:
        state.stage = Stage.MEDICAL_INQUIRY
        state.is_medical_inquiry = True
        return EngineReply(reply=reply, buttons=[return_back_button()])

    # =========================================================================
    # Start and guards
    # =========================================================================

    def _on_start(self, state: ConversationState) -> EngineReply:
        # A fresh widget walks FRESH -> NAME_PROMPT -> AWAITING_NAME in one step
        state.stage = Stage.AWAITING_NAME
        return EngineReply(reply=f"Hello! How can I assist you today? {NAME_PROMPT}")

    def _on_greeting(self, state: ConversationState) -> EngineReply:
        stage = state.stage
        if stage in (Stage.FRESH, Stage.NAME_PROMPT):
            state.stage = Stage.AWAITING_NAME
            return EngineReply(reply=f"Hi there! {NAME_PROMPT}")
        if stage == Stage.AWAITING_NAME:
            return EngineReply(reply="Hello! Please provide your name.")
        if stage == Stage.AWAITING_EMAIL:
            return EngineReply(reply=f"Hi {state.user_name}! Please share your email ID.")
        if stage == Stage.AWAITING_INTENT:
            return self._intent_screen(state, f"Greetings! {INTENT_QUESTION}")
        if stage == Stage.SPECIALTY:
            return self._specialty_screen(state, "Hi! Please select a specialty or return back:")
        if stage == Stage.DOCTOR:
            return self._doctor_screen(
                state, f"Hello! Please select a doctor for {state.selected_specialty} or return back:"
            )
        if stage == Stage.TIME_SLOT:
            return self._time_screen(
                state, f"Hi! Please select a time slot for {state.selected_doctor} or return back:"
            )
        if stage == Stage.CONFIRMED:
            return EngineReply(
                reply="Hello! Your appointment is confirmed. To book another or ask a question, please start over.",
                disable_input=True,
                hide_input=True,
            )
        return self._medical_screen(state, MEDICAL_HINT)

    def _on_appointment_intent(self, state: ConversationState) -> EngineReply:
        if not state.user_name:
            state.stage = Stage.AWAITING_NAME
            return EngineReply(reply=NAME_PROMPT)
        if not state.user_email:
            state.stage = Stage.AWAITING_EMAIL
            return EngineReply(reply=_email_prompt(state.user_name))
        state.is_medical_inquiry = False
        return self._specialty_screen(state)

    # =========================================================================
    # Stage handlers
    # =========================================================================

    async def _on_fresh(self, state: ConversationState, message: str) -> EngineReply:
        state.stage = Stage.NAME_PROMPT
        return EngineReply(reply="How can I assist you today?")

    async def _on_name_prompt(self, state: ConversationState, message: str) -> EngineReply:
        state.stage = Stage.AWAITING_NAME
        return EngineReply(reply=NAME_PROMPT)

    async def _on_name(self, state: ConversationState, message: str) -> EngineReply:
        name = message.strip()
        if not name:
            return EngineReply(reply="Please provide your name.")
        state.user_name = name
        state.stage = Stage.AWAITING_EMAIL
        return EngineReply(reply=_email_prompt(name))

    async def _on_email(self, state: ConversationState, message: str) -> EngineReply:
        email = message.strip()
        if not is_valid_email(email):
            return EngineReply(reply="Invalid email ID, please try again.")
        state.user_email = email
        return self._intent_screen(
            state, f"Thank you for sharing the details. {INTENT_QUESTION}"
        )

    async def _on_intent(self, state: ConversationState, message: str) -> EngineReply:
        answer = message.strip().lower()
        if answer == "yes":
            state.is_medical_inquiry = False
            return self._specialty_screen(state)
        if answer == "no":
            # Soft-terminal: input hidden, no buttons, only a reset or guard leaves it
            state.stage = Stage.SPECIALTY
            state.is_medical_inquiry = False
            return EngineReply(reply="Thank you so much for visiting the website.", hide_input=True)
        if message == MEDICAL_INQUIRY:
            return self._medical_screen(state, "Please ask your medical-related question or return back.")
        if message == RETURN_BACK:
            return self._intent_screen(state)
        return self._intent_screen(state, "Please respond with 'Yes', 'No', or 'Ask Medical Related'.")

    async def _on_specialty(self, state: ConversationState, message: str) -> EngineReply:
        action = self._parse(message)
        if action is not None and action.kind == ActionKind.SELECT_SPECIALTY:
            specialty = find_specialty(action.args[0])
            if specialty is None:
                logger.warning(f"Invalid specialty selected: {action.args[0]!r}")
                return self._specialty_screen(state, "Invalid specialty selected. Please try again.")
            state.selected_specialty = specialty
            return self._doctor_screen(state)
        if message == RETURN_BACK:
            return self._intent_screen(state)
        return self._specialty_screen(state)

    async def _on_doctor(self, state: ConversationState, message: str) -> EngineReply:
        try:
            action = parse_action(message)
        except MalformedActionError as e:
            logger.warning(str(e))
            return self._doctor_screen(state, "Invalid doctor selection. Please try again.")

        if action is not None and action.kind == ActionKind.SELECT_DOCTOR:
            raw_doctor, raw_specialty = action.args
            specialty = state.selected_specialty or find_specialty(raw_specialty)
            doctor = find_doctor(specialty, raw_doctor)
            if doctor is None:
                logger.warning(f"Invalid doctor selected: {raw_doctor!r} for {specialty!r}")
                return self._doctor_screen(state, "Invalid doctor selected. Please try again.")
            state.selected_specialty = specialty
            state.selected_doctor = doctor.name
            return self._time_screen(state)
        if message == RETURN_BACK:
            return self._specialty_screen(state)
        return self._doctor_screen(state)

    async def _on_time_slot(self, state: ConversationState, message: str) -> EngineReply:
        try:
            action = parse_action(message)
        except MalformedActionError as e:
            logger.warning(str(e))
            return self._time_screen(state, "Invalid time slot selection. Please try again.")

        if action is not None and action.kind == ActionKind.SELECT_TIME:
            return await self._book(state, action)
        if message == RETURN_BACK:
            return self._doctor_screen(state)
        return self._time_screen(state)

    async def _book(self, state: ConversationState, action: Action) -> EngineReply:
        raw_slot, raw_doctor, _ = action.args
        specialty = find_specialty(state.selected_specialty)
        doctor = find_doctor(specialty, state.selected_doctor or raw_doctor)
        if specialty is None or doctor is None:
            invalid = "Specialty" if specialty is None else "Doctor"
            logger.warning(f"Invalid booking selection: doctor={raw_doctor!r}, specialty={specialty!r}")
            return self._time_screen(state, f"Invalid selection: {invalid} is invalid. Please try again.")

        time_slot = find_time_slot(raw_slot)
        if time_slot is None:
            logger.warning(f"Invalid time slot selected: {raw_slot!r}")
            return self._time_screen(state, "Invalid time slot selected. Please try again.")

        patient_email = state.user_email
        try:
            result = await self.booker(
                patient_email=patient_email,
                doctor_email=doctor.email,
                doctor_name=doctor.name,
                time_slot=time_slot,
            )
        except Exception as e:
            logger.error(f"Error booking appointment: {e}")
            return self._time_screen(state, f"Error booking appointment: {e}. Please try again.")

        if not result.success:
            logger.error(f"Booking failed: {result.error}")
            return self._time_screen(state, "Failed to book appointment. Please try again.")

        state.reset(Stage.CONFIRMED)
        return EngineReply(
            reply=(
                f"Your appointment with {doctor.name} on {time_slot} IST has been successfully confirmed. "
                f"A confirmation email has been sent to {patient_email}. "
                "Kindly arrive 10 minutes prior to your scheduled appointment time."
            ),
            disable_input=True,
            hide_input=True,
        )

    async def _on_confirmed(self, state: ConversationState, message: str) -> EngineReply:
        return EngineReply(
            reply="Your appointment is confirmed. To book another appointment or ask a medical question, please start over.",
            disable_input=True,
            hide_input=True,
        )

    async def _on_medical_inquiry(self, state: ConversationState, message: str) -> EngineReply:
        if message == RETURN_BACK:
            return self._intent_screen(state)
        if is_medical_related(message):
            answer = await self.answerer(message)
            return self._medical_screen(state, answer)
        return self._medical_screen(
            state,
            "Please ask a medical-related question (e.g., about symptoms, treatments, or conditions) or return back.",
        )

    async def _on_unknown_stage(self, state: ConversationState, message: str) -> EngineReply:
        logger.error(f"Invalid stage: {state.stage}")
        return self._intent_screen(state)

    @staticmethod
    def _parse(message: str) -> Optional[Action]:
        try:
            return parse_action(message)
        except MalformedActionError as e:
            logger.warning(str(e))
            return None
