"""
Tagged actions exchanged between the chat widget and the dialogue engine.

A button carries an ``Action``: a kind plus the ordered string arguments
needed to rebuild the follow-up message (``select_doctor:<doctor>:<specialty>``).
Incoming messages are parsed back into the same ``Action`` type, so the engine
never works with hand-templated strings.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from medichat.core.reference_data import DOCTORS, SPECIALTIES, TIME_SLOTS


class MalformedActionError(ValueError):
    """An action token was recognized but carried too few arguments."""

    def __init__(self, kind: "ActionKind", message: str):
        super().__init__(f"Malformed {kind.value} message: {message!r}")
        self.kind = kind


class ActionKind(str, Enum):
    CONFIRM = "confirm_yes_no"
    SELECT_SPECIALTY = "select_specialty"
    SELECT_DOCTOR = "select_doctor"
    SELECT_TIME = "select_time"
    MEDICAL_INQUIRY = "medical_inquiry"
    RETURN_BACK = "return_back"


# Number of colon-separated arguments each selection token carries
_ARITY = {
    ActionKind.SELECT_SPECIALTY: 1,
    ActionKind.SELECT_DOCTOR: 2,
    ActionKind.SELECT_TIME: 3,
}


def escape_arg(value: Optional[str]) -> str:
    """Make a display name safe to embed as a button argument."""
    if value is None:
        return ""
    value = value.replace("\r", "").replace("\n", "")
    return value.replace("\\", "\\\\").replace('"', '\\"')


def unescape_arg(value: str) -> str:
    out = []
    chars = iter(value)
    for ch in chars:
        if ch == "\\":
            out.append(next(chars, ""))
        else:
            out.append(ch)
    return "".join(out)


class Action(BaseModel):
    kind: ActionKind
    args: List[str] = Field(default_factory=list)

    def to_message(self) -> str:
        """Rebuild the chat message the widget sends when this action fires."""
        if self.kind == ActionKind.CONFIRM:
            return self.args[0] if self.args else ""
        if self.kind in (ActionKind.MEDICAL_INQUIRY, ActionKind.RETURN_BACK):
            return self.kind.value
        return ":".join([self.kind.value, *self.args])


class Button(BaseModel):
    text: str
    css_class: str = Field(..., serialization_alias="class")
    action: Action

    def to_payload(self) -> dict:
        return {
            "text": self.text,
            "class": self.css_class,
            "action": self.action.kind.value,
            "args": list(self.action.args),
            "message": self.action.to_message(),
        }


def parse_action(message: str) -> Optional[Action]:
    """
    Parse an incoming chat message into an Action.

    Returns None for free text. Selection tokens are split from the right
    because time slots contain colons ("10:00 AM").

    Raises:
        MalformedActionError: a selection token with too few arguments.
    """
    text = message.strip()
    if text in (ActionKind.RETURN_BACK.value, ActionKind.MEDICAL_INQUIRY.value):
        return Action(kind=ActionKind(text))
    if text.lower() in ("yes", "no"):
        return Action(kind=ActionKind.CONFIRM, args=[text])

    for kind, arity in _ARITY.items():
        prefix = f"{kind.value}:"
        if not text.startswith(prefix):
            continue
        rest = text[len(prefix):]
        args = rest.rsplit(":", arity - 1) if arity > 1 else [rest]
        if len(args) < arity or not all(arg.strip() for arg in args):
            raise MalformedActionError(kind, message)
        return Action(kind=kind, args=[unescape_arg(arg) for arg in args])
    return None


def is_action_token(message: str) -> bool:
    """True for structured button messages, which are never read as free text."""
    text = message.strip()
    if text in (ActionKind.RETURN_BACK.value, ActionKind.MEDICAL_INQUIRY.value):
        return True
    return any(text.startswith(f"{kind.value}:") for kind in _ARITY)


# =============================================================================
# Button factories
# =============================================================================

def return_back_button() -> Button:
    return Button(
        text="Return Back",
        css_class="return-back-button",
        action=Action(kind=ActionKind.RETURN_BACK),
    )


def intent_buttons() -> List[Button]:
    return [
        Button(text="Yes", css_class="chat-button", action=Action(kind=ActionKind.CONFIRM, args=["Yes"])),
        Button(text="No", css_class="chat-button", action=Action(kind=ActionKind.CONFIRM, args=["No"])),
        Button(text="Ask Medical Related", css_class="chat-button", action=Action(kind=ActionKind.MEDICAL_INQUIRY)),
    ]


def specialty_buttons() -> List[Button]:
    buttons = [
        Button(
            text=specialty,
            css_class="specialty-button",
            action=Action(kind=ActionKind.SELECT_SPECIALTY, args=[escape_arg(specialty)]),
        )
        for specialty in SPECIALTIES
    ]
    buttons.append(return_back_button())
    return buttons


def doctor_buttons(specialty: str) -> List[Button]:
    buttons = [
        Button(
            text=doctor.name,
            css_class="specialty-button",
            action=Action(
                kind=ActionKind.SELECT_DOCTOR,
                args=[escape_arg(doctor.name), escape_arg(specialty)],
            ),
        )
        for doctor in DOCTORS[specialty]
    ]
    buttons.append(return_back_button())
    return buttons


def time_slot_buttons(doctor: Optional[str], specialty: Optional[str]) -> List[Button]:
    buttons = [
        Button(
            text=slot,
            css_class="time-slot-button",
            action=Action(
                kind=ActionKind.SELECT_TIME,
                args=[escape_arg(slot), escape_arg(doctor), escape_arg(specialty)],
            ),
        )
        for slot in TIME_SLOTS
    ]
    buttons.append(return_back_button())
    return buttons
