import sys
import os

import pytest

# Ensure project root is on sys.path so `medichat` package can be imported when running tests
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from medichat.core.engine import DialogueEngine
from medichat.core.state_manager import ConversationState
from medichat.services.booking_service import BookingResult


class FakeBooker:
    def __init__(self, result=None, error=None):
        self.calls = []
        self.result = result or BookingResult(success=True, message="Appointment booked successfully")
        self.error = error

    async def __call__(self, patient_email, doctor_email, doctor_name, time_slot):
        self.calls.append({
            "patient_email": patient_email,
            "doctor_email": doctor_email,
            "doctor_name": doctor_name,
            "time_slot": time_slot,
        })
        if self.error:
            raise self.error
        return self.result


class FakeAnswerer:
    def __init__(self, answer="Flu symptoms include fever, cough and fatigue."):
        self.questions = []
        self.answer = answer

    async def __call__(self, question):
        self.questions.append(question)
        return self.answer


@pytest.fixture
def booker():
    return FakeBooker()


@pytest.fixture
def answerer():
    return FakeAnswerer()


@pytest.fixture
def engine(booker, answerer):
    return DialogueEngine(booker=booker, answerer=answerer)


@pytest.fixture
def state():
    return ConversationState()
