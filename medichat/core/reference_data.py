"""
Static reference data for the booking flow.

Specialties, doctors and bookable time slots are kept in their display case.
Lookups accept any case/whitespace variant and resolve back to the canonical
display value.
"""

from typing import Dict, List, NamedTuple, Optional

from medichat.core.classifiers import normalize_string, normalize_time_slot


class Doctor(NamedTuple):
    name: str
    email: str


SPECIALTIES: List[str] = [
    'Cardiology', 'Neurology', 'Pulmonology', 'Gastroenterology',
    'Nephrology', 'Endocrinology', 'Oncology', 'Hematology',
    'Dermatology', 'Psychiatry',
]

DOCTORS: Dict[str, List[Doctor]] = {
    'Cardiology': [
        Doctor('Dr. Somasekar', 'somasekar@example.com'),
        Doctor('Dr. Poovarasan', 'poovarasan@example.com'),
    ],
    'Neurology': [
        Doctor('Dr. Anjali Sharma', 'anjali.sharma@example.com'),
        Doctor('Dr. Vikram Patel', 'vikram.patel@example.com'),
    ],
    'Pulmonology': [
        Doctor('Dr. Priya Menon', 'priya.menon@example.com'),
        Doctor('Dr. Sanjay Gupta', 'sanjay.gupta@example.com'),
    ],
    'Gastroenterology': [
        Doctor('Dr. Rajesh Nair', 'rajesh.nair@example.com'),
        Doctor('Dr. Meena Iyer', 'meena.iyer@example.com'),
    ],
    'Nephrology': [
        Doctor('Dr. Arjun Reddy', 'arjun.reddy@example.com'),
        Doctor('Dr. Lakshmi Rao', 'lakshmi.rao@example.com'),
    ],
    'Endocrinology': [
        Doctor('Dr. Kavita Desai', 'kavita.desai@example.com'),
        Doctor('Dr. Mohan Kumar', 'mohan.kumar@example.com'),
    ],
    'Oncology': [
        Doctor('Dr. Siddharth Bose', 'siddharth.bose@example.com'),
        Doctor('Dr. Nisha Verma', 'nisha.verma@example.com'),
    ],
    'Hematology': [
        Doctor('Dr. Anil Kapoor', 'anil.kapoor@example.com'),
        Doctor('Dr. Sunita Pillai', 'sunita.pillai@example.com'),
    ],
    'Dermatology': [
        Doctor('Dr. Riya Sen', 'riya.sen@example.com'),
        Doctor('Dr. Amitabh Das', 'amitabh.das@example.com'),
    ],
    'Psychiatry': [
        Doctor('Dr. Shalini Mehta', 'shalini.mehta@example.com'),
        Doctor('Dr. Rohan Joshi', 'rohan.joshi@example.com'),
    ],
}

TIME_SLOTS: List[str] = ['10:00 AM', '1:00 PM', '2:00 PM', '3:00 PM']


def find_specialty(raw: Optional[str]) -> Optional[str]:
    wanted = normalize_string(raw)
    for specialty in SPECIALTIES:
        if normalize_string(specialty) == wanted:
            return specialty
    return None


def find_doctor(specialty: Optional[str], raw: Optional[str]) -> Optional[Doctor]:
    """Return the doctor of ``specialty`` whose name matches ``raw``, if any."""
    if specialty not in DOCTORS:
        return None
    wanted = normalize_string(raw)
    for doctor in DOCTORS[specialty]:
        if normalize_string(doctor.name) == wanted:
            return doctor
    return None


def find_time_slot(raw: Optional[str]) -> Optional[str]:
    wanted = normalize_string(normalize_time_slot(raw))
    for slot in TIME_SLOTS:
        if normalize_string(slot) == wanted:
            return slot
    return None
