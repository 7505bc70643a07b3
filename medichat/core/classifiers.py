"""
Keyword classifiers and input normalization.

All detectors are plain substring checks against the normalized message:
no tokenization, no stemming.
"""

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'\S+@\S+\.\S+')
_WHITESPACE_RE = re.compile(r'\s+')
_TIME_SLOT_DISALLOWED_RE = re.compile(r'[^0-9: apm]', re.IGNORECASE)

GREETING_KEYWORDS = [
    'hello', 'hi', 'hey', 'greetings', 'good morning', 'good afternoon',
    'good evening', 'howdy', 'yo', 'hola',
]

APPOINTMENT_KEYWORDS = [
    'book appointment', 'schedule appointment', 'make appointment',
    'book a visit', 'schedule a visit', 'arrange appointment',
    'need to see a doctor', 'want to see a doctor', 'book with doctor',
    'schedule with doctor', 'appointment with doctor', 'see a specialist',
    'visit a doctor', 'consult a doctor', 'meet a doctor',
]

MEDICAL_KEYWORDS = [
    # general
    'symptom', 'disease', 'condition', 'treatment', 'medication', 'diagnosis',
    'pain', 'fever', 'infection', 'injury', 'surgery', 'therapy', 'health',
    'illness', 'doctor', 'hospital', 'medicine', 'prescription', 'allergy',
    'chronic', 'acute', 'virus', 'bacteria', 'cancer', 'diabetes', 'heart',
    'blood', 'pressure', 'stroke', 'asthma', 'arthritis', 'mental', 'depression',
    'anxiety', 'vaccine', 'immune', 'flu', 'cold', 'cough', 'headache', 'migraine',
    'nausea', 'fatigue', 'rash', 'swelling', 'inflammation', 'bleeding', 'bruise',
    'fracture', 'sprain', 'strain', 'tumor', 'ulcer', 'seizure', 'dizziness',
    'shortness', 'breath', 'chest', 'abdomen', 'kidney', 'liver', 'lung',
    'thyroid', 'hormone', 'insulin', 'cholesterol', 'allergic', 'reaction',
    'antibiotics', 'antiviral', 'painkiller', 'syringe', 'injection', 'scan',
    'xray', 'mri', 'ultrasound', 'biopsy', 'chemotherapy', 'radiation', 'dialysis',
    'transplant', 'system', 'autoimmune', 'rheumatoid', 'psoriasis',
    'eczema', 'hypertension', 'hypotension', 'anemia', 'leukemia', 'lymphoma',
    'epilepsy', 'parkinson', 'alzheimer', 'concussion', 'obesity', 'malnutrition',
    'vitamin', 'deficiency',
    # body parts and musculoskeletal
    'legs pain', 'hand pain', 'back pain', 'knee pain', 'neck pain',
    'shoulder pain', 'elbow pain', 'wrist pain', 'hip pain', 'ankle pain',
    'foot pain', 'joint pain', 'muscle pain', 'numbness', 'tingling', 'cramp',
    'spasm', 'stiffness', 'sciatica', 'tendonitis', 'bursitis', 'gout',
    'osteoporosis', 'scoliosis', 'hernia', 'disc slip',
    # eyes, ears, nose and throat
    'eyes related problem', 'eye pain', 'vision loss', 'blurred vision', 'glaucoma',
    'cataract', 'conjunctivitis', 'dry eyes', 'retina', 'cornea',
    'sinus', 'sinusitis', 'sore throat', 'tonsillitis', 'laryngitis',
    'vertigo', 'tinnitus', 'hearing loss', 'ear infection',
    # respiratory and digestive
    'bronchitis', 'pneumonia', 'tuberculosis', 'emphysema', 'copd',
    'gastritis', 'acid reflux', 'gerd', 'constipation', 'diarrhea', 'ibs',
    'crohn', 'colitis', 'appendicitis', 'gallstone', 'pancreatitis',
    'hepatitis', 'cirrhosis',
    # urinary and reproductive
    'bladder', 'uti', 'kidney stone', 'prostate', 'incontinence', 'menopause',
    'pms', 'endometriosis', 'fibroid', 'infertility', 'erectile', 'dysfunction',
    'std', 'hiv', 'herpes', 'hpv', 'syphilis', 'gonorrhea', 'chlamydia',
    # skin
    'acne', 'rosacea', 'dandruff', 'alopecia', 'hives', 'warts', 'mole',
    'melanoma', 'basal cell', 'squamous', 'psoriatic', 'lupus', 'scleroderma',
    'vitiligo',
    # sleep and mental health
    'insomnia', 'sleep apnea', 'narcolepsy', 'restless legs', 'phobia', 'ocd',
    'ptsd', 'bipolar', 'schizophrenia', 'addiction', 'detox', 'rehab',
    'anorexia', 'bulimia', 'binge eating',
    # neurological and cardiovascular
    'meningitis', 'encephalitis', 'hydrocephalus', 'aneurysm', 'hemorrhage',
    'clot', 'angina', 'arrhythmia', 'cardiomyopathy', 'stent', 'bypass',
    'pacemaker',
    # procedures and tests
    'endoscopy', 'colonoscopy', 'mammogram', 'pap smear', 'prostate exam',
    'blood test', 'urine test', 'stool test', 'ecg', 'eeg', 'ct scan',
    'pet scan', 'ventilator', 'oxygen therapy',
]


def normalize_string(text: Optional[str]) -> str:
    """Trim, collapse internal whitespace and lowercase."""
    if not text:
        return ''
    return _WHITESPACE_RE.sub(' ', text.strip()).lower()


def normalize_time_slot(text: Optional[str]) -> str:
    """Keep only digits, colons, spaces and the AM/PM letters of a slot."""
    if not text:
        return ''
    cleaned = _TIME_SLOT_DISALLOWED_RE.sub('', text.strip())
    return _WHITESPACE_RE.sub(' ', cleaned).strip()


def is_valid_email(text: Optional[str]) -> bool:
    return bool(text) and EMAIL_RE.search(text) is not None


def is_greeting(message: Optional[str]) -> bool:
    normalized = normalize_string(message)
    return any(keyword in normalized for keyword in GREETING_KEYWORDS)


def is_appointment_related(message: Optional[str]) -> bool:
    normalized = normalize_string(message)
    return any(keyword in normalized for keyword in APPOINTMENT_KEYWORDS)


def is_medical_related(message: Optional[str]) -> bool:
    normalized = normalize_string(message)
    matched = [keyword for keyword in MEDICAL_KEYWORDS if keyword in normalized]
    logger.debug(f"Matched medical keywords: {matched}")
    return bool(matched)
