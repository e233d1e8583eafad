from typing import Dict, List, Optional

# (id, display name) in the order the form shows them
SYMPTOMS = [
    ("fever", "Demam"),
    ("headache", "Sakit Kepala"),
    ("cough", "Batuk"),
    ("sore_throat", "Sakit Tenggorokan"),
    ("fatigue", "Kelelahan"),
    ("body_ache", "Nyeri Otot"),
    ("nausea", "Mual"),
    ("dizziness", "Pusing"),
    ("diarrhea", "Diare"),
    ("stomach_pain", "Sakit Perut"),
    ("chest_pain", "Nyeri Dada"),
    ("breathing_difficulty", "Kesulitan Bernafas"),
    ("rash", "Ruam"),
    ("joint_pain", "Nyeri Sendi"),
    ("loss_appetite", "Kehilangan Nafsu Makan"),
    ("insomnia", "Susah Tidur"),
    ("anxiety", "Kecemasan"),
    ("depression", "Depresi"),
]

GENDERS = [
    ("male", "Laki-laki"),
    ("female", "Perempuan"),
]

# urgency level -> badge colours (background, text); anything unknown renders as Normal
URGENCY_STYLES = {
    "Darurat": ("#fee2e2", "#991b1b"),
    "Segera": ("#fef9c3", "#854d0e"),
    "Normal": ("#dcfce7", "#166534"),
}

_SYMPTOM_NAMES: Dict[str, str] = dict(SYMPTOMS)
_GENDER_LABELS: Dict[str, str] = dict(GENDERS)


def symptom_name(symptom_id: str) -> Optional[str]:
    return _SYMPTOM_NAMES.get(symptom_id)


def symptom_names(symptom_ids) -> List[str]:
    """Display names for the given ids, in the given order. Unknown ids are skipped."""
    return [_SYMPTOM_NAMES[sid] for sid in symptom_ids if sid in _SYMPTOM_NAMES]


def gender_label(gender_id: str) -> Optional[str]:
    return _GENDER_LABELS.get(gender_id)


def is_known_symptom(symptom_id: str) -> bool:
    return symptom_id in _SYMPTOM_NAMES


def urgency_style(level) -> tuple:
    if isinstance(level, str) and level in URGENCY_STYLES:
        return URGENCY_STYLES[level]
    return URGENCY_STYLES["Normal"]


def as_options(pairs) -> List[Dict[str, str]]:
    return [{"id": key, "name": name} for key, name in pairs]
