from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, List, Literal, Tuple

import catalog


class DiagnosisRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    symptoms: Tuple[str, ...] = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=120)
    gender: Literal["male", "female"]

    @field_validator("symptoms")
    @classmethod
    def known_unique_symptoms(cls, v: Tuple[str, ...]) -> Tuple[str, ...]:
        seen = []
        for sid in v:
            if not catalog.is_known_symptom(sid):
                raise ValueError(f"Gejala tidak dikenal: {sid}")
            if sid not in seen:
                seen.append(sid)
        return tuple(seen)

    @property
    def symptom_names(self) -> List[str]:
        return catalog.symptom_names(self.symptoms)

    @property
    def gender_label(self) -> str:
        return catalog.gender_label(self.gender)


# Render-only views. The model answer is never validated field by field, so
# these coerce whatever arrived into something safe to display.

def _text(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [t for t in (_text(v) for v in value) if t]


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


class ConditionView(BaseModel):
    name: str = ""
    probability: str = ""
    description: str = ""


class RecommendationsView(BaseModel):
    immediate: List[str] = []
    lifestyle: List[str] = []
    medications: List[str] = []


class DiagnosisView(BaseModel):
    possible_conditions: List[ConditionView] = []
    recommendations: RecommendationsView = RecommendationsView()
    urgency_level: str = ""
    seek_medical_attention: str = ""
    preventive_measures: List[str] = []

    @classmethod
    def from_payload(cls, payload: Any) -> "DiagnosisView":
        """Build a view from an unvalidated `diagnosis` value. Never raises."""
        data = _mapping(payload)
        conditions = []
        raw_conditions = data.get("possibleConditions")
        for item in raw_conditions if isinstance(raw_conditions, list) else []:
            item = _mapping(item)
            cond = ConditionView(
                name=_text(item.get("name")),
                probability=_text(item.get("probability")),
                description=_text(item.get("description")),
            )
            if cond.name or cond.description:
                conditions.append(cond)
        recs = _mapping(data.get("recommendations"))
        return cls(
            possible_conditions=conditions,
            recommendations=RecommendationsView(
                immediate=_text_list(recs.get("immediate")),
                lifestyle=_text_list(recs.get("lifestyle")),
                medications=_text_list(recs.get("medications")),
            ),
            urgency_level=_text(data.get("urgencyLevel")),
            seek_medical_attention=_text(data.get("seekMedicalAttention")),
            preventive_measures=_text_list(data.get("preventiveMeasures")),
        )
