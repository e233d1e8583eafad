import os
import tempfile

import pytest

# Keep log files out of the working tree
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="healthguard-logs-"))

KEY_VARS = ("GEMINI_API_KEY", "REACT_APP_GEMINI_API_KEY", "OPENAI_API_KEY", "LLM_PROVIDER", "LLM_MODEL")


@pytest.fixture
def clean_env(monkeypatch):
    """No provider keys and no provider override."""
    for name in KEY_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def diagnosis_payload():
    return {
        "possibleConditions": [
            {"name": "Influenza", "probability": "Tinggi", "description": "Infeksi virus."}
        ],
        "recommendations": {
            "immediate": ["Istirahat"],
            "lifestyle": ["Tidur cukup"],
            "medications": ["Parasetamol"]
        },
        "urgencyLevel": "Normal",
        "seekMedicalAttention": "Jika demam lebih dari 3 hari.",
        "preventiveMeasures": ["Vaksin flu tahunan"]
    }
