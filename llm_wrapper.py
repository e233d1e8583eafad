"""
LLM wrapper for the HealthGuard diagnosis assistant.

Provides:
- build_diagnosis_prompt: turns symptoms, age and gender into the instruction sent to the model
- parse_diagnosis_response: pulls the `diagnosis` object out of a free-text model answer
- call_llm: sends a prompt to Gemini, OpenAI or the offline mock and returns the raw text
- get_diagnosis: request -> prompt -> model -> parsed diagnosis, raising DiagnosisError on failure
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, List, Optional

import httpx
import openai
from openai import OpenAI
from google import genai
from google.genai import errors as genai_errors
from google.genai import types as genai_types

from config import DEFAULT_MODELS, Settings, get_settings
from errors import ConfigurationError, DiagnosisError, ParseError, SchemaError, TransportError
from logging_setup import APP_LOGGER, RAW_LOGGER
from pydantic_models import DiagnosisRequest

logger = logging.getLogger(APP_LOGGER)
raw_logger = logging.getLogger(RAW_LOGGER)

# PROMPT_TEMPLATE: literal with {symptoms}/{age}/{gender} placeholders replaced one by one (not .format, the schema has braces)
PROMPT_TEMPLATE = """
PENTING: Jawab PERSIS dalam format JSON yang valid.
DILARANG menambahkan komentar atau teks di luar struktur JSON.

Berikan diagnosis dan saran kesehatan berdasarkan gejala berikut:
- Gejala: {symptoms}
- Usia: {age}
- Jenis Kelamin: {gender}

Format jawaban HARUS dalam JSON yang valid dengan struktur berikut:
{
  "diagnosis": {
    "possibleConditions": [
      {
        "name": "Nama Penyakit",
        "probability": "Tinggi/Sedang/Rendah",
        "description": "Deskripsi singkat tentang penyakit"
      }
    ],
    "recommendations": {
      "immediate": ["Tindakan yang harus segera dilakukan"],
      "lifestyle": ["Saran perubahan gaya hidup"],
      "medications": ["Obat yang disarankan (dosis umum)"]
    },
    "urgencyLevel": "Normal/Segera/Darurat",
    "seekMedicalAttention": "Saran kapan harus ke dokter",
    "preventiveMeasures": ["Langkah pencegahan yang disarankan"]
  }
}

Pastikan:
- Diagnosis sesuai dengan kombinasi gejala
- Pertimbangkan faktor usia dan jenis kelamin
- Berikan saran yang spesifik dan praktis
- Sertakan peringatan jika gejala mengindikasikan kondisi serius
"""


def build_diagnosis_prompt(symptom_names: List[str], age: int, gender_label: str) -> str:
    """
    Instruction string asking for a strict-JSON diagnosis. Inputs are not
    validated here; the request model and the form already do that.
    """
    return (PROMPT_TEMPLATE
            .replace("{symptoms}", ", ".join(symptom_names))
            .replace("{age}", str(age))
            .replace("{gender}", gender_label))


def prompt_for_request(request: DiagnosisRequest) -> str:
    return build_diagnosis_prompt(request.symptom_names, request.age, request.gender_label)


_FENCE_OPEN = re.compile(r"^```json\s*")
_FENCE_CLOSE = re.compile(r"```\s*\Z")


def sanitize_response(raw_text: str) -> str:
    """
    Cut the text down to the span from the first '{' to the last '}', drop
    leftover ```json fences and surrounding whitespace.

    This is a plain brace scan, not a parser: several brace blocks in one
    answer are swallowed into a single span.
    """
    start = raw_text.find("{")
    text = raw_text[start:] if start != -1 else ""
    end = text.rfind("}")
    text = text[:end + 1] if end != -1 else ""
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name} in JSON")


def _is_truthy(value: Any) -> bool:
    # empty objects and arrays still count as present
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return False
    return True


@dataclass(frozen=True)
class ParseOutcome:
    """Either a diagnosis (the unvalidated `diagnosis` value) or the error that stopped parsing."""
    diagnosis: Any = None
    error: Optional[DiagnosisError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.diagnosis


def parse_diagnosis_response(raw_text: str) -> ParseOutcome:
    """
    Extract and parse the JSON payload of a model answer.

    Returns a ParseOutcome holding the value under the top-level `diagnosis`
    key, or a ParseError (not valid JSON) / SchemaError (valid JSON without a
    usable `diagnosis`). Nested fields are left exactly as the model sent them.
    """
    cleaned = sanitize_response(raw_text or "")
    try:
        parsed = json.loads(cleaned, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        return ParseOutcome(error=ParseError(str(e)))

    if not isinstance(parsed, dict) or not _is_truthy(parsed.get("diagnosis")):
        return ParseOutcome(error=SchemaError())
    return ParseOutcome(diagnosis=parsed["diagnosis"])


# Mock LLM: canned answer in the same shape the prompt asks for
def mock_llm(prompt: str) -> str:
    out = {
        "diagnosis": {
            "possibleConditions": [
                {
                    "name": "Infeksi saluran pernapasan atas",
                    "probability": "Sedang",
                    "description": "Contoh jawaban offline. Tidak berdasarkan analisis model."
                }
            ],
            "recommendations": {
                "immediate": ["Istirahat yang cukup dan perbanyak minum air putih."],
                "lifestyle": ["Jaga pola tidur dan makan bergizi seimbang."],
                "medications": ["Parasetamol 500 mg bila demam (maksimal 3x sehari)."]
            },
            "urgencyLevel": "Normal",
            "seekMedicalAttention": "Periksa ke dokter bila gejala memburuk atau tidak membaik dalam 3 hari.",
            "preventiveMeasures": ["Cuci tangan secara rutin."]
        }
    }
    return json.dumps(out, ensure_ascii=False)


def _call_gemini(prompt: str, api_key: str, model: str, timeout: float, max_tokens: int, temperature: float) -> str:
    try:
        client = genai.Client(api_key=api_key)
    except Exception as e:
        raise ConfigurationError(f"Gagal menginisialisasi Gemini AI: {e}") from e

    try:
        response = client.models.generate_content(
            model=model,
            contents=prompt,
            config=genai_types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
                http_options=genai_types.HttpOptions(timeout=int(timeout * 1000)),
            ),
        )
    except genai_errors.ClientError as e:
        if e.code in (401, 403) or "API_KEY_INVALID" in str(e):
            raise ConfigurationError(f"API key Gemini ditolak: {e}") from e
        raise TransportError(str(e)) from e
    except (genai_errors.APIError, httpx.HTTPError) as e:
        raise TransportError(str(e)) from e
    return response.text or ""


def _call_openai(prompt: str, api_key: str, model: str, timeout: float, max_tokens: int, temperature: float) -> str:
    try:
        client = OpenAI(api_key=api_key, timeout=timeout)
    except openai.OpenAIError as e:
        raise ConfigurationError(f"Gagal menginisialisasi OpenAI: {e}") from e

    system_msg = "Anda adalah asisten kesehatan edukatif. Keluarkan HANYA JSON yang valid tanpa teks lain."
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=[{"role": "system", "content": system_msg}, {"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
    except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
        raise ConfigurationError(f"API key OpenAI ditolak: {e}") from e
    except openai.OpenAIError as e:
        raise TransportError(str(e)) from e
    return resp.choices[0].message.content or ""


_PROVIDER_CALLS = {
    "gemini": _call_gemini,
    "openai": _call_openai,
}


def call_llm(
    prompt: str,
    api_key: Optional[str],
    provider: str = "gemini",
    model: Optional[str] = None,
    timeout: float = 15,
    max_tokens: int = 1500,
    temperature: float = 0.0,
    key_env_name: str = "GEMINI_API_KEY",
) -> str:
    """
    Returns the raw model text for `prompt`.

    Raises ConfigurationError for a missing, rejected or unusable key (a
    missing key is caught before any client is built) and TransportError for
    everything that goes wrong on the wire. Every answer is written to the
    raw log.
    """
    if provider == "mock":
        raw = mock_llm(prompt)
        raw_logger.info("----MOCK CALL----\n%s", raw)
        return raw

    call = _PROVIDER_CALLS.get(provider)
    model = model or DEFAULT_MODELS.get(provider)
    if call is None:
        raise ConfigurationError(f"Penyedia AI tidak dikenal: {provider}")
    if not api_key or not api_key.strip():
        raise ConfigurationError(
            f"API key tidak dikonfigurasi. Pastikan environment variable {key_env_name} telah diatur."
        )

    try:
        text = call(prompt, api_key.strip(), model, timeout, max_tokens, temperature)
    except DiagnosisError as e:
        raw_logger.info("----%s_ERROR----\n%s", provider.upper(), e.message)
        raise
    raw_logger.info("----CALL %s/%s----\n%s", provider, model, text)
    return text


def get_diagnosis(request: DiagnosisRequest, settings: Optional[Settings] = None) -> Any:
    """
    Primary orchestration:
    - build the prompt from the request
    - check the provider key before touching the network
    - call the model once (no retries)
    - parse the answer and return the `diagnosis` value, or raise the DiagnosisError
    """
    settings = settings or get_settings()
    provider = settings.LLM_PROVIDER
    logger.info(
        "Diagnosis request: %d symptoms, age %d, gender %s, provider %s",
        len(request.symptoms), request.age, request.gender, provider
    )

    prompt = prompt_for_request(request)
    try:
        raw = call_llm(
            prompt,
            settings.api_key_for(provider),
            provider=provider,
            model=settings.LLM_MODEL,
            timeout=settings.LLM_TIMEOUT,
            max_tokens=settings.LLM_MAX_TOKENS,
            temperature=settings.LLM_TEMPERATURE,
            key_env_name=settings.api_key_env_name(provider),
        )
    except DiagnosisError as e:
        logger.error("LLM call failed (%s): %s", e.kind, e.message)
        raise

    outcome = parse_diagnosis_response(raw)
    if not outcome.ok:
        logger.warning("LLM answer rejected (%s): %s", outcome.error.kind, outcome.error.message)
    else:
        logger.info("Diagnosis parsed, urgency %s", _urgency_of(outcome.diagnosis))
    return outcome.unwrap()


def _urgency_of(diagnosis: Any) -> str:
    if isinstance(diagnosis, dict):
        return str(diagnosis.get("urgencyLevel", "-"))
    return "-"
