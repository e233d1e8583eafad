import streamlit as st
from dataclasses import dataclass
from typing import Any, Optional

from catalog import GENDERS, SYMPTOMS
from config import get_settings
from pydantic_models import DiagnosisView
from ui_components import render_diagnosis, request_diagnosis

SETTINGS = get_settings()


@dataclass
class FormState:
    """Everything the page remembers between reruns."""
    loading: bool = False
    error: Optional[str] = None
    diagnosis: Any = None
    pending: Optional[dict] = None


def _state() -> FormState:
    if "form" not in st.session_state:
        st.session_state["form"] = FormState()
    return st.session_state["form"]


st.set_page_config(page_title="HealthGuard AI", page_icon="🩺", layout="centered")

st.title("🩺 HealthGuard AI")
st.caption("Asisten Diagnosa Pintar — Analisis berbasis AI")
st.markdown(
    "Jelaskan gejala Anda dan dapatkan wawasan kesehatan berbasis AI secara instan. "
    "Ingat, alat ini hanya untuk tujuan informasi dan tidak menggantikan saran medis profesional."
)

state = _state()
if state.error:
    st.error(state.error)

symptom_ids = [sid for sid, _ in SYMPTOMS]
symptom_names = dict(SYMPTOMS)
gender_names = dict(GENDERS)

selected = st.multiselect(
    "Gejala apa yang Anda alami?",
    options=symptom_ids,
    format_func=lambda sid: symptom_names[sid],
    placeholder="Pilih gejala",
)
col_age, col_gender = st.columns(2)
age = col_age.number_input("Usia", min_value=0, max_value=120, value=None, step=1, placeholder="Masukkan usia Anda")
gender = col_gender.selectbox(
    "Jenis Kelamin",
    options=[gid for gid, _ in GENDERS],
    format_func=lambda gid: gender_names[gid],
    index=None,
    placeholder="Pilih jenis kelamin",
)

ready = bool(selected) and age is not None and gender is not None
if st.button("Analisis Gejala", type="primary", disabled=not ready or state.loading, use_container_width=True):
    state.loading = True
    state.error = None
    state.diagnosis = None
    state.pending = {"symptoms": selected, "age": int(age), "gender": gender}
    st.rerun()

if state.loading and state.pending:
    with st.spinner("Menganalisis..."):
        state.diagnosis, state.error = request_diagnosis(SETTINGS.BACKEND_URL, state.pending, SETTINGS.LLM_TIMEOUT + 15)
    state.loading = False
    state.pending = None
    st.rerun()

if state.diagnosis is not None:
    st.divider()
    render_diagnosis(DiagnosisView.from_payload(state.diagnosis))
