import html
from typing import Any, List, Optional, Tuple

import requests
import streamlit as st

from catalog import urgency_style
from pydantic_models import DiagnosisView

DISCLAIMER = (
    "**Pemberitahuan Penting:** Penilaian ini hanya untuk tujuan informasi dan tidak menggantikan "
    "saran medis profesional, diagnosis, atau pengobatan. Selalu konsultasikan dengan dokter atau "
    "penyedia layanan kesehatan yang berkualifikasi untuk pertanyaan yang Anda miliki terkait kondisi medis."
)


def request_diagnosis(url: str, payload: dict, timeout: float) -> Tuple[Any, Optional[str]]:
    """(diagnosis, error message) from the backend; exactly one is set."""
    try:
        resp = requests.post(url, json=payload, timeout=timeout)
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        return None, f"Terjadi kesalahan: {e}"
    if not isinstance(data, dict):
        return None, f"Terjadi kesalahan: HTTP {resp.status_code}"
    if resp.ok and "diagnosis" in data:
        return data["diagnosis"], None
    return None, data.get("error") or f"Terjadi kesalahan: HTTP {resp.status_code}"


def urgency_badge_html(level: str) -> str:
    # the level comes straight from the model
    bg, fg = urgency_style(level)
    return (
        f"<span style='padding:4px 12px;border-radius:9999px;background:{bg};color:{fg};"
        f"font-weight:600'>{html.escape(level)}</span>"
    )


def bullet_list(title: str, items: List[str]):
    st.markdown(f"**{title}**")
    if not items:
        st.caption("Tidak ada data.")
    for item in items:
        st.write("•", item)


def render_diagnosis(view: DiagnosisView):
    head, badge = st.columns([3, 1])
    head.subheader("Hasil Penilaian")
    if view.urgency_level:
        badge.markdown(urgency_badge_html(view.urgency_level), unsafe_allow_html=True)

    st.markdown("#### Kemungkinan Kondisi")
    for cond in view.possible_conditions:
        with st.container(border=True):
            st.markdown(f"**{cond.name}**" + (f"  \nKemungkinan: {cond.probability}" if cond.probability else ""))
            if cond.description:
                st.caption(cond.description)

    col1, col2 = st.columns(2)
    with col1:
        bullet_list("🚨 Tindakan Segera", view.recommendations.immediate)
        bullet_list("🧘 Rekomendasi Gaya Hidup", view.recommendations.lifestyle)
    with col2:
        bullet_list("💊 Obat yang Disarankan", view.recommendations.medications)
        bullet_list("🛡️ Langkah Pencegahan", view.preventive_measures)

    if view.seek_medical_attention:
        st.info(f"**Saran Medis Profesional:** {view.seek_medical_attention}")
    st.caption(DISCLAIMER)
