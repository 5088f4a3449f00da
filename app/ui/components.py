import streamlit as st
import pandas as pd
from typing import Any, Dict, List, Optional, Sequence, Tuple

from core.models import Symptom
from core.rendering import BackwardView, DiagnosisView, SolutionsView
from core.view import ExpertSystemView
from services.error_reporting import ErrorReport, ErrorReporter, SEVERITY_ERROR, SEVERITY_WARNING
from ui.theming import confidence_badge

VIEW_STATE_KEY = "view_state"


def view_state() -> Dict[str, Any]:
    """State tampilan per sesi yang diisi oleh StreamlitView."""
    if VIEW_STATE_KEY not in st.session_state:
        st.session_state[VIEW_STATE_KEY] = {
            "symptoms": [],
            "selected_codes": frozenset(),
            "selection": [],
            "selected_count": 0,
            "diagnose_enabled": False,
            "disease_options": [("", "-- Pilih Hama --")],
            "diagnosis": None,
            "backward": None,
            "loading": False,
        }
    return st.session_state[VIEW_STATE_KEY]


class StreamlitView(ExpertSystemView):
    """Menyimpan view model di session_state; komponen di bawah yang menggambarnya.

    Streamlit menjalankan ulang script setiap interaksi, jadi "render" di sini
    berarti memperbarui state yang dibaca komponen pada run berikutnya.
    """

    def render_symptoms(self, symptoms: Sequence[Symptom], selected: frozenset) -> None:
        state = view_state()
        state["symptoms"] = list(symptoms)
        state["selected_codes"] = selected

    def render_selection(self, selected: List[Symptom], count: int, diagnose_enabled: bool) -> None:
        state = view_state()
        state["selection"] = list(selected)
        state["selected_count"] = count
        state["diagnose_enabled"] = diagnose_enabled

    def populate_disease_options(self, options: List[Tuple[str, str]]) -> None:
        view_state()["disease_options"] = list(options)

    def render_diagnosis(self, view: DiagnosisView) -> None:
        view_state()["diagnosis"] = view

    def render_backward(self, view: BackwardView) -> None:
        view_state()["backward"] = view

    def hide_backward(self) -> None:
        view_state()["backward"] = None

    def show_loading(self, show: bool) -> None:
        view_state()["loading"] = show


class StreamlitErrorReporter(ErrorReporter):
    """Tampilkan laporan sebagai st.error / st.warning / st.info."""

    def __init__(self, forward_to: Optional[ErrorReporter] = None):
        self.forward_to = forward_to

    def report(self, report: ErrorReport) -> None:
        if report.severity == SEVERITY_ERROR:
            st.error(f"❌ {report.message}")
        elif report.severity == SEVERITY_WARNING:
            st.warning(f"⚠️ {report.message}")
        else:
            st.info(f"💡 {report.message}")
        if self.forward_to is not None:
            self.forward_to.report(report)


def symptom_grid(client, columns: int = 3):
    """Grid kartu gejala; klik untuk memilih/membatalkan."""
    state = view_state()
    symptoms = state["symptoms"]
    selected = state["selected_codes"]

    if not symptoms:
        st.caption("Tidak ada gejala yang cocok dengan pencarian.")
        return

    cols = st.columns(columns)
    for i, symptom in enumerate(symptoms):
        is_selected = symptom.code in selected
        label = f"{'✅' if is_selected else '⬜'} **{symptom.code}** · {symptom.description}"
        with cols[i % columns]:
            st.button(
                label,
                key=f"symptom_{symptom.code}",
                type="primary" if is_selected else "secondary",
                on_click=client.toggle_symptom,
                args=(symptom.code,),
                width="stretch",
            )


def selected_summary(client):
    """Panel ringkasan gejala terpilih dengan tombol hapus per gejala."""
    state = view_state()
    st.markdown(f"**Gejala dipilih:** {state['selected_count']}")

    if not state["selection"]:
        st.caption("Belum ada gejala yang dipilih.")
        return

    for symptom in state["selection"]:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.markdown(f"`{symptom.code}` {symptom.description}")
        with col2:
            st.button("×", key=f"remove_{symptom.code}", on_click=client.toggle_symptom,
                      args=(symptom.code,))


def solutions_block(solutions: SolutionsView):
    if solutions.is_empty:
        st.caption(solutions.empty_message)
        return
    for solution in solutions.items:
        st.markdown(f"**{solution.remedy_name}**")
        st.write(solution.instructions)


def diagnosis_results(view: Optional[DiagnosisView]):
    """Kartu hasil diagnosis sesuai urutan dari server."""
    if view is None:
        return

    st.markdown("### Hasil Diagnosa")
    if view.is_empty:
        st.warning(f"**{view.empty_title}**\n\n{view.empty_message}")
        return

    for card in view.cards:
        info = card.disease
        with st.container(border=True):
            col1, col2 = st.columns([3, 1])
            with col1:
                st.markdown(f"#### {info.name}")
                st.markdown(f"**Penyebab:** {info.description}")
                st.markdown(f"**Nama Latin:** {info.latin_name}")
                st.markdown(f"**Tingkat Bahaya:** {info.danger_level}")
            with col2:
                confidence_badge(card.confidence_label, card.tier)

            st.markdown("**Gejala yang Cocok:**")
            st.write(" · ".join(card.matched_symptoms) or "-")

            st.markdown("**Solusi Pengobatan:**")
            solutions_block(card.solutions)


def diagnosis_table(view: DiagnosisView):
    if view.cards:
        st.dataframe(pd.DataFrame([card.to_row() for card in view.cards]), hide_index=True)


def backward_panel(view: Optional[BackwardView]):
    """Panel hasil backward chaining; tidak menggambar apa pun jika tersembunyi."""
    if view is None:
        return

    info = view.disease
    with st.container(border=True):
        st.markdown(f"### {info.name}")
        st.markdown(f"**Nama Latin:** {info.latin_name}")
        st.markdown(f"**Deskripsi:** {info.description}")
        st.markdown(f"**Tingkat Bahaya:** {info.danger_level}")

        st.markdown("#### Gejala yang Diperlukan")
        if not view.has_required_symptoms:
            st.caption(view.empty_symptoms_message)
        else:
            for symptom in view.required_symptoms:
                st.markdown(f"- `{symptom.code}` {symptom.description}")

        st.markdown("#### Metode Pengendalian")
        solutions_block(view.control_methods)


def catalog_table(symptoms: Sequence[Symptom]):
    display_data = [{"Kode": s.code, "Gejala": s.description} for s in symptoms]
    st.dataframe(pd.DataFrame(display_data, columns=["Kode", "Gejala"]), hide_index=True,
                 width="stretch")
