"""
Halaman backward chaining: pilih satu hama/penyakit untuk melihat gejala yang
diperlukan dan metode pengendaliannya.
"""
import streamlit as st
from ui.theming import page_header, pill
from ui.components import backward_panel, view_state
from ui.bootstrap import get_client


def _on_disease_change(client):
    client.select_disease(st.session_state.get("disease_select", ""))


def run():
    page_header("Backward Chaining", "Telusuri gejala dan pengendalian dari sebuah hama/penyakit.")
    pill("Goal-driven reasoning")

    client = get_client()
    options = view_state()["disease_options"]
    labels = dict(options)

    st.selectbox(
        "Pilih hama/penyakit",
        options=[code for code, _ in options],
        format_func=lambda code: labels.get(code, code),
        key="disease_select",
        on_change=_on_disease_change,
        args=(client,),
    )

    client.sync_selected_disease(st.session_state.get("disease_select", ""))

    if len(options) <= 1:
        st.caption("Katalog penyakit belum tersedia.")

    backward_panel(view_state()["backward"])


if __name__ == "__main__":
    run()
