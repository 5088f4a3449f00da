import streamlit as st
from ui.theming import page_header, pill
from ui.components import diagnosis_results, diagnosis_table, selected_summary, symptom_grid, view_state
from ui.bootstrap import get_client, get_config, get_reporter, reload_catalogs


def _download_buttons(view):
    """Tombol unduh laporan untuk hasil diagnosis terakhir."""
    reporter = get_reporter()
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "📄 Unduh Laporan TXT",
            data=reporter.render_txt(view),
            file_name="laporan_diagnosa.txt",
            mime="text/plain",
            width="stretch",
        )
    with col2:
        try:
            pdf_data = reporter.pdf_bytes(view)
        except Exception as e:
            st.error(f"Gagal membuat laporan PDF: {e}")
        else:
            st.download_button(
                "📕 Unduh Laporan PDF",
                data=pdf_data,
                file_name="laporan_diagnosa.pdf",
                mime="application/pdf",
                width="stretch",
            )


def run():
    page_header("Diagnosis", "Pilih gejala yang terlihat lalu jalankan diagnosa.")
    pill("Forward Chaining • Hasil diurutkan oleh server")

    client = get_client()
    columns = get_config()["ui"].get("symptom_columns", 3)

    # --- Sidebar ---
    with st.sidebar:
        st.caption(f"Gejala: {len(client.state.symptoms)} | Penyakit: {len(client.state.diseases)}")
        if st.button("🔄 Muat Ulang Katalog", width="stretch"):
            reload_catalogs(client)

    # --- Main UI ---
    cols = st.columns([2, 1])
    with cols[0]:
        search = st.text_input("Cari gejala (kode atau deskripsi)", key="symptom_search")
        client.filter_symptoms(search)
        symptom_grid(client, columns=columns)

    with cols[1]:
        selected_summary(client)
        st.divider()
        if st.button(
            "🔎 Diagnosa",
            type="primary",
            width="stretch",
            disabled=not view_state()["diagnose_enabled"],
        ):
            with st.spinner("Menjalankan inferensi..."):
                client.perform_diagnosis()

    # --- Result Handling Block ---
    view = view_state()["diagnosis"]
    if view is not None:
        st.divider()
        diagnosis_results(view)
        if not view.is_empty:
            with st.expander("Ringkasan dalam tabel"):
                diagnosis_table(view)
        _download_buttons(view)


if __name__ == "__main__":
    run()
