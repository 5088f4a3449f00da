"""
Halaman untuk menjelajahi katalog gejala dan penyakit dari server.

Pencarian lokal memakai `search_filter` di atas katalog sesi; pencarian
server memakai parameter `search` pada endpoint gejala.
"""
import streamlit as st
import pandas as pd
from core.search_filter import filter_symptoms, highlight_search_term, search_diseases
from ui.theming import page_header
from ui.components import catalog_table
from ui.bootstrap import get_client


def show_symptoms_explorer(client):
    """Tampilkan UI untuk eksplorasi gejala."""
    st.subheader("Katalog Gejala")
    all_symptoms = client.state.symptoms

    query = st.text_input("Cari berdasarkan kode atau deskripsi gejala:", key="catalog_query")
    results = filter_symptoms(all_symptoms, query)

    st.write(f"Menampilkan **{len(results)}** dari **{len(all_symptoms)}** gejala.")

    if not results:
        st.warning("Tidak ada gejala yang cocok dengan kriteria pencarian Anda.")
    elif query:
        for s in results[:10]:
            st.markdown(f"- `{s.code}` {highlight_search_term(s.description, query)}")
    else:
        catalog_table(results)

    st.divider()
    st.markdown("**Pencarian di server**")
    col1, col2 = st.columns([3, 1])
    with col1:
        keyword = st.text_input("Kata kunci", key="remote_keyword", label_visibility="collapsed")
    with col2:
        clicked = st.button("🔍 Cari", width="stretch")

    if clicked:
        found = client.search_symptoms_remote(keyword)
        if found:
            catalog_table(found)


def show_diseases_explorer(client):
    """Tampilkan UI untuk eksplorasi penyakit."""
    st.subheader("Katalog Hama & Penyakit")
    all_diseases = client.state.diseases

    query = st.text_input("Cari berdasarkan kode, nama, atau nama latin:", key="disease_query")
    results = search_diseases(all_diseases, query)

    st.write(f"Menampilkan **{len(results)}** dari **{len(all_diseases)}** penyakit.")

    if not results:
        st.warning("Tidak ada penyakit yang cocok dengan kriteria pencarian Anda.")
        return

    display_data = [
        {
            "Kode": d.code,
            "Nama": d.name,
            "Nama Latin": d.latin_name or "-",
            "Tingkat Bahaya": d.danger_level or "-",
        }
        for d in results
    ]
    st.dataframe(pd.DataFrame(display_data), width="stretch", hide_index=True)


def run():
    """Fungsi utama untuk menjalankan halaman katalog."""
    page_header("Katalog", "Jelajahi gejala dan hama/penyakit yang dikenal sistem.")
    client = get_client()

    tab1, tab2 = st.tabs(["Gejala", "Hama & Penyakit"])

    with tab1:
        show_symptoms_explorer(client)

    with tab2:
        show_diseases_explorer(client)


if __name__ == "__main__":
    run()
