import streamlit as st

from ui.bootstrap import get_config, get_logger

CONFIG = get_config()

st.set_page_config(
    page_title=CONFIG["app"]["name"],
    page_icon=CONFIG["app"]["page_icon"],
    layout="wide",
    initial_sidebar_state="expanded"
)

# Sidebar hanya untuk informasi, tidak ada navigasi manual
st.sidebar.title(f"{CONFIG['app']['page_icon']} {CONFIG['app']['name']}")
st.sidebar.caption("Frontend GUI – Streamlit")

st.sidebar.divider()
st.sidebar.markdown("### ⚙️ Konfigurasi Sistem")
st.sidebar.info(f"**API:** `{CONFIG['api']['base_url']}`")
st.sidebar.info(f"**Timeout:** {CONFIG['api']['timeout']} detik")

if CONFIG["ui"].get("show_statistics"):
    stats = get_logger().get_statistics()
    st.sidebar.divider()
    st.sidebar.markdown("### 📊 Statistik Penggunaan")
    st.sidebar.caption(
        f"Diagnosa: {stats['total_diagnoses']} | Tanpa hasil: {stats['empty_diagnoses']} | "
        f"Backward: {stats['total_backward']}"
    )
    for item in stats["most_diagnosed"][:3]:
        st.sidebar.caption(f"• {item['disease_code']} {item['disease_name']} ({item['count']}×)")

# Konten halaman utama
st.title(f"{CONFIG['app']['page_icon']} {CONFIG['app']['name']}")
st.markdown("### Selamat Datang di Sistem Diagnosis Hama & Penyakit Tanaman")

col1, col2 = st.columns([2, 1])

with col1:
    st.markdown("""
    Aplikasi ini adalah antarmuka untuk **sistem pakar** yang mendiagnosis hama dan penyakit
    tanaman. Proses inferensi dijalankan di server; aplikasi ini mengirim gejala yang Anda
    pilih dan menampilkan hasilnya.

    #### 🎯 Cara Kerja Sistem:
    1. **Pilih gejala** yang terlihat pada tanaman
    2. Sistem mengirim gejala ke mesin inferensi (**Forward Chaining**)
    3. **Dapatkan hasil diagnosis** lengkap dengan tingkat keyakinan dan solusi pengobatan
    4. Gunakan **Backward Chaining** untuk melihat gejala yang dibutuhkan suatu hama
    """)

with col2:
    st.info("""
    **🎚️ Tingkat Keyakinan**

    - 🟢 **Tinggi**: ≥ 80%
    - 🟡 **Sedang**: 60% – 79%
    - 🔴 **Rendah**: < 60%
    """)

st.divider()

st.markdown("### 🚀 Fitur-Fitur Sistem")

feature_cols = st.columns(3)

with feature_cols[0]:
    st.markdown("#### 🔍 Diagnosis")
    st.markdown("""
    Pilih gejala, jalankan diagnosa, lalu unduh laporan hasilnya (TXT/PDF).
    """)

with feature_cols[1]:
    st.markdown("#### 🔁 Backward Chaining")
    st.markdown("""
    Pilih hama/penyakit untuk melihat gejala yang diperlukan dan metode pengendaliannya.
    """)

with feature_cols[2]:
    st.markdown("#### 🗂️ Katalog Gejala")
    st.markdown("""
    Jelajahi dan cari seluruh gejala serta penyakit yang dikenal sistem.
    """)

st.divider()

st.markdown("---")
footer_cols = st.columns([2, 1])

with footer_cols[0]:
    st.caption("""
    **Sistem Pakar Hama & Penyakit Tanaman** | Client Streamlit
    """)

with footer_cols[1]:
    st.caption("""
    💡 **Mulai diagnosis** dengan memilih menu **Diagnosis** di sidebar →
    """)
