"""Antarmuka pembaruan tampilan untuk ExpertSystemClient.

Client hanya berbicara dengan kelas ini, sehingga logika pemuatan, diagnosis,
dan klasifikasi dapat diuji tanpa Streamlit. Implementasi default tidak
melakukan apa-apa; lapisan UI cukup meng-override method yang dibutuhkan.
"""

from typing import List, Sequence, Tuple

from .models import Symptom
from .rendering import BackwardView, DiagnosisView


class ExpertSystemView:
    """Kumpulan hook yang dipanggil client setiap kali state berubah."""

    def render_symptoms(self, symptoms: Sequence[Symptom], selected: frozenset) -> None:
        """Gambar ulang grid gejala (terpilih / tidak terpilih)."""

    def render_selection(self, selected: List[Symptom], count: int, diagnose_enabled: bool) -> None:
        """Gambar ulang panel ringkasan gejala terpilih dan status tombol diagnosa."""

    def populate_disease_options(self, options: List[Tuple[str, str]]) -> None:
        """Isi kontrol pilihan penyakit untuk backward chaining."""

    def render_diagnosis(self, view: DiagnosisView) -> None:
        """Tampilkan hasil diagnosis (termasuk keadaan kosong)."""

    def render_backward(self, view: BackwardView) -> None:
        """Tampilkan panel hasil backward chaining."""

    def hide_backward(self) -> None:
        """Sembunyikan panel hasil backward chaining."""

    def show_loading(self, show: bool) -> None:
        """Tampilkan atau sembunyikan indikator loading."""
