"""
App State Module
Menyimpan katalog, gejala yang dipilih, dan hasil terakhir selama satu sesi
"""

from typing import Dict, FrozenSet, List, Optional, Set, TYPE_CHECKING
from dataclasses import dataclass, field
from datetime import datetime

from .models import Symptom, Disease

if TYPE_CHECKING:
    from .rendering import DiagnosisView, BackwardView


class SymptomSelection:
    """
    Himpunan kode gejala yang sedang dipilih user.
    Tidak berurutan, unik per kode, dan hanya berubah lewat toggle.
    """

    def __init__(self, codes: Optional[List[str]] = None):
        self._codes: Set[str] = set(codes or [])

    def toggle(self, code: str) -> bool:
        """
        Tambahkan gejala jika belum dipilih, hapus jika sudah.

        Returns:
            True jika gejala sekarang terpilih, False jika baru saja dihapus
        """
        if code in self._codes:
            self._codes.discard(code)
            return False
        self._codes.add(code)
        return True

    def current(self) -> FrozenSet[str]:
        """Salinan beku dari semua kode yang dipilih"""
        return frozenset(self._codes)

    def is_empty(self) -> bool:
        return not self._codes

    def as_list(self) -> List[str]:
        """Kode terpilih sebagai list terurut, untuk dikirim ke API"""
        return sorted(self._codes)

    def __contains__(self, code: object) -> bool:
        return code in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __repr__(self) -> str:
        return f"SymptomSelection({self.as_list()})"


@dataclass
class AppState:
    """
    State aplikasi untuk satu sesi pengguna.
    Dibuat secara eksplisit lalu diteruskan ke ExpertSystemClient.
    """
    symptoms: List[Symptom] = field(default_factory=list)
    diseases: List[Disease] = field(default_factory=list)
    selection: SymptomSelection = field(default_factory=SymptomSelection)
    search_term: str = ""
    loading: bool = False
    last_diagnosis: Optional["DiagnosisView"] = None
    last_backward: Optional["BackwardView"] = None
    selected_disease: str = ""
    session_id: str = field(default_factory=lambda: datetime.now().strftime("%Y%m%d_%H%M%S"))

    def symptom_index(self) -> Dict[str, Symptom]:
        """Lookup kode -> gejala dari katalog yang sudah dimuat"""
        return {s.code: s for s in self.symptoms}

    def find_symptom(self, code: str) -> Optional[Symptom]:
        return self.symptom_index().get(code)

    def selected_symptoms(self) -> List[Symptom]:
        """
        Gejala terpilih yang dikenal katalog, mengikuti urutan katalog.
        Kode yang tidak ada di katalog dilewati.
        """
        return [s for s in self.symptoms if s.code in self.selection]

    def can_diagnose(self) -> bool:
        return not self.selection.is_empty() and not self.loading

    def get_summary(self) -> Dict:
        """Ambil ringkasan state untuk debugging/logging"""
        return {
            "session_id": self.session_id,
            "symptoms_loaded": len(self.symptoms),
            "diseases_loaded": len(self.diseases),
            "selected": self.selection.as_list(),
            "search_term": self.search_term,
            "loading": self.loading,
        }

    def __repr__(self) -> str:
        return (
            f"AppState(symptoms={len(self.symptoms)}, diseases={len(self.diseases)}, "
            f"selected={len(self.selection)}, session={self.session_id})"
        )
