"""Result Renderer.

Mengubah hasil diagnosis (forward) dan backward chaining menjadi view model
yang siap ditampilkan oleh lapisan UI mana pun:
- klasifikasi tingkat keyakinan (high / medium / low)
- resolusi kode gejala ke teks gejala, dengan fallback ke kode mentah
- daftar solusi, dengan pesan eksplisit jika kosong

Semua fungsi di sini murni dan tidak bergantung pada Streamlit.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence
from dataclasses import dataclass, field
import math

from .models import BackwardChainingResult, DiagnosisResult, Disease, Solution, Symptom


HIGH_CONFIDENCE = 80
MEDIUM_CONFIDENCE = 60

NO_DESCRIPTION = "Tidak ada deskripsi"
UNKNOWN = "Tidak diketahui"
NO_SOLUTIONS = "Tidak ada solusi tersedia untuk penyakit ini."
NO_REQUIRED_SYMPTOMS = "Tidak ada gejala spesifik yang diperlukan."
EMPTY_DIAGNOSIS_TITLE = "Tidak Ada Diagnosa Ditemukan"
EMPTY_DIAGNOSIS_MESSAGE = (
    "Kombinasi gejala yang dipilih tidak cocok dengan penyakit yang ada dalam database. "
    "Silakan periksa kembali gejala atau konsultasi dengan ahli."
)


def classify_confidence(confidence: float) -> str:
    """Klasifikasikan confidence (0-100) ke tier 'high', 'medium', atau 'low'."""
    if confidence >= HIGH_CONFIDENCE:
        return "high"
    if confidence >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"


def round_confidence(confidence: float) -> int:
    """Bulatkan ke integer terdekat, nilai .5 selalu dibulatkan ke atas."""
    return int(math.floor(confidence + 0.5))


def format_confidence(confidence: float) -> str:
    return f"{round_confidence(confidence)}% Yakin"


def resolve_symptom_text(code: str, catalog: Mapping[str, Symptom]) -> str:
    """Teks gejala untuk sebuah kode, atau kode itu sendiri jika tidak dikenal."""
    symptom = catalog.get(code)
    return symptom.description if symptom else code


@dataclass
class SolutionsView:
    """Daftar solusi yang sudah siap tampil."""
    items: List[Solution] = field(default_factory=list)
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    def to_rows(self) -> List[Dict[str, str]]:
        return [{"nama_obat": s.remedy_name, "solusi": s.instructions} for s in self.items]


def render_solutions(solutions: Optional[Iterable[Solution]]) -> SolutionsView:
    items = list(solutions or [])
    if not items:
        return SolutionsView(items=[], empty_message=NO_SOLUTIONS)
    return SolutionsView(items=items)


@dataclass
class DiseaseInfo:
    """Metadata penyakit dengan fallback teks untuk field yang kosong."""
    code: str
    name: str
    latin_name: str
    description: str
    danger_level: str

    @classmethod
    def from_disease(cls, disease: Disease) -> "DiseaseInfo":
        return cls(
            code=disease.code,
            name=disease.name,
            latin_name=disease.latin_name or UNKNOWN,
            description=disease.description or NO_DESCRIPTION,
            danger_level=disease.danger_level or UNKNOWN,
        )


@dataclass
class DiagnosisCard:
    """Satu kartu hasil diagnosis."""
    rank: int
    disease: DiseaseInfo
    confidence: float
    confidence_label: str
    tier: str
    matched_symptoms: List[str]
    solutions: SolutionsView

    @property
    def css_class(self) -> str:
        return f"confidence-{self.tier}"

    def to_row(self) -> Dict[str, Any]:
        """Convert ke format dict untuk tabel/laporan."""
        return {
            "rank": self.rank,
            "kode": self.disease.code,
            "nama_penyakit": self.disease.name,
            "keyakinan": self.confidence_label,
            "tier": self.tier,
            "gejala_cocok": ", ".join(self.matched_symptoms),
            "jumlah_solusi": len(self.solutions.items),
        }


@dataclass
class DiagnosisView:
    """Hasil diagnosis lengkap; kosong berarti tidak ada penyakit yang cocok."""
    cards: List[DiagnosisCard] = field(default_factory=list)
    submitted_symptoms: List[str] = field(default_factory=list)
    empty_title: Optional[str] = None
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def top(self) -> Optional[DiagnosisCard]:
        return self.cards[0] if self.cards else None


def build_diagnosis_view(
    results: Sequence[DiagnosisResult],
    catalog: Mapping[str, Symptom],
    submitted_codes: Optional[Sequence[str]] = None,
) -> DiagnosisView:
    """Bangun view diagnosis. Urutan hasil dari server dipertahankan apa adanya."""
    submitted = [resolve_symptom_text(code, catalog) for code in (submitted_codes or [])]

    if not results:
        return DiagnosisView(
            cards=[],
            submitted_symptoms=submitted,
            empty_title=EMPTY_DIAGNOSIS_TITLE,
            empty_message=EMPTY_DIAGNOSIS_MESSAGE,
        )

    cards = []
    for rank, result in enumerate(results, 1):
        cards.append(DiagnosisCard(
            rank=rank,
            disease=DiseaseInfo.from_disease(result.disease),
            confidence=result.confidence,
            confidence_label=format_confidence(result.confidence),
            tier=classify_confidence(result.confidence),
            matched_symptoms=[resolve_symptom_text(c, catalog) for c in result.matched_symptoms],
            solutions=render_solutions(result.solutions),
        ))
    return DiagnosisView(cards=cards, submitted_symptoms=submitted)


@dataclass
class BackwardView:
    """Hasil backward chaining: info penyakit, gejala wajib, dan pengendalian."""
    disease: DiseaseInfo
    required_symptoms: List[Symptom]
    control_methods: SolutionsView
    empty_symptoms_message: Optional[str] = None

    @property
    def has_required_symptoms(self) -> bool:
        return bool(self.required_symptoms)


def build_backward_view(result: BackwardChainingResult) -> BackwardView:
    required = list(result.required_symptoms)
    return BackwardView(
        disease=DiseaseInfo.from_disease(result.disease),
        required_symptoms=required,
        control_methods=render_solutions(result.control_methods),
        empty_symptoms_message=None if required else NO_REQUIRED_SYMPTOMS,
    )
