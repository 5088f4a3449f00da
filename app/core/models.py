# File: core/models.py

"""Model data yang dipertukarkan dengan API sistem pakar.

Server memakai nama field berbahasa Indonesia (``kd_gejala``, ``nama_penyakit``,
``nama_obat``, ...). Parser di sini juga menerima alias berbahasa Inggris.
Entri yang tidak lengkap dianggap respons rusak dan memicu ``ValueError``.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


def _pick(data: Dict[str, Any], *keys: str) -> Any:
    """Ambil nilai pertama yang tersedia dari beberapa kemungkinan key."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _require_mapping(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValueError(f"{what} harus berupa object JSON, bukan {type(data).__name__}")
    return data


def _require_text(data: Dict[str, Any], what: str, *keys: str) -> str:
    value = _pick(data, *keys)
    if value is None or str(value).strip() == "":
        raise ValueError(f"{what}: field '{keys[0]}' wajib diisi")
    return str(value)


def _optional_text(data: Dict[str, Any], *keys: str) -> Optional[str]:
    value = _pick(data, *keys)
    if value is None or str(value).strip() == "":
        return None
    return str(value)


def _require_list(data: Dict[str, Any], what: str, *keys: str) -> List[Any]:
    value = _pick(data, *keys)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{what}: field '{keys[0]}' harus berupa list")
    return value


@dataclass(frozen=True)
class Symptom:
    """Satu gejala yang dapat diamati pada tanaman."""
    code: str
    description: str

    @classmethod
    def from_api(cls, data: Any) -> "Symptom":
        data = _require_mapping(data, "Gejala")
        return cls(
            code=_require_text(data, "Gejala", "kd_gejala", "code"),
            description=str(_pick(data, "gejala", "description") or ""),
        )


@dataclass(frozen=True)
class Disease:
    """Satu hama/penyakit yang dapat didiagnosis."""
    code: str
    name: str
    latin_name: Optional[str] = None
    description: Optional[str] = None
    danger_level: Optional[str] = None

    @classmethod
    def from_api(cls, data: Any) -> "Disease":
        data = _require_mapping(data, "Penyakit")
        return cls(
            code=_require_text(data, "Penyakit", "kode", "code"),
            name=_require_text(data, "Penyakit", "nama_penyakit", "name"),
            latin_name=_optional_text(data, "nama_latin", "latin_name"),
            description=_optional_text(data, "deskripsi", "description"),
            danger_level=_optional_text(data, "tingkat_bahaya", "danger_level"),
        )


@dataclass(frozen=True)
class Solution:
    """Satu obat/metode pengendalian beserta cara penggunaannya."""
    remedy_name: str
    instructions: str

    @classmethod
    def from_api(cls, data: Any) -> "Solution":
        data = _require_mapping(data, "Solusi")
        return cls(
            remedy_name=str(_pick(data, "nama_obat", "remedy_name") or ""),
            instructions=str(_pick(data, "solusi", "instructions") or ""),
        )


@dataclass(frozen=True)
class DiagnosisResult:
    """Satu kandidat penyakit dari forward chaining, sesuai urutan server."""
    disease: Disease
    confidence: float
    matched_symptoms: Tuple[str, ...] = field(default_factory=tuple)
    solutions: Tuple[Solution, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: Any) -> "DiagnosisResult":
        data = _require_mapping(data, "Hasil diagnosa")
        raw_confidence = data.get("confidence")
        if isinstance(raw_confidence, bool):
            raise ValueError("Hasil diagnosa: confidence harus berupa angka")
        try:
            confidence = float(raw_confidence)
        except (TypeError, ValueError):
            raise ValueError("Hasil diagnosa: confidence harus berupa angka")
        if not math.isfinite(confidence) or not 0 <= confidence <= 100:
            raise ValueError(f"Hasil diagnosa: confidence {raw_confidence!r} di luar rentang 0-100")

        return cls(
            disease=Disease.from_api(data.get("disease")),
            confidence=confidence,
            matched_symptoms=tuple(
                str(code) for code in _require_list(data, "Hasil diagnosa", "matched_symptoms")
            ),
            solutions=tuple(
                Solution.from_api(s) for s in _require_list(data, "Hasil diagnosa", "solutions")
            ),
        )


@dataclass(frozen=True)
class BackwardChainingResult:
    """Gejala dan metode pengendalian yang dibutuhkan untuk satu penyakit."""
    disease: Disease
    required_symptoms: Tuple[Symptom, ...] = field(default_factory=tuple)
    control_methods: Tuple[Solution, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, data: Any) -> "BackwardChainingResult":
        data = _require_mapping(data, "Hasil backward chaining")
        return cls(
            disease=Disease.from_api(_pick(data, "pest", "disease")),
            required_symptoms=tuple(
                Symptom.from_api(s)
                for s in _require_list(data, "Hasil backward chaining", "required_symptoms")
            ),
            control_methods=tuple(
                Solution.from_api(s)
                for s in _require_list(data, "Hasil backward chaining", "control_methods")
            ),
        )
