"""Modul Search & Filter untuk katalog gejala dan penyakit.

Menyediakan fungsi untuk mencari dan memfilter data yang sudah dimuat dari API:
- Gejala (symptoms): cocokkan kode dan teks gejala
- Penyakit (diseases): cocokkan kode, nama, dan nama latin

Semua fungsi bersifat murni: katalog asli tidak pernah diubah, hasilnya
selalu list baru. Pencocokan adalah substring tanpa membedakan huruf besar/kecil.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Sequence, Tuple
import re

from .models import Disease, Symptom


PLACEHOLDER_OPTION = ("", "-- Pilih Hama --")


def _contains(value: Optional[str], needle: str) -> bool:
    return bool(value) and needle in value.lower()


def filter_symptoms(symptoms: Sequence[Symptom], search_term: Optional[str]) -> List[Symptom]:
    """Filter gejala berdasarkan kode atau teks gejala.

    Term kosong mengembalikan seluruh katalog.
    """
    if not search_term:
        return list(symptoms)

    needle = search_term.lower()
    return [
        s for s in symptoms
        if _contains(s.description, needle) or _contains(s.code, needle)
    ]


def search_diseases(diseases: Sequence[Disease], query: Optional[str] = None) -> List[Disease]:
    """Cari penyakit berdasarkan kode, nama, atau nama latin."""
    if not query:
        return list(diseases)

    needle = query.lower()
    return [
        d for d in diseases
        if _contains(d.code, needle) or _contains(d.name, needle) or _contains(d.latin_name, needle)
    ]


def disease_options(diseases: Iterable[Disease]) -> List[Tuple[str, str]]:
    """Opsi untuk kontrol pilihan penyakit: placeholder lalu '<kode> - <nama>'."""
    options = [PLACEHOLDER_OPTION]
    for d in diseases:
        options.append((d.code, f"{d.code} - {d.name}"))
    return options


def highlight_search_term(text: str, query: str) -> str:
    """Highlight query di dalam text untuk tampilan UI (gunakan markdown bold)."""
    if not query or not text:
        return text

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda m: f"**{m.group(0)}**", text)
