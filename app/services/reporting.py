# services/reporting.py

"""
Service untuk generate laporan dari hasil diagnosis.

Menyediakan fungsi untuk:
- Generate TXT reports
- Generate PDF reports (fpdf2)
- Export ringkasan hasil ke bentuk tabel (list of dict)

Laporan dibangun dari DiagnosisView, sehingga isinya sama persis dengan yang
ditampilkan di UI (termasuk fallback teks dan pesan keadaan kosong).
"""

import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from fpdf import FPDF

from core.rendering import DiagnosisCard, DiagnosisView


def _latin1(text: str) -> str:
    """Font inti PDF hanya mendukung latin-1; karakter lain diganti '?'."""
    return text.encode('latin-1', 'replace').decode('latin-1')


class ReportingService:
    """Kelas untuk menghasilkan laporan dari hasil diagnosis."""

    def __init__(self, output_dir: str = "reports"):
        """Initialize ReportingService.

        Args:
            output_dir: Direktori untuk menyimpan reports
        """
        os.makedirs(output_dir, exist_ok=True)
        self.output_dir = output_dir

    def _generate_filename(self, extension: str) -> str:
        """Membuat nama file unik berdasarkan timestamp."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return os.path.join(self.output_dir, f"diagnosa_{timestamp}.{extension}")

    def card_details(self, card: DiagnosisCard) -> List[str]:
        """Baris detail satu kartu; dipakai bersama oleh laporan TXT dan PDF."""
        info = card.disease
        return [
            f"Tingkat Keyakinan: {card.tier}",
            f"Penyebab: {info.description}",
            f"Nama Latin: {info.latin_name}",
            f"Tingkat Bahaya: {info.danger_level}",
        ]

    def summary_rows(self, view: DiagnosisView) -> List[Dict[str, Any]]:
        """Ringkasan satu baris per kandidat penyakit."""
        return [card.to_row() for card in view.cards]

    def render_txt(self, view: DiagnosisView, generated_at: Optional[datetime] = None) -> str:
        """Susun isi laporan TXT sebagai string."""
        generated_at = generated_at or datetime.now()
        lines = [
            "=" * 40,
            "      LAPORAN HASIL DIAGNOSA",
            "=" * 40,
            f"Tanggal: {generated_at.strftime('%d-%m-%Y %H:%M:%S')}",
            "",
            "GEJALA YANG DIPILIH:",
        ]

        if view.submitted_symptoms:
            lines.extend(f"  - {text}" for text in view.submitted_symptoms)
        else:
            lines.append("  (Tidak ada detail gejala)")

        lines.extend(["", "=" * 40, ""])

        if view.is_empty:
            lines.append(f"HASIL: {view.empty_title}")
            lines.append(view.empty_message or "")
            return "\n".join(lines) + "\n"

        for card in view.cards:
            info = card.disease
            lines.append(f"--- {card.rank}. {info.name.upper()} ({card.confidence_label}) ---")
            lines.extend(self.card_details(card))
            lines.append("Gejala yang Cocok:")
            lines.extend(f"  - {text}" for text in card.matched_symptoms)
            lines.append("Solusi Pengobatan:")
            if card.solutions.is_empty:
                lines.append(f"  {card.solutions.empty_message}")
            else:
                for solution in card.solutions.items:
                    lines.append(f"  * {solution.remedy_name}: {solution.instructions}")
            lines.append("")

        return "\n".join(lines) + "\n"

    def generate_txt_report(self, view: DiagnosisView) -> str:
        """
        Membuat laporan TXT dari hasil diagnosis.

        Args:
            view (DiagnosisView): Hasil diagnosis yang sudah dirender.

        Returns:
            str: Path ke file laporan yang telah dibuat.
        """
        filepath = self._generate_filename("txt")
        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(self.render_txt(view))
        return filepath

    def build_pdf(self, view: DiagnosisView) -> FPDF:
        """Susun dokumen PDF dari hasil diagnosis."""
        pdf = FPDF()
        pdf.add_page()

        pdf.set_font("Helvetica", 'B', 16)
        pdf.cell(0, 10, "Laporan Hasil Diagnosa", new_x="LMARGIN", new_y="NEXT", align='C')
        pdf.set_font("Helvetica", '', 10)
        pdf.cell(0, 5, f"Tanggal: {datetime.now().strftime('%d-%m-%Y %H:%M:%S')}",
                 new_x="LMARGIN", new_y="NEXT", align='C')
        pdf.ln(5)

        def heading(text: str, size: int = 11):
            pdf.set_font("Helvetica", 'B', size)
            pdf.cell(0, 8, _latin1(text), new_x="LMARGIN", new_y="NEXT")

        def paragraph(text: str):
            pdf.set_font("Helvetica", '', 11)
            pdf.multi_cell(0, 5, _latin1(text), new_x="LMARGIN", new_y="NEXT")

        heading("Gejala yang Dipilih:")
        paragraph(", ".join(view.submitted_symptoms) or "(Tidak ada detail gejala)")
        pdf.ln(5)

        if view.is_empty:
            heading(view.empty_title or "", size=12)
            paragraph(view.empty_message or "")
            return pdf

        for card in view.cards:
            info = card.disease
            heading(f"{card.rank}. {info.name} - {card.confidence_label}", size=13)
            for detail in self.card_details(card):
                paragraph(detail)
            heading("Gejala yang Cocok:")
            paragraph(", ".join(card.matched_symptoms) or "-")
            heading("Solusi Pengobatan:")
            if card.solutions.is_empty:
                paragraph(card.solutions.empty_message or "")
            else:
                for solution in card.solutions.items:
                    paragraph(f"{solution.remedy_name}: {solution.instructions}")
            pdf.ln(4)

        return pdf

    def generate_pdf_report(self, view: DiagnosisView) -> str:
        """
        Membuat laporan PDF dari hasil diagnosis.

        Returns:
            str: Path ke file laporan yang telah dibuat.
        """
        filepath = self._generate_filename("pdf")
        self.build_pdf(view).output(filepath)
        return filepath

    def pdf_bytes(self, view: DiagnosisView) -> bytes:
        """Isi PDF sebagai bytes, untuk tombol download di UI."""
        return bytes(self.build_pdf(view).output())
