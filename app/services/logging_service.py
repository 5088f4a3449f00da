# services/logging_service.py

"""
Log sesi konsultasi dan statistik pemakaian client.

Setiap request diagnosis/backward chaining dan setiap kegagalan API
dicatat ke satu file log (berotasi). Statistik penyakit teratas disimpan
di memori selama proses berjalan.
"""

import logging
from logging.handlers import RotatingFileHandler
import os
from typing import Dict, List, Any, Optional, Sequence
from datetime import datetime

from core.models import BackwardChainingResult, DiagnosisResult

LOG_DIR = "logs"
LOG_FILE = os.path.join(LOG_DIR, "consultation_history.log")


def setup_logger(
    name: str = 'ExpertSystemLogger',
    log_file: str = LOG_FILE,
    level: int = logging.INFO
) -> logging.Logger:
    """
    Logger bernama yang menulis ke file berotasi.

    Direktori file log dibuat jika belum ada. Logger yang sudah punya
    handler dikembalikan apa adanya, jadi aman dipanggil berulang kali
    (misalnya pada setiap rerun Streamlit).
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    logger.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # 5MB per file, dengan backup 5 file lama.
    handler = RotatingFileHandler(log_file, maxBytes=5*1024*1024, backupCount=5, encoding='utf-8')
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class LoggingService:
    """Pencatat permintaan ke API sistem pakar beserta hitungan hasilnya."""

    def __init__(
        self,
        logger_name: str = 'ExpertSystemLogger',
        log_file: str = LOG_FILE,
        level: int = logging.INFO
    ):
        """Initialize LoggingService.

        Args:
            logger_name: Nama logger yang akan digunakan
            log_file: Path file log
            level: Level logging
        """
        self.log_file = log_file
        self.logger = setup_logger(logger_name, log_file, level)
        self._disease_counts: Dict[str, int] = {}
        self._disease_names: Dict[str, str] = {}
        self._diagnosis_count = 0
        self._empty_diagnosis_count = 0
        self._backward_count = 0

    def log_diagnosis(
        self,
        symptom_codes: Sequence[str],
        results: Sequence[DiagnosisResult]
    ) -> None:
        """Log satu permintaan diagnosis dan update statistik.

        Args:
            symptom_codes: Kode gejala yang dikirim
            results: Hasil diagnosis sesuai urutan server
        """
        self._diagnosis_count += 1

        if not results:
            self._empty_diagnosis_count += 1
            self.logger.info(
                f"Diagnosis: {len(symptom_codes)} gejala ({', '.join(symptom_codes)}) → tidak ada hasil"
            )
            return

        top = results[0]
        self.logger.info(
            f"Diagnosis: {len(symptom_codes)} gejala ({', '.join(symptom_codes)}) → "
            f"{top.disease.code} {top.disease.name} ({top.confidence:.1f}%), "
            f"{len(results)} kandidat"
        )

        code = top.disease.code
        self._disease_counts[code] = self._disease_counts.get(code, 0) + 1
        self._disease_names[code] = top.disease.name

    def log_backward(self, disease_code: str, result: BackwardChainingResult) -> None:
        """Log satu permintaan backward chaining."""
        self._backward_count += 1
        self.logger.info(
            f"Backward chaining: {disease_code} → {len(result.required_symptoms)} gejala, "
            f"{len(result.control_methods)} metode pengendalian"
        )

    def log_error(self, error_msg: str, exception: Optional[Exception] = None) -> None:
        """Log error message.

        Args:
            error_msg: Error message
            exception: Exception object (optional)
        """
        if exception:
            self.logger.error(f"{error_msg}: {str(exception)}", exc_info=exception)
        else:
            self.logger.error(error_msg)

    def log_info(self, message: str) -> None:
        """Log info message."""
        self.logger.info(message)

    def log_warning(self, message: str) -> None:
        """Log warning message."""
        self.logger.warning(message)

    def get_most_diagnosed(self, top_n: int = 5) -> List[Dict[str, Any]]:
        """Dapatkan penyakit yang paling sering menjadi hasil teratas.

        Args:
            top_n: Jumlah penyakit teratas

        Returns:
            List dictionary berisi kode, nama, dan jumlah
        """
        ranked = sorted(
            self._disease_counts.items(),
            key=lambda x: x[1],
            reverse=True
        )[:top_n]

        return [
            {
                "disease_code": code,
                "disease_name": self._disease_names.get(code, code),
                "count": count,
            }
            for code, count in ranked
        ]

    def get_statistics(self) -> Dict[str, Any]:
        """Dapatkan statistik penggunaan client.

        Returns:
            Dictionary berisi berbagai statistik
        """
        return {
            "total_diagnoses": self._diagnosis_count,
            "empty_diagnoses": self._empty_diagnosis_count,
            "total_backward": self._backward_count,
            "most_diagnosed": self.get_most_diagnosed(top_n=10),
            "log_file": self.log_file,
            "log_file_exists": os.path.exists(self.log_file),
            "log_file_size": os.path.getsize(self.log_file) if os.path.exists(self.log_file) else 0,
            "timestamp": datetime.now().isoformat()
        }

    def clear_statistics(self) -> None:
        """Reset semua statistik in-memory."""
        self._disease_counts = {}
        self._disease_names = {}
        self._diagnosis_count = 0
        self._empty_diagnosis_count = 0
        self._backward_count = 0
        self.logger.warning("Statistik diagnosis direset!")
