# services/error_reporting.py

"""
Antarmuka pelaporan error yang terstruktur.

Setiap kegagalan yang perlu diketahui user dibungkus dalam ErrorReport
(severity + pesan). Cara menampilkannya (modal, toast, banner) diserahkan ke
lapisan UI; service ini hanya menyediakan reporter untuk log dan untuk
pengumpulan di memori.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

SEVERITY_INFO = "info"
SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"

SEVERITIES = (SEVERITY_INFO, SEVERITY_WARNING, SEVERITY_ERROR)


@dataclass
class ErrorReport:
    """Satu notifikasi untuk user."""
    severity: str
    message: str
    kind: Optional[str] = None  # 'transport', 'malformed', 'application'
    context: Optional[str] = None  # misal: 'diagnosis', 'load_symptoms'
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Severity tidak dikenal: {self.severity}")


class ErrorReporter:
    """Basis reporter. Subclass wajib mengimplementasikan report()."""

    def report(self, report: ErrorReport) -> None:
        raise NotImplementedError

    def error(self, message: str, kind: Optional[str] = None, context: Optional[str] = None) -> None:
        self.report(ErrorReport(SEVERITY_ERROR, message, kind, context))

    def warning(self, message: str, context: Optional[str] = None) -> None:
        self.report(ErrorReport(SEVERITY_WARNING, message, context=context))

    def info(self, message: str, context: Optional[str] = None) -> None:
        self.report(ErrorReport(SEVERITY_INFO, message, context=context))


class LoggingErrorReporter(ErrorReporter):
    """Menulis setiap laporan ke logger dengan level yang sesuai."""

    _LEVELS = {
        SEVERITY_INFO: logging.INFO,
        SEVERITY_WARNING: logging.WARNING,
        SEVERITY_ERROR: logging.ERROR,
    }

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def report(self, report: ErrorReport) -> None:
        prefix = f"[{report.context}] " if report.context else ""
        suffix = f" ({report.kind})" if report.kind else ""
        self.logger.log(self._LEVELS[report.severity], f"{prefix}{report.message}{suffix}")


class CollectingErrorReporter(ErrorReporter):
    """Menampung laporan di memori; bisa meneruskan ke reporter lain."""

    def __init__(self, forward_to: Optional[ErrorReporter] = None):
        self.reports: List[ErrorReport] = []
        self.forward_to = forward_to

    def report(self, report: ErrorReport) -> None:
        self.reports.append(report)
        if self.forward_to is not None:
            self.forward_to.report(report)

    def drain(self) -> List[ErrorReport]:
        """Ambil semua laporan yang tertampung lalu kosongkan."""
        drained, self.reports = self.reports, []
        return drained

    @property
    def messages(self) -> List[str]:
        return [r.message for r in self.reports]
