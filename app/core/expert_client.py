"""Expert System Client.

Modul ini mengkoordinasikan komponen-komponen:
- AppState: katalog gejala/penyakit, pilihan gejala, hasil terakhir
- ExpertApiClient: komunikasi HTTP dengan API sistem pakar
- rendering: konversi hasil API menjadi view model
- ExpertSystemView / ErrorReporter: jalur keluar ke lapisan UI

Client tidak menyimpan state global; semua state ada di AppState yang
diteruskan saat konstruksi.
"""

from __future__ import annotations

from typing import List, Optional, TYPE_CHECKING

from services.api_client import ApiApplicationError, ApiError, ExpertApiClient
from services.error_reporting import ErrorReporter

from .app_state import AppState
from .models import Symptom
from .rendering import BackwardView, DiagnosisView, build_backward_view, build_diagnosis_view
from .search_filter import disease_options, filter_symptoms
from .view import ExpertSystemView

if TYPE_CHECKING:
    from services.logging_service import LoggingService


MSG_LOAD_SYMPTOMS_FAILED = "Gagal memuat data gejala"
MSG_LOAD_DISEASES_FAILED = "Gagal memuat data penyakit"
MSG_DIAGNOSIS_ERROR = "Terjadi kesalahan saat diagnosa"
MSG_DIAGNOSIS_FAILED = "Gagal melakukan diagnosa"
MSG_BACKWARD_ERROR = "Terjadi kesalahan saat analisis"
MSG_BACKWARD_FAILED = "Gagal melakukan analisis"
MSG_SEARCH_EMPTY = "Tidak ada gejala yang ditemukan!"


def _error_message(error: ApiError, application_fallback: str, failure_fallback: str) -> str:
    """Pesan paling spesifik yang tersedia untuk sebuah ApiError."""
    if error.message and isinstance(error, ApiApplicationError):
        return error.message
    if isinstance(error, ApiApplicationError):
        return application_fallback
    return failure_fallback


class ExpertSystemClient:
    """Orchestrator untuk katalog, pilihan gejala, diagnosis, dan backward chaining."""

    def __init__(
        self,
        api: ExpertApiClient,
        view: Optional[ExpertSystemView] = None,
        reporter: Optional[ErrorReporter] = None,
        state: Optional[AppState] = None,
        logging_service: Optional["LoggingService"] = None,
    ):
        self.api = api
        self.view = view or ExpertSystemView()
        self.reporter = reporter
        self.state = state if state is not None else AppState()
        self.logging_service = logging_service

    # ============== HELPERS ==============

    def _report_failure(
        self,
        error: ApiError,
        context: str,
        application_fallback: str,
        failure_fallback: str,
    ) -> None:
        message = _error_message(error, application_fallback, failure_fallback)
        if self.logging_service:
            self.logging_service.log_warning(f"[{context}] {error.kind}: {error}")
        if self.reporter:
            self.reporter.error(message, kind=error.kind, context=context)

    def _set_loading(self, loading: bool) -> None:
        self.state.loading = loading
        self.view.show_loading(loading)
        self.update_selected_symptoms()

    # ============== INISIALISASI & KATALOG ==============

    def init(self) -> None:
        """Muat katalog gejala dan penyakit lalu gambar grid gejala."""
        self.load_symptoms()
        self.load_diseases()
        self.render_symptoms()

    def load_symptoms(self) -> bool:
        """Ganti katalog gejala; katalog lama dipertahankan jika gagal."""
        try:
            symptoms = self.api.get_symptoms()
        except ApiError as e:
            self._report_failure(e, "load_symptoms", MSG_LOAD_SYMPTOMS_FAILED,
                                 MSG_LOAD_SYMPTOMS_FAILED)
            return False

        self.state.symptoms = symptoms
        if self.logging_service:
            self.logging_service.log_info(f"Katalog gejala dimuat: {len(symptoms)} gejala")
        return True

    def load_diseases(self) -> bool:
        """Ganti katalog penyakit dan isi ulang kontrol pilihan penyakit."""
        try:
            diseases = self.api.get_diseases()
        except ApiError as e:
            self._report_failure(e, "load_diseases", MSG_LOAD_DISEASES_FAILED,
                                 MSG_LOAD_DISEASES_FAILED)
            return False

        self.state.diseases = diseases
        self.view.populate_disease_options(disease_options(diseases))
        if self.logging_service:
            self.logging_service.log_info(f"Katalog penyakit dimuat: {len(diseases)} penyakit")
        return True

    # ============== GRID GEJALA & PILIHAN ==============

    def visible_symptoms(self) -> List[Symptom]:
        """Proyeksi katalog sesuai search term yang aktif."""
        return filter_symptoms(self.state.symptoms, self.state.search_term)

    def render_symptoms(self, symptoms: Optional[List[Symptom]] = None) -> None:
        if symptoms is None:
            symptoms = self.visible_symptoms()
        self.view.render_symptoms(symptoms, self.state.selection.current())

    def filter_symptoms(self, search_term: str) -> List[Symptom]:
        """Terapkan filter pencarian tanpa mengubah katalog lengkap."""
        self.state.search_term = search_term or ""
        filtered = self.visible_symptoms()
        self.render_symptoms(filtered)
        return filtered

    def toggle_symptom(self, code: str) -> bool:
        """Pilih/batalkan gejala lalu gambar ulang grid dan ringkasan."""
        selected = self.state.selection.toggle(code)
        self.update_selected_symptoms()
        self.render_symptoms()
        return selected

    def update_selected_symptoms(self) -> None:
        self.view.render_selection(
            self.state.selected_symptoms(),
            len(self.state.selection),
            self.state.can_diagnose(),
        )

    def search_symptoms_remote(self, keyword: str) -> Optional[List[Symptom]]:
        """Cari gejala lewat parameter ``search`` di server.

        Hasilnya hanya diberitahukan ke user; katalog sesi tidak diganti.
        """
        keyword = (keyword or "").strip()
        if not keyword:
            return None

        try:
            found = self.api.get_symptoms(search=keyword)
        except ApiError as e:
            if self.logging_service:
                self.logging_service.log_warning(f"[search] {e.kind}: {e}")
            if self.reporter:
                self.reporter.warning(MSG_SEARCH_EMPTY, context="search")
            return None

        if self.reporter:
            if found:
                self.reporter.info(
                    f'Ditemukan {len(found)} gejala yang cocok dengan "{keyword}"',
                    context="search",
                )
            else:
                self.reporter.warning(MSG_SEARCH_EMPTY, context="search")
        return found

    # ============== FORWARD CHAINING ==============

    def perform_diagnosis(self) -> Optional[DiagnosisView]:
        """Kirim gejala terpilih ke endpoint diagnosa.

        Tidak melakukan apa-apa jika pilihan kosong atau request lain masih berjalan.
        """
        if self.state.selection.is_empty() or self.state.loading:
            return None

        codes = self.state.selection.as_list()
        self._set_loading(True)
        try:
            results = self.api.diagnose(codes)
        except ApiError as e:
            self._report_failure(e, "diagnosis", MSG_DIAGNOSIS_ERROR, MSG_DIAGNOSIS_FAILED)
            return None
        finally:
            self._set_loading(False)

        if self.logging_service:
            self.logging_service.log_diagnosis(codes, results)

        view = build_diagnosis_view(results, self.state.symptom_index(), codes)
        self.state.last_diagnosis = view
        self.view.render_diagnosis(view)
        return view

    # ============== BACKWARD CHAINING ==============

    def select_disease(self, disease_code: Optional[str]) -> Optional[BackwardView]:
        """Handler perubahan kontrol pilihan penyakit."""
        self.state.selected_disease = disease_code or ""
        if not disease_code:
            self.state.last_backward = None
            self.view.hide_backward()
            return None
        return self.perform_backward_chaining(disease_code)

    def sync_selected_disease(self, disease_code: Optional[str]) -> Optional[BackwardView]:
        """Samakan panel backward dengan nilai kontrol pilihan penyakit saat ini.

        Kontrol bisa kembali ke placeholder tanpa event perubahan (misalnya
        setelah pindah halaman); panel lama harus ikut disembunyikan.
        """
        if (disease_code or "") == self.state.selected_disease:
            return self.state.last_backward
        return self.select_disease(disease_code)

    def perform_backward_chaining(self, disease_code: str) -> Optional[BackwardView]:
        if self.state.loading:
            return None

        self._set_loading(True)
        try:
            result = self.api.backward(disease_code)
        except ApiError as e:
            self._report_failure(e, "backward", MSG_BACKWARD_ERROR, MSG_BACKWARD_FAILED)
            return None
        finally:
            self._set_loading(False)

        if self.logging_service:
            self.logging_service.log_backward(disease_code, result)

        view = build_backward_view(result)
        self.state.last_backward = view
        self.view.render_backward(view)
        return view
