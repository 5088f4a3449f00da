"""Test untuk modul-modul di core/.

File ini menguji:
- app_state.py: SymptomSelection dan AppState
- rendering.py: klasifikasi confidence, view diagnosis & backward chaining
- search_filter.py: filter katalog gejala dan penyakit
- models.py: parsing respons API
- expert_client.py: orchestrasi dengan API, view, dan reporter tiruan

Jalankan dengan: python -m pytest app/tests/test_core.py -v
Atau: python app/tests/test_core.py (standalone)
"""

import sys
from pathlib import Path

# Tambahkan app/ ke Python path agar bisa import module
app_dir = Path(__file__).parent.parent
sys.path.insert(0, str(app_dir))

from core.app_state import AppState, SymptomSelection
from core.expert_client import ExpertSystemClient
from core.models import BackwardChainingResult, DiagnosisResult, Disease, Solution, Symptom
from core.rendering import (
    EMPTY_DIAGNOSIS_TITLE, NO_DESCRIPTION, NO_REQUIRED_SYMPTOMS, NO_SOLUTIONS, UNKNOWN,
    build_backward_view, build_diagnosis_view, classify_confidence, format_confidence,
    round_confidence,
)
from core.search_filter import disease_options, filter_symptoms, highlight_search_term, search_diseases
from services.api_client import ApiApplicationError, ApiResponseError, ApiTransportError
from services.error_reporting import CollectingErrorReporter
from tests.fakes import FakeApi, RecordingView


SYMPTOMS = [
    Symptom("S1", "Daun menguning"),
    Symptom("S2", "Bercak coklat pada batang"),
    Symptom("S3", "Ulat pada pucuk daun"),
]

WERENG = Disease("P1", "Wereng Coklat", latin_name="Nilaparvata lugens",
                 description="Serangga penghisap cairan", danger_level="Tinggi")
BLAS = Disease("P2", "Blas")


class TestSymptomSelection:
    """Test suite untuk SymptomSelection."""

    def setup_method(self):
        self.selection = SymptomSelection()

    def test_double_toggle_restores_selection(self):
        """Toggle dua kali mengembalikan himpunan ke keadaan awal."""
        self.selection.toggle("S1")
        before = self.selection.current()

        self.selection.toggle("S2")
        self.selection.toggle("S2")

        assert self.selection.current() == before
        print(f"✓ Double toggle idempotent: {self.selection}")

    def test_toggle_returns_new_state(self):
        assert self.selection.toggle("S1") is True
        assert "S1" in self.selection
        assert self.selection.toggle("S1") is False
        assert "S1" not in self.selection
        assert self.selection.is_empty()

    def test_current_is_a_frozen_copy(self):
        self.selection.toggle("S1")
        snapshot = self.selection.current()
        self.selection.toggle("S2")

        assert snapshot == frozenset({"S1"})
        assert len(self.selection) == 2

    def test_as_list_is_sorted(self):
        for code in ["S3", "S1", "S2"]:
            self.selection.toggle(code)
        assert self.selection.as_list() == ["S1", "S2", "S3"]


class TestAppState:
    """Test suite untuk AppState."""

    def test_selected_symptoms_skip_unknown_codes(self):
        state = AppState(symptoms=list(SYMPTOMS))
        state.selection.toggle("S2")
        state.selection.toggle("X9")

        assert [s.code for s in state.selected_symptoms()] == ["S2"]
        print(f"✓ Selected symptoms resolved: {state}")

    def test_can_diagnose(self):
        state = AppState()
        assert not state.can_diagnose()

        state.selection.toggle("S1")
        assert state.can_diagnose()

        state.loading = True
        assert not state.can_diagnose()


class TestConfidence:
    """Test suite untuk klasifikasi dan format confidence."""

    def test_tiers_are_total_and_monotonic(self):
        values = [0, 59, 60, 79, 80, 100]
        tiers = [classify_confidence(v) for v in values]

        assert tiers == ["low", "low", "medium", "medium", "high", "high"]
        print(f"✓ Confidence tiers: {list(zip(values, tiers))}")

    def test_fractional_boundaries(self):
        assert classify_confidence(59.99) == "low"
        assert classify_confidence(79.99) == "medium"
        assert classify_confidence(80.0) == "high"

    def test_rounding_half_up(self):
        assert round_confidence(84.5) == 85
        assert round_confidence(84.49) == 84
        assert round_confidence(0.5) == 1
        assert format_confidence(85) == "85% Yakin"
        assert format_confidence(66.6) == "67% Yakin"


class TestSearchFilter:
    """Test suite untuk search_filter."""

    def test_filter_by_unique_description_case_insensitive(self):
        results = filter_symptoms(SYMPTOMS, "ULAT")

        assert results == [SYMPTOMS[2]]
        print(f"✓ Filter 'ULAT': {results}")

    def test_filter_matches_code(self):
        results = filter_symptoms(SYMPTOMS, "s2")
        assert [s.code for s in results] == ["S2"]

    def test_filter_does_not_mutate_catalog(self):
        catalog = list(SYMPTOMS)
        results = filter_symptoms(catalog, "daun")

        assert len(results) == 2
        assert catalog == SYMPTOMS
        assert results is not catalog

    def test_empty_term_returns_everything(self):
        assert filter_symptoms(SYMPTOMS, "") == SYMPTOMS
        assert filter_symptoms(SYMPTOMS, None) == SYMPTOMS

    def test_search_diseases_by_latin_name(self):
        results = search_diseases([WERENG, BLAS], "nilaparvata")
        assert results == [WERENG]

    def test_disease_options_start_with_placeholder(self):
        options = disease_options([WERENG, BLAS])

        assert options[0] == ("", "-- Pilih Hama --")
        assert options[1:] == [("P1", "P1 - Wereng Coklat"), ("P2", "P2 - Blas")]

    def test_highlight_search_term(self):
        assert highlight_search_term("Daun menguning", "DAUN") == "**Daun** menguning"


class TestRendering:
    """Test suite untuk view model diagnosis dan backward chaining."""

    def setup_method(self):
        self.catalog = {s.code: s for s in SYMPTOMS}

    def test_server_order_is_preserved(self):
        results = [
            DiagnosisResult(BLAS, 40.0, ("S1",)),
            DiagnosisResult(WERENG, 90.0, ("S2",)),
        ]
        view = build_diagnosis_view(results, self.catalog)

        assert [c.disease.code for c in view.cards] == ["P2", "P1"]
        assert [c.rank for c in view.cards] == [1, 2]
        assert [c.tier for c in view.cards] == ["low", "high"]

    def test_unknown_symptom_code_falls_back_to_raw_code(self):
        view = build_diagnosis_view([DiagnosisResult(WERENG, 70, ("S1", "G99"))], self.catalog)

        assert view.cards[0].matched_symptoms == ["Daun menguning", "G99"]
        print(f"✓ Fallback kode mentah: {view.cards[0].matched_symptoms}")

    def test_empty_results_render_empty_state(self):
        view = build_diagnosis_view([], self.catalog, ["S1"])

        assert view.is_empty
        assert view.empty_title == EMPTY_DIAGNOSIS_TITLE
        assert view.empty_message
        assert view.submitted_symptoms == ["Daun menguning"]

    def test_missing_solutions_render_explicit_message(self):
        view = build_diagnosis_view([DiagnosisResult(BLAS, 65, ())], self.catalog)
        card = view.cards[0]

        assert card.solutions.is_empty
        assert card.solutions.empty_message == NO_SOLUTIONS
        assert card.css_class == "confidence-medium"

    def test_disease_metadata_fallbacks(self):
        card = build_diagnosis_view([DiagnosisResult(BLAS, 10, ())], self.catalog).cards[0]

        assert card.disease.description == NO_DESCRIPTION
        assert card.disease.latin_name == UNKNOWN
        assert card.disease.danger_level == UNKNOWN

    def test_backward_without_required_symptoms(self):
        view = build_backward_view(BackwardChainingResult(WERENG, (), ()))

        assert not view.has_required_symptoms
        assert view.empty_symptoms_message == NO_REQUIRED_SYMPTOMS
        assert view.control_methods.empty_message == NO_SOLUTIONS

    def test_backward_with_control_methods(self):
        solution = Solution("Imidakloprid", "Semprot 2 ml/L")
        view = build_backward_view(BackwardChainingResult(WERENG, (SYMPTOMS[0],), (solution,)))

        assert view.required_symptoms == [SYMPTOMS[0]]
        assert view.empty_symptoms_message is None
        assert view.control_methods.to_rows() == [{"nama_obat": "Imidakloprid", "solusi": "Semprot 2 ml/L"}]


class TestModels:
    """Test suite untuk parsing model dari respons API."""

    def test_symptom_from_indonesian_keys(self):
        s = Symptom.from_api({"kd_gejala": "G01", "gejala": "Daun berlubang"})
        assert s == Symptom("G01", "Daun berlubang")

    def test_disease_from_api_with_optional_fields(self):
        d = Disease.from_api({"kode": "P1", "nama_penyakit": "Wereng", "nama_latin": ""})

        assert d.code == "P1"
        assert d.name == "Wereng"
        assert d.latin_name is None
        assert d.danger_level is None

    def test_diagnosis_result_from_api(self):
        result = DiagnosisResult.from_api({
            "disease": {"kode": "P1", "nama_penyakit": "Wereng"},
            "confidence": "85.5",
            "matched_symptoms": ["G1", "G2"],
            "solutions": [{"nama_obat": "Obat A", "solusi": "Semprot"}],
        })

        assert result.confidence == 85.5
        assert result.matched_symptoms == ("G1", "G2")
        assert result.solutions == (Solution("Obat A", "Semprot"),)

    def test_missing_code_is_malformed(self):
        try:
            Symptom.from_api({"gejala": "tanpa kode"})
        except ValueError:
            pass
        else:
            raise AssertionError("Gejala tanpa kode harus ditolak")

    def test_non_numeric_confidence_is_malformed(self):
        for bad in [None, "tinggi", True]:
            try:
                DiagnosisResult.from_api({"disease": {"kode": "P1", "nama_penyakit": "X"}, "confidence": bad})
            except ValueError:
                continue
            raise AssertionError(f"confidence {bad!r} harus ditolak")

    def test_confidence_outside_percentage_range_is_malformed(self):
        for bad in [float("nan"), "NaN", "Infinity", float("-inf"), 250, -1]:
            try:
                DiagnosisResult.from_api({"disease": {"kode": "P1", "nama_penyakit": "X"}, "confidence": bad})
            except ValueError:
                continue
            raise AssertionError(f"confidence {bad!r} harus ditolak")

    def test_confidence_bounds_accepted(self):
        for ok in [0, 100, "100.0"]:
            result = DiagnosisResult.from_api({"disease": {"kode": "P1", "nama_penyakit": "X"}, "confidence": ok})
            assert 0 <= result.confidence <= 100

    def test_backward_result_reads_pest_key(self):
        result = BackwardChainingResult.from_api({
            "pest": {"kode": "P1", "nama_penyakit": "Wereng"},
            "required_symptoms": [{"kd_gejala": "G1", "gejala": "Daun kuning"}],
            "control_methods": [],
        })

        assert result.disease.code == "P1"
        assert result.required_symptoms == (Symptom("G1", "Daun kuning"),)
        assert result.control_methods == ()


class TestExpertSystemClient:
    """Test suite untuk ExpertSystemClient dengan API tiruan."""

    def setup_method(self):
        self.api = FakeApi(symptoms=list(SYMPTOMS), diseases=[WERENG, BLAS])
        self.view = RecordingView()
        self.reporter = CollectingErrorReporter()
        self.client = ExpertSystemClient(self.api, self.view, self.reporter, AppState())
        self.client.init()

    def test_init_loads_catalogs_and_options(self):
        assert self.client.state.symptoms == SYMPTOMS
        assert self.view.symptoms == SYMPTOMS
        assert self.view.disease_options[0] == ("", "-- Pilih Hama --")
        assert len(self.view.disease_options) == 3

    def test_toggle_rerenders_grid_and_summary(self):
        grid_before = self.view.symptom_renders

        self.client.toggle_symptom("S1")

        assert self.view.symptom_renders == grid_before + 1
        assert self.view.selected == frozenset({"S1"})
        assert [s.code for s in self.view.selection] == ["S1"]
        assert self.view.diagnose_enabled

        self.client.toggle_symptom("S1")
        assert not self.view.diagnose_enabled
        assert self.view.selected_count == 0

    def test_diagnosis_high_confidence(self):
        """Selection {S1, S2} + satu hasil confidence 85 → tier high, '85% Yakin'."""
        self.api.results = [DiagnosisResult(WERENG, 85, ("S1", "S2"))]
        self.client.toggle_symptom("S1")
        self.client.toggle_symptom("S2")

        view = self.client.perform_diagnosis()

        assert self.api.diagnose_calls == [["S1", "S2"]]
        assert view.cards[0].tier == "high"
        assert view.cards[0].confidence_label == "85% Yakin"
        assert self.view.diagnosis is view
        assert self.client.state.last_diagnosis is view
        print(f"✓ Diagnosis: {view.cards[0].disease.name} {view.cards[0].confidence_label}")

    def test_empty_results_are_not_an_error(self):
        self.client.toggle_symptom("S3")
        view = self.client.perform_diagnosis()

        assert view.is_empty
        assert view.empty_title == EMPTY_DIAGNOSIS_TITLE
        assert self.reporter.reports == []

    def test_diagnosis_requires_selection(self):
        assert self.client.perform_diagnosis() is None
        assert self.api.diagnose_calls == []

    def test_diagnosis_ignored_while_loading(self):
        self.client.toggle_symptom("S1")
        self.client.state.loading = True

        assert self.client.perform_diagnosis() is None
        assert self.api.diagnose_calls == []

    def test_loading_indicator_wraps_request(self):
        self.client.toggle_symptom("S1")
        self.client.perform_diagnosis()

        assert self.view.loading_events == [True, False]
        assert not self.client.state.loading
        assert self.view.diagnose_enabled

    def test_application_error_uses_server_message(self):
        self.api.error = ApiApplicationError("Gejala tidak valid", status_code=400)
        self.client.toggle_symptom("S1")

        assert self.client.perform_diagnosis() is None
        assert self.reporter.messages == ["Gejala tidak valid"]
        assert self.reporter.reports[0].severity == "error"
        assert self.reporter.reports[0].kind == "application"
        assert self.view.loading_events == [True, False]
        assert self.view.diagnose_enabled

    def test_application_error_without_message_uses_fallback(self):
        self.api.error = ApiApplicationError(None, status_code=500)
        self.client.toggle_symptom("S1")
        self.client.perform_diagnosis()

        assert self.reporter.messages == ["Terjadi kesalahan saat diagnosa"]

    def test_transport_and_malformed_errors_use_generic_message(self):
        self.client.toggle_symptom("S1")
        for error in [ApiTransportError("timeout"), ApiResponseError("bukan JSON")]:
            self.api.error = error
            self.client.perform_diagnosis()

        assert self.reporter.messages == ["Gagal melakukan diagnosa", "Gagal melakukan diagnosa"]

    def test_failed_reload_keeps_previous_catalog(self):
        self.api.error = ApiTransportError("koneksi terputus")

        assert self.client.load_symptoms() is False
        assert self.client.load_diseases() is False
        assert self.client.state.symptoms == SYMPTOMS
        assert self.client.state.diseases == [WERENG, BLAS]
        assert self.reporter.messages == ["Gagal memuat data gejala", "Gagal memuat data penyakit"]

    def test_filter_keeps_full_catalog(self):
        filtered = self.client.filter_symptoms("bercak")

        assert [s.code for s in filtered] == ["S2"]
        assert self.view.symptoms == filtered
        assert self.client.state.symptoms == SYMPTOMS

        self.client.filter_symptoms("")
        assert self.view.symptoms == SYMPTOMS

    def test_select_empty_disease_hides_backward_panel(self):
        self.api.backward_result = BackwardChainingResult(WERENG, (), ())
        self.client.select_disease("P1")
        assert self.view.backward_visible

        assert self.client.select_disease("") is None
        assert not self.view.backward_visible
        assert self.client.state.last_backward is None
        assert self.api.backward_calls == ["P1"]

    def test_reset_disease_control_hides_stale_panel(self):
        self.api.backward_result = BackwardChainingResult(WERENG, (), ())
        self.client.select_disease("P1")

        # Nilai kontrol sama: tidak ada request ulang
        assert self.client.sync_selected_disease("P1") is self.client.state.last_backward
        assert self.api.backward_calls == ["P1"]

        # Kontrol kembali ke placeholder tanpa event perubahan
        assert self.client.sync_selected_disease("") is None
        assert not self.view.backward_visible
        assert self.client.state.last_backward is None
        assert self.api.backward_calls == ["P1"]

    def test_backward_without_symptoms_shows_message(self):
        self.api.backward_result = BackwardChainingResult(WERENG, (), ())
        view = self.client.select_disease("P1")

        assert view.empty_symptoms_message == NO_REQUIRED_SYMPTOMS
        assert self.view.backward is view

    def test_backward_failure_messages(self):
        self.api.error = ApiApplicationError(None)
        self.client.select_disease("P9")
        self.api.error = ApiTransportError("timeout")
        self.client.select_disease("P9")

        assert self.reporter.messages == ["Terjadi kesalahan saat analisis", "Gagal melakukan analisis"]
        assert not self.client.state.loading

    def test_remote_search_reports_result_count(self):
        found = self.client.search_symptoms_remote("daun")

        assert len(found) == 2
        assert self.reporter.reports[-1].severity == "info"
        assert "2 gejala" in self.reporter.messages[-1]
        assert self.client.state.symptoms == SYMPTOMS

    def test_remote_search_without_matches_warns(self):
        assert self.client.search_symptoms_remote("akar busuk") == []
        assert self.reporter.reports[-1].severity == "warning"

    def test_remote_search_ignores_blank_keyword(self):
        assert self.client.search_symptoms_remote("   ") is None
        assert self.api.search_calls == []


def run_all_tests():
    """Jalankan semua test dan report hasilnya."""
    test_classes = [
        TestSymptomSelection, TestAppState, TestConfidence,
        TestSearchFilter, TestRendering, TestModels, TestExpertSystemClient,
    ]
    total, failed = 0, []

    for test_class in test_classes:
        print(f"\n--- {test_class.__name__} ---")
        for method_name in [m for m in dir(test_class) if m.startswith('test_')]:
            total += 1
            instance = test_class()
            try:
                if hasattr(instance, 'setup_method'):
                    instance.setup_method()
                getattr(instance, method_name)()
            except Exception as e:
                failed.append((test_class.__name__, method_name, str(e)))
                print(f"✗ {method_name} FAILED: {e}")

    print(f"\nTotal tests: {total}")
    print(f"Passed: {total - len(failed)}")
    print(f"Failed: {len(failed)}")
    return not failed


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
