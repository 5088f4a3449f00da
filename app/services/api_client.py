# services/api_client.py

"""
Client HTTP untuk API sistem pakar (forward & backward chaining).

Semua endpoint bertukar JSON dengan envelope ``{"success": bool, ..., "error": str}``.
Kegagalan dipetakan ke tiga kelas exception:
- ApiTransportError: tidak ada respons (koneksi gagal, timeout)
- ApiResponseError: respons tidak bisa di-parse atau strukturnya salah
- ApiApplicationError: status HTTP non-2xx atau ``success: false``

Tidak ada retry: kegagalan langsung diteruskan ke pemanggil.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from core.models import BackwardChainingResult, DiagnosisResult, Disease, Symptom

DEFAULT_ENDPOINTS = {
    "symptoms": "api/symptoms.php",
    "diseases": "api/diseases.php",
    "diagnose": "api/diagnose.php",
    "backward": "api/backward.php",
}


class ApiError(Exception):
    """Basis semua kegagalan komunikasi dengan API."""
    kind = "unknown"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.kind)
        self.message = message


class ApiTransportError(ApiError):
    kind = "transport"


class ApiResponseError(ApiError):
    kind = "malformed"


class ApiApplicationError(ApiError):
    kind = "application"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ExpertApiClient:
    """Client untuk endpoint gejala, penyakit, diagnosa, dan backward chaining."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10,
        endpoints: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize ExpertApiClient.

        Args:
            base_url: URL dasar aplikasi, misal ``http://localhost/plant_expert_system``
            timeout: Timeout per request dalam detik
            endpoints: Override path endpoint (lihat DEFAULT_ENDPOINTS)
            session: Session requests; bisa diganti objek tiruan untuk testing
            logger: Logger untuk mencatat request
        """
        self.base_url = base_url
        self.timeout = timeout
        self.endpoints = {**DEFAULT_ENDPOINTS, **(endpoints or {})}
        self.session = session if session is not None else requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    def url_for(self, name: str) -> str:
        path = self.endpoints[name]
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(
        self,
        method: str,
        name: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Kirim request dan kembalikan body JSON yang sudah divalidasi envelope-nya."""
        url = self.url_for(name)
        headers = {"Accept": "application/json"}

        try:
            if method == "GET":
                response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            else:
                response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"{method} {url} gagal: {e}")
            raise ApiTransportError(str(e)) from e

        self.logger.debug(f"{method} {url} -> HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            self.logger.warning(f"{method} {url}: body bukan JSON (HTTP {response.status_code})")
            raise ApiResponseError("Respons server tidak valid") from e

        if not isinstance(data, dict):
            raise ApiResponseError("Respons server harus berupa object JSON")

        if not response.ok or data.get("success") is not True:
            raw_error = data.get("error")
            message = str(raw_error) if raw_error not in (None, "") else None
            self.logger.warning(
                f"{method} {url}: gagal (HTTP {response.status_code}, error={message!r})"
            )
            raise ApiApplicationError(message, status_code=response.status_code)

        return data

    @staticmethod
    def _parse_list(data: Dict[str, Any], key: str, parser) -> List[Any]:
        items = data.get(key)
        if not isinstance(items, list):
            raise ApiResponseError(f"Field '{key}' tidak ditemukan atau bukan list")
        try:
            return [parser(item) for item in items]
        except ValueError as e:
            raise ApiResponseError(str(e)) from e

    def get_symptoms(self, search: Optional[str] = None) -> List[Symptom]:
        """Ambil katalog gejala, opsional difilter di sisi server dengan ``search``."""
        params = {"search": search} if search else None
        data = self._request("GET", "symptoms", params=params)
        return self._parse_list(data, "symptoms", Symptom.from_api)

    def get_diseases(self) -> List[Disease]:
        data = self._request("GET", "diseases")
        return self._parse_list(data, "diseases", Disease.from_api)

    def diagnose(self, symptom_codes: List[str]) -> List[DiagnosisResult]:
        """Forward chaining. Urutan hasil mengikuti ranking dari server."""
        data = self._request("POST", "diagnose", payload={"symptoms": list(symptom_codes)})
        return self._parse_list(data, "results", DiagnosisResult.from_api)

    def backward(self, disease_code: str) -> BackwardChainingResult:
        """Backward chaining untuk satu kode penyakit."""
        data = self._request("POST", "backward", payload={"disease_code": disease_code})
        try:
            return BackwardChainingResult.from_api(data)
        except ValueError as e:
            raise ApiResponseError(str(e)) from e
