# services/config.py

"""
Memuat konfigurasi aplikasi dari ``configs/app.yaml``.

Nilai di file YAML digabung (deep merge) di atas DEFAULT_CONFIG sehingga file
konfigurasi cukup berisi key yang ingin diubah. Jika file tidak ada, default
dipakai apa adanya.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

CONFIG_PATH = Path("configs/app.yaml")
API_URL_ENV = "PAKAR_API_BASE_URL"

DEFAULT_CONFIG: Dict[str, Any] = {
    "app": {"name": "Sistem Pakar Hama & Penyakit Tanaman", "page_icon": "🌱"},
    "api": {
        "base_url": "http://localhost/plant_expert_system",
        "timeout": 10,
        "endpoints": {
            "symptoms": "api/symptoms.php",
            "diseases": "api/diseases.php",
            "diagnose": "api/diagnose.php",
            "backward": "api/backward.php",
        },
    },
    "ui": {"symptom_columns": 3, "show_statistics": True},
    "logging": {"log_file": "logs/consultation_history.log", "level": "INFO"},
    "reports": {"output_dir": "reports"},
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Baca konfigurasi dari YAML dan gabungkan dengan default.

    Args:
        path: Path file YAML; default ``configs/app.yaml`` relatif ke direktori kerja.

    Returns:
        Dictionary konfigurasi lengkap.

    Raises:
        ValueError: Jika isi YAML bukan mapping.
    """
    config_path = Path(path) if path is not None else CONFIG_PATH
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path.exists():
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Konfigurasi di '{config_path}' harus berupa mapping YAML")
        config = _deep_merge(config, loaded)

    env_url = os.environ.get(API_URL_ENV)
    if env_url:
        config["api"]["base_url"] = env_url

    return config
