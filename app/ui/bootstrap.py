"""Inisialisasi backend yang dipakai bersama oleh semua halaman Streamlit."""

import logging

import streamlit as st

from core.app_state import AppState
from core.expert_client import ExpertSystemClient
from services.api_client import ExpertApiClient
from services.config import load_config
from services.error_reporting import LoggingErrorReporter
from services.logging_service import LoggingService
from services.reporting import ReportingService
from ui.components import StreamlitErrorReporter, StreamlitView


@st.cache_resource
def get_config():
    return load_config()


@st.cache_resource
def get_logger() -> LoggingService:
    log_cfg = get_config()["logging"]
    level = getattr(logging, str(log_cfg.get("level", "INFO")).upper(), logging.INFO)
    return LoggingService(log_file=log_cfg["log_file"], level=level)


@st.cache_resource
def get_api() -> ExpertApiClient:
    api_cfg = get_config()["api"]
    return ExpertApiClient(
        base_url=api_cfg["base_url"],
        timeout=api_cfg.get("timeout", 10),
        endpoints=api_cfg.get("endpoints"),
        logger=get_logger().logger,
    )


@st.cache_resource
def get_reporter() -> ReportingService:
    return ReportingService(output_dir=get_config()["reports"]["output_dir"])


def get_client() -> ExpertSystemClient:
    """Client untuk sesi ini; katalog dimuat sekali per sesi."""
    if "app_state" not in st.session_state:
        st.session_state.app_state = AppState()

    logging_service = get_logger()
    client = ExpertSystemClient(
        api=get_api(),
        view=StreamlitView(),
        reporter=StreamlitErrorReporter(forward_to=LoggingErrorReporter(logging_service.logger)),
        state=st.session_state.app_state,
        logging_service=logging_service,
    )

    if not st.session_state.get("catalog_loaded", False):
        with st.spinner("Memuat data gejala dan penyakit..."):
            client.init()
        st.session_state.catalog_loaded = True

    client.update_selected_symptoms()
    return client


def reload_catalogs(client: ExpertSystemClient) -> None:
    with st.spinner("Memuat ulang katalog..."):
        client.load_symptoms()
        client.load_diseases()
    client.render_symptoms()
    client.update_selected_symptoms()
