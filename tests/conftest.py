"""Shared pytest fixtures."""

import json
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from hypothesis import HealthCheck, settings
from structlog.testing import capture_logs

from imovel_search.config import Settings
from imovel_search.models import PropertyRecord

# Hypothesis settings profiles for different environments
settings.register_profile("fast", max_examples=10)
settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))


@pytest.fixture(autouse=True)
def _isolate_settings_from_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent the local .env file from leaking into test Settings instances."""
    monkeypatch.setattr(
        Settings,
        "model_config",
        {**Settings.model_config, "env_file": None},
    )


@pytest.fixture(autouse=True)
def log_events() -> Iterator[list[dict[str, Any]]]:
    """Capture structlog events instead of printing them."""
    with capture_logs() as events:
        yield events


@pytest.fixture
def make_record() -> Callable[..., PropertyRecord]:
    """Factory for PropertyRecord instances with auto-incrementing ids."""
    _counter = 0

    def _make(**overrides: Any) -> PropertyRecord:
        nonlocal _counter
        _counter += 1
        defaults: dict[str, Any] = {
            "id": f"imovel-{_counter}",
            "titulo": f"Imóvel de teste {_counter}",
            "cidade": "Natal",
            "bairro": "Ponta Negra",
            "operacao": "venda",
            "tipo_imovel": "Apartamento",
        }
        defaults.update(overrides)
        return PropertyRecord(**defaults)

    return _make


@pytest.fixture
def sample_records(make_record: Callable[..., PropertyRecord]) -> list[PropertyRecord]:
    """A small mixed catalogue around Natal/RN."""
    return [
        make_record(
            id="1",
            titulo="Apartamento vista mar",
            logradouro="Av. Engenheiro Roberto Freire, 100",
            bairro="Ponta Negra",
            operacao="venda",
            tipo_imovel="Apartamento",
            quartos=3,
            banheiros=2,
            vagas=2,
            valor_venda=650000,
            area_priv=110,
            caracteristicas="Piscina, Academia",
            latitude=-5.8811,
            longitude=-35.1642,
        ),
        make_record(
            id="2",
            titulo="Casa em condomínio",
            bairro="Capim Macio",
            operacao="venda/locação",
            tipo_imovel="Casa",
            quartos=4,
            banheiros=3,
            vagas=2,
            valor_venda=900000,
            valor_locacao=5500,
            area_priv=220,
            latitude=-5.8560,
            longitude=-35.1950,
        ),
        make_record(
            id="3",
            titulo="Flat mobiliado",
            bairro="Ponta Negra",
            operacao="temporada",
            tipo_imovel="Flat",
            quartos=1,
            banheiros=1,
            vagas=1,
            valor_diaria=350,
            area_priv=40,
        ),
        make_record(
            id="4",
            titulo="Sala comercial",
            cidade="Parnamirim",
            bairro="Centro",
            operacao="locacao",
            tipo_imovel="Comercial",
            valor_locacao=2500,
            area_priv=60,
            latitude=-5.9156,
            longitude=-35.2628,
        ),
    ]


@pytest.fixture
def write_listings(tmp_path: Path) -> Callable[[Any], Path]:
    """Write a listing export to a temp file and return its path."""

    def _write(payload: Any, name: str = "anuncios.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def raw_rows() -> list[dict[str, Any]]:
    """Rows shaped like the backend's select with joined operation/type relations."""
    return [
        {
            "id": "a1",
            "cod_imovel": 101,
            "titulo": "Apartamento 3 quartos",
            "cidade": "Natal",
            "bairro": "Tirol",
            "operacao": {"tipo": "Venda"},
            "tipo_imovel": {"tipo": "Apartamento"},
            "quartos": "3",
            "banheiros": 2,
            "vagas": None,
            "valor_venda": "480000",
            "valor_locacao": None,
            "area_priv": "95,5",
            "latitude": "-5.7945",
            "longitude": "-35.2110",
            "fotos": "https://cdn.example.com/1.jpg,https://cdn.example.com/2.jpg",
            "status_aprovacao": "aprovado",
        },
        {
            "id": "a2",
            "titulo": "Casa de praia",
            "cidade": "Nísia Floresta",
            "bairro": "Pirangi",
            "operacao": "temporada",
            "tipo_imovel": {"tipo": "Casa"},
            "valor_diaria": 600,
            "latitude": "n/a",
            "longitude": None,
        },
    ]
