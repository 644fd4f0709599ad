"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from mccmnc.config import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def index_html() -> str:
    return _read_fixture("index.html")


@pytest.fixture
def overview_html() -> str:
    return _read_fixture("overview.html")


@pytest.fixture
def annex_html() -> str:
    return _read_fixture("annex.html")


@pytest.fixture
def settings() -> Settings:
    return Settings(base_url="https://www.itu.int", docs_path="/pub/T-SP-E.212B")
