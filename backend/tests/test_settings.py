# backend/tests/test_settings.py
from __future__ import annotations

from datetime import date

import pytest

from rentmaster.config import Settings


def test_defaults():
    s = Settings(_env_file=None)
    assert s.forecast_days == 6
    assert (s.history_start, s.history_end) == (date(2023, 1, 1), date(2030, 12, 31))
    assert s.seed_reference_year == 2024


def test_prod_refuses_wildcard_cors():
    with pytest.raises(ValueError):
        Settings(_env_file=None, app_env="prod", cors_allow_origins=["*"])

    ok = Settings(_env_file=None, app_env="prod", cors_allow_origins=["http://localhost:5173"])
    assert ok.cors_allow_origins == ["http://localhost:5173"]


def test_history_window_must_be_ordered():
    with pytest.raises(ValueError):
        Settings(_env_file=None, history_start=date(2030, 1, 1), history_end=date(2020, 1, 1))
