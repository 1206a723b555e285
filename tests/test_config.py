"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from iFilter.config import (
    AMOUNT_ENV,
    CONFIG_ENV,
    FILTER_ENV,
    FilterConfig,
    load_config,
)
from iFilter.core.filters.registry import filter_registry
from iFilter.core.pipeline import FilterSpec
from iFilter.errors import ConfigInvalidError, UnsupportedFilterError


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_defaults_without_file_or_environment():
    config = load_config(environ={})

    assert config == FilterConfig()
    assert config.spec == FilterSpec("twirl", 1.0)
    assert config.asset == "example.ppm"


def test_json_file_values(tmp_path):
    path = _write(
        tmp_path / "config.json",
        {"filter": "sepia", "amount": 0.25, "asset": "/tmp/photo.png", "max_render_pixels": 1000},
    )

    config = load_config(path, environ={})

    assert config.filter_name == "sepia"
    assert config.amount == pytest.approx(0.25)
    assert config.asset == "/tmp/photo.png"
    assert config.max_render_pixels == 1000


def test_config_path_from_environment(tmp_path):
    path = _write(tmp_path / "config.json", {"filter": "pixellate"})

    config = load_config(environ={CONFIG_ENV: str(path)})

    assert config.filter_name == "pixellate"


def test_environment_overrides_file(tmp_path):
    path = _write(tmp_path / "config.json", {"filter": "sepia", "amount": 0.1})

    config = load_config(path, environ={FILTER_ENV: "crystallize", AMOUNT_ENV: "0.8"})

    assert config.filter_name == "crystallize"
    assert config.amount == pytest.approx(0.8)


def test_amount_is_clamped(tmp_path):
    path = _write(tmp_path / "config.json", {"amount": 4})

    assert load_config(path, environ={}).amount == pytest.approx(1.0)


@pytest.mark.parametrize("amount", ["lots", None, True])
def test_non_numeric_amount_is_rejected(tmp_path, amount):
    path = _write(tmp_path / "config.json", {"amount": amount})

    with pytest.raises(ConfigInvalidError):
        load_config(path, environ={})


def test_unknown_filter_is_rejected():
    with pytest.raises(ConfigInvalidError):
        load_config(environ={FILTER_ENV: "unknown-filter"})


def test_missing_and_invalid_files(tmp_path):
    with pytest.raises(ConfigInvalidError):
        load_config(tmp_path / "missing.json", environ={})

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigInvalidError):
        load_config(broken, environ={})

    listing = _write(tmp_path / "list.json", ["sepia"])
    with pytest.raises(ConfigInvalidError):
        load_config(listing, environ={})


def test_reject_unparameterised_filter(monkeypatch):
    from iFilter.core.filters import ANGLE, ImageFilter

    class AngleOnly(ImageFilter):
        name = "angle-only"
        parameter_defaults = {ANGLE: 1.0}

        def _build_output(self, image):
            return image

    monkeypatch.setitem(filter_registry, "angle-only", AngleOnly)

    lenient = FilterConfig(filter_name="angle-only")
    assert lenient.validate() is lenient

    strict = FilterConfig(filter_name="angle-only", reject_unparameterised=True)
    with pytest.raises(UnsupportedFilterError):
        strict.validate()


@pytest.mark.parametrize("value", ["false", 1, None])
def test_reject_unparameterised_requires_boolean(tmp_path, value):
    path = _write(tmp_path / "config.json", {"reject_unparameterised": value})

    with pytest.raises(ConfigInvalidError):
        load_config(path, environ={})


def test_reject_unparameterised_accepts_json_boolean(tmp_path):
    path = _write(tmp_path / "config.json", {"reject_unparameterised": True})

    assert load_config(path, environ={}).reject_unparameterised is True


def test_non_positive_render_budget(tmp_path):
    path = _write(tmp_path / "config.json", {"max_render_pixels": 0})

    with pytest.raises(ConfigInvalidError):
        load_config(path, environ={})
