"""Tests for the convert-then-filter pipeline."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from iFilter.core.filters import (
    ANGLE,
    INTENSITY,
    RADIUS,
    SCALE,
    ImageFilter,
    available_filters,
    create_filter,
)
from iFilter.core.filters.registry import filter_registry
from iFilter.core.geometry import Extent
from iFilter.core.images import RecipeImage, SourceImage
from iFilter.core.pipeline import (
    PARAMETER_ROLES,
    FilterSpec,
    apply_filter,
    assign_parameters,
    driven_parameters,
    ensure_parameterised,
    try_apply_filter,
)
from iFilter.core.render import RenderContext
from iFilter.errors import (
    FilterError,
    NoOutputError,
    RenderFailedError,
    UnknownFilterError,
    UnsupportedFilterError,
)


class _AngleOnlyFilter(ImageFilter):
    """Filter exposing none of the amount-driven roles."""

    name = "angle-only"
    parameter_defaults = {ANGLE: 0.25}

    def _build_output(self, image: RecipeImage) -> RecipeImage:
        return RecipeImage(image.extent, image.producer, description="angle-only")


@pytest.mark.parametrize("name", ["sepia", "pixellate", "crystallize", "twirl"])
@pytest.mark.parametrize("amount", [0.0, 0.3, 1.0])
def test_every_filter_renders_non_empty_image(pattern, name, amount):
    rendered = apply_filter(pattern, FilterSpec(name, amount))

    assert rendered.width > 0
    assert rendered.height > 0
    assert rendered.pixels.shape == (rendered.height, rendered.width, 4)


def test_builtin_filters_are_registered():
    assert set(available_filters()) >= {"sepia", "pixellate", "crystallize", "twirl"}


@pytest.mark.parametrize("name", ["sepia", "pixellate", "crystallize", "twirl"])
def test_applying_same_spec_twice_is_pixel_identical(pattern, name):
    spec = FilterSpec(name, 0.7)

    first = apply_filter(pattern, spec)
    second = apply_filter(pattern, spec)

    assert first.same_pixels(second)


def test_radius_only_filter_receives_only_radius(pattern):
    crystallize = create_filter("crystallize")
    crystallize.input_image = RecipeImage.from_source(pattern)

    assigned = assign_parameters(crystallize, 0.5)

    assert assigned == {RADIUS: pytest.approx(100.0)}
    assert crystallize.value(RADIUS) == pytest.approx(100.0)
    with pytest.raises(KeyError):
        crystallize.value(INTENSITY)
    with pytest.raises(KeyError):
        crystallize.value(SCALE)


def test_full_amount_sets_role_maxima():
    sepia = create_filter("sepia")
    twirl = create_filter("twirl")
    pixellate = create_filter("pixellate")

    assign_parameters(sepia, 1.0)
    assign_parameters(twirl, 1.0)
    assign_parameters(pixellate, 1.0)

    assert sepia.value(INTENSITY) == pytest.approx(1.0)
    assert twirl.value(RADIUS) == pytest.approx(200.0)
    assert pixellate.value(SCALE) == pytest.approx(10.0)


def test_parameter_roles_multipliers():
    assert dict(PARAMETER_ROLES) == {INTENSITY: 1.0, RADIUS: 200.0, SCALE: 10.0}


def test_filter_without_roles_runs_with_defaults(pattern):
    plain = _AngleOnlyFilter()
    plain.input_image = RecipeImage.from_source(pattern)

    assert assign_parameters(plain, 1.0) == {}
    assert plain.value(ANGLE) == pytest.approx(0.25)
    assert driven_parameters(plain) == ()


def test_unparameterised_filter_rejected_on_request(monkeypatch):
    monkeypatch.setitem(filter_registry, "angle-only", _AngleOnlyFilter)

    with pytest.raises(UnsupportedFilterError):
        ensure_parameterised("angle-only")


def test_builtin_filters_all_drive_a_parameter():
    for name in ("sepia", "pixellate", "crystallize", "twirl"):
        ensure_parameterised(name)


def test_twirl_with_zero_amount_matches_source(pattern):
    rendered = apply_filter(pattern, FilterSpec("twirl", 0.0))

    assert rendered.extent == pattern.extent
    assert np.array_equal(rendered.pixels, pattern.pixels)


def test_twirl_full_amount_keeps_source_region_and_changes_centre(pattern):
    rendered = apply_filter(pattern, FilterSpec("twirl", 1.0))

    assert rendered.extent.contains(pattern.extent)
    assert rendered.extent == Extent(-150, -150, 400, 400)

    offset_x = pattern.extent.x - rendered.extent.x
    offset_y = pattern.extent.y - rendered.extent.y
    centre_out = rendered.pixels[offset_y + 40 : offset_y + 60, offset_x + 40 : offset_x + 60]
    centre_in = pattern.pixels[40:60, 40:60]
    assert not np.array_equal(centre_out, centre_in)


def test_unknown_filter_raises_filter_error_every_time(pattern):
    spec = FilterSpec("unknown-filter", 0.5)

    for _ in range(2):
        with pytest.raises(UnknownFilterError) as excinfo:
            apply_filter(pattern, spec)
        assert isinstance(excinfo.value, FilterError)
        assert excinfo.value.kind == "unknown_filter"


def test_empty_source_has_no_output():
    empty = SourceImage(np.zeros((0, 0, 4), dtype=np.uint8))

    with pytest.raises(NoOutputError):
        apply_filter(empty, FilterSpec("sepia", 1.0))


def test_render_budget_exceeded_fails(pattern):
    with pytest.raises(RenderFailedError):
        apply_filter(pattern, FilterSpec("sepia", 1.0), context=RenderContext(max_pixels=100))


def test_try_apply_filter_logs_and_reports_failure(pattern, caplog):
    errors = []

    with caplog.at_level(logging.WARNING, logger="iFilter"):
        result = try_apply_filter(pattern, FilterSpec("unknown-filter"), on_error=errors.append)

    assert result is None
    assert [error.kind for error in errors] == ["unknown_filter"]
    assert "unknown_filter" in caplog.text


def test_try_apply_filter_returns_rendered_image(pattern):
    result = try_apply_filter(pattern, FilterSpec("sepia", 0.5))

    assert result is not None
    assert result.extent == pattern.extent


@pytest.mark.parametrize("raw, expected", [(-0.5, 0.0), (0.4, 0.4), (3.0, 1.0)])
def test_filter_spec_clamps_amount(raw, expected):
    assert FilterSpec("sepia", raw).amount == pytest.approx(expected)


def test_filter_spec_rejects_nan_amount():
    with pytest.raises(ValueError):
        FilterSpec("sepia", float("nan"))


def test_crystallize_at_zero_amount_changes_few_pixels(pattern):
    rendered = apply_filter(pattern, FilterSpec("crystallize", 0.0))

    changed = np.any(rendered.pixels != pattern.pixels, axis=-1)
    assert rendered.extent == pattern.extent
    assert changed.mean() < 0.05
    assert (rendered.pixels[..., 3] == 255).all()
