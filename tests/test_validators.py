"""Test stroke option schemas and preset loading.

Tests for inkstroke.utils.validators:
    - StrokeOptions defaults, aliases, bounds and immutability
    - CapOptions taper parsing (off / full / distance)
    - Easing names resolved to callables
    - resolve_stroke_options() normalization
    - stroke_presets.v1 YAML loading and error paths

Run:
    pytest tests/test_validators.py -v
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from inkstroke.utils import easings, validators


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture(scope="module")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="module")
def presets_path(project_root):
    return project_root / "configs/stroke_presets.v1.yaml"


def _write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


# ============================================================================
# STROKE OPTIONS
# ============================================================================

def test_stroke_options_defaults():
    opts = validators.StrokeOptions()
    assert opts.size == 16.0
    assert opts.thinning == 0.5
    assert opts.smoothing == 0.5
    assert opts.streamline == 0.5
    assert opts.simulate_pressure is True
    assert opts.easing is easings.linear
    assert opts.last is False
    assert opts.start.cap is True and opts.start.taper is False
    assert opts.end.cap is True and opts.end.taper is False


def test_stroke_options_camel_case_alias():
    opts = validators.StrokeOptions.model_validate({"simulatePressure": False})
    assert opts.simulate_pressure is False

    opts = validators.StrokeOptions(simulate_pressure=False)
    assert opts.simulate_pressure is False


@pytest.mark.parametrize("field,value", [
    ("thinning", 1.5),
    ("thinning", -1.5),
    ("smoothing", -0.1),
    ("streamline", 1.1),
])
def test_stroke_options_bounds(field, value):
    with pytest.raises(ValidationError):
        validators.StrokeOptions(**{field: value})


def test_stroke_options_negative_thinning_allowed():
    assert validators.StrokeOptions(thinning=-0.5).thinning == -0.5


def test_stroke_options_extra_key_rejected():
    with pytest.raises(ValidationError):
        validators.StrokeOptions.model_validate({"sise": 8})


def test_stroke_options_frozen():
    opts = validators.StrokeOptions()
    with pytest.raises(ValidationError):
        opts.size = 4.0


def test_stroke_options_easing_by_name():
    opts = validators.StrokeOptions(easing="easeInQuad")
    assert opts.easing is easings.ease_in_quad


def test_stroke_options_easing_callable():
    def custom(t):
        return t ** 0.5

    assert validators.StrokeOptions(easing=custom).easing is custom


def test_stroke_options_unknown_easing():
    with pytest.raises(ValidationError, match="Unknown easing"):
        validators.StrokeOptions(easing="wobble")


# ============================================================================
# CAP OPTIONS
# ============================================================================

@pytest.mark.parametrize("raw,expected", [
    (False, False),
    (True, True),
    (None, False),
    ("off", False),
    ("full", True),
    ("12.5", 12.5),
    (40, 40.0),
    (2.5, 2.5),
])
def test_cap_taper_parsing(raw, expected):
    cap = validators.CapOptions(taper=raw)
    assert cap.taper == expected
    assert type(cap.taper) is type(expected)


def test_cap_taper_integer_zero_and_one_stay_distances():
    assert validators.CapOptions(taper=0).taper == 0.0
    assert validators.CapOptions(taper=1).taper is not True
    assert validators.CapOptions(taper=1).taper == 1.0


@pytest.mark.parametrize("raw", [-1, -0.5, "-3", "sometimes"])
def test_cap_taper_invalid(raw):
    with pytest.raises(ValidationError):
        validators.CapOptions(taper=raw)


def test_cap_easing_by_name():
    cap = validators.CapOptions(taper=10, easing="ease_out_cubic")
    assert cap.easing is easings.ease_out_cubic


# ============================================================================
# RESOLVE
# ============================================================================

def test_resolve_none_gives_defaults():
    assert validators.resolve_stroke_options(None) == validators.StrokeOptions()


def test_resolve_passes_model_through():
    opts = validators.StrokeOptions(size=4)
    assert validators.resolve_stroke_options(opts) is opts


def test_resolve_mapping():
    opts = validators.resolve_stroke_options({"size": 8, "start": {"taper": "full"}})
    assert opts.size == 8.0
    assert opts.start.taper is True


def test_resolve_rejects_other_types():
    with pytest.raises(TypeError, match="options must be"):
        validators.resolve_stroke_options([("size", 8)])


# ============================================================================
# PRESETS
# ============================================================================

def test_load_project_presets(presets_path):
    presets = validators.load_stroke_presets(presets_path)
    assert {"pen", "marker", "brush", "line_draw"} <= set(presets)

    pen = presets["pen"]
    assert pen == validators.StrokeOptions()

    marker = presets["marker"]
    assert marker.simulate_pressure is False
    assert marker.start.cap is False and marker.end.cap is False

    brush = presets["brush"]
    assert brush.start.taper == 40.0
    assert brush.end.taper is True
    assert brush.easing is easings.ease_out_sine
    assert brush.start.easing is easings.ease_out_quad

    line = presets["line_draw"]
    assert line.last is True
    assert line.streamline == 0.0


def test_load_stroke_options(presets_path):
    opts = validators.load_stroke_options(presets_path, "marker")
    assert opts.size == 24.0


def test_load_stroke_options_unknown(presets_path):
    with pytest.raises(KeyError, match="Unknown stroke preset"):
        validators.load_stroke_options(presets_path, "crayon")


def test_load_presets_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        validators.load_stroke_presets(tmp_path / "nope.yaml")


def test_load_presets_wrong_schema(tmp_path):
    path = _write_yaml(tmp_path / "p.yaml", {"schema": "stroke_presets.v0", "presets": {"a": {}}})
    with pytest.raises(ValueError, match="stroke_presets.v1"):
        validators.load_stroke_presets(path)


def test_load_presets_empty(tmp_path):
    path = _write_yaml(tmp_path / "p.yaml", {"schema": "stroke_presets.v1", "presets": {}})
    with pytest.raises(ValueError, match="at least one preset"):
        validators.load_stroke_presets(path)


def test_load_presets_not_mapping(tmp_path):
    path = _write_yaml(tmp_path / "p.yaml", ["pen"])
    with pytest.raises(ValueError, match="must be a mapping"):
        validators.load_stroke_presets(path)


def test_load_presets_bad_values(tmp_path):
    path = _write_yaml(
        tmp_path / "p.yaml",
        {"schema": "stroke_presets.v1", "presets": {"bad": {"smoothing": 3}}},
    )
    with pytest.raises(ValueError, match="validation failed"):
        validators.load_stroke_presets(path)
