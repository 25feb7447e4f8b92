"""Stroke option schemas and YAML preset loading.

Provides centralized validation for stroke configuration using pydantic:
    - CapOptions: cap / taper / taper easing for one end of a stroke
    - StrokeOptions: size, thinning, smoothing, streamline, pressure model
    - StrokePresetsV1 (stroke_presets.v1.yaml): named option presets

Options are immutable once validated. Every pipeline entry point accepts
None, a plain dict (snake_case or camelCase keys) or a StrokeOptions model
and normalizes it through resolve_stroke_options().

Geometry degeneracies (size <= 0, empty input) are NOT validation errors:
the pipeline degrades to empty output for them. Only values that make no
sense as configuration (smoothing outside [0, 1], negative taper distance,
unknown easing names) fail here, fast and with actionable messages.

Usage:
    from inkstroke.utils import validators

    opts = validators.resolve_stroke_options({"size": 8, "thinning": 0.6})
    presets = validators.load_stroke_presets("configs/stroke_presets.v1.yaml")
"""

from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import easings


# ============================================================================
# STROKE OPTIONS
# ============================================================================

class CapOptions(BaseModel):
    """Cap, taper and taper easing for the start or end of a stroke.

    taper accepts:
        - False / "off" / None: no taper
        - True / "full": taper over the whole stroke length (at least size)
        - number >= 0: taper distance in stroke units
    """
    model_config = ConfigDict(frozen=True, extra='forbid')

    cap: bool = Field(True, description="Round cap if True, flat cap if False")
    taper: Union[bool, float] = Field(False, description="Taper distance, or False/True")
    easing: Optional[Callable[[float], float]] = Field(
        None, description="Taper falloff curve (name or callable)"
    )

    @field_validator('taper', mode='before')
    @classmethod
    def parse_taper(cls, v: Any) -> Any:
        if v is None:
            return False
        if isinstance(v, int) and not isinstance(v, bool):
            # Keep 0 / 1 as distances instead of letting them coerce to bool
            return float(v)
        if isinstance(v, str):
            key = v.strip().lower()
            if key in ("off", "none", "false"):
                return False
            if key in ("full", "true"):
                return True
            try:
                return float(key)
            except ValueError:
                raise ValueError(
                    f"taper must be 'off', 'full' or a distance, got '{v}'"
                ) from None
        return v

    @field_validator('taper')
    @classmethod
    def validate_taper(cls, v: Union[bool, float]) -> Union[bool, float]:
        if not isinstance(v, bool) and v < 0:
            raise ValueError(f"taper distance must be >= 0, got {v}")
        return v

    @field_validator('easing', mode='before')
    @classmethod
    def resolve_easing(cls, v: Any) -> Any:
        if isinstance(v, str):
            return easings.get_easing(v)
        return v


class StrokeOptions(BaseModel):
    """Freehand stroke configuration.

    Defaults reproduce the classic pressure-sensitive pen look: 16-unit
    diameter, moderate thinning, simulated (velocity-based) pressure.
    """
    model_config = ConfigDict(frozen=True, extra='forbid', populate_by_name=True)

    size: float = Field(16.0, description="Base stroke diameter")
    thinning: float = Field(0.5, ge=-1.0, le=1.0, description="Effect of pressure on width")
    smoothing: float = Field(0.5, ge=0.0, le=1.0, description="Edge point dedup aggressiveness")
    streamline: float = Field(0.5, ge=0.0, le=1.0, description="Input interpolation strength")
    simulate_pressure: bool = Field(
        True, alias="simulatePressure", description="Derive pressure from point spacing"
    )
    easing: Callable[[float], float] = Field(
        easings.linear, description="Pressure → radius curve (name or callable)"
    )
    start: CapOptions = Field(default_factory=CapOptions)
    end: CapOptions = Field(default_factory=CapOptions)
    last: bool = Field(False, description="Treat samples as a completed stroke")

    @field_validator('easing', mode='before')
    @classmethod
    def resolve_easing(cls, v: Any) -> Any:
        if isinstance(v, str):
            return easings.get_easing(v)
        return v


StrokeOptionsLike = Union[None, StrokeOptions, Mapping[str, Any]]


def resolve_stroke_options(options: StrokeOptionsLike = None) -> StrokeOptions:
    """Normalize options argument to a validated StrokeOptions.

    Parameters
    ----------
    options : None, StrokeOptions or mapping
        None → defaults; mapping keys may be snake_case or camelCase

    Returns
    -------
    StrokeOptions
        Validated, immutable options

    Raises
    ------
    pydantic.ValidationError
        If values are out of range or unknown keys are present
    TypeError
        If options has an unsupported type
    """
    if options is None:
        return StrokeOptions()
    if isinstance(options, StrokeOptions):
        return options
    if isinstance(options, Mapping):
        return StrokeOptions.model_validate(dict(options))
    raise TypeError(
        f"options must be None, a mapping or StrokeOptions, got {type(options).__name__}"
    )


# ============================================================================
# PRESETS SCHEMA V1
# ============================================================================

class StrokePresetsV1(BaseModel):
    """Named stroke option presets (stroke_presets.v1.yaml schema)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("stroke_presets.v1", alias="schema", description="Schema version")
    presets: Dict[str, StrokeOptions] = Field(..., description="Preset name → options")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "stroke_presets.v1":
            raise ValueError(f"Expected schema 'stroke_presets.v1', got '{v}'")
        return v

    @field_validator('presets')
    @classmethod
    def validate_non_empty(cls, v: Dict[str, StrokeOptions]) -> Dict[str, StrokeOptions]:
        if not v:
            raise ValueError("presets must define at least one preset")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_stroke_presets(path: Union[str, Path]) -> Dict[str, StrokeOptions]:
    """Load and validate stroke presets from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to stroke_presets.v1.yaml file

    Returns
    -------
    Dict[str, StrokeOptions]
        Preset name → validated options

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stroke presets not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Stroke presets at {path} must be a mapping, got {type(data).__name__}")
    try:
        return StrokePresetsV1(**data).presets
    except Exception as e:
        raise ValueError(f"Stroke presets validation failed at {path}: {e}") from e


def load_stroke_options(path: Union[str, Path], name: str) -> StrokeOptions:
    """Load a single named preset.

    Raises
    ------
    KeyError
        If the preset is not defined in the file
    """
    presets = load_stroke_presets(path)
    if name not in presets:
        raise KeyError(f"Unknown stroke preset '{name}'. Available: {sorted(presets)}")
    return presets[name]
