"""YAML schema validation and config loading.

Provides centralized validation for configuration and path files using pydantic:
    - Engine schema (engine.v1.yaml): curve resolution, tangent delta, logging
    - Path file schema (path.v1.yaml): drawing command list for the CLI and tests

All loaders fail fast with the offending file path in the message.

Units:
    - Coordinates: caller-defined (points in the demo shapes)
    - Angles in path files: degrees
    - Normalized time: [0.0, 1.0]

Usage:
    from pathtrace.utils import validators

    engine_cfg = validators.load_engine_config("configs/engine.v1.yaml")
    path_file = validators.load_path_file("configs/paths/wave.v1.yaml")
"""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# ENGINE SCHEMA V1
# ============================================================================

class LoggingSettings(BaseModel):
    """Keyword arguments forwarded to logging_config.setup_logging()."""
    log_level: str = Field("INFO", description="Root logger level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    json_format: bool = Field(False, alias="json", description="JSON lines in the log file")
    color: bool = Field(True, description="ANSI colors on the console")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got '{v}'")
        return v.upper()

    def as_kwargs(self) -> Dict[str, Any]:
        return {
            "log_level": self.log_level,
            "log_file": self.log_file,
            "json": self.json_format,
            "color": self.color,
        }


class EngineV1(BaseModel):
    """Engine schema v1: numeric resolution of the geometry engine."""
    schema_version: str = Field("engine.v1", alias="schema", description="Schema version")
    curve_subdivisions: int = Field(
        100, ge=1, le=100_000, description="Chords per quadratic/cubic curve"
    )
    tangent_delta: float = Field(
        0.001, gt=0.0, lt=0.5, description="Normalized time step for tangent finite differences"
    )
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "engine.v1":
            raise ValueError(f"Expected schema 'engine.v1', got '{v}'")
        return v


# ============================================================================
# PATH FILE SCHEMA V1
# ============================================================================

Coord = Tuple[float, float]

_REQUIRED_FIELDS = {
    "move": ("to",),
    "line": ("to",),
    "quad": ("to", "control"),
    "cubic": ("to", "control1", "control2"),
    "close": (),
    "arc": ("center", "radius", "start_deg", "end_deg"),
}


class PathCommandV1(BaseModel):
    """One drawing command in a path file.

    ``op`` selects which of the optional fields are required:
        move/line: to
        quad: to, control
        cubic: to, control1, control2
        close: (none)
        arc: center, radius, start_deg, end_deg (clockwise optional)
    """
    op: Literal["move", "line", "quad", "cubic", "close", "arc"]
    to: Optional[Coord] = None
    control: Optional[Coord] = None
    control1: Optional[Coord] = None
    control2: Optional[Coord] = None
    center: Optional[Coord] = None
    radius: Optional[float] = Field(None, ge=0.0)
    start_deg: Optional[float] = None
    end_deg: Optional[float] = None
    clockwise: bool = False

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode='after')
    def check_required(self) -> 'PathCommandV1':
        missing = [name for name in _REQUIRED_FIELDS[self.op] if getattr(self, name) is None]
        if missing:
            raise ValueError(f"'{self.op}' command requires {missing}")
        return self


class PathFileV1(BaseModel):
    """Path file schema v1 (serialization format for hand-authored paths)."""
    schema_version: str = Field(..., alias="schema", description="Schema version")
    name: str = Field(..., min_length=1, description="Path name (used in logs)")
    commands: List[PathCommandV1] = Field(..., description="Drawing commands in emission order")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "path.v1":
            raise ValueError(f"Expected schema 'path.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_engine_config(path: Union[str, Path]) -> EngineV1:
    """Load and validate engine config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to engine.v1.yaml file

    Returns
    -------
    EngineV1
        Validated engine configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If the file is not valid YAML or validation fails (with actionable
        error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Engine config not found: {path}")

    try:
        data = fs.load_yaml(path) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Engine config is not valid YAML at {path}: {e}") from e
    try:
        return EngineV1(**data)
    except Exception as e:
        raise ValueError(f"Engine config validation failed at {path}: {e}") from e


def load_path_file(path: Union[str, Path]) -> PathFileV1:
    """Load and validate a path file from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a path.v1 YAML file

    Returns
    -------
    PathFileV1
        Validated command list

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If the file is not valid YAML or validation fails (message includes
        the command index)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Path file not found: {path}")

    try:
        data = fs.load_yaml(path)
    except yaml.YAMLError as e:
        raise ValueError(f"Path file is not valid YAML at {path}: {e}") from e
    try:
        return PathFileV1(**data)
    except Exception as e:
        raise ValueError(f"Path file validation failed at {path}: {e}") from e
