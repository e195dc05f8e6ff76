"""Test YAML schema validation and config loading.

Tests for pathtrace.utils.validators and pathtrace.path.loader:
    - Load the shipped engine config and path files
    - Reject invalid YAMLs with messages naming the file and offending field
    - Bounds checking (out-of-range values rejected)
    - Per-op required fields for path commands
    - Built paths match the commands in the file

Run:
    pytest tests/test_schemas.py -v
"""

import math
from pathlib import Path

import pytest
import yaml

from pathtrace.engine.length import approximate_length
from pathtrace.path.commands import CubicCurveTo, MoveTo, Point
from pathtrace.path.loader import build_path, load_path
from pathtrace.utils import validators

REPO_ROOT = Path(__file__).parent.parent
CONFIGS = REPO_ROOT / "configs"


def _write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


# ============================================================================
# ENGINE CONFIG
# ============================================================================

def test_load_valid_engine_config():
    cfg = validators.load_engine_config(CONFIGS / "engine.v1.yaml")
    assert cfg.schema_version == "engine.v1"
    assert cfg.curve_subdivisions == 100
    assert cfg.tangent_delta == 0.001
    assert cfg.logging.log_level == "INFO"
    assert cfg.logging.json_format is False


def test_engine_defaults():
    cfg = validators.EngineV1()
    assert cfg.curve_subdivisions == 100
    assert cfg.tangent_delta == 0.001


def test_logging_settings_kwargs():
    settings = validators.LoggingSettings(log_level="debug", json=True)
    assert settings.as_kwargs() == {
        "log_level": "DEBUG",
        "log_file": None,
        "json": True,
        "color": True,
    }


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"curve_subdivisions": 0}, "curve_subdivisions"),
        ({"tangent_delta": 0.0}, "tangent_delta"),
        ({"tangent_delta": 0.6}, "tangent_delta"),
        ({"schema": "engine.v2"}, "engine.v1"),
        ({"logging": {"log_level": "LOUD"}}, "log_level"),
    ],
)
def test_invalid_engine_config(tmp_path, overrides, field):
    data = {"schema": "engine.v1", **overrides}
    cfg_path = _write_yaml(tmp_path / "engine.yaml", data)

    with pytest.raises(ValueError, match="Engine config validation failed") as exc:
        validators.load_engine_config(cfg_path)
    assert field in str(exc.value)
    assert str(cfg_path) in str(exc.value)


def test_engine_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="Engine config not found"):
        validators.load_engine_config(tmp_path / "nope.yaml")


def test_engine_config_malformed_yaml(tmp_path):
    bad = tmp_path / "engine.yaml"
    bad.write_text("schema: engine.v1\nlogging: {log_level: [\n")
    with pytest.raises(ValueError, match="Engine config is not valid YAML") as exc:
        validators.load_engine_config(bad)
    assert str(bad) in str(exc.value)


# ============================================================================
# PATH FILES
# ============================================================================

@pytest.mark.parametrize("name", ["wave", "half_wheel", "loop"])
def test_shipped_path_files_load(name):
    doc = validators.load_path_file(CONFIGS / "paths" / f"{name}.v1.yaml")
    assert doc.name == name
    path = build_path(doc)
    assert isinstance(path.commands[0], MoveTo)
    assert approximate_length(path) > 0.0


def test_wave_file_commands():
    path = load_path(CONFIGS / "paths" / "wave.v1.yaml")
    assert path.commands == (
        MoveTo(Point(50, 100)),
        CubicCurveTo(Point(350, 100), Point(150, 200), Point(250, 0)),
    )


def test_half_wheel_file_builds_two_quarter_arcs():
    path = load_path(CONFIGS / "paths" / "half_wheel.v1.yaml")
    assert len(path) == 3
    assert approximate_length(path) == pytest.approx(150.0 * math.pi, rel=1e-3)


def test_every_op_builds(tmp_path):
    data = {
        "schema": "path.v1",
        "name": "all_ops",
        "commands": [
            {"op": "move", "to": [0, 0]},
            {"op": "line", "to": [10, 0]},
            {"op": "quad", "to": [20, 10], "control": [20, 0]},
            {"op": "cubic", "to": [0, 10], "control1": [15, 20], "control2": [5, 20]},
            {"op": "close"},
            {"op": "arc", "center": [0, 0], "radius": 5, "start_deg": 0, "end_deg": 90, "clockwise": True},
        ],
    }
    path = load_path(_write_yaml(tmp_path / "all.yaml", data))
    kinds = [type(c).__name__ for c in path]
    assert kinds[:5] == ["MoveTo", "LineTo", "QuadCurveTo", "CubicCurveTo", "CloseSubpath"]
    # Arc after a close joins with a line, then 270° clockwise → 3 cubics
    assert kinds[5:] == ["LineTo", "CubicCurveTo", "CubicCurveTo", "CubicCurveTo"]


@pytest.mark.parametrize(
    "command, message",
    [
        ({"op": "quad", "to": [1, 1]}, "'quad' command requires ['control']"),
        ({"op": "cubic", "to": [1, 1], "control1": [0, 1]}, "'cubic' command requires ['control2']"),
        ({"op": "arc", "center": [0, 0], "radius": 1}, "'arc' command requires ['start_deg', 'end_deg']"),
        ({"op": "spiral", "to": [1, 1]}, "op"),
        ({"op": "line", "to": [1, 1], "weight": 2}, "weight"),
        ({"op": "arc", "center": [0, 0], "radius": -1, "start_deg": 0, "end_deg": 90}, "radius"),
    ],
)
def test_invalid_path_commands(tmp_path, command, message):
    data = {"schema": "path.v1", "name": "bad", "commands": [{"op": "move", "to": [0, 0]}, command]}
    with pytest.raises(ValueError, match="Path file validation failed") as exc:
        validators.load_path_file(_write_yaml(tmp_path / "bad.yaml", data))
    assert message in str(exc.value)


def test_path_file_wrong_schema(tmp_path):
    data = {"schema": "path.v2", "name": "x", "commands": []}
    with pytest.raises(ValueError, match="path.v1"):
        validators.load_path_file(_write_yaml(tmp_path / "v2.yaml", data))


def test_path_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match="Path file not found"):
        load_path(tmp_path / "absent.yaml")


def test_path_file_non_finite_coordinate(tmp_path):
    bad = tmp_path / "nan.yaml"
    bad.write_text("schema: path.v1\nname: nan\ncommands:\n  - {op: move, to: [.nan, 0]}\n")
    doc = validators.load_path_file(bad)
    with pytest.raises(ValueError, match="finite"):
        build_path(doc)


def test_path_file_malformed_yaml(tmp_path):
    bad = tmp_path / "truncated.yaml"
    bad.write_text("schema: path.v1\ncommands: [\n")
    with pytest.raises(ValueError, match="Path file is not valid YAML") as exc:
        load_path(bad)
    assert str(bad) in str(exc.value)
