"""File helpers for configs, path files and CLI output.

Writes go to a temporary sibling that is fsynced and then renamed over the
target, so a reader polling the output directory never sees a half-written
table.  YAML always goes through PyYAML's safe loader/dumper.

Usage:
    from pathtrace.utils import fs
    data = fs.load_yaml("configs/engine.v1.yaml")
    fs.atomic_yaml_dump(samples, "outputs/wave_samples.yaml")
"""

import os
import tempfile
from pathlib import Path
from typing import Any, Union

import yaml

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """Create ``p`` and its parents if missing; return it as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """Replace ``path`` with ``data`` in one rename.

    Raises
    ------
    RuntimeError
        If writing or renaming fails; the temporary file is removed.
    """
    path = Path(path)
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except OSError as e:
        tmp.unlink(missing_ok=True)
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_yaml_dump(obj: Any, path: PathLike) -> None:
    """Write ``obj`` as block-style YAML, keeping dict insertion order."""
    text = yaml.safe_dump(obj, default_flow_style=False, sort_keys=False, allow_unicode=True)
    atomic_write_bytes(path, text.encode("utf-8"))


def load_yaml(path: PathLike) -> Any:
    """Parse a YAML file with ``yaml.safe_load``.

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    yaml.YAMLError
        If the content is not valid YAML; the message names the file
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"YAML file not found: {path}") from None

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
