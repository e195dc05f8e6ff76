"""Build ``Path`` values from validated path files.

The engine never parses serialized paths.  This loader sits on the
collaborator side: it turns a ``path.v1`` YAML file (see
``validators.PathFileV1``) into a ``Path`` through ``PathBuilder``.

Usage::

    from pathtrace.path.loader import load_path
    path = load_path("configs/paths/wave.v1.yaml")
"""

from __future__ import annotations

import logging
from pathlib import Path as FilePath
from typing import Union

from pathtrace.path.commands import Path, PathBuilder
from pathtrace.utils import validators

logger = logging.getLogger(__name__)


def build_path(doc: validators.PathFileV1) -> Path:
    """Convert a validated path file into an immutable ``Path``."""
    builder = PathBuilder()

    for cmd in doc.commands:
        if cmd.op == "move":
            builder.move_to(cmd.to)
        elif cmd.op == "line":
            builder.line_to(cmd.to)
        elif cmd.op == "quad":
            builder.quad_curve_to(cmd.to, cmd.control)
        elif cmd.op == "cubic":
            builder.curve_to(cmd.to, cmd.control1, cmd.control2)
        elif cmd.op == "close":
            builder.close_subpath()
        elif cmd.op == "arc":
            builder.add_arc(cmd.center, cmd.radius, cmd.start_deg, cmd.end_deg, cmd.clockwise)

    path = builder.build()
    logger.debug("Built path '%s' with %d commands", doc.name, len(path))
    return path


def load_path(file_path: Union[str, FilePath]) -> Path:
    """Load, validate and build a path file.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If the file fails schema validation
    """
    return build_path(validators.load_path_file(file_path))
