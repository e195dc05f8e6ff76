"""Support layer under pathtrace.path and pathtrace.engine.

Modules:
    geometry        torch kernels: Bézier evaluation, chords, arcs, bounds
    validators      pydantic schemas for engine.v1 and path.v1 YAML files
    fs              PyYAML load/dump and atomic writes
    logging_config  root logger setup and contextual fields
    profiler        wall-clock timers

Nothing here imports from pathtrace.path or pathtrace.engine.
"""

from . import fs
from . import geometry
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, log_context, push_context, setup_logging

__all__ = [
    'fs',
    'geometry',
    'logging_config',
    'profiler',
    'validators',
    'setup_logging',
    'get_logger',
    'push_context',
    'log_context',
]
