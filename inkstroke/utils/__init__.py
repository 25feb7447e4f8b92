"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - 2-D vector math on numpy arrays (geometry)
    - Easing curves for pressure and taper (easings)
    - Option validation and YAML presets (validators)
    - YAML / atomic file I/O (fs)
    - Hashing for jitter seeds and provenance (hashing)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (stroke_engine, scripts).

Convenience imports:
    from inkstroke.utils import geometry, validators
    from inkstroke.utils.logging_config import setup_logging, get_logger
"""

from . import easings
from . import fs
from . import geometry
from . import hashing
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'easings',
    'fs',
    'geometry',
    'hashing',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
