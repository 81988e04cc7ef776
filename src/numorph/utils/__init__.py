"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Style validation (validators)
    - ARGB color packing and alpha modulation (color)
    - Rectangle and outline geometry (geometry)
    - Atomic I/O (fs)
    - Profiling (profiler)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (graphics, shape, drawable, etc.).

Convenience imports:
    from numorph.utils import fs, color, geometry, validators
    from numorph.utils.logging_config import setup_logging, get_logger
"""

# Re-export commonly used modules for convenience
from . import color
from . import fs
from . import geometry
from . import logging_config
from . import profiler
from . import validators

# Common functions for direct import
from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'geometry',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
