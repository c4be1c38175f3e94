"""
Recalculation engine: scientific codec, chain recalculation and reordering.
"""

from formulatron.engine.scientific import normalize, denormalize, parse_field
from formulatron.engine.recalc import recalculate, evaluate, apply_field, apply_unit
from formulatron.engine.reorder import reorder, refresh_prefixes

__all__ = [
    "normalize",
    "denormalize",
    "parse_field",
    "recalculate",
    "evaluate",
    "apply_field",
    "apply_unit",
    "reorder",
    "refresh_prefixes",
]
