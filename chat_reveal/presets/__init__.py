"""Presets: ready-to-use reveal configurations."""

from .base import get_preset, list_presets  # noqa: F401

# Import presets to trigger registration
from . import builtin  # noqa: F401
