"""Preset registry: register, lookup, and list presets."""

from __future__ import annotations

from dataclasses import dataclass

import yaml

from ..config import load_config
from ..types import ChatRevealConfig


@dataclass
class Preset:
    name: str
    description: str
    config_dict: dict

    @property
    def template(self) -> str:
        """YAML written by ``chat-reveal init``."""
        header = f"# chat-reveal config, preset: {self.name}\n# {self.description}\n\n"
        return header + yaml.safe_dump(self.config_dict, sort_keys=False, allow_unicode=True)

    def build_config(self) -> ChatRevealConfig:
        return load_config(config_dict=self.config_dict)


_PRESETS: dict[str, Preset] = {}


def register_preset(preset: Preset) -> None:
    """Register a preset by name."""
    _PRESETS[preset.name] = preset


def get_preset(name: str) -> Preset | None:
    """Return a preset by name, or None if not found."""
    return _PRESETS.get(name)


def list_presets() -> list[Preset]:
    """Return all registered presets."""
    return list(_PRESETS.values())
