"""Configuration loading, validation, and defaults."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .types import (
    REVEAL_MODES,
    ChainConfig,
    ChatRevealConfig,
    ConfigError,
    RevealConfig,
)

CONFIG_FILENAMES = [
    "chat-reveal.yaml",
    "chat-reveal.yml",
    "chat-reveal.json",
    "chatreveal.yaml",
    "chatreveal.yml",
    "chatreveal.json",
]


def _discover_config() -> Path | None:
    """Search CWD then parent dirs up to home for a config file."""
    cwd = Path.cwd()
    home = Path.home()
    search = cwd
    while True:
        for name in CONFIG_FILENAMES:
            candidate = search / name
            if candidate.is_file():
                return candidate
        if search == home or search == search.parent:
            break
        search = search.parent
    return None


def _build_config(raw: dict[str, Any]) -> ChatRevealConfig:
    """Build a ChatRevealConfig from a raw dict."""
    reveal_raw = raw.get("reveal", {}) or {}
    reveal = RevealConfig(
        mode=reveal_raw.get("mode", "character"),
        interval_ms=reveal_raw.get("interval_ms", 30),
        word_tick_multiplier=reveal_raw.get("word_tick_multiplier", 4),
        animation_enabled=reveal_raw.get("animation_enabled", True),
        cursor=reveal_raw.get("cursor", "▌"),
    )

    chain_raw = raw.get("chain", {}) or {}
    chain = ChainConfig(
        split_blocks=chain_raw.get("split_blocks", True),
        max_blocks=chain_raw.get("max_blocks", 12),
        min_block_chars=chain_raw.get("min_block_chars", 0),
    )

    return ChatRevealConfig(
        version=str(raw.get("version", "1.0")),
        reveal=reveal,
        chain=chain,
    )


def validate_config(config: ChatRevealConfig) -> list[str]:
    """Validate a config. Returns list of error strings (empty = valid)."""
    errors: list[str] = []

    if config.reveal.mode not in REVEAL_MODES:
        errors.append(
            f"reveal.mode must be one of {', '.join(REVEAL_MODES)} "
            f"(got '{config.reveal.mode}')"
        )

    if not isinstance(config.reveal.interval_ms, int) or config.reveal.interval_ms <= 0:
        errors.append(f"reveal.interval_ms must be a positive integer (got {config.reveal.interval_ms!r})")

    if not isinstance(config.reveal.word_tick_multiplier, int) or config.reveal.word_tick_multiplier < 1:
        errors.append(
            f"reveal.word_tick_multiplier must be >= 1 (got {config.reveal.word_tick_multiplier!r})"
        )

    if not isinstance(config.chain.max_blocks, int) or config.chain.max_blocks < 1:
        errors.append(f"chain.max_blocks must be >= 1 (got {config.chain.max_blocks!r})")

    if not isinstance(config.chain.min_block_chars, int) or config.chain.min_block_chars < 0:
        errors.append(f"chain.min_block_chars must be >= 0 (got {config.chain.min_block_chars!r})")

    return errors


def load_config(
    config_path: str | Path | None = None,
    config_dict: dict | None = None,
) -> ChatRevealConfig:
    """Load config from dict, explicit path, or auto-discover."""
    if config_dict is not None:
        return _build_config(config_dict)

    if config_path is not None:
        path = Path(config_path)
    else:
        path = _discover_config()

    if path is None:
        # Return defaults
        return _build_config({})

    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    text = path.read_text()
    try:
        if path.suffix == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not parse {path}: {e}", path=str(path)) from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Top level of {path} must be a mapping", path=str(path))

    return _build_config(raw)
