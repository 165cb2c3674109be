"""Built-in presets: typewriter, word-by-word, and instant."""

from __future__ import annotations

from .base import Preset, register_preset

TYPEWRITER_CONFIG: dict = {
    "version": "1.0",
    "reveal": {
        "mode": "character",
        "interval_ms": 30,
        "word_tick_multiplier": 4,
        "animation_enabled": True,
        "cursor": "▌",
    },
    "chain": {
        "split_blocks": True,
        "max_blocks": 12,
        "min_block_chars": 0,
    },
}

WORD_CONFIG: dict = {
    "version": "1.0",
    "reveal": {
        "mode": "word",
        "interval_ms": 25,
        "word_tick_multiplier": 4,  # 100ms per word
        "animation_enabled": True,
        "cursor": "▌",
    },
    "chain": {
        "split_blocks": True,
        "max_blocks": 8,
        "min_block_chars": 40,
    },
}

INSTANT_CONFIG: dict = {
    "version": "1.0",
    "reveal": {
        "mode": "character",
        "interval_ms": 30,
        "word_tick_multiplier": 4,
        "animation_enabled": False,
        "cursor": "",
    },
    "chain": {
        "split_blocks": False,
        "max_blocks": 1,
        "min_block_chars": 0,
    },
}

register_preset(Preset(
    name="typewriter",
    description="Character-by-character reveal at 30ms, replies split into bubbles",
    config_dict=TYPEWRITER_CONFIG,
))
register_preset(Preset(
    name="word",
    description="Word-by-word reveal (25ms x 4), short paragraphs merged",
    config_dict=WORD_CONFIG,
))
register_preset(Preset(
    name="instant",
    description="No animation, one bubble per reply",
    config_dict=INSTANT_CONFIG,
))
