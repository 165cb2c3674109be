"""CLI: chat-reveal render, tokens, play, chat, init, presets, config validate."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ..config import load_config, validate_config
from ..presets import get_preset, list_presets


def _load_or_exit(config_path: str | None):
    try:
        return load_config(config_path)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)


def _read_text_arg(args) -> str:
    """Text from the positional argument, --file, or stdin."""
    if getattr(args, "file", None):
        path = Path(args.file)
        if not path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            sys.exit(1)
        return path.read_text()
    if args.text is not None:
        return args.text
    print("Reading text from stdin (Ctrl+D to end)...", file=sys.stderr)
    return sys.stdin.read()


def cmd_render(args):
    """Print text with inline markup applied."""
    from rich.console import Console

    from ..core.slicer import render_complete
    from ..render import spans_to_text

    text = _read_text_arg(args)
    Console().print(spans_to_text(render_complete(text)))


def cmd_tokens(args):
    """Show the spans and word boundaries of a text."""
    from ..core.slicer import plain_length, word_boundaries
    from ..core.tokenizer import tokenize

    text = _read_text_arg(args)
    spans = tokenize(text)

    if args.json:
        print(json.dumps({
            "spans": [
                {"kind": s.kind, "text": s.text, **({"url": s.url} if s.url else {})}
                for s in spans
            ],
            "plain_length": plain_length(spans),
            "word_boundaries": word_boundaries(spans),
        }, indent=2, ensure_ascii=False))
        return

    print(f"{'#':>3} {'Kind':<14} {'Length':>6}  Text")
    print("-" * 60)
    for i, s in enumerate(spans):
        shown = s.text if s.url is None else f"{s.text} -> {s.url}"
        print(f"{i:>3} {s.kind:<14} {len(s.text):>6}  {shown!r}")
    print()
    print(f"Plain length:    {plain_length(spans)}")
    print(f"Word boundaries: {word_boundaries(spans)}")


def cmd_play(args):
    """Reveal text in the terminal without the TUI."""
    from ..tui.headless import HeadlessPlayer

    config = _load_or_exit(args.config)
    if args.mode:
        config.reveal.mode = args.mode
    if args.interval:
        config.reveal.interval_ms = args.interval
    if args.no_animation:
        config.reveal.animation_enabled = False
    errors = validate_config(config)
    if errors:
        for err in errors:
            print(f"  - {err}", file=sys.stderr)
        sys.exit(1)

    HeadlessPlayer(config).run([_read_text_arg(args)])


def cmd_chat(args):
    """Launch interactive TUI chat (or play a reply script headless)."""
    from ..tui.state import ScriptedReplySource, history_from_dicts, load_reply_script

    replies = None
    if args.script:
        script_path = Path(args.script)
        if not script_path.exists():
            print(f"Script file not found: {script_path}", file=sys.stderr)
            sys.exit(1)
        replies = load_reply_script(script_path)
        if not replies:
            print(f"No replies found in: {script_path}", file=sys.stderr)
            sys.exit(1)
        print(f"Loaded {len(replies)} replies from {script_path}", file=sys.stderr)

    if args.headless:
        if not replies:
            print("--headless requires --script <file>", file=sys.stderr)
            sys.exit(1)
        from ..tui.headless import HeadlessPlayer

        config = _load_or_exit(args.config)
        HeadlessPlayer(config).run(replies)
        return

    history = None
    if args.history:
        try:
            history = history_from_dicts(json.loads(Path(args.history).read_text()))
        except (OSError, json.JSONDecodeError, AttributeError, TypeError) as e:
            print(f"Could not read history: {e}", file=sys.stderr)
            sys.exit(1)

    try:
        from ..tui.app import run_chat
    except ImportError:
        print(
            "TUI dependencies not installed. Run: pip install textual",
            file=sys.stderr,
        )
        sys.exit(1)

    run_chat(
        config_path=args.config,
        reply_source=ScriptedReplySource(replies) if replies else None,
        history=history,
    )


def cmd_init(args):
    """Generate a config file from a preset."""
    preset = get_preset(args.preset)
    if preset is None:
        available = ", ".join(p.name for p in list_presets())
        print(f"Unknown preset: {args.preset}", file=sys.stderr)
        if available:
            print(f"Available presets: {available}", file=sys.stderr)
        sys.exit(1)

    output = Path.cwd() / "chat-reveal.yaml"
    if output.exists() and not args.force:
        print(f"Config file already exists: {output}", file=sys.stderr)
        print("Use --force to overwrite.", file=sys.stderr)
        sys.exit(1)

    output.write_text(preset.template)
    print(f"Created {output}")
    print(f"Preset: {preset.name} ({preset.description})")
    print()
    print("Next steps:")
    print("  1. Validate config:   chat-reveal config validate")
    print("  2. Try it:            chat-reveal play 'Hello **world**!'")


def cmd_presets(args):
    """List or show presets."""
    action = getattr(args, "presets_action", None) or "list"

    if action == "list":
        presets = list_presets()
        if not presets:
            print("No presets registered.")
            return
        print(f"{'Name':<15} {'Description'}")
        print("-" * 60)
        for p in presets:
            print(f"{p.name:<15} {p.description}")
    elif action == "show":
        preset = get_preset(args.preset_name)
        if preset is None:
            print(f"Unknown preset: {args.preset_name}", file=sys.stderr)
            sys.exit(1)
        print(preset.template)


def cmd_config_validate(args):
    """Validate config file."""
    config = _load_or_exit(args.config)

    errors = validate_config(config)
    if errors:
        print("Config validation errors:")
        for err in errors:
            print(f"  - {err}")
        sys.exit(1)
    else:
        print("Config is valid.")
        print(f"  Reveal mode:   {config.reveal.mode}")
        print(f"  Interval:      {config.reveal.interval_ms}ms")
        if config.reveal.mode == "word":
            print(f"  Word tick:     x{config.reveal.word_tick_multiplier}")
        print(f"  Animation:     {'on' if config.reveal.animation_enabled else 'off'}")
        print(f"  Split blocks:  {config.chain.split_blocks} (max {config.chain.max_blocks})")


def _add_text_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("text", nargs="?", help="Text to process (default: stdin)")
    parser.add_argument("--file", "-f", help="Read text from a file")


def main():
    parser = argparse.ArgumentParser(
        prog="chat-reveal",
        description="Inline chat markup with live-typing reveal",
    )
    parser.add_argument("--config", "-c", help="Path to config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    # render
    render_parser = subparsers.add_parser("render", help="Print text with markup applied")
    _add_text_args(render_parser)

    # tokens
    tokens_parser = subparsers.add_parser("tokens", help="Show spans and word boundaries")
    _add_text_args(tokens_parser)
    tokens_parser.add_argument("--json", action="store_true", help="Output JSON")

    # play
    play_parser = subparsers.add_parser("play", help="Reveal text in the terminal")
    _add_text_args(play_parser)
    play_parser.add_argument("--mode", choices=["character", "word"], help="Reveal granularity")
    play_parser.add_argument("--interval", type=int, help="Tick interval in ms")
    play_parser.add_argument("--no-animation", action="store_true", help="Show text at once")

    # chat
    chat_parser = subparsers.add_parser("chat", help="Interactive TUI chat")
    chat_parser.add_argument(
        "--script",
        metavar="FILE",
        help="Canned replies (JSON/YAML list, or text separated by '---' lines)",
    )
    chat_parser.add_argument(
        "--history",
        metavar="FILE",
        help="JSON list of {role, content} shown fully formed on start",
    )
    chat_parser.add_argument(
        "--headless",
        action="store_true",
        help="Play the script without TUI (requires --script)",
    )

    # init
    init_parser = subparsers.add_parser("init", help="Generate config from a preset")
    init_parser.add_argument("preset", help="Preset name (see: chat-reveal presets)")
    init_parser.add_argument("--force", action="store_true", help="Overwrite existing config")

    # presets
    presets_parser = subparsers.add_parser("presets", help="List or inspect config presets")
    presets_sub = presets_parser.add_subparsers(dest="presets_action")
    presets_sub.add_parser("list", help="List all available presets")
    presets_show_parser = presets_sub.add_parser("show", help="Show a preset's config as YAML")
    presets_show_parser.add_argument("preset_name", help="Preset name to show")

    # config validate
    config_parser = subparsers.add_parser("config", help="Config operations")
    config_sub = config_parser.add_subparsers(dest="config_command")
    config_sub.add_parser("validate", help="Validate config file")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "render":
        cmd_render(args)
    elif args.command == "tokens":
        cmd_tokens(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "chat":
        cmd_chat(args)
    elif args.command == "init":
        cmd_init(args)
    elif args.command == "presets":
        cmd_presets(args)
    elif args.command == "config":
        if args.config_command == "validate":
            cmd_config_validate(args)
        else:
            print("Usage: chat-reveal config validate")
            sys.exit(1)


if __name__ == "__main__":
    main()
