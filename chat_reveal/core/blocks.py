"""Split one reply into sequential bubble blocks."""

from __future__ import annotations

from ..patterns import BLANK_LINE_RE


def split_blocks(text: str, max_blocks: int = 12, min_block_chars: int = 0) -> list[str]:
    """Split *text* on blank lines into at most *max_blocks* blocks.

    - empty and whitespace-only paragraphs are dropped
    - a block shorter than *min_block_chars* is merged into the previous one
    - overflow past *max_blocks* is joined into the last block
    """
    if max_blocks < 1:
        raise ValueError(f"max_blocks must be >= 1, got {max_blocks}")

    parts = [p.strip() for p in BLANK_LINE_RE.split(text or "")]
    parts = [p for p in parts if p]

    blocks: list[str] = []
    for part in parts:
        if blocks and len(part) < min_block_chars:
            blocks[-1] = f"{blocks[-1]}\n\n{part}"
        else:
            blocks.append(part)

    if len(blocks) > max_blocks:
        head, overflow = blocks[: max_blocks - 1], blocks[max_blocks - 1:]
        blocks = head + ["\n\n".join(overflow)]
    return blocks
