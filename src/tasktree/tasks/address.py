"""Textual task addresses (dotted zero-based child indices)."""

from typing import Sequence

ROOT_ALIASES = {"", ".", "root"}


def parse_address(text: str) -> list[int]:
    """
    Parse a dotted address such as ``"0.2.1"``.

    ``"."``, ``"root"`` and the empty string denote the root itself.

    Args:
        text: Address text

    Returns:
        List of zero-based indices

    Raises:
        ValueError: If a component is not a non-negative integer
    """
    text = text.strip()
    if text.lower() in ROOT_ALIASES:
        return []

    indices = []
    for part in text.split("."):
        if not part.isdigit():
            raise ValueError(f"Invalid address component '{part}' in '{text}'")
        indices.append(int(part))
    return indices


def format_address(address: Sequence[int]) -> str:
    """Format indices as dotted text; the root formats as ``"."``."""
    if not address:
        return "."
    return ".".join(str(index) for index in address)
