"""
Display formatting utilities for CLI output.

Provides bar graphics and value formatting helpers.
"""


def value_bar(
    value: int,
    max_value: int = 15,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
    show_percent: bool = True,
) -> str:
    """
    Create a text-based bar graphic with value and percentage.

    Args:
        value: Current value
        max_value: Maximum value (default 15 for a 4-bit volume)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value
        show_percent: Show percentage

    Returns:
        Formatted string like " 9 [██████░░░░] 60%"
    """
    if max_value <= 0:
        max_value = 1

    # Clamp value
    clamped = max(0, min(value, max_value))

    fill_count = int((clamped / max_value) * width)
    empty_count = width - fill_count

    bar = filled_char * fill_count + empty_char * empty_count
    percent = int((clamped / max_value) * 100)

    parts = []
    if show_value:
        parts.append(f"{value:2d}")
    parts.append(f"[{bar}]")
    if show_percent:
        parts.append(f"{percent:3d}%")

    return " ".join(parts)


def format_clock(hz: int) -> str:
    """Format a chip clock, e.g. '3.579545 MHz'."""
    if hz == 0:
        return "[dim]unused[/dim]"
    return f"{hz / 1_000_000:.6f} MHz"


def format_samples(samples: int, rate: int = 44100) -> str:
    """Format a sample count as 'm:ss.cc (n samples)'."""
    seconds = samples / rate
    minutes = int(seconds // 60)
    return f"{minutes}:{seconds - minutes * 60:05.2f} ({samples} samples)"


def format_offset(offset: int) -> str:
    if offset == 0:
        return "[dim]none[/dim]"
    return f"0x{offset:X}"


def noise_description(register: int) -> str:
    """Describe an SN76489 noise control byte."""
    kind = "white" if (register >> 2) & 0x01 else "periodic"
    rate = register & 0x03
    rate_name = ["N/512", "N/1024", "N/2048", "tone 3"][rate]
    return f"{kind}, {rate_name}"
