"""
Hex dump display utilities.
"""

from typing import List, Tuple

from rich.console import Console
from rich.panel import Panel

console = Console()

# (start, end, name, color)
Region = Tuple[int, int, str, str]

VGM_REGIONS: List[Region] = [
    (0x00, 0x04, "SIGNATURE", "bright_blue"),
    (0x04, 0x08, "EOF", "dim"),
    (0x08, 0x0C, "VERSION", "cyan"),
    (0x0C, 0x14, "CLOCKS", "magenta"),
    (0x14, 0x18, "GD3", "green"),
    (0x18, 0x24, "SAMPLES", "yellow"),
    (0x34, 0x38, "DATA_OFS", "red"),
]

NSF_REGIONS: List[Region] = [
    (0x00, 0x05, "MAGIC", "bright_blue"),
    (0x05, 0x08, "SONGS", "cyan"),
    (0x08, 0x0E, "ADDRESSES", "magenta"),
    (0x0E, 0x6E, "STRINGS", "green"),
    (0x6E, 0x7C, "SPEED/FLAGS", "yellow"),
]


def _region_color(offset: int, regions: List[Region]) -> str:
    for start, end, _, color in regions:
        if start <= offset < end:
            return color
    return ""


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    max_lines: int = 32,
    regions: List[Region] = (),
) -> None:
    """Display formatted hex dump with Rich, coloring known header regions."""

    lines = []
    end = min(len(data), start_offset + max_lines * bytes_per_line)

    for offset in range(start_offset, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]

        hex_parts = []
        plain_parts = []
        for i, b in enumerate(chunk):
            if i == 8:
                hex_parts.append(" ")  # Extra space at midpoint
                plain_parts.append(" ")
            color = _region_color(offset + i, regions)
            hex_parts.append(f"[{color}]{b:02X}[/{color}]" if color else f"{b:02X}")
            plain_parts.append(f"{b:02X}")
        hex_str = " ".join(hex_parts)

        # Markup is invisible, so pad by the plain width
        padding = " " * max(0, bytes_per_line * 3 + 2 - len(" ".join(plain_parts)))

        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)
        ascii_str = ascii_str.replace("[", "\\[")

        lines.append(f"[dim]{offset:08X}[/dim]  {hex_str}{padding}  [cyan]{ascii_str}[/cyan]")

    if len(data) > end:
        remaining = len(data) - end
        lines.append(f"[dim]... {remaining} more bytes ...[/dim]")

    if regions:
        legend = "  ".join(f"[{color}]{name}[/{color}]" for _, _, name, color in regions)
        lines.append("")
        lines.append(legend)

    content = "\n".join(lines)
    console.print(Panel(content, title=title, border_style="blue", expand=False))
