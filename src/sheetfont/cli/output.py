"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted messages and summaries.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Sheetfont[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_sheet_info(
    sheet_path: str,
    sheet_format: str,
    width: int,
    height: int,
    layer_count: int,
    glyph_width: int,
    glyph_height: int,
) -> None:
    """Print sheet information.

    Args:
        sheet_path: Path to the sheet file
        sheet_format: Container format ("Aseprite", "Image")
        width: Sheet width in pixels
        height: Sheet height in pixels
        layer_count: Number of pixel layers
        glyph_width: Cell width in pixels
        glyph_height: Cell height in pixels
    """
    # Use Text to safely handle paths with special characters
    line1 = Text("  ")
    line1.append(sheet_path)
    line1.append(f" ({sheet_format})")
    console.print(line1)
    console.print(
        f"  {width}x{height} px {SYM_DOT} {layer_count} layers {SYM_DOT} "
        f"{glyph_width}x{glyph_height} cells"
    )


def print_layer_table(rows: list[tuple[str, str, int]]) -> None:
    """Print layers with their base codepoints and glyph counts.

    Args:
        rows: (layer name, base codepoint label, traced glyph count) per layer
    """
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("  Layer")
    table.add_column("Base")
    table.add_column("Glyphs", justify="right")
    for name, base, count in rows:
        table.add_row(Text(f"  {name}"), base, str(count))
    console.print(table)


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    output_path: str,
    file_size: str,
    total_time_s: float,
    glyphs: int,
    skipped_cells: int,
    max_points: int,
    max_contours: int,
    forced_closures: int = 0,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        total_time_s: Total processing time in seconds
        glyphs: Number of glyphs written
        skipped_cells: Number of empty cells skipped
        max_points: Largest point count of a glyph
        max_contours: Largest contour count of a glyph
        forced_closures: Number of force-closed paths
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    line = Text("  ")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})")
    console.print(line)

    console.print(
        f"  {glyphs} glyphs {SYM_DOT} {skipped_cells} empty cells {SYM_DOT} "
        f"max {max_points} points / {max_contours} contours"
    )

    if forced_closures:
        console.print(f"  [yellow]{forced_closures} paths force-closed[/yellow]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
