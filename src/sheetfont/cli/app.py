"""CLI application entry point for sheetfont.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from sheetfont import __version__
from sheetfont.cli.output import (
    SYM_DOT,
    SYM_OK,
    console,
    print_error,
    print_header,
    print_layer_table,
    print_sheet_info,
    print_step,
    print_success,
)
from sheetfont.config import (
    FontInfoConfig,
    GlyphConfig,
    LoggingConfig,
    SheetFontSettings,
    TracingConfig,
)
from sheetfont.core import SheetProcessor, parse_layer_codepoint
from sheetfont.exceptions import SheetFontError, SheetLoadError
from sheetfont.io import FontWriter, SheetReader

# Create the Typer app
app = typer.Typer(
    name="sheetfont",
    help="Convert pixel-art sprite sheets into TrueType fonts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Sheetfont[/bold blue] v{__version__}")
        raise typer.Exit()


@app.command()
def convert(
    input_sheet: Annotated[
        Path,
        typer.Argument(
            help="Path to input .aseprite/.ase sheet or image",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.ttf)",
        ),
    ] = None,
    glyph_width: Annotated[
        int,
        typer.Option("--glyph-width", help="Glyph cell width in pixels", min=1, max=256),
    ] = 16,
    glyph_height: Annotated[
        int,
        typer.Option("--glyph-height", help="Glyph cell height in pixels", min=1, max=256),
    ] = 16,
    baseline: Annotated[
        int,
        typer.Option("--baseline", help="Pixels from the cell bottom to the baseline"),
    ] = 2,
    trim: Annotated[
        bool,
        typer.Option("--trim/--no-trim", help="Trim advance widths to inked columns"),
    ] = False,
    trim_pad: Annotated[
        int,
        typer.Option("--trim-pad", help="Columns of spacing after trimmed glyphs", min=0),
    ] = 1,
    line_gap: Annotated[
        int,
        typer.Option("--line-gap", help="Line gap in pixels", min=0, max=255),
    ] = 0,
    family: Annotated[
        str | None,
        typer.Option("--family", help="Font family name (default: sheet file name)"),
    ] = None,
    subfamily: Annotated[
        str | None,
        typer.Option("--subfamily", help="Font subfamily, e.g. Regular or Bold"),
    ] = None,
    copyright_notice: Annotated[
        str | None,
        typer.Option("--copyright", help="Copyright notice"),
    ] = None,
    font_version: Annotated[
        str,
        typer.Option("--font-version", help="Version string"),
    ] = "Version 1.0",
    font_weight: Annotated[
        int | None,
        typer.Option(
            "--font-weight",
            help="OS/2 weight class (default: from subfamily)",
            min=1,
            max=1000,
        ),
    ] = None,
    underline_position: Annotated[
        int,
        typer.Option("--underline-position", help="Underline position in pixels"),
    ] = 0,
    underline_thickness: Annotated[
        int,
        typer.Option("--underline-thickness", help="Underline thickness in pixels"),
    ] = 1,
    strict: Annotated[
        bool,
        typer.Option(
            "--strict",
            help="Fail on boundaries that do not close instead of force-closing them",
        ),
    ] = False,
    merge_collinear: Annotated[
        bool,
        typer.Option(
            "--merge-collinear",
            help="Keep only corner points in outlines",
        ),
    ] = False,
    list_layers: Annotated[
        bool,
        typer.Option(
            "--list-layers",
            help="List layers with their codepoints and exit",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Trace the sheet and show what would be written without saving",
        ),
    ] = False,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Convert a sprite sheet into a TrueType font.

    Every layer named U+XXXX is cut into glyph cells. The top-left cell maps to
    codepoint XXXX and the following cells, row by row, to the next codepoints.
    Empty cells are skipped.

    Example:
        sheetfont glyphs.aseprite --glyph-width=8 --glyph-height=8

    This will create glyphs.ttf next to the input file.
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    # Validate input file exists
    if not input_sheet.exists():
        print_error(
            f"Input file not found: {input_sheet}",
            details=f"The file '{input_sheet}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not input_sheet.is_file():
        print_error(
            f"Input path is not a file: {input_sheet}",
            details="Please provide a path to an Aseprite file or an image.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    # Create settings from CLI arguments
    settings = SheetFontSettings(
        glyph=GlyphConfig(
            width=glyph_width,
            height=glyph_height,
            baseline=baseline,
            trim=trim,
            trim_pad=trim_pad,
        ),
        font=FontInfoConfig(
            family=family,
            subfamily=subfamily,
            copyright=copyright_notice,
            version=font_version,
            weight=font_weight,
            line_gap=line_gap,
            underline_position=underline_position,
            underline_thickness=underline_thickness,
        ),
        tracing=TracingConfig(
            strict_closure=strict,
            merge_collinear=merge_collinear,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level if not quiet else "ERROR",
        ),
    )

    try:
        if list_layers or dry_run:
            _handle_inspection(input_sheet, settings, quiet, verbose, dry_run)
            raise typer.Exit(code=0)

        actual_output_path = output or FontWriter.get_output_path(input_sheet)

        if not quiet:
            print_step("Converting")

        processor = SheetProcessor(settings, quiet=quiet)
        stats = processor.process(sheet_path=input_sheet, output_path=actual_output_path)

        if not quiet:
            print_success(
                output_path=str(actual_output_path),
                file_size=_format_file_size(actual_output_path),
                total_time_s=stats.duration_seconds,
                glyphs=stats.glyph_count,
                skipped_cells=stats.skipped_cells,
                max_points=stats.max_points,
                max_contours=stats.max_contours,
                forced_closures=stats.forced_closures,
            )
            if verbose and stats.skipped_layers:
                console.print("\n[bold]Skipped layers[/bold]")
                for name, reason in stats.skipped_layers:
                    console.print(f"  {name}: {reason}")

    except FileNotFoundError as e:
        print_error(f"Could not load sheet: {e}")
        raise typer.Exit(code=1)
    except SheetLoadError as e:
        print_error(f"Could not load sheet: {e.reason}")
        raise typer.Exit(code=1)
    except SheetFontError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _handle_inspection(
    sheet_path: Path,
    settings: SheetFontSettings,
    quiet: bool,
    verbose: bool,
    dry_run: bool,
) -> None:
    """Handle --list-layers and --dry-run modes.

    Both trace the sheet; neither writes a font.

    Args:
        sheet_path: Path to sheet file
        settings: Sheetfont settings
        quiet: Suppress output
        verbose: Show verbose output
        dry_run: Print the conversion summary instead of the layer table
    """
    if not quiet:
        print_step("Loading sheet")

    processor = SheetProcessor(settings, quiet=quiet)

    with SheetReader(sheet_path) as reader:
        if not quiet:
            print_sheet_info(
                sheet_path=str(sheet_path),
                sheet_format=reader.format,
                width=reader.width,
                height=reader.height,
                layer_count=reader.layer_count,
                glyph_width=settings.glyph.width,
                glyph_height=settings.glyph.height,
            )
            print_step("Tracing (dry run)" if dry_run else "Scanning layers")

        processor.validate_dimensions(reader.width, reader.height)

        rows: list[tuple[str, str, int]] = []
        for layer in reader.iter_layers():
            base = parse_layer_codepoint(layer.name)
            if base is None:
                rows.append((layer.name, "-", 0))
                continue
            glyphs = list(processor.trace_layer(layer, base))
            rows.append((layer.name, f"U+{base:04X}", len(glyphs)))

    stats = processor.stats

    if dry_run:
        if not quiet:
            console.print("\n[bold]Analysis[/bold]\n")
            console.print(f"  Codepoint layers      {stats.layers_processed}")
            console.print(f"  Glyphs                {stats.glyph_count}")
            console.print(f"  Empty cells           {stats.skipped_cells}")
            console.print(f"  Max points            {stats.max_points}")
            console.print(f"  Max contours          {stats.max_contours}")
            if stats.forced_closures:
                console.print(f"  Force-closed paths    {stats.forced_closures}")
            if verbose:
                console.print()
                print_layer_table(rows)
            console.print(
                f"\n[bold green]{SYM_OK} Dry run complete[/bold green] {SYM_DOT} no font written"
            )
        return

    if not quiet:
        console.print()
    print_layer_table(rows)


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "12 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
