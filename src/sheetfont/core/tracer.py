"""Per-cell tracing pipeline.

Runs grouping, boundary extraction, stitching and winding resolution for a
single glyph cell. The result depends only on the grid and the tracing
configuration.
"""

from sheetfont.config import TracingConfig
from sheetfont.core.boundary import extract_boundary
from sheetfont.core.components import group_regions
from sheetfont.core.geometry import merge_collinear
from sheetfont.core.stitcher import stitch
from sheetfont.core.winding import resolve_winding
from sheetfont.domain import GlyphOutline, Grid, Path


def trace_grid(grid: Grid, config: TracingConfig | None = None) -> GlyphOutline:
    """Trace a glyph cell into resolved outline contours.

    Args:
        grid: Weight grid of the cell
        config: Tracing options (defaults apply when None)

    Returns:
        Outline whose paths are closed and correctly wound. Empty when the
        cell has no foreground pixel.

    Raises:
        MalformedBoundaryError: If ``config.strict_closure`` is set and a
            boundary walk does not close
    """
    config = config or TracingConfig()

    paths: list[Path] = []
    for cells in group_regions(grid).values():
        edges = extract_boundary(grid, cells)
        paths.extend(stitch(edges, strict=config.strict_closure))

    resolved = resolve_winding(paths)

    if config.merge_collinear:
        resolved = [merge_collinear(path) for path in resolved]

    return GlyphOutline(paths=tuple(resolved))
