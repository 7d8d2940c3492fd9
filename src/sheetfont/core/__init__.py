"""Core processing algorithms for sheetfont.

This module contains the raster-to-vector outline pipeline:

- Component grouping (4-connected regions via union-find)
- Boundary extraction (unique unit edges of each region)
- Path stitching (closed loops with self-touch splitting)
- Winding resolution (nesting depth and orientation)

All stages are pure functions of their input and process one glyph cell at a
time.

Key functions:
- group_regions: Partition foreground cells into regions
- extract_boundary: Perimeter edges of one region
- stitch: Closed paths from a region's edges
- resolve_winding: Orient paths by nesting parity
- trace_grid: Run the whole pipeline for one cell

Key classes:
- UnionFind: Disjoint-set forest
- SheetProcessor: Converts a whole sheet into a font
"""

from sheetfont.core.boundary import boundary_edges, extract_boundary
from sheetfont.core.components import UnionFind, group_regions
from sheetfont.core.geometry import merge_collinear, point_in_polygon
from sheetfont.core.processor import SheetProcessor, parse_layer_codepoint
from sheetfont.core.stitcher import stitch
from sheetfont.core.tracer import trace_grid
from sheetfont.core.winding import nesting_depth, resolve_winding

__all__ = [
    # Processor classes
    "SheetProcessor",
    # Grouping
    "UnionFind",
    # Boundary
    "boundary_edges",
    "extract_boundary",
    "group_regions",
    # Geometry functions
    "merge_collinear",
    "nesting_depth",
    "parse_layer_codepoint",
    "point_in_polygon",
    "resolve_winding",
    "stitch",
    "trace_grid",
]
