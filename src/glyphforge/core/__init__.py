"""Core processing algorithms for glyphforge.

This module contains the core algorithms for:

- Binarization (luminance histogram, Otsu threshold, resampling)
- Boundary tracing (Moore-neighbour walk over boundary pixels)
- Simplification (Douglas-Peucker under a tolerance)
- Budgeting (tolerance escalation, downscaling, trimming, placeholders)
- Serialization and sanitization of single-colour SVG paths
- Code point allocation and font assembly

The vectorization services are:
- Stateless (safe for use in worker processes)
- Pure (no side effects)
- Bounded (fixed round counts, step caps and an optional deadline)

Key functions:
- vectorize: Pixel grid to budgeted VectorizeResult
- vectorize_image: Encoded image bytes to VectorizeResult
- vectorize_svg: Caller SVG through the sanitizer
- allocate_codepoint / resolve_codepoint: Private-use allocation

Key classes:
- ContourTracer: Extracts boundary loops from a mask
- Budgeter: Keeps serialized output under a byte budget
- PathSerializer: Contours to SVG GlyphPath
- FontAssembler: Glyph paths to FontArtifact and TrueType bytes
- FontWorkspace: Lock-guarded glyph collection of one font
- FontProcessor: Parallel directory-to-font builds
"""

from glyphforge.core.analyzer import ContourAnalyzer, ContourHierarchy
from glyphforge.core.assembler import FontAssembler
from glyphforge.core.binarizer import binarize, downscale, luminance, otsu_threshold
from glyphforge.core.budget import Budgeter, trim_contours
from glyphforge.core.codepoints import (
    allocate_codepoint,
    format_codepoint,
    normalize_codepoint,
    resolve_codepoint,
)
from glyphforge.core.deadline import Deadline
from glyphforge.core.geometry import (
    bounding_box,
    point_in_polygon,
    point_segment_distance,
    signed_area,
)
from glyphforge.core.pipeline import vectorize, vectorize_image, vectorize_svg
from glyphforge.core.processor import FontProcessor, codepoint_from_name, process_image
from glyphforge.core.sanitizer import sanitize_svg
from glyphforge.core.serializer import PathSerializer, placeholder_contour
from glyphforge.core.simplifier import simplify_contour, simplify_contours
from glyphforge.core.tracer import ContourTracer, trace_contours
from glyphforge.core.workspace import FontWorkspace

__all__ = [
    # Pipeline stages
    "Budgeter",
    "ContourAnalyzer",
    "ContourHierarchy",
    "ContourTracer",
    "Deadline",
    "PathSerializer",
    # Font building
    "FontAssembler",
    "FontProcessor",
    "FontWorkspace",
    # Functions
    "allocate_codepoint",
    "binarize",
    "bounding_box",
    "codepoint_from_name",
    "downscale",
    "format_codepoint",
    "luminance",
    "normalize_codepoint",
    "otsu_threshold",
    "placeholder_contour",
    "point_in_polygon",
    "point_segment_distance",
    "process_image",
    "resolve_codepoint",
    "sanitize_svg",
    "signed_area",
    "simplify_contour",
    "simplify_contours",
    "trace_contours",
    "trim_contours",
    "vectorize",
    "vectorize_image",
    "vectorize_svg",
]
