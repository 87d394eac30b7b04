"""Surface extraction exports."""

from .surface_extractor import SurfaceExtractionError, extract_surface
from .surface_models import DialectSource, ShapeDefect, Surface

__all__ = [
    "DialectSource",
    "ShapeDefect",
    "Surface",
    "SurfaceExtractionError",
    "extract_surface",
]
