"""
Threadmesh Calculator - dimensions, element counts and parameter validation.

No geometry dependencies; safe to import without build123d.

Example:
    >>> from threadmesh.calculator import calculate_mesh_counts, validate_params
    >>> from threadmesh.io import ThreadParams
    >>>
    >>> params = ThreadParams(turns=2, steps_per_turn=6)
    >>> calculate_mesh_counts(params).vertices
    46
    >>> validate_params(params).valid
    True
"""

from .core import (
    MeshCounts,
    ThreadDimensions,
    expected_vertex_count,
    expected_polygon_count,
    calculate_mesh_counts,
    calculate_dimensions,
)
from .validation import (
    Severity,
    ValidationMessage,
    ValidationResult,
    InvalidParameterError,
    validate_params,
    require_valid,
)
from .output import to_json, to_markdown

__all__ = [
    # Dimensions and counts
    "MeshCounts",
    "ThreadDimensions",
    "expected_vertex_count",
    "expected_polygon_count",
    "calculate_mesh_counts",
    "calculate_dimensions",

    # Validation
    "Severity",
    "ValidationMessage",
    "ValidationResult",
    "InvalidParameterError",
    "validate_params",
    "require_valid",

    # Output
    "to_json",
    "to_markdown",
]
