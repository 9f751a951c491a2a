"""Output formatters for thread parameters and build summaries.

Converts ThreadParams to JSON and Markdown. Uses Pydantic's
model_dump(mode='json') so enums serialize to their string values.
"""

import json
from typing import Optional, TYPE_CHECKING

from ..io import ThreadParams
from ..io.schema import SCHEMA_VERSION, get_host_parameter
from .core import calculate_dimensions, calculate_mesh_counts

if TYPE_CHECKING:
    from .validation import ValidationResult
    from ..core.topology import MeshAnalysisResult


def to_json(
    params: ThreadParams,
    validation: Optional["ValidationResult"] = None,
    analysis: Optional["MeshAnalysisResult"] = None,
    indent: int = 2,
) -> str:
    """Convert ThreadParams to a JSON string.

    Args:
        params: Thread parameters
        validation: Optional validation results to include in output
        analysis: Optional mesh analysis to include in output
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with schema version, parameters and derived values
    """
    counts = calculate_mesh_counts(params)
    dims = calculate_dimensions(params)

    data = {
        "schema_version": SCHEMA_VERSION,
        "thread": params.model_dump(mode='json'),
        "derived": {
            "vertical_offset": params.vertical_offset,
            "thread_depth": round(dims.thread_depth, 6),
            "total_height": round(dims.total_height, 6),
            "lead_angle_deg": round(dims.lead_angle_deg, 4),
            "vertices": counts.vertices,
            "polygons": counts.polygons,
        },
    }

    if validation is not None:
        data["validation"] = {
            "valid": validation.valid,
            "messages": [
                {
                    "severity": m.severity.value,
                    "code": m.code,
                    "message": m.message,
                    **({"suggestion": m.suggestion} if m.suggestion else {}),
                }
                for m in validation.messages
            ],
        }

    if analysis is not None:
        from ..core.topology import mesh_analysis_to_dict
        data["analysis"] = mesh_analysis_to_dict(analysis)

    return json.dumps(data, indent=indent)


def to_markdown(
    params: ThreadParams,
    validation: Optional["ValidationResult"] = None,
    analysis: Optional["MeshAnalysisResult"] = None,
) -> str:
    """Convert ThreadParams to a Markdown summary."""
    counts = calculate_mesh_counts(params)
    dims = calculate_dimensions(params)
    values = params.model_dump(mode='json')

    lines = [
        "# Threaded Cylinder",
        "",
        "## Parameters",
        "",
        "| Parameter | Value |",
        "|-----------|-------|",
    ]
    for name, value in values.items():
        lines.append(f"| {get_host_parameter(name).label} | {value} |")

    lines.extend([
        "",
        "## Dimensions",
        "",
        f"- Thread depth: {dims.thread_depth:.4f}",
        f"- Pitch: {dims.pitch:.4f}",
        f"- Total height: {dims.total_height:.4f}",
        f"- Lead angle at crest: {dims.lead_angle_deg:.2f}°",
        "",
        "## Mesh",
        "",
        f"- Vertices: {counts.vertices}",
        f"- Polygons: {counts.polygons} ({counts.quads} quads, {counts.triangles} triangles)",
    ])

    if analysis is not None:
        lines.append(f"- Topology: {analysis.message}")

    if validation is not None and validation.messages:
        lines.extend(["", "## Validation", ""])
        for m in validation.messages:
            lines.append(f"- **{m.severity.value.upper()}** {m.code}: {m.message}")
            if m.suggestion:
                lines.append(f"  - {m.suggestion}")

    lines.append("")
    return "\n".join(lines)
