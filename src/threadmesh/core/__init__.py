"""
Threadmesh Core - threaded cylinder mesh generation.

The mesh builders are pure Python. Conversion to a build123d Part
(ThreadGeometry.build(), mesh_to_part) needs build123d.

Example:
    >>> from threadmesh.core import Mesh, build
    >>> from threadmesh.io import ThreadParams
    >>>
    >>> mesh = Mesh()
    >>> report = build(ThreadParams(turns=3), mesh)
    >>> report.is_closed
    True
"""

from .mesh import Mesh, MeshSink, Point, VertexIndexError
from .rings import RingDescriptor, build_ring, stitch_rings, emit_polygon
from .thread import ThreadSurface, build_thread_surface, close_thread_gaps
from .leads import LeadCap, build_lead_in, build_lead_out
from .builder import ThreadMeshReport, ThreadGeometry, build, build_mesh
from .topology import (
    MeshAnalysisResult,
    analyze_mesh,
    mesh_analysis_to_dict,
    edge_usage,
    find_boundary_edges,
    count_boundary_loops,
    is_watertight,
    is_consistently_oriented,
    max_radial_deviation,
    signed_volume,
)

__all__ = [
    # Mesh sink
    "Mesh",
    "MeshSink",
    "Point",
    "VertexIndexError",

    # Builders
    "RingDescriptor",
    "build_ring",
    "stitch_rings",
    "emit_polygon",
    "ThreadSurface",
    "build_thread_surface",
    "close_thread_gaps",
    "LeadCap",
    "build_lead_in",
    "build_lead_out",
    "ThreadMeshReport",
    "ThreadGeometry",
    "build",
    "build_mesh",

    # Topology analysis
    "MeshAnalysisResult",
    "analyze_mesh",
    "mesh_analysis_to_dict",
    "edge_usage",
    "find_boundary_edges",
    "count_boundary_loops",
    "is_watertight",
    "is_consistently_oriented",
    "max_radial_deviation",
    "signed_volume",
]
