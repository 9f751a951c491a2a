"""Post-build mesh topology analysis.

Edge-usage checks for the properties a printable mesh needs: every edge
shared by exactly two polygons (watertight), each shared edge walked once in
each direction (consistent winding), and no edge shared by three or more
polygons (non-manifold). Works on any Mesh, independent of how it was built.
"""

from collections import Counter
from dataclasses import dataclass
from math import hypot
from typing import Dict, Iterable, List, Tuple

from .mesh import Mesh

Edge = Tuple[int, int]


@dataclass
class MeshAnalysisResult:
    """Result of mesh topology analysis.

    Attributes:
        vertex_count: Number of vertices.
        polygon_count: Number of polygons.
        triangle_count: Polygons with three vertices.
        quad_count: Polygons with four vertices.
        edge_count: Distinct undirected edges.
        boundary_edge_count: Edges used by exactly one polygon.
        non_manifold_edge_count: Edges used by three or more polygons.
        boundary_loops: Connected components of the boundary edges.
        is_watertight: True if every edge is used by exactly two polygons.
        is_consistently_oriented: True if no directed edge repeats.
        euler_characteristic: V - E + F.
        message: Human-readable summary.
    """

    vertex_count: int
    polygon_count: int
    triangle_count: int
    quad_count: int
    edge_count: int
    boundary_edge_count: int
    non_manifold_edge_count: int
    boundary_loops: int
    is_watertight: bool
    is_consistently_oriented: bool
    euler_characteristic: int
    message: str = ""


def polygon_edges(polygon: Iterable[int]) -> List[Edge]:
    """Directed edges of one polygon, in winding order."""
    indices = list(polygon)
    return [(indices[i], indices[(i + 1) % len(indices)]) for i in range(len(indices))]


def directed_edge_usage(mesh: Mesh) -> Counter:
    usage: Counter = Counter()
    for polygon in mesh.polygons:
        usage.update(polygon_edges(polygon))
    return usage


def edge_usage(mesh: Mesh) -> Dict[Edge, int]:
    """Number of polygons using each undirected edge (keyed low, high)."""
    usage: Counter = Counter()
    for polygon in mesh.polygons:
        for a, b in polygon_edges(polygon):
            usage[(min(a, b), max(a, b))] += 1
    return dict(usage)


def find_boundary_edges(mesh: Mesh) -> List[Edge]:
    """Edges used by exactly one polygon."""
    return sorted(edge for edge, count in edge_usage(mesh).items() if count == 1)


def count_boundary_loops(edges: Iterable[Edge]) -> int:
    """Connected components of a set of edges (union-find over vertices)."""
    parent: Dict[int, int] = {}

    def find(v: int) -> int:
        parent.setdefault(v, v)
        while parent[v] != v:
            parent[v] = parent[parent[v]]
            v = parent[v]
        return v

    for a, b in edges:
        root_a, root_b = find(a), find(b)
        if root_a != root_b:
            parent[root_a] = root_b

    return len({find(v) for v in list(parent)})


def is_watertight(mesh: Mesh) -> bool:
    """True if every edge of the mesh is shared by exactly two polygons."""
    usage = edge_usage(mesh)
    return bool(usage) and all(count == 2 for count in usage.values())


def is_consistently_oriented(mesh: Mesh) -> bool:
    """True if no directed edge is walked by more than one polygon."""
    return all(count == 1 for count in directed_edge_usage(mesh).values())


def max_radial_deviation(mesh: Mesh, indices: Iterable[int], radius: float) -> float:
    """Largest |distance from the Y axis - radius| over the given vertices."""
    deviation = 0.0
    for index in indices:
        x, _, z = mesh.vertex_at(index)
        deviation = max(deviation, abs(hypot(x, z) - radius))
    return deviation


def signed_volume(mesh: Mesh) -> float:
    """
    Volume enclosed by a closed mesh, signed by its winding.

    Positive when front faces are counter-clockwise seen from outside,
    negative for the clockwise convention the thread builders use.
    Meaningless for open meshes.
    """
    total = 0.0
    for a, b, c in mesh.triangles():
        ax, ay, az = mesh.vertex_at(a)
        bx, by, bz = mesh.vertex_at(b)
        cx, cy, cz = mesh.vertex_at(c)
        total += (
            ax * (by * cz - bz * cy)
            - ay * (bx * cz - bz * cx)
            + az * (bx * cy - by * cx)
        )
    return total / 6.0


def analyze_mesh(mesh: Mesh) -> MeshAnalysisResult:
    """
    Analyze mesh topology.

    Args:
        mesh: Built mesh.

    Returns:
        MeshAnalysisResult with counts and closure status.

    Example:
        >>> result = analyze_mesh(build_mesh(ThreadParams()))
        >>> result.is_watertight
        True
    """
    usage = edge_usage(mesh)
    boundary = [edge for edge, count in usage.items() if count == 1]
    non_manifold = [edge for edge, count in usage.items() if count > 2]

    triangles = sum(1 for p in mesh.polygons if len(p) == 3)
    quads = sum(1 for p in mesh.polygons if len(p) == 4)
    watertight = bool(usage) and not boundary and not non_manifold
    oriented = is_consistently_oriented(mesh)
    loops = count_boundary_loops(boundary)

    if watertight and oriented:
        message = "Closed, consistently oriented mesh"
    elif watertight:
        message = "Closed mesh with inconsistent winding"
    elif non_manifold:
        message = f"{len(non_manifold)} non-manifold edges"
    else:
        message = f"Open mesh: {len(boundary)} boundary edges in {loops} loop(s)"

    return MeshAnalysisResult(
        vertex_count=mesh.vertex_count(),
        polygon_count=len(mesh.polygons),
        triangle_count=triangles,
        quad_count=quads,
        edge_count=len(usage),
        boundary_edge_count=len(boundary),
        non_manifold_edge_count=len(non_manifold),
        boundary_loops=loops,
        is_watertight=watertight,
        is_consistently_oriented=oriented,
        euler_characteristic=mesh.vertex_count() - len(usage) + len(mesh.polygons),
        message=message,
    )


def mesh_analysis_to_dict(result: MeshAnalysisResult) -> dict:
    """Convert MeshAnalysisResult to dictionary for JSON serialization."""
    return {
        "vertex_count": result.vertex_count,
        "polygon_count": result.polygon_count,
        "triangle_count": result.triangle_count,
        "quad_count": result.quad_count,
        "edge_count": result.edge_count,
        "boundary_edge_count": result.boundary_edge_count,
        "non_manifold_edge_count": result.non_manifold_edge_count,
        "boundary_loops": result.boundary_loops,
        "is_watertight": result.is_watertight,
        "is_consistently_oriented": result.is_consistently_oriented,
        "euler_characteristic": result.euler_characteristic,
        "message": result.message,
    }
