"""
Append-only polygon mesh and the sink protocol the builders write into.

Vertices are identified by their 0-based position in the vertex sequence.
Nothing is ever removed or reassigned, so an index handed out once stays
valid for the life of the mesh.

Front faces are wound clockwise when seen from outside the solid, so a
closed thread mesh has a negative signed volume. Consumers that expect
counter-clockwise front faces (STL, OCP) must reverse the polygons or, as
mesh_to_part does, let ShapeFix_Solid orient the shell.
"""

from typing import Iterator, List, Protocol, Sequence, Tuple

Point = Tuple[float, float, float]


class VertexIndexError(IndexError):
    """A polygon or read-back referenced a vertex that was never appended."""


class MeshSink(Protocol):
    """Interface the mesh builders consume from the host.

    Polygons arrive clockwise as seen from outside (see module docstring).
    """

    def append_vertex(self, point: Point) -> int:
        ...

    def append_polygon(self, indices: Sequence[int]) -> None:
        ...

    def vertex_count(self) -> int:
        ...

    def vertex_at(self, index: int) -> Point:
        ...


class Mesh:
    """
    In-memory MeshSink.

    Rejects polygons that reference vertices not yet appended, so a mesh
    built through this class can never contain forward references.
    """

    def __init__(self):
        self.vertices: List[Point] = []
        self.polygons: List[Tuple[int, ...]] = []

    def append_vertex(self, point: Point) -> int:
        x, y, z = point
        self.vertices.append((float(x), float(y), float(z)))
        return len(self.vertices) - 1

    def append_polygon(self, indices: Sequence[int]) -> None:
        polygon = tuple(int(i) for i in indices)
        if len(polygon) not in (3, 4):
            raise ValueError(
                f"Polygon must have 3 or 4 vertices, got {len(polygon)}: {polygon}"
            )
        count = len(self.vertices)
        for index in polygon:
            if index < 0 or index >= count:
                raise VertexIndexError(
                    f"Polygon {polygon} references vertex {index}, "
                    f"but only {count} vertices exist"
                )
        self.polygons.append(polygon)

    def vertex_count(self) -> int:
        return len(self.vertices)

    def polygon_count(self) -> int:
        return len(self.polygons)

    def vertex_at(self, index: int) -> Point:
        if index < 0 or index >= len(self.vertices):
            raise VertexIndexError(
                f"Vertex {index} requested, but only {len(self.vertices)} vertices exist"
            )
        return self.vertices[index]

    def triangles(self) -> Iterator[Tuple[int, int, int]]:
        """Yield every polygon as triangles, splitting quads along (a, c)."""
        for polygon in self.polygons:
            if len(polygon) == 3:
                yield polygon
            else:
                a, b, c, d = polygon
                yield (a, b, c)
                yield (a, c, d)

    def __repr__(self) -> str:
        return f"Mesh(vertices={len(self.vertices)}, polygons={len(self.polygons)})"
