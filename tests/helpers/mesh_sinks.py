"""
Mesh sinks for tests.

RecordingSink accepts any polygon, unlike Mesh, so tests can observe
forward references instead of having them rejected.
"""

from typing import List, Sequence, Tuple


class RecordingSink:
    """MeshSink that records the vertex count seen by every polygon."""

    def __init__(self):
        self.vertices: List[Tuple[float, float, float]] = []
        self.polygons: List[Tuple[int, ...]] = []
        self.vertex_count_at_polygon: List[int] = []

    def append_vertex(self, point) -> int:
        self.vertices.append(tuple(point))
        return len(self.vertices) - 1

    def append_polygon(self, indices: Sequence[int]) -> None:
        self.polygons.append(tuple(indices))
        self.vertex_count_at_polygon.append(len(self.vertices))

    def vertex_count(self) -> int:
        return len(self.vertices)

    def vertex_at(self, index: int):
        return self.vertices[index]

    def forward_references(self):
        """Polygons that referenced an index not yet appended."""
        return [
            (polygon, count)
            for polygon, count in zip(self.polygons, self.vertex_count_at_polygon)
            if min(polygon) < 0 or max(polygon) >= count
        ]
