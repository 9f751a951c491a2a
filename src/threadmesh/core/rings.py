"""
Vertex rings and the side walls between them.

A ring is a contiguous block of steps_per_turn vertices evenly spaced
around the Y axis. Ramp rings climb linearly with the step index and follow
the thread pitch; flat rings are planar and only appear in lead caps.
"""

from dataclasses import dataclass
from math import cos, pi, sin
from typing import Iterable, Optional, Sequence

from ..enums import Hand, RingKind
from ..io.loaders import ThreadParams
from .mesh import MeshSink


@dataclass(frozen=True)
class RingDescriptor:
    """Location and role of one ring inside the mesh.

    Attributes:
        start: Index of the vertex at step 0.
        size: Number of vertices (steps per turn).
        kind: Role of the ring.
        radius: Distance of every vertex from the rotation axis.
    """

    start: int
    size: int
    kind: RingKind
    radius: float

    def index(self, step: int) -> int:
        """Vertex index at a step; negative steps count back from the end."""
        return self.start + (step % self.size)

    @property
    def first(self) -> int:
        return self.start

    @property
    def last(self) -> int:
        return self.start + self.size - 1

    @property
    def indices(self) -> range:
        return range(self.start, self.start + self.size)


def emit_polygon(sink: MeshSink, params: ThreadParams, indices: Sequence[int]) -> None:
    """Append a polygon, reversing the winding when the hand is mirrored."""
    if params.hand == Hand.RIGHT:
        indices = tuple(reversed(indices))
    sink.append_polygon(tuple(indices))


def build_ring(
    sink: MeshSink,
    params: ThreadParams,
    radius: float,
    y_start: float,
    height_span: float,
    ramp: bool,
    kind: RingKind,
) -> RingDescriptor:
    """
    Append one ring of vertices.

    Args:
        sink: Mesh to append to
        params: Thread parameters (steps per turn and hand)
        radius: Ring radius
        y_start: Height of the vertex at step 0 (ramp) or base height (flat)
        height_span: Height gained over one full turn (ramp) or offset
                     applied to every vertex (flat)
        ramp: True to climb linearly around the ring
        kind: Role recorded on the returned descriptor

    Returns:
        Descriptor of the appended ring
    """
    steps = params.steps_per_turn
    mirror = -1.0 if params.hand == Hand.RIGHT else 1.0
    rise = height_span / steps

    start = None
    for step in range(steps):
        angle = 2 * pi * step / steps
        x = cos(angle) * radius
        z = sin(angle) * radius * mirror
        if ramp:
            y = y_start + rise * step
        else:
            y = y_start + height_span

        index = sink.append_vertex((x, y, z))
        if start is None:
            start = index

    return RingDescriptor(start=start, size=steps, kind=kind, radius=radius)


def stitch_rings(
    sink: MeshSink,
    params: ThreadParams,
    lower: RingDescriptor,
    upper: RingDescriptor,
    steps: Optional[Iterable[int]] = None,
) -> int:
    """
    Connect two rings with a strip of quads.

    One quad per step i in [0, size - 1): (lower[i], lower[i+1],
    upper[i+1], upper[i]). The wrap-around edge from the last step back to
    step 0 is left open.

    Args:
        sink: Mesh to append to
        params: Thread parameters
        lower: Ring the strip starts from
        upper: Ring the strip ends on
        steps: Subset of steps to emit (default: all of them)

    Returns:
        Number of quads appended
    """
    if lower.size != upper.size:
        raise ValueError(
            f"Cannot stitch rings of different sizes ({lower.size} and {upper.size})"
        )

    if steps is None:
        steps = range(lower.size - 1)

    count = 0
    for step in steps:
        emit_polygon(sink, params, (
            lower.index(step),
            lower.index(step + 1),
            upper.index(step + 1),
            upper.index(step),
        ))
        count += 1
    return count
