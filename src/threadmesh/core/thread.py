"""
Helical thread surface.

Builds the open helical ribbon: per turn an inner ring at the thread root
and a crest ring half a pitch higher, plus a closing inner ring on the final
turn. Consecutive rings are stitched into strips; the wrap-around seams are
closed afterwards by close_thread_gaps().
"""

import logging
from dataclasses import dataclass, field
from typing import List

from ..enums import RingKind
from ..io.loaders import ThreadParams
from .mesh import MeshSink
from .rings import RingDescriptor, build_ring, emit_polygon, stitch_rings

logger = logging.getLogger(__name__)


@dataclass
class ThreadSurface:
    """Rings of the helical ribbon, in emission order (R0 ... R2T)."""

    rings: List[RingDescriptor] = field(default_factory=list)
    side_polygons: int = 0

    @property
    def bottom(self) -> RingDescriptor:
        return self.rings[0]

    @property
    def top(self) -> RingDescriptor:
        return self.rings[-1]

    @property
    def crest_rings(self) -> List[RingDescriptor]:
        return [r for r in self.rings if r.kind == RingKind.CREST]

    @property
    def inner_rings(self) -> List[RingDescriptor]:
        return [r for r in self.rings if r.kind == RingKind.INNER]


def build_thread_surface(sink: MeshSink, params: ThreadParams) -> ThreadSurface:
    """
    Emit the rings and side walls of every thread turn.

    Returns:
        ThreadSurface with 2 * turns + 1 ring descriptors
    """
    h = params.height_per_turn
    surface = ThreadSurface()

    for turn in range(params.turns):
        y_low = turn * h + params.vertical_offset
        y_mid = y_low + h / 2

        inner = build_ring(sink, params, params.inner_radius, y_low, h, True, RingKind.INNER)

        # Connect previous turn's crest to the new root
        if surface.rings:
            surface.side_polygons += stitch_rings(sink, params, surface.rings[-1], inner)
        surface.rings.append(inner)

        crest = build_ring(sink, params, params.outer_radius, y_mid, h, True, RingKind.CREST)
        surface.side_polygons += stitch_rings(sink, params, inner, crest)
        surface.rings.append(crest)

        # Final turn gets a closing root ring one pitch above this one
        if turn + 1 == params.turns:
            closing = build_ring(sink, params, params.inner_radius, y_low + h, h, True, RingKind.INNER)
            surface.side_polygons += stitch_rings(sink, params, crest, closing)
            surface.rings.append(closing)

    logger.debug(
        f"Thread surface: {len(surface.rings)} rings, {surface.side_polygons} side quads"
    )
    return surface


def close_thread_gaps(sink: MeshSink, params: ThreadParams, surface: ThreadSurface) -> int:
    """
    Close the wrap-around seam between consecutive turns.

    stitch_rings() leaves the edge from the last step of a ring back to
    step 0 open. Along the helix, the last step of ring k continues into
    step 0 of ring k + 2, so each strip k is closed by the quad
    (R[k+2][0], R[k+3][0], R[k+1][-1], R[k][-1]). Two strips per interior
    turn boundary; the bottom and top seams belong to the lead caps.

    Returns:
        Number of quads appended (2 * (turns - 1))
    """
    rings = surface.rings
    count = 0

    for turn in range(params.turns - 1):
        for k in (2 * turn, 2 * turn + 1):
            lower, upper, next_lower, next_upper = rings[k:k + 4]
            emit_polygon(sink, params, (
                next_lower.first,
                next_upper.first,
                upper.last,
                lower.last,
            ))
            count += 1

    logger.debug(f"Closed {count} seam quads across {params.turns - 1} turn boundaries")
    return count
