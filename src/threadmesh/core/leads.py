"""
Lead-in and lead-out caps.

A lead cap turns one open end of the helical ribbon into a flat lid:

1. A flat ring at the inner radius, stitched to the nearest helical ring.
2. A seam bridge. The flat ring and the helical ring are not parallel, so
   the wrap-around gap between them is closed with a fixed fan of three
   triangles and one quad around a midpoint vertex.
3. A centre vertex on the rotation axis and a triangle fan to the flat ring.

The midpoint sits on the side-wall edge between the two rings at the seam.
The side step that owns that edge is emitted split at the midpoint, so no
T-junction is left behind and every edge stays shared by two polygons.

Vertex order within a cap is always: flat ring, midpoint, centre. The
polygon patterns below fix the winding; changing the order of any index
tuple flips that face.
"""

import logging
from dataclasses import dataclass

from ..enums import LeadEnd, RingKind
from ..io.loaders import ThreadParams
from .mesh import MeshSink
from .rings import RingDescriptor, build_ring, emit_polygon, stitch_rings
from .thread import ThreadSurface

logger = logging.getLogger(__name__)


@dataclass
class LeadCap:
    """Indices and polygon counts of one lead cap.

    Attributes:
        end: Which end of the thread the cap closes.
        flat_ring: The planar ring at the inner radius.
        midpoint: Index of the seam bridge vertex.
        centre: Index of the lid centre on the rotation axis.
        side_polygons: Polygons between the flat ring and the helix.
        seam_polygons: Polygons of the seam bridge.
        lid_polygons: Triangles of the lid fan.
    """

    end: LeadEnd
    flat_ring: RingDescriptor
    midpoint: int
    centre: int
    side_polygons: int = 0
    seam_polygons: int = 0
    lid_polygons: int = 0

    @property
    def polygon_count(self) -> int:
        return self.side_polygons + self.seam_polygons + self.lid_polygons


def build_lead_in(sink: MeshSink, params: ThreadParams, surface: ThreadSurface) -> LeadCap:
    """
    Close the bottom of the thread with a flat lid at y = 0.

    Args:
        sink: Mesh holding the helical surface
        params: Thread parameters
        surface: Result of build_thread_surface()

    Returns:
        LeadCap describing the appended geometry
    """
    h = params.height_per_turn
    bottom, crest, next_inner = surface.rings[0], surface.rings[1], surface.rings[2]

    flat = build_ring(sink, params, params.inner_radius, 0.0, 0.0, False, RingKind.FLAT)
    side = stitch_rings(sink, params, flat, bottom, steps=range(flat.size - 2))

    # Seam midpoint, half a pitch below the last step of the bottom ring
    x, y, z = sink.vertex_at(bottom.last)
    midpoint = sink.append_vertex((x, y - h / 2, z))

    # Last side step, split at the midpoint
    emit_polygon(sink, params, (flat.index(-2), flat.last, midpoint, bottom.index(-2)))
    emit_polygon(sink, params, (bottom.index(-2), midpoint, bottom.last))
    side += 2

    emit_polygon(sink, params, (crest.first, next_inner.first, midpoint))
    emit_polygon(sink, params, (crest.first, midpoint, bottom.first))
    emit_polygon(sink, params, (next_inner.first, bottom.last, midpoint))
    emit_polygon(sink, params, (flat.first, bottom.first, midpoint, flat.last))
    seam = 4

    centre = sink.append_vertex((0.0, 0.0, 0.0))
    for step in range(flat.size - 1):
        emit_polygon(sink, params, (centre, flat.index(step + 1), flat.index(step)))
    emit_polygon(sink, params, (centre, flat.first, flat.last))
    lid = flat.size

    logger.debug(f"Lead-in: {side} side, {seam} seam, {lid} lid polygons")
    return LeadCap(
        end=LeadEnd.LEAD_IN,
        flat_ring=flat,
        midpoint=midpoint,
        centre=centre,
        side_polygons=side,
        seam_polygons=seam,
        lid_polygons=lid,
    )


def build_lead_out(sink: MeshSink, params: ThreadParams, surface: ThreadSurface) -> LeadCap:
    """
    Close the top of the thread with a flat lid one pitch plus the lead
    length above the last turn.

    Args:
        sink: Mesh holding the helical surface
        params: Thread parameters
        surface: Result of build_thread_surface()

    Returns:
        LeadCap describing the appended geometry
    """
    h = params.height_per_turn
    top, crest, prev_inner = surface.rings[-1], surface.rings[-2], surface.rings[-3]

    y_base = params.turns * h + params.vertical_offset
    lid_height = h + params.lead_length
    flat = build_ring(sink, params, params.inner_radius, y_base, lid_height, False, RingKind.FLAT)

    # Seam midpoint, half a pitch above step 0 of the top ring
    x, y, z = sink.vertex_at(top.first)
    midpoint = sink.append_vertex((x, y + h / 2, z))

    # First side step, split at the midpoint
    emit_polygon(sink, params, (top.first, top.index(1), midpoint))
    emit_polygon(sink, params, (top.index(1), flat.index(1), flat.first, midpoint))
    side = 2 + stitch_rings(sink, params, top, flat, steps=range(1, flat.size - 1))

    emit_polygon(sink, params, (top.last, crest.last, midpoint))
    emit_polygon(sink, params, (crest.last, prev_inner.last, midpoint))
    emit_polygon(sink, params, (flat.last, top.last, midpoint, flat.first))
    emit_polygon(sink, params, (prev_inner.last, top.first, midpoint))
    seam = 4

    centre = sink.append_vertex((0.0, y_base + lid_height, 0.0))
    for step in range(flat.size - 1):
        emit_polygon(sink, params, (flat.index(step), flat.index(step + 1), centre))
    emit_polygon(sink, params, (flat.first, centre, flat.last))
    lid = flat.size

    logger.debug(f"Lead-out: {side} side, {seam} seam, {lid} lid polygons")
    return LeadCap(
        end=LeadEnd.LEAD_OUT,
        flat_ring=flat,
        midpoint=midpoint,
        centre=centre,
        side_polygons=side,
        seam_polygons=seam,
        lid_polygons=lid,
    )
