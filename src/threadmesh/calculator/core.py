"""
Closed-form thread dimensions and mesh element counts.

Everything here is derived from the parameters alone, without building a
mesh, so hosts can preview sizes before committing to a build.
"""

from dataclasses import dataclass
from math import atan, degrees, pi

from ..io.loaders import ThreadParams


@dataclass
class MeshCounts:
    """Expected element counts of a built mesh."""
    vertices: int
    quads: int
    triangles: int
    rings: int

    @property
    def polygons(self) -> int:
        return self.quads + self.triangles


@dataclass
class ThreadDimensions:
    """Overall dimensions of the threaded cylinder (Y is the axis)."""
    thread_depth: float  # outer_radius - inner_radius
    pitch: float  # Height gained per turn
    helix_height: float  # Y span of the thread surface
    min_y: float
    max_y: float
    lead_angle_deg: float  # Helix angle at the crest

    @property
    def total_height(self) -> float:
        return self.max_y - self.min_y


def expected_vertex_count(steps_per_turn: int, turns: int, lead_in: bool, lead_out: bool) -> int:
    """
    Vertex count of a build.

    Helix: 2 * turns + 1 rings. Each lead adds one flat ring, one seam
    midpoint and one lid centre.
    """
    leads = int(lead_in) + int(lead_out)
    return steps_per_turn * (2 * turns + 1) + leads * (steps_per_turn + 2)


def expected_polygon_count(steps_per_turn: int, turns: int, lead_in: bool, lead_out: bool) -> int:
    """
    Polygon count of a build.

    Helix: 2 * turns strips of steps_per_turn - 1 quads, plus two seam quads
    per interior turn boundary. Each lead adds steps_per_turn side polygons,
    four seam polygons and a steps_per_turn triangle lid.
    """
    leads = int(lead_in) + int(lead_out)
    helix = 2 * turns * (steps_per_turn - 1) + 2 * (turns - 1)
    return helix + leads * (2 * steps_per_turn + 4)


def calculate_mesh_counts(params: ThreadParams) -> MeshCounts:
    """Expected vertex, quad, triangle and ring counts for these parameters."""
    s = params.steps_per_turn
    t = params.turns
    leads = params.lead_count

    helix_quads = 2 * t * (s - 1) + 2 * (t - 1)
    # Per lead: s - 2 stitch quads, 1 split quad, 1 seam quad
    lead_quads = s
    # Per lead: 1 split triangle, 3 seam triangles, s lid triangles
    lead_triangles = s + 4

    return MeshCounts(
        vertices=expected_vertex_count(s, t, params.lead_in, params.lead_out),
        quads=helix_quads + leads * lead_quads,
        triangles=leads * lead_triangles,
        rings=2 * t + 1 + leads,
    )


def calculate_dimensions(params: ThreadParams) -> ThreadDimensions:
    """
    Overall dimensions of the mesh.

    With a lead-out the top is the lid. Without one, the top is the last
    step of the closing ring, one step short of a full pitch above the
    last turn.
    """
    h = params.height_per_turn
    s = params.steps_per_turn
    t = params.turns
    y_off = params.vertical_offset

    helix_bottom = y_off
    helix_top = y_off + t * h + h * (s - 1) / s

    if params.lead_out:
        max_y = y_off + t * h + h + params.lead_length
    else:
        max_y = helix_top

    crest_circumference = 2 * pi * params.outer_radius
    return ThreadDimensions(
        thread_depth=params.outer_radius - params.inner_radius,
        pitch=h,
        helix_height=helix_top - helix_bottom,
        min_y=0.0,
        max_y=max_y,
        lead_angle_deg=degrees(atan(h / crest_circumference)),
    )
