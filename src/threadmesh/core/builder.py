"""
Threaded cylinder mesh builder.

build() is the single entry point a host calls once per parameter change,
always with a fresh, empty sink. Stages run in a fixed order:

    BUILD_SIDES -> CLOSE_GAPS -> BUILD_LEAD_OUT? -> BUILD_LEAD_IN? -> DONE

Parameters are validated before the first vertex is appended, so an invalid
parameter set never leaves a partial mesh behind.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..calculator.validation import ValidationResult, require_valid
from ..enums import BuildStage
from ..io.loaders import ThreadParams
from .geometry_base import BaseGeometry
from .leads import LeadCap, build_lead_in, build_lead_out
from .mesh import Mesh, MeshSink
from .thread import ThreadSurface, build_thread_surface, close_thread_gaps

logger = logging.getLogger(__name__)


@dataclass
class ThreadMeshReport:
    """What a build appended, stage by stage.

    Attributes:
        params: Parameters the mesh was built from.
        validation: Validation result (warnings and infos only).
        surface: Ring descriptors of the helical surface.
        gap_polygons: Seam quads appended by close_thread_gaps().
        lead_out: Top cap, if built.
        lead_in: Bottom cap, if built.
        stages: Stages in the order they ran.
        vertex_count: Vertices appended by the build.
    """

    params: ThreadParams
    validation: ValidationResult
    surface: ThreadSurface
    gap_polygons: int = 0
    lead_out: Optional[LeadCap] = None
    lead_in: Optional[LeadCap] = None
    stages: List[BuildStage] = field(default_factory=list)
    vertex_count: int = 0

    @property
    def side_polygons(self) -> int:
        return self.surface.side_polygons

    @property
    def polygon_count(self) -> int:
        total = self.surface.side_polygons + self.gap_polygons
        for cap in (self.lead_out, self.lead_in):
            if cap is not None:
                total += cap.polygon_count
        return total

    @property
    def is_closed(self) -> bool:
        return self.lead_in is not None and self.lead_out is not None


def build(params: ThreadParams, sink: MeshSink) -> ThreadMeshReport:
    """
    Build the threaded cylinder mesh into an empty sink.

    Args:
        params: Thread parameters
        sink: Empty mesh sink owned by the caller

    Returns:
        ThreadMeshReport describing the appended geometry

    Raises:
        InvalidParameterError: If the parameters cannot produce a
            well-indexed mesh (nothing is appended in that case)
        ValueError: If the sink is not empty
    """
    validation = require_valid(params)
    for message in validation.warnings:
        logger.warning(f"{message.code}: {message.message}")

    if sink.vertex_count() != 0:
        raise ValueError(
            f"build() needs an empty sink, got one with {sink.vertex_count()} vertices"
        )

    logger.info(
        f"Building thread mesh: {params.turns} turns x {params.steps_per_turn} steps, "
        f"r={params.inner_radius:.3f}/{params.outer_radius:.3f}, "
        f"pitch={params.height_per_turn:.3f}"
    )
    stages = [BuildStage.IDLE]

    stages.append(BuildStage.BUILD_SIDES)
    surface = build_thread_surface(sink, params)

    stages.append(BuildStage.CLOSE_GAPS)
    gaps = close_thread_gaps(sink, params, surface)

    report = ThreadMeshReport(
        params=params,
        validation=validation,
        surface=surface,
        gap_polygons=gaps,
        stages=stages,
    )

    if params.lead_out:
        stages.append(BuildStage.BUILD_LEAD_OUT)
        report.lead_out = build_lead_out(sink, params, surface)

    if params.lead_in:
        stages.append(BuildStage.BUILD_LEAD_IN)
        report.lead_in = build_lead_in(sink, params, surface)

    stages.append(BuildStage.DONE)
    report.vertex_count = sink.vertex_count()

    logger.info(
        f"Thread mesh complete: {report.vertex_count} vertices, "
        f"{report.polygon_count} polygons ({'closed' if report.is_closed else 'open'})"
    )
    return report


def build_mesh(params: Optional[ThreadParams] = None) -> Mesh:
    """Build into a new in-memory Mesh (host defaults when params is None)."""
    mesh = Mesh()
    build(params if params is not None else ThreadParams(), mesh)
    return mesh


class ThreadGeometry(BaseGeometry):
    """
    Threaded cylinder as a build123d Part.

    Builds the polygon mesh once, then sews it into a solid on demand.
    Both results are cached, so exports after build() reuse them.
    """

    _part_name = "thread"

    def __init__(self, params: Optional[ThreadParams] = None):
        """
        Initialize thread geometry generator.

        Args:
            params: Thread parameters (default: host defaults)
        """
        self.params = params if params is not None else ThreadParams()
        self._mesh: Optional[Mesh] = None
        self._report: Optional[ThreadMeshReport] = None
        self._part = None

    def build_mesh(self) -> Mesh:
        """Build (or return the cached) polygon mesh."""
        if self._mesh is None:
            mesh = Mesh()
            self._report = build(self.params, mesh)
            self._mesh = mesh
        return self._mesh

    @property
    def report(self) -> ThreadMeshReport:
        self.build_mesh()
        return self._report

    def build(self):
        """
        Build the mesh and convert it to a build123d Part.

        Returns:
            Part holding a solid when both leads are enabled, otherwise
            the open sewn shell
        """
        if self._part is not None:
            return self._part

        from .solid import mesh_to_part

        self._part = mesh_to_part(self.build_mesh())
        return self._part
