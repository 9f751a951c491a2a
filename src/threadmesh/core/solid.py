"""
Polygon mesh to B-rep conversion.

Each mesh triangle becomes one planar OCP face (quads are split along their
first diagonal, since ramped quads are not planar). The faces are sewn into
a shell and, when the shell has no free edges, turned into a solid and
cleaned up with ShapeFix_Solid, which also orients the shell outward.
"""

import logging
import time
from typing import Optional

from OCP.BRepBuilderAPI import (
    BRepBuilderAPI_MakeFace,
    BRepBuilderAPI_MakePolygon,
    BRepBuilderAPI_MakeSolid,
    BRepBuilderAPI_Sewing,
)
from OCP.ShapeFix import ShapeFix_Solid
from OCP.TopAbs import TopAbs_SHELL
from OCP.TopExp import TopExp_Explorer
from OCP.TopoDS import TopoDS, TopoDS_Face
from OCP.gp import gp_Pnt

from build123d import Part

from .mesh import Mesh, Point

logger = logging.getLogger(__name__)

SEWING_TOLERANCE = 1e-6


def triangle_face(a: Point, b: Point, c: Point) -> Optional[TopoDS_Face]:
    """Planar face through three points, or None if they are degenerate."""
    polygon = BRepBuilderAPI_MakePolygon(gp_Pnt(*a), gp_Pnt(*b), gp_Pnt(*c), True)
    if not polygon.IsDone():
        return None

    maker = BRepBuilderAPI_MakeFace(polygon.Wire(), True)
    if not maker.IsDone():
        return None
    return maker.Face()


def mesh_to_part(mesh: Mesh, tolerance: float = SEWING_TOLERANCE) -> Part:
    """
    Sew a polygon mesh into a build123d Part.

    Args:
        mesh: Mesh to convert.
        tolerance: Sewing tolerance.

    Returns:
        Part wrapping a solid for a closed mesh, or the sewn shell for an
        open one.
    """
    start = time.time()
    sewer = BRepBuilderAPI_Sewing(tolerance)

    face_count = 0
    skipped = 0
    for a, b, c in mesh.triangles():
        face = triangle_face(mesh.vertex_at(a), mesh.vertex_at(b), mesh.vertex_at(c))
        if face is None:
            skipped += 1
            continue
        sewer.Add(face)
        face_count += 1

    if skipped:
        logger.warning(f"Skipped {skipped} degenerate triangles")

    if face_count == 0:
        raise ValueError("Mesh has no non-degenerate faces to sew")

    sewer.Perform()
    sewn = sewer.SewedShape()
    free_edges = sewer.NbFreeEdges()
    logger.debug(
        f"Sewed {face_count} faces in {time.time() - start:.1f}s, {free_edges} free edges"
    )

    if free_edges > 0:
        logger.info(f"Mesh is open ({free_edges} free edges), returning shell")
        return Part(sewn)

    shell_explorer = TopExp_Explorer(sewn, TopAbs_SHELL)
    if not shell_explorer.More():
        logger.warning("Sewing produced no shell, returning sewn faces")
        return Part(sewn)

    shell = TopoDS.Shell_s(shell_explorer.Current())
    solid_maker = BRepBuilderAPI_MakeSolid(shell)
    if not solid_maker.IsDone():
        logger.warning("Could not make a solid from the sewn shell")
        return Part(sewn)

    solid_fixer = ShapeFix_Solid(solid_maker.Solid())
    solid_fixer.Perform()
    part = Part(solid_fixer.Solid())

    logger.info(f"Built solid in {time.time() - start:.1f}s: volume={part.volume:.4f}")
    return part
