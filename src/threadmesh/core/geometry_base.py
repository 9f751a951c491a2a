"""
Base class for threadmesh geometry classes.

Provides shared export and display methods on top of a build() that
returns a build123d Part.
"""

import logging

logger = logging.getLogger(__name__)


class BaseGeometry:
    """Base class providing shared export/display methods for geometry classes.

    Subclasses must:
    - Set self._part = None in __init__
    - Implement build() -> Part
    - Set _part_name class attribute for log messages
    """

    _part_name: str = "part"

    def show(self):
        """Display in OCP viewer (requires ocp_vscode)."""
        part = self.build()
        try:
            from ocp_vscode import show as ocp_show
            ocp_show(part)
        except ImportError:
            logger.warning("ocp_vscode not available for viewing")
        return part

    def export_step(self, filepath: str):
        """Export to STEP file (builds if not already built)."""
        if self._part is None:
            self.build()

        from build123d import export_step
        export_step(self._part, filepath)
        logger.info(f"Exported {self._part_name} to {filepath}")

    def export_stl(self, filepath: str):
        """Export to STL file (builds if not already built).

        The part is made of planar triangles, so the STL carries the mesh
        faces as built.
        """
        if self._part is None:
            self.build()

        from build123d import export_stl
        export_stl(self._part, filepath)
        logger.info(f"Exported {self._part_name} to {filepath}")
