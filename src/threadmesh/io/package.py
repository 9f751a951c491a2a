"""
Export and packaging of a built thread.

Produces the output set the CLI writes: STEP, STL, 3MF, params.json and
summary.md, either into a directory or a ZIP archive.
"""

import io
import logging
import tempfile
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from build123d import Mesher, Part, Unit, export_step, export_stl

from .loaders import ThreadParams

logger = logging.getLogger(__name__)

# Faces are planar triangles; deflection only matters for 3MF re-meshing
LINEAR_DEFLECTION = 0.0005
ANGULAR_DEFLECTION = 0.05


def _repair_for_export(part: Part, name: str) -> Part:
    """Merge coplanar triangles (lid fans) into single faces before STEP export."""
    try:
        from OCP.ShapeFix import ShapeFix_Shape
        from OCP.ShapeUpgrade import ShapeUpgrade_UnifySameDomain

        unifier = ShapeUpgrade_UnifySameDomain(part.wrapped, True, True, True)
        unifier.Build()
        unified = unifier.Shape()

        fixer = ShapeFix_Shape(unified)
        fixer.Perform()
        fixed = fixer.Shape()

        return Part(fixed)
    except Exception as e:
        logger.warning(f"Geometry repair failed for {name}: {e}")
        return part


def export_part_step(part: Part, name: str = "thread") -> bytes:
    """Export Part to STEP bytes with geometry repair.

    Args:
        part: build123d Part to export.
        name: Label for log messages.

    Returns:
        STEP file contents as bytes.
    """
    repaired = _repair_for_export(part, name)

    with tempfile.NamedTemporaryFile(suffix=".step", delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        export_step(repaired, str(tmp_path))
        return tmp_path.read_bytes()
    finally:
        tmp_path.unlink(missing_ok=True)


def export_part_stl(part: Part) -> bytes:
    """Export Part to STL bytes."""
    with tempfile.NamedTemporaryFile(suffix=".stl", delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        export_stl(
            part,
            str(tmp_path),
            tolerance=LINEAR_DEFLECTION,
            angular_tolerance=ANGULAR_DEFLECTION,
        )
        return tmp_path.read_bytes()
    finally:
        tmp_path.unlink(missing_ok=True)


def export_part_3mf(part: Part) -> Optional[bytes]:
    """Export Part to 3MF bytes.

    Returns None if meshing fails (non-fatal).
    """
    with tempfile.NamedTemporaryFile(suffix=".3mf", delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        mesher = Mesher(unit=Unit.MM)
        mesher.add_shape(
            part,
            linear_deflection=LINEAR_DEFLECTION,
            angular_deflection=ANGULAR_DEFLECTION,
        )
        mesher.write(str(tmp_path))
        return tmp_path.read_bytes()
    except Exception as e:
        logger.warning(f"3MF export failed (non-fatal): {e}")
        return None
    finally:
        tmp_path.unlink(missing_ok=True)


@dataclass
class PackageFiles:
    """Container for all output files from one build."""

    step: Optional[bytes] = None
    stl: Optional[bytes] = None
    three_mf: Optional[bytes] = None
    params_json: Optional[str] = None
    summary_md: Optional[str] = None


def generate_package(
    params: ThreadParams,
    part: Optional[Part] = None,
    include_step: bool = True,
    include_stl: bool = True,
    include_3mf: bool = True,
    validation=None,
    analysis=None,
    log: Optional[Callable[[str], None]] = None,
) -> PackageFiles:
    """Generate all output files for a thread.

    Args:
        params: Parameters the part was built from.
        part: Built Part (or None to skip geometry exports).
        include_step: Generate STEP (default True).
        include_stl: Generate STL (default True).
        include_3mf: Generate 3MF (default True).
        validation: Optional ValidationResult for params.json/summary.md.
        analysis: Optional MeshAnalysisResult for params.json/summary.md.
        log: Optional logging callback (e.g. print).

    Returns:
        PackageFiles with all generated file data.
    """
    files = PackageFiles()

    def _log(msg: str):
        if log:
            log(msg)

    if part is not None:
        if include_step:
            _log("Exporting STEP...")
            files.step = export_part_step(part)
            _log(f"  STEP: {len(files.step) / 1024:.1f} KB")

        if include_stl:
            _log("Exporting STL...")
            files.stl = export_part_stl(part)
            _log(f"  STL: {len(files.stl) / 1024:.1f} KB")

        if include_3mf:
            _log("Exporting 3MF...")
            files.three_mf = export_part_3mf(part)
            if files.three_mf:
                _log(f"  3MF: {len(files.three_mf) / 1024:.1f} KB")

    # Lazy import to avoid circular dependency (io -> calculator -> io)
    from ..calculator.output import to_json, to_markdown

    _log("Generating params.json and summary.md...")
    files.params_json = to_json(params, validation=validation, analysis=analysis)
    files.summary_md = to_markdown(params, validation=validation, analysis=analysis)

    return files


def _file_map(files: PackageFiles, name: str) -> dict:
    return {
        f"{name}.step": files.step,
        f"{name}.stl": files.stl,
        f"{name}.3mf": files.three_mf,
        "params.json": files.params_json,
        "summary.md": files.summary_md,
    }


def save_package_to_dir(
    files: PackageFiles,
    output_dir: Path,
    name: str = "thread",
) -> List[Path]:
    """Write all PackageFiles to a directory.

    Args:
        files: PackageFiles from generate_package().
        output_dir: Directory to write files into (created if needed).
        name: Base filename for geometry files.

    Returns:
        List of Paths written.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    for filename, data in _file_map(files, name).items():
        if data is None:
            continue
        path = output_dir / filename
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_bytes(data)
        written.append(path)

    return written


def create_package_zip(files: PackageFiles, name: str = "thread") -> bytes:
    """Create ZIP archive from PackageFiles.

    Returns:
        ZIP file contents as bytes.
    """
    buf = io.BytesIO()

    with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
        for filename, data in _file_map(files, name).items():
            if data is not None:
                zf.writestr(filename, data)

    return buf.getvalue()


def package_basename(params: ThreadParams) -> str:
    """Base filename from parameters, e.g. thread_r1_0-1_2_t6_p0_3."""
    def fmt(value: float) -> str:
        return f"{value:g}".replace(".", "_")

    return (
        f"thread_r{fmt(params.inner_radius)}-{fmt(params.outer_radius)}"
        f"_t{params.turns}_p{fmt(params.height_per_turn)}"
    )
