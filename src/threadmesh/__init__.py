"""
Threadmesh - 3D-printable threaded cylinder meshes.

Builds a closed polygon mesh of a helical screw thread wrapped around a
cylinder, with flat lead-in/lead-out caps, and exports it to STL/STEP/3MF.

Example:
    >>> from threadmesh import ThreadParams, Mesh, build
    >>>
    >>> mesh = Mesh()
    >>> report = build(ThreadParams(turns=4, steps_per_turn=48), mesh)
    >>> mesh.vertex_count()
    532
    >>>
    >>> from threadmesh import ThreadGeometry
    >>> ThreadGeometry(ThreadParams(turns=4)).export_stl("thread.stl")

Note: All imports are lazy-loaded for fast startup. The mesh builder and
calculator run without build123d; only Part conversion and export need it.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Hand", "RingKind", "LeadEnd", "BuildStage"}

_CALCULATOR = {
    "calculate_mesh_counts",
    "calculate_dimensions",
    "expected_vertex_count",
    "expected_polygon_count",
    "validate_params",
    "Severity",
    "ValidationResult",
    "InvalidParameterError",
}

_IO = {
    "ThreadParams",
    "load_params_json",
    "save_params_json",
    "HOST_PARAMETERS",
}

_CORE = {
    "Mesh",
    "MeshSink",
    "VertexIndexError",
    "RingDescriptor",
    "ThreadMeshReport",
    "ThreadGeometry",
    "build",
    "build_mesh",
    "analyze_mesh",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    if name in _CORE:
        if "core" not in _modules:
            from . import core
            _modules["core"] = core
        return getattr(_modules["core"], name)

    raise AttributeError(f"module 'threadmesh' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "Hand",
    "RingKind",
    "LeadEnd",
    "BuildStage",

    # Calculator (lazy loaded from calculator)
    "calculate_mesh_counts",
    "calculate_dimensions",
    "expected_vertex_count",
    "expected_polygon_count",
    "validate_params",
    "Severity",
    "ValidationResult",
    "InvalidParameterError",

    # IO (lazy loaded from io)
    "ThreadParams",
    "load_params_json",
    "save_params_json",
    "HOST_PARAMETERS",

    # Mesh building (lazy loaded from core)
    "Mesh",
    "MeshSink",
    "VertexIndexError",
    "RingDescriptor",
    "ThreadMeshReport",
    "ThreadGeometry",
    "build",
    "build_mesh",
    "analyze_mesh",
]
