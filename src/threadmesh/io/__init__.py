"""
Threadmesh IO - parameter model, JSON files, host schema and exporters.

Example:
    >>> from threadmesh.io import ThreadParams, load_params_json, save_params_json
    >>>
    >>> params = ThreadParams(turns=4, steps_per_turn=48)
    >>> save_params_json(params, "thread.json")
    >>> loaded = load_params_json("thread.json")
"""

from .loaders import (
    ThreadParams,
    load_params_json,
    save_params_json,
    params_from_dict,
    params_to_dict,
)

# Package export requires build123d
try:
    from .package import (
        PackageFiles,
        generate_package,
        save_package_to_dir,
        create_package_zip,
        package_basename,
    )
except ImportError:
    pass

from .schema import (
    SCHEMA_VERSION,
    HOST_PARAMETERS,
    HostParameter,
    get_host_parameter,
    get_schema_v1,
    validate_json_schema,
    create_example_schema_v1,
)

__all__ = [
    # Loaders
    "ThreadParams",
    "load_params_json",
    "save_params_json",
    "params_from_dict",
    "params_to_dict",

    # Package export
    "PackageFiles",
    "generate_package",
    "save_package_to_dir",
    "create_package_zip",
    "package_basename",

    # Schema
    "SCHEMA_VERSION",
    "HOST_PARAMETERS",
    "HostParameter",
    "get_host_parameter",
    "get_schema_v1",
    "validate_json_schema",
    "create_example_schema_v1",
]
