"""
Host parameter contract and JSON schema for thread parameters.

HOST_PARAMETERS mirrors the parameter panel a host registers: display label,
model field, kind, default and the range the host lets a user pick from.
The ranges are advisory for the mesh builder itself (see
calculator.validation), but the CLI host enforces them on its flags.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

SCHEMA_VERSION = "1.0"

Number = Union[int, float]


@dataclass(frozen=True)
class HostParameter:
    """One entry of the host parameter panel."""
    label: str
    field: str
    kind: str  # "float" | "int" | "bool" | "selector"
    default: Any
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    choices: Tuple[str, ...] = ()

    def in_range(self, value: Number) -> bool:
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True


HOST_PARAMETERS: Tuple[HostParameter, ...] = (
    HostParameter("Direction", "hand", "selector", "left", choices=("left", "right")),
    HostParameter("Inner Radius", "inner_radius", "float", 1.0, 0.1, 100),
    HostParameter("Thread Radius", "outer_radius", "float", 1.2, 0.1, 100),
    HostParameter("Steps / Turn", "steps_per_turn", "int", 64, 10, 500),
    HostParameter("Turns", "turns", "int", 6, 1, 1000),
    HostParameter("Height / Turn", "height_per_turn", "float", 0.3, 0.01, 100),
    HostParameter("Lead length", "lead_length", "float", 0.1, 0.01, 100),
    HostParameter("Create Lead-Out", "lead_out", "bool", True),
    HostParameter("Create Lead-In", "lead_in", "bool", True),
)

_BY_FIELD = {p.field: p for p in HOST_PARAMETERS}
_BY_LABEL = {p.label: p for p in HOST_PARAMETERS}


def get_host_parameter(name: str) -> HostParameter:
    """Look up a host parameter by field name or display label."""
    if name in _BY_FIELD:
        return _BY_FIELD[name]
    if name in _BY_LABEL:
        return _BY_LABEL[name]
    raise KeyError(f"Unknown thread parameter: {name!r}")


def label_to_field(key: str) -> str:
    """Map a host display label to its field name (field names pass through)."""
    if key in _BY_LABEL:
        return _BY_LABEL[key].field
    return key


def get_schema_v1() -> Dict:
    """
    Get JSON schema version 1.0 for thread parameter files.

    Every field is optional; missing fields take the host default.
    """
    return {
        "schema_version": "1.0",
        "required_sections": [],
        "optional_sections": ["thread"],
        "thread_fields": {
            p.field: {
                "label": p.label,
                "type": p.kind,
                "default": p.default,
                **({"minimum": p.minimum} if p.minimum is not None else {}),
                **({"maximum": p.maximum} if p.maximum is not None else {}),
                **({"choices": list(p.choices)} if p.choices else {}),
            }
            for p in HOST_PARAMETERS
        },
    }


def _type_ok(param: HostParameter, value: Any) -> bool:
    if param.kind == "bool":
        return isinstance(value, bool)
    if param.kind == "int":
        return isinstance(value, int) and not isinstance(value, bool)
    if param.kind == "float":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if param.kind == "selector":
        return isinstance(value, str) and value.lower() in param.choices
    return False


def validate_json_schema(data: Dict) -> Dict[str, Any]:
    """
    Validate a raw thread parameter document.

    Args:
        data: Parsed JSON data, either {"thread": {...}} or a flat object

    Returns:
        {
            "valid": bool,
            "errors": List[str],
            "warnings": List[str],
            "schema_version": str
        }

    Example:
        >>> result = validate_json_schema({"thread": {"turns": 0}})
        >>> result["valid"]
        False
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not isinstance(data, dict):
        return {
            "valid": False,
            "errors": ["Document must be a JSON object"],
            "warnings": [],
            "schema_version": "unknown",
        }

    schema_version = data.get("schema_version", "unknown")
    if schema_version == "unknown":
        warnings.append("No schema_version specified, assuming 1.0")
    elif schema_version != SCHEMA_VERSION:
        warnings.append(
            f"Schema version {schema_version} differs from supported {SCHEMA_VERSION}"
        )

    section = data.get("thread", data)
    if not isinstance(section, dict):
        errors.append("'thread' section must be an object")
        section = {}

    for key, value in section.items():
        if key == "schema_version":
            continue
        try:
            param = get_host_parameter(key)
        except KeyError:
            warnings.append(f"Unknown field ignored: {key}")
            continue

        if not _type_ok(param, value):
            errors.append(f"{param.field}: expected {param.kind}, got {value!r}")
            continue

        if param.kind in ("int", "float") and not param.in_range(value):
            warnings.append(
                f"{param.field}={value} outside host range "
                f"[{param.minimum}, {param.maximum}]"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "schema_version": schema_version,
    }


def create_example_schema_v1() -> Dict:
    """Example parameter document with every host default filled in."""
    return {
        "schema_version": SCHEMA_VERSION,
        "thread": {p.field: p.default for p in HOST_PARAMETERS},
    }
