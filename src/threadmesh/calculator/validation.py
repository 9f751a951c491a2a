"""
Thread Parameter Validation Rules

Two tiers:
- ERROR: the builder cannot produce a well-indexed mesh (too few steps or
  turns, non-positive radii or pitch, negative lead). build() refuses to
  start and raises InvalidParameterError before touching the mesh.
- WARNING / INFO: geometry-only concerns. The mesh is still well-indexed but
  may self-intersect or be degenerate; left to the caller's judgment.

Accepts ThreadParams or a plain dict of field values.
"""

from dataclasses import dataclass, field
from enum import Enum
from math import isfinite
from typing import Any, Dict, List, Optional, Union

from ..io.loaders import ThreadParams
from ..io.schema import HOST_PARAMETERS, get_host_parameter

ParamsInput = Union[ThreadParams, Dict[str, Any]]

MIN_STEPS_PER_TURN = 3
MIN_TURNS = 1


def _get(params: ParamsInput, key: str, default: Any = None) -> Any:
    """Read a field from ThreadParams or a dict.

    Dict keys may be field names or host labels. Fields missing from a dict
    take their host default, as they would when loaded into ThreadParams.
    """
    if isinstance(params, dict):
        if key in params:
            return params[key]
        try:
            param = get_host_parameter(key)
        except KeyError:
            return default
        return params.get(param.label, param.default)
    return getattr(params, key, default)


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


class InvalidParameterError(ValueError):
    """Raised when parameters cannot produce a well-indexed mesh."""

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(f"{m.code}: {m.message}" for m in result.errors)
        super().__init__(f"Invalid thread parameters - {details}")


def validate_params(params: ParamsInput) -> ValidationResult:
    """
    Validate thread parameters.

    Args:
        params: ThreadParams or dict of field values

    Returns:
        ValidationResult with all findings
    """
    messages: List[ValidationMessage] = []

    messages.extend(_validate_finite(params))
    if not messages:
        messages.extend(_validate_counts(params))
        messages.extend(_validate_dimensions(params))
        messages.extend(_validate_thread_depth(params))
        messages.extend(_validate_lead(params))
        messages.extend(_validate_host_ranges(params))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def require_valid(params: ParamsInput) -> ValidationResult:
    """Validate and raise InvalidParameterError if any error was found."""
    result = validate_params(params)
    if not result.valid:
        raise InvalidParameterError(result)
    return result


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_finite(params: ParamsInput) -> List[ValidationMessage]:
    """Reject non-numeric values, NaN and infinities before any arithmetic uses them"""
    messages = []
    for name in ('steps_per_turn', 'turns'):
        value = _get(params, name, 0)
        if not _is_number(value):
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="NOT_A_NUMBER",
                message=f"{name} must be a number, got {value!r}",
            ))

    for name in ('inner_radius', 'outer_radius', 'height_per_turn', 'lead_length'):
        value = _get(params, name, 0.0)
        if not _is_number(value):
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="NOT_A_NUMBER",
                message=f"{name} must be a number, got {value!r}",
            ))
        elif not isfinite(value):
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="NOT_FINITE",
                message=f"{name} must be a finite number, got {value}",
            ))
    return messages


def _validate_counts(params: ParamsInput) -> List[ValidationMessage]:
    """Steps per turn and turns drive the index layout"""
    messages = []
    steps = _get(params, 'steps_per_turn', 0)
    turns = _get(params, 'turns', 0)

    if steps < MIN_STEPS_PER_TURN:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="STEPS_TOO_FEW",
            message=f"Steps per turn ({steps}) must be at least {MIN_STEPS_PER_TURN}",
            suggestion="Fewer than three steps cannot describe a ring"
        ))

    if turns < MIN_TURNS:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="TURNS_TOO_FEW",
            message=f"Turns ({turns}) must be at least {MIN_TURNS}",
        ))

    return messages


def _validate_dimensions(params: ParamsInput) -> List[ValidationMessage]:
    """Radii and pitch must be positive"""
    messages = []

    for name, label in (('inner_radius', "Inner radius"), ('outer_radius', "Thread radius")):
        value = _get(params, name, 0.0)
        if value <= 0:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code=f"{name.upper()}_NOT_POSITIVE",
                message=f"{label} ({value}) must be greater than zero",
            ))

    height = _get(params, 'height_per_turn', 0.0)
    if height <= 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="HEIGHT_NOT_POSITIVE",
            message=f"Height per turn ({height}) must be greater than zero",
        ))

    return messages


def _validate_thread_depth(params: ParamsInput) -> List[ValidationMessage]:
    """Crest should stand proud of the core"""
    messages = []
    inner = _get(params, 'inner_radius', 0.0)
    outer = _get(params, 'outer_radius', 0.0)

    if inner <= 0 or outer <= 0:
        return messages

    if outer < inner:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="THREAD_INSIDE_CORE",
            message=f"Thread radius ({outer}) is smaller than inner radius ({inner})",
            suggestion="The thread becomes a groove cut into the core; swap the radii for an external thread"
        ))
    elif outer == inner:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="THREAD_DEPTH_ZERO",
            message="Thread radius equals inner radius - the thread is flat",
        ))

    return messages


def _validate_lead(params: ParamsInput) -> List[ValidationMessage]:
    """Lead length positions the lids relative to the helix"""
    messages = []
    lead = _get(params, 'lead_length', 0.0)
    any_lead = _get(params, 'lead_in', True) or _get(params, 'lead_out', True)

    if lead < 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="LEAD_LENGTH_NEGATIVE",
            message=f"Lead length ({lead}) must not be negative",
            suggestion="A negative lead would place the lids inside the thread"
        ))
    elif lead == 0 and any_lead:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="LEAD_LENGTH_ZERO",
            message="Lead length is zero - lead caps will contain degenerate faces",
        ))

    if not _get(params, 'lead_in', True) or not _get(params, 'lead_out', True):
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="MESH_OPEN",
            message="A lead is disabled - the mesh is open at that end and not printable as-is",
        ))

    return messages


def _validate_host_ranges(params: ParamsInput) -> List[ValidationMessage]:
    """Values outside the host panel ranges are allowed but unusual"""
    messages = []
    for param in HOST_PARAMETERS:
        if param.kind not in ('int', 'float'):
            continue
        value = _get(params, param.field)
        if value is None or param.in_range(value):
            continue
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="OUT_OF_HOST_RANGE",
            message=(
                f"{param.label} ({value}) is outside the usual range "
                f"[{param.minimum}, {param.maximum}]"
            ),
        ))
    return messages
