"""
JSON input/output for thread parameters.

ThreadParams is the one immutable configuration value handed to the mesh
builder. Parameter files may be keyed by field name or by the host's display
labels ("Inner Radius", "Steps / Turn", ...).

Uses Pydantic for automatic validation and enum coercion.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import BaseModel, validator

from ..enums import Hand
from .schema import SCHEMA_VERSION, label_to_field


class ThreadParams(BaseModel):
    """Threaded cylinder parameters. Defaults match the host panel."""
    inner_radius: float = 1.0
    outer_radius: float = 1.2  # Thread crest radius
    steps_per_turn: int = 64
    turns: int = 6
    height_per_turn: float = 0.3
    lead_length: float = 0.1
    lead_in: bool = True
    lead_out: bool = True
    hand: Hand = Hand.LEFT

    @validator('hand', pre=True)
    def coerce_hand(cls, v):
        if isinstance(v, str):
            return Hand(v.lower())
        return v

    @property
    def vertical_offset(self) -> float:
        """Lift of the whole helix that makes room for the lead-in."""
        return self.lead_length if self.lead_in else 0.0

    @property
    def lead_count(self) -> int:
        return int(self.lead_in) + int(self.lead_out)

    class Config:
        extra = 'ignore'
        frozen = True


def params_from_dict(data: Dict[str, Any]) -> ThreadParams:
    """
    Build ThreadParams from a parameter dict.

    Accepts a {"thread": {...}} wrapper or a flat object, and host labels
    in place of field names.
    """
    if 'thread' in data and isinstance(data['thread'], dict):
        data = data['thread']

    fields = {
        label_to_field(key): value
        for key, value in data.items()
        if key != 'schema_version'
    }
    return ThreadParams.model_validate(fields)


def params_to_dict(params: ThreadParams) -> Dict[str, Any]:
    """Convert ThreadParams to a JSON-compatible dict."""
    return params.model_dump(mode='json')


def load_params_json(filepath: Union[str, Path]) -> ThreadParams:
    """
    Load thread parameters from a JSON file.

    Args:
        filepath: Path to a parameter file written by save_params_json
                  or by hand

    Returns:
        ThreadParams with missing fields at their host defaults

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the document is not a JSON object
        ValidationError: If a field has the wrong type
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Parameter file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(
            "Invalid parameter JSON - expected an object with a 'thread' section"
        )

    return params_from_dict(data)


def save_params_json(params: ThreadParams, filepath: Union[str, Path]) -> None:
    """
    Save thread parameters to a JSON file using schema v1.0 format.

    Args:
        params: Parameters to save
        filepath: Path to save JSON file
    """
    filepath = Path(filepath)

    data = {
        'schema_version': SCHEMA_VERSION,
        'thread': params_to_dict(params),
    }

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)
