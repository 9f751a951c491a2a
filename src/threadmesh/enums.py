"""Type-safe enums for thread mesh generation."""

from enum import Enum


class Hand(Enum):
    """Thread hand / helix direction.

    The unmirrored construction turns from +X toward +Z while rising along
    +Y, which is a left-hand helix in a right-handed Y-up frame.
    """
    LEFT = "left"
    RIGHT = "right"  # Mirrored in Z, polygon winding reversed


class RingKind(Enum):
    """Role of a vertex ring in the mesh"""
    INNER = "inner"  # Core cylinder / thread root
    CREST = "crest"  # Thread crest at the outer radius
    FLAT = "flat"  # Planar ring of a lead-in or lead-out


class LeadEnd(Enum):
    """Which end of the thread a lead cap closes"""
    LEAD_IN = "lead_in"  # Bottom, y = 0
    LEAD_OUT = "lead_out"  # Top


class BuildStage(Enum):
    """Stages of a mesh build, in execution order"""
    IDLE = "idle"
    BUILD_SIDES = "build_sides"
    CLOSE_GAPS = "close_gaps"
    BUILD_LEAD_OUT = "build_lead_out"
    BUILD_LEAD_IN = "build_lead_in"
    DONE = "done"
