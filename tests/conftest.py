"""
Pytest configuration and shared fixtures for threadmesh tests.
"""

import pytest

from threadmesh.core import Mesh, build
from threadmesh.enums import Hand
from threadmesh.io import ThreadParams


# ─── Parameter sets ──────────────────────────────────────────────────────


def _params(**overrides):
    """ThreadParams at host defaults with overrides applied."""
    return ThreadParams(**overrides)


@pytest.fixture
def default_params():
    """Host default parameters (64 steps, 6 turns, both leads)."""
    return _params()


@pytest.fixture
def small_params():
    """Small closed thread: 2 turns of 6 steps, both leads."""
    return _params(turns=2, steps_per_turn=6)


@pytest.fixture
def open_params():
    """Single turn of 4 steps without leads (open at both ends)."""
    return _params(
        turns=1,
        steps_per_turn=4,
        inner_radius=1.0,
        outer_radius=1.2,
        height_per_turn=0.3,
        lead_length=0.1,
        lead_in=False,
        lead_out=False,
    )


@pytest.fixture
def make_params():
    """Factory fixture for ad hoc parameter sets."""
    return _params


# ─── Built meshes ────────────────────────────────────────────────────────


def _build(params):
    mesh = Mesh()
    report = build(params, mesh)
    return mesh, report


@pytest.fixture
def built_small(small_params):
    """(mesh, report) for the small closed thread."""
    return _build(small_params)


@pytest.fixture
def built_open(open_params):
    """(mesh, report) for the single open turn."""
    return _build(open_params)


@pytest.fixture
def built_small_right(small_params):
    """(mesh, report) for the small closed thread, right hand."""
    return _build(small_params.model_copy(update={"hand": Hand.RIGHT}))


@pytest.fixture(scope="module")
def built_default():
    """Module-scoped (mesh, report) at host defaults."""
    return _build(_params())
