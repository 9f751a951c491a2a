"""Command-line host for threadmesh."""
