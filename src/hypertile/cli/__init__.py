"""CLI module for hypertile.

Provides the command-line interface for building tilings, snapping and
validating parameters, and solving regular n-gons.
"""

from __future__ import annotations

from hypertile.cli.main import GeometryChoice, app

__all__ = ["GeometryChoice", "app"]
