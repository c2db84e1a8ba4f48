"""hypertile CLI - triangle-reflection tilings from the command line.

Thin wrapper over the geometry kernel; every command can emit JSON for
scripting.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Annotated, Any, NoReturn

import typer

from hypertile import __version__
from hypertile.config import settings
from hypertile.polygon import build_hyperbolic_regular_ngon
from hypertile.triangle import (
    GeometryKind,
    TilingParams,
    build_tiling,
    normalize_depth,
    snap_triangle_params,
    validate_euclidean_params,
    validate_triangle_params,
)
from hypertile.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="hypertile",
    help="hypertile: hyperbolic and Euclidean triangle-reflection tilings",
    add_completion=False,
)


class GeometryChoice(str, Enum):
    """Host geometry."""

    hyperbolic = "hyperbolic"
    euclidean = "euclidean"


class Axis(str, Enum):
    """Triangle parameter axis."""

    p = "p"
    q = "q"
    r = "r"


VerboseOption = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="Increase verbosity (-v, -vv)"),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version(json_output: JsonOption = False) -> None:
    """Show version information."""
    if json_output:
        typer.echo(json.dumps({"version": __version__}))
    else:
        typer.echo(f"hypertile {__version__}")


@app.command()
def tiling(  # noqa: PLR0913
    p: Annotated[float, typer.Argument(help="Angle denominator at v0")],
    q: Annotated[float, typer.Argument(help="Angle denominator at v1")],
    r: Annotated[float, typer.Argument(help="Angle denominator at v2")],
    depth: Annotated[
        int | None,
        typer.Option("--depth", "-d", help="Reflection rounds (default: TILING_DEPTH)"),
    ] = None,
    max_faces: Annotated[
        int | None, typer.Option("--max-faces", help="Stop after this many faces")
    ] = None,
    geometry: Annotated[
        GeometryChoice, typer.Option("--geometry", "-g", help="Host geometry")
    ] = GeometryChoice.hyperbolic,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Build a (p, q, r) tiling and print its faces."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    if max_faces is None:
        max_faces = settings.max_faces_or_none()

    try:
        params = TilingParams(
            p=p,
            q=q,
            r=r,
            depth=normalize_depth(settings.TILING_DEPTH if depth is None else depth),
            geometry=GeometryKind(geometry.value),
            max_faces=max_faces,
            time_budget_s=settings.time_budget_or_none(),
        )
        result = build_tiling(params)
    except Exception as e:
        logger.exception("Tiling failed")
        _fail(e, json_output)

    stats = result.stats
    if json_output:
        output = {
            "params": {"p": p, "q": q, "r": r, "geometry": geometry.value},
            "stats": {
                "depth": stats.depth,
                "total": stats.total,
                "duplicates": stats.duplicates,
                "levels_completed": stats.levels_completed,
                "stop_reason": stats.stop_reason.value,
            },
            "faces": [
                {
                    "id": face.id,
                    "word": face.word,
                    "vertices": [list(v.to_tuple()) for v in face.vertices],
                }
                for face in result.faces
            ],
        }
        typer.echo(json.dumps(output, indent=2))
    else:
        typer.echo(f"Geometry: {geometry.value}")
        typer.echo(f"Faces: {stats.total} (depth {stats.depth})")
        typer.echo(f"Duplicates rejected: {stats.duplicates}")
        typer.echo(f"Stop reason: {stats.stop_reason.value}")


@app.command()
def snap(  # noqa: PLR0913
    p: Annotated[float, typer.Argument(help="Raw value for p")],
    q: Annotated[float, typer.Argument(help="Raw value for q")],
    r: Annotated[float, typer.Argument(help="Raw value for r")],
    lock: Annotated[
        list[Axis] | None,
        typer.Option("--lock", "-l", help="Axis to keep fixed (repeatable)"),
    ] = None,
    n_max: Annotated[
        int | None,
        typer.Option("--n-max", help="Largest denominator (default: SNAP_N_MAX)"),
    ] = None,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Snap (p, q, r) to the pi/n grid, keeping the triple hyperbolic."""
    _configure_logging(verbose)
    locked = {axis.value for axis in lock or []}
    triple = snap_triangle_params(
        p,
        q,
        r,
        n_max=settings.SNAP_N_MAX if n_max is None else n_max,
        locked=locked,
    )
    if json_output:
        typer.echo(
            json.dumps({**triple.model_dump(), "hyperbolic": triple.is_hyperbolic})
        )
    else:
        typer.echo(f"({triple.p}, {triple.q}, {triple.r})")


@app.command()
def validate(  # noqa: PLR0913
    p: Annotated[float, typer.Argument(help="Value for p")],
    q: Annotated[float, typer.Argument(help="Value for q")],
    r: Annotated[float, typer.Argument(help="Value for r")],
    geometry: Annotated[
        GeometryChoice, typer.Option("--geometry", "-g", help="Host geometry")
    ] = GeometryChoice.hyperbolic,
    allow_fractional: Annotated[
        bool,
        typer.Option("--allow-fractional", help="Accept non-integer values"),
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Check whether (p, q, r) is a valid triangle for the geometry."""
    if geometry is GeometryChoice.euclidean:
        validation = validate_euclidean_params(p, q, r)
    else:
        validation = validate_triangle_params(
            p, q, r, require_integers=not allow_fractional
        )

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "ok": validation.ok,
                    "errors": list(validation.errors),
                    "warning": validation.warning,
                }
            )
        )
    else:
        if validation.ok:
            typer.echo("OK")
        for error in validation.errors:
            typer.echo(f"Error: {error}", err=True)
        if validation.warning:
            typer.echo(f"Warning: {validation.warning}", err=True)

    raise typer.Exit(0 if validation.ok else 1)


@app.command()
def ngon(
    n: Annotated[int, typer.Argument(help="Number of sides")],
    q: Annotated[int, typer.Argument(help="Polygons meeting at each vertex")],
    rotation: Annotated[
        float, typer.Option("--rotation", help="Angle of the first vertex (radians)")
    ] = 0.0,
    verbose: VerboseOption = 0,
    json_output: JsonOption = False,
) -> None:
    """Solve the regular hyperbolic {n, q} polygon."""
    _configure_logging(verbose)
    logger = get_logger(__name__)

    try:
        polygon = build_hyperbolic_regular_ngon(n, q, rotation=rotation)
    except Exception as e:
        logger.exception("N-gon solve failed")
        _fail(e, json_output)

    if json_output:
        output: dict[str, Any] = {
            "n": polygon.n,
            "q": polygon.q,
            "rho": polygon.rho,
            "alpha": polygon.alpha,
            "edge_length": polygon.edge_length,
            "vertices": [list(v.to_tuple()) for v in polygon.vertices],
            "edges": [edge.model_dump(mode="json") for edge in polygon.geodesics],
        }
        typer.echo(json.dumps(output, indent=2))
    else:
        typer.echo(f"{{{polygon.n}, {polygon.q}}} polygon")
        typer.echo(f"Vertex radius: {polygon.rho:.12f}")
        typer.echo(f"Edge length: {polygon.edge_length:.12f}")


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """hypertile: hyperbolic and Euclidean triangle-reflection tilings."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _configure_logging(verbose: int) -> None:
    """Configure logging based on verbosity level."""
    if verbose == 0:
        level = "WARNING"
    elif verbose == 1:
        level = "INFO"
    else:  # verbose >= 2
        level = "DEBUG"

    configure_logging(level=level)


def _fail(error: Exception, json_output: bool) -> NoReturn:
    if json_output:
        typer.echo(json.dumps({"error": str(error)}))
    else:
        typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1) from None
