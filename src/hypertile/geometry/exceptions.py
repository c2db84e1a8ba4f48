"""Custom exceptions for geometry kernel operations.

These exceptions signal deterministic mathematical preconditions that
failed: degenerate configurations, non-finite coordinates and infeasible
tiling parameters. They describe invalid input, never a transient
condition, so callers should not retry them.
"""

from collections.abc import Mapping
from typing import Any


class GeometryError(ValueError):
    """Base exception for all geometry kernel errors."""

    def __init__(
        self,
        message: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize geometry error with optional input context.

        Args:
            message: Human-readable error description.
            context: Input values that triggered the error.
        """
        self.message = message
        self.context = dict(context) if context else {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with input context if available."""
        if not self.context:
            return self.message
        parts = [f"{key}={value}" for key, value in self.context.items()]
        return f"{self.message} ({', '.join(parts)})"


class DegenerateGeometryError(GeometryError):
    """Raised when inputs do not determine a unique geometric object.

    This error is raised when:
    - Two boundary points coincide
    - A 2x2 linear system is singular beyond tolerance
    - A half-plane normal or handle pair has zero length
    """

    pass


class NonFiniteInputError(GeometryError):
    """Raised when a coordinate is NaN or infinite where a result is required."""

    pass


class InfeasibleParametersError(GeometryError):
    """Raised when tiling parameters violate a structural constraint.

    Covers (p,q,r) triples that are not strictly hyperbolic, Euclidean
    triples whose angle sum is not pi, and (n,q) pairs that admit no
    regular hyperbolic polygon.
    """

    def __init__(
        self,
        message: str,
        *,
        params: Mapping[str, float] | None = None,
        errors: tuple[str, ...] = (),
    ) -> None:
        """Initialize infeasibility error.

        Args:
            message: Human-readable error description.
            params: The rejected parameters, e.g. {"p": 2, "q": 3, "r": 6}.
            errors: Individual validation messages, when available.
        """
        self.params = dict(params) if params else {}
        self.errors = errors
        super().__init__(message, self.params)
