"""hypertile configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files. The geometry kernel itself never reads settings; they
supply defaults to the tiling pipeline, the parameter helpers and the CLI.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when a configuration value is inconsistent or out of range.

    Example:
        >>> Settings(TILING_DEPTH_MIN=5, TILING_DEPTH_MAX=2).require_depth_bounds()
        Traceback (most recent call last):
        ...
        ConfigError: Depth bounds invalid: minimum 5 exceeds maximum 2.
        Check the TILING_DEPTH_MIN / TILING_DEPTH_MAX environment variable.
    """

    def __init__(self, key_name: str, env_var: str, reason: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Human-readable name of the offending setting.
            env_var: Environment variable(s) controlling the setting.
            reason: What is wrong with the current value.
        """
        self.key_name = key_name
        self.env_var = env_var
        self.reason = reason
        message = (
            f"{key_name} invalid: {reason}. "
            f"Check the {env_var} environment variable."
        )
        super().__init__(message)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Tiling expansion
    TILING_DEPTH: int = 2  # default number of reflection rounds
    TILING_DEPTH_MIN: int = 0
    TILING_DEPTH_MAX: int = 10
    TILING_MAX_FACES: int = 0  # 0 = no face cap
    EXPANSION_TIME_BUDGET_S: float = 0.0  # 0 = no deadline

    # Parameter snapping
    SNAP_N_MAX: int = 200  # largest denominator on the pi/n grid

    # Regular n-gon solver
    NGON_TOLERANCE: float = 1e-12
    NGON_MAX_ITERATIONS: int = 128

    def require_depth_bounds(self) -> tuple[int, int]:
        """Get the (min, max) expansion depth range, raising if inconsistent.

        Returns:
            Tuple of (TILING_DEPTH_MIN, TILING_DEPTH_MAX).

        Raises:
            ConfigError: If the minimum is negative or exceeds the maximum.
        """
        lo, hi = self.TILING_DEPTH_MIN, self.TILING_DEPTH_MAX
        env = "TILING_DEPTH_MIN / TILING_DEPTH_MAX"
        if lo < 0:
            raise ConfigError("Depth bounds", env, f"minimum {lo} is negative")
        if lo > hi:
            raise ConfigError(
                "Depth bounds", env, f"minimum {lo} exceeds maximum {hi}"
            )
        return lo, hi

    def max_faces_or_none(self) -> int | None:
        """Return the configured face cap, or None when uncapped."""
        return self.TILING_MAX_FACES if self.TILING_MAX_FACES > 0 else None

    def time_budget_or_none(self) -> float | None:
        """Return the configured expansion deadline, or None when unbounded."""
        budget = self.EXPANSION_TIME_BUDGET_S
        return budget if budget > 0 else None


# Singleton instance for import convenience
settings = Settings()
