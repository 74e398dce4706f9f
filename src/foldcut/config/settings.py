"""Configuration settings for Foldcut."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Tolerances used by the geometry kernel and the ring builder."""

    duplicate_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Consecutive points closer than this (per axis) are collapsed",
    )
    intersection_epsilon: float = Field(
        default=1e-9,
        gt=0.0,
        le=1e-3,
        description="Orientation tolerance for segment intersection tests",
    )
    area_epsilon: float = Field(
        default=1e-12,
        gt=0.0,
        le=1e-6,
        description="Polygons with smaller absolute area use the bbox centre as centroid",
    )


class CreaseConfig(BaseModel):
    """Configuration for crease extraction from a skeleton."""

    time_epsilon: float = Field(
        default=1e-7,
        gt=0.0,
        le=1e-2,
        description="Vertices with |collapse time| at or below this are boundary vertices",
    )
    min_ray_parameter: float = Field(
        default=1e-6,
        gt=0.0,
        le=1e-2,
        description="Ray hits at or below this parameter are treated as self hits",
    )
    dedup_tolerance: float = Field(
        default=1e-2,
        gt=0.0,
        le=10.0,
        description="Quantization step for deduplicating valley creases",
    )
    degenerate_length_sq: float = Field(
        default=1e-10,
        gt=0.0,
        le=1e-2,
        description="Interior edges with squared length below this are skipped",
    )


class ExportConfig(BaseModel):
    """Configuration for result export."""

    precision: int = Field(
        default=3,
        ge=0,
        le=12,
        description="Decimal digits kept for exported coordinates",
    )
    generator: str = Field(
        default="foldcut",
        description="Generator label written to the result metadata",
    )
    include_rings: bool = Field(
        default=True,
        description="Include the rings handed to the solver in the export",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class FoldCutSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    creases: CreaseConfig = Field(default_factory=CreaseConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> FoldCutSettings:
    """Get default application settings."""
    return FoldCutSettings()
