"""Projection subpackage: configuration, series builder and service."""

from .builder import ProjectionSeriesBuilder, project_backing_series
from .config import ProjectionConfig
from .results import FittedModels, ProjectionResult
from .service import BackingProjectionService

__all__ = [
    "ProjectionConfig",
    "ProjectionSeriesBuilder",
    "project_backing_series",
    "FittedModels",
    "ProjectionResult",
    "BackingProjectionService",
]
