"""End-to-end training workflow."""

from .training import CollectionResult, TrainingPipeline, date_range

__all__ = ["CollectionResult", "TrainingPipeline", "date_range"]
