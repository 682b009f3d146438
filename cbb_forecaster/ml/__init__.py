"""Score models."""

from .trainer import ModelTrainer, TrainedModelPair

__all__ = ["ModelTrainer", "TrainedModelPair"]
