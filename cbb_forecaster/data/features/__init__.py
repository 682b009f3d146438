"""Four-factor formulas and training-set assembly."""

from .dataset import AssemblyResult, DatasetAssembler, add_comparative_features

__all__ = ["AssemblyResult", "DatasetAssembler", "add_comparative_features"]
