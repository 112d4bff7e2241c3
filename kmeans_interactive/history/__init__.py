from .ledger import CentroidSnapshot, IterationHistory, IterationRecord, PointDistance

__all__ = ["CentroidSnapshot", "IterationHistory", "IterationRecord", "PointDistance"]
