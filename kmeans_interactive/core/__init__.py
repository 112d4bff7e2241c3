from .base import AssignResult, ClusterIteratorBase, UpdateResult
from .cpu_numpy import KMeansCPUNumpy
from .cpu_python import KMeansCPUPython
from .initialization import (
    init_kmeans_plus_plus,
    init_uniform,
    initialize_centroids,
)
from .seeded_random import SeededRandom

__all__ = [
    "AssignResult",
    "ClusterIteratorBase",
    "UpdateResult",
    "KMeansCPUNumpy",
    "KMeansCPUPython",
    "init_kmeans_plus_plus",
    "init_uniform",
    "initialize_centroids",
    "SeededRandom",
]
