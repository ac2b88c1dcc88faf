"""Муравьиный алгоритм (ACO) для евклидовой задачи коммивояжёра.

Пакет предоставляет:
- aco_tsp.geometry: Point, DistanceMatrix, PointFactory (генерация/загрузка точек)
- aco_tsp.pheromone: PheromoneStore
- aco_tsp.ants: ACOParams, AntColony, RunResult, IterationRecord
- aco_tsp.cli: CLI для запуска из терминала
"""
from .ants import ACOParams, AntColony, IterationRecord, RunResult, select_next_city
from .errors import AcoError, ConfigurationError, DegenerateSampleError
from .geometry import DistanceMatrix, Point, PointFactory
from .pheromone import PheromoneStore

__all__ = [
    "Point", "DistanceMatrix", "PointFactory", "PheromoneStore",
    "AntColony", "ACOParams", "RunResult", "IterationRecord", "select_next_city",
    "AcoError", "ConfigurationError", "DegenerateSampleError",
]
