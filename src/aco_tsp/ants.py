from __future__ import annotations

import logging
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .errors import ConfigurationError, DegenerateSampleError
from .geometry import DistanceMatrix, Point
from .pheromone import PheromoneStore

logger = logging.getLogger(__name__)

# Нижняя граница расстояния для видимости 1/d: совпадающие точки считаются бесконечно привлекательными
MIN_DISTANCE = 1e-10

Tour = tuple[int, ...]


class RandomSource(Protocol):
    '''Источник равномерных чисел в [0, 1)'''

    def random(self) -> float: ...


@dataclass(slots=True)
class ACOParams:
    '''
    Параметры алгоритма муравьиной колонии

    Attributes:
        alpha: важность феромона (>= 0)
        beta: важность видимости 1/d (>= 0)
        rho: коэффициент испарения феромона (0 <= rho <= 1)
        q: количество феромона, откладываемого муравьем (> 0)
    '''
    alpha: float = 1.0
    beta: float = 2.0
    rho: float = 0.5
    q: float = 100.0

    def validate(self) -> None:
        '''Проверка параметров, ConfigurationError при недопустимом значении'''
        for name in ("alpha", "beta", "rho", "q"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigurationError(f"{name} должен быть конечным числом, получено {value!r}")
        if self.alpha < 0:
            raise ConfigurationError(f"alpha >= 0, получено {self.alpha}")
        if self.beta < 0:
            raise ConfigurationError(f"beta >= 0, получено {self.beta}")
        if not 0.0 <= self.rho <= 1.0:
            raise ConfigurationError(f"rho должен лежать в [0, 1], получено {self.rho}")
        if self.q <= 0:
            raise ConfigurationError(f"q > 0, получено {self.q}")


@dataclass(slots=True, frozen=True)
class IterationRecord:
    '''
    Маршруты всех муравьев одной итерации

    Attributes:
        iteration: номер итерации (с 1)
        tours: туры муравьев в порядке их построения
    '''
    iteration: int
    tours: tuple[Tour, ...]


@dataclass(slots=True)
class RunResult:
    '''
    Результат выполнения алгоритма муравьиной колонии

    Attributes:
        best_tour: лучший найденный тур (замкнутый, длины N+1)
        best_length: длина лучшего тура
        history: записи всех итераций
    '''
    best_tour: Tour
    best_length: float
    history: list[IterationRecord]

    @property
    def iterations(self) -> int:
        return len(self.history)


def _weight(tau: float, visibility: float, alpha: float, beta: float) -> float:
    '''Вес кандидата tau^alpha * visibility^beta; переполнение степени даёт inf'''
    if tau == 0.0 and alpha > 0:
        return 0.0
    try:
        return (tau ** alpha) * (visibility ** beta)
    except OverflowError:
        return math.inf


def select_next_city(current: int, visited: Sequence[bool], distances: DistanceMatrix,
                     pheromone: PheromoneStore, alpha: float, beta: float, rng: RandomSource) -> int:
    '''
    Рулеточный выбор следующей вершины, находясь в вершине current

    Вес кандидата j: tau(current, j)^alpha * (1/d(current, j))^beta.
    Один розыгрыш r в [0, сумма весов), побеждает первый кандидат,
    чья накопленная сумма >= r. Кандидат с бесконечным весом (переполнение
    видимости у совпадающих или очень близких точек) выбирается сразу,
    первый из таких. При нулевой сумме весов побеждает первый кандидат.

    Attributes:
        current: текущая вершина
        visited: флаги посещения длины N
    Returns:
        выбранная вершина
    Raises:
        DegenerateSampleError: сумма весов NaN/отрицательна или розыгрыш не попал ни в одного кандидата
    '''
    candidates: list[int] = []
    weights: list[float] = []
    for j, seen in enumerate(visited):
        if seen:
            continue
        visibility = 1.0 / max(distances.dist(current, j), MIN_DISTANCE)
        candidates.append(j)
        weights.append(_weight(pheromone.get(current, j), visibility, alpha, beta))

    if not candidates:
        raise DegenerateSampleError(f"из вершины {current} не осталось непосещённых вершин")

    # Бесконечно привлекательный сосед (совпадающая или очень близкая точка) выбирается без розыгрыша
    for j, w in zip(candidates, weights):
        if w == math.inf:
            return j

    total = sum(weights)
    if math.isinf(total):
        # Каждый вес конечен, переполнилась только сумма: нормируем на максимальный
        top = max(weights)
        weights = [w / top for w in weights]
        total = sum(weights)
    if math.isnan(total) or total < 0:
        raise DegenerateSampleError(f"недопустимая сумма весов {total} в вершине {current}")

    # При нулевой сумме (все феромоны выгорели, rho = 1) розыгрыш равен 0 и побеждает первый кандидат
    draw = rng.random() * total
    cumulative = 0.0
    for j, w in zip(candidates, weights):
        cumulative += w
        if draw <= cumulative:
            return j
    raise DegenerateSampleError(f"розыгрыш {draw} превысил накопленную сумму {cumulative}")


class AntColony:
    '''
    Алгоритм муравьиной колонии для евклидовой задачи коммивояжера

    Attributes:
        points: точки в порядке индексов 0..N-1 (только чтение)
        params: параметры алгоритма (ACOParams)
        n_ants: количество муравьев за итерацию
        start_index: начальная вершина всех муравьев
        rng: источник случайных чисел (по умолчанию random.Random(seed))
        distances: матрица расстояний
        pheromone: матрица феромонов, единственное состояние между итерациями
    '''
    def __init__(self, points: Sequence[Point], params: ACOParams | None = None, *, n_ants: int = 10,
                 start_index: int = 0, seed: int | None = None, rng: RandomSource | None = None) -> None:
        params = params or ACOParams()
        params.validate()
        n = len(points)
        if n < 2:
            raise ConfigurationError(f"нужно минимум 2 точки, получено {n}")
        if isinstance(n_ants, bool) or not isinstance(n_ants, int) or n_ants < 1:
            raise ConfigurationError(f"n_ants >= 1, получено {n_ants!r}")
        if isinstance(start_index, bool) or not isinstance(start_index, int) or not 0 <= start_index < n:
            raise ConfigurationError(f"start_index должен лежать в [0, {n - 1}], получено {start_index!r}")

        self.points: tuple[Point, ...] = tuple(points)
        self.params = params
        self.n_ants = n_ants
        self.start_index = start_index
        self.rng: RandomSource = rng if rng is not None else random.Random(seed)
        self.distances = DistanceMatrix(self.points)
        self.pheromone = PheromoneStore(n)

        coincident = self.distances.coincident_pairs()
        if coincident:
            logger.warning("Совпадающие точки (считаются бесконечно близкими соседями): %s",
                           ", ".join(f"{self.points[i].name}={self.points[j].name}" for i, j in coincident))
        logger.debug("Параметры: %s, муравьев=%d, старт=%d", params, n_ants, start_index)
        logger.debug("Матрица расстояний: %s", [[round(x, 2) for x in row] for row in self.distances.w])

    @property
    def n(self) -> int:
        return self.distances.n

    def run(self, iterations: int) -> RunResult:
        '''
        Запуск алгоритма: ровно `iterations` итераций без ранней остановки

        Returns:
            RunResult с лучшим туром (первый из равных по длине), его длиной и историей
        '''
        if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
            raise ConfigurationError(f"iterations >= 1, получено {iterations!r}")

        best_tour: Tour = ()
        best_length = math.inf
        history: list[IterationRecord] = []

        for it in range(1, iterations + 1):
            tours: list[Tour] = []
            for _ant in range(self.n_ants):
                tour = self._construct_tour()
                length = self.tour_length(tour)
                tours.append(tour)
                if length < best_length:
                    best_length = length
                    best_tour = tour

            history.append(IterationRecord(iteration=it, tours=tuple(tours)))
            self._update_pheromone(tours)
            logger.debug("Итерация %d: лучший %s, длина=%s", it, best_tour, best_length)

        logger.info("Готово за %d итераций: лучший %s, длина=%s", iterations, best_tour, best_length)
        return RunResult(best_tour=best_tour, best_length=best_length, history=history)

    def tour_length(self, tour: Sequence[int]) -> float:
        '''Длина тура (чистая функция, доступна вызывающему коду для отображения)'''
        return self.distances.tour_length(tour)

    def _construct_tour(self) -> Tour:
        '''Построение тура одним муравьем от start_index с возвратом в него'''
        start = self.start_index
        visited = [False] * self.n
        visited[start] = True
        tour = [start]
        cur = start
        for _ in range(self.n - 1):
            nxt = select_next_city(cur, visited, self.distances, self.pheromone,
                                   self.params.alpha, self.params.beta, self.rng)
            tour.append(nxt)
            visited[nxt] = True
            cur = nxt
        tour.append(start)
        return tuple(tour)

    def _deposit(self, tours: Sequence[Tour]) -> list[list[float]]:
        '''
        Матрица добавок феромона за итерацию

        Каждое ребро (a, b) каждого тура получает q / длина тура.
        Туры нулевой длины (все точки совпадают) ничего не откладывают.
        '''
        n = self.n
        q = self.params.q
        deposit = [[0.0] * n for _ in range(n)]
        for tour in tours:
            length = self.tour_length(tour)
            if not (math.isfinite(length) and length > 0):
                continue
            amount = q / length
            for a, b in zip(tour, tour[1:]):
                deposit[a][b] += amount
        return deposit

    def _update_pheromone(self, tours: Sequence[Tour]) -> None:
        '''Испарение всей матрицы и откладывание феромона по турам итерации'''
        self.pheromone.update(self.params.rho, self._deposit(tours))
