from __future__ import annotations

import csv
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(slots=True, frozen=True)
class Point:
    '''
    Точка (город) на плоскости

    Attributes:
        name: Читаемое имя (уникальность не проверяется)
        x: Координата x
        y: Координата y
    '''
    name: str
    x: float
    y: float


class DistanceMatrix:
    '''
    Симметричная евклидова матрица расстояний между точками

    Строится один раз при создании и больше не изменяется.
    `w[i][j]` - расстояние между точками i и j, на диагонали 0.
    Координаты NaN/inf не проверяются и просто распространяются дальше.
    '''

    def __init__(self, points: Sequence[Point]) -> None:
        self.points: tuple[Point, ...] = tuple(points)
        n = len(self.points)
        self.n: int = n
        self.w: list[list[float]] = [[0.0] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1, n):
                a, b = self.points[i], self.points[j]
                d = math.hypot(a.x - b.x, a.y - b.y)
                self.w[i][j] = self.w[j][i] = d

    def __len__(self) -> int:
        return self.n

    # ---- Основные операции -------------------------------------------------
    def dist(self, i: int, j: int) -> float:
        return self.w[i][j]

    def tour_length(self, tour: Sequence[int]) -> float:
        '''
        Длина замкнутого маршрута

        Суммирует расстояния между соседними элементами и добавляет ребро
        последний -> первый. У замкнутого тура последний элемент совпадает
        с первым, поэтому это слагаемое равно 0 и обратное ребро учитывается
        ровно один раз. Для открытой последовательности оно замыкает цикл.
        '''
        if len(tour) < 2:
            return 0.0
        total = 0.0
        for a, b in zip(tour, tour[1:]):
            total += self.w[a][b]
        total += self.w[tour[-1]][tour[0]]
        return total

    def coincident_pairs(self) -> list[tuple[int, int]]:
        '''Пары различных индексов с нулевым расстоянием (совпадающие координаты)'''
        return [(i, j) for i in range(self.n) for j in range(i + 1, self.n) if self.w[i][j] == 0.0]


class PointFactory:
    '''Источники точек: генерация и загрузка/сохранение CSV'''

    @staticmethod
    def random_points(n: int, *, low: float = 0.0, high: float = 100.0, seed: int | None = None) -> list[Point]:
        '''Создаёт n точек с координатами, равномерно распределёнными в [low, high]'''
        if n < 2:
            raise ConfigurationError("n >= 2")
        if high < low:
            raise ConfigurationError("high >= low")
        rng = random.Random(seed)
        return [Point(f"P{i + 1}", round(rng.uniform(low, high), 3), round(rng.uniform(low, high), 3))
                for i in range(n)]

    @staticmethod
    def from_csv(path: str) -> list[Point]:
        '''Загружает точки из CSV-файла со строками `name,x,y`

        Первая строка считается заголовком, если её координаты не являются числами.
        '''
        try:
            with open(path, encoding="utf-8", newline="") as f:
                rows = list(csv.reader(f))
        except UnicodeDecodeError:
            raise ConfigurationError(f"{path}: файл должен быть в кодировке UTF-8") from None
        points: list[Point] = []
        for lineno, row in enumerate(rows, start=1):
            if not row or not any(cell.strip() for cell in row):
                continue
            if len(row) != 3:
                raise ConfigurationError(f"{path}:{lineno}: ожидается 3 столбца name,x,y")
            name, xs, ys = (cell.strip() for cell in row)
            try:
                x, y = float(xs), float(ys)
            except ValueError:
                if lineno == 1:
                    continue
                raise ConfigurationError(f"{path}:{lineno}: координаты должны быть числами") from None
            points.append(Point(name, x, y))
        if not points:
            raise ConfigurationError(f"{path}: файл не содержит точек")
        return points

    @staticmethod
    def to_csv(points: Sequence[Point], path: str) -> None:
        '''Сохраняет точки в CSV-файл с заголовком'''
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["name", "x", "y"])
            for p in points:
                writer.writerow([p.name, p.x, p.y])
