from __future__ import annotations

import pytest

from aco_tsp import Point


class ScriptedRandom:
    '''Источник случайных чисел, выдающий заранее заданные значения'''

    def __init__(self, values):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


@pytest.fixture
def triangle() -> list[Point]:
    return [Point("A", 0.0, 0.0), Point("B", 3.0, 0.0), Point("C", 0.0, 4.0)]


@pytest.fixture
def square() -> list[Point]:
    return [Point("A", 0.0, 0.0), Point("B", 1.0, 0.0), Point("C", 1.0, 1.0), Point("D", 0.0, 1.0)]


@pytest.fixture
def scripted():
    return ScriptedRandom
