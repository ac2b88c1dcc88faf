from __future__ import annotations

from collections.abc import Sequence


class PheromoneStore:
    '''
    Матрица феромонов N x N для всех упорядоченных пар точек

    Начальное значение 1/N^2 во всех ячейках, включая диагональ
    (диагональ никогда не читается, но форма матрицы остаётся полной).
    Изменяется только методом `update` один раз за итерацию.
    '''

    def __init__(self, n: int) -> None:
        self.n = n
        self.initial = 1.0 / (n * n) if n else 0.0
        self.tau: list[list[float]] = [[self.initial] * n for _ in range(n)]

    def get(self, i: int, j: int) -> float:
        return self.tau[i][j]

    def snapshot(self) -> list[list[float]]:
        '''Копия текущей матрицы'''
        return [row[:] for row in self.tau]

    def update(self, rho: float, deposit: Sequence[Sequence[float]]) -> None:
        '''
        Испарение и откладывание за один проход

        Attributes:
            rho: коэффициент испарения (0 <= rho <= 1)
            deposit: матрица N x N добавок феромона за итерацию
        '''
        keep = 1.0 - rho
        for i in range(self.n):
            row, add = self.tau[i], deposit[i]
            for j in range(self.n):
                row[j] = keep * row[j] + add[j]
