from __future__ import annotations

import argparse
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeVar

from .ants import ACOParams, AntColony, RunResult
from .errors import ConfigurationError
from .geometry import Point, PointFactory

T = TypeVar("T")


def build_argparser() -> argparse.ArgumentParser:
    '''Создаёт парсер аргументов командной строки'''
    p = argparse.ArgumentParser(
        prog="aco-tsp",
        description="Муравьиный алгоритм (ACO) для евклидовой TSP: точки из CSV, случайные или введённые вручную.",
    )
    src = p.add_argument_group("Источник точек")
    src.add_argument("--csv", type=str, default=None, help="Путь к CSV со строками name,x,y")
    src.add_argument("--interactive", action="store_true", help="Ввести точки, старт и число итераций в консоли")
    src.add_argument("--n", type=int, default=10, help="Количество случайных точек (если нет --csv)")
    src.add_argument("--low", type=float, default=0.0, help="Минимальная координата")
    src.add_argument("--high", type=float, default=100.0, help="Максимальная координата")
    src.add_argument("--seed", type=int, default=None, help="Seed для воспроизводимости")

    aco = p.add_argument_group("Параметры ACO")
    aco.add_argument("--alpha", type=float, default=1.0, help="Влияние феромона")
    aco.add_argument("--beta", type=float, default=2.0, help="Влияние видимости 1/d")
    aco.add_argument("--rho", type=float, default=0.5, help="Испарение (0..1)")
    aco.add_argument("--q", type=float, default=100.0, help="Масштаб депонирования")
    aco.add_argument("--ants", type=int, default=10, help="Количество муравьёв")
    aco.add_argument("--iters", type=int, default=100, help="Число итераций")
    aco.add_argument("--start", type=str, default="0", help="Индекс или имя стартовой точки")

    out = p.add_argument_group("Вывод")
    out.add_argument("--best-only", action="store_true", help="Не печатать маршруты всех итераций")
    out.add_argument("--save-best", type=str, default=None, help="Сохраняет лучший тур в файл (txt)")
    out.add_argument("-v", "--verbose", action="count", default=0, help="Подробный лог (-v INFO, -vv DEBUG)")

    return p


# ---- Ввод из консоли ---------------------------------------------------------
def prompt_value(ask: Callable[[str], str], question: str, cast: Callable[[str], T], error: str,
                 out: Callable[[str], None] = print) -> T:
    '''Повторяет вопрос, пока ответ не удастся преобразовать через cast'''
    while True:
        answer = ask(question)
        try:
            return cast(answer.strip())
        except ValueError:
            out(error)


def prompt_points(ask: Callable[[str], str] = input, out: Callable[[str], None] = print) -> list[Point]:
    '''Запрашивает количество точек, их имена и координаты'''
    n = prompt_value(ask, "Введите количество точек: ", int, "Количество точек должно быть целым числом", out)
    points = []
    for i in range(n):
        name = ask(f"Введите имя точки {i + 1}: ").strip()
        x = prompt_value(ask, f"Введите координату x точки {name}: ", float, "Координата x должна быть числом", out)
        y = prompt_value(ask, f"Введите координату y точки {name}: ", float, "Координата y должна быть числом", out)
        points.append(Point(name, x, y))
    return points


def resolve_start(points: Sequence[Point], token: str) -> int:
    '''
    Индекс стартовой точки по индексу или имени

    Целое число трактуется как индекс, иначе ищется первая точка с таким именем.
    '''
    token = token.strip()
    try:
        index = int(token)
    except ValueError:
        for i, p in enumerate(points):
            if p.name == token:
                return i
        raise ConfigurationError(f"Нет точки с именем {token!r}") from None
    if not 0 <= index < len(points):
        raise ConfigurationError(f"Индекс стартовой точки должен лежать в [0, {len(points) - 1}], получено {index}")
    return index


# ---- Вывод результата --------------------------------------------------------
def _fmt(x: float) -> str:
    return str(int(x)) if float(x).is_integer() else str(x)


def tour_names(tour: Sequence[int], points: Sequence[Point]) -> str:
    return " -> ".join(points[i].name for i in tour)


def render_result(result: RunResult, colony: AntColony, *, best_only: bool = False) -> str:
    '''Текстовый отчёт: маршруты всех итераций с длинами, затем лучший маршрут'''
    lines = []
    if not best_only:
        lines.append("Все маршруты и их длины:")
        for record in result.history:
            lines.append(f"Итерация {record.iteration}:")
            for k, tour in enumerate(record.tours, start=1):
                length = colony.tour_length(tour)
                lines.append(f"Маршрут {k}: {tour_names(tour, colony.points)}, длина: {_fmt(length)}")
            lines.append("------------")
    lines.append(f"Кратчайший маршрут: {tour_names(result.best_tour, colony.points)}")
    lines.append(f"Длина маршрута: {_fmt(result.best_length)}")
    return "\n".join(lines)


def main(argv: list[str] | None = None, ask: Callable[[str], str] = input) -> int:
    '''Точка входа для aco-tsp'''
    parser = build_argparser()
    args = parser.parse_args(argv)
    level = logging.WARNING if args.verbose == 0 else logging.INFO if args.verbose == 1 else logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        # Источник точек
        if args.interactive:
            points = prompt_points(ask)
            start_token = ask("Введите индекс или имя стартовой точки: ")
        elif args.csv:
            points = PointFactory.from_csv(args.csv)
            start_token = args.start
        else:
            points = PointFactory.random_points(args.n, low=args.low, high=args.high, seed=args.seed)
            start_token = args.start

        start_index = resolve_start(points, start_token)
        params = ACOParams(alpha=args.alpha, beta=args.beta, rho=args.rho, q=args.q)
        colony = AntColony(points, params=params, n_ants=args.ants, start_index=start_index, seed=args.seed)
        iterations = args.iters
        if args.interactive:
            iterations = prompt_value(ask, "Введите количество итераций: ", int,
                                      "Количество итераций должно быть целым числом")
        res = colony.run(iterations)
    except (ConfigurationError, OSError) as e:
        parser.error(str(e))

    print(render_result(res, colony, best_only=args.best_only))

    if args.save_best:
        Path(args.save_best).write_text(tour_names(res.best_tour, colony.points), encoding="utf-8")
        print("Сохранено:", args.save_best)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
