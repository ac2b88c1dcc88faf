from __future__ import annotations


class AcoError(Exception):
    '''Базовое исключение пакета aco_tsp'''


class ConfigurationError(AcoError, ValueError):
    '''Недопустимые входные данные или параметры (отклоняются до любых изменений состояния)'''


class DegenerateSampleError(AcoError, RuntimeError):
    '''
    Внутреннее нарушение инварианта рулеточного отбора:
    сумма весов не конечна/отрицательна или розыгрыш не попал ни в одного кандидата
    '''
