"""
Иерархия ошибок расчета доступности.

Отсутствие свободного времени (выходной, отпуск, нет расписания) ошибкой
не является и возвращается как UnavailableReason.
"""


class AvailabilityError(Exception):
    """Базовая ошибка расчета доступности."""


class InvalidInput(AvailabilityError, ValueError):
    """Некорректная дата, время или длительность."""


class NotFound(AvailabilityError, LookupError):
    """Специалист или услуга не найдены."""
