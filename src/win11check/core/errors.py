"""
Иерархия исключений, которые выбрасывают пробы.

Пробы сообщают о неудаче исключением, а агрегатор превращает его
в запись "unavailable" в отчете. Наружу, в GUI, эти исключения не попадают.
"""
from typing import Optional


class ProbeError(Exception):
    """Базовая ошибка пробы. Хранит имя пробы, в которой она возникла."""

    def __init__(self, message: str, probe_name: Optional[str] = None):
        super().__init__(message)
        self.probe_name = probe_name


class QueryUnavailable(ProbeError):
    """Системный источник не вернул данных (нет строк WMI, нет готовых дисков и т.п.)."""


class ExternalToolTimeout(ProbeError):
    """Внешняя утилита не сформировала результат за отведенное время."""


class MalformedExternalOutput(ProbeError):
    """Результат внешней утилиты есть, но его невозможно разобрать."""
