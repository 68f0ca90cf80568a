"""
Базовый класс для всех проб.

Проба опрашивает ровно одну характеристику системы и возвращает сырое
значение. О неудаче проба сообщает исключением `ProbeError`; превращение
его в запись отчета - задача ReportAggregator.
"""
import asyncio
from concurrent.futures import Executor
from typing import Any, Optional


class BaseProbe:
    """
    Дочерние классы задают `name` и переопределяют `query()`.

    По умолчанию `run()` выполняет блокирующий `query()` в пуле потоков,
    который передает агрегатор (или в пуле цикла событий по умолчанию).
    Пробы, которые должны работать в GUI-потоке, выставляют `runs_inline = True`.
    """

    name: str = ""
    runs_inline: bool = False
    # Индивидуальный тайм-аут; None означает значение из конфигурации агрегатора.
    timeout: Optional[float] = None

    def query(self) -> Any:
        raise NotImplementedError

    async def run(self, executor: Optional[Executor] = None) -> Any:
        if self.runs_inline:
            return self.query()
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, self.query)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
