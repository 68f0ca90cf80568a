"""
Главный класс-оркестратор. Запускает все зарегистрированные пробы,
форматирует их значения и собирает упорядоченный отчет.
"""
import asyncio
import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from .config import load_core_config
from .errors import ProbeError
from .formatting import format_value
from .models import CapabilityFact, ProbeResult, Report
from .modules import BaseProbe, default_probes

logger = logging.getLogger(__name__)


class ReportAggregator:
    """
    Центральное ядро: опрашивает систему и собирает отчет.

    Сбой или зависание одной пробы не влияет на остальные: каждая
    выполняется со своим тайм-аутом, а любая ошибка превращается
    в запись "unavailable" на ее месте в отчете.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, probes: Optional[Sequence[BaseProbe]] = None):
        logger.info("Инициализация ядра ReportAggregator...")
        self.config = load_core_config(config)
        self.probe_timeout: float = self.config["probe_timeout"]
        self.probes: List[BaseProbe] = list(probes) if probes is not None else default_probes(self.config)
        logger.info(f"Зарегистрировано проб: {len(self.probes)}.")

    async def produce_report(self) -> Report:
        """Запускает каждую пробу ровно один раз, параллельно, и возвращает отчет в порядке регистрации."""
        logger.info("Начало сбора отчета о системе.")
        # Свой пул на каждый проход: зависший поток пробы не должен
        # задерживать ни следующий проход, ни закрытие цикла событий.
        executor = ThreadPoolExecutor(max_workers=max(1, len(self.probes)), thread_name_prefix="win11check-probe")
        try:
            results = await asyncio.gather(*(self._run_probe(probe, executor) for probe in self.probes))
        finally:
            executor.shutdown(wait=False)
        report = Report(entries=tuple(results))

        unavailable = [entry.name for entry in report if not entry.is_available]
        if unavailable:
            logger.warning(f"Отчет собран, недоступны: {', '.join(unavailable)}.")
        else:
            logger.info("Отчет собран, все характеристики получены.")
        logger.debug(f"Собранный отчет: {report.as_pairs()}")
        return report

    def produce_report_sync(self) -> Report:
        """
        Синхронная обертка для вызова вне цикла событий.

        В отличие от asyncio.run(), не дожидается потоков проб, брошенных
        по тайм-ауту.
        """
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(self.produce_report())
        finally:
            loop.close()

    async def _run_probe(self, probe: BaseProbe, executor: Optional[Executor] = None) -> ProbeResult:
        timeout = probe.timeout or self.probe_timeout
        logger.debug(f"Запуск пробы '{probe.name}' (тайм-аут {timeout:g} с)...")
        try:
            raw_value = await asyncio.wait_for(probe.run(executor), timeout=timeout)
            fact = CapabilityFact(name=probe.name, raw_value=raw_value, display_text=format_value(probe.name, raw_value))
        except asyncio.TimeoutError:
            logger.warning(f"Проба '{probe.name}' не уложилась в {timeout:g} с.")
            return ProbeResult.unavailable(probe.name, f"timed out after {timeout:g}s")
        except ProbeError as e:
            logger.warning(f"Проба '{probe.name}' недоступна: {e}")
            return ProbeResult.unavailable(probe.name, str(e))
        except Exception as e:
            logger.error(f"Непредвиденная ошибка в пробе '{probe.name}': {e}", exc_info=True)
            return ProbeResult.unavailable(probe.name, f"{type(e).__name__}: {e}")

        logger.debug(f"Проба '{probe.name}': {fact.display_text}")
        return ProbeResult.success(fact)
