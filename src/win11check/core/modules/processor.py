"""
Проба процессора: максимальная частота из WMI, число логических ядер
и разрядность операционной системы.
"""
import logging
import os
import platform

import psutil

from ..errors import QueryUnavailable
from ..models import ProcessorInfo
from .wmi_base import WMIBase

logger = logging.getLogger(__name__)

# Значения PROCESSOR_ARCHITECTURE / platform.machine() для 64-битных ОС
_64BIT_MACHINES = {"amd64", "x86_64", "arm64", "aarch64", "ia64"}


def is_64bit_os() -> bool:
    """
    Определяет разрядность ОС, а не интерпретатора.

    32-битный Python на 64-битной Windows видит PROCESSOR_ARCHITECTURE=x86,
    но WOW64 выставляет PROCESSOR_ARCHITEW6432 с настоящей архитектурой.
    """
    machine = os.environ.get("PROCESSOR_ARCHITEW6432") or platform.machine()
    return machine.lower() in _64BIT_MACHINES


class ProcessorProbe(WMIBase):
    name = "Processor"

    def query(self) -> ProcessorInfo:
        logger.debug("Запрос частоты процессора через WMI...")
        rows = self.wmi_query("SELECT MaxClockSpeed FROM Win32_Processor")
        speeds = [int(row.MaxClockSpeed) for row in rows if row.MaxClockSpeed is not None]
        if not speeds:
            raise QueryUnavailable("WMI не вернул данных о частоте процессора.", self.name)

        cores = psutil.cpu_count(logical=True) or os.cpu_count()
        if not cores:
            raise QueryUnavailable("Не удалось определить число логических ядер.", self.name)

        # На многосокетных системах строк несколько, берем наибольшую частоту
        return ProcessorInfo(max_clock_mhz=max(speeds), logical_cores=cores, is_64bit=is_64bit_os())
