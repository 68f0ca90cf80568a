"""Проба оперативной памяти: общий видимый объем из Win32_OperatingSystem (в КБ)."""
import logging

from ..errors import QueryUnavailable
from .wmi_base import WMIBase

logger = logging.getLogger(__name__)


class MemoryProbe(WMIBase):
    name = "Memory"

    def query(self) -> int:
        rows = self.wmi_query("SELECT TotalVisibleMemorySize FROM Win32_OperatingSystem")
        # WMI возвращает строки для 64-битных чисел
        sizes = [int(row.TotalVisibleMemorySize) for row in rows if row.TotalVisibleMemorySize is not None]
        if not sizes:
            raise QueryUnavailable("WMI не вернул данных об объеме памяти.", self.name)
        return sizes[-1]
