"""
Проба накопителей: наибольший объем свободного места среди готовых дисков.
"""
import logging
from typing import List

import psutil

from ..errors import QueryUnavailable
from .base import BaseProbe

logger = logging.getLogger(__name__)


class StorageProbe(BaseProbe):
    name = "Storage"

    def query(self) -> int:
        free_space: List[int] = []
        for partition in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(partition.mountpoint)
            except OSError as e:
                # Пустой привод или отключенный сетевой диск - диск "не готов"
                logger.debug(f"Диск {partition.mountpoint} не готов: {e}")
                continue
            free_space.append(usage.free)

        if not free_space:
            raise QueryUnavailable("Не найдено ни одного готового диска.", self.name)

        logger.debug(f"Свободное место на готовых дисках: {free_space}")
        return max(free_space)
