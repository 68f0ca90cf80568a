"""Проба сети: есть ли хотя бы один активный сетевой интерфейс, кроме loopback и туннелей."""
import logging

import psutil

from .base import BaseProbe

logger = logging.getLogger(__name__)

_VIRTUAL_MARKERS = ("loopback", "pseudo-interface", "teredo", "isatap", "6to4")


def _is_virtual(interface_name: str) -> bool:
    lowered = interface_name.lower()
    return lowered == "lo" or any(marker in lowered for marker in _VIRTUAL_MARKERS)


class NetworkProbe(BaseProbe):
    name = "Network"
    runs_inline = True

    def query(self) -> bool:
        stats = psutil.net_if_stats()
        active = [name for name, s in stats.items() if s.isup and not _is_virtual(name)]
        logger.debug(f"Активные сетевые интерфейсы: {active}")
        return bool(active)
