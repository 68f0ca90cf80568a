"""
Этот пакет содержит независимые пробы: каждая опрашивает одну
характеристику системы и возвращает сырое значение.

Этот __init__.py файл экспортирует все классы проб и набор по умолчанию.
"""
from typing import Any, Dict, List, Optional

from .base import BaseProbe
from .directx import DirectXProbe, parse_directx_version
from .display import DisplayProbe
from .firmware import FirmwareProbe
from .memory import MemoryProbe
from .network import NetworkProbe
from .os_info import OperatingSystemProbe
from .processor import ProcessorProbe
from .storage import StorageProbe
from .tpm import TpmProbe
from .wmi_base import WMIBase


def default_probes(config: Optional[Dict[str, Any]] = None) -> List[BaseProbe]:
    """Возвращает пробы в фиксированном порядке отображения."""
    config = config or {}
    return [
        OperatingSystemProbe(),
        ProcessorProbe(),
        MemoryProbe(),
        StorageProbe(),
        FirmwareProbe(),
        TpmProbe(),
        DirectXProbe(
            executable=config.get("dxdiag_executable", "dxdiag"),
            wait_timeout=config.get("dxdiag_timeout", 60.0),
            poll_interval=config.get("dxdiag_poll_interval", 1.0),
        ),
        DisplayProbe(),
        NetworkProbe(),
    ]


__all__ = [
    "BaseProbe",
    "DirectXProbe",
    "DisplayProbe",
    "FirmwareProbe",
    "MemoryProbe",
    "NetworkProbe",
    "OperatingSystemProbe",
    "ProcessorProbe",
    "StorageProbe",
    "TpmProbe",
    "WMIBase",
    "default_probes",
    "parse_directx_version",
]
