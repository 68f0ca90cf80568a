"""
Общие фикстуры для тестов ядра (`src/win11check/core`).

Этот файл автоматически обнаруживается pytest и предоставляет фикстуры
для всех тестовых файлов в этой директории.
"""

import pytest
from typing import Any, Dict, List
from unittest.mock import MagicMock

from src.win11check.core.models import ProcessorInfo
from src.win11check.core.modules.wmi_base import WMIBase

from probe_stubs import StaticProbe


# --- Фикстуры конфигурации ---

@pytest.fixture
def mock_config() -> Dict[str, Any]:
    """Короткие тайм-ауты, чтобы тесты на зависание проходили быстро."""
    return {
        "probe_timeout": 0.5,
        "dxdiag_timeout": 0.3,
        "dxdiag_poll_interval": 0.05,
        "dxdiag_executable": "dxdiag",
    }


# --- Фикстуры для мокирования внешних систем ---

@pytest.fixture
def mock_wmi_connection(mocker) -> MagicMock:
    """
    Заменяет создание соединения в базовом классе WMIBase,
    чтобы все WMI-пробы получали наш мок вместо wmi.WMI().
    """
    connection = MagicMock()
    mocker.patch.object(WMIBase, "_connect", return_value=connection)
    return connection


# --- Наборы тестовых проб ---

@pytest.fixture
def static_probes() -> List[StaticProbe]:
    return [
        StaticProbe("OS", "Windows 10.0.22631"),
        StaticProbe("Processor", ProcessorInfo(max_clock_mhz=3400, logical_cores=8, is_64bit=True)),
        StaticProbe("Memory", 16_777_216),
        StaticProbe("Display", (1920, 1080)),
        StaticProbe("GraphicsCard", 12),
    ]
