"""
Резервная (fallback) конфигурация ядра и ее слияние с переменными окружения.

Значения по умолчанию используются, если соответствующие переменные
не заданы ни в окружении, ни в файле `.env`.
"""
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# ===================================================================
# Конфигурация по умолчанию для ReportAggregator и проб
# ===================================================================
DEFAULT_CORE_CONFIG: Dict[str, Any] = {
    # Максимальное время работы одной пробы, в секундах.
    "probe_timeout": 10.0,
    # dxdiag на медленных машинах пишет отчет до минуты.
    "dxdiag_timeout": 60.0,
    "dxdiag_poll_interval": 1.0,
    "dxdiag_executable": "dxdiag",
}

# Соответствие ключей конфигурации переменным окружения
ENV_VARIABLES = {
    "probe_timeout": "WIN11CHECK_PROBE_TIMEOUT",
    "dxdiag_timeout": "WIN11CHECK_DXDIAG_TIMEOUT",
    "dxdiag_poll_interval": "WIN11CHECK_DXDIAG_POLL_INTERVAL",
    "dxdiag_executable": "WIN11CHECK_DXDIAG_EXECUTABLE",
}


def load_core_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Собирает конфигурацию ядра.

    Порядок приоритета: явные `overrides` > переменные окружения > DEFAULT_CORE_CONFIG.
    Некорректные числовые значения из окружения игнорируются с предупреждением.
    """
    config = dict(DEFAULT_CORE_CONFIG)

    for key, env_name in ENV_VARIABLES.items():
        value = os.getenv(env_name)
        if not value:
            continue
        if isinstance(DEFAULT_CORE_CONFIG[key], float):
            try:
                number = float(value)
            except ValueError:
                logger.warning(f"Некорректное значение {env_name}={value!r}, используется {config[key]}.")
                continue
            if number <= 0:
                logger.warning(f"Значение {env_name} должно быть положительным, используется {config[key]}.")
                continue
            config[key] = number
        else:
            config[key] = value

    if overrides:
        config.update(overrides)

    logger.debug(f"Конфигурация ядра: {config}")
    return config
