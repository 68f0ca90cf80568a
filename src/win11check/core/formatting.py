"""
Форматирование сырых значений проб в текст для отображения.

Все решения о единицах измерения и округлении собраны здесь, чтобы
пробы возвращали только структурированные числа, а формат можно было
проверять отдельно от сбора данных.
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Dict, Tuple

from .models import FirmwareInfo, ProcessorInfo

KIB = 1024
GIB = 1024 ** 3


def _round_half_up(value: Decimal, places: str = "1") -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def _whole_gb(value: Decimal) -> str:
    return f"{int(_round_half_up(value)):,}GB"


def format_processor(info: ProcessorInfo) -> str:
    ghz = _round_half_up(Decimal(info.max_clock_mhz) / 1000, "0.1")
    bits = "64bit" if info.is_64bit else "32bit"
    return f"{ghz}GHz {info.logical_cores}cores {bits}"


def format_memory(total_kb: int) -> str:
    return _whole_gb(Decimal(total_kb) / KIB / KIB)


def format_storage(free_bytes: int) -> str:
    return _whole_gb(Decimal(free_bytes) / GIB)


def format_display(bounds: Tuple[int, int]) -> str:
    width, height = bounds
    return f"{width}x{height}"


def format_network(is_available: bool) -> str:
    return str(bool(is_available))


def format_directx(version: int) -> str:
    return f"DirectX {version}"


def format_tpm(spec_version: str) -> str:
    return f"TPM {spec_version}"


def format_firmware(info: FirmwareInfo) -> str:
    if info.firmware_type != "UEFI":
        return "Legacy BIOS"
    if info.secure_boot is None:
        return "UEFI"
    return f"UEFI, Secure Boot {'on' if info.secure_boot else 'off'}"


FORMATTERS: Dict[str, Callable[[Any], str]] = {
    "Processor": format_processor,
    "Memory": format_memory,
    "Storage": format_storage,
    "Firmware": format_firmware,
    "TPM": format_tpm,
    "GraphicsCard": format_directx,
    "Display": format_display,
    "Network": format_network,
}


def format_value(name: str, raw_value: Any) -> str:
    """Форматирует значение пробы `name`. Для неизвестных проб используется `str()`."""
    formatter = FORMATTERS.get(name, str)
    return formatter(raw_value)
