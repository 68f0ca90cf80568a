"""
Проба системной прошивки: тип (UEFI или BIOS) и состояние безопасной загрузки.
"""
import ctypes
import logging
from typing import Optional

from ..errors import QueryUnavailable
from ..models import FirmwareInfo
from .base import BaseProbe

logger = logging.getLogger(__name__)

# Значения перечисления FIRMWARE_TYPE из winnt.h
_FIRMWARE_TYPES = {1: "BIOS", 2: "UEFI"}

SECURE_BOOT_KEY = r"SYSTEM\CurrentControlSet\Control\SecureBoot\State"


class FirmwareProbe(BaseProbe):
    name = "Firmware"

    def query(self) -> FirmwareInfo:
        firmware_type = self._read_firmware_type()
        secure_boot = self._read_secure_boot() if firmware_type == "UEFI" else None
        return FirmwareInfo(firmware_type=firmware_type, secure_boot=secure_boot)

    def _read_firmware_type(self) -> str:
        """Вызывает kernel32!GetFirmwareType (Windows 8 и новее)."""
        try:
            kernel32 = ctypes.windll.kernel32
        except AttributeError as e:
            raise QueryUnavailable("GetFirmwareType доступен только в Windows.", self.name) from e

        value = ctypes.c_uint(0)
        if not kernel32.GetFirmwareType(ctypes.byref(value)):
            raise QueryUnavailable("GetFirmwareType завершился с ошибкой.", self.name)

        firmware_type = _FIRMWARE_TYPES.get(value.value)
        if firmware_type is None:
            raise QueryUnavailable(f"Неизвестный тип прошивки: {value.value}.", self.name)
        return firmware_type

    def _read_secure_boot(self) -> Optional[bool]:
        """Читает UEFISecureBootEnabled из реестра. None, если значение отсутствует."""
        import winreg

        try:
            with winreg.OpenKey(winreg.HKEY_LOCAL_MACHINE, SECURE_BOOT_KEY, 0, winreg.KEY_READ) as key:
                enabled = winreg.QueryValueEx(key, "UEFISecureBootEnabled")[0]
        except FileNotFoundError:
            logger.warning("Состояние Secure Boot не найдено в реестре.")
            return None
        except OSError as e:
            logger.warning(f"Не удалось прочитать состояние Secure Boot: {e}")
            return None
        return enabled == 1
