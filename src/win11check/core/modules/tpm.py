"""
Проба доверенного платформенного модуля (TPM).

Класс Win32_Tpm доступен только администраторам; без прав запрос
не вернет строк, и проба сообщит о недоступности.
"""
import logging
from typing import List

from ..errors import QueryUnavailable
from .wmi_base import WMIBase

logger = logging.getLogger(__name__)


def _version_key(version: str) -> List[int]:
    return [int(part) if part.isdigit() else 0 for part in version.split(".")]


class TpmProbe(WMIBase):
    name = "TPM"
    namespace = "root\\CIMV2\\Security\\MicrosoftTpm"

    def query(self) -> str:
        rows = self.wmi_query("SELECT SpecVersion FROM Win32_Tpm")
        versions: List[str] = []
        for row in rows:
            # SpecVersion выглядит как "2.0, 0, 1.59": первый элемент - версия спецификации
            head = str(row.SpecVersion or "").split(",")[0].strip()
            if head:
                versions.append(head)
        if not versions:
            raise QueryUnavailable("TPM не найден или недостаточно прав для его опроса.", self.name)
        return max(versions, key=_version_key)
