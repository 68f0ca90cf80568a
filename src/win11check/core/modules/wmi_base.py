"""
Содержит базовый класс для проб, работающих с Windows Management Instrumentation (WMI).

COM-объект WMI нельзя переиспользовать между потоками, а пробы выполняются
в пуле потоков агрегатора. Поэтому соединение создается на время
одного запроса внутри контекстного менеджера, который инициализирует COM
для текущего потока и гарантированно освобождает его.
"""
import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, List

try:
    import pythoncom
except ImportError:
    # Позволяет коду работать в окружениях без pywin32 (например, при
    # запуске тестов на Linux в CI/CD), где этот импорт не нужен.
    pythoncom = None

from ..errors import QueryUnavailable
from .base import BaseProbe

logger = logging.getLogger(__name__)


class WMIBase(BaseProbe):
    """
    Базовый класс, предоставляющий потокобезопасный доступ к WMI.

    Для всех обращений к WMI следует использовать `self.wmi_connection()`
    или `self.wmi_query()`.
    """

    namespace: str = "root\\cimv2"

    @contextmanager
    def wmi_connection(self) -> Iterator[Any]:
        """
        Открывает соединение с WMI в пространстве имен `self.namespace`.

        Raises:
            QueryUnavailable: Если WMI недоступен (служба остановлена, нет прав
                              на пространство имен, не Windows).
        """
        thread_id = threading.get_ident()
        if pythoncom is not None:
            pythoncom.CoInitialize()
        try:
            logger.debug(f"Подключение к WMI ({self.namespace}) в потоке {thread_id}...")
            yield self._connect()
        finally:
            if pythoncom is not None:
                pythoncom.CoUninitialize()

    def _connect(self) -> Any:
        try:
            import wmi
        except ImportError as e:
            raise QueryUnavailable(f"WMI недоступен на этой платформе: {e}", self.name) from e

        try:
            # find_classes=False может немного ускорить инициализацию
            return wmi.WMI(namespace=self.namespace, find_classes=False)
        except wmi.x_wmi as e:
            logger.error(f"Не удалось подключиться к WMI ({self.namespace}): {e}", exc_info=True)
            raise QueryUnavailable(f"Не удалось подключиться к WMI: {e}", self.name) from e

    def wmi_query(self, wql: str) -> List[Any]:
        """Выполняет WQL-запрос и возвращает список строк результата."""
        with self.wmi_connection() as connection:
            rows = list(connection.query(wql))
        logger.debug(f"WMI-запрос '{wql}' вернул {len(rows)} строк.")
        return rows
