"""
Основной модуль приложения Win11 Check.
Содержит класс Application, который инкапсулирует всю логику запуска.
"""
import sys
import os
import ctypes
import logging
import asyncio
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

# --- Аварийный MessageBox, не зависящий от PyQt ---
def emergency_message_box(title: str, message: str):
    """Показывает системное окно с сообщением. Используется при сбоях до инициализации QApplication."""
    try:
        ctypes.windll.user32.MessageBoxW(0, message, title, 0x10) # MB_ICONERROR
    except AttributeError:
        print(f"{title}\n{message}", file=sys.stderr)

try:
    from PyQt6.QtWidgets import QApplication, QMessageBox
    from PyQt6.QtCore import QSharedMemory
    from PyQt6.QtGui import QIcon
    from dotenv import load_dotenv
    import qasync
except ImportError as e:
    error_msg = f"КРИТИЧЕСКАЯ ОШИБКА: Не найдены основные зависимости: {e}\n\n" \
                f"Пожалуйста, установите их командой 'pip install .'."
    emergency_message_box("Ошибка зависимостей", error_msg)
    sys.exit(1)

load_dotenv()

from src.win11check import APP_NAME, ORG_NAME, APP_VERSION
from src.win11check.core import ReportAggregator, RequirementEntry, load_requirements
from src.win11check.gui import MainWindow

logger = logging.getLogger(__name__)

class Application:
    """
    Класс, инкапсулирующий жизненный цикл приложения Win11 Check.
    """
    def __init__(self, app_paths: Dict[str, Path]):
        self.app_paths = app_paths
        self.q_app: Optional[QApplication] = None
        self.shared_memory: Optional[QSharedMemory] = None
        self.aggregator: Optional[ReportAggregator] = None
        self.requirements: List[RequirementEntry] = []
        self.main_window: Optional[MainWindow] = None
        self.log_file_path: Optional[Path] = None

        self._setup_exception_hook()

    def initialize(self) -> bool:
        """Выполняет всю предварительную настройку приложения."""
        self._setup_logging()

        self.q_app = QApplication(sys.argv)

        if not self._check_single_instance():
            QMessageBox.warning(None, "Приложение уже запущено", f"{APP_NAME} уже работает.")
            return False

        self._set_app_icon()
        self._set_app_user_model_id()
        self._initialize_core()
        self._initialize_gui()

        return True

    def exec(self) -> int:
        """Запускает главный цикл событий приложения."""
        if not self.q_app or not self.main_window:
            logger.critical("Попытка запуска без предварительной инициализации.")
            return 1

        loop = self._setup_async_loop()

        logger.info("Запуск главного цикла событий приложения.")
        self.main_window.show()

        with loop:
            loop.call_soon(self.main_window.start_report)
            exit_code = loop.run_forever()
            self._finish_pending_report(loop)

        return exit_code or 0

    def _setup_logging(self):
        log_dir = self.app_paths["logs"]
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file_path = log_dir / 'win11check.log'

        log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
        log_level = getattr(logging, log_level_str, logging.INFO)

        file_handler = RotatingFileHandler(self.log_file_path, maxBytes=5*1024*1024, backupCount=3, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s'))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter('[%(levelname)s] %(message)s'))

        root_logger = logging.getLogger()
        root_logger.setLevel(log_level)
        if root_logger.hasHandlers():
            root_logger.handlers.clear()
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)
        logger.info(f"Система логирования для {APP_NAME} v{APP_VERSION} инициализирована. Уровень: {log_level_str}")

    def _setup_exception_hook(self):
        self.original_hook = sys.excepthook
        sys.excepthook = self._handle_exception

    def _handle_exception(self, exc_type, exc, tb):
        logger.critical("Перехвачено необработанное исключение:", exc_info=(exc_type, exc, tb))

        if self.q_app:
            QMessageBox.critical(None, "Критическая ошибка", f"Произошла непредвиденная ошибка: {exc}\n\nПодробности в файле win11check.log.")
            self.q_app.quit()
        else:
            emergency_message_box("Критическая ошибка", f"Произошла непредвиденная ошибка: {exc}\n\nПодробности записаны в лог-файл.")

    def _check_single_instance(self) -> bool:
        """Проверяет, не запущена ли уже другая копия приложения."""
        lock_key = f"{ORG_NAME}_{APP_NAME}_Instance_Lock"
        self.shared_memory = QSharedMemory(lock_key)
        if not self.shared_memory.create(1):
            logger.warning("Попытка запуска второй копии приложения. Выход.")
            return False

        # Освобождаем память при выходе, чтобы "замок" снялся
        self.q_app.aboutToQuit.connect(self.shared_memory.detach)
        return True

    def _set_app_icon(self):
        icon_path = self.app_paths["assets"] / "app.ico"
        if icon_path.exists():
            self.q_app.setWindowIcon(QIcon(str(icon_path)))
        else:
            logger.warning(f"Файл иконки не найден по пути: {icon_path}")

    def _set_app_user_model_id(self):
        """Устанавливает AppUserModelID для корректного отображения иконки в панели задач."""
        try:
            myappid = f'{ORG_NAME}.{APP_NAME}.{APP_VERSION}'
            ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(myappid)
            logger.info(f"Установлен AppUserModelID: {myappid}")
        except (AttributeError, TypeError) as e:
            logger.warning(f"Не удалось установить AppUserModelID: {e}")

    def _initialize_core(self):
        logger.info("Загрузка каталога требований...")
        self.requirements = load_requirements(self.app_paths.get("data"))
        self.aggregator = ReportAggregator()

    def _initialize_gui(self):
        logger.info("Создание главного окна MainWindow...")
        self.main_window = MainWindow(
            aggregator=self.aggregator, requirements=self.requirements, app_paths=self.app_paths
        )

    def _setup_async_loop(self) -> qasync.QEventLoop:
        loop = qasync.QEventLoop(self.q_app)
        asyncio.set_event_loop(loop)
        self.q_app.aboutToQuit.connect(self._shutdown)
        return loop

    def _shutdown(self):
        logger.info("Начало процедуры завершения работы...")
        if self.main_window and self.main_window.report_task:
            self.main_window.report_task.cancel()
        logger.info("Завершение работы.")

    def _finish_pending_report(self, loop: asyncio.AbstractEventLoop):
        """Дает отмененному сбору отчета дойти до своих finally до закрытия цикла."""
        task = self.main_window.report_task if self.main_window else None
        if task is None or task.done():
            return
        logger.info("Ожидание завершения отмененного сбора отчета...")
        loop.run_until_complete(asyncio.gather(task, return_exceptions=True))

# --- Точка входа ---
def main(app_paths: Dict[str, Path]) -> int:
    """
    Создает и запускает экземпляр приложения.
    """
    app_instance = Application(app_paths)
    if app_instance.initialize():
        return app_instance.exec()
    return 0 # Возвращаем 0, если инициализация не удалась (например, копия уже запущена)
