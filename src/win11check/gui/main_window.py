"""Главное окно приложения Win11 Check."""
import asyncio
import logging
from typing import Dict, List, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon
from PyQt6.QtWidgets import (
    QFrame, QGridLayout, QLabel, QMainWindow, QMessageBox, QVBoxLayout, QWidget
)

from .. import APP_NAME, APP_VERSION
from ..core.aggregator import ReportAggregator
from ..core.models import Report, RequirementEntry

logger = logging.getLogger(__name__)

PENDING_TEXT = "Проверка..."

# Подписи строк таблицы для имен проб
CATEGORY_TITLES: Dict[str, str] = {
    "OS": "Операционная система",
    "Processor": "Процессор",
    "Memory": "ОЗУ",
    "Storage": "Хранилище",
    "Firmware": "Системная прошивка",
    "TPM": "TPM",
    "GraphicsCard": "Видеокарта",
    "Display": "Дисплей",
    "Network": "Интернет",
}


class MainWindow(QMainWindow):
    """Окно с таблицей: требование Windows 11 и фактическое значение этого компьютера."""

    def __init__(self, aggregator: ReportAggregator, requirements: List[RequirementEntry], app_paths: Optional[dict] = None):
        super().__init__()
        logger.info("MainWindow: Инициализация.")
        self.aggregator = aggregator
        self.requirements = requirements
        self.app_paths = app_paths or {}
        self.report_task: Optional[asyncio.Task] = None
        self.value_labels: Dict[str, QLabel] = {}
        self._setup_window()
        self._setup_ui()

    def _setup_window(self):
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        assets_dir = self.app_paths.get("assets")
        if assets_dir is not None:
            icon_path = assets_dir / "app.ico"
            if icon_path.exists(): self.setWindowIcon(QIcon(str(icon_path)))
        self.setMinimumSize(760, 480)

    def _setup_ui(self):
        container = QWidget()
        self.setCentralWidget(container)
        layout = QVBoxLayout(container)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(12)

        title = QLabel("Минимальные системные требования Windows 11")
        title.setObjectName("ResultTitle")
        layout.addWidget(title, 0, Qt.AlignmentFlag.AlignCenter)

        table = QFrame()
        table.setObjectName("RequirementsTable")
        self.grid = QGridLayout(table)
        self.grid.setHorizontalSpacing(16)
        self.grid.setColumnStretch(1, 2)
        self.grid.setColumnStretch(2, 1)
        for column, header in enumerate(("Компонент", "Требование", "Этот компьютер")):
            header_label = QLabel(f"<b>{header}</b>")
            self.grid.addWidget(header_label, 0, column)

        descriptions = {entry.category: entry.description for entry in self.requirements}
        for row, name in enumerate(self._row_names(), start=1):
            self._add_row(row, name, descriptions.get(name, "—"))
        layout.addWidget(table, 1)

        self.status_label = QLabel()
        self.status_label.setObjectName("StatusLabel")
        layout.addWidget(self.status_label)

    def _row_names(self) -> List[str]:
        """Строки таблицы: сначала в порядке каталога, затем пробы без записи в каталоге."""
        names = [entry.category for entry in self.requirements]
        for probe in self.aggregator.probes:
            if probe.name not in names:
                names.append(probe.name)
        return names

    def _add_row(self, row: int, name: str, description: str):
        name_label = QLabel(CATEGORY_TITLES.get(name, name))
        requirement_label = QLabel(description)
        requirement_label.setWordWrap(True)
        value_label = QLabel(PENDING_TEXT)
        value_label.setObjectName(f"Value_{name}")
        value_label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self.grid.addWidget(name_label, row, 0, Qt.AlignmentFlag.AlignTop)
        self.grid.addWidget(requirement_label, row, 1, Qt.AlignmentFlag.AlignTop)
        self.grid.addWidget(value_label, row, 2, Qt.AlignmentFlag.AlignTop)
        self.value_labels[name] = value_label

    def start_report(self):
        """Запускает сбор отчета в основном event loop и сразу возвращает управление."""
        if self.report_task and not self.report_task.done():
            logger.warning("Попытка запустить сбор отчета, когда он уже выполняется.")
            return
        logger.info("Запрос на сбор отчета о системе.")
        self.status_label.setText("Сбор сведений о системе...")

        async def report_wrapper():
            """Асинхронная обертка для обработки результатов и ошибок."""
            try:
                report = await self.aggregator.produce_report()
                self.render_report(report)
            except asyncio.CancelledError:
                logger.info("Сбор отчета был отменен.")
                raise
            except Exception as e:
                logger.error(f"Произошла ошибка при сборе отчета: {e}", exc_info=True)
                self._on_report_error(e)
            finally:
                self.report_task = None

        self.report_task = asyncio.ensure_future(report_wrapper())

    def render_report(self, report: Report):
        """Привязывает каждую запись отчета к ее строке таблицы."""
        logger.info(f"Отображение отчета из {len(report)} записей.")
        for entry in report:
            label = self.value_labels.get(entry.name)
            if label is None:
                logger.warning(f"Для записи '{entry.name}' нет строки в таблице.")
                continue
            label.setText(entry.display_text)
            label.setToolTip("" if entry.is_available else entry.reason or "")
        self.status_label.setText(f"Проверено: {report.created_at:%H:%M:%S}")

    def _on_report_error(self, error: Exception):
        for label in self.value_labels.values():
            if label.text() == PENDING_TEXT:
                label.setText("unknown")
        self.status_label.setText("Не удалось собрать сведения о системе.")
        QMessageBox.critical(self, "Ошибка", f"Произошла ошибка при сборе сведений: {error}")

    def closeEvent(self, event):
        logger.info("MainWindow: Получен сигнал closeEvent.")
        if self.report_task and not self.report_task.done():
            self.report_task.cancel()
        event.accept()
