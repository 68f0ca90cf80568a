"""
Тесты для главного окна приложения MainWindow.

Эти тесты проверяют, что окно корректно отображает отчет ядра
и никогда не оставляет строку пустой без объяснения.
"""
import asyncio
import pytest
from unittest.mock import AsyncMock, MagicMock

from src.win11check.core.aggregator import ReportAggregator
from src.win11check.core.models import CapabilityFact, ProbeResult, Report, RequirementEntry
from src.win11check.gui.main_window import MainWindow, PENDING_TEXT

# --- Фикстуры для подготовки тестового окружения ---

REQUIREMENTS = [
    RequirementEntry("Processor", "1 ГГц, 2 ядра, 64 бита"),
    RequirementEntry("Memory", "4 ГБ"),
    RequirementEntry("GraphicsCard", "DirectX 12"),
]


def _report() -> Report:
    return Report(entries=(
        ProbeResult.success(CapabilityFact("Processor", None, "3.4GHz 8cores 64bit")),
        ProbeResult.success(CapabilityFact("Memory", 16_777_216, "16GB")),
        ProbeResult.unavailable("GraphicsCard", "dxdiag не создал отчет"),
        ProbeResult.success(CapabilityFact("Network", True, "True")),
    ))


@pytest.fixture
def mock_aggregator() -> MagicMock:
    """Мок ядра с набором проб и асинхронным produce_report."""
    aggregator = MagicMock(spec=ReportAggregator)
    aggregator.probes = []
    for name in ("Processor", "Memory", "GraphicsCard", "Network"):
        probe = MagicMock()
        probe.name = name
        aggregator.probes.append(probe)
    aggregator.produce_report = AsyncMock(return_value=_report())
    return aggregator


@pytest.fixture
def window(qtbot, mock_aggregator) -> MainWindow:
    """Фикстура, которая создает экземпляр MainWindow для тестов."""
    main_window = MainWindow(aggregator=mock_aggregator, requirements=REQUIREMENTS)
    qtbot.addWidget(main_window)
    return main_window


# --- Тесты для различных сценариев GUI ---

class TestMainWindowInitialization:

    def test_window_has_correct_title(self, window: MainWindow):
        assert "Win11 Check" in window.windowTitle()

    def test_rows_follow_catalog_then_extra_probes(self, window: MainWindow):
        # Network есть среди проб, но отсутствует в каталоге - строка все равно создается
        assert list(window.value_labels) == ["Processor", "Memory", "GraphicsCard", "Network"]

    def test_values_are_pending_until_report_arrives(self, window: MainWindow):
        assert all(label.text() == PENDING_TEXT for label in window.value_labels.values())


class TestReportRendering:

    def test_render_report_binds_every_entry(self, window: MainWindow):
        window.render_report(_report())

        assert window.value_labels["Processor"].text() == "3.4GHz 8cores 64bit"
        assert window.value_labels["Memory"].text() == "16GB"
        assert window.value_labels["Network"].text() == "True"

    def test_unavailable_entry_shows_marker_and_reason(self, window: MainWindow):
        window.render_report(_report())

        label = window.value_labels["GraphicsCard"]
        assert label.text() == "unavailable"
        assert "dxdiag" in label.toolTip()

    def test_status_shows_report_time(self, window: MainWindow):
        window.render_report(_report())
        assert window.status_label.text().startswith("Проверено:")


@pytest.mark.asyncio
class TestReportTask:

    async def test_start_report_runs_aggregator_and_renders(self, window: MainWindow, mock_aggregator):
        # WHEN
        window.start_report()
        task = window.report_task
        await task

        # THEN
        mock_aggregator.produce_report.assert_awaited_once()
        assert window.value_labels["Memory"].text() == "16GB"
        assert window.report_task is None

    async def test_second_start_while_running_is_ignored(self, window: MainWindow, mock_aggregator):
        started = asyncio.Event()

        async def slow_report():
            started.set()
            await asyncio.sleep(0.05)
            return _report()

        mock_aggregator.produce_report = AsyncMock(side_effect=slow_report)
        window.start_report()
        task = window.report_task
        await started.wait()

        window.start_report()
        await task

        mock_aggregator.produce_report.assert_awaited_once()

    async def test_aggregator_failure_shows_message_box(self, window: MainWindow, mock_aggregator, mocker):
        # GIVEN
        mock_message_box = mocker.patch("src.win11check.gui.main_window.QMessageBox")
        mock_aggregator.produce_report = AsyncMock(side_effect=RuntimeError("Каталог поврежден"))

        # WHEN
        window.start_report()
        await window.report_task

        # THEN
        mock_message_box.critical.assert_called_once()
        assert "Каталог поврежден" in mock_message_box.critical.call_args[0][2]
        assert all(label.text() == "unknown" for label in window.value_labels.values())
