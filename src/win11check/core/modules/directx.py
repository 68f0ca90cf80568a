"""
Проба версии DirectX через внешнюю утилиту dxdiag.

dxdiag не возвращает результат через stdout: он пишет XML-отчет в файл,
причем на 64-битных системах перезапускает сам себя, и родительский
процесс завершается раньше, чем файл появится. Поэтому проба опрашивает
файловую систему, но с жестким сроком ожидания и с возможностью отмены.
"""
import asyncio
import logging
import re
import shutil
import subprocess
import tempfile
import xml.etree.ElementTree as ET
from concurrent.futures import Executor
from pathlib import Path
from typing import Dict, List, Optional, Union

import psutil

from ..errors import ExternalToolTimeout, MalformedExternalOutput, QueryUnavailable
from .base import BaseProbe

logger = logging.getLogger(__name__)

PROBE_NAME = "GraphicsCard"
_VERSION_PATTERN = re.compile(r"^DirectX\s+(\d+)$")


def extract_directx_version(root: ET.Element) -> int:
    """Достает номер поколения из узла `DirectXVersion` ("DirectX 12" -> 12)."""
    node = root if root.tag == "DirectXVersion" else root.find(".//DirectXVersion")
    if node is None or not node.text:
        raise MalformedExternalOutput("В отчете dxdiag нет узла DirectXVersion.", PROBE_NAME)

    text = node.text.strip()
    match = _VERSION_PATTERN.match(text)
    if not match:
        raise MalformedExternalOutput(f"Неожиданный формат версии DirectX: {text!r}.", PROBE_NAME)
    return int(match.group(1))


def parse_directx_version(xml_data: Union[str, bytes]) -> int:
    """
    Разбирает XML-отчет dxdiag и возвращает номер версии DirectX.

    Raises:
        MalformedExternalOutput: XML некорректен, нет нужного узла или
                                 версия не в формате "DirectX <число>".
    """
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as e:
        raise MalformedExternalOutput(f"Отчет dxdiag не является корректным XML: {e}", PROBE_NAME) from e
    return extract_directx_version(root)


class DirectXProbe(BaseProbe):
    """Запускает `dxdiag /x <файл>` и ждет появления отчета не дольше `wait_timeout` секунд."""

    name = PROBE_NAME
    REPORT_FILE_NAME = "dxv.xml"
    KILL_WAIT_TIMEOUT = 1.0

    def __init__(self, executable: str = "dxdiag", wait_timeout: float = 60.0, poll_interval: float = 1.0):
        self.executable = executable
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        # Страховочный тайм-аут агрегатора должен быть длиннее собственного срока пробы
        self.timeout = wait_timeout + 2 * poll_interval

    async def run(self, executor: Optional[Executor] = None) -> int:
        report_dir = Path(tempfile.mkdtemp(prefix="win11check_dxdiag_"))
        report_path = report_dir / self.REPORT_FILE_NAME
        try:
            process = self._spawn(report_path)
            try:
                return await self._wait_for_report(report_path)
            finally:
                self._terminate(process, report_path)
        finally:
            shutil.rmtree(report_dir, ignore_errors=True)

    def _spawn(self, report_path: Path) -> subprocess.Popen:
        logger.debug(f"Запуск {self.executable} для записи отчета в {report_path}...")
        try:
            return subprocess.Popen(
                [self.executable, "/x", str(report_path)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise QueryUnavailable(f"Не удалось запустить {self.executable}: {e}", self.name) from e

    async def _wait_for_report(self, report_path: Path) -> int:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.wait_timeout
        last_error: Optional[Exception] = None

        while True:
            if report_path.exists():
                try:
                    root = ET.fromstring(report_path.read_bytes())
                except (OSError, ET.ParseError) as e:
                    # Файл еще дописывается
                    last_error = e
                else:
                    return extract_directx_version(root)

            remaining = deadline - loop.time()
            if remaining <= 0:
                break
            await asyncio.sleep(min(self.poll_interval, remaining))

        if last_error is not None:
            raise MalformedExternalOutput(
                f"Отчет dxdiag так и не удалось прочитать: {last_error}", self.name
            )
        raise ExternalToolTimeout(
            f"Не удалось определить версию DirectX: отчет не появился за {self.wait_timeout:g} с.",
            self.name,
        )

    def _terminate(self, process: subprocess.Popen, report_path: Path) -> None:
        # Потомков ищем до остановки лаунчера, иначе связь с ним потеряется
        workers = self._find_workers(process.pid, report_path)

        if process.poll() is None:
            logger.debug(f"Завершение процесса {self.executable} (pid={process.pid}).")
            try:
                process.kill()
            except OSError as e:
                logger.debug(f"Процесс {self.executable} уже завершился: {e}")

        for worker in workers:
            logger.debug(f"Завершение перезапущенного {self.executable} (pid={worker.pid}).")
            try:
                worker.kill()
            except psutil.NoSuchProcess:
                continue
            except psutil.AccessDenied as e:
                logger.warning(f"Не удалось завершить процесс pid={worker.pid}: {e}")
        if workers:
            psutil.wait_procs(workers, timeout=self.KILL_WAIT_TIMEOUT)

    def _find_workers(self, launcher_pid: int, report_path: Path) -> List[psutil.Process]:
        """
        Находит процессы dxdiag, запущенные лаунчером: его потомков и
        процессы, которым в командной строке передан путь нашего отчета.
        """
        workers: Dict[int, psutil.Process] = {}
        try:
            for child in psutil.Process(launcher_pid).children(recursive=True):
                workers[child.pid] = child
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.debug(f"Не удалось получить потомков pid={launcher_pid}: {e}")

        target = str(report_path)
        for proc in psutil.process_iter(["cmdline"]):
            if proc.pid == launcher_pid or proc.pid in workers:
                continue
            cmdline = proc.info.get("cmdline") or []
            if any(target in part for part in cmdline):
                workers[proc.pid] = proc
        return list(workers.values())
