"""
Проба дисплея: разрешение основного экрана в физических пикселях.

QScreen можно опрашивать только из GUI-потока, поэтому проба
выполняется прямо в цикле событий (`runs_inline`).
"""
from typing import Tuple

from PyQt6.QtGui import QGuiApplication

from ..errors import QueryUnavailable
from .base import BaseProbe


class DisplayProbe(BaseProbe):
    name = "Display"
    runs_inline = True

    def query(self) -> Tuple[int, int]:
        if QGuiApplication.instance() is None:
            raise QueryUnavailable("Графическое приложение не запущено.", self.name)

        screen = QGuiApplication.primaryScreen()
        if screen is None:
            raise QueryUnavailable("Основной экран не найден.", self.name)

        # geometry() возвращает логические пиксели; переводим в физические
        geometry = screen.geometry()
        ratio = screen.devicePixelRatio()
        return round(geometry.width() * ratio), round(geometry.height() * ratio)
