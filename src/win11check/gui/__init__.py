"""
Этот пакет содержит компоненты графического интерфейса Win11 Check.

Этот __init__.py файл экспортирует главное окно, чтобы импорты из
других частей приложения были короче: `from src.win11check.gui import MainWindow`.
"""

from .main_window import MainWindow

__all__ = [
    "MainWindow",
]
