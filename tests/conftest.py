"""
Общие настройки для всех тестов.

Qt должен работать без дисплея (CI/CD, Linux), поэтому платформа
"offscreen" выбирается до первого импорта PyQt6.
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
