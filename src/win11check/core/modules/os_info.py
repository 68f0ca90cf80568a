"""Описание операционной системы из интроспекции среды выполнения."""
import platform

from .base import BaseProbe


class OperatingSystemProbe(BaseProbe):
    name = "OS"
    runs_inline = True

    def query(self) -> str:
        # Аналог RuntimeInformation.OSDescription: "Windows 10.0.22631"
        system = platform.system() or "Unknown OS"
        version = platform.version()
        return f"{system} {version}".strip()
