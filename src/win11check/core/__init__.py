"""
Этот пакет содержит всю логику сбора сведений о системе.

Он не зависит от GUI: пробы, агрегатор отчета, форматирование
и каталог требований можно использовать и без окна приложения.
"""

from .aggregator import ReportAggregator
from .catalog import load_requirements
from .models import CapabilityFact, ProbeResult, Report, RequirementEntry

__all__ = [
    "CapabilityFact",
    "ProbeResult",
    "Report",
    "ReportAggregator",
    "RequirementEntry",
    "load_requirements",
]
