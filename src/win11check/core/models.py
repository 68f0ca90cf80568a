"""
Структуры данных отчета: факты, результаты проб, сам отчет и записи
каталога требований.

Все структуры неизменяемы (`frozen=True`) и создаются заново при каждом
проходе агрегатора.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, List, Optional, Tuple

UNAVAILABLE_TEXT = "unavailable"


@dataclass(frozen=True)
class ProcessorInfo:
    """Сырые данные о процессоре."""
    max_clock_mhz: int
    logical_cores: int
    is_64bit: bool


@dataclass(frozen=True)
class FirmwareInfo:
    """Тип прошивки ("UEFI"/"BIOS") и состояние Secure Boot (None, если неизвестно)."""
    firmware_type: str
    secure_boot: Optional[bool] = None


@dataclass(frozen=True)
class CapabilityFact:
    """Одно измеренное свойство системы: сырое значение и текст для отображения."""
    name: str
    raw_value: Any
    display_text: str


@dataclass(frozen=True)
class ProbeResult:
    """
    Результат одной пробы: либо факт, либо причина недоступности.

    Создавайте экземпляры через `ProbeResult.success()` и
    `ProbeResult.unavailable()`, а не напрямую.
    """
    name: str
    fact: Optional[CapabilityFact] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, fact: CapabilityFact) -> "ProbeResult":
        return cls(name=fact.name, fact=fact)

    @classmethod
    def unavailable(cls, name: str, reason: str) -> "ProbeResult":
        return cls(name=name, reason=reason)

    @property
    def is_available(self) -> bool:
        return self.fact is not None

    @property
    def display_text(self) -> str:
        return self.fact.display_text if self.fact is not None else UNAVAILABLE_TEXT


@dataclass(frozen=True)
class Report:
    """Упорядоченный набор результатов: ровно одна запись на каждую зарегистрированную пробу."""
    entries: Tuple[ProbeResult, ...]
    created_at: datetime = field(default_factory=datetime.now)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ProbeResult]:
        return iter(self.entries)

    def get(self, name: str) -> Optional[ProbeResult]:
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def as_pairs(self) -> List[Tuple[str, str]]:
        return [(entry.name, entry.display_text) for entry in self.entries]


@dataclass(frozen=True)
class RequirementEntry:
    """Справочная запись о минимальном требовании Windows 11."""
    category: str
    description: str
