"""
Каталог минимальных требований Windows 11.

Это справочный текст, поставляемый вместе с приложением в
`data/requirements.yaml`; он не связан с измерениями и ничего не вычисляет.
"""
import logging
from pathlib import Path
from typing import List, Optional

import yaml

from .models import RequirementEntry

logger = logging.getLogger(__name__)

DEFAULT_REQUIREMENTS_PATH = Path(__file__).resolve().parent.parent / "data" / "requirements.yaml"


def load_requirements(path: Optional[Path] = None) -> List[RequirementEntry]:
    """
    Загружает каталог требований в порядке, указанном в файле.

    Raises:
        RuntimeError: Файл отсутствует или имеет неверную структуру.
                      Это дефект сборки, а не штатная ситуация.
    """
    catalog_path = Path(path) if path else DEFAULT_REQUIREMENTS_PATH
    try:
        with open(catalog_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, list):
            raise yaml.YAMLError(f"Файл {catalog_path.name} должен содержать список требований.")
        entries = [
            RequirementEntry(category=str(item["category"]), description=str(item["description"]).strip())
            for item in data
        ]
    except (OSError, yaml.YAMLError, KeyError, TypeError) as e:
        logger.critical(f"Не удалось загрузить каталог требований {catalog_path}: {e}", exc_info=True)
        raise RuntimeError(f"Не удалось загрузить или прочитать каталог требований: {e}") from e

    logger.info(f"Каталог требований загружен: {len(entries)} записей.")
    return entries
