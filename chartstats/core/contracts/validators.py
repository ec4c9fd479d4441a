"""
JSON Schema Contract Validators

Проверка данных, пересекающих границу библиотеки: наблюдения от data
provider на входе, сводки и агрегаты для рендеринга на выходе.

Схемы лежат в пакете (chartstats/core/contracts/schema/):
- observation.json: одно наблюдение с метаданными
- summary_stats.json: box-plot сводка
- aggregate_record.json: total / count / average группы
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator

from chartstats.core.domain.observation import AggregateRecord
from chartstats.core.domain.summary import SummaryStats

logger = logging.getLogger(__name__)

_DEFAULT_SCHEMA_DIR = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Чтение и кэширование схем из каталога.

    Каждая схема при первой загрузке проходит meta-validation
    (Draft 2020-12).
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or _DEFAULT_SCHEMA_DIR
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: нет файла {schema_name}.json
            ValueError: файл не является корректной JSON Schema
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        logger.debug("Loaded schema %s from %s", schema_name, schema_path)
        self._schemas[schema_name] = schema
        return schema


# Загрузчик схем пакета, общий для всех валидаторов
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Валидатор одного контракта.

    Подклассы задают schema_name; базовый класс можно создать и напрямую
    с именем схемы.
    """

    schema_name: str = ""

    def __init__(self, schema_name: str | None = None):
        if schema_name is not None:
            self.schema_name = schema_name
        if not self.schema_name:
            raise ValueError("schema_name is required")

        self.schema = _SCHEMA_LOADER.load_schema(self.schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: первое найденное нарушение
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[jsonschema.ValidationError]:
        """Все нарушения контракта (для диагностики payload целиком)."""
        return self.validator.iter_errors(data)


class ObservationValidator(ContractValidator):
    schema_name = "observation"


class SummaryStatsValidator(ContractValidator):
    schema_name = "summary_stats"


class AggregateRecordValidator(ContractValidator):
    schema_name = "aggregate_record"


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_observation(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError, если наблюдение нарушает контракт."""
    ObservationValidator().validate(data)


def validate_summary_stats(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError, если сводка нарушает контракт."""
    SummaryStatsValidator().validate(data)


def validate_aggregate_record(data: Dict[str, Any]) -> None:
    """Raises jsonschema.ValidationError, если агрегат нарушает контракт."""
    AggregateRecordValidator().validate(data)


def summary_to_payload(stats: SummaryStats) -> Dict[str, Any]:
    """
    JSON-совместимый payload сводки для рендеринга.

    Timestamps outliers сериализуются в ISO-строки.

    Raises:
        jsonschema.ValidationError: payload не соответствует summary_stats
    """
    payload = stats.model_dump(mode="json")
    validate_summary_stats(payload)
    return payload


def aggregate_to_payload(record: AggregateRecord) -> Dict[str, Any]:
    """
    JSON-совместимый payload агрегата.

    Ключи date/datetime → ISO-строка; ключи, не являющиеся JSON-скаляром
    (кортежи и т.п.) → str(key).

    Raises:
        jsonschema.ValidationError: payload не соответствует aggregate_record
    """
    key = record.key
    if hasattr(key, "isoformat"):
        key = key.isoformat()
    elif key is not None and not isinstance(key, (str, int, float, bool)):
        key = str(key)

    payload = {
        "key": key,
        "total": record.total,
        "count": record.count,
        "average": record.average,
    }
    validate_aggregate_record(payload)
    return payload
