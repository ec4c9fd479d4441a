"""
InMemoryProvider — Источник наблюдений из фиксированного списка
"""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from chartstats.core.contracts.validators import ObservationValidator
from chartstats.core.domain.observation import Observation
from chartstats.core.stats.grouping import to_unix_seconds

from .base import ObservationProvider, ObservationQuery

logger = logging.getLogger(__name__)


class InMemoryProvider(ObservationProvider):
    """
    Провайдер поверх неизменяемого снапшота наблюдений.

    Порядок ответа — порядок исходного списка.
    """

    def __init__(self, observations: Iterable[Observation]):
        self._observations: tuple[Observation, ...] = tuple(observations)

    def __len__(self) -> int:
        return len(self._observations)

    @classmethod
    def from_payloads(cls, payloads: Iterable[dict[str, Any]]) -> "InMemoryProvider":
        """
        Построение провайдера из JSON payloads.

        Каждый payload проверяется по observation схеме. Числовые timestamps
        (секунды или миллисекунды) переводятся в UTC datetime.

        Raises:
            jsonschema.ValidationError: payload не соответствует схеме
            pydantic.ValidationError: value не конечно
        """
        validator = ObservationValidator()
        observations: list[Observation] = []

        for payload in payloads:
            validator.validate(payload)

            data = dict(payload)
            ts = data.get("timestamp")
            if isinstance(ts, (int, float)) and not isinstance(ts, bool):
                seconds = to_unix_seconds(ts)
                data["timestamp"] = (
                    datetime.fromtimestamp(seconds, tz=timezone.utc) if seconds is not None else None
                )
            observations.append(Observation(**data))

        logger.debug("Loaded %d observations from payloads", len(observations))
        return cls(observations)

    def fetch_observations(self, query: ObservationQuery | None = None) -> list[Observation]:
        if query is None:
            return list(self._observations)

        matched = [obs for obs in self._observations if query.matches(obs)]
        if query.limit is not None:
            matched = matched[: query.limit]
        return matched
