"""
Тесты для data providers

Проверяет:
1. ObservationQuery: фильтр по категории и полуоткрытому окну, limit
2. InMemoryProvider: порядок, payloads через JSON Schema
3. SyntheticTradeProvider: детерминизм, профили, outliers
"""

from datetime import datetime, timedelta, timezone

import jsonschema
import pydantic
import pytest

from chartstats.core.domain import Observation
from chartstats.core.stats import compute_summary
from chartstats.providers import (
    DEFAULT_CATEGORIES,
    PER_TRADE_PROFILE,
    PER_YEAR_PROFILE,
    InMemoryProvider,
    ObservationProvider,
    ObservationQuery,
    SyntheticProfile,
    SyntheticTradeProvider,
)

ANCHOR = datetime(2025, 1, 31, tzinfo=timezone.utc)


def _at(day: int, value: float = 1.0, category: str | None = None) -> Observation:
    return Observation(
        value=value,
        category=category,
        timestamp=datetime(2025, 1, day, tzinfo=timezone.utc),
    )


# =============================================================================
# QUERY
# =============================================================================


class TestObservationQuery:
    """Тесты для ObservationQuery"""

    def test_empty_query_matches_everything(self) -> None:
        query = ObservationQuery()
        assert query.matches(Observation(value=1.0))
        assert query.matches(_at(5))

    def test_category_filter(self) -> None:
        query = ObservationQuery(category="Swaps")
        assert query.matches(_at(5, category="Swaps"))
        assert not query.matches(_at(5, category="Futures"))
        assert not query.matches(_at(5))

    def test_half_open_window(self) -> None:
        query = ObservationQuery(
            start=datetime(2025, 1, 5, tzinfo=timezone.utc),
            end=datetime(2025, 1, 10, tzinfo=timezone.utc),
        )
        assert not query.matches(_at(4))
        assert query.matches(_at(5))
        assert query.matches(_at(9))
        assert not query.matches(_at(10))

    def test_window_excludes_missing_timestamp(self) -> None:
        query = ObservationQuery(start=datetime(2025, 1, 5, tzinfo=timezone.utc))
        assert not query.matches(Observation(value=1.0))

    def test_naive_bounds_are_utc(self) -> None:
        query = ObservationQuery(start=datetime(2025, 1, 5))
        assert query.matches(_at(5))
        assert not query.matches(_at(4))

    def test_reversed_window_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="must be after start"):
            ObservationQuery(
                start=datetime(2025, 1, 10, tzinfo=timezone.utc),
                end=datetime(2025, 1, 5, tzinfo=timezone.utc),
            )

    def test_non_positive_limit_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ObservationQuery(limit=0)


# =============================================================================
# IN-MEMORY PROVIDER
# =============================================================================


class TestInMemoryProvider:
    """Тесты для InMemoryProvider"""

    def test_is_observation_provider(self) -> None:
        assert isinstance(InMemoryProvider([]), ObservationProvider)

    def test_returns_all_in_order(self) -> None:
        data = [_at(3, 1.0), _at(1, 2.0), _at(2, 3.0)]
        provider = InMemoryProvider(data)

        assert len(provider) == 3
        assert provider.fetch_observations() == data

    def test_result_is_fresh_list(self) -> None:
        provider = InMemoryProvider([_at(1)])
        result = provider.fetch_observations()
        result.clear()
        assert len(provider.fetch_observations()) == 1

    def test_query_and_limit(self) -> None:
        data = [_at(d, float(d), category="Futures" if d % 2 else "Swaps") for d in range(1, 11)]
        provider = InMemoryProvider(data)

        result = provider.fetch_observations(ObservationQuery(category="Futures", limit=3))
        assert [o.value for o in result] == [1.0, 3.0, 5.0]

    def test_from_payloads(self) -> None:
        provider = InMemoryProvider.from_payloads(
            [
                {"value": 1.5, "id": "t1", "timestamp": "2025-01-05T00:00:00Z"},
                {"value": -2.0, "category": "Swaps", "timestamp": 1736035200000},
                {"value": 3.0, "timestamp": 1736035200},
                {"value": 4.0},
            ]
        )
        observations = provider.fetch_observations()

        expected_ts = datetime(2025, 1, 5, tzinfo=timezone.utc)
        assert observations[0].timestamp == expected_ts
        assert observations[1].timestamp == expected_ts
        assert observations[2].timestamp == expected_ts
        assert observations[3].timestamp is None
        assert observations[1].category == "Swaps"

    def test_from_payloads_rejects_schema_violation(self) -> None:
        with pytest.raises(jsonschema.ValidationError):
            InMemoryProvider.from_payloads([{"value": "12"}])

    def test_from_payloads_rejects_non_finite(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            InMemoryProvider.from_payloads([{"value": float("nan")}])


# =============================================================================
# SYNTHETIC PROVIDER
# =============================================================================


class TestSyntheticTradeProvider:
    """Тесты для SyntheticTradeProvider"""

    def test_deterministic_for_seed(self) -> None:
        first = SyntheticTradeProvider(seed=7, anchor=ANCHOR).fetch_observations()
        second = SyntheticTradeProvider(seed=7, anchor=ANCHOR).fetch_observations()
        assert first == second

    def test_repeated_fetch_identical(self) -> None:
        provider = SyntheticTradeProvider(anchor=ANCHOR)
        assert provider.fetch_observations() == provider.fetch_observations()

    def test_different_seeds_differ(self) -> None:
        first = SyntheticTradeProvider(seed=1, anchor=ANCHOR).generate()
        second = SyntheticTradeProvider(seed=2, anchor=ANCHOR).generate()
        assert [o.value for o in first] != [o.value for o in second]

    def test_per_trade_counts(self) -> None:
        """100 базовых наблюдений + outlier на i = 0, 30, 60, 90"""
        observations = SyntheticTradeProvider(PER_TRADE_PROFILE, anchor=ANCHOR).generate()

        outliers = [o for o in observations if "-outlier-" in o.id]
        assert len(observations) == 104
        assert [o.id for o in outliers] == [
            "day-outlier-0",
            "day-outlier-30",
            "day-outlier-60",
            "day-outlier-90",
        ]

    def test_per_year_counts(self) -> None:
        observations = SyntheticTradeProvider(PER_YEAR_PROFILE, anchor=ANCHOR).generate()
        assert len(observations) == 22
        assert observations[0].id == "year-0"
        assert observations[1].id == "year-outlier-0"

    def test_value_ranges(self) -> None:
        observations = SyntheticTradeProvider(PER_TRADE_PROFILE, anchor=ANCHOR).generate()

        for obs in observations:
            if "-outlier-" in obs.id:
                assert -1000 <= obs.value <= -500 or 1000 <= obs.value <= 3000
            else:
                assert -300 <= obs.value <= 300
                assert obs.value == round(obs.value)

    def test_metadata(self) -> None:
        observations = SyntheticTradeProvider(PER_TRADE_PROFILE, anchor=ANCHOR).generate()
        window_start = ANCHOR - timedelta(days=30)

        for obs in observations:
            assert obs.category in DEFAULT_CATEGORIES
            assert window_start <= obs.timestamp <= ANCHOR

    def test_injected_outliers_detected(self) -> None:
        """Экстремальные значения попадают в outliers сводки"""
        observations = SyntheticTradeProvider(PER_TRADE_PROFILE, anchor=ANCHOR).generate()
        stats = compute_summary(observations)

        outlier_ids = {o.id for o in stats.outliers}
        assert {"day-outlier-0", "day-outlier-30", "day-outlier-60", "day-outlier-90"} <= outlier_ids

    def test_query_filter(self) -> None:
        provider = SyntheticTradeProvider(anchor=ANCHOR)
        result = provider.fetch_observations(ObservationQuery(category="Swaps", limit=5))

        assert 0 < len(result) <= 5
        assert all(o.category == "Swaps" for o in result)

    def test_naive_anchor_is_utc(self) -> None:
        provider = SyntheticTradeProvider(anchor=datetime(2025, 1, 31))
        assert provider.anchor == ANCHOR


class TestSyntheticProfile:
    """Тесты для SyntheticProfile"""

    def test_reversed_range_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="low_outlier_range"):
            SyntheticProfile(
                sample_size=10,
                scale=1.0,
                outlier_every=5,
                low_outlier_range=(-1.0, -5.0),
                high_outlier_range=(5.0, 10.0),
                window_days=1.0,
                id_prefix="t",
            )

    def test_profile_frozen(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            PER_TRADE_PROFILE.sample_size = 5
