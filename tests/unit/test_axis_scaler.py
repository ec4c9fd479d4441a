"""
Тесты для AxisScaler — линейные шкалы и тики

Проверяемые инварианты:
1. Линейное отображение domain → пиксели
2. clamp=True → результат внутри пиксельного диапазона
3. Вырожденный domain → середина пиксельного диапазона
4. Монотонность (в т.ч. для перевёрнутого диапазона)
5. Тики включают оба конца domain
"""

import random

import pytest

from chartstats.core.domain import Domain, ScaleOptions, SummaryStats
from chartstats.core.scaling.axis_scaler import (
    DEFAULT_PAD_FRACTION,
    FALLBACK_DOMAIN,
    LinearScale,
    domain_from_summary,
    domain_from_values,
    label_indices,
    make_linear_scale,
    make_ticks,
    symmetric_domain,
)
from chartstats.core.stats.summary_engine import compute_summary

# =============================================================================
# ТЕСТЫ make_linear_scale
# =============================================================================


class TestLinearScale:
    """Тесты для make_linear_scale / LinearScale"""

    def test_midpoint_maps_to_pixel_midpoint(self) -> None:
        scale = make_linear_scale(Domain(min=0, max=100), (0, 200))
        assert scale(50) == pytest.approx(100.0)
        assert scale(0) == pytest.approx(0.0)
        assert scale(100) == pytest.approx(200.0)

    def test_clamped_above_and_below(self) -> None:
        scale = make_linear_scale(Domain(min=0, max=100), (0, 200))
        assert scale(150) == 200.0
        assert scale(-50) == 0.0

    def test_no_clamp_extrapolates(self) -> None:
        scale = make_linear_scale(Domain(min=0, max=100), (0, 200), ScaleOptions(clamp=False))
        assert scale(150) == pytest.approx(300.0)
        assert scale(-50) == pytest.approx(-100.0)

    def test_degenerate_domain_maps_to_midpoint(self) -> None:
        """max == min → середина пиксельного диапазона, без деления на ноль"""
        scale = make_linear_scale(Domain(min=5, max=5), (0, 200))
        assert scale(5) == 100.0
        assert scale(42) == 100.0
        assert scale(-1e9) == 100.0

    def test_degenerate_with_padding_stays_midpoint(self) -> None:
        scale = make_linear_scale(Domain(min=5, max=5), (0, 200), ScaleOptions(pad_fraction=0.5))
        assert scale(5) == 100.0

    def test_tiny_domain_not_collapsed(self) -> None:
        """Ширина 1e-13 > 0: domain не вырожден, max → конец диапазона"""
        scale = make_linear_scale(Domain(min=0.0, max=1e-13), (0, 200))
        assert scale(1e-13) == pytest.approx(200.0)
        assert scale(0.0) == 0.0
        assert scale(5e-14) == pytest.approx(100.0)

    def test_reversed_pixel_range(self) -> None:
        """Ось Y: большие значения → меньшие пиксели"""
        scale = make_linear_scale(Domain(min=0, max=10), (400, 0))
        assert scale(0) == pytest.approx(400.0)
        assert scale(10) == pytest.approx(0.0)
        assert scale(2.5) == pytest.approx(300.0)
        assert scale(20) == 0.0
        assert scale(-5) == 400.0

    def test_padding_applied_before_mapping(self) -> None:
        scale = make_linear_scale(Domain(min=0, max=10), (0, 120), ScaleOptions(pad_fraction=0.1))
        assert scale.domain == Domain(min=-1.0, max=11.0)
        assert scale(-1) == pytest.approx(0.0)
        assert scale(5) == pytest.approx(60.0)

    def test_monotonic(self) -> None:
        rng = random.Random(5)
        scale = make_linear_scale(Domain(min=-50, max=75), (10, 390))
        values = sorted(rng.uniform(-100, 150) for _ in range(200))
        pixels = [scale(v) for v in values]
        assert all(a <= b for a, b in zip(pixels, pixels[1:]))

    def test_monotonic_reversed(self) -> None:
        scale = make_linear_scale(Domain(min=-50, max=75), (390, 10))
        pixels = [scale(v) for v in range(-100, 150, 5)]
        assert all(a >= b for a, b in zip(pixels, pixels[1:]))

    def test_clamped_within_range(self) -> None:
        rng = random.Random(9)
        scale = make_linear_scale(Domain(min=0, max=1), (30, 470))
        for _ in range(200):
            assert 30 <= scale(rng.uniform(-10, 10)) <= 470

    def test_invert(self) -> None:
        scale = make_linear_scale(Domain(min=0, max=100), (0, 200))
        assert scale.invert(100) == pytest.approx(50.0)
        assert scale.invert(500) == 100.0

    def test_invert_degenerate(self) -> None:
        scale = make_linear_scale(Domain(min=5, max=5), (0, 200))
        assert scale.invert(150) == 5.0

    def test_non_finite_pixels_rejected(self) -> None:
        with pytest.raises(ValueError, match="pixel_end"):
            LinearScale(Domain(min=0, max=1), 0.0, float("inf"))

    def test_scale_is_pure(self) -> None:
        """Повторные вызовы дают одинаковый результат"""
        scale = make_linear_scale(Domain(min=0, max=3), (0, 1))
        assert scale(1) == scale(1)
        assert "LinearScale" in repr(scale)


# =============================================================================
# ТЕСТЫ make_ticks / label_indices
# =============================================================================


class TestTicks:
    """Тесты для make_ticks"""

    def test_six_ticks(self) -> None:
        ticks = make_ticks(Domain(min=0, max=10), 6)
        assert ticks == pytest.approx([0, 2, 4, 6, 8, 10])

    def test_endpoints_exact(self) -> None:
        domain = Domain(min=0.1, max=0.7)
        ticks = make_ticks(domain, 7)
        assert ticks[0] == 0.1
        assert ticks[-1] == 0.7
        assert len(ticks) == 7

    def test_ascending(self) -> None:
        ticks = make_ticks(Domain(min=-3.3, max=17.9), 11)
        assert all(a < b for a, b in zip(ticks, ticks[1:]))

    def test_count_below_two(self) -> None:
        assert make_ticks(Domain(min=0, max=10), 1) == [0.0]
        assert make_ticks(Domain(min=0, max=10), 0) == [0.0]

    def test_with_padding(self) -> None:
        ticks = make_ticks(Domain(min=0, max=10), 2, pad_fraction=0.1)
        assert ticks == pytest.approx([-1.0, 11.0])

    def test_degenerate_domain(self) -> None:
        assert make_ticks(Domain(min=4, max=4), 3) == [4.0, 4.0, 4.0]


class TestLabelIndices:
    """Тесты для label_indices"""

    @pytest.mark.parametrize(
        "n, max_labels, expected",
        [
            (12, 5, [0, 3, 6, 9]),
            (5, 5, [0, 1, 2, 3, 4]),
            (3, 5, [0, 1, 2]),
            (30, 5, [0, 6, 12, 18, 24]),
            (0, 5, []),
        ],
    )
    def test_indices(self, n: int, max_labels: int, expected: list[int]) -> None:
        assert label_indices(n, max_labels) == expected

    def test_never_exceeds_max(self) -> None:
        for n in range(1, 100):
            assert len(label_indices(n, 5)) <= 5

    def test_invalid_max_labels(self) -> None:
        with pytest.raises(ValueError, match="max_labels"):
            label_indices(10, 0)


# =============================================================================
# ТЕСТЫ ПОСТРОЕНИЯ DOMAIN
# =============================================================================


class TestDomainConstruction:
    """Тесты для domain_from_values / domain_from_summary / symmetric_domain"""

    def test_from_values(self) -> None:
        assert domain_from_values([3.0, -2.0, 8.0]) == Domain(min=-2.0, max=8.0)

    def test_from_values_padded(self) -> None:
        domain = domain_from_values([0.0, 10.0], pad_fraction=0.1)
        assert domain.min == pytest.approx(-1.0)
        assert domain.max == pytest.approx(11.0)

    def test_from_values_empty_fallback(self) -> None:
        assert domain_from_values([]) == FALLBACK_DOMAIN
        assert domain_from_values([], fallback=Domain(min=-1, max=1)) == Domain(min=-1, max=1)

    def test_from_values_non_finite(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            domain_from_values([1.0, float("nan")])

    def test_from_summary_covers_outliers(self) -> None:
        stats = compute_summary([10, 12, 11, 13, 12, 11, 100])
        domain = domain_from_summary(stats, pad_fraction=0.0)
        assert domain == Domain(min=10.0, max=100.0)

    def test_from_summary_default_padding(self) -> None:
        stats = compute_summary([0.0, 10.0])
        domain = domain_from_summary(stats)
        assert DEFAULT_PAD_FRACTION == 0.1
        assert domain.min == pytest.approx(-1.0)
        assert domain.max == pytest.approx(11.0)

    def test_from_summary_empty(self) -> None:
        assert domain_from_summary(SummaryStats.empty()) == FALLBACK_DOMAIN

    def test_symmetric(self) -> None:
        domain = symmetric_domain([-5.0, 10.0])
        assert domain.min == pytest.approx(-11.0)
        assert domain.max == pytest.approx(11.0)
        assert domain.midpoint == pytest.approx(0.0)

    def test_symmetric_no_padding(self) -> None:
        assert symmetric_domain([-7.0, 3.0], pad_fraction=0.0) == Domain(min=-7.0, max=7.0)

    def test_symmetric_empty(self) -> None:
        assert symmetric_domain([]).is_degenerate

    def test_negative_padding_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            symmetric_domain([1.0], pad_fraction=-0.1)
