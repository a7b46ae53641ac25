"""Tests for TRIMP and daily load aggregation."""

import math
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from run_analytics.metrics.load import (
    calculate_daily_trimps,
    calculate_hr_reserve_ratio,
    calculate_trimp,
    calculate_workout_trimp,
    workout_day,
)
from run_analytics.models.athlete import (
    FEMALE_TRIMP_CONSTANT,
    MALE_TRIMP_CONSTANT,
    PhysioProfile,
    Sex,
)


class TestHRReserveRatio:
    """Tests for heart rate reserve fraction."""

    def test_mid_reserve(self):
        """Halfway between resting and max should give 0.5."""
        assert calculate_hr_reserve_ratio(avg_hr=125, rest_hr=60, max_hr=190) == 0.5

    def test_clamped_above_max(self):
        """Average HR above max clamps to 1."""
        assert calculate_hr_reserve_ratio(avg_hr=210, rest_hr=60, max_hr=190) == 1.0

    def test_clamped_below_resting(self):
        """Average HR below resting clamps to 0."""
        assert calculate_hr_reserve_ratio(avg_hr=50, rest_hr=60, max_hr=190) == 0.0

    def test_degenerate_profile_returns_zero(self):
        """Max HR equal to resting HR has no reserve and yields 0."""
        assert calculate_hr_reserve_ratio(avg_hr=150, rest_hr=60, max_hr=60) == 0.0

    def test_inverted_profile_returns_zero(self):
        """Max HR below resting HR yields 0."""
        assert calculate_hr_reserve_ratio(avg_hr=150, rest_hr=80, max_hr=70) == 0.0


class TestTRIMPCalculation:
    """Tests for Banister's TRIMP."""

    def test_trimp_formula(self):
        """TRIMP should match duration * r * 0.64 * e^(k*r)."""
        trimp = calculate_trimp(
            duration_min=60,
            avg_hr=125,
            rest_hr=60,
            max_hr=190,
            trimp_constant=1.92,
        )
        expected = 60 * 0.5 * 0.64 * math.exp(1.92 * 0.5)
        assert trimp == pytest.approx(expected)

    def test_trimp_scales_with_duration(self):
        """Doubling duration doubles TRIMP."""
        t30 = calculate_trimp(30, 150, 60, 190, 1.92)
        t60 = calculate_trimp(60, 150, 60, 190, 1.92)
        assert t60 == pytest.approx(t30 * 2)

    def test_trimp_higher_intensity_is_higher(self):
        """Higher heart rate gives more TRIMP for the same duration."""
        easy = calculate_trimp(60, 130, 60, 190, 1.92)
        hard = calculate_trimp(60, 170, 60, 190, 1.92)
        assert hard > easy

    def test_female_coefficient_lower(self):
        """The female preset weights intensity less steeply."""
        male = calculate_trimp(60, 160, 60, 190, MALE_TRIMP_CONSTANT)
        female = calculate_trimp(60, 160, 60, 190, FEMALE_TRIMP_CONSTANT)
        assert female < male

    def test_degenerate_physio_gives_zero(self):
        """Resting HR equal to max HR must not divide by zero."""
        trimp = calculate_trimp(60, 150, rest_hr=170, max_hr=170, trimp_constant=1.92)
        assert trimp == 0.0

    def test_negative_duration_clamped(self):
        """Negative duration is treated as zero."""
        assert calculate_trimp(-10, 150, 60, 190, 1.92) == 0.0

    def test_custom_coefficient(self):
        """Any coefficient is accepted, not only the presets."""
        trimp = calculate_trimp(60, 190, 60, 190, trimp_constant=2.5)
        assert trimp == pytest.approx(60 * 1.0 * 0.64 * math.exp(2.5))


class TestWorkoutTRIMP:
    """Tests for TRIMP from a Workout."""

    def test_workout_without_heart_rate_is_zero(self, make_workout, physio):
        """No average heart rate means exactly 0 TRIMP."""
        workout = make_workout(datetime(2024, 3, 1, 8), distance=5000, duration=1500)
        assert calculate_workout_trimp(workout, physio) == 0.0

    def test_workout_with_heart_rate(self, make_workout, physio):
        """Duration in seconds is converted to minutes."""
        workout = make_workout(
            datetime(2024, 3, 1, 8), distance=10000, duration=3600, avg_hr=125
        )
        expected = 60 * 0.5 * 0.64 * math.exp(1.92 * 0.5)
        assert calculate_workout_trimp(workout, physio) == pytest.approx(expected)

    def test_profile_for_sex(self):
        """Sex presets set the coefficient."""
        profile = PhysioProfile.for_sex(185, 55, Sex.FEMALE)
        assert profile.trimp_constant == FEMALE_TRIMP_CONSTANT


class TestDailyTrimps:
    """Tests for grouping TRIMP by calendar day."""

    def test_same_day_workouts_summed(self, make_workout, physio):
        """Two runs on one day add up."""
        w1 = make_workout(datetime(2024, 3, 1, 7), 5000, 1800, avg_hr=140)
        w2 = make_workout(datetime(2024, 3, 1, 18), 5000, 1800, avg_hr=140)
        daily = calculate_daily_trimps([w1, w2], physio)

        assert list(daily) == [datetime(2024, 3, 1).date()]
        single = calculate_workout_trimp(w1, physio)
        assert daily[datetime(2024, 3, 1).date()] == pytest.approx(single * 2)

    def test_grouped_by_end_date(self, make_workout, physio):
        """A run crossing midnight counts on the day it ended."""
        w = make_workout(datetime(2024, 3, 1, 23, 30), 10000, 3600, avg_hr=150)
        daily = calculate_daily_trimps([w], physio)
        assert list(daily) == [datetime(2024, 3, 2).date()]

    def test_no_heart_rate_day_present_with_zero(self, make_workout, physio):
        """A day with only HR-less runs is kept with 0 TRIMP."""
        w = make_workout(datetime(2024, 3, 1, 8), 5000, 1500)
        daily = calculate_daily_trimps([w], physio)
        assert daily == {datetime(2024, 3, 1).date(): 0.0}

    def test_empty_input(self, physio):
        assert calculate_daily_trimps([], physio) == {}

    def test_timezone_bucketing(self, make_workout):
        """Aware timestamps are converted to the caller's calendar."""
        start = datetime(2024, 3, 1, 22, 0, tzinfo=timezone.utc)
        w = make_workout(start, 5000, 1800)

        assert workout_day(w) == datetime(2024, 3, 1).date()
        assert workout_day(w, ZoneInfo("Asia/Tokyo")) == datetime(2024, 3, 2).date()

    def test_timezone_ignored_for_naive(self, make_workout):
        """Naive timestamps are already in the caller's calendar."""
        w = make_workout(datetime(2024, 3, 1, 22), 5000, 1800)
        assert workout_day(w, ZoneInfo("Asia/Tokyo")) == datetime(2024, 3, 1).date()
