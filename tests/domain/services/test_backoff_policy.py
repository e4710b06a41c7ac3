"""Tests for the watchdog backoff policy."""

import pytest

from display_supervisor.domain.services import BackoffPolicy, backoff_interval


class TestBackoffInterval:
    """Test the pure backoff function."""

    @pytest.mark.parametrize(
        "failures,expected",
        [(0, 10.0), (1, 20.0), (2, 40.0), (3, 80.0), (4, 160.0), (5, 180.0)],
    )
    def test_default_schedule(self, failures, expected):
        """Test interval doubles from 10 and caps at 180."""
        assert backoff_interval(failures) == expected

    def test_monotonic_and_bounded(self):
        """Test interval never decreases and never exceeds the cap."""
        intervals = [backoff_interval(n) for n in range(50)]
        assert intervals == sorted(intervals)
        assert max(intervals) == 180.0

    def test_huge_failure_count_saturates(self):
        """Test exponents too large for a float still return the cap."""
        assert backoff_interval(5000) == 180.0

    def test_negative_failures_rejected(self):
        """Test negative failure counts are invalid."""
        with pytest.raises(ValueError):
            backoff_interval(-1)

    def test_custom_base_and_cap(self):
        """Test custom parameters."""
        assert backoff_interval(2, base=1.0, cap=3.0) == 3.0
        assert backoff_interval(1, base=1.0, cap=3.0) == 2.0


class TestBackoffPolicy:
    """Test the injectable policy object."""

    def test_defaults_match_function(self):
        """Test policy defaults follow the pure function."""
        policy = BackoffPolicy()
        for failures in range(8):
            assert policy.interval(failures) == backoff_interval(failures)

    def test_is_deterministic(self):
        """Test repeated calls give the same answer."""
        policy = BackoffPolicy(base=0.5, cap=4.0)
        assert [policy.interval(3)] * 3 == [policy.interval(3) for _ in range(3)]
        assert policy.interval(3) == 4.0

    def test_invalid_base(self):
        with pytest.raises(ValueError):
            BackoffPolicy(base=0)

    def test_cap_below_base(self):
        with pytest.raises(ValueError):
            BackoffPolicy(base=10.0, cap=5.0)
