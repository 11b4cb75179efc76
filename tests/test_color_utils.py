"""Tests for Kelvin / device temperature conversion."""

from __future__ import annotations

import pytest

from keylight_toggle.utils.color_utils import (
    MAX_KELVIN,
    MIN_KELVIN,
    convert_temperature,
    kelvin_to_mired,
    mired_to_kelvin,
)


class TestConvertTemperature:
    """Tests for the reciprocal conversion."""

    def test_known_values(self) -> None:
        """Test conversions the device documentation lists."""
        assert kelvin_to_mired(3000) == 333
        assert kelvin_to_mired(2900) == 344
        assert kelvin_to_mired(7000) == 142
        assert mired_to_kelvin(200) == 5000

    def test_mired_round_trip_is_exact(self) -> None:
        """Device values survive mired -> Kelvin -> mired unchanged."""
        for value in range(142, 345):
            assert kelvin_to_mired(mired_to_kelvin(value)) == value

    def test_kelvin_round_trip_drift_is_bounded(self) -> None:
        """Kelvin -> mired -> Kelvin only ever rounds upward, by a bounded amount."""
        for kelvin in range(MIN_KELVIN, MAX_KELVIN + 1):
            back = mired_to_kelvin(kelvin_to_mired(kelvin))
            drift = back - kelvin
            assert 0 <= drift <= kelvin * kelvin // (1_000_000 - kelvin) + 1

    def test_aliases_share_conversion(self) -> None:
        """Test both named helpers are the same reciprocal."""
        assert kelvin_to_mired(4000) == convert_temperature(4000)
        assert mired_to_kelvin(250) == convert_temperature(250)

    @pytest.mark.parametrize("value", [0, -3000])
    def test_rejects_non_positive(self, value: int) -> None:
        """Test zero and negative values are refused."""
        with pytest.raises(ValueError):
            convert_temperature(value)
