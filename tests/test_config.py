"""
Tests for reference tables: defaults, validation, loading and swapping.
"""

import json

import pytest
from pydantic import ValidationError

from solarquote.config import (
    EnergyPricingConfig,
    HomeOccupancy,
    ReferenceTables,
    RegionalIrradianceConfig,
    RoofOrientation,
    SolarConfig,
    get_reference_tables,
    load_reference_tables,
    use_reference_tables,
)
from solarquote.engine.estimator import calculate_solar_estimate
from solarquote.models.estimate import CalculatorInputs


@pytest.fixture
def restore_tables():
    original = get_reference_tables()
    yield
    use_reference_tables(original)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_energy_prices(self):
        energy = get_reference_tables().energy
        assert energy.electricity_rate_pence == 27.69
        assert energy.seg_export_rate_pence == 15.0
        assert energy.standing_charge_pence == 54.7

    def test_solar_constants(self):
        solar = get_reference_tables().solar
        assert solar.system_loss_factor == 0.86
        assert solar.panel_area_per_kwp == 5.0
        assert solar.annual_degradation == 0.005
        assert solar.grid_carbon_factor == 0.233

    def test_every_orientation_has_a_factor(self):
        factors = get_reference_tables().solar.orientation_factors
        for orientation in RoofOrientation:
            assert orientation.value in factors

    def test_every_occupancy_has_a_factor(self):
        factors = get_reference_tables().solar.self_consumption_factors
        for occupancy in HomeOccupancy:
            assert occupancy.value in factors

    def test_tables_are_frozen(self):
        with pytest.raises(ValidationError):
            get_reference_tables().energy.electricity_rate_pence = 1.0


# ---------------------------------------------------------------------------
# Table validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_monthly_distribution_must_have_twelve_entries(self):
        with pytest.raises(ValueError, match="12 entries"):
            SolarConfig(monthly_distribution=(0.5, 0.5))

    def test_monthly_distribution_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            SolarConfig(monthly_distribution=(0.1,) * 12)

    def test_pitch_anchors_must_ascend(self):
        with pytest.raises(ValueError, match="ascending"):
            SolarConfig(pitch_factors=((30.0, 1.0), (0.0, 0.9)))

    def test_factor_tables_need_default(self):
        with pytest.raises(ValueError, match="default"):
            SolarConfig(orientation_factors={"S": 1.0})

    def test_regional_table_needs_default(self):
        with pytest.raises(ValueError, match="default"):
            RegionalIrradianceConfig(values={"Wales": 950.0})


# ---------------------------------------------------------------------------
# Loading and swapping
# ---------------------------------------------------------------------------

class TestLoadAndSwap:
    def test_load_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({
            "version": "2026-04-01",
            "energy": {"electricity_rate_pence": 24.5},
        }))
        tables = load_reference_tables(path)
        assert tables.version == "2026-04-01"
        assert tables.energy.electricity_rate_pence == 24.5
        assert tables.energy.seg_export_rate_pence == 15.0
        assert tables.solar.system_loss_factor == 0.86

    def test_load_does_not_activate(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"version": "not-active"}))
        load_reference_tables(path)
        assert get_reference_tables().version != "not-active"

    def test_load_rejects_bad_tables(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({"solar": {"monthly_distribution": [1.0]}}))
        with pytest.raises(ValueError):
            load_reference_tables(path)

    def test_swap_returns_previous(self, restore_tables):
        before = get_reference_tables()
        new = ReferenceTables(version="swapped")
        previous = use_reference_tables(new)
        assert previous is before
        assert get_reference_tables() is new

    def test_new_calculations_use_swapped_tables(self, restore_tables):
        inputs = CalculatorInputs(
            latitude=51.5,
            longitude=-0.14,
            roof_orientation=RoofOrientation.S,
            roof_pitch=35,
            roof_area=30,
            annual_electricity_usage=3500,
            home_occupancy=HomeOccupancy.DAYTIME,
        )
        use_reference_tables(ReferenceTables(
            version="cheap-power",
            energy=EnergyPricingConfig(electricity_rate_pence=10.0),
        ))
        r = calculate_solar_estimate(inputs)
        assert r.metadata.config_version == "cheap-power"
        assert r.metadata.electricity_rate == 10.0
        assert r.annual_savings == pytest.approx(150.5)
