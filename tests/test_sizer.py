import math
import unittest

from solarsizer.sizing import Configuration, Topology, compute
from solarsizer.sizing.battery import size_battery_bank
from solarsizer.sizing.controller import size_charge_controller
from solarsizer.sizing.protection import size_protection, surge_voltage_class
from solarsizer.sizing.solar import panels_in_series, size_solar_array
from solarsizer.sizing.standards import STANDARD_BREAKERS_A, CABLE_AMPACITY


def _config(**overrides) -> Configuration:
    data = dict(
        solar_load=2000,
        backup_load=1500,
        system_voltage=24,
        backup_hours=4,
        battery_voltage=12,
        battery_capacity=200,
        battery_topology="series",
        solar_hours=5,
        panel_wattage=450,
        panel_vmp=40,
        panel_topology="series",
    )
    data.update(overrides)
    return Configuration(**data)


class TestBatteryBank(unittest.TestCase):
    def test_two_strings_of_two(self):
        bank = size_battery_bank(
            backup_load=1500, backup_hours=4, system_voltage=24, battery_voltage=12, battery_capacity=200
        )
        self.assertEqual(6000, bank.required_energy_wh)
        self.assertEqual(2, bank.series_count)
        self.assertEqual(2, bank.parallel_strings)
        self.assertEqual(4, bank.battery_count)
        self.assertEqual(24, bank.bank_voltage)
        self.assertEqual(400, bank.bank_capacity_ah)

    def test_rounds_strings_up(self):
        bank = size_battery_bank(
            backup_load=1000, backup_hours=10, system_voltage=48, battery_voltage=12, battery_capacity=100
        )
        self.assertEqual(3, bank.parallel_strings)
        self.assertEqual(12, bank.battery_count)
        self.assertEqual(300, bank.bank_capacity_ah)

    def test_fractional_series_factor_rounds_count_up(self):
        bank = size_battery_bank(
            backup_load=100, backup_hours=1, system_voltage=12, battery_voltage=24, battery_capacity=100
        )
        self.assertEqual(1, bank.parallel_strings)
        self.assertEqual(1, bank.battery_count)


class TestSolarArray(unittest.TestCase):
    def _array(self, topology):
        return size_solar_array(
            solar_load=2000,
            backup_load=1500,
            backup_hours=4,
            solar_hours=5,
            panel_wattage=450,
            panel_vmp=40,
            panel_topology=topology,
        )

    def test_series(self):
        arr = self._array(Topology.SERIES)
        self.assertAlmostEqual(19200, arr.daily_demand_wh)
        self.assertEqual(9, arr.panel_count)
        self.assertEqual(360, arr.array_voltage)
        self.assertEqual(4050, arr.array_wattage)
        self.assertEqual(20250, arr.daily_energy_wh)

    def test_parallel_keeps_panel_voltage(self):
        arr = self._array(Topology.PARALLEL)
        self.assertEqual(40, arr.array_voltage)
        self.assertEqual(4050, arr.array_wattage)

    def test_series_parallel_uses_two_panel_substrings(self):
        arr = self._array(Topology.SERIES_PARALLEL)
        self.assertEqual(80, arr.array_voltage)
        self.assertEqual(9, arr.panel_count)

    def test_panels_in_series(self):
        self.assertEqual(9, panels_in_series(9, Topology.SERIES))
        self.assertEqual(5, panels_in_series(9, Topology.SERIES_PARALLEL))
        self.assertEqual(1, panels_in_series(9, Topology.PARALLEL))

    def test_count_is_ceiling_of_demand(self):
        for solar_load, backup_load, hours, watts in [
            (300, 100, 3.5, 100),
            (2000, 1500, 5, 450),
            (750, 750, 6, 550),
            (5000, 200, 4.2, 330),
        ]:
            arr = size_solar_array(
                solar_load=solar_load,
                backup_load=backup_load,
                backup_hours=8,
                solar_hours=hours,
                panel_wattage=watts,
                panel_vmp=30,
                panel_topology="series",
            )
            demand = (solar_load * hours + backup_load * 8) * 1.2
            self.assertGreaterEqual(arr.panel_count, 1)
            self.assertGreaterEqual(watts * arr.panel_count * hours, demand - 1e-6)
            self.assertLess(watts * (arr.panel_count - 1) * hours, demand)


class TestChargeController(unittest.TestCase):
    def test_rounds_to_ten_amp_steps(self):
        self.assertEqual(220, size_charge_controller(array_wattage=4050, system_voltage=24))
        self.assertEqual(130, size_charge_controller(array_wattage=2400, system_voltage=24))

    def test_exact_step_is_kept(self):
        # 1920W / 24V = 80A, * 1.25 = 100A
        self.assertEqual(100, size_charge_controller(array_wattage=1920, system_voltage=24))

    def test_multiple_of_ten_and_covering(self):
        for watts in (100, 450, 999, 3300, 12345):
            for volts in (12, 24, 48):
                amps = size_charge_controller(array_wattage=watts, system_voltage=volts)
                self.assertEqual(0, amps % 10)
                self.assertGreaterEqual(amps, 1.25 * watts / volts - 1e-9)


class TestProtection(unittest.TestCase):
    def test_scenario(self):
        spec = size_protection(
            solar_load=2000, backup_load=1500, system_voltage=24, panel_vmp=40, panel_count=9, panel_topology="series"
        )
        self.assertEqual(125, spec.breakers.panel_to_controller)
        self.assertEqual(125, spec.breakers.controller_to_battery)
        self.assertEqual(125, spec.breakers.battery_to_inverter)
        self.assertEqual(16, spec.breakers.inverter_to_load)
        self.assertEqual(35.0, spec.cables_mm2.battery_to_inverter)
        self.assertEqual(1.5, spec.cables_mm2.inverter_to_load)
        self.assertAlmostEqual(432.0, spec.array_voc_v)
        self.assertEqual(500, spec.surge_voltage_v)
        self.assertEqual(500, spec.isolator.voltage_v)
        self.assertEqual(125, spec.isolator.current_a)
        self.assertEqual(16.0, spec.earth_conductor_mm2)

    def test_uses_larger_of_the_two_loads(self):
        spec = size_protection(
            solar_load=500, backup_load=960, system_voltage=24, panel_vmp=40, panel_count=2, panel_topology="parallel"
        )
        self.assertAlmostEqual(40.0, spec.dc_current_a)
        self.assertEqual(50, spec.breakers.controller_to_battery)
        self.assertEqual(10.0, spec.cables_mm2.controller_to_battery)

    def test_voc_by_topology(self):
        common = dict(solar_load=1000, backup_load=1000, system_voltage=24, panel_vmp=40, panel_count=9)
        par = size_protection(panel_topology="parallel", **common)
        sp = size_protection(panel_topology="series-parallel", **common)
        self.assertEqual(100, par.surge_voltage_v)
        self.assertEqual(300, sp.surge_voltage_v)

    def test_surge_class_rounding(self):
        self.assertEqual(100, surge_voltage_class(48))
        self.assertEqual(500, surge_voltage_class(432))
        self.assertEqual(300, surge_voltage_class(300))


class TestCompute(unittest.TestCase):
    def test_scenario(self):
        result = compute(_config())
        self.assertEqual(4, result.battery_count)
        self.assertEqual(24, result.bank_voltage)
        self.assertEqual(400, result.bank_capacity_ah)
        self.assertEqual(9, result.panel_count)
        self.assertEqual(360, result.array_voltage)
        self.assertEqual(4050, result.array_wattage)
        self.assertEqual(20250, result.daily_energy_wh)
        self.assertEqual(220, result.charge_controller_amps)
        for rating in result.protection.breakers.model_dump().values():
            self.assertIn(rating, STANDARD_BREAKERS_A)
        self.assertEqual((), result.warnings)

    def test_is_pure(self):
        config = _config(panel_topology="series-parallel", backup_hours=7.5)
        self.assertEqual(compute(config), compute(config))
        self.assertEqual(compute(config).model_dump_json(), compute(config).model_dump_json())

    def test_accepts_raw_form_fields(self):
        raw = {
            "solarLoad": "2000",
            "backupLoad": "1500",
            "systemVoltage": "24",
            "backupHours": "4",
            "batteryVoltage": "12",
            "batteryCapacity": "200",
            "batteryTopology": "series",
            "solarHours": "5",
            "panelWattage": "450",
            "panelVmp": "40",
            "panelTopology": "series",
        }
        self.assertEqual(compute(_config()).model_dump(), compute(raw).model_dump())

    def test_incomplete_yields_none(self):
        base = _config().model_dump(by_alias=True, mode="json")
        numeric = (
            "solarLoad", "backupLoad", "systemVoltage", "backupHours", "batteryVoltage",
            "batteryCapacity", "solarHours", "panelWattage", "panelVmp",
        )
        for field in numeric:
            for bad in (0, -5, "abc", "", float("nan"), float("inf"), None):
                raw = dict(base)
                raw[field] = bad
                self.assertIsNone(compute(raw), f"{field}={bad!r}")
        missing = dict(base)
        del missing["solarHours"]
        self.assertIsNone(compute(missing))

    def test_battery_count_covers_one_string(self):
        for sysv in (12, 24, 48):
            for batv in (6, 12, 24):
                result = compute(_config(system_voltage=sysv, battery_voltage=batv, backup_load=50, backup_hours=1))
                self.assertGreaterEqual(result.battery_count, math.ceil(sysv / batv))

    def test_non_integral_series_factor_warns(self):
        result = compute(_config(system_voltage=12, battery_voltage=24))
        self.assertIsNotNone(result)
        self.assertTrue(any("series" in w for w in result.warnings))

    def test_saturation_warns_but_returns_table_maximum(self):
        result = compute(_config(solar_load=5000, system_voltage=12, battery_voltage=12))
        self.assertEqual(160, result.protection.breakers.battery_to_inverter)
        self.assertEqual(CABLE_AMPACITY[-1][0], result.protection.cables_mm2.battery_to_inverter)
        self.assertEqual(32, result.protection.breakers.inverter_to_load)
        self.assertEqual(2, len(result.warnings))


if __name__ == "__main__":
    unittest.main()
