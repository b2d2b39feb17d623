import unittest
from datetime import datetime

from solarsizer.reports import render_html, render_text
from solarsizer.reports import formatting as fmt
from solarsizer.sizing import Configuration, compute

WHEN = datetime(2026, 3, 14, 9, 30)


def _config(**overrides):
    data = dict(
        solarLoad=2000,
        backupLoad=1500,
        systemVoltage=24,
        backupHours=4,
        batteryVoltage=12,
        batteryCapacity=200,
        batteryTopology="series",
        solarHours=5,
        panelWattage=450,
        panelVmp=40,
        panelTopology="series",
    )
    data.update(overrides)
    return Configuration(**data)


class TestFormatting(unittest.TestCase):
    def test_unit_suffixes(self):
        self.assertEqual("125A", fmt.amps(125))
        self.assertEqual("4,050W", fmt.watts(4050.0))
        self.assertEqual("20,250Wh", fmt.watt_hours(20250.0))
        self.assertEqual("1.5mm²", fmt.mm2(1.5))
        self.assertEqual("35mm²", fmt.mm2(35.0))

    def test_protection_rows_follow_power_path(self):
        rows = fmt.protection_rows(compute(_config()))
        self.assertEqual(4, len(rows))
        self.assertEqual(("Inverter → AC loads", "16A", "1.5mm²"), rows[-1])


class TestHtmlReport(unittest.TestCase):
    def test_contains_results(self):
        config = _config()
        html = render_html(config, compute(config), generated_at=WHEN)
        self.assertIn("March 14, 2026", html)
        self.assertIn("220A MPPT", html)
        self.assertIn("125A", html)
        self.assertIn("35mm²", html)
        self.assertIn("500V / 125A", html)
        self.assertIn("Series-Parallel", render_html(
            _config(panelTopology="series-parallel"),
            compute(_config(panelTopology="series-parallel")),
            generated_at=WHEN,
        ))

    def test_warnings_block(self):
        config = _config(systemVoltage=12, batteryVoltage=24)
        html = render_html(config, compute(config), generated_at=WHEN)
        self.assertIn('class="warning-box"', html)
        clean = render_html(_config(), compute(_config()), generated_at=WHEN)
        self.assertNotIn('class="warning-box"', clean)


class TestTextReport(unittest.TestCase):
    def test_summary(self):
        config = _config()
        text = render_text(config, compute(config), generated_at=WHEN)
        self.assertIn("2026-03-14 09:30", text)
        self.assertIn("- Batteries: 4 (24V / 400Ah bank)", text)
        self.assertIn("- Solar panels: 9 (4,050W array at 360V)", text)
        self.assertIn("- Daily production: 20,250Wh", text)
        self.assertIn("- Battery → Inverter: 125A breaker, 35mm² cable", text)
        self.assertNotIn("Warnings:", text)

    def test_is_deterministic_for_fixed_timestamp(self):
        config = _config()
        self.assertEqual(
            render_text(config, compute(config), generated_at=WHEN),
            render_text(config, compute(config), generated_at=WHEN),
        )


if __name__ == "__main__":
    unittest.main()
