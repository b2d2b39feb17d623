import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from solarsizer.sizing.cli import main
from solarsizer.storage import STORAGE_KEY


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _run(self, *argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def _write_input(self, **fields):
        path = self.tmp / "input.json"
        path.write_text(json.dumps(fields))
        return str(path)

    def test_sizes_and_writes_reports(self):
        output = self.tmp / "result.json"
        html = self.tmp / "report.html"
        text = self.tmp / "report.txt"
        code, out, _ = self._run(
            "-i", self._write_input(solarLoad=2000, backupLoad=1500),
            "-o", str(output),
            "--html", str(html),
            "--text", str(text),
        )
        self.assertEqual(0, code)
        self.assertIn("Batteries: 4", out)
        self.assertIn("Charge controller: 220A MPPT", out)

        result = json.loads(output.read_text())
        self.assertEqual(4, result["battery"]["battery_count"])
        self.assertEqual(9, result["array"]["panel_count"])
        self.assertEqual(125, result["protection"]["breakers"]["battery_to_inverter"])
        self.assertIn("<html>", html.read_text(encoding="utf-8"))
        self.assertIn("Recommended system:", text.read_text(encoding="utf-8"))

    def test_derating_increases_battery_count(self):
        output = self.tmp / "result.json"
        code, _, _ = self._run(
            "-i", self._write_input(solarLoad=2000, backupLoad=1500),
            "-o", str(output),
            "--derating", "lead-acid",
        )
        self.assertEqual(0, code)
        result = json.loads(output.read_text())
        # 1500W / 0.425 * 4h = 14118Wh over 4800Wh strings -> 3 strings
        self.assertEqual(6, result["battery"]["battery_count"])

    def test_inverter_kva_fills_missing_loads(self):
        output = self.tmp / "result.json"
        code, _, _ = self._run("-i", self._write_input(), "-o", str(output), "--inverter-kva", "2.5")
        self.assertEqual(0, code)
        result = json.loads(output.read_text())
        self.assertEqual(2000, result["inputs"]["solar_load"])
        self.assertEqual(10, result["array"]["panel_count"])

    def test_incomplete_input(self):
        code, _, err = self._run("-i", self._write_input(solarLoad=2000), "-o", str(self.tmp / "r.json"))
        self.assertEqual(1, code)
        self.assertIn("backupLoad", err)
        self.assertFalse((self.tmp / "r.json").exists())

    def test_missing_input_file(self):
        code, _, err = self._run("-i", str(self.tmp / "nope.json"))
        self.assertEqual(2, code)
        self.assertIn("Input error", err)

    def test_store_supplies_defaults_and_saves_form(self):
        store = self.tmp / "store.json"
        output = self.tmp / "result.json"
        code, _, _ = self._run(
            "-i", self._write_input(solarLoad=800, backupLoad=600, systemVoltage=12),
            "-o", str(output),
            "--store", str(store),
        )
        self.assertEqual(0, code)
        saved = json.loads(json.loads(store.read_text())[STORAGE_KEY])
        self.assertEqual("800", saved["solarLoad"])

        # second run reads the loads back from the store
        code, _, _ = self._run("-o", str(output), "--store", str(store))
        self.assertEqual(0, code)
        result = json.loads(output.read_text())
        self.assertEqual(12, result["inputs"]["system_voltage"])

    def test_store_keeps_exact_loads(self):
        store = self.tmp / "store.json"
        output = self.tmp / "result.json"
        code, _, _ = self._run(
            "-i", self._write_input(backupLoad=1234567.5, panelVmp="40.0"),
            "-o", str(output),
            "--inverter-kva", "1.2345678",
            "--store", str(store),
        )
        self.assertEqual(0, code)
        saved = json.loads(json.loads(store.read_text())[STORAGE_KEY])
        result = json.loads(output.read_text())
        self.assertEqual(result["inputs"]["solar_load"], float(saved["solarLoad"]))
        self.assertEqual("1234567.5", saved["backupLoad"])
        self.assertEqual("40", saved["panelVmp"])


if __name__ == "__main__":
    unittest.main()
