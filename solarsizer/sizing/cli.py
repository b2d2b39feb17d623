from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

from ..reports import render_html, render_text
from ..storage import FormStore, JsonFileBackend
from .forms import (
    DEFAULT_FORM,
    DERATING_POLICIES,
    apply_derating,
    field_text,
    form_from_configuration,
    parse_form,
)
from .sizer import compute
from .standards import kva_to_watts


def _prompt_float(prompt: str, *, min_v: float | None = None) -> str:
    while True:
        raw = input(prompt).strip()
        try:
            v = float(raw)
        except ValueError:
            print("Please enter a number.", file=sys.stderr)
            continue
        if min_v is not None and v <= min_v:
            print(f"Must be > {min_v}.", file=sys.stderr)
            continue
        return raw


def load_form(path: str | None, store: FormStore | None, *, interactive: bool) -> Dict[str, Any]:
    form: Dict[str, Any] = dict(store.load()) if store else dict(DEFAULT_FORM)
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Input JSON not found: {path}")
        data = json.loads(p.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Input JSON must be an object: {path}")
        form.update({k: str(v) for k, v in data.items()})

    # Ask for the loads if missing
    if interactive:
        if not str(form.get("solarLoad", "")).strip():
            form["solarLoad"] = _prompt_float("Load while the sun is up (W): ", min_v=0.0)
        if not str(form.get("backupLoad", "")).strip():
            form["backupLoad"] = _prompt_float("Load on battery backup (W): ", min_v=0.0)

    return form


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Off-grid solar sizing: batteries, panels, charge controller and protection."
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Path to a JSON object of form fields (solarLoad, backupLoad, systemVoltage, ...).",
    )
    parser.add_argument(
        "--output",
        "-o",
        default="sizing_result.json",
        help="Path to write the sizing result JSON.",
    )
    parser.add_argument("--html", help="Optional path to write a print-ready HTML report.")
    parser.add_argument("--text", help="Optional path to write a plain-text share report.")
    parser.add_argument(
        "--store",
        help="JSON store file: saved form fields are used as defaults and the form is saved back.",
    )
    parser.add_argument(
        "--derating",
        choices=sorted(DERATING_POLICIES),
        default="none",
        help="Battery derating policy applied to the backup load.",
    )
    parser.add_argument(
        "--inverter-kva",
        type=float,
        help="Inverter size (kVA); fills missing loads at a 0.8 power factor.",
    )
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for missing loads.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...).")

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    store = FormStore(JsonFileBackend(args.store)) if args.store else None
    try:
        form = load_form(
            args.input, store, interactive=args.interactive and not args.inverter_kva
        )
    except (FileNotFoundError, ValueError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    if args.inverter_kva:
        watts = field_text(kva_to_watts(args.inverter_kva))
        for key in ("solarLoad", "backupLoad"):
            if not str(form.get(key, "")).strip():
                form[key] = watts

    config = parse_form(form)
    if store:
        store.save(form_from_configuration(config) if config else form)
    if config is None:
        missing = [k for k, v in form.items() if not str(v).strip()]
        print("Input incomplete: every numeric field must be a positive number.", file=sys.stderr)
        if missing:
            print(f"Missing: {', '.join(missing)}", file=sys.stderr)
        return 1

    config = apply_derating(config, DERATING_POLICIES[args.derating])
    out = compute(config)

    Path(args.output).write_text(out.model_dump_json(indent=2))
    if args.html:
        Path(args.html).write_text(render_html(config, out), encoding="utf-8")
    if args.text:
        Path(args.text).write_text(render_text(config, out), encoding="utf-8")

    # Minimal console summary
    p = out.protection
    print(f"Batteries: {out.battery_count} ({out.bank_voltage:g}V / {out.bank_capacity_ah:g}Ah bank)")
    print(f"Panels: {out.panel_count} ({out.array_wattage:g}W array at {out.array_voltage:.0f}V)")
    print(f"Daily production: {out.daily_energy_wh:.0f} Wh")
    print(f"Charge controller: {out.charge_controller_amps}A MPPT")
    print(
        f"Breakers: PV {p.breakers.panel_to_controller}A, battery {p.breakers.controller_to_battery}A, "
        f"inverter {p.breakers.battery_to_inverter}A, AC {p.breakers.inverter_to_load}A"
    )
    print(f"Surge protection: {p.surge_voltage_v}V, isolator {p.isolator.voltage_v}V/{p.isolator.current_a}A")
    if out.warnings:
        print("\nWarnings:", file=sys.stderr)
        for w in out.warnings:
            print(f"- {w}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
