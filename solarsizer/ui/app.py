"""
Off-Grid Solar Sizer - Streamlit UI
===================================

Professional calculator form for off-grid solar systems.

Sections:
1. Loads (direct entry or appliance list)
2. Inverter & battery bank
3. Solar array
4. Results, protection table, energy budget and reports

Usage:
    streamlit run solarsizer/ui/app.py
"""

from pathlib import Path
from typing import Dict, Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from solarsizer.reports import render_html, render_text
from solarsizer.reports import formatting as fmt
from solarsizer.sizing import SizingResult, compute
from solarsizer.sizing.forms import (
    DEFAULT_FORM,
    DERATING_POLICIES,
    Appliance,
    apply_derating,
    field_text,
    parse_form,
    total_load,
)
from solarsizer.sizing.standards import BATTERY_VOLTAGES, SYSTEM_VOLTAGES, Topology, describe_topology
from solarsizer.storage import FormStore, JsonFileBackend

STORE_PATH = Path.home() / ".solarsizer" / "form.json"
TOPOLOGIES = [t.value for t in Topology]


st.set_page_config(
    page_title="Off-Grid Solar Sizer",
    page_icon="☀️",
    layout="wide",
)


def get_store() -> FormStore:
    return FormStore(JsonFileBackend(STORE_PATH))


def get_form() -> Dict[str, str]:
    """Raw form fields, restored from the store on first run."""
    if "form" not in st.session_state:
        st.session_state["form"] = get_store().load()
    return st.session_state["form"]


def reset_form():
    get_store().clear()
    st.session_state["form"] = dict(DEFAULT_FORM)
    st.session_state.pop("show_results", None)
    for key in [k for k in st.session_state if str(k).startswith("in_")]:
        del st.session_state[key]


def _select(form: Dict[str, str], key: str, label: str, options) -> None:
    options = [str(o) for o in options]
    current = form.get(key, options[0])
    index = options.index(current) if current in options else 0
    form[key] = st.selectbox(label, options, index=index, key=f"in_{key}")


def _text(form: Dict[str, str], key: str, label: str, placeholder: str = "") -> None:
    form[key] = st.text_input(label, value=form.get(key, ""), placeholder=placeholder, key=f"in_{key}")


def section_loads(form: Dict[str, str]):
    st.subheader("🔌 Loads")
    mode = st.radio("Load entry", ["Direct", "Appliance list"], horizontal=True)
    if mode == "Direct":
        col1, col2 = st.columns(2)
        with col1:
            _text(form, "solarLoad", "Load while generating (W)", "e.g., 2000")
        with col2:
            _text(form, "backupLoad", "Load on battery backup (W)", "e.g., 1500")
        return

    table = st.data_editor(
        pd.DataFrame({"name": ["Lights"], "wattage": [100.0], "quantity": [1]}),
        num_rows="dynamic",
        use_container_width=True,
    )
    appliances = [
        Appliance(name=str(row["name"]), wattage=float(row["wattage"]), quantity=int(row["quantity"]))
        for _, row in table.dropna().iterrows()
        if str(row["name"]).strip() and float(row["wattage"]) > 0 and int(row["quantity"]) >= 0
    ]
    load = total_load(appliances)
    st.metric("Appliance load", fmt.watts(load))
    form["solarLoad"] = field_text(load) if load > 0 else ""
    form["backupLoad"] = form["solarLoad"]


def section_battery(form: Dict[str, str]):
    st.subheader("🔋 Inverter & Battery Bank")
    col1, col2 = st.columns(2)
    with col1:
        _select(form, "systemVoltage", "System voltage (V)", SYSTEM_VOLTAGES)
        _text(form, "backupHours", "Desired backup hours", "e.g., 4")
    with col2:
        _select(form, "batteryVoltage", "Battery voltage (V)", BATTERY_VOLTAGES)
        _text(form, "batteryCapacity", "Battery capacity (Ah)", "e.g., 200")
    _select(form, "batteryTopology", "Battery connection", TOPOLOGIES)
    st.caption(describe_topology(Topology(form["batteryTopology"]), "battery"))


def section_solar(form: Dict[str, str]):
    st.subheader("☀️ Solar Array")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        _text(form, "solarHours", "Average solar hours/day", "e.g., 5")
    with col2:
        _text(form, "panelWattage", "Panel wattage (W)", "e.g., 450")
    with col3:
        _text(form, "panelVmp", "Panel Vmp (V)", "e.g., 40")
    with col4:
        _select(form, "panelTopology", "Panel connection", TOPOLOGIES)
    st.caption(describe_topology(Topology(form["panelTopology"]), "panel"))


def energy_budget_chart(result: SizingResult) -> go.Figure:
    fig = go.Figure(
        go.Bar(
            x=["Daily demand (incl. overhead)", "Daily production", "Battery bank energy"],
            y=[
                result.array.daily_demand_wh,
                result.daily_energy_wh,
                result.bank_capacity_ah * result.bank_voltage,
            ],
            marker_color=["#f59e0b", "#10b981", "#3b82f6"],
        )
    )
    fig.update_layout(title="Energy Budget", yaxis_title="Wh", height=350)
    return fig


def section_results(result: SizingResult):
    st.header("📊 Calculation Results")
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Minimum Batteries", result.battery_count)
        st.caption(f"{fmt.volts(result.bank_voltage)} / {fmt.amp_hours(result.bank_capacity_ah)} bank")
    with col2:
        st.metric("Solar Panels", result.panel_count)
        st.caption(f"{fmt.watts(result.array_wattage)} array at {fmt.volts(result.array_voltage)}")
    with col3:
        st.metric("Daily Production", fmt.watt_hours(result.daily_energy_wh))
    with col4:
        st.metric("Charge Controller", fmt.amps(result.charge_controller_amps))
        st.caption("MPPT recommended")

    for w in result.warnings:
        st.warning(w)

    st.divider()
    col1, col2 = st.columns(2)
    with col1:
        st.subheader("🛡️ Protection")
        prot_df = pd.DataFrame(fmt.protection_rows(result), columns=["Segment", "Breaker", "Cable"])
        st.dataframe(prot_df, hide_index=True, use_container_width=True)
        p = result.protection
        st.metric("Surge Protection", f"{fmt.volts(p.surge_voltage_v)} DC")
        st.metric("DC Isolator", f"{fmt.volts(p.isolator.voltage_v)} / {fmt.amps(p.isolator.current_a)}")
        st.metric("Earth Conductor", fmt.mm2(p.earth_conductor_mm2))
    with col2:
        st.plotly_chart(energy_budget_chart(result), use_container_width=True)

    st.divider()
    config = result.inputs
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "⬇️ Download report (HTML)",
            render_html(config, result),
            file_name="solar-sizing-report.html",
            mime="text/html",
        )
    with col2:
        st.download_button(
            "⬇️ Download summary (text)",
            render_text(config, result),
            file_name="solar-sizing-summary.txt",
            mime="text/plain",
        )

    with st.expander("Important notes"):
        for note in fmt.NOTES:
            st.markdown(f"- {note}")


def calculate(form: Dict[str, str], derating: str) -> Optional[SizingResult]:
    config = parse_form(form)
    if config is None:
        return None
    return compute(apply_derating(config, DERATING_POLICIES[derating]))


def main():
    st.title("☀️ Professional System Calculator")
    st.markdown(
        "Configure your off-grid solar system: batteries, panels, charge controller and protection."
    )

    form = get_form()
    section_loads(form)
    st.divider()
    section_battery(form)
    st.divider()
    section_solar(form)

    derating = st.sidebar.selectbox(
        "Battery derating",
        list(DERATING_POLICIES),
        help="Gross up the backup load for depth of discharge and inverter efficiency.",
    )
    get_store().save(form)

    result = calculate(form, derating)

    col1, col2 = st.columns([1, 5])
    with col1:
        if st.button("🧮 Calculate System", disabled=result is None, type="primary"):
            st.session_state["show_results"] = True
    with col2:
        st.button("↺ Reset", on_click=reset_form)

    if result is None:
        st.info("Enter positive values for every field to calculate.")
    elif st.session_state.get("show_results"):
        st.divider()
        section_results(result)


if __name__ == "__main__":
    main()
