import io
import logging

import pandas as pd
import streamlit as st

from wiring_core.config import DEFAULT_POWER_FACTOR, DEFAULT_VOLTAGE_DROP_LIMIT, configure_logging
from wiring_core.errors import CalculationError
from wiring_core.models import (
    AirConditioningInput, AirConditioningRoomType, AirConditioningSystem, AirConditioningType,
    BuildingType, CableDeratingInput, CableSizingInput, ClimateControlSystem, CookingAppliance,
    HeatingRoom, InstallationContext, InstallationLoadInput, InstallationMethod, InstallationType,
    LightingControlSystem, LightingInput, LightingRoom, LightingRoomType, LightingType,
    OccupancySchedule, SpaceHeatingInput, SpecialLoad, WaterHeater, WaterHeaterType,
    WaterHeatingInput, WaterHeatingMethod, WaterHeatingUsage,
)
from regulations.aggregator import InstallationLoadAggregator
from regulations.cable_derating import CableDerating
from regulations.cable_sizing import CableSizer

configure_logging(logging.WARNING)

# --- Page Config ---
st.set_page_config(
    page_title="BS 7671 Load & Cable Calculator",
    page_icon="⚡",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header { font-family: 'Inter', sans-serif; color: #1E3A8A; font-weight: 700; }
    .stDataFrame { border-radius: 10px; overflow: hidden; }
</style>
""", unsafe_allow_html=True)


def options(enum_cls):
    return [m.value for m in enum_cls]


# --- Session State Init (editable tables) ---
DEFAULT_TABLES = {
    "lighting_df": pd.DataFrame([
        {"Name": "Living room", "Area": 25.0, "RoomType": "living_room"},
        {"Name": "Kitchen", "Area": 15.0, "RoomType": "kitchen"},
    ]),
    "heating_df": pd.DataFrame([
        {"Name": "Living room", "Area": 25.0, "Volume": 60.0, "Power": 2000.0,
         "Thermostat": True, "Zone": False, "Occupancy": "evening_only"},
    ]),
    "water_df": pd.DataFrame([
        {"Type": "electric_immersion", "Capacity": 150.0, "Power": 3000.0, "Qty": 1},
    ]),
    "ac_df": pd.DataFrame([
        {"Name": "Bedroom unit", "Type": "split_system", "Cooling": 1500.0, "Heating": 0.0,
         "Area": 14.0, "RoomType": "bedroom", "Hours": 8.0},
    ]),
    "cooking_df": pd.DataFrame([{"Name": "Cooker", "Rating": 10000.0, "Qty": 1}]),
    "special_df": pd.DataFrame([{"Name": "EV charger", "Power": 7400.0, "Diversity": 1.0}]),
}
for key, df in DEFAULT_TABLES.items():
    if key not in st.session_state:
        st.session_state[key] = df


def _opt(value):
    """Empty data_editor cells come back as NaN."""
    return None if pd.isna(value) else float(value)


def build_installation_input(tables, ctx, building, climate_control, lighting_type, lighting_control,
                             water_method, water_usage, sockets) -> InstallationLoadInput:
    lighting = LightingInput(
        rooms=[LightingRoom(str(r["Name"]), float(r["Area"]), r["RoomType"])
               for _, r in tables["lighting_df"].dropna(subset=["Name"]).iterrows()],
        lighting_type=lighting_type,
        control_system=lighting_control,
    )
    heating = SpaceHeatingInput(
        rooms=[HeatingRoom(str(r["Name"]), float(r["Area"]), float(r["Volume"]), float(r["Power"]),
                           has_thermostat=bool(r["Thermostat"]), has_zone_control=bool(r["Zone"]),
                           occupancy=r["Occupancy"])
               for _, r in tables["heating_df"].dropna(subset=["Name"]).iterrows()],
        building_type=building,
        control_system=climate_control,
    )
    water = WaterHeatingInput(
        heaters=[WaterHeater(r["Type"], float(r["Capacity"]), float(r["Power"]), int(r["Qty"]))
                 for _, r in tables["water_df"].dropna(subset=["Type"]).iterrows()],
        heating_method=water_method,
        usage=water_usage,
    )
    ac = AirConditioningInput(
        systems=[AirConditioningSystem(str(r["Name"]), r["Type"], float(r["Cooling"]), float(r["Area"]),
                                       r["RoomType"], float(r["Hours"]), heating_capacity=_opt(r["Heating"]))
                 for _, r in tables["ac_df"].dropna(subset=["Name"]).iterrows()],
        building_type=building,
        control_system=climate_control,
    )
    return InstallationLoadInput(
        context=ctx,
        lighting=lighting,
        space_heating=heating,
        water_heating=water,
        air_conditioning=ac,
        number_of_sockets=int(sockets),
        cooking_appliances=[CookingAppliance(str(r["Name"]), float(r["Rating"]), int(r["Qty"]))
                            for _, r in tables["cooking_df"].dropna(subset=["Name"]).iterrows()],
        special_loads=[SpecialLoad(str(r["Name"]), float(r["Power"]), _opt(r["Diversity"]))
                       for _, r in tables["special_df"].dropna(subset=["Name"]).iterrows()],
    )


def breakdown_frame(result) -> pd.DataFrame:
    return pd.DataFrame([
        {"Category": c.category,
         "Connected (kW)": round(c.connected_load / 1000, 2),
         "Demand (kW)": round(c.demand_load / 1000, 2),
         "Diversity": round(c.diversity_factor, 3)}
        for c in result.breakdown
    ])


def to_excel(breakdown_df: pd.DataFrame, result) -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine='openpyxl') as writer:
        breakdown_df.to_excel(writer, index=False, sheet_name='Maximum Demand')
        pd.DataFrame([
            {"Parameter": "Total connected load (W)", "Value": round(result.total_connected_load, 1)},
            {"Parameter": "Total demand load (W)", "Value": round(result.total_demand_load, 1)},
            {"Parameter": "Overall diversity", "Value": round(result.overall_diversity_factor, 3)},
            {"Parameter": "Single-phase current (A)", "Value": round(result.single_phase_current, 1)},
            {"Parameter": "Three-phase current (A)", "Value": round(result.three_phase_current, 1)},
        ]).to_excel(writer, index=False, sheet_name='Summary')
        pd.DataFrame({"Recommendation": result.recommendations}).to_excel(
            writer, index=False, sheet_name='Recommendations')
    return output.getvalue()


# --- Sidebar ---
with st.sidebar:
    st.title("Installation")
    installation_type = st.selectbox("Installation type", options(InstallationType))
    building_type = st.selectbox("Building type", options(BuildingType))
    climate_control = st.selectbox("Heating / cooling controls", options(ClimateControlSystem))
    phases = st.radio("Supply phases", [1, 3], horizontal=True)
    st.markdown("---")
    st.info("Edit any table to recalculate. Select rows and press Delete to remove them.")

st.markdown("<h1 class='main-header'>⚡ BS 7671 Load & Cable Calculator</h1>", unsafe_allow_html=True)
tab_demand, tab_sizing, tab_derating = st.tabs(["Maximum Demand", "Cable Sizing", "Cable Derating"])

# --- Maximum demand ---
with tab_demand:
    tables = {}
    st.subheader("💡 Lighting")
    c1, c2 = st.columns(2)
    lighting_type = c1.selectbox("Lighting type", options(LightingType))
    lighting_control = c2.selectbox("Lighting control", options(LightingControlSystem))
    tables["lighting_df"] = st.data_editor(
        st.session_state.lighting_df, key="lighting_editor", num_rows="dynamic", use_container_width=True,
        column_config={"RoomType": st.column_config.SelectboxColumn(options=options(LightingRoomType))})

    st.subheader("🔥 Space Heating")
    tables["heating_df"] = st.data_editor(
        st.session_state.heating_df, key="heating_editor", num_rows="dynamic", use_container_width=True,
        column_config={"Occupancy": st.column_config.SelectboxColumn(options=options(OccupancySchedule))})

    st.subheader("🚿 Water Heating")
    c1, c2 = st.columns(2)
    water_method = c1.selectbox("Heating method", options(WaterHeatingMethod))
    water_usage = c2.selectbox("Usage pattern", options(WaterHeatingUsage))
    tables["water_df"] = st.data_editor(
        st.session_state.water_df, key="water_editor", num_rows="dynamic", use_container_width=True,
        column_config={"Type": st.column_config.SelectboxColumn(options=options(WaterHeaterType))})

    st.subheader("❄️ Air Conditioning")
    tables["ac_df"] = st.data_editor(
        st.session_state.ac_df, key="ac_editor", num_rows="dynamic", use_container_width=True,
        column_config={
            "Type": st.column_config.SelectboxColumn(options=options(AirConditioningType)),
            "RoomType": st.column_config.SelectboxColumn(options=options(AirConditioningRoomType)),
        })

    st.subheader("🔌 Sockets, Cooking & Special Loads")
    sockets = st.number_input("Number of socket outlets", 0, 500, 15)
    c1, c2 = st.columns(2)
    with c1:
        tables["cooking_df"] = st.data_editor(
            st.session_state.cooking_df, key="cooking_editor", num_rows="dynamic", use_container_width=True)
    with c2:
        tables["special_df"] = st.data_editor(
            st.session_state.special_df, key="special_editor", num_rows="dynamic", use_container_width=True)

    st.markdown("---")
    try:
        ctx = InstallationContext(installation_type, 230.0, phases)
        result = InstallationLoadAggregator().calculate(build_installation_input(
            tables, ctx, building_type, climate_control, lighting_type, lighting_control,
            water_method, water_usage, sockets))
    except (CalculationError, ValueError) as e:  # ValueError: unreadable table cell
        st.error(f"Error: {e}")
    else:
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Connected", f"{result.total_connected_load / 1000:.1f} kW")
        m2.metric("Maximum demand", f"{result.total_demand_load / 1000:.1f} kW")
        m3.metric("Diversity", f"{result.overall_diversity_factor:.2f}")
        m4.metric("Current", f"{result.single_phase_current:.1f} A" if phases == 1
                  else f"{result.three_phase_current:.1f} A/ph")
        df_breakdown = breakdown_frame(result)
        st.dataframe(df_breakdown, use_container_width=True, hide_index=True)
        for rec in result.recommendations:
            st.write(f"- {rec}")
        st.download_button(
            "📥 Download Results (Excel)",
            data=to_excel(df_breakdown, result),
            file_name="maximum_demand.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

# --- Cable sizing ---
with tab_sizing:
    c1, c2, c3, c4 = st.columns(4)
    ib = c1.number_input("Design current Ib (A)", 0.0, 2000.0, 32.0, 1.0)
    length = c2.number_input("Length (m)", 0.0, 2000.0, 20.0, 1.0)
    method = c3.selectbox("Installation method", options(InstallationMethod), index=2)
    sz_phases = c4.radio("Phases", [1, 3], horizontal=True, key="sizing_phases")
    c1, c2, c3, c4, c5 = st.columns(5)
    pf = c1.number_input("Power factor", 0.1, 1.0, DEFAULT_POWER_FACTOR, 0.05)
    cg = c2.number_input("Grouping Cg", 0.1, 1.0, 1.0, 0.01)
    ca = c3.number_input("Ambient Ca", 0.1, 1.0, 1.0, 0.01)
    ci = c4.number_input("Insulation Ci", 0.1, 1.0, 1.0, 0.01)
    limit = c5.number_input("VD limit (%)", 0.5, 10.0, DEFAULT_VOLTAGE_DROP_LIMIT, 0.5)
    try:
        res = CableSizer.calculate(CableSizingInput(ib, length, method, sz_phases, pf, cg, ca, ci, limit))
    except CalculationError as e:
        st.error(f"Error: {e}")
    else:
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Cable", f"{res.recommended_size:g} mm²")
        m2.metric("Iz", f"{res.derated_capacity:.1f} A")
        m3.metric("Voltage drop", f"{res.voltage_drop_percent:.2f} %")
        m4.metric("Protection", res.protection_required.description if res.protection_required else "Custom")
        if res.bounds_error is not None:
            st.warning(str(res.bounds_error))
        for rec in res.recommendations:
            st.write(f"- {rec}")

# --- Cable derating ---
with tab_derating:
    c1, c2, c3 = st.columns(3)
    rating = c1.number_input("Tabulated rating It (A)", 0.0, 2000.0, 37.0, 1.0)
    dr_method = c2.selectbox("Installation method", options(InstallationMethod), index=2, key="derating_method")
    circuits = c3.number_input("Grouped circuits", 1, 40, 1)
    c1, c2, c3 = st.columns(3)
    temp = c1.number_input("Ambient (°C)", -10.0, 69.0, 30.0, 1.0)
    total_len = c2.number_input("Total length (m)", 0.0, 2000.0, 20.0, 1.0)
    insul_len = c3.number_input("Length in insulation (m)", 0.0, 2000.0, 0.0, 0.5)
    buried = st.toggle("Buried direct in ground", False)
    soil = st.number_input("Soil resistivity (K.m/W)", 0.5, 10.0, 2.5, 0.1) if buried else None
    try:
        dr = CableDerating.calculate(CableDeratingInput(
            rating, dr_method, total_len, temp, int(circuits), insul_len, buried, soil))
    except CalculationError as e:
        st.error(f"Error: {e}")
    else:
        st.dataframe(pd.DataFrame([
            {"Factor": "Grouping", "Value": dr.grouping_factor},
            {"Factor": "Ambient temperature", "Value": dr.ambient_temp_factor},
            {"Factor": "Thermal insulation", "Value": dr.thermal_insulation_factor},
            {"Factor": "Buried", "Value": dr.buried_factor},
            {"Factor": "Overall", "Value": round(dr.overall_derating, 4)},
        ]), hide_index=True)
        st.metric("Derated capacity", f"{dr.derated_current:.1f} A",
                  delta=None if dr.is_compliant else "below 80% of rating", delta_color="inverse")
        for rec in dr.recommendations:
            st.write(f"- {rec}")
