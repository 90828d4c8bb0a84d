import datetime
import logging
import sys
from typing import List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from wiring_core.components import CableSizingResult, DeratingResult
from wiring_core.config import DEFAULT_POWER_FACTOR, DEFAULT_VOLTAGE_DROP_LIMIT, configure_logging
from wiring_core.converters import convert_length_unit, convert_power_unit, current_from_power, parse_quantity
from wiring_core.errors import CalculationError
from wiring_core.models import CableDeratingInput, CableSizingInput, InstallationMethod
from regulations.bs7671_tables import CABLE_SIZES, CURRENT_CARRYING_CAPACITY
from regulations.cable_derating import CableDerating
from regulations.cable_sizing import CableSizer

SizingRow = Tuple[str, CableSizingInput, CableSizingResult]

HEADER_FILL = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
HEADER_FONT = Font(bold=True)


def ask(prompt: str, default: str = "") -> str:
    value = input(f"{prompt} [{default}]: " if default else f"{prompt}: ").strip()
    return value or default


def choose_method() -> InstallationMethod:
    print("Installation methods: A (conduit in insulated wall), B (conduit on wall), C (clipped direct),")
    print("                      D (duct in ground), E (multicore on tray), F (single-core in free air)")
    return InstallationMethod(ask("Installation method", "C").upper())


def get_derating_input(method: InstallationMethod, length_m: float) -> CableDeratingInput:
    print("\n--- Installation conditions ---")
    temp = float(ask("Ambient temperature (°C)", "30"))
    circuits = int(ask("Circuits grouped together", "1"))
    enclosed = convert_length_unit(*parse_quantity(ask("Length in thermal insulation", "0 m"), "m"))
    buried = ask("Buried direct in ground? (y/n)", "n").lower() == "y"
    resistivity = float(ask("Soil thermal resistivity (K.m/W)", "2.5")) if buried else None
    return CableDeratingInput(
        original_rating=1.0,  # placeholder; only the factors are used for sizing
        installation_method=method,
        total_length=length_m,
        ambient_temperature=temp,
        number_of_circuits=circuits,
        thermal_insulation_length=enclosed,
        is_buried=buried,
        soil_thermal_resistivity=resistivity,
    )


def get_circuits_input() -> List[Tuple[str, CableSizingInput, DeratingResult]]:
    circuits = []
    print("\n--- Circuits ---")
    while True:
        print(f"\n[Circuit #{len(circuits) + 1}]")
        name = input("Circuit name (blank to finish): ").strip()
        if not name:
            break
        try:
            phases = int(ask("Phases (1 or 3)", "1"))
            voltage = 400.0 if phases == 3 else 230.0
            pf = float(ask("Power factor", str(DEFAULT_POWER_FACTOR)))
            val, unit = parse_quantity(ask("Load (e.g. 7.2 kW, 10 HP, 32 A)"), "W")
            watts, amps = convert_power_unit(val, unit, voltage, phases, pf)
            design_current = amps if amps is not None else current_from_power(watts, voltage, phases, pf)

            length_m = convert_length_unit(*parse_quantity(ask("Circuit length (e.g. 25 m, 80 ft)"), "m"))
            method = choose_method()
            limit = float(ask("Voltage drop limit (%)", str(DEFAULT_VOLTAGE_DROP_LIMIT)))

            factors = CableDerating.calculate(get_derating_input(method, length_m))
            sizing = CableSizingInput(
                design_current=design_current,
                length=length_m,
                installation_method=method,
                phases=phases,
                power_factor=pf,
                grouping_factor=factors.grouping_factor,
                ambient_temp_factor=min(factors.ambient_temp_factor, 1.0),
                thermal_insulation_factor=factors.thermal_insulation_factor * min(factors.buried_factor, 1.0),
                voltage_drop_limit=limit,
            )
            circuits.append((name, sizing, factors))
        except (ValueError, CalculationError) as e:
            print(f"Input error: {e}. Try again.")

        if ask("Add another circuit? (y/n)", "n").lower() != "y":
            break
    return circuits


def export_to_excel(rows: List[SizingRow], filename: Optional[str] = None) -> str:
    wb = Workbook()

    ws1 = wb.active
    ws1.title = "Cable Schedule"
    ws1.append(["Circuit", "Ib (A)", "Length (m)", "Method", "Phases", "Size (mm²)",
                "It (A)", "Iz (A)", "VD (%)", "Thermal", "Voltage Drop", "Protection", "Notes"])
    for cell in ws1[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL

    for name, data, res in rows:
        ws1.append([
            name,
            round(data.design_current, 2),
            round(data.length, 1),
            data.installation_method.value,
            data.phases,
            res.recommended_size,
            res.current_carrying_capacity,
            round(res.derated_capacity, 1),
            round(res.voltage_drop_percent, 2),
            "PASS" if res.thermal_check else "FAIL",
            "PASS" if res.voltage_drop_check else "FAIL",
            res.protection_required.description if res.protection_required else "Custom",
            "; ".join(res.recommendations[2:]),
        ])
    for col in ws1.columns:
        ws1.column_dimensions[col[0].column_letter].width = 15

    ws2 = wb.create_sheet("Ref Table 4D2A")
    ws2.append(["Size (mm²)"] + [f"Method {m.value}" for m in InstallationMethod])
    for cell in ws2[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for i, size in enumerate(CABLE_SIZES):
        ws2.append([size] + [CURRENT_CARRYING_CAPACITY[m][i] for m in InstallationMethod])

    if filename is None:
        filename = f"Cable_Schedule_{datetime.datetime.now().strftime('%Y%m%d_%H%M%S')}.xlsx"
    wb.save(filename)
    return filename


def main():
    configure_logging(logging.WARNING)
    print("==========================================================")
    print(" BS 7671 CABLE SIZING & DERATING")
    print("==========================================================")

    circuits = get_circuits_input()
    if not circuits:
        print("No circuits entered.")
        sys.exit()

    print("\nSizing circuits...")
    print("-" * 110)
    print(f"{'Circuit':<15} | {'Ib (A)':<7} | {'Derating':<8} | {'Size':<6} | {'Iz (A)':<7} | {'% VD':<6} | {'Protection'}")
    print("-" * 110)

    rows = []
    for name, data, factors in circuits:
        res = CableSizer.calculate(data)
        rows.append((name, data, res))
        warn = " (!)" if not (res.thermal_check and res.voltage_drop_check) else ""
        protection = res.protection_required.description if res.protection_required else "Custom protection required"
        print(f"{name:<15} | {data.design_current:<7.1f} | {factors.overall_derating:<8.3f} | "
              f"{res.recommended_size:<6g} | {res.derated_capacity:<7.1f} | {res.voltage_drop_percent:<6.2f}{warn} | {protection}")
    print("-" * 110)

    if ask("\nExport schedule to Excel? (y/n)", "n").lower() == "y":
        print(f"\n[INFO] Excel written: {export_to_excel(rows)}")


if __name__ == "__main__":
    main()
