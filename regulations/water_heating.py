"""Water heating load with simultaneous-use and diversity factors (BS 7671 Appendix A)."""
from dataclasses import replace
from typing import List

from wiring_core.calculator import LoadCategoryCalculator, normalize_context
from wiring_core.components import LoadContribution
from wiring_core.config import HIGH_CURRENT_LIMIT_AMPS, SINGLE_CIRCUIT_LIMIT_AMPS
from wiring_core.errors import InvalidInputError
from wiring_core.models import (
    InstallationType, WaterHeater, WaterHeaterType, WaterHeatingInput, WaterHeatingMethod,
    WaterHeatingUsage,
)
from wiring_core.validation import (
    coerce_enum, require_count, require_fraction, require_positive, resolve_override,
)
from regulations.diversity_tables import (
    HEATING_BASE_DIVERSITY, WATER_HEATER_SIMULTANEOUS, WATER_METHOD_FACTORS, WATER_USAGE_FACTORS,
)

ECONOMY_7_DOMESTIC_WATTS = 12000.0

COMMERCIAL_TYPES = frozenset({InstallationType.COMMERCIAL, InstallationType.RETAIL})


class WaterHeatingLoadCalculator(LoadCategoryCalculator):
    category = "Water Heating"
    regulation = "BS 7671 Appendix A - Diversity factors for water heating"

    def validate(self, data: WaterHeatingInput) -> WaterHeatingInput:
        if not data.heaters:
            raise InvalidInputError("At least one water heater must be specified", "heaters")
        require_positive(data.peak_demand_time, "peak_demand_time")
        require_positive(data.recovery_time, "recovery_time")
        heaters = []
        for i, heater in enumerate(data.heaters):
            prefix = f"heaters[{i}]"
            heater_type = coerce_enum(WaterHeaterType, heater.heater_type, f"{prefix}.heater_type")
            require_positive(heater.capacity_litres, f"{prefix}.capacity_litres")
            require_positive(heater.power, f"{prefix}.power")
            require_count(heater.quantity, f"{prefix}.quantity")
            if heater.simultaneous_factor is not None:
                require_fraction(heater.simultaneous_factor, f"{prefix}.simultaneous_factor")
            heaters.append(replace(heater, heater_type=heater_type))
        if data.diversity_factor_override is not None:
            require_fraction(data.diversity_factor_override, "diversity_factor_override")

        return replace(
            data,
            heaters=heaters,
            heating_method=coerce_enum(WaterHeatingMethod, data.heating_method, "heating_method"),
            usage=coerce_enum(WaterHeatingUsage, data.usage, "usage"),
            context=normalize_context(data.context),
        )

    def simultaneous_use_factor(self, heater: WaterHeater, usage: WaterHeatingUsage) -> float:
        factor = WATER_HEATER_SIMULTANEOUS[heater.heater_type] * WATER_USAGE_FACTORS[usage]
        if heater.quantity > 1:
            factor *= 1 - (heater.quantity - 1) * self.policy.water_heater_quantity_step
        return max(factor, self.policy.water_heater_floor)

    def item_contributions(self, data: WaterHeatingInput) -> List[LoadContribution]:
        items = []
        for heater in data.heaters:
            factor = resolve_override(heater.simultaneous_factor,
                                      lambda: self.simultaneous_use_factor(heater, data.usage),
                                      "simultaneous_factor")
            connected = heater.power * heater.quantity
            items.append(LoadContribution(
                name=f"{heater.heater_type.value} x{heater.quantity}",
                connected_load=connected,
                demand_load=connected * factor,
                factor=factor,
                details={
                    "heater_type": heater.heater_type.value,
                    "capacity_litres": heater.capacity_litres,
                    "power": heater.power,
                    "quantity": heater.quantity,
                },
            ))
        return items

    def diversity(self, data: WaterHeatingInput, items: List[LoadContribution]) -> float:
        return resolve_override(data.diversity_factor_override,
                                lambda: self.default_diversity(data), "diversity_factor_override")

    def default_diversity(self, data: WaterHeatingInput) -> float:
        if data.context.installation_type == InstallationType.DOMESTIC:
            # 100% for domestic water heating
            return 1.0
        factor = HEATING_BASE_DIVERSITY[data.context.installation_type]
        factor *= WATER_METHOD_FACTORS[data.heating_method]
        factor *= WATER_USAGE_FACTORS[data.usage]
        return max(factor, self.policy.water_heating_diversity_floor)

    def recommendations(self, data: WaterHeatingInput, demand: float, current: float) -> List[str]:
        installation = data.context.installation_type
        recs = [f"Total water heating demand: {demand / 1000:.1f}kW ({current:.1f}A)"]
        if current > HIGH_CURRENT_LIMIT_AMPS:
            recs.append("High water heating load - consider a three-phase supply or load management")
        if data.heating_method == WaterHeatingMethod.STORAGE and data.usage != WaterHeatingUsage.DOMESTIC_LOW:
            recs.append("Fit a timer to storage heaters to heat during off-peak periods")
        if current > SINGLE_CIRCUIT_LIMIT_AMPS:
            recs.append("Each water heater should be supplied from a dedicated circuit")
        if installation == InstallationType.DOMESTIC and demand > ECONOMY_7_DOMESTIC_WATTS:
            recs.append("Consider an Economy 7 tariff for off-peak water heating")
        if installation in COMMERCIAL_TYPES and data.heating_method == WaterHeatingMethod.INSTANTANEOUS:
            recs.append("Balance instantaneous heaters across phases to limit peak demand")
        recs.append("Fit thermostatic mixing valves to BS 6700 to prevent scalding")
        recs.append("Set storage thermostats to at least 60°C for legionella control")
        return recs
