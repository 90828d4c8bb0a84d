"""Maximum demand for a whole installation: every category combined in a fixed order."""
import logging
import math
from dataclasses import replace
from typing import List

from wiring_core.calculator import normalize_context
from wiring_core.components import AggregateResult, CategoryResult, CategoryTotal
from wiring_core.config import (
    CATEGORY_EFFICIENCY_WATTS, DEFAULT_POLICY, DNO_APPROVAL_WATTS, ENERGY_MONITORING_WATTS,
    LOAD_MANAGEMENT_WATTS, NOMINAL_VOLTAGE_SINGLE_PHASE, SUPPLY_100A_AMPS, SUPPLY_80A_AMPS,
    THREE_PHASE_SUPPLY_AMPS, DiversityPolicy,
)
from wiring_core.errors import InvalidCountError, MissingCategoryError
from wiring_core.models import (
    CookingInput, InstallationLoadInput, InstallationType, SocketOutletInput, SpecialLoadInput,
)
from regulations.air_conditioning import AirConditioningLoadCalculator
from regulations.fixed_loads import CookingCalculator, SocketOutletCalculator, SpecialLoadCalculator
from regulations.lighting import LightingLoadCalculator
from regulations.space_heating import SpaceHeatingLoadCalculator
from regulations.water_heating import WaterHeatingLoadCalculator

logger = logging.getLogger(__name__)

REQUIRED_CATEGORIES = ("lighting", "space_heating", "water_heating", "air_conditioning")


class InstallationLoadAggregator:
    def __init__(self, policy: DiversityPolicy = DEFAULT_POLICY):
        self.lighting = LightingLoadCalculator(policy)
        self.space_heating = SpaceHeatingLoadCalculator(policy)
        self.water_heating = WaterHeatingLoadCalculator(policy)
        self.air_conditioning = AirConditioningLoadCalculator(policy)
        self.sockets = SocketOutletCalculator(policy)
        self.cooking = CookingCalculator(policy)
        self.special = SpecialLoadCalculator(policy)

    def validate(self, data: InstallationLoadInput) -> InstallationLoadInput:
        if data.context is None or data.context.installation_type is None:
            raise MissingCategoryError("installation_type is required", "installation_type")
        for name in REQUIRED_CATEGORIES:
            if getattr(data, name) is None:
                raise MissingCategoryError(f"{name} input is required", name)
        if data.number_of_sockets is None:
            raise MissingCategoryError("number_of_sockets is required", "number_of_sockets")
        for name in ("cooking_appliances", "special_loads"):
            if getattr(data, name) is None:
                raise MissingCategoryError(f"{name} list is required (may be empty)", name)
        if isinstance(data.number_of_sockets, bool) or not isinstance(data.number_of_sockets, int):
            raise InvalidCountError("number_of_sockets must be a whole number", "number_of_sockets")
        if data.number_of_sockets < 0:
            raise InvalidCountError("number_of_sockets cannot be negative", "number_of_sockets")
        return replace(data, context=normalize_context(data.context))

    def calculate(self, data: InstallationLoadInput) -> AggregateResult:
        data = self.validate(data)
        context = data.context

        # Every category is assessed against the installation's own context
        results: List[CategoryResult] = [
            self.lighting.calculate(replace(data.lighting, context=context)),
            self.space_heating.calculate(replace(data.space_heating, context=context)),
            self.water_heating.calculate(replace(data.water_heating, context=context)),
            self.air_conditioning.calculate(replace(data.air_conditioning, context=context)),
            self.sockets.calculate(SocketOutletInput(data.number_of_sockets, context)),
            self.cooking.calculate(CookingInput(list(data.cooking_appliances), context)),
            self.special.calculate(SpecialLoadInput(list(data.special_loads), context)),
        ]

        connected = sum(r.connected_load for r in results)
        demand = sum(r.demand_load for r in results)
        overall = demand / connected if connected > 0 else 0.0
        single_phase = demand / NOMINAL_VOLTAGE_SINGLE_PHASE
        three_phase = demand / (NOMINAL_VOLTAGE_SINGLE_PHASE * math.sqrt(3))

        logger.info(
            "Installation %s: connected=%.1f kW demand=%.1f kW diversity=%.3f (%.1f A single phase)",
            context.installation_type.value, connected / 1000, demand / 1000, overall, single_phase,
        )

        return AggregateResult(
            total_connected_load=connected,
            total_demand_load=demand,
            overall_diversity_factor=overall,
            breakdown=[
                CategoryTotal(r.category, r.connected_load, r.demand_load, r.diversity_factor)
                for r in results
            ],
            single_phase_current=single_phase,
            three_phase_current=three_phase,
            recommendations=self.recommendations(context.installation_type, results, demand,
                                                 single_phase, three_phase),
            category_results={r.category: r for r in results},
        )

    def recommendations(self, installation: InstallationType, results: List[CategoryResult],
                        demand: float, single_phase: float, three_phase: float) -> List[str]:
        recs = [
            f"Total installation demand: {demand / 1000:.1f}kW",
            f"Single-phase supply current: {single_phase:.1f}A",
            f"Three-phase supply current: {three_phase:.1f}A per phase",
        ]
        if single_phase > THREE_PHASE_SUPPLY_AMPS:
            recs.append("Demand exceeds 100A single phase - a three-phase supply is recommended")
        elif single_phase > SUPPLY_100A_AMPS:
            recs.append("A 100A single-phase supply and main switch are required")
        elif single_phase > SUPPLY_80A_AMPS:
            recs.append("An 80A single-phase supply may be adequate; confirm with the network operator")

        if installation == InstallationType.DOMESTIC and demand > DNO_APPROVAL_WATTS:
            recs.append("Demand exceeds 23kW - network operator (DNO) approval may be required")
        if demand > LOAD_MANAGEMENT_WATTS:
            recs.append("Consider a load management system to limit maximum demand")
        for result in results:
            if result.demand_load > CATEGORY_EFFICIENCY_WATTS:
                recs.append(f"{result.category} demand is high - review the efficiency of these systems")
        recs.append("Distribute circuits evenly and keep each final circuit within its design current")
        recs.append("Consider sub-distribution boards for large or remote load groups")
        if demand > ENERGY_MONITORING_WATTS:
            recs.append("Install energy monitoring to track demand against supply capacity")
        return recs
