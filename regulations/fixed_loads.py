"""
Categories assessed by fixed allowances rather than factor tables:
socket outlets, cooking appliances and special (user-declared) loads.
Diversity is reported as demand / connected.
"""
from dataclasses import replace
from typing import List

from wiring_core.calculator import LoadCategoryCalculator, normalize_context
from wiring_core.components import LoadContribution
from wiring_core.errors import InvalidCountError
from wiring_core.models import CookingInput, InstallationType, SocketOutletInput, SpecialLoadInput
from wiring_core.validation import (
    require_count, require_fraction, require_item_list, require_name, require_positive, resolve_override,
)
from regulations.diversity_tables import SOCKET_OUTLET_LOAD, get_cooking_demand, get_socket_demand


class SocketOutletCalculator(LoadCategoryCalculator):
    category = "Socket Outlets"
    regulation = "BS 7671 Appendix A / IET On-Site Guide - Socket-outlet diversity"
    diversity_from_totals = True

    def validate(self, data: SocketOutletInput) -> SocketOutletInput:
        count = data.number_of_sockets
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidCountError("number_of_sockets must be a whole number", "number_of_sockets")
        if count < 0:
            raise InvalidCountError("number_of_sockets cannot be negative", "number_of_sockets")
        return replace(data, context=normalize_context(data.context))

    def item_contributions(self, data: SocketOutletInput) -> List[LoadContribution]:
        count = data.number_of_sockets
        domestic = data.context.installation_type == InstallationType.DOMESTIC
        return [LoadContribution(
            name="Socket outlets",
            connected_load=count * SOCKET_OUTLET_LOAD,
            demand_load=get_socket_demand(count, domestic),
            details={"number_of_sockets": count},
        )]

    def recommendations(self, data: SocketOutletInput, demand: float, current: float) -> List[str]:
        recs = [f"Socket outlet demand: {demand / 1000:.2f}kW for {data.number_of_sockets} outlets"]
        if data.number_of_sockets:
            recs.append("Ring final circuits (32A) or radials (20A/32A) per Appendix 15")
            recs.append("30mA RCD protection is required for socket outlets up to 32A (Regulation 411.3.3)")
        return recs


class CookingCalculator(LoadCategoryCalculator):
    """
    Appliances without their own diversity are pooled: first 10kW at 100%, the next 50kW
    at 50%, the remainder at 25%. The pooled demand is shared pro rata to rating.
    """
    category = "Cooking"
    regulation = "BS 7671 Appendix A - Cooking appliance diversity"
    diversity_from_totals = True

    def validate(self, data: CookingInput) -> CookingInput:
        require_item_list(data.appliances, "appliances")
        for i, item in enumerate(data.appliances):
            prefix = f"appliances[{i}]"
            require_name(item.name, f"{prefix}.name")
            require_positive(item.rating, f"{prefix}.rating")
            require_count(item.quantity, f"{prefix}.quantity")
            if item.diversity_factor is not None:
                require_fraction(item.diversity_factor, f"{prefix}.diversity_factor")
        return replace(data, appliances=list(data.appliances), context=normalize_context(data.context))

    def item_contributions(self, data: CookingInput) -> List[LoadContribution]:
        pooled = sum(a.rating * a.quantity for a in data.appliances if a.diversity_factor is None)
        pooled_share = get_cooking_demand(pooled) / pooled if pooled > 0 else 0.0
        items = []
        for item in data.appliances:
            connected = item.rating * item.quantity
            factor = resolve_override(item.diversity_factor, lambda: pooled_share, "diversity_factor")
            items.append(LoadContribution(
                name=item.name,
                connected_load=connected,
                demand_load=connected * factor,
                factor=factor,
                details={"rating": item.rating, "quantity": item.quantity},
            ))
        return items

    def recommendations(self, data: CookingInput, demand: float, current: float) -> List[str]:
        if not data.appliances:
            return []
        return [
            f"Cooking demand: {demand / 1000:.1f}kW ({current:.1f}A)",
            "Provide a cooker control unit within 2m of each cooking appliance",
        ]


class SpecialLoadCalculator(LoadCategoryCalculator):
    category = "Special Loads"
    regulation = "BS 7671 Appendix A - Loads assessed individually"
    diversity_from_totals = True

    def validate(self, data: SpecialLoadInput) -> SpecialLoadInput:
        require_item_list(data.loads, "loads")
        for i, load in enumerate(data.loads):
            prefix = f"loads[{i}]"
            require_name(load.name, f"{prefix}.name")
            require_positive(load.power, f"{prefix}.power")
            if load.diversity_factor is not None:
                require_fraction(load.diversity_factor, f"{prefix}.diversity_factor")
        return replace(data, loads=list(data.loads), context=normalize_context(data.context))

    def item_contributions(self, data: SpecialLoadInput) -> List[LoadContribution]:
        items = []
        for load in data.loads:
            factor = resolve_override(load.diversity_factor, lambda: 1.0, "diversity_factor")
            items.append(LoadContribution(
                name=load.name,
                connected_load=load.power,
                demand_load=load.power * factor,
                factor=factor,
            ))
        return items
