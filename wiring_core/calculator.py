import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List

from wiring_core.components import CategoryResult, LoadContribution
from wiring_core.config import DEFAULT_POLICY, DiversityPolicy
from wiring_core.errors import InvalidInputError
from wiring_core.models import InstallationContext, InstallationType
from wiring_core.validation import coerce_enum, require_positive

logger = logging.getLogger(__name__)


def normalize_context(context) -> InstallationContext:
    """Validates an installation context and returns it with enum members resolved."""
    if context is None:
        raise InvalidInputError("context is required", "context")
    installation_type = coerce_enum(InstallationType, context.installation_type, "installation_type")
    voltage = require_positive(context.supply_voltage, "supply_voltage")
    if context.phases not in (1, 3):
        raise InvalidInputError("phases must be 1 or 3", "phases")
    return replace(context, installation_type=installation_type, supply_voltage=voltage)


class LoadCategoryCalculator(ABC):
    """
    Template for a load category: validate, per-item loads, category factors, totals.
    Subclasses only supply the rule content.
    """
    category = ""
    regulation = "BS 7671 Appendix A"
    # Rule-based categories (sockets, cooking...) compute item demand directly and
    # report diversity as demand / connected.
    diversity_from_totals = False

    def __init__(self, policy: DiversityPolicy = DEFAULT_POLICY):
        self.policy = policy

    @abstractmethod
    def validate(self, data):
        """Checks the input record and returns it with enum fields resolved. Raises InvalidInputError."""
        pass

    @abstractmethod
    def item_contributions(self, data) -> List[LoadContribution]:
        """Returns per-item connected load and demand before category-level factors."""
        pass

    def simultaneity(self, data, items: List[LoadContribution]) -> float:
        return 1.0

    def diversity(self, data, items: List[LoadContribution]) -> float:
        return 1.0

    def recommendations(self, data, demand: float, current: float) -> List[str]:
        return []

    def calculate(self, data) -> CategoryResult:
        """Performs the full calculation for the category. Pure; raises before any numeric work on bad input."""
        data = self.validate(data)
        items = self.item_contributions(data)
        simultaneity = self.simultaneity(data, items)
        diversity = self.diversity(data, items)

        scale = simultaneity * diversity
        breakdown = [replace(item, demand_load=item.demand_load * scale) for item in items]
        connected = sum(item.connected_load for item in breakdown)
        demand = sum(item.demand_load for item in breakdown)

        if self.diversity_from_totals:
            diversity = demand / connected if connected > 0 else 0.0

        current = demand / data.context.supply_voltage
        logger.debug(
            "%s: connected=%.1f W demand=%.1f W diversity=%.3f simultaneity=%.3f",
            self.category, connected, demand, diversity, simultaneity,
        )
        return CategoryResult(
            category=self.category,
            connected_load=connected,
            demand_load=demand,
            diversity_factor=diversity,
            simultaneity_factor=simultaneity,
            breakdown=breakdown,
            peak_current=current,
            recommendations=self.recommendations(data, demand, current),
            regulation=self.regulation,
        )
