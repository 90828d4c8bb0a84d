from dataclasses import dataclass, field
from typing import Dict, List, Optional

from wiring_core.errors import ComputationBoundsExceededError


@dataclass(frozen=True)
class LoadContribution:
    """One row of a category breakdown (a room, heater, appliance...)."""
    name: str
    connected_load: float     # W
    demand_load: float        # W, after every factor of the category
    factor: float = 1.0       # per-item factor applied before category diversity
    details: Dict[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class CategoryResult:
    category: str
    connected_load: float
    demand_load: float
    diversity_factor: float
    breakdown: List[LoadContribution]
    simultaneity_factor: float = 1.0
    peak_current: float = 0.0
    recommendations: List[str] = field(default_factory=list)
    regulation: str = ""


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    connected_load: float
    demand_load: float
    diversity_factor: float


@dataclass(frozen=True)
class AggregateResult:
    total_connected_load: float
    total_demand_load: float
    overall_diversity_factor: float
    breakdown: List[CategoryTotal]
    single_phase_current: float
    three_phase_current: float
    recommendations: List[str] = field(default_factory=list)
    category_results: Dict[str, CategoryResult] = field(default_factory=dict)


@dataclass(frozen=True)
class CircuitBreaker:
    rated_current: float
    poles: int
    breaking_capacity_ka: float = 6.0
    model: str = "MCB or RCBO"

    @property
    def description(self) -> str:
        return f"{self.rated_current:g}A {self.model}"


@dataclass(frozen=True)
class CableSizingResult:
    recommended_size: float               # mm²
    current_carrying_capacity: float      # tabulated It (A)
    derated_capacity: float               # It x correction factors (A)
    effective_current: float              # Ib / correction factors (A)
    voltage_drop_percent: float
    voltage_drop_volts: float
    voltage_drop_check: bool
    thermal_check: bool
    protection_required: Optional[CircuitBreaker]
    bounds_error: Optional[ComputationBoundsExceededError] = None
    recommendations: List[str] = field(default_factory=list)

    @property
    def is_compliant(self) -> bool:
        return self.voltage_drop_check and self.thermal_check and self.protection_required is not None


@dataclass(frozen=True)
class DeratingResult:
    original_rating: float
    grouping_factor: float
    ambient_temp_factor: float
    thermal_insulation_factor: float
    buried_factor: float
    overall_derating: float
    derated_current: float
    is_compliant: bool
    recommendations: List[str] = field(default_factory=list)
