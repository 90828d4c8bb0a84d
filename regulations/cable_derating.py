"""Combined derating of an installed cable (BS 7671 Appendix 4 correction factors)."""
import logging
from dataclasses import replace

from wiring_core.components import DeratingResult
from wiring_core.errors import InvalidInputError
from wiring_core.models import CableDeratingInput, InstallationMethod
from wiring_core.validation import (
    coerce_enum, require_count, require_finite, require_non_negative, require_positive,
)
from regulations.bs7671_tables import (
    MAX_AMBIENT_TEMP, get_ambient_temp_factor, get_grouping_factor, get_soil_factor,
    get_thermal_insulation_factor,
)

logger = logging.getLogger(__name__)

COMPLIANCE_RATIO = 0.8


class CableDerating:
    @staticmethod
    def validate(data: CableDeratingInput) -> CableDeratingInput:
        require_positive(data.original_rating, "original_rating")
        require_positive(data.total_length, "total_length")
        method = coerce_enum(InstallationMethod, data.installation_method, "installation_method")
        temp = require_finite(data.ambient_temperature, "ambient_temperature")
        if temp >= MAX_AMBIENT_TEMP:
            raise InvalidInputError("ambient_temperature must be below 70°C for 70°C cable",
                                    "ambient_temperature")
        require_count(data.number_of_circuits, "number_of_circuits")
        enclosed = require_non_negative(data.thermal_insulation_length, "thermal_insulation_length")
        if enclosed > data.total_length:
            raise InvalidInputError("thermal_insulation_length cannot exceed total_length",
                                    "thermal_insulation_length")
        if data.is_buried:
            require_positive(data.soil_thermal_resistivity, "soil_thermal_resistivity")
        return replace(data, installation_method=method)

    @staticmethod
    def calculate(data: CableDeratingInput) -> DeratingResult:
        data = CableDerating.validate(data)

        grouping = get_grouping_factor(data.installation_method, data.number_of_circuits)
        ambient = get_ambient_temp_factor(data.ambient_temperature)
        insulation = get_thermal_insulation_factor(data.thermal_insulation_length, data.total_length)
        buried = get_soil_factor(data.soil_thermal_resistivity) if data.is_buried else 1.0

        overall = grouping * ambient * insulation * buried
        derated = data.original_rating * overall
        compliant = derated >= data.original_rating * COMPLIANCE_RATIO
        logger.debug("Derating: Cg=%.2f Ca=%.2f Ci=%.2f Cs=%.2f -> %.3f (%.1f A)",
                     grouping, ambient, insulation, buried, overall, derated)

        recs = []
        if not compliant:
            recs.append("Derated capacity is below 80% of the rating - consider a larger cable")
        if grouping < 0.8:
            recs.append("Heavy grouping - separate circuits or use a larger cable")
        if ambient < 0.9:
            recs.append("High ambient temperature - improve ventilation or reroute the cable")
        if insulation < 1.0:
            recs.append("Avoid running the cable through thermal insulation where possible")
        if data.is_buried and buried < 1.0:
            recs.append("Soil resistivity above 2.5 K.m/W - consider selected backfill")
        if not recs:
            recs.append("Derating is within acceptable limits")

        return DeratingResult(
            original_rating=data.original_rating,
            grouping_factor=grouping,
            ambient_temp_factor=ambient,
            thermal_insulation_factor=insulation,
            buried_factor=buried,
            overall_derating=overall,
            derated_current=derated,
            is_compliant=compliant,
            recommendations=recs,
        )
