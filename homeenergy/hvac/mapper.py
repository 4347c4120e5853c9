"""
Equipment energy mapping: thermal load (Btu/yr) to fuel quantities.

Each equipment variant converts the load it serves into the carrier it
burns or draws. Efficiencies are clamped to physically plausible bands
before use, so an out-of-range rating never produces negative or
runaway consumption.

Efficiency bands:
    Combustion AFUE         0.50 - 0.99
    Air-source / minisplit  COP 0.5 - 6
    Ground-coupled          COP 0.5 - 8
    Wood stove              0.20 - 0.90
    Pellet stove            0.20 - 0.95
    Cooling SEER            8 - 40
    Water heater UEF        0.30 - 1.20
    Heat pump water heater  COP 1 - 5
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from ..baseline.fallbacks import DHW_EFFICIENCY_DEFAULTS, HEATING_EFFICIENCY_DEFAULTS
from ..core.energy_breakdown import EnergyCarrier, FuelBreakdown
from ..core.equipment import (
    AirConditioner,
    CombustionHeater,
    ConventionalWaterHeater,
    HeatingKind,
    HeatPumpHeater,
    HeatPumpWaterHeater,
    ResistanceHeater,
    SolidFuelHeater,
)
from ..core.models import EffectiveRecord
from ..core.units import (
    BTU_PER_CORD_WOOD,
    BTU_PER_GAL_OIL,
    BTU_PER_GAL_PROPANE,
    BTU_PER_KWH,
    BTU_PER_THERM,
    BTU_PER_TON_PELLETS,
    WATER_LB_PER_GAL,
    WH_PER_KWH,
    clamp,
    first_valid,
    to_number,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EfficiencyLimits:
    """Plausible band for an efficiency rating."""
    low: float
    high: float

    def apply(self, value: float) -> float:
        return clamp(value, self.low, self.high)


AFUE_LIMITS = EfficiencyLimits(0.5, 0.99)
AIR_SOURCE_COP_LIMITS = EfficiencyLimits(0.5, 6.0)
GROUND_SOURCE_COP_LIMITS = EfficiencyLimits(0.5, 8.0)
SEER_LIMITS = EfficiencyLimits(8.0, 40.0)
UEF_LIMITS = EfficiencyLimits(0.3, 1.2)
HPWH_COP_LIMITS = EfficiencyLimits(1.0, 5.0)

SOLID_FUEL_LIMITS: Mapping[HeatingKind, EfficiencyLimits] = MappingProxyType({
    HeatingKind.WOOD_STOVE: EfficiencyLimits(0.2, 0.9),
    HeatingKind.PELLET_STOVE: EfficiencyLimits(0.2, 0.95),
})

# Btu per unit of each carrier
HEAT_CONTENT: Mapping[EnergyCarrier, float] = MappingProxyType({
    EnergyCarrier.ELECTRICITY: BTU_PER_KWH,
    EnergyCarrier.NATURAL_GAS: BTU_PER_THERM,
    EnergyCarrier.PROPANE: BTU_PER_GAL_PROPANE,
    EnergyCarrier.OIL: BTU_PER_GAL_OIL,
    EnergyCarrier.WOOD: BTU_PER_CORD_WOOD,
    EnergyCarrier.PELLETS: BTU_PER_TON_PELLETS,
})

FALLBACK_SEER = 14.0

# DHW draw floors
MIN_DHW_DELTA_T_F = 10.0


def _usable_load(load: float) -> float:
    """Loads that are non-finite or non-positive map to no fuel."""
    load = to_number(load, 0.0)
    return load if load > 0 else 0.0


def _rating(value, kind) -> float:
    return to_number(value, HEATING_EFFICIENCY_DEFAULTS[kind])


def heating_fuel(system, load_btu: float) -> FuelBreakdown:
    """
    Fuel needed by a heating variant to deliver load_btu.

    Args:
        system: Any HeatingSystem variant
        load_btu: Annual heating load (Btu/yr)

    Returns:
        FuelBreakdown on the equipment's carrier (zero for unrecognized kinds)
    """
    load = _usable_load(load_btu)
    if load == 0:
        return FuelBreakdown.zero()

    if isinstance(system, CombustionHeater):
        afue = AFUE_LIMITS.apply(_rating(system.afue, system.kind))
        return FuelBreakdown.of(system.carrier, load / (afue * HEAT_CONTENT[system.carrier]))

    if isinstance(system, ResistanceHeater):
        return FuelBreakdown(elec_kwh=load / BTU_PER_KWH)

    if isinstance(system, HeatPumpHeater):
        limits = (
            GROUND_SOURCE_COP_LIMITS
            if system.kind is HeatingKind.GROUND_COUPLED_HEAT_PUMP
            else AIR_SOURCE_COP_LIMITS
        )
        cop = limits.apply(_rating(system.cop, system.kind))
        return FuelBreakdown(elec_kwh=load / (cop * BTU_PER_KWH))

    if isinstance(system, SolidFuelHeater):
        eff = SOLID_FUEL_LIMITS[system.kind].apply(_rating(system.efficiency, system.kind))
        return FuelBreakdown.of(system.carrier, load / (eff * HEAT_CONTENT[system.carrier]))

    logger.debug(
        "No fuel mapping for heating kind",
        extra={"end_use": "heating", "kind": getattr(system, "kind", None)},
    )
    return FuelBreakdown.zero()


def cooling_fuel(system, load_btu: float) -> FuelBreakdown:
    """
    Electricity drawn by a cooling variant: kWh = Btu / SEER / 1000.

    Homes without cooling and unrecognized kinds use nothing.
    """
    load = _usable_load(load_btu)
    if load == 0 or not isinstance(system, AirConditioner):
        return FuelBreakdown.zero()

    seer = SEER_LIMITS.apply(to_number(system.seer, FALLBACK_SEER))
    return FuelBreakdown(elec_kwh=load / seer / WH_PER_KWH)


def delivered_hot_water_btu(system, occupants: float) -> float:
    """
    Annual heat delivered as hot water.

    8.34 lb/gal x gallons/day x (setpoint - inlet, at least 10 °F) x days/yr.
    """
    gallons_per_day = max(first_valid(occupants, 1), 1) * max(first_valid(system.gal_per_person_per_day, 20), 1)
    setpoint = to_number(system.setpoint_f, 120.0)
    inlet = to_number(system.inlet_f, 55.0)
    delta_t = max(setpoint - inlet, MIN_DHW_DELTA_T_F)
    days = max(first_valid(system.days_per_year, 365), 1)
    return WATER_LB_PER_GAL * gallons_per_day * delta_t * days


def water_heating_fuel(system, delivered_btu: float) -> FuelBreakdown:
    """Fuel needed by a water heater variant to deliver delivered_btu."""
    load = _usable_load(delivered_btu)
    if load == 0:
        return FuelBreakdown.zero()

    if isinstance(system, ConventionalWaterHeater):
        uef = UEF_LIMITS.apply(to_number(system.uef, DHW_EFFICIENCY_DEFAULTS[system.kind]))
        return FuelBreakdown.of(system.carrier, load / (uef * HEAT_CONTENT[system.carrier]))

    if isinstance(system, HeatPumpWaterHeater):
        cop = HPWH_COP_LIMITS.apply(to_number(system.cop, DHW_EFFICIENCY_DEFAULTS[system.kind]))
        return FuelBreakdown(elec_kwh=load / (cop * BTU_PER_KWH))

    logger.debug("No fuel mapping for water heater kind",
                 extra={"end_use": "dhw", "kind": getattr(system, "kind", None)})
    return FuelBreakdown.zero()


# =============================================================================
# Record-level entry points
# =============================================================================

def map_heating_fuel(eff: EffectiveRecord, load_btu: float) -> FuelBreakdown:
    """Fuel used by the home's heating equipment to meet load_btu."""
    return heating_fuel(eff.heating, load_btu)


def map_cooling_fuel(eff: EffectiveRecord, load_btu: float) -> FuelBreakdown:
    """Electricity used by the home's cooling equipment to meet load_btu."""
    return cooling_fuel(eff.cooling, load_btu)


def dhw_delivered_btu(eff: EffectiveRecord) -> float:
    """Annual hot-water heat demand of the household (Btu/yr)."""
    return delivered_hot_water_btu(eff.dhw, eff.occupants)


def map_dhw_fuel(eff: EffectiveRecord) -> FuelBreakdown:
    """Fuel used by the home's water heater."""
    return water_heating_fuel(eff.dhw, dhw_delivered_btu(eff))


def has_fuel_mapping(system) -> bool:
    """True when the variant converts load to fuel (not unrecognized or no-cooling)."""
    return isinstance(system, (
        CombustionHeater,
        ResistanceHeater,
        HeatPumpHeater,
        SolidFuelHeater,
        AirConditioner,
        ConventionalWaterHeater,
        HeatPumpWaterHeater,
    ))
