"""
Equipment energy mapping for residential heating, cooling and hot water.

Converts annual thermal loads into fuel by carrier:

- Gas, propane and oil furnaces/boilers by AFUE
- Electric resistance at 3412 Btu/kWh
- Air-source, ductless and ground-coupled heat pumps by COP
- Wood and pellet stoves by appliance efficiency
- Air conditioners by SEER
- Water heaters by UEF, heat pump water heaters by COP

Usage:
    from homeenergy.hvac import map_heating_fuel, map_dhw_fuel

    fuel = map_heating_fuel(eff, loads.heating)
    fuel.gas_therms
"""

from .mapper import (
    EfficiencyLimits,
    heating_fuel,
    cooling_fuel,
    water_heating_fuel,
    delivered_hot_water_btu,
    map_heating_fuel,
    map_cooling_fuel,
    map_dhw_fuel,
    dhw_delivered_btu,
    has_fuel_mapping,
)

__all__ = [
    "EfficiencyLimits",
    "heating_fuel",
    "cooling_fuel",
    "water_heating_fuel",
    "delivered_hot_water_btu",
    "map_heating_fuel",
    "map_cooling_fuel",
    "map_dhw_fuel",
    "dhw_delivered_btu",
    "has_fuel_mapping",
]
