"""
ElectricPulse Billing Calculations
Energy cost, demand charge and power-quality ratings for a reporting window.
"""
import math
from typing import Optional

from electricpulse.core.config import settings


def round_half_away(value: float, ndigits: int = 2) -> float:
    """
    Round on the scaled value with ties going away from zero.

    Unlike the builtin ``round`` this never rounds half to even, so
    ``round_half_away(0.125, 2) == 0.13``.
    """
    factor = 10 ** ndigits
    scaled = math.floor(abs(value) * factor + 0.5)
    return math.copysign(scaled / factor, value) if scaled else 0.0


def voltage_stability(
    avg_voltage: Optional[float],
    nominal_min: float = settings.VOLTAGE_NOMINAL_MIN,
    nominal_max: float = settings.VOLTAGE_NOMINAL_MAX,
) -> str:
    """'Good' when the mean voltage sits strictly inside the nominal band."""
    if avg_voltage is not None and nominal_min < avg_voltage < nominal_max:
        return "Good"
    return "Needs Attention"


def efficiency_rating(power_factor_efficiency: float) -> str:
    if power_factor_efficiency > 90:
        return "Excellent"
    if power_factor_efficiency > 80:
        return "Good"
    return "Poor"


def billing_summary(
    avg_energy: Optional[float],
    peak_power: Optional[float],
    avg_power_factor: Optional[float],
    avg_voltage: Optional[float],
    energy_rate: float = settings.ENERGY_RATE_PER_KWH,
    demand_rate: float = settings.DEMAND_RATE_PER_KW,
) -> dict:
    """Derive cost and efficiency figures from window aggregates."""
    total_cost = (avg_energy or 0.0) * energy_rate
    peak_demand_charge = (peak_power or 0.0) * demand_rate / 1000
    total_bill = total_cost + peak_demand_charge
    pf_efficiency = (avg_power_factor or 0.0) * 100

    return {
        "total_cost": round_half_away(total_cost, 2),
        "peak_demand_charge": round_half_away(peak_demand_charge, 2),
        "total_bill": round_half_away(total_bill, 2),
        "power_factor_efficiency": round_half_away(pf_efficiency, 2),
        "voltage_stability": voltage_stability(avg_voltage),
        "efficiency_rating": efficiency_rating(pf_efficiency),
    }


def energy_savings(
    previous_energy: Optional[float],
    current_energy: Optional[float],
    energy_rate: float = settings.ENERGY_RATE_PER_KWH,
) -> Optional[float]:
    """Money saved against the previous period, None when either side is missing."""
    if previous_energy is None or current_energy is None:
        return None
    return round_half_away((previous_energy - current_energy) * energy_rate, 2)
