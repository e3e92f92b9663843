"""
ElectricPulse Alert Rules
Threshold checks applied to the latest reading of every meter.
"""
from dataclasses import dataclass
from itertools import combinations
from typing import Any, Iterable, Optional

from electricpulse.core.config import settings
from electricpulse.schemas.alert import Alert


@dataclass(frozen=True)
class AlertThresholds:
    min_power_factor: float = settings.ALERT_MIN_POWER_FACTOR
    max_total_kw: float = settings.ALERT_MAX_TOTAL_KW
    max_voltage_spread: float = settings.ALERT_MAX_VOLTAGE_SPREAD


def _fmt(value: Optional[float], digits: int) -> str:
    return "n/a" if value is None else f"{value:.{digits}f}"


def low_power_factor(reading: Any, thresholds: AlertThresholds) -> Optional[Alert]:
    pfs = (reading.pf1, reading.pf2, reading.pf3)
    if not any(pf is not None and pf < thresholds.min_power_factor for pf in pfs):
        return None
    return Alert(
        id=f"pf_{reading.meter_id}",
        type="warning",
        title="Low Power Factor",
        message=f"Power factor below {thresholds.min_power_factor:g} on meter {reading.meter_id}",
        meter_id=reading.meter_id,
        value=", ".join(f"PF{n}: {_fmt(pf, 2)}" for n, pf in enumerate(pfs, start=1)),
        timestamp=reading.timestamp,
    )


def high_power(reading: Any, thresholds: AlertThresholds) -> Optional[Alert]:
    if reading.kwt is None or reading.kwt <= thresholds.max_total_kw:
        return None
    return Alert(
        id=f"power_{reading.meter_id}",
        type="critical",
        title="High Power Consumption",
        message=f"Power consumption exceeds {thresholds.max_total_kw:g} kW on meter {reading.meter_id}",
        meter_id=reading.meter_id,
        value=f"{reading.kwt:.1f} kW",
        timestamp=reading.timestamp,
    )


def voltage_imbalance(reading: Any, thresholds: AlertThresholds) -> Optional[Alert]:
    volts = (reading.v1, reading.v2, reading.v3)
    imbalanced = any(
        a is not None and b is not None and abs(a - b) > thresholds.max_voltage_spread
        for a, b in combinations(volts, 2)
    )
    if not imbalanced:
        return None
    return Alert(
        id=f"voltage_{reading.meter_id}",
        type="warning",
        title="Voltage Imbalance",
        message=f"Voltage imbalance detected on meter {reading.meter_id}",
        meter_id=reading.meter_id,
        value=", ".join(f"V{n}: {_fmt(v, 1)}V" for n, v in enumerate(volts, start=1)),
        timestamp=reading.timestamp,
    )


RULES = (low_power_factor, high_power, voltage_imbalance)


def evaluate_alerts(
    readings: Iterable[Any],
    thresholds: AlertThresholds = AlertThresholds(),
) -> list[Alert]:
    """
    Run every rule against every reading.

    Rules are independent, so one meter can raise up to one alert per rule.
    Nothing is remembered between calls.
    """
    readings = list(readings)
    alerts = []
    for rule in RULES:
        for reading in readings:
            alert = rule(reading, thresholds)
            if alert is not None:
                alerts.append(alert)
    return alerts
