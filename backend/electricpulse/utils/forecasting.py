"""
ElectricPulse Forecasting
Least-squares trend over recent daily power averages, projected forward.
"""
import datetime
import math
from dataclasses import dataclass
from typing import Sequence

from electricpulse.schemas.analytics import DailyAggregate, ForecastPoint

MIN_HISTORY_DAYS = 7
TREND_WINDOW_DAYS = 14
CONFIDENCE_DECAY_PER_DAY = 0.05
CONFIDENCE_FLOOR = 0.6
HOURS_PER_DAY = 24


class InsufficientDataError(ValueError):
    """Not enough daily history to fit a trend."""


@dataclass
class LinearForecast:
    slope: float
    intercept: float
    points_used: int
    forecast: list[ForecastPoint]


def fit_trend(values: Sequence[float]) -> tuple[float, float]:
    """
    Ordinary least squares over x = 0..n-1. Returns (slope, intercept).

    Centred on the means so rounding in large sums cannot leak into the
    slope. A flat series returns exactly (0.0, value).
    """
    n = len(values)
    if n < 2:
        raise InsufficientDataError("At least two points are needed to fit a trend")

    if max(values) == min(values):
        return 0.0, float(values[0])

    mean_x = (n - 1) / 2
    mean_y = math.fsum(values) / n
    s_xy = math.fsum((x - mean_x) * (y - mean_y) for x, y in enumerate(values))
    s_xx = math.fsum((x - mean_x) ** 2 for x in range(n))

    slope = s_xy / s_xx
    intercept = mean_y - slope * mean_x
    return slope, intercept


def trend_label(slope: float) -> str:
    if slope > 0:
        return "increasing"
    if slope < 0:
        return "decreasing"
    return "stable"


def confidence_for(day: int) -> float:
    """Confidence decays linearly with horizon and never drops below the floor."""
    return max(CONFIDENCE_FLOOR, round(1 - CONFIDENCE_DECAY_PER_DAY * day, 10))


def linear_forecast(
    history: Sequence[DailyAggregate],
    days: int,
    start: datetime.date,
) -> LinearForecast:
    """
    Project average power ``days`` days past ``start``.

    ``history`` must be ordered oldest first and hold at least
    ``MIN_HISTORY_DAYS`` points; only the last ``TREND_WINDOW_DAYS`` are fitted.
    Predicted energy assumes the predicted power is drawn for a full day.
    """
    if len(history) < MIN_HISTORY_DAYS:
        raise InsufficientDataError(
            f"Need at least {MIN_HISTORY_DAYS} days of history, got {len(history)}"
        )

    window = [point.avg_power for point in history[-TREND_WINDOW_DAYS:]]
    n = len(window)
    slope, intercept = fit_trend(window)
    trend = trend_label(slope)

    forecast = []
    for i in range(1, days + 1):
        predicted_power = max(0.0, intercept + slope * (n + i - 1))
        forecast.append(
            ForecastPoint(
                date=start + datetime.timedelta(days=i),
                predicted_power=predicted_power,
                confidence_level=confidence_for(i),
                predicted_energy=predicted_power * HOURS_PER_DAY,
                trend=trend,
            )
        )

    return LinearForecast(
        slope=slope,
        intercept=intercept,
        points_used=n,
        forecast=forecast,
    )
