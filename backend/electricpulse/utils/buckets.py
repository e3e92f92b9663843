"""
Time bucketing for GROUP BY queries.

Each backend spells "format this timestamp" differently, so the label
expression is picked from the session's dialect. Labels are plain strings
(``2024-05-01 13:00:00``, ``2024-05-01``, ``2024-05``) on every backend.
"""
from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

_STRFTIME = {
    "hourly": "%Y-%m-%d %H:00:00",
    "daily": "%Y-%m-%d",
    "monthly": "%Y-%m",
}

_TO_CHAR = {
    "hourly": "YYYY-MM-DD HH24:00:00",
    "daily": "YYYY-MM-DD",
    "monthly": "YYYY-MM",
}


def period_bucket(column, period: str, dialect: str) -> ColumnElement:
    if period not in _STRFTIME:
        raise ValueError(f"Unknown period: {period}")

    if dialect == "postgresql":
        return func.to_char(column, _TO_CHAR[period])
    if dialect in ("mysql", "mariadb"):
        return func.date_format(column, _STRFTIME[period])
    return func.strftime(_STRFTIME[period], column)
