"""Observation record loading utilities."""

from .exceptions import MalformedDate, RecordDataError, RecordError, RecordFormatError
from .loader import load_observations, normalize_grade, parse_observed_on
from .models import ObservationRow

__all__ = [
    "RecordError",
    "RecordFormatError",
    "RecordDataError",
    "MalformedDate",
    "ObservationRow",
    "load_observations",
    "normalize_grade",
    "parse_observed_on",
]
