"""
Data loading and management module.

Provides the price data model, the strict CSV loader with its error
taxonomy, and a synthetic series generator.
"""
from .model import PriceRecord, PriceSeries
from .errors import (
    LoadError,
    IoFailure,
    InvalidSchema,
    MalformedRow,
    InvalidDate,
    InvalidDecimal,
    InvalidVolume,
    SeriesInvariantViolation,
)
from .loader import SeriesLoader, load_series, write_series
from .mock import mock_series

__all__ = [
    'PriceRecord',
    'PriceSeries',
    'LoadError',
    'IoFailure',
    'InvalidSchema',
    'MalformedRow',
    'InvalidDate',
    'InvalidDecimal',
    'InvalidVolume',
    'SeriesInvariantViolation',
    'SeriesLoader',
    'load_series',
    'write_series',
    'mock_series',
]
