from .core import Found, IntervalMap, Relation, interval_map, relation
from .errors import (
    EmptyMapError,
    InvalidIntervalError,
    OverlappingIntervalsError,
    PutError,
)
from .index import Cursor, OrderedIndex
from .interval import Interval
from .log import configure_logging

__all__ = [
    "Interval",
    "IntervalMap",
    "Found",
    "Relation",
    "relation",
    "interval_map",
    "OrderedIndex",
    "Cursor",
    "InvalidIntervalError",
    "OverlappingIntervalsError",
    "EmptyMapError",
    "PutError",
    "configure_logging",
]
