"""Probability distributions for dice expressions."""

from .cache import LRUCache
from .service import ProbabilityCalculator

__all__ = [
    "LRUCache",
    "ProbabilityCalculator",
]
