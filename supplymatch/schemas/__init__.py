"""
schemas/ — Pydantic domain records and request/response models

Domain records (Supplier, PartSpec, FilterState ...) are frozen so a
scoring pass can never mutate its inputs. Request/response wrappers give
the API input validation and auto-generated OpenAPI docs.
"""

from .bom import BomLine
from .filters import FilterCounts, FilterState
from .matching import MatchOptions, MatchResult
from .parts import PartSpec
from .suppliers import Capacity, Certification, QualityMetrics, Supplier, Sustainability
from .weighting import ScoringWeights, WeightedScore

__all__ = [
    "BomLine",
    "Capacity",
    "Certification",
    "FilterCounts",
    "FilterState",
    "MatchOptions",
    "MatchResult",
    "PartSpec",
    "QualityMetrics",
    "ScoringWeights",
    "Supplier",
    "Sustainability",
    "WeightedScore",
]
