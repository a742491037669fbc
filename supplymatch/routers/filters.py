"""Filter API — narrow the catalog and count filter-chip options."""

from fastapi import APIRouter

from ..schemas.filters import FilterCounts, FilterRequest, FilterResponse
from ..services.filter_engine import apply_filters, get_filter_counts

router = APIRouter(tags=["filters"])


@router.post("/api/filters/apply", response_model=FilterResponse)
def filter_suppliers(payload: FilterRequest):
    matched = apply_filters(payload.suppliers, payload.filters)
    return FilterResponse(total=len(payload.suppliers), matched=len(matched), suppliers=matched)


@router.post("/api/filters/counts", response_model=FilterCounts)
def filter_counts(payload: FilterRequest):
    return get_filter_counts(payload.suppliers, payload.filters)
