"""
services/ — Matching, filtering and weighting logic.

Pure functions over explicit inputs; routers and scripts call these.
"""
