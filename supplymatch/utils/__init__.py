"""Shared utility helpers used across schemas and services."""
