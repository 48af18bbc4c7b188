"""Pydantic schemas for API responses that are not domain objects."""
