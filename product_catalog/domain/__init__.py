"""Catalog domain: the product entity, query value objects and validation."""
