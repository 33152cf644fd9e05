"""Core business logic layer.

Subpackages:
- pantry: expiry classification, pantry filters and export
- recipes: ingredient availability against the pantry
- grouping: grouping engine and shopping-list filters
- meals: meal slot lifecycle
"""
__all__ = ["pantry", "recipes", "grouping", "meals"]
