"""Core business logic layer.

Subpackages:
- shopping: building shopping lists from the weekly plan
- planning: keeping the weekly plan consistent with the meal catalog

planner_service ties the catalog, plan and checked overlay together behind
explicit load/save boundaries.
"""
__all__ = ["shopping", "planning", "planner_service"]
