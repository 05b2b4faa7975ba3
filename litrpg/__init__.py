"""
LitRPG progression module.

Provides character progression built on top of litcore:
- Components (data-only, Pydantic models)
- Catalog (classes, professions, abilities and their providers)
- Progression (XP curve, points, tiers, bonuses, ability scaling)
- Systems (the progression facade and its events)
- Save (persistence contract)
"""

__version__ = "0.1.0"
