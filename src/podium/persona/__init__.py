"""Persona classification module.

- Evaluates archetype unlock rules against aggregated stats and history
- Picks the single active (best-matching) archetype
- Forbidden: computing stats, database access
"""
