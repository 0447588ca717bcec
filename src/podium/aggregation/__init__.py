"""Aggregation module for session statistics.

- Turns a session history into a StatsSnapshot (averages, win rate, trend)
- Forbidden: database access, archetype rules, presentation formatting
"""
