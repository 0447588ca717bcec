"""API module for Podium.

API layer:
- Validates inputs, reads the session store
- Returns engine results for the UI
- Forbidden: stats or persona logic of its own, writes to the store
"""
