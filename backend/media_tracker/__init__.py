"""Media Tracker Package - persistence and consistency core of a multi-tenant media catalog.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
