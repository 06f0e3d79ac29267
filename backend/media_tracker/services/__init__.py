"""Services Layer - entity controllers enforcing integrity on top of QueryHelper.

Invariants:
    - Controllers are built only by services/assembly.py (no module-level singletons)
    - Controllers speak core entities; ORM records stay inside QueryHelper

Design Decisions:
    - One controller per entity type, one media item controller per media type
"""
