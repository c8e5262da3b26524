"""Services Layer: use cases orchestrating stores, taxonomy and notifications.

Invariants:
    - Services depend on protocols only, never on concrete repositories
    - Business errors are raised here, stores only report by-id absence

Design Decisions:
    - Pure checks live in core/ticket_rules.py; services do the IO around them
"""
