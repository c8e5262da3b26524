"""Repositories: SQL persistence for tickets and responds.

Invariants:
    - Each repository owns its tables exclusively
    - Multi-row writes run inside exactly one transaction

Design Decisions:
    - Repositories satisfy core.repository_protocols structurally (no inheritance)
"""
