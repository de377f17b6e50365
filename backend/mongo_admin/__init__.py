"""Mongo Admin — session-scoped database administration for MongoDB servers.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
