"""Core Layer — pure domain logic, no IO, no driver calls.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Remote collaborators are reached only through storage_protocols.py
"""
