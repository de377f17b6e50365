"""Services Layer — the database-admin service orchestrating core rules over a storage connection.

Invariants:
    - Services depend on core Protocols, never on pymongo directly
"""
