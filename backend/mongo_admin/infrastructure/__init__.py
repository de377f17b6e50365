"""Infrastructure — pymongo adapters, session connection registry, and logging setup.

Invariants:
    - Driver exceptions are converted to StorageTransportError before leaving this package
"""
