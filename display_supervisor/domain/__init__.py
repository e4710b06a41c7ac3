"""Domain layer for the display supervisor.

This layer contains:
- Interfaces: Contracts for the gateway, supervisor and keyboard cleanup
- Value Objects: The published reconnection state
- Entities: Devices reported by the gateway
- Domain Services: The backoff policy

The domain layer has no dependencies outside the Python standard library.
"""
