"""Infrastructure layer for the display supervisor.

The infrastructure layer contains implementations of domain interfaces:
- The connection supervisor and its watchdog
- The reconnection state machine
- Keyboard cleanup scheduling
- Gateway error handling decorators

This layer depends on the domain layer, but the domain layer does NOT
depend on infrastructure.
"""
