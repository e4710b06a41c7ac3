"""Application layer for the display supervisor.

This layer contains use cases and application services that sit between
control surfaces (menus, shortcuts, URL handlers) and the supervisor.

- Use Cases: Named command dispatch
- Services: Status wording and diagnostics
- DTOs: Command results
"""
