"""Domain layer - Pure session and audit logic.

Structure:
- entities/: Session state, access events and auth value types
- enums/: Event types and state-machine states
- errors/: Domain error values (returned, not raised)
- protocols/: Ports for the hosted backend, client environment and logging

The domain layer has NO dependencies on frameworks or infrastructure.
"""
