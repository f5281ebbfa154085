"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- logging/: structlog console adapter (LoggerProtocol)
- http/: shared httpx JSON client returning Result types
- enrichers/: IP probe, IP geolocation, user agent parsing
- backend/: hosted auth and table store adapters (REST and in-memory)
- client_state/: client-side persisted state and environment
- events/: interaction and page lifecycle event hub
"""
