"""Test suite for parcel_portal.

- unit/: Unit tests - services and adapters in isolation (mocked HTTP)
- integration/: Several real adapters wired together (HTTP still mocked)
"""
