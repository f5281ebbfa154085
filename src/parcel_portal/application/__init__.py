"""Application layer - session lifecycle and access audit services.

Application code imports only from core and domain; infrastructure adapters
arrive through constructor injection (see parcel_portal.core.container).
"""
