"""Interaction and page lifecycle events."""

from parcel_portal.infrastructure.events.interaction_hub import InteractionEventHub

__all__ = ["InteractionEventHub"]
