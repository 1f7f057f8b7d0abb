"""
Service interfaces for dependency inversion.
Allows swapping the store, identity and notification backends without
changing booking logic.
"""

from .kv_store import KeyValueStore
from .identity import IdentityProvider
from .notification import NotificationSink

__all__ = ['KeyValueStore', 'IdentityProvider', 'NotificationSink']
