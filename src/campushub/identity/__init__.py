"""Identity layer - credential checks and session issuing."""

from campushub.identity.exceptions import AuthError
from campushub.identity.factory import create_identity_store
from campushub.identity.feed import ChangeFeed
from campushub.identity.hosted import HostedIdentityStore
from campushub.identity.local import LocalIdentityStore
from campushub.identity.models import (
    AuthChange,
    ChangeCallback,
    Identity,
    IdentitySession,
    Subscription,
)
from campushub.identity.protocol import IdentityStore

__all__ = [
    "AuthChange",
    "AuthError",
    "ChangeCallback",
    "ChangeFeed",
    "HostedIdentityStore",
    "Identity",
    "IdentitySession",
    "IdentityStore",
    "LocalIdentityStore",
    "Subscription",
    "create_identity_store",
]
