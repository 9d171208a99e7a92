"""The self-healing resource contract.

Resources are independent classes that satisfy this protocol structurally;
there is no shared base class.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["SelfHealingResource"]


@runtime_checkable
class SelfHealingResource(Protocol):
    """A dependency that can check itself and repair itself.

    Attributes:
        name: Human-readable resource name used in logs and step reports.

    Contract:
        - ``verify()`` inspects the environment only. It returns on success
          and raises a ``ResourceError`` (or ``CredentialError``) otherwise.
        - ``ensure()`` returns immediately if ``verify()`` passes. Otherwise
          it installs once and verifies again; if it returns, an immediately
          following ``verify()`` passes.
    """

    name: str

    def verify(self) -> None:
        """Check the resource without changing the system."""
        ...

    def ensure(self) -> object:
        """Verify, and install then re-verify only if verification failed."""
        ...
