"""The verify → install → re-verify composition shared by all resources."""

from __future__ import annotations

from collections.abc import Callable

from toolwarden.exceptions import (
    InstallError,
    PostInstallVerificationError,
    ToolwardenError,
)
from toolwarden.logging import get_logger
from toolwarden.resources.models import HealOutcome

__all__ = ["heal"]

logger = get_logger(__name__)


def heal(
    name: str,
    verify: Callable[[], None],
    install: Callable[[], None] | None = None,
) -> HealOutcome:
    """Bring a resource to a verified state, installing at most once.

    Args:
        name: Tool name used in logs and wrapped errors.
        verify: Side-effect-free check; raises on failure.
        install: Installer run when ``verify`` fails. None means the
            resource cannot be installed automatically.

    Returns:
        ALREADY_SATISFIED when the first verify passed, INSTALLED when the
        installer ran and the follow-up verify passed.

    Raises:
        ToolwardenError: The original verify failure when there is no
            installer.
        InstallError: The installer failed. ``cause`` holds the reason.
        PostInstallVerificationError: The installer finished but the tool
            still does not verify.
    """
    try:
        verify()
    except ToolwardenError as first_failure:
        if install is None:
            logger.info("no_installer_available", tool=name)
            raise
        logger.info(
            "verify_failed_installing",
            tool=name,
            reason=first_failure.message,
        )
    else:
        logger.info("already_satisfied", tool=name)
        return HealOutcome.ALREADY_SATISFIED

    try:
        install()
    except InstallError:
        raise
    except ToolwardenError as e:
        # Typed installer failures (unsupported platform, bad checksum, ...)
        # keep their type on ``cause``.
        raise InstallError(
            f"Failed to install {name}: {e.message}", tool=name, cause=e
        ) from e
    except OSError as e:
        raise InstallError(
            f"Failed to install {name}: {e}", tool=name, cause=e
        ) from e

    logger.info("reverifying_after_install", tool=name)
    try:
        verify()
    except ToolwardenError as e:
        raise PostInstallVerificationError(
            f"{name} installation did not verify successfully: {e.message}",
            tool=name,
            cause=e,
        ) from e

    logger.info("installed_and_verified", tool=name)
    return HealOutcome.INSTALLED
