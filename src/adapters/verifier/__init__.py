"""Email verifier adapters - External email quality providers."""

from .cleansignups import CleanSignupsVerifier

__all__ = ["CleanSignupsVerifier"]
