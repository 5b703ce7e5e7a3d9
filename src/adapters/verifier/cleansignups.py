"""
CleanSignups verifier adapter - Implements EmailVerifier protocol.

Calls the CleanSignups HTTP API once per email:

    POST <endpoint>
    Authorization: Bearer <api key>
    {"email": "..."}

    -> {"isTemporary": bool, "isValid": bool, "qualityScore"?: number, "risks"?: [str]}

Availability wins over strictness: any failure (network error, timeout,
non-2xx status, unreadable or mistyped body) is logged and answered with a
permissive verdict so that registration is never blocked by a provider outage.
There is no retry.
"""

import logging

import httpx

from src.domain.exceptions import VerifierUnavailable
from src.domain.ports import EmailVerdict

logger = logging.getLogger(__name__)


class CleanSignupsVerifier:
    """
    Implements EmailVerifier protocol via httpx.

    Uses structural subtyping - no explicit inheritance from Protocol.
    The httpx.Client is owned by the caller (created and closed in the
    application lifespan).
    """

    def __init__(self, client: httpx.Client, endpoint: str, api_key: str) -> None:
        self._client = client
        self._endpoint = endpoint
        self._api_key = api_key

    def verify(self, email: str) -> EmailVerdict:
        """
        Classify an email address, degrading to a permissive verdict on failure.

        Args:
            email: Address to classify

        Returns:
            Provider verdict, or EmailVerdict.permissive() with `error` set
        """
        try:
            return self._request_verdict(email)
        except VerifierUnavailable as exc:
            logger.error("Email verifier unavailable, accepting %s: %s", email, exc)
            return EmailVerdict.permissive(error=str(exc))

    def _request_verdict(self, email: str) -> EmailVerdict:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        try:
            response = self._client.post(self._endpoint, json={"email": email}, headers=headers)
        except httpx.HTTPError as exc:
            raise VerifierUnavailable(f"request failed: {exc}") from exc

        if not response.is_success:
            raise VerifierUnavailable(f"provider returned status {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise VerifierUnavailable("provider returned a non-JSON body") from exc

        return _parse_verdict(payload)


def _parse_verdict(payload: object) -> EmailVerdict:
    if not isinstance(payload, dict):
        raise VerifierUnavailable("provider returned an unexpected payload")
    if "isValid" not in payload or "isTemporary" not in payload:
        raise VerifierUnavailable("provider response is missing isValid/isTemporary")

    is_valid = payload["isValid"]
    is_temporary = payload["isTemporary"]
    if not isinstance(is_valid, bool) or not isinstance(is_temporary, bool):
        raise VerifierUnavailable("provider returned non-boolean isValid/isTemporary")

    quality_score = payload.get("qualityScore")
    if quality_score is not None:
        try:
            quality_score = float(quality_score)
        except (TypeError, ValueError):
            raise VerifierUnavailable("provider returned a non-numeric qualityScore") from None

    risks = payload.get("risks") or []
    if not isinstance(risks, list):
        risks = [risks]

    return EmailVerdict(
        is_valid=is_valid,
        is_temporary=is_temporary,
        quality_score=quality_score,
        risks=[str(risk) for risk in risks],
    )
