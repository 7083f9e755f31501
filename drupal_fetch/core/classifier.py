"""Per-operation failure policies for HTTP responses."""

from __future__ import annotations

import enum
import logging
from typing import Any, Mapping

import httpx
from pydantic import ValidationError

from drupal_fetch.schemas.resource import JSONAPIErrorObject

from .errors import HttpError

logger = logging.getLogger(__name__)


class ErrorPolicy(str, enum.Enum):
    """What a failed call turns into."""

    RAISE = "raise"
    NULL = "null"
    SWALLOW = "swallow"


DEFAULT_POLICIES: dict[str, ErrorPolicy] = {
    "resource": ErrorPolicy.RAISE,
    "collection": ErrorPolicy.RAISE,
    "menu": ErrorPolicy.RAISE,
    "view": ErrorPolicy.RAISE,
    "path_data": ErrorPolicy.NULL,
    "index": ErrorPolicy.SWALLOW,
}


def parse_error_objects(payload: Any) -> list[JSONAPIErrorObject]:
    """Return the valid error objects of a JSON:API error document."""
    if not isinstance(payload, Mapping):
        return []
    errors: list[JSONAPIErrorObject] = []
    for raw in payload.get("errors") or []:
        try:
            errors.append(JSONAPIErrorObject.model_validate(raw))
        except ValidationError:
            continue
    return errors


class ErrorClassifier:
    """Decide whether a failed response raises, yields ``None`` or is logged."""

    def __init__(self, policies: Mapping[str, ErrorPolicy] | None = None) -> None:
        self.policies = {**DEFAULT_POLICIES, **(policies or {})}

    def policy_for(self, operation: str) -> ErrorPolicy:
        return self.policies[operation]

    def check(
        self,
        operation: str,
        response: httpx.Response,
        document: Any = None,
    ) -> bool:
        """Return True when ``response`` (and its decoded ``document``) is usable.

        RAISE operations raise ``HttpError`` instead of returning False. A
        JSON:API document carrying ``errors`` counts as a failure even with a
        2xx status.
        """
        policy = self.policy_for(operation)
        errors = parse_error_objects(document)
        if response.is_success and not errors:
            return True

        if policy is ErrorPolicy.RAISE:
            raise self.http_error(response, errors or None)
        if policy is ErrorPolicy.SWALLOW:
            logger.error(
                "Request to %s failed: %s %s",
                response.request.url,
                response.status_code,
                response.reason_phrase,
            )
        return False

    def http_error(
        self,
        response: httpx.Response,
        errors: list[JSONAPIErrorObject] | None = None,
    ) -> HttpError:
        """Build the ``HttpError`` for a failed response."""
        if errors is None:
            try:
                errors = parse_error_objects(response.json())
            except ValueError:
                errors = []
        message = response.reason_phrase
        if response.is_success and errors:
            message = errors[0].detail or errors[0].title or message
        return HttpError(
            message,
            status_code=response.status_code,
            url=str(response.request.url),
            errors=errors,
        )
