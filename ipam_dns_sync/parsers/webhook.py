import json
import logging
from typing import Dict, Optional, Union

from ..core.exceptions import InvalidAddressError, UnknownEventError, WebhookParseError
from ..core.models import AddressPrefix, ChangeEvent, EventKind

logger = logging.getLogger(__name__)


class WebhookParser:
    """Decodes IPAM webhook payloads into ChangeEvents."""

    def __init__(self, payload: Union[bytes, str, Dict]):
        self.payload = payload

    def parse(self) -> ChangeEvent:
        """Parse the webhook payload and validate addresses."""
        body = self._decode()

        kind = body.get("event")
        try:
            kind = EventKind(kind)
        except ValueError:
            raise UnknownEventError(f"Unknown event type: {kind}") from None

        data = body.get("data")
        if not isinstance(data, dict):
            raise WebhookParseError("Webhook payload has no data object")

        new_address = AddressPrefix.parse(data.get("address"))

        # NetBox sends "prechange": null for created objects
        snapshots = body.get("snapshots") or {}
        if not isinstance(snapshots, dict):
            raise WebhookParseError("Webhook snapshots must be an object")
        prechange = snapshots.get("prechange") or {}
        if not isinstance(prechange, dict):
            raise WebhookParseError("Webhook snapshots.prechange must be an object")

        old_address = self._optional_address(prechange.get("address"))

        event = ChangeEvent(
            kind=kind,
            new_address=new_address,
            new_name=self._optional_name(data.get("dns_name"), "data.dns_name"),
            old_address=old_address,
            old_name=(
                self._optional_name(prechange.get("dns_name"), "snapshots.prechange.dns_name")
                if old_address
                else ""
            ),
            request_id=body.get("request_id"),
            model=body.get("model"),
        )

        logger.debug(f"Parsed {kind.value} event for {new_address}")
        return event

    def _decode(self) -> Dict:
        if isinstance(self.payload, dict):
            return self.payload

        try:
            body = json.loads(self.payload)
        except (TypeError, ValueError) as e:
            raise WebhookParseError(f"Could not decode request body to json: {e}") from e

        if not isinstance(body, dict):
            raise WebhookParseError("Webhook payload must be a JSON object")
        return body

    @staticmethod
    def _optional_name(value, field: str) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise WebhookParseError(f"Webhook {field} must be a string, got {type(value).__name__}")
        return value

    @staticmethod
    def _optional_address(value) -> Optional[AddressPrefix]:
        if value is None or value == "":
            return None
        try:
            return AddressPrefix.parse(value)
        except InvalidAddressError as e:
            raise InvalidAddressError(f"Invalid prechange address: {e}") from e
