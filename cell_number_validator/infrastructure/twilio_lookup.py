import logging
import time
from typing import Any, Optional

import requests
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from ..domain.classifier import LineTypeClassifier
from ..domain.models import LineType, NationalNumber
from ..exceptions import RemoteServiceError

logger = logging.getLogger(__name__)


class TwilioLineTypeClassifier(LineTypeClassifier):
    """Classifier backed by the Twilio Lookup carrier data."""

    def __init__(self, client: Client, country_code: str = "US") -> None:
        self.client = client
        self.country_code = country_code

    @classmethod
    def from_settings(cls, settings: Any) -> "TwilioLineTypeClassifier":
        http_client: Optional[TwilioHttpClient] = None
        if settings.lookup_timeout:
            http_client = TwilioHttpClient(timeout=settings.lookup_timeout)
        client = Client(
            settings.twilio_account_sid,
            settings.twilio_auth_token,
            http_client=http_client,
        )
        return cls(client, country_code=settings.lookup_region)

    def classify(self, number: NationalNumber) -> LineType:
        logger.debug("Looking up line type for %s", number)
        start = time.perf_counter()
        try:
            record = self.client.lookups.v1.phone_numbers(number.national_number).fetch(
                country_code=self.country_code, type=["carrier"]
            )
        except TwilioRestException as exc:
            raise RemoteServiceError(
                f"Lookup rejected for {number} (HTTP {exc.status}): {exc.msg}"
            ) from exc
        except (TwilioException, requests.RequestException) as exc:
            raise RemoteServiceError(f"Lookup failed for {number}: {exc}") from exc
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.debug("Lookup for %s took %.1f ms", number, elapsed_ms)

        carrier = getattr(record, "carrier", None)
        if not isinstance(carrier, dict):
            raise RemoteServiceError(f"Lookup response for {number} has no carrier data")

        line_type = LineType.from_value(carrier.get("type"))
        logger.debug("%s classified as %s", number, line_type.value)
        return line_type
