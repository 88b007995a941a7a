from __future__ import annotations

from typing import Any, Dict, List, Optional

from . import config
from .api import ApiClient
from .errors import DeleteError, FetchError, PatchError, UpsertError
from .models import NewOffer, OfferPatch, OfferPoint, Timestamp, format_timestamp


class OffersClient(ApiClient):
    """Price offers. Unlike cards, offers are addressed by their numeric id."""

    def fetch_by_card_name(
        self,
        expansion_external_id: str,
        card_name: str,
        since: Optional[Timestamp] = None,
        until: Optional[Timestamp] = None,
    ) -> List[OfferPoint]:
        params: Dict[str, Any] = {"expId": expansion_external_id, "cardName": card_name}
        # Empty bounds mean "unbounded" and are not sent
        if since:
            params["from"] = format_timestamp(since)
        if until:
            params["to"] = format_timestamp(until)
        return self._get_list(
            config.OFFERS_BY_CARD_NAME_PATH,
            OfferPoint.from_json,
            FetchError,
            "Failed to fetch offers by card name",
            params=params,
        )

    def add(self, offer: NewOffer) -> None:
        self._request("post", config.OFFERS_PATH, UpsertError, "Failed to add offer", json=offer.to_json())

    def patch(self, offer_id: int, changes: OfferPatch) -> None:
        self._request("patch", f"{config.OFFERS_PATH}/{int(offer_id)}", PatchError, "Failed to patch offer", json=changes.to_json())

    def delete(self, offer_id: int) -> None:
        self._request("delete", f"{config.OFFERS_PATH}/{int(offer_id)}", DeleteError, "Failed to delete offer")
