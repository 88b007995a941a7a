from __future__ import annotations

from typing import List
from urllib.parse import quote

from . import config
from .api import ApiClient
from .errors import DeleteError, FetchError, PatchError, UpsertError
from .models import Card, CardPatch


class CardsClient(ApiClient):
    """Cards, addressed by (expansion external id, card number)."""

    def fetch_by_expansion_name(self, expansion_name: str, page: int = 0, size: int = 50) -> List[Card]:
        return self._get_list(
            config.CARDS_BY_EXPANSION_NAME_PATH,
            Card.from_json,
            FetchError,
            "Failed to fetch cards by expansion name",
            params={"expansionName": expansion_name, "page": str(page), "size": str(size)},
        )

    def upsert(self, card: Card, via_expansion: bool = False) -> None:
        """Create or replace a card.

        ``via_expansion`` posts to the expansion's nested cards collection
        instead of the flat one; the body is the full record either way.
        """
        if via_expansion:
            path = config.EXPANSION_CARDS_PATH.format(exp_id=quote(card.expansion_external_id, safe=""))
        else:
            path = config.CARDS_PATH
        self._request("post", path, UpsertError, "Failed to upsert card", json=card.to_json())

    def patch(self, expansion_external_id: str, card_number: str, changes: CardPatch) -> None:
        self._request(
            "patch",
            f"{config.CARDS_PATH}/{quote(card_number, safe='')}",
            PatchError,
            "Failed to patch card",
            params={"expExternalId": expansion_external_id},
            json=changes.to_json(),
        )

    def delete_by_number(self, expansion_external_id: str, card_number: str) -> None:
        self._request(
            "delete",
            config.CARDS_BY_NUMBER_PATH,
            DeleteError,
            "Failed to delete card",
            params={"expansion": expansion_external_id, "number": card_number},
        )
