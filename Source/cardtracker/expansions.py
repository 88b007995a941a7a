from __future__ import annotations

from typing import List
from urllib.parse import quote

from . import config
from .api import ApiClient
from .errors import DeleteError, FetchError, PatchError, UpsertError
from .models import Expansion, ExpansionPatch


class ExpansionsClient(ApiClient):
    def fetch_all(self) -> List[Expansion]:
        return self._get_list(config.EXPANSIONS_PATH, Expansion.from_json, FetchError, "Failed to fetch expansions")

    def upsert(self, expansion: Expansion) -> None:
        self._request("post", config.EXPANSIONS_PATH, UpsertError, "Failed to upsert expansion", json=expansion.to_json())

    def patch(self, external_id: str, changes: ExpansionPatch) -> None:
        self._request(
            "patch",
            f"{config.EXPANSIONS_PATH}/{quote(external_id, safe='')}",
            PatchError,
            "Failed to patch expansion",
            json=changes.to_json(),
        )

    def delete_by_name(self, name: str) -> None:
        self._request(
            "delete",
            config.EXPANSIONS_BY_NAME_PATH.format(name=quote(name, safe="")),
            DeleteError,
            "Failed to delete expansion",
        )
