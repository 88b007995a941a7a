"""Wire models for the card tracker backend.

Field names on the wire are camelCase; attributes are snake_case. Every
``from_json`` raises ``ValueError`` when a required field is missing or has
the wrong type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union

from .errors import SessionDecodeError


class _Unset:
    """Marker for a patch field that should be left out of the payload."""

    _instance: Optional["_Unset"] = None

    def __new__(cls) -> "_Unset":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()

Timestamp = Union[str, datetime]
Amount = Union[str, int, Decimal]


def _str_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def _decimal(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        raise ValueError(f"Not a decimal amount: {value!r}")
    try:
        # str() first so floats keep their printed form rather than binary noise
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Not a decimal amount: {value!r}")


def format_timestamp(value: Timestamp) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _patch_payload(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if v is not UNSET}


@dataclass
class Session:
    """The signed-in identity, as persisted between runs."""
    username: str
    roles: List[str] = field(default_factory=list)
    token: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "Session":
        if not isinstance(data, dict):
            raise SessionDecodeError("Session record must be an object")
        username = data.get("username")
        roles = data.get("roles", [])
        token = data.get("token")
        if not isinstance(username, str) or not username:
            raise SessionDecodeError("Session record has no username")
        if not isinstance(roles, list) or not all(isinstance(r, str) for r in roles):
            raise SessionDecodeError("Session roles must be a list of strings")
        if token is not None and not isinstance(token, str):
            raise SessionDecodeError("Session token must be a string")
        return cls(username=username, roles=list(roles), token=token or None)

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"username": self.username, "roles": list(self.roles)}
        if self.token:
            data["token"] = self.token
        return data


@dataclass
class Card:
    expansion_external_id: str
    card_number: str
    card_name: str
    card_rarity: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Card":
        return cls(
            expansion_external_id=_str_field(data, "expExternalId"),
            card_number=_str_field(data, "cardNumber"),
            card_name=_str_field(data, "cardName"),
            card_rarity=_str_field(data, "cardRarity"),
        )

    def to_json(self) -> Dict[str, Any]:
        return {
            "expExternalId": self.expansion_external_id,
            "cardNumber": self.card_number,
            "cardName": self.card_name,
            "cardRarity": self.card_rarity,
        }


@dataclass
class Expansion:
    external_id: str
    name: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Expansion":
        return cls(external_id=_str_field(data, "externalId"), name=_str_field(data, "name"))

    def to_json(self) -> Dict[str, Any]:
        return {"externalId": self.external_id, "name": self.name}


@dataclass
class OfferPoint:
    """One listed price for a card, as returned by the offers search."""
    id: int
    listed_at: str
    amount: Decimal
    currency: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "OfferPoint":
        offer_id = data.get("id")
        if isinstance(offer_id, bool) or not isinstance(offer_id, int):
            raise ValueError(f"Field 'id' must be an integer, got {offer_id!r}")
        return cls(
            id=offer_id,
            listed_at=_str_field(data, "listedAt"),
            amount=_decimal(data.get("amount")),
            currency=_str_field(data, "currency"),
        )


@dataclass
class NewOffer:
    expansion_external_id: str
    card_number: str
    card_name: str
    card_rarity: str
    amount: Amount
    currency: str
    listed_at: Timestamp

    def to_json(self) -> Dict[str, Any]:
        return {
            "expExternalId": self.expansion_external_id,
            "cardNumber": self.card_number,
            "amount": str(_decimal(self.amount)),
            "currency": self.currency,
            "listedAt": format_timestamp(self.listed_at),
            "cardName": self.card_name,
            "cardRarity": self.card_rarity,
        }


@dataclass
class CardPatch:
    """Partial card update. ``None`` clears a field, ``UNSET`` leaves it alone."""
    name: Optional[str] = UNSET
    rarity: Optional[str] = UNSET

    def to_json(self) -> Dict[str, Any]:
        return _patch_payload({"name": self.name, "rarity": self.rarity})


@dataclass
class ExpansionPatch:
    name: Optional[str] = UNSET

    def to_json(self) -> Dict[str, Any]:
        return _patch_payload({"name": self.name})


@dataclass
class OfferPatch:
    amount: Optional[Amount] = UNSET
    currency: Optional[str] = UNSET
    listed_at: Optional[Timestamp] = UNSET

    def to_json(self) -> Dict[str, Any]:
        amount = self.amount
        if amount is not UNSET and amount is not None:
            amount = str(_decimal(amount))
        listed_at = self.listed_at
        if listed_at is not UNSET and listed_at is not None:
            listed_at = format_timestamp(listed_at)
        return _patch_payload({"amount": amount, "currency": self.currency, "listedAt": listed_at})
