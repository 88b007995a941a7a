from __future__ import annotations

import argparse
import getpass
import json
import logging
from dataclasses import asdict
from typing import Any, List, Optional

from .client import CardTrackerAPI
from .errors import CardTrackerError
from .logging_utils import install_excepthook, setup_logging
from .models import UNSET, Card, CardPatch, Expansion, ExpansionPatch, NewOffer, OfferPatch
from .router import LOGIN

logger = logging.getLogger(__name__)


def _emit(data: Any) -> None:
    if isinstance(data, list):
        data = [asdict(item) for item in data]
    print(json.dumps(data, indent=2, default=str))


def _tri(value: Any, clear: bool) -> Any:
    """Map a value/--clear-* pair onto a patch field."""
    if clear:
        return None
    if value is None:
        return UNSET
    return value


def _add_patch_field(parser: argparse.ArgumentParser, name: str, help_text: str) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(f"--{name}", help=help_text)
    group.add_argument(f"--clear-{name}", action="store_true", help=f"Send null for {name}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cardtracker", description="Card collection and price tracker client")
    parser.add_argument("--verbose", "-v", action="store_true", help="Record debug output in the log file")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("login", help="Sign in and remember the session")
    p.add_argument("--username", "-u", required=True)
    p.add_argument("--password", "-p", help="Prompted for when omitted")
    sub.add_parser("logout", help="Forget the stored session")
    sub.add_parser("whoami", help="Show the stored session")

    cards = sub.add_parser("cards").add_subparsers(dest="action", required=True)
    p = cards.add_parser("list")
    p.add_argument("expansion_name")
    p.add_argument("--page", type=int, default=0)
    p.add_argument("--size", type=int, default=50)
    p = cards.add_parser("upsert")
    p.add_argument("expansion")
    p.add_argument("number")
    p.add_argument("--name", required=True)
    p.add_argument("--rarity", required=True)
    p.add_argument("--via-expansion", action="store_true", help="Post to the expansion's cards collection")
    p = cards.add_parser("patch")
    p.add_argument("expansion")
    p.add_argument("number")
    _add_patch_field(p, "name", "New card name")
    _add_patch_field(p, "rarity", "New card rarity")
    p = cards.add_parser("delete")
    p.add_argument("expansion")
    p.add_argument("number")

    exps = sub.add_parser("expansions").add_subparsers(dest="action", required=True)
    exps.add_parser("list")
    p = exps.add_parser("upsert")
    p.add_argument("external_id")
    p.add_argument("name")
    p = exps.add_parser("patch")
    p.add_argument("external_id")
    _add_patch_field(p, "name", "New expansion name")
    p = exps.add_parser("delete")
    p.add_argument("name")

    offers = sub.add_parser("offers").add_subparsers(dest="action", required=True)
    p = offers.add_parser("list")
    p.add_argument("expansion")
    p.add_argument("card_name")
    p.add_argument("--from", dest="since")
    p.add_argument("--to", dest="until")
    p = offers.add_parser("add")
    p.add_argument("expansion")
    p.add_argument("number")
    p.add_argument("--name", required=True)
    p.add_argument("--rarity", required=True)
    p.add_argument("--amount", required=True)
    p.add_argument("--currency", required=True)
    p.add_argument("--listed-at", required=True)
    p = offers.add_parser("patch")
    p.add_argument("id", type=int)
    _add_patch_field(p, "amount", "New amount")
    _add_patch_field(p, "currency", "New currency code")
    _add_patch_field(p, "listed-at", "New listing timestamp")
    p = offers.add_parser("delete")
    p.add_argument("id", type=int)
    return parser


def _run(api: CardTrackerAPI, args: argparse.Namespace) -> int:
    if args.command == "login":
        password = args.password if args.password is not None else getpass.getpass(f"Password for {args.username}: ")
        session = api.login(args.username, password)
        print(f"[INFO] Logged in as {session.username}")
        return 0
    if args.command == "logout":
        api.logout()
        print("[INFO] Logged out")
        return 0

    if api.router.navigate("home").name == LOGIN:
        print("[ERROR] Not logged in. Run `cardtracker login -u <username>` first.")
        return 1

    if args.command == "whoami":
        current = api.session.session
        _emit({"username": current.username, "roles": current.roles, "hasToken": api.session.has_token})
    elif args.command == "cards":
        if args.action == "list":
            _emit(api.cards.fetch_by_expansion_name(args.expansion_name, args.page, args.size))
        elif args.action == "upsert":
            card = Card(args.expansion, args.number, args.name, args.rarity)
            api.cards.upsert(card, via_expansion=args.via_expansion)
            print(f"[INFO] Upserted card {args.expansion}/{args.number}")
        elif args.action == "patch":
            changes = CardPatch(name=_tri(args.name, args.clear_name), rarity=_tri(args.rarity, args.clear_rarity))
            api.cards.patch(args.expansion, args.number, changes)
            print(f"[INFO] Patched card {args.expansion}/{args.number}")
        elif args.action == "delete":
            api.cards.delete_by_number(args.expansion, args.number)
            print(f"[INFO] Deleted card {args.expansion}/{args.number}")
    elif args.command == "expansions":
        if args.action == "list":
            _emit(api.expansions.fetch_all())
        elif args.action == "upsert":
            api.expansions.upsert(Expansion(args.external_id, args.name))
            print(f"[INFO] Upserted expansion {args.external_id}")
        elif args.action == "patch":
            api.expansions.patch(args.external_id, ExpansionPatch(name=_tri(args.name, args.clear_name)))
            print(f"[INFO] Patched expansion {args.external_id}")
        elif args.action == "delete":
            api.expansions.delete_by_name(args.name)
            print(f"[INFO] Deleted expansion {args.name}")
    elif args.command == "offers":
        if args.action == "list":
            _emit(api.offers.fetch_by_card_name(args.expansion, args.card_name, args.since, args.until))
        elif args.action == "add":
            api.offers.add(NewOffer(
                expansion_external_id=args.expansion,
                card_number=args.number,
                card_name=args.name,
                card_rarity=args.rarity,
                amount=args.amount,
                currency=args.currency,
                listed_at=args.listed_at,
            ))
            print(f"[INFO] Added offer for {args.expansion}/{args.number}")
        elif args.action == "patch":
            changes = OfferPatch(
                amount=_tri(args.amount, args.clear_amount),
                currency=_tri(args.currency, args.clear_currency),
                listed_at=_tri(args.listed_at, args.clear_listed_at),
            )
            api.offers.patch(args.id, changes)
            print(f"[INFO] Patched offer {args.id}")
        elif args.action == "delete":
            api.offers.delete(args.id)
            print(f"[INFO] Deleted offer {args.id}")
    return 0


def main(argv: Optional[List[str]] = None, api: Optional[CardTrackerAPI] = None) -> int:
    args = build_parser().parse_args(argv)
    if api is None:
        setup_logging(logging.DEBUG if args.verbose else logging.INFO)
        install_excepthook()
        api = CardTrackerAPI()
    try:
        return _run(api, args)
    except (CardTrackerError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
