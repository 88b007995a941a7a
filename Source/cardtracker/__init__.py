"""Client library for the card collection and price tracking backend.

Contains the session store, the cards/expansions/offers clients, and the
navigation guard that keeps anonymous users on the login screen.
"""

from .client import CardTrackerAPI  # re-export for convenience
from .session_manager import SessionObserver, SessionStore
from .models import UNSET, Card, CardPatch, Expansion, ExpansionPatch, NewOffer, OfferPatch, OfferPoint, Session
