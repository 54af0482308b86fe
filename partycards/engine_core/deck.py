"""
Deck Manager - Builds, shuffles and deals card decks.

This module handles:
- Building fresh response/prompt decks from a catalog
- Fisher-Yates shuffling with an injected random source
- Dealing from the front of the response deck
- Drawing prompts from the end of the prompt deck (stack order)

Nothing here mutates its inputs; every operation returns new lists.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .state import Card
from ..errors import EmptyDeck, InsufficientCards, InvalidInput

if TYPE_CHECKING:
    from ..catalog import Catalog


@dataclass
class DeckManager:
    """
    Deck operations bound to one random source.

    Pass a seeded random.Random for deterministic games:

        decks = DeckManager(rng=random.Random(42))
    """
    rng: random.Random = field(default_factory=random.Random)

    def build_decks(self, catalog: Catalog) -> tuple[list[Card], list[Card]]:
        """Concatenate every pack's responses and prompts, in catalog order."""
        response_deck: list[Card] = []
        prompt_deck: list[Card] = []
        for pack in catalog.packs:
            response_deck.extend(pack.responses)
            prompt_deck.extend(pack.prompts)
        return response_deck, prompt_deck

    def shuffle(self, cards: list[Card]) -> list[Card]:
        """Return a uniformly random permutation of `cards`."""
        shuffled = list(cards)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def deal(self, deck: list[Card], count: int) -> tuple[list[Card], list[Card]]:
        """
        Take `count` cards from the front of the deck.

        Returns:
            (dealt cards, remaining deck)

        Raises:
            InsufficientCards: If the deck holds fewer than `count` cards
        """
        if count < 0:
            raise InvalidInput("Cannot deal a negative number of cards", count=count)
        if count > len(deck):
            raise InsufficientCards(requested=count, available=len(deck))
        return list(deck[:count]), list(deck[count:])

    def draw_prompt(self, prompt_deck: list[Card]) -> tuple[Card, list[Card]]:
        """
        Take the last card of the prompt deck.

        Raises:
            EmptyDeck: If there is nothing left to draw
        """
        if not prompt_deck:
            raise EmptyDeck("prompt")
        return prompt_deck[-1], list(prompt_deck[:-1])
