"""
Tests for the deck manager.

Tests:
- Deck building from a catalog
- Shuffle correctness and uniformity
- Dealing and prompt drawing
"""

import random
from collections import Counter
from itertools import permutations

import pytest

from ..engine_core.deck import DeckManager
from ..engine_core.state import Card
from ..errors import EmptyDeck, InsufficientCards, InvalidInput


def cards(n: int, pack: str = "Test") -> list[Card]:
    return [Card(text=f"card {i}", pack=pack) for i in range(n)]


class TestBuildDecks:
    """Tests for building decks from a catalog."""

    def test_concatenates_packs_in_order(self, catalog):
        responses, prompts = DeckManager().build_decks(catalog)

        assert len(responses) == 30
        assert len(prompts) == 4
        assert responses[0] == Card("Alpha answer 0", "Alpha")
        assert responses[-1] == Card("Beta answer 14", "Beta")
        assert prompts[0].pack == "Alpha"
        assert prompts[-1].pack == "Beta"

    def test_builds_fresh_lists(self, catalog):
        decks = DeckManager()
        first, _ = decks.build_decks(catalog)
        first.clear()

        second, _ = decks.build_decks(catalog)
        assert len(second) == 30


class TestShuffle:
    """Tests for Fisher-Yates shuffle."""

    def test_shuffle_is_permutation(self):
        deck = cards(20)
        shuffled = DeckManager(rng=random.Random(7)).shuffle(deck)

        assert Counter(shuffled) == Counter(deck)

    def test_shuffle_leaves_input_untouched(self):
        deck = cards(10)
        original = list(deck)
        DeckManager(rng=random.Random(7)).shuffle(deck)

        assert deck == original

    def test_shuffle_empty_and_single(self):
        decks = DeckManager()
        assert decks.shuffle([]) == []
        assert decks.shuffle(cards(1)) == cards(1)

    def test_shuffle_is_reproducible_with_seed(self):
        deck = cards(10)
        a = DeckManager(rng=random.Random(99)).shuffle(deck)
        b = DeckManager(rng=random.Random(99)).shuffle(deck)
        assert a == b

    def test_shuffle_uniformity(self):
        """Every permutation of 3 cards appears with equal frequency (chi-square)."""
        deck = cards(3)
        decks = DeckManager(rng=random.Random(2024))
        trials = 6000

        counts = Counter(tuple(decks.shuffle(deck)) for _ in range(trials))

        all_perms = list(permutations(deck))
        assert set(counts) == set(all_perms)

        expected = trials / len(all_perms)
        chi_square = sum((counts[p] - expected) ** 2 / expected for p in all_perms)
        # Critical value for 5 degrees of freedom at p = 0.001
        assert chi_square < 20.52


class TestDeal:
    """Tests for dealing from the front of the deck."""

    def test_deal_takes_from_front(self):
        deck = cards(10)
        dealt, remaining = DeckManager().deal(deck, 3)

        assert dealt == deck[:3]
        assert remaining == deck[3:]

    def test_deal_exact_size(self):
        deck = cards(7)
        dealt, remaining = DeckManager().deal(deck, 7)

        assert dealt == deck
        assert remaining == []

    def test_deal_too_many_fails(self):
        with pytest.raises(InsufficientCards) as exc_info:
            DeckManager().deal(cards(5), 7)

        assert exc_info.value.requested == 7
        assert exc_info.value.available == 5

    def test_deal_negative_fails(self):
        with pytest.raises(InvalidInput):
            DeckManager().deal(cards(5), -1)


class TestDrawPrompt:
    """Tests for drawing prompts from the end of the deck."""

    def test_draw_takes_last_card(self):
        deck = cards(4)
        card, remaining = DeckManager().draw_prompt(deck)

        assert card == deck[-1]
        assert remaining == deck[:-1]
        assert len(deck) == 4

    def test_draw_from_empty_fails(self):
        with pytest.raises(EmptyDeck):
            DeckManager().draw_prompt([])
