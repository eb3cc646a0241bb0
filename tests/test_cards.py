"""Tests for card, hand and deck representation."""

import pytest

from splitpot.game.cards import (
    Card, Hand, Deck, Rank, Suit, parse_cards, to_cards,
)
from splitpot.game.deck import build_deck, check_duplicates
from splitpot.game.errors import DuplicateCardError, InvalidCardError
from splitpot.game.variants import GameVariant


class TestCard:
    def test_from_string(self):
        card = Card.from_string("As")
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_from_string_ten(self):
        card = Card.from_string("Th")
        assert card.rank == Rank.TEN
        assert card.suit == Suit.HEARTS

    def test_from_string_lowercase(self):
        card = Card.from_string("kd")
        assert card.rank == Rank.KING
        assert card.suit == Suit.DIAMONDS

    def test_str(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "As"

    def test_from_string_invalid_rank(self):
        with pytest.raises(ValueError):
            Card.from_string("Xs")

    def test_from_string_invalid_suit(self):
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_equality(self):
        assert Card.from_string("As") == Card.from_string("As")
        assert Card.from_string("As") != Card.from_string("Ah")
        assert len({Card.from_string("As"), Card.from_string("As")}) == 1

    def test_prime_and_bit(self):
        assert Card.from_string("2c").prime == 2
        assert Card.from_string("Ad").prime == 41
        assert Card.from_string("2c").bit == 1
        assert Card.from_string("Ah").bit == 1 << 12


class TestParsing:
    def test_parse_compact(self):
        assert [str(c) for c in parse_cards("AsKhTd")] == ["As", "Kh", "Td"]

    def test_parse_separated(self):
        assert [str(c) for c in parse_cards("As Kh, Td")] == ["As", "Kh", "Td"]

    def test_parse_empty(self):
        assert parse_cards("") == []

    def test_parse_odd_length(self):
        with pytest.raises(ValueError):
            parse_cards("AsK")

    def test_to_cards_mixed(self):
        cards = to_cards([Card.from_string("As"), "Kh", "QdJc"])
        assert [str(c) for c in cards] == ["As", "Kh", "Qd", "Jc"]


class TestHand:
    def test_from_string(self):
        hand = Hand.from_string("AsKhQdJc")
        assert len(hand) == 4
        assert str(hand) == "AsKhQdJc"

    def test_keeps_order(self):
        hand = Hand.from_string("2cAs")
        assert [str(c) for c in hand] == ["2c", "As"]

    def test_coerce(self):
        hand = Hand.from_string("AsKh")
        assert Hand.coerce(hand) is hand
        assert Hand.coerce("AsKh") == hand
        assert Hand.coerce(["As", "Kh"]) == hand


class TestDeck:
    def test_full_deck(self):
        assert len(Deck()) == 52

    def test_short_deck(self):
        deck = Deck(GameVariant.SHORT_DECK.ranks)
        assert len(deck) == 36
        assert Card.from_string("6s") in deck
        assert Card.from_string("5s") not in deck

    def test_remove(self):
        deck = Deck()
        card = Card.from_string("As")
        deck.remove([card])
        assert len(deck) == 51
        assert card not in deck

    def test_reset(self):
        deck = Deck()
        deck.remove(parse_cards("AsKsQs"))
        deck.reset()
        assert len(deck) == 52


class TestBuildDeck:
    def test_removes_placed_cards(self, board_flop):
        hands = [Hand.from_string("AsAh"), Hand.from_string("QdQc")]
        deck = build_deck(hands, board_flop, GameVariant.TEXAS_HOLDEM)

        assert len(deck) == 52 - 4 - 3
        placed = set(board_flop) | {c for h in hands for c in h}
        assert not placed & set(deck)

    def test_short_deck_size(self):
        hands = [Hand.from_string("AsAh"), Hand.from_string("QdQc")]
        deck = build_deck(hands, [], GameVariant.SHORT_DECK)
        assert len(deck) == 36 - 4

    def test_omaha_size(self):
        hands = [Hand.from_string("AsAhKsKh"), Hand.from_string("QdQcJdJc")]
        deck = build_deck(hands, parse_cards("2c3c4c"), GameVariant.OMAHA_HOLDEM)
        assert len(deck) == 52 - 8 - 3

    def test_duplicate_across_hands(self):
        hands = [Hand.from_string("AsKh"), Hand.from_string("AsQd")]
        with pytest.raises(DuplicateCardError, match="As"):
            build_deck(hands, [], GameVariant.TEXAS_HOLDEM)

    def test_duplicate_hand_and_board(self, board_flop):
        hands = [Hand.from_string("KsQh"), Hand.from_string("JsTh")]
        with pytest.raises(DuplicateCardError) as excinfo:
            build_deck(hands, board_flop, GameVariant.TEXAS_HOLDEM)
        assert excinfo.value.cards == [Card.from_string("Ks")]

    def test_check_duplicates_clean(self, board_flop):
        check_duplicates([Hand.from_string("AsAh")], board_flop)

    def test_card_outside_short_deck(self):
        hands = [Hand.from_string("AsAh"), Hand.from_string("5d5c")]
        with pytest.raises(InvalidCardError):
            build_deck(hands, [], GameVariant.SHORT_DECK)
