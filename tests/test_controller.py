"""Tests for the pick/flip/drop controller."""

import pytest

from builders import card, make_state
from cellar_solitaire.game.controller import PlayerController
from cellar_solitaire.models.card import Rank, Suit
from cellar_solitaire.models.place import Location, Place

C4 = card(Suit.CLUBS, Rank.FOUR)
C5 = card(Suit.CLUBS, Rank.FIVE)
C6 = card(Suit.CLUBS, Rank.SIX)
H9 = card(Suit.HEARTS, Rank.NINE)
D3 = card(Suit.DIAMONDS, Rank.THREE)

FILLER = [
    card(Suit.HEARTS, Rank.TWO),
    card(Suit.HEARTS, Rank.FOUR),
    card(Suit.HEARTS, Rank.SIX),
    card(Suit.HEARTS, Rank.EIGHT),
    card(Suit.HEARTS, Rank.TEN),
    card(Suit.HEARTS, Rank.QUEEN),
    card(Suit.SPADES, Rank.FOUR),
]


def at(place: Place, index: int) -> Location:
    return Location(place=place, index=index)


@pytest.fixture
def controller(make_engine):
    """Run C5,C6 on row 0, H9 on row 1, D3 in extra pile 0."""
    engine = make_engine(make_state(rows={0: [C5, C6], 1: [H9]}, extra={0: [D3]}))
    return PlayerController(engine)


class TestPick:
    """Tests for picking up cards."""

    def test_pick_run(self, controller):
        rng = controller.pick(at(Place.row(0), 1))
        assert rng is not None
        assert rng.cards == [C5, C6]
        assert controller.is_holding

    def test_pick_foundation_refused(self, controller):
        assert controller.pick(at(Place.foundation(0), 0)) is None
        assert not controller.is_holding

    def test_pick_sentinel_refused(self, controller):
        """Test an empty row offers nothing to pick up."""
        assert controller.pick(at(Place.row(5), 0)) is None

    def test_pick_among_hits(self, controller):
        """Test picking resolves overlapping hits by priority."""
        rng = controller.pick([at(Place.extra(0), 1), at(Place.row(1), 1)])
        assert rng.place == Place.row(1)

    def test_pick_cellar_needs_vacant_extra(self, make_engine):
        """Test the cellar card stays while both extra piles are occupied."""
        engine = make_engine(make_state(extra={0: [D3], 1: [H9]}, cellar=[C5]))
        controller = PlayerController(engine)
        assert controller.pick(at(Place.cellar(), 1)) is None

        del engine.state.extra[1][1:]
        assert controller.pick(at(Place.cellar(), 1)) is not None

    def test_pick_replaces_held(self, controller):
        controller.pick(at(Place.row(0), 1))
        controller.flip()
        controller.pick(at(Place.row(1), 1))
        assert controller.engine.state.rows[0] == [52, C5, C6]
        assert controller.held.place == Place.row(1)


class TestFlip:
    """Tests for flipping a held run."""

    def test_flip_reverses_in_place(self, controller):
        controller.pick(at(Place.row(0), 1))
        assert controller.flip()
        assert controller.engine.state.rows[0] == [52, C6, C5]
        assert controller.reversed

    def test_flip_twice_restores(self, controller):
        controller.pick(at(Place.row(0), 1))
        controller.flip()
        controller.flip()
        assert controller.engine.state.rows[0] == [52, C5, C6]
        assert not controller.reversed

    def test_flip_single_card_refused(self, controller):
        controller.pick(at(Place.row(1), 1))
        assert not controller.flip()

    def test_flip_needs_vacant_row(self, make_engine):
        rows = {i: [FILLER[i - 1]] for i in range(1, 7)}
        rows[0] = [C5, C6]
        engine = make_engine(make_state(rows=rows))
        controller = PlayerController(engine)
        assert controller.pick(at(Place.row(0), 1)).size == 2
        engine.state.rows[7].append(FILLER[6])
        assert not controller.flip()

    def test_flip_without_held(self, controller):
        assert not controller.flip()


class TestDrop:
    """Tests for dropping a held run."""

    def test_drop_on_vacant_row(self, controller):
        controller.pick(at(Place.row(1), 1))
        assert controller.drop(at(Place.row(4), 0))
        assert controller.engine.state.rows[4] == [56, H9]
        assert not controller.is_holding

    def test_drop_flipped_run(self, controller):
        controller.pick(at(Place.row(0), 1))
        controller.flip()
        assert controller.drop(at(Place.row(3), 0))
        assert controller.engine.state.rows[3] == [55, C6, C5]
        move = controller.engine.state.history[-1]
        assert move.reversed
        assert move.weight == 2

    def test_failed_drop_unflips(self, controller):
        """Test a refused drop puts the run back in its original order."""
        controller.pick(at(Place.row(0), 1))
        controller.flip()
        assert not controller.drop(at(Place.row(1), 1))
        assert controller.engine.state.rows[0] == [52, C5, C6]
        assert not controller.is_holding
        assert not controller.reversed

    def test_drop_on_own_pile(self, controller):
        """Test dropping back onto the held run's pile is refused."""
        controller.pick(at(Place.row(0), 2))
        assert not controller.drop(at(Place.row(0), 1))
        assert controller.engine.state.rows[0] == [52, C5, C6]

    def test_drop_onto_fitting_card(self, make_engine):
        engine = make_engine(make_state(rows={0: [C4], 1: [C5]}))
        controller = PlayerController(engine)
        controller.pick(at(Place.row(1), 1))
        assert controller.drop(at(Place.row(0), 1))
        assert engine.state.rows[0] == [52, C4, C5]

    def test_drop_without_held(self, controller):
        assert not controller.drop(at(Place.row(4), 0))

    def test_cancel_restores(self, controller):
        controller.pick(at(Place.row(0), 1))
        controller.flip()
        controller.cancel()
        assert controller.engine.state.rows[0] == [52, C5, C6]
        assert not controller.is_holding


class TestControllerUndo:
    """Tests for undo through the controller."""

    def test_undo_refused_while_holding(self, controller):
        controller.pick(at(Place.row(1), 1))
        controller.drop(at(Place.row(4), 0))
        controller.pick(at(Place.row(0), 2))
        assert not controller.undo()
        controller.cancel()
        assert controller.undo()
        assert controller.engine.state.rows[1] == [53, H9]

    def test_undo_flipped_drop(self, controller):
        controller.pick(at(Place.row(0), 1))
        controller.flip()
        controller.drop(at(Place.row(3), 0))
        assert controller.undo()
        assert controller.engine.state.rows[0] == [52, C5, C6]
        assert controller.engine.state.rows[3] == [55]
