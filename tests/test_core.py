"""Tests for the core module (constants, board and game state)."""

import dataclasses

import pytest

from core.constants import (
    Player,
    ElementKind,
    Phase,
    RINGS_PER_PLAYER,
    TOTAL_RINGS,
    RUN_LENGTH,
    POINTS_FOR_WIN,
)
from core.board import Element, Board
from core.game_state import TurnPhase, GameState


# =============================================================================
# Constants Tests
# =============================================================================


class TestConstants:
    """Test enum definitions and rule constants."""

    def test_player_values(self):
        """Players should be B and W."""
        assert Player.BLACK.value == "B"
        assert Player.WHITE.value == "W"
        assert len(Player) == 2

    def test_player_other(self):
        """other should swap the players."""
        assert Player.BLACK.other == Player.WHITE
        assert Player.WHITE.other == Player.BLACK

    def test_rule_constants(self):
        """Five rings each, runs of five, two points to win."""
        assert RINGS_PER_PLAYER == 5
        assert TOTAL_RINGS == 10
        assert RUN_LENGTH == 5
        assert POINTS_FOR_WIN == 2


# =============================================================================
# Element Tests
# =============================================================================


class TestElement:
    """Test board elements."""

    def test_constructors(self):
        """ring() and marker() should set kind and owner."""
        ring = Element.ring(Player.BLACK)
        marker = Element.marker(Player.WHITE)
        assert ring.kind == ElementKind.RING and ring.owner == Player.BLACK
        assert marker.kind == ElementKind.MARKER and marker.owner == Player.WHITE
        assert ring.is_ring() and not ring.is_marker()
        assert marker.is_marker() and not marker.is_ring()

    def test_flipped(self):
        """Flipping swaps the owner and keeps the kind."""
        assert Element.marker(Player.BLACK).flipped() == Element.marker(Player.WHITE)
        assert Element.marker(Player.WHITE).flipped() == Element.marker(Player.BLACK)

    def test_str(self):
        assert str(Element.ring(Player.BLACK)) == "Ring(B)"
        assert str(Element.marker(Player.WHITE)) == "Marker(W)"


# =============================================================================
# Board Tests
# =============================================================================


@pytest.fixture
def board() -> Board:
    """A board with one of each element."""
    return Board({
        (3, 4): Element.ring(Player.BLACK),
        (8, 7): Element.ring(Player.WHITE),
        (6, 6): Element.marker(Player.BLACK),
        (6, 4): Element.marker(Player.WHITE),
    })


class TestBoard:
    """Test the immutable board."""

    def test_empty(self):
        """An empty board has nothing on it."""
        empty = Board.empty()
        assert len(empty) == 0
        assert empty.ring_count() == 0
        for player in Player:
            assert empty.rings(player) == frozenset()
            assert empty.markers(player) == frozenset()

    def test_from_elements_copies_mapping(self):
        """Later changes to the source mapping do not reach the board."""
        elements = {(6, 6): Element.ring(Player.BLACK)}
        board = Board.from_elements(elements)
        elements[(6, 7)] = Element.marker(Player.WHITE)
        assert board.is_free((6, 7))
        assert board == Board({(6, 6): Element.ring(Player.BLACK)})

    def test_element_at(self, board):
        """element_at() returns the element or None."""
        assert board.element_at((3, 4)) == Element.ring(Player.BLACK)
        assert board.element_at((6, 4)) == Element.marker(Player.WHITE)
        assert board.element_at((5, 5)) is None

    def test_is_free(self, board):
        """is_free() ignores board membership."""
        assert not board.is_free((3, 4))
        assert board.is_free((5, 5))
        assert board.is_free((0, 0))

    def test_enumerations(self, board):
        """Per-kind sets should match the map."""
        assert board.rings(Player.BLACK) == {(3, 4)}
        assert board.rings(Player.WHITE) == {(8, 7)}
        assert board.markers(Player.BLACK) == {(6, 6)}
        assert board.markers(Player.WHITE) == {(6, 4)}
        assert board.all_rings() == {(3, 4), (8, 7)}
        assert board.all_markers() == {(6, 6), (6, 4)}
        assert board.ring_count() == 2

    def test_place(self, board):
        """place() returns a new board with the element added."""
        new_board = board.place((5, 5), Element.ring(Player.WHITE))
        assert new_board.element_at((5, 5)) == Element.ring(Player.WHITE)
        assert (5, 5) in new_board.rings(Player.WHITE)
        assert new_board.ring_count() == 3

    def test_place_does_not_mutate(self, board):
        """The original board is unchanged after place()."""
        board.place((5, 5), Element.ring(Player.WHITE))
        assert board.is_free((5, 5))
        assert (5, 5) not in board.rings(Player.WHITE)

    def test_place_occupied_raises(self, board):
        """Placing on an occupied point is a precondition violation."""
        with pytest.raises(ValueError, match="occupied"):
            board.place((3, 4), Element.marker(Player.BLACK))

    def test_remove(self, board):
        """remove() updates both the map and the enumerations."""
        new_board = board.remove((6, 6))
        assert new_board.is_free((6, 6))
        assert new_board.markers(Player.BLACK) == frozenset()
        assert (6, 6) in board.markers(Player.BLACK)

    def test_remove_empty_raises(self, board):
        """Removing from a free point is a precondition violation."""
        with pytest.raises(KeyError):
            board.remove((5, 5))

    def test_replace(self, board):
        """replace() moves a point from one category to another."""
        new_board = board.replace((3, 4), Element.marker(Player.BLACK))
        assert new_board.element_at((3, 4)) == Element.marker(Player.BLACK)
        assert (3, 4) not in new_board.rings(Player.BLACK)
        assert (3, 4) in new_board.markers(Player.BLACK)

    def test_place_remove_round_trip(self, board):
        """place() then remove() gives back an equal board."""
        round_trip = board.place((5, 5), Element.marker(Player.WHITE)).remove((5, 5))
        assert round_trip == board
        assert hash(round_trip) == hash(board)
        for player in Player:
            assert round_trip.rings(player) == board.rings(player)
            assert round_trip.markers(player) == board.markers(player)

    def test_each_point_in_one_category(self, board):
        """Every occupied point appears in exactly one enumeration."""
        categories = [board.rings(p) for p in Player] + [board.markers(p) for p in Player]
        for coord in board.elements():
            assert sum(coord in cat for cat in categories) == 1

    def test_elements_is_a_copy(self, board):
        """Mutating the returned map does not affect the board."""
        elements = board.elements()
        elements[(5, 5)] = Element.ring(Player.BLACK)
        assert board.is_free((5, 5))
        assert board.ring_count() == 2


# =============================================================================
# Turn Phase Tests
# =============================================================================


class TestTurnPhase:
    """Test the tagged phase value."""

    def test_slide_ring_carries_origin(self):
        phase = TurnPhase.slide_ring((3, 4))
        assert phase.kind == Phase.SLIDE_RING
        assert phase.origin == (3, 4)

    def test_slide_ring_requires_origin(self):
        """SLIDE_RING without an origin cannot be built."""
        with pytest.raises(ValueError):
            TurnPhase(Phase.SLIDE_RING)

    def test_other_phases_reject_origin(self):
        """Only SLIDE_RING takes an origin."""
        with pytest.raises(ValueError):
            TurnPhase(Phase.PLACE_MARKER, (3, 4))

    def test_list_origin_normalized(self):
        """A list origin is stored as a tuple, so the phase stays hashable."""
        phase = TurnPhase(Phase.SLIDE_RING, [6, 6])
        assert phase.origin == (6, 6)
        assert phase == TurnPhase.slide_ring((6, 6))
        assert hash(phase) == hash(TurnPhase.slide_ring((6, 6)))

    def test_dict_form(self):
        """to_dict() includes the origin as a list."""
        assert TurnPhase.slide_ring((3, 4)).to_dict() == {"name": "slide_ring", "origin": [3, 4]}
        assert TurnPhase.remove_run().to_dict() == {"name": "remove_run", "origin": None}
        assert TurnPhase.from_dict({"name": "slide_ring", "origin": [3, 4]}) == TurnPhase.slide_ring((3, 4))

    def test_unknown_phase_name(self):
        with pytest.raises(ValueError):
            TurnPhase.from_dict({"name": "pseudo_turn", "origin": None})


# =============================================================================
# Game State Tests
# =============================================================================


class TestGameState:
    """Test the immutable game state."""

    def test_initial_state(self):
        """Empty board, ring placement, BLACK to move, no points."""
        state = GameState.create_initial_state()
        assert state.active_player == Player.BLACK
        assert state.phase == TurnPhase.place_ring()
        assert len(state.board) == 0
        assert state.score_black == 0
        assert state.score_white == 0
        assert state == GameState()

    def test_frozen(self):
        """GameState cannot be modified in place."""
        state = GameState.create_initial_state()
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.score_black = 3

    def test_score_helpers(self):
        state = GameState(score_black=1, score_white=0)
        assert state.score(Player.BLACK) == 1
        assert state.score(Player.WHITE) == 0
        scored = state.with_point_for(Player.WHITE)
        assert scored.score_white == 1
        assert state.score_white == 0

    def test_active_pieces(self, board):
        state = GameState(active_player=Player.WHITE, board=board)
        assert state.active_rings() == {(8, 7)}
        assert state.active_markers() == {(6, 4)}

    def test_dict_round_trip(self, board):
        """from_dict(to_dict()) keeps every field, including the slide origin."""
        state = GameState(
            active_player=Player.WHITE,
            phase=TurnPhase.slide_ring((6, 6)),
            board=board,
            score_black=1,
            score_white=2,
        )
        data = state.to_dict()
        assert data["active_player"] == "W"
        assert data["phase"] == {"name": "slide_ring", "origin": [6, 6]}
        assert {"coord": [3, 4], "kind": "ring", "owner": "B"} in data["board"]
        assert GameState.from_dict(data) == state

    def test_from_dict_duplicate_coordinate(self):
        data = GameState().to_dict()
        data["board"] = [
            {"coord": [6, 6], "kind": "ring", "owner": "B"},
            {"coord": [6, 6], "kind": "marker", "owner": "W"},
        ]
        with pytest.raises(ValueError, match="Duplicate"):
            GameState.from_dict(data)

    def test_state_hash(self, board):
        """Equal states hash equally; any change changes the hash."""
        a = GameState(board=board)
        b = GameState(board=Board(board.elements()))
        assert a.state_hash() == b.state_hash()
        assert a.state_hash() != a.with_point_for(Player.BLACK).state_hash()

    def test_validate_clean(self, board):
        assert GameState.create_initial_state().validate() == []
        assert GameState(board=board).validate() == []

    def test_validate_too_many_rings(self):
        rings = {(6, c): Element.ring(Player.BLACK) for c in range(2, 8)}
        errors = GameState(board=Board(rings)).validate()
        assert any("6 rings" in e for e in errors)

    def test_validate_off_board(self):
        errors = GameState(board=Board({(0, 0): Element.marker(Player.BLACK)})).validate()
        assert any("off-board" in e for e in errors)

    def test_validate_slide_origin(self):
        """The slide origin must hold the mover's marker."""
        state = GameState(phase=TurnPhase.slide_ring((6, 6)))
        errors = state.validate()
        assert any("Slide origin" in e for e in errors)

    def test_str(self, board):
        text = str(GameState(board=board))
        assert "place_ring" in text
        assert "B=0 W=0" in text
