"""Tests for the order status state machine: valid moves, skips, terminals, actors."""

import pytest

from bazaar.domain.enums import OrderStatus
from bazaar.domain.errors import InvalidTransition, UnauthorizedTransition
from bazaar.domain.lifecycle import (
    STATUS_METADATA,
    allowed_targets,
    check_actor,
    check_transition,
    is_terminal,
)

BUYER, SELLER, STRANGER = 1, 2, 3


class TestTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            (OrderStatus.PENDING, OrderStatus.CONFIRMED),
            (OrderStatus.CONFIRMED, OrderStatus.PREPARING),
            (OrderStatus.PREPARING, OrderStatus.READY),
            (OrderStatus.READY, OrderStatus.COMPLETED),
        ],
    )
    def test_happy_path_moves_one_step(self, current, target):
        check_transition(current, target)

    @pytest.mark.parametrize(
        "current",
        [OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.READY],
    )
    def test_cancel_from_any_open_status(self, current):
        check_transition(current, OrderStatus.CANCELLED)

    def test_cannot_skip_confirmed(self):
        with pytest.raises(InvalidTransition):
            check_transition(OrderStatus.PENDING, OrderStatus.PREPARING)

    def test_cannot_jump_to_ready(self):
        with pytest.raises(InvalidTransition):
            check_transition(OrderStatus.PENDING, OrderStatus.READY)

    def test_cannot_go_backwards(self):
        with pytest.raises(InvalidTransition):
            check_transition(OrderStatus.READY, OrderStatus.CONFIRMED)

    def test_cannot_stay_in_place(self):
        with pytest.raises(InvalidTransition):
            check_transition(OrderStatus.CONFIRMED, OrderStatus.CONFIRMED)

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_completed_is_final(self, target):
        with pytest.raises(InvalidTransition):
            check_transition(OrderStatus.COMPLETED, target)

    @pytest.mark.parametrize("target", list(OrderStatus))
    def test_cancelled_is_final(self, target):
        with pytest.raises(InvalidTransition):
            check_transition(OrderStatus.CANCELLED, target)


class TestActors:
    def test_seller_may_advance(self):
        check_actor(SELLER, BUYER, SELLER, OrderStatus.PENDING, OrderStatus.CONFIRMED)

    def test_seller_may_cancel(self):
        check_actor(SELLER, BUYER, SELLER, OrderStatus.PREPARING, OrderStatus.CANCELLED)

    def test_buyer_may_acknowledge_receipt(self):
        check_actor(BUYER, BUYER, SELLER, OrderStatus.READY, OrderStatus.COMPLETED)

    def test_buyer_may_not_confirm(self):
        with pytest.raises(UnauthorizedTransition):
            check_actor(BUYER, BUYER, SELLER, OrderStatus.PENDING, OrderStatus.CONFIRMED)

    def test_buyer_may_not_cancel(self):
        with pytest.raises(UnauthorizedTransition):
            check_actor(BUYER, BUYER, SELLER, OrderStatus.PENDING, OrderStatus.CANCELLED)

    def test_buyer_may_not_complete_before_ready(self):
        with pytest.raises(UnauthorizedTransition):
            check_actor(BUYER, BUYER, SELLER, OrderStatus.PREPARING, OrderStatus.COMPLETED)

    def test_stranger_may_do_nothing(self):
        with pytest.raises(UnauthorizedTransition):
            check_actor(STRANGER, BUYER, SELLER, OrderStatus.READY, OrderStatus.COMPLETED)

    def test_unauthorized_is_an_invalid_transition(self):
        assert issubclass(UnauthorizedTransition, InvalidTransition)


class TestStatusMetadata:
    def test_every_status_has_metadata(self):
        assert set(STATUS_METADATA) == set(OrderStatus)

    def test_terminal_statuses(self):
        assert {s for s in OrderStatus if is_terminal(s)} == {
            OrderStatus.COMPLETED,
            OrderStatus.CANCELLED,
        }

    def test_allowed_targets_of_pending(self):
        assert allowed_targets(OrderStatus.PENDING) == {
            OrderStatus.CONFIRMED,
            OrderStatus.CANCELLED,
        }

    def test_terminal_has_no_targets(self):
        assert allowed_targets(OrderStatus.COMPLETED) == set()
