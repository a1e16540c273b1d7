"""
Unit tests for SeatSelection and pricing

Test Focus:
1. Toggle adds then removes; order of selection is kept
2. Booked seats are a no-op
3. Totals are the sum of tier prices; unknown tiers price as STANDARD
"""

import pytest

from cinema_booking.service.booking.domain.enum.seat_tier import SeatTier
from cinema_booking.service.booking.domain.pricing import price_of, tier_info, total_of
from cinema_booking.service.booking.domain.seat_selection import SeatSelection, ToggleAction
from cinema_booking.service.booking.domain.value_object.seat import Seat


@pytest.fixture
def vip_seat() -> Seat:
    return Seat(row='A', number=1, tier=SeatTier.VIP)


@pytest.fixture
def standard_seat() -> Seat:
    return Seat(row='D', number=3, tier=SeatTier.STANDARD)


@pytest.mark.unit
class TestSeatSelection:
    def test_toggle_adds_then_removes(self, vip_seat: Seat) -> None:
        selection = SeatSelection()

        # Act
        added = selection.toggle(vip_seat)
        removed = selection.toggle(vip_seat)

        # Assert
        assert added.action == ToggleAction.ADD
        assert added.seats == (vip_seat,)
        assert removed.action == ToggleAction.REMOVE
        assert removed.seats == ()
        assert selection.is_empty

    def test_toggle_keeps_selection_order(self, vip_seat: Seat, standard_seat: Seat) -> None:
        selection = SeatSelection()

        selection.toggle(standard_seat)
        selection.toggle(vip_seat)

        assert selection.seat_ids == ['D3', 'A1']

    def test_booked_seat_is_not_selectable(self) -> None:
        # Arrange
        booked = Seat(row='B', number=2, tier=SeatTier.PREMIUM, booked=True)
        selection = SeatSelection()

        # Act
        result = selection.toggle(booked)

        # Assert
        assert result.action is None
        assert result.seats == ()
        assert not selection.is_selected('B', 2)

    def test_seat_identity_is_row_and_number(self, vip_seat: Seat) -> None:
        selection = SeatSelection([vip_seat])
        same_position = Seat(row='A', number=1, tier=SeatTier.VIP)

        result = selection.toggle(same_position)

        assert result.action == ToggleAction.REMOVE
        assert len(selection) == 0

    def test_clear(self, vip_seat: Seat, standard_seat: Seat) -> None:
        selection = SeatSelection([vip_seat, standard_seat])

        selection.clear()

        assert selection.is_empty
        assert selection.seat_ids == []


@pytest.mark.unit
class TestPricing:
    @pytest.mark.parametrize(
        'tier, expected',
        [
            (SeatTier.VIP, 250),
            (SeatTier.PREMIUM, 200),
            (SeatTier.STANDARD, 150),
            (SeatTier.ACCESSIBLE, 100),
            ('DISABLED', 100),
            ('vip', 250),
            ('BALCONY', 150),
            (None, 150),
        ],
    )
    def test_price_of(self, tier: SeatTier | str | None, expected: int) -> None:
        assert price_of(tier) == expected

    def test_tier_labels(self) -> None:
        assert tier_info(SeatTier.PREMIUM).display_label == 'Premium'
        assert tier_info(SeatTier.ACCESSIBLE).display_label == 'Accessible'

    def test_total_of_selection(self, vip_seat: Seat, standard_seat: Seat) -> None:
        assert total_of([vip_seat, standard_seat]) == 400

    def test_total_of_empty_selection_is_zero(self) -> None:
        assert total_of([]) == 0
