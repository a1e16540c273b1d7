"""
Pricing Engine

Tier -> unit price lookup and selection totals. Totals are always recomputed
from the seats; nothing here caches a price.
"""

from typing import Iterable, Mapping, Union

import attrs

from cinema_booking.service.booking.domain.enum.seat_tier import SeatTier
from cinema_booking.service.booking.domain.value_object.seat import Seat


@attrs.define(frozen=True)
class TierInfo:
    tier: SeatTier
    unit_price: int
    display_label: str


SEAT_TIER_CATALOG: Mapping[SeatTier, TierInfo] = {
    SeatTier.VIP: TierInfo(tier=SeatTier.VIP, unit_price=250, display_label='VIP'),
    SeatTier.PREMIUM: TierInfo(tier=SeatTier.PREMIUM, unit_price=200, display_label='Premium'),
    SeatTier.STANDARD: TierInfo(tier=SeatTier.STANDARD, unit_price=150, display_label='Standard'),
    SeatTier.ACCESSIBLE: TierInfo(
        tier=SeatTier.ACCESSIBLE, unit_price=100, display_label='Accessible'
    ),
}


def tier_info(tier: Union[SeatTier, str, None]) -> TierInfo:
    """Catalog entry for a tier; anything unrecognized is priced as STANDARD"""
    try:
        resolved = SeatTier(tier)
    except ValueError:
        return SEAT_TIER_CATALOG[SeatTier.STANDARD]
    return SEAT_TIER_CATALOG.get(resolved, SEAT_TIER_CATALOG[SeatTier.STANDARD])


def price_of(tier: Union[SeatTier, str, None]) -> int:
    return tier_info(tier).unit_price


def total_of(selection: Iterable[Seat]) -> int:
    return sum(price_of(seat.tier) for seat in selection)
