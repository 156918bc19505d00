"""
STOCK VALUE RESOLVER
Effective delta and current price of an instrument at a given instant

RULES:
✅ A scheduled delta replaces delta_pct once apply_at has been reached
✅ The stored record is never rewritten; resolve from raw fields every time
✅ Prices round to 2 decimals, half away from zero (ROUND_HALF_UP)
✅ Unusable inputs give an unavailable price (None), never 0, never an error
"""

from datetime import datetime
from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Any, Iterable, List, Optional

from timeless.domain.models import Instrument, ResolvedPrice, Trend
from timeless.utils.numbers import to_number
from timeless.utils.time import to_instant

PRICE_QUANT = Decimal("0.01")
HUNDRED = Decimal("100")
UNAVAILABLE_LABEL = "—"


def effective_delta(instrument: Instrument, now: datetime) -> Optional[Decimal]:
    """Delta in force at ``now``; None when the chosen delta is not numeric."""
    now_instant = to_instant(now)
    apply_at = to_instant(instrument.apply_at)
    scheduled_reached = (
        instrument.scheduled_delta is not None
        and apply_at is not None
        and now_instant is not None
        and apply_at <= now_instant
    )
    if scheduled_reached:
        return to_number(instrument.scheduled_delta)
    return to_number(instrument.delta_pct)


def compute_price(base_price: Any, delta: Optional[Decimal]) -> Optional[Decimal]:
    """
    base * (1 + delta / 100), rounded half-up to cents

    Returns None when base_price is not a finite non-negative number or
    delta is unavailable.
    """
    base = to_number(base_price)
    if base is None or base < 0 or delta is None:
        return None
    with localcontext() as ctx:
        # wide enough that only the final quantize rounds
        ctx.prec = max(ctx.prec, _exact_digits(base) + _exact_digits(delta) + 10)
        try:
            price = (base * (HUNDRED + delta)).scaleb(-2)
            return price.quantize(PRICE_QUANT, rounding=ROUND_HALF_UP)
        except DecimalException:
            # exponent beyond the context limits
            return None


def _exact_digits(value: Decimal) -> int:
    # integer digits plus fractional digits plus room for cents
    return max(value.adjusted(), 0) + max(-value.as_tuple().exponent, 0) + 3


def resolve_instrument(instrument: Instrument, now: datetime) -> ResolvedPrice:
    """Resolve effective delta and current price for one instrument"""
    delta = effective_delta(instrument, now)
    return ResolvedPrice(
        effective_delta=delta,
        current_price=compute_price(instrument.base_price, delta),
    )


def display_instruments(instruments: Iterable[Instrument]) -> List[Instrument]:
    """
    Instruments the runner shows, in display order

    Hidden only when is_published is explicitly False. Sorted by order
    ascending; instruments without a usable order follow in fetch order.
    """
    visible = [s for s in instruments if s.is_published is not False]
    return sort_by_order(visible)


def sort_by_order(instruments: Iterable[Instrument]) -> List[Instrument]:
    # sorted() is stable, so ties keep fetch order
    return sorted(instruments, key=_order_key)


def _order_key(instrument: Instrument):
    order = to_number(instrument.order)
    if order is None:
        return (1, Decimal(0))
    return (0, order)


# ------------------------------------------------------------------
# Presentation helpers
# ------------------------------------------------------------------

def trend_of(delta: Optional[Decimal]) -> Trend:
    if delta is None or delta == 0:
        return Trend.FLAT
    return Trend.UP if delta > 0 else Trend.DOWN


def delta_label(delta: Optional[Decimal]) -> str:
    """Whole-percent label such as "+5%", "-3%" or "0%"."""
    if delta is None:
        return UNAVAILABLE_LABEL
    try:
        whole = delta.quantize(Decimal(1), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return UNAVAILABLE_LABEL
    if whole == 0:
        return "0%"
    sign = "+" if whole > 0 else ""
    return f"{sign}{whole}%"


def price_label(price: Optional[Decimal]) -> str:
    if price is None:
        return UNAVAILABLE_LABEL
    return f"{price:,.2f}"
