"""Price trend aggregation.

Turns the raw samples from the trend service (unordered, several per day,
occasionally malformed) into a one-point-per-day series for charting, puts
the live price on today's point, and derives the summary statistics.

``today`` is always passed in by the caller so results do not depend on the
wall clock.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from ..common.models import PriceTrendRecord
from ..common.money import HUNDRED, round2, to_decimal
from .models import PresentationState, PriceObservation, TrendStatistics, TrendView

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


def _parse_date(value: object) -> date | None:
    """Day part of a date, datetime or ISO-8601 string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def parse_observation(record: object) -> PriceObservation | None:
    """Normalize one raw sample, or return None if it is unusable.

    Accepts a ``PriceObservation``, a ``PriceTrendRecord`` or a plain dict
    with ``date`` and ``price`` keys. Unparsable dates, missing or
    non-numeric prices and negative prices are rejected.
    """
    if isinstance(record, PriceObservation):
        return record
    if isinstance(record, PriceTrendRecord):
        raw_date, raw_price = record.date, record.price
    elif isinstance(record, dict):
        raw_date, raw_price = record.get("date"), record.get("price")
    else:
        logger.warning("Dropping trend sample of unexpected type: %r", record)
        return None

    day = _parse_date(raw_date)
    if day is None:
        logger.warning("Dropping trend sample with bad date: %r", raw_date)
        return None

    price = to_decimal(raw_price)
    if price is None or price < 0:
        logger.warning("Dropping trend sample with bad price on %s: %r", day, raw_price)
        return None

    return PriceObservation(date=day, price=price)


def parse_observations(raw: Iterable[object]) -> list[PriceObservation]:
    """Parse every usable sample, keeping input order."""
    parsed = [parse_observation(record) for record in raw]
    return [obs for obs in parsed if obs is not None]


def deduplicate(raw: Iterable[object]) -> list[PriceObservation]:
    """One observation per day, the lowest price seen that day, oldest first."""
    lowest: dict[date, Decimal] = {}
    for obs in parse_observations(raw):
        existing = lowest.get(obs.date)
        if existing is None or obs.price < existing:
            lowest[obs.date] = obs.price

    return [PriceObservation(date=day, price=lowest[day]) for day in sorted(lowest)]


def _live_price(reference_price: object) -> Decimal | None:
    """The live price, or None when it is missing, unparsable or negative."""
    live = to_decimal(reference_price)
    if live is None or live < 0:
        return None
    return live


def with_live_today(
    series: Iterable[PriceObservation],
    today: date,
    reference_price: object,
) -> list[PriceObservation]:
    """Replace today's point with the live price.

    Only an existing point for ``today`` is replaced; no point is added when
    the series has no sample for today.
    """
    live = _live_price(reference_price)
    if live is None:
        return list(series)
    return [
        PriceObservation(date=obs.date, price=live) if obs.date == today else obs
        for obs in series
    ]


def compute_statistics(
    display_series: list[PriceObservation],
    raw: Iterable[object],
    today: date,
    reference_price: object,
) -> TrendStatistics:
    """Min, max, net change and today's discount-from-peak.

    ``display_series`` is the deduplicated series with today's point already
    replaced. ``raw`` is the original, undeduplicated input; today's peak is
    taken from it so an earlier, higher reading today is not lost.
    """
    if not display_series:
        return TrendStatistics()

    live = _live_price(reference_price)
    prices = [obs.price for obs in display_series]

    max_price = max(prices)
    if live is not None:
        max_price = max(max_price, live)

    latest_change = prices[-1] - prices[0] if len(prices) > 1 else _ZERO

    today_prices = [obs.price for obs in parse_observations(raw) if obs.date == today]
    today_peak = max(today_prices) if today_prices else None

    today_discount = None
    if (
        today_peak is not None
        and live is not None
        and today_peak > 0
        and today_peak > live
    ):
        today_discount = HUNDRED * (today_peak - live) / today_peak

    return TrendStatistics(
        min_price=min(prices),
        max_price=max_price,
        latest_change=latest_change,
        today_peak_price=today_peak,
        today_discount_percent=today_discount,
    )


def build_trend_view(
    raw: Iterable[object] | None,
    reference_price: object,
    today: date,
) -> TrendView:
    """Run the whole pipeline for one render: dedupe, substitute, summarize."""
    samples = list(raw or [])
    series = deduplicate(samples)
    if not series:
        return TrendView.empty()

    display = with_live_today(series, today, reference_price)
    stats = compute_statistics(display, samples, today, reference_price)
    logger.debug(
        "Trend view: %d raw samples -> %d points (min=%s, max=%s)",
        len(samples),
        len(display),
        stats.min_price,
        stats.max_price,
    )
    return TrendView(
        state=PresentationState.READY,
        series=tuple(display),
        statistics=stats,
    )


def format_today_discount(stats: TrendStatistics) -> str | None:
    """Callout text such as ``今日优惠 ↓33.3% (最高¥15.00)``."""
    if stats.today_discount_percent is None or stats.today_peak_price is None:
        return None
    percent = stats.today_discount_percent.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"今日优惠 ↓{percent}% (最高¥{round2(stats.today_peak_price)})"
