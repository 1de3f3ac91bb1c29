"""
Entry counts and emotion frequencies over calendar periods.
"""

from datetime import date, datetime
from typing import Dict, Tuple, Union

from catalog import CatalogGateway
from diary_store import DiaryStore
from periods import ASCENDING, PeriodType, resolve


def count_for_period(
    store: DiaryStore,
    owner: str,
    period: PeriodType,
    anchor: Union[date, datetime],
) -> Tuple[int, int]:
    """Return ``(entries written, days in the period)``."""
    span = resolve(period, anchor)
    return store.count_in_range(owner, span.start, span.end), span.length


def emotion_frequency(
    store: DiaryStore,
    catalog: CatalogGateway,
    owner: str,
    period: PeriodType,
    anchor: Union[date, datetime],
) -> Dict[str, int]:
    """
    Count how often each emotion was tagged in the period.

    Every catalog emotion is present in the result, at zero when unused. An
    entry tagging the same emotion twice counts it twice.
    """
    counts = {name: 0 for name in catalog.all_emotion_names()}
    span = resolve(period, anchor)
    for entry in store.list_by_range(owner, span.start, span.end, ASCENDING):
        for emotion in entry.emotions:
            counts[emotion] = counts.get(emotion, 0) + 1
    return counts
