"""Grouping and per-date numbering of thoughts"""
from typing import Any, Dict, Iterable, List, Mapping, Union

from app.models.thought import Thought, ThoughtWithNumber, ThoughtsByDate

ThoughtLike = Union[Thought, Mapping[str, Any]]


def _numbering_key(thought: ThoughtWithNumber):
    # id breaks ties between thoughts created in the same instant
    return (thought.created_at, thought.id)


def to_numbered(thought: ThoughtLike) -> ThoughtWithNumber:
    """Convert a row or Thought into a ThoughtWithNumber with a placeholder number"""
    if isinstance(thought, Thought):
        data = thought.model_dump()
    else:
        data = dict(thought)
    data["number"] = 0
    return ThoughtWithNumber.model_validate(data)


def assign_thought_numbers(thoughts: List[ThoughtWithNumber]) -> bool:
    """
    Renumber one date bucket in place and sort it for display.

    Numbers follow creation order (oldest is 1); the bucket itself ends up
    newest first. Two sorts are needed because the orders are opposite.

    Returns:
        False if the bucket is empty and its key should be dropped.
    """
    if not thoughts:
        return False

    for index, thought in enumerate(sorted(thoughts, key=_numbering_key)):
        thought.number = index + 1

    thoughts.sort(key=_numbering_key, reverse=True)
    return True


def process_thoughts(thoughts: Iterable[ThoughtLike]) -> ThoughtsByDate:
    """Group thoughts by date and number each group"""
    grouped: ThoughtsByDate = {}

    for thought in thoughts:
        numbered = to_numbered(thought)
        grouped.setdefault(numbered.date, []).append(numbered)

    for bucket in grouped.values():
        assign_thought_numbers(bucket)

    return grouped


def merge_and_process_thoughts(
    existing: ThoughtsByDate,
    new_thoughts: Iterable[ThoughtLike],
) -> ThoughtsByDate:
    """
    Merge freshly fetched thoughts into an existing map and renumber.

    Buckets present on both sides are renumbered over their union. A fetched
    row replaces a loaded one with the same id. The map passed in is not
    modified.
    """
    result: ThoughtsByDate = dict(existing)
    processed = process_thoughts(new_thoughts)

    for date, fresh in processed.items():
        if date not in result:
            result[date] = fresh
            continue

        by_id: Dict[str, ThoughtWithNumber] = {t.id: t.model_copy() for t in result[date]}
        for thought in fresh:
            by_id[thought.id] = thought

        combined = list(by_id.values())
        assign_thought_numbers(combined)
        result[date] = combined

    return result


def flatten_thoughts(thoughts: ThoughtsByDate) -> List[ThoughtWithNumber]:
    """All thoughts in a map, newest date first, display order within a date"""
    return [t for date in sorted(thoughts, reverse=True) for t in thoughts[date]]


def find_thought(thoughts: ThoughtsByDate, thought_id: str):
    """Locate a thought by id across all buckets; returns (date, index) or None"""
    for date, bucket in thoughts.items():
        for index, thought in enumerate(bucket):
            if thought.id == thought_id:
                return date, index
    return None
