"""
Adaptive selection rules.

These functions only look at the attempt objects handed to them (anything
with ``question_id``, ``question.topic_id``, ``is_correct`` and
``attempted_at``), so they are usable with ORM rows and with plain test
doubles alike.
"""
from collections import defaultdict
from datetime import datetime

LOW_PROFICIENCY = 0.4
HIGH_PROFICIENCY = 0.8

SECONDS_PER_DAY = 24 * 60 * 60


def topic_proficiency(attempts) -> dict[int, float]:
    stats: dict[int, dict[str, int]] = {}
    for attempt in attempts:
        topic_id = attempt.question.topic_id
        if topic_id is None:
            continue
        s = stats.setdefault(topic_id, {"correct": 0, "total": 0})
        s["total"] += 1
        if attempt.is_correct:
            s["correct"] += 1
    return {topic_id: s["correct"] / s["total"] for topic_id, s in stats.items()}


def mean_proficiency(proficiency: dict[int, float]) -> float:
    if not proficiency:
        return 0.0
    return sum(proficiency.values()) / len(proficiency)


def difficulty_order(proficiency: dict[int, float]) -> str:
    """Return "asc" (easy first) or "desc" (hard first)."""
    avg = mean_proficiency(proficiency)
    if avg < LOW_PROFICIENCY:
        return "asc"
    if avg > HIGH_PROFICIENCY:
        return "desc"
    # Middle band keeps the easy-first ordering.
    return "asc"


def group_by_question(attempts) -> dict[int, list]:
    """Group attempts per question, keeping the newest-first order of the input."""
    grouped = defaultdict(list)
    for attempt in attempts:
        grouped[attempt.question_id].append(attempt)
    return grouped


def days_since(moment: datetime, now: datetime) -> float:
    return (now - moment).total_seconds() / SECONDS_PER_DAY


def is_due(question_attempts: list, now: datetime) -> bool:
    if not question_attempts:
        return True
    last = question_attempts[0]
    elapsed = days_since(last.attempted_at, now)
    if last.is_correct:
        correct_count = sum(1 for a in question_attempts if a.is_correct)
        return elapsed >= 2 ** correct_count
    return elapsed >= 1


def apply_spaced_repetition(questions, recent_attempts, now: datetime) -> list:
    # Attempts outside the recent window are treated as if they never happened.
    by_question = group_by_question(recent_attempts)
    return [q for q in questions if is_due(by_question.get(q.id, []), now)]
