import logging
from typing import Optional

from weblearn.config import CATEGORIES, CATEGORY_TITLES, HISTORY_LIMIT, WEAK_SCORE_THRESHOLD
from weblearn.quiz.scoring import ScoreRecord, round_half_up
from weblearn.storage.store import ProgressStore, StorageKey

logger = logging.getLogger(__name__)


def overall_progress(progress: dict) -> int:
    """Mean of the latest per-category percentage; missing categories count as 0."""
    total = 0
    for category in CATEGORIES:
        value = progress.get(category, 0)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            value = 0
        total += int(value)
    return round_half_up(total, len(CATEGORIES))


async def record_score(store: ProgressStore, record: ScoreRecord) -> dict:
    """Append the record to history and refresh per-category and overall progress.

    Returns the updated progress mapping.
    """
    async with store.lock:
        results = await store.get(StorageKey.QUIZ_RESULTS, {})
        history = results.get(record.category)
        if not isinstance(history, list):
            history = []
        history.append(record.to_dict())
        results[record.category] = history

        progress = await store.get(StorageKey.PROGRESS, {})
        progress[record.category] = record.percentage
        progress["overall"] = overall_progress(progress)

        await store.set(StorageKey.QUIZ_RESULTS, results)
        await store.set(StorageKey.PROGRESS, progress)

    logger.info("Progress for owner %s: %s", store.owner_id, progress)
    return progress


async def get_progress(store: ProgressStore) -> dict:
    """Per-category latest percentage plus 'overall', defaults filled in."""
    progress = await store.get(StorageKey.PROGRESS, {})
    result = {}
    for category in CATEGORIES:
        value = progress.get(category)
        result[category] = value if isinstance(value, int) and not isinstance(value, bool) else 0
    result["overall"] = overall_progress(result)
    return result


async def get_history(store: ProgressStore, category: Optional[str] = None) -> list[ScoreRecord]:
    """Recorded attempts, newest first. Unreadable entries are skipped."""
    results = await store.get(StorageKey.QUIZ_RESULTS, {})
    categories = [category] if category else list(results)
    records = []
    for cat in categories:
        entries = results.get(cat)
        if not isinstance(entries, list):
            continue
        for entry in entries:
            record = ScoreRecord.from_dict(entry) if isinstance(entry, dict) else None
            if record is not None:
                records.append(record)
    records.sort(key=lambda r: r.timestamp, reverse=True)
    return records


async def format_history(store: ProgressStore) -> str:
    """Format recent quiz history as a readable text."""
    records = await get_history(store)

    if not records:
        return "📭 You have not taken any quizzes yet. Start your first one!"

    lines = ["📋 Recent quizzes:\n"]
    for r in records[:HISTORY_LIMIT]:
        title = CATEGORY_TITLES.get(r.category, r.category)
        lines.append(f"{title} — {r.correct_count}/{r.total_count} ({r.percentage}%)")

    return "\n".join(lines)


async def format_weak_areas(store: ProgressStore) -> str:
    """Categories whose latest score is below the threshold."""
    progress = await store.get(StorageKey.PROGRESS, {})
    weak = [
        (c, progress[c]) for c in CATEGORIES
        if isinstance(progress.get(c), int) and progress[c] < WEAK_SCORE_THRESHOLD
    ]

    if not weak:
        return ""

    lines = ["\n⚠️ Topics to brush up on:\n"]
    for category, score in sorted(weak, key=lambda w: w[1]):
        lines.append(f"{CATEGORY_TITLES[category]} — latest score {score}%")

    return "\n".join(lines)


async def format_overall_stats(store: ProgressStore) -> str:
    """Format per-category and overall progress."""
    progress = await get_progress(store)
    records = await get_history(store)

    lines = ["\n📊 Progress:"]
    for category in CATEGORIES:
        lines.append(f"{CATEGORY_TITLES[category]}: {progress[category]}%")
    lines.append(f"Overall: {progress['overall']}%")
    if records:
        lines.append(f"Quizzes taken: {len(records)}")
    return "\n".join(lines)
