from __future__ import annotations

from collections import Counter
from typing import Any

from ..venues.data_store import get_venue


def _top(counter: Counter[str], n: int = 10) -> list[dict[str, Any]]:
    return [{"name": name, "count": count} for name, count in counter.most_common(n)]


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    requests = [e for e in events if e["type"] == "personalized_recommendations"]
    total = len(requests)

    # Average response time
    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    empty = sum(1 for r in requests if r.get("results_returned", 0) == 0)

    # Most recommended venues, by name
    venue_counter: Counter[str] = Counter()
    for r in requests:
        for venue_id in r.get("venue_ids", []) or []:
            venue = get_venue(venue_id)
            venue_counter[venue.name if venue else venue_id] += 1

    # Which scoring components explain the results
    reason_counter: Counter[str] = Counter()
    for r in requests:
        for kind in r.get("reason_kinds", []) or []:
            reason_counter[kind] += 1

    unique_users = {r["user_id"] for r in requests if r.get("user_id")}

    # Activity
    favorites_added = sum(1 for e in events if e["type"] == "favorite_added")
    visits = [e for e in events if e["type"] == "visit_logged"]
    ratings = [v["experience_rating"] for v in visits if "experience_rating" in v]
    high_rated = sum(1 for r in ratings if r >= 7)

    return {
        "total_recommendation_requests": total,
        "unique_users": len(unique_users),
        "avg_response_time_ms": avg_time,
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
        "top_recommended_venues": _top(venue_counter),
        "top_reasons": _top(reason_counter),
        "activity": {
            "favorites_added": favorites_added,
            "visits_logged": len(visits),
            "avg_experience_rating": round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
            "high_rated_visit_rate": round(high_rated / len(ratings) * 100, 1) if ratings else 0.0,
        },
    }
