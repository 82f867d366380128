from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    mode_counter: Counter[str] = Counter(s.get("mode", "unknown") for s in searches)

    # Blank queries are "browse all" visits, not searches for something
    query_counter: Counter[str] = Counter()
    for s in searches:
        query = (s.get("query") or "").strip().lower()
        if query:
            query_counter[query] += 1
    top_queries = [{"query": q, "count": c} for q, c in query_counter.most_common(10)]

    zero_results = sum(1 for s in searches if s.get("results_returned", 0) == 0)

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "searches_by_mode": dict(mode_counter),
        "top_queries": top_queries,
        "zero_result_searches": zero_results,
        "zero_result_rate": round(zero_results / total * 100, 1) if total else 0.0,
    }
