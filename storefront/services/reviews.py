# storefront/services/reviews.py
from collections import Counter
from typing import Iterable

from storefront.schemas.review import Review, ReviewStats


def summarize_reviews(reviews: Iterable[Review]) -> ReviewStats:
    """Total, per-rating counts (highest rating first) and the mean rating (0 when empty)."""
    ratings = [r.rating for r in reviews]
    if not ratings:
        return ReviewStats()
    counts = Counter(ratings)
    return ReviewStats(
        total_reviews=len(ratings),
        rating_counts={rating: counts[rating] for rating in sorted(counts, reverse=True)},
        average_rating=sum(ratings) / len(ratings),
    )
