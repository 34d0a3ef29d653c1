import math
from typing import List, Optional

import attrs

from src.service.turf_booking.domain.entity.review_entity import Review


@attrs.define(frozen=True)
class RatingSummary:
    average: float  # one decimal
    total: int


@attrs.define(frozen=True)
class ReviewPage:
    reviews: List[Review]
    page: int
    limit: int
    total: int
    rating: Optional[RatingSummary] = None  # only when listing one venue

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit)


@attrs.define(frozen=True)
class ReviewEligibility:
    can_review: bool
    has_review: bool
    slot_finished: bool
    review: Optional[Review] = None
