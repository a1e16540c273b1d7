from datetime import datetime, timezone
from typing import Optional

import attrs

from cinema_booking.platform.exception.exceptions import ValidationError


MIN_RATING = 1
MAX_RATING = 5


@attrs.define
class Review:
    movie_id: str
    user_id: str
    user_name: str
    rating: int
    review: str
    created_at: Optional[datetime] = None
    id: Optional[str] = None

    @classmethod
    def create(
        cls,
        *,
        movie_id: str,
        user_id: str,
        user_name: Optional[str],
        rating: int,
        review: str,
        now: Optional[datetime] = None,
    ) -> 'Review':
        """
        Raises:
            ValidationError: Empty review text or rating outside 1-5 stars
        """
        text = (review or '').strip()
        if not text:
            raise ValidationError('Please write a review')
        if isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f'Rating must be between {MIN_RATING} and {MAX_RATING} stars')
        return cls(
            movie_id=movie_id,
            user_id=user_id,
            user_name=user_name or 'Anonymous',
            rating=rating,
            review=text,
            created_at=now or datetime.now(timezone.utc),
        )
