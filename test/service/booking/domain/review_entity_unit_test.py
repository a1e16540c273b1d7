"""
Unit tests for Review.create

Test Focus:
1. Review text is required and trimmed
2. Ratings are whole stars from 1 to 5
3. Missing author name falls back to 'Anonymous'
"""

from datetime import datetime, timezone

import pytest

from cinema_booking.platform.exception.exceptions import ValidationError
from cinema_booking.service.booking.domain.entity.review_entity import Review


NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def _create(**overrides: object) -> Review:
    fields: dict = {
        'movie_id': 'movie_1',
        'user_id': 'user-1',
        'user_name': 'Ada',
        'rating': 4,
        'review': 'Great',
        'now': NOW,
    }
    fields.update(overrides)
    return Review.create(**fields)


@pytest.mark.unit
class TestReviewCreate:
    def test_valid_review(self) -> None:
        review = _create(review='  Great pacing \n')

        assert review.review == 'Great pacing'
        assert review.rating == 4
        assert review.created_at == NOW
        assert review.id is None

    @pytest.mark.parametrize('text', ['', '   ', '\n\t'])
    def test_blank_text_is_rejected(self, text: str) -> None:
        with pytest.raises(ValidationError, match='Please write a review'):
            _create(review=text)

    @pytest.mark.parametrize('rating', [0, 6, -1, True])
    def test_rating_out_of_range_is_rejected(self, rating: int) -> None:
        with pytest.raises(ValidationError, match='Rating must be between 1 and 5 stars'):
            _create(rating=rating)

    @pytest.mark.parametrize('rating', [1, 5])
    def test_rating_bounds_are_accepted(self, rating: int) -> None:
        assert _create(rating=rating).rating == rating

    @pytest.mark.parametrize('name', [None, ''])
    def test_missing_name_is_anonymous(self, name: object) -> None:
        assert _create(user_name=name).user_name == 'Anonymous'

    def test_created_at_defaults_to_now(self) -> None:
        review = _create(now=None)

        assert review.created_at is not None
        assert review.created_at.tzinfo is not None
