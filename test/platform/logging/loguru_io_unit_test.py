"""
Unit tests for the Logger.io decorator and its masking helpers
"""

import pytest

from cinema_booking.platform.exception.exceptions import NotFoundError
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.platform.logging.loguru_io_utils import (
    MAX_CONTENT_LENGTH,
    mask_sensitive,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMasking:
    def test_sensitive_keyword_values_are_hidden(self) -> None:
        assert should_mask_keyword('user_phone', '+1 555 123 4567') == '********'
        assert should_mask_keyword('seat_id', 'A1') == 'A1'

    def test_sensitive_fragments_in_repr_are_hidden(self) -> None:
        masked = mask_sensitive("ContactDetails(name='Ada', phone='+1 555 123 4567')")

        assert '555' not in masked
        assert "name='Ada'" in masked

    def test_plain_values_pass_through(self) -> None:
        assert mask_sensitive(42) == 42

    def test_long_content_is_truncated(self) -> None:
        truncated = truncate_content('x' * (MAX_CONTENT_LENGTH + 10))

        assert truncated.endswith(f'<{MAX_CONTENT_LENGTH + 10} chars>')


@pytest.mark.unit
class TestLoggerIo:
    def test_sync_return_value_passes_through(self) -> None:
        @Logger.io
        def add(a: int, b: int) -> int:
            return a + b

        assert add(1, 2) == 3

    @pytest.mark.asyncio
    async def test_async_exception_is_reraised(self) -> None:
        @Logger.io
        async def lookup(*, seat_id: str) -> None:
            raise NotFoundError(f'Seat {seat_id} does not exist')

        with pytest.raises(NotFoundError):
            await lookup(seat_id='Z9')

    def test_reraise_false_swallows_into_none(self) -> None:
        @Logger.io(reraise=False)
        def explode() -> int:
            raise RuntimeError('boom')

        assert explode() is None
