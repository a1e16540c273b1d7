from datetime import datetime

import attrs


@attrs.define(frozen=True)
class FavoriteMovie:
    """A movie saved to a user's favorites list"""

    movie_id: str
    added_at: datetime
