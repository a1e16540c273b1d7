"""
Static Movie Catalog

Movies, theatres and daily showtime slots shipped with the service as JSON.
"""

from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson

from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.app.interface.i_movie_catalog import IMovieCatalog
from cinema_booking.service.booking.domain.entity.movie_entity import Movie, Showtime, Theatre


CATALOG_DATA_PATH = Path(__file__).parent / 'catalog_data.json'

# Extra slots offered when a movie has fewer than MIN_SHOW_TIMES fixed showtimes at a theatre
FALLBACK_SHOW_TIMES = ('10:30', '14:00', '16:45', '19:30', '21:00', '22:30')
MIN_SHOW_TIMES = 4
BOOKABLE_DAYS = 7


class StaticMovieCatalog(IMovieCatalog):
    def __init__(self, *, data_path: Path = CATALOG_DATA_PATH) -> None:
        data: Dict[str, List[Dict[str, Any]]] = orjson.loads(data_path.read_bytes())
        self._movies = {m['id']: Movie(**m) for m in data['movies']}
        self._theatres = {t['id']: Theatre(**t) for t in data['theatres']}
        self._showtimes = [Showtime(**s) for s in data['showtimes']]
        Logger.base.info(
            f'🎬 [CATALOG] Loaded {len(self._movies)} movies, {len(self._theatres)} theatres, '
            f'{len(self._showtimes)} showtimes'
        )

    def list_movies(self, *, status: Optional[str] = None) -> List[Movie]:
        movies = list(self._movies.values())
        if status:
            movies = [m for m in movies if m.status == status]
        return movies

    def get_movie(self, *, movie_id: str) -> Optional[Movie]:
        return self._movies.get(movie_id)

    def list_theatres(self) -> List[Theatre]:
        return list(self._theatres.values())

    def get_theatre(self, *, theatre_id: str) -> Optional[Theatre]:
        return self._theatres.get(theatre_id)

    def showtimes_for_movie(self, *, movie_id: str) -> List[Showtime]:
        return [s for s in self._showtimes if s.movie_id == movie_id]

    def theatres_for_movie(self, *, movie_id: str) -> List[Theatre]:
        theatre_ids = dict.fromkeys(s.theatre_id for s in self.showtimes_for_movie(movie_id=movie_id))
        return [self._theatres[tid] for tid in theatre_ids if tid in self._theatres]

    def show_times(self, *, movie_id: str, theatre_id: str) -> List[str]:
        times = [
            s.time
            for s in self._showtimes
            if s.movie_id == movie_id and s.theatre_id == theatre_id
        ]
        if len(times) < MIN_SHOW_TIMES:
            extra = [t for t in FALLBACK_SHOW_TIMES if t not in times]
            times.extend(extra[: MIN_SHOW_TIMES - len(times)])
        return times

    def available_dates(self, *, today: Optional[date] = None) -> List[str]:
        today = today or date.today()
        return [(today + timedelta(days=offset)).isoformat() for offset in range(BOOKABLE_DAYS)]
