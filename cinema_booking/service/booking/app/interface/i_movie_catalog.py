from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from cinema_booking.service.booking.domain.entity.movie_entity import Movie, Showtime, Theatre


class IMovieCatalog(ABC):
    """Read-only movie, theatre and showtime data"""

    @abstractmethod
    def list_movies(self, *, status: Optional[str] = None) -> List[Movie]:
        pass

    @abstractmethod
    def get_movie(self, *, movie_id: str) -> Optional[Movie]:
        pass

    @abstractmethod
    def list_theatres(self) -> List[Theatre]:
        pass

    @abstractmethod
    def get_theatre(self, *, theatre_id: str) -> Optional[Theatre]:
        pass

    @abstractmethod
    def showtimes_for_movie(self, *, movie_id: str) -> List[Showtime]:
        pass

    @abstractmethod
    def theatres_for_movie(self, *, movie_id: str) -> List[Theatre]:
        pass

    @abstractmethod
    def show_times(self, *, movie_id: str, theatre_id: str) -> List[str]:
        pass

    @abstractmethod
    def available_dates(self, *, today: Optional[date] = None) -> List[str]:
        pass
