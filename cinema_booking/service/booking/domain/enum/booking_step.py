"""
Booking Step Enum - Domain Value Object

Steps of the booking wizard. SUBMITTING is transient and blocks a second confirm.
"""

from enum import StrEnum


class BookingStep(StrEnum):
    SEAT_SELECTION = 'seat_selection'
    CONTACT_DETAILS = 'contact_details'
    CONFIRMATION = 'confirmation'
    SUBMITTING = 'submitting'
    DONE = 'done'
    ABORTED = 'aborted'

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStep.DONE, BookingStep.ABORTED)
