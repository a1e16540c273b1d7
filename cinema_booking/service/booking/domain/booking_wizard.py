"""
Booking Wizard

State machine driving one booking session:

    SEAT_SELECTION -> CONTACT_DETAILS -> CONFIRMATION -> SUBMITTING -> DONE
                                                      \-> CONFIRMATION (submission failed)
    any non-terminal step -> ABORTED (user navigated away)

Forward moves are gated: no seats, no contact step; incomplete or malformed
contact details, no confirmation; no signed-in principal, no submission.
A rejected move leaves the step unchanged and records the error message.
"""

from typing import NoReturn, Optional, Protocol

import attrs
from opentelemetry import trace

from cinema_booking.platform.exception.exceptions import (
    AuthenticationRequiredError,
    CustomBaseError,
    DataIntegrityError,
    SeatConflictError,
    SubmissionError,
    SubmissionInProgressError,
    ValidationError,
)
from cinema_booking.platform.logging.loguru_io import Logger
from cinema_booking.service.booking.domain.booking_record_assembler import assemble
from cinema_booking.service.booking.domain.entity.booking_record_entity import BookingRecord
from cinema_booking.service.booking.domain.enum.booking_step import BookingStep
from cinema_booking.service.booking.domain.pricing import total_of
from cinema_booking.service.booking.domain.seat_map import SeatMap
from cinema_booking.service.booking.domain.seat_selection import SeatSelection, ToggleResult
from cinema_booking.service.booking.domain.value_object.contact_details import ContactDetails
from cinema_booking.service.booking.domain.value_object.principal import Principal
from cinema_booking.service.booking.domain.value_object.show_context import ShowContext


class IPrincipalProvider(Protocol):
    def current_principal(self) -> Optional[Principal]: ...


class IBookingSubmitter(Protocol):
    async def submit_booking(self, *, record: BookingRecord) -> str: ...


_PREVIOUS_STEP = {
    BookingStep.CONTACT_DETAILS: BookingStep.SEAT_SELECTION,
    BookingStep.CONFIRMATION: BookingStep.CONTACT_DETAILS,
}


class BookingWizard:
    def __init__(
        self,
        *,
        show: ShowContext,
        seat_map: SeatMap,
        principal_provider: IPrincipalProvider,
        submitter: IBookingSubmitter,
        contact: Optional[ContactDetails] = None,
    ) -> None:
        self.show = show
        self.seat_map = seat_map
        self.principal_provider = principal_provider
        self.submitter = submitter
        self.selection = SeatSelection()
        self.contact = contact or ContactDetails.from_principal(
            principal_provider.current_principal()
        )
        self.step = BookingStep.SEAT_SELECTION
        self.last_error: Optional[str] = None
        self.booking_id: Optional[str] = None
        self.submitted_record: Optional[BookingRecord] = None
        self.tracer = trace.get_tracer(__name__)

    def current_total(self) -> int:
        return total_of(self.selection)

    def _reject(self, error: CustomBaseError) -> NoReturn:
        self.last_error = error.message
        raise error

    def _require_step(self, expected: BookingStep, action: str) -> None:
        if self.step == BookingStep.SUBMITTING:
            self._reject(SubmissionInProgressError('Booking submission already in progress'))
        if self.step != expected:
            self._reject(ValidationError(f'Cannot {action} during step {self.step.value}'))

    @Logger.io
    def toggle_seat(self, seat_id: str) -> ToggleResult:
        self._require_step(BookingStep.SEAT_SELECTION, 'change seats')
        result = self.selection.toggle(self.seat_map.get(seat_id))
        self.last_error = None
        return result

    @Logger.io
    def update_contact(
        self, *, name: Optional[str] = None, email: Optional[str] = None, phone: Optional[str] = None
    ) -> ContactDetails:
        self._require_step(BookingStep.CONTACT_DETAILS, 'edit contact details')
        self.contact = self.contact.update(name=name, email=email, phone=phone)
        return self.contact

    @Logger.io
    def advance(self) -> BookingStep:
        if self.step == BookingStep.SEAT_SELECTION:
            if self.selection.is_empty:
                self._reject(ValidationError('Please select at least one seat'))
            self.step = BookingStep.CONTACT_DETAILS
        elif self.step == BookingStep.CONTACT_DETAILS:
            try:
                self.contact.validate()
            except ValidationError as e:
                self._reject(e)
            self.step = BookingStep.CONFIRMATION
        elif self.step == BookingStep.SUBMITTING:
            self._reject(SubmissionInProgressError('Booking submission already in progress'))
        else:
            self._reject(ValidationError(f'Cannot advance from step {self.step.value}'))
        self.last_error = None
        return self.step

    @Logger.io
    def back(self) -> BookingStep:
        if self.step == BookingStep.SUBMITTING:
            self._reject(SubmissionInProgressError('Booking submission already in progress'))
        previous = _PREVIOUS_STEP.get(self.step)
        if previous is None:
            self._reject(ValidationError(f'Cannot go back from step {self.step.value}'))
        self.step = previous
        self.last_error = None
        return self.step

    @Logger.io
    def abort(self) -> BookingStep:
        """User left the booking flow; a finished booking stays DONE"""
        if self.step == BookingStep.SUBMITTING:
            self._reject(SubmissionInProgressError('Booking submission already in progress'))
        if self.step != BookingStep.DONE:
            self.selection.clear()
            self.step = BookingStep.ABORTED
        return self.step

    @Logger.io
    async def confirm(self) -> str:
        """
        Submit the booking once.

        Raises:
            SubmissionInProgressError: A submission is already running
            ValidationError: Wrong step, empty selection or bad contact details
            AuthenticationRequiredError: Nobody is signed in
            DataIntegrityError: Movie or theatre missing; the session is aborted
            SeatConflictError: A chosen seat was taken meanwhile
            SubmissionError: The store failed
        """
        with self.tracer.start_as_current_span(
            'wizard.confirm',
            attributes={'show.id': self.show.show_id, 'seat.count': len(self.selection)},
        ):
            self._require_step(BookingStep.CONFIRMATION, 'confirm')

            principal = self.principal_provider.current_principal()
            if principal is None:
                self._reject(AuthenticationRequiredError('Please sign in to book tickets'))
            if self.selection.is_empty:
                self._reject(ValidationError('Please select at least one seat'))
            try:
                self.contact.validate()
            except ValidationError as e:
                self._reject(e)

            # No await between the guard above and this line, so a second confirm sees SUBMITTING
            self.step = BookingStep.SUBMITTING
            try:
                record = assemble(
                    show=self.show,
                    selection=self.selection.seats,
                    contact=self.contact,
                    principal=principal,
                )
            except DataIntegrityError as e:
                self.selection.clear()
                self.step = BookingStep.ABORTED
                self._reject(e)

            try:
                booking_id = await self.submitter.submit_booking(record=record)
            except (SeatConflictError, SubmissionError) as e:
                self.step = BookingStep.CONFIRMATION
                self._reject(e)
            except Exception as e:
                self.step = BookingStep.CONFIRMATION
                self.last_error = f'Failed to create booking: {e}'
                raise SubmissionError(self.last_error) from e
            finally:
                # Cancellation and timeouts skip the handlers above; submission must reopen
                if self.step == BookingStep.SUBMITTING:
                    self.step = BookingStep.CONFIRMATION

            self.booking_id = booking_id
            self.submitted_record = attrs.evolve(record, id=booking_id)
            self.step = BookingStep.DONE
            self.last_error = None
            return booking_id
