"""Itinerary workflow - create, clone, update and delete by travel ID."""

import logging

from tourdesk.app.db.repositories import ItineraryRepository
from tourdesk.app.errors import (
    ClientPhoneConflictError,
    DuplicateTravelIdError,
    InvalidTravelIdError,
    ItineraryNotFoundError,
)
from tourdesk.app.models.common import Company
from tourdesk.app.models.itinerary import (
    Itinerary,
    ItineraryCloneDraft,
    ItineraryDraft,
    ItinerarySummary,
    is_valid_travel_id,
)
from tourdesk.app.services.travel_id import TravelIdGenerator

logger = logging.getLogger(__name__)


class ItineraryService:
    """Coordinates itinerary storage with travel ID allocation."""

    def __init__(
        self,
        itineraries: ItineraryRepository,
        generator: TravelIdGenerator,
    ) -> None:
        self._itineraries = itineraries
        self._generator = generator

    def _check_client_phone(self, client_phone: str, travel_id: str | None = None) -> None:
        existing = self._itineraries.find_by_client_phone(client_phone)
        if existing is not None and existing.travel_id != travel_id:
            raise ClientPhoneConflictError(client_phone, existing.travel_id)

    def create(self, draft: ItineraryDraft) -> Itinerary:
        """Create an itinerary, allocating a travel ID unless one was supplied.

        A supplied travel ID (typically from a clone draft) must be well formed
        for the draft's company and still free.

        Raises:
            ClientPhoneConflictError: Client phone used by another itinerary
            InvalidTravelIdError: Supplied travel ID is malformed
            DuplicateTravelIdError: Travel ID taken, including a lost race at insert
            TravelIdAllocationError: No free travel ID could be allocated
        """
        self._check_client_phone(draft.client_phone)

        if draft.travel_id is not None:
            if not is_valid_travel_id(draft.travel_id, draft.company):
                raise InvalidTravelIdError(
                    f"{draft.travel_id} is not a valid travel ID for {draft.company.value}"
                )
            if self._itineraries.exists(draft.travel_id):
                raise DuplicateTravelIdError(draft.travel_id)
            travel_id = draft.travel_id
        else:
            travel_id = self._generator.generate(draft.company)

        itinerary = self._itineraries.add_itinerary(
            draft.model_copy(update={"travel_id": travel_id})
        )
        logger.info(f"Created itinerary travel_id={travel_id} company={draft.company.value}")
        return itinerary

    def get(self, travel_id: str) -> Itinerary:
        """Get an itinerary by travel ID.

        Raises:
            ItineraryNotFoundError: If it does not exist
        """
        itinerary = self._itineraries.get_itinerary(travel_id)
        if itinerary is None:
            raise ItineraryNotFoundError(travel_id)
        return itinerary

    def list_itineraries(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[ItinerarySummary]:
        """List itineraries newest first."""
        return self._itineraries.list_itineraries(
            search=search, company=company, limit=limit, offset=offset
        )

    def clone(self, source_travel_id: str, company: Company | None = None) -> ItineraryCloneDraft:
        """Copy an itinerary's content into a new, unsaved draft.

        Client name, phone and email are left blank; the draft gets a freshly
        allocated travel ID for company (defaults to the source's company).
        """
        source = self.get(source_travel_id)
        target_company = company or source.company

        content = source.content_fields()
        content["company"] = target_company
        travel_id = self._generator.generate(target_company)

        logger.info(f"Cloned itinerary {source_travel_id} into draft travel_id={travel_id}")
        return ItineraryCloneDraft(
            **content, travel_id=travel_id, source_travel_id=source_travel_id
        )

    def update(self, travel_id: str, draft: ItineraryDraft) -> Itinerary:
        """Update an itinerary in place; travel ID and company never change.

        Raises:
            ItineraryNotFoundError: If it does not exist
            ClientPhoneConflictError: Client phone used by another itinerary
        """
        existing = self.get(travel_id)
        self._check_client_phone(draft.client_phone, travel_id)

        updated = self._itineraries.update_itinerary(
            travel_id,
            draft.model_copy(update={"travel_id": travel_id, "company": existing.company}),
        )
        if updated is None:
            raise ItineraryNotFoundError(travel_id)

        logger.info(f"Updated itinerary travel_id={travel_id}")
        return updated

    def delete(self, travel_id: str) -> None:
        """Permanently delete an itinerary and its voucher.

        Raises:
            ItineraryNotFoundError: If it does not exist
        """
        if not self._itineraries.delete_itinerary(travel_id):
            raise ItineraryNotFoundError(travel_id)

        logger.info(f"Deleted itinerary travel_id={travel_id}")
