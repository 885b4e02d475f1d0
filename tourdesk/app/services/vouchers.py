"""Voucher workflow - prefill from an itinerary, CRUD and night edits."""

import logging

from tourdesk.app.db.repositories import ItineraryRepository, VoucherRepository
from tourdesk.app.errors import ItineraryNotFoundError, VoucherExistsError, VoucherNotFoundError
from tourdesk.app.models.common import Company
from tourdesk.app.models.voucher import Voucher, VoucherDraft, VoucherHotelStay, VoucherPrefill
from tourdesk.app.services.nights import allocate_nights

logger = logging.getLogger(__name__)


class VoucherService:
    """Vouchers are keyed by the travel ID of the itinerary they confirm."""

    def __init__(self, vouchers: VoucherRepository, itineraries: ItineraryRepository) -> None:
        self._vouchers = vouchers
        self._itineraries = itineraries

    def prefill(self, travel_id: str) -> VoucherPrefill:
        """Start a voucher from an itinerary's client, nights, cabs and hotels.

        Every stay starts at zero nights; the editor distributes them.
        """
        itinerary = self._itineraries.get_itinerary(travel_id)
        if itinerary is None:
            raise ItineraryNotFoundError(travel_id)

        return VoucherPrefill(
            travel_id=itinerary.travel_id,
            client_name=itinerary.client_name,
            total_nights=itinerary.number_of_nights,
            cab_details=itinerary.cabs,
            hotel_stays=[
                VoucherHotelStay(hotel_name=hotel.hotel_name, description=hotel.hotel_description)
                for hotel in itinerary.hotels
            ],
        )

    def create(self, draft: VoucherDraft) -> Voucher:
        """Issue the voucher for an existing itinerary.

        Raises:
            ItineraryNotFoundError: No itinerary for the travel ID
            VoucherExistsError: A voucher was already issued for it
        """
        if not self._itineraries.exists(draft.travel_id):
            raise ItineraryNotFoundError(draft.travel_id)

        if self._vouchers.get_voucher(draft.travel_id) is not None:
            raise VoucherExistsError(draft.travel_id)

        voucher = self._vouchers.add_voucher(draft)
        logger.info(f"Created voucher travel_id={draft.travel_id}")
        return voucher

    def get(self, travel_id: str) -> Voucher:
        voucher = self._vouchers.get_voucher(travel_id)
        if voucher is None:
            raise VoucherNotFoundError(travel_id)
        return voucher

    def list_vouchers(
        self,
        *,
        search: str | None = None,
        company: Company | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Voucher]:
        return self._vouchers.list_vouchers(
            search=search, company=company, limit=limit, offset=offset
        )

    def update(self, travel_id: str, draft: VoucherDraft) -> Voucher:
        """Replace a voucher's contents; the travel ID in the path wins."""
        updated = self._vouchers.update_voucher(
            travel_id, draft.model_copy(update={"travel_id": travel_id})
        )
        if updated is None:
            raise VoucherNotFoundError(travel_id)

        logger.info(f"Updated voucher travel_id={travel_id}")
        return updated

    def delete(self, travel_id: str) -> None:
        if not self._vouchers.delete_voucher(travel_id):
            raise VoucherNotFoundError(travel_id)

        logger.info(f"Deleted voucher travel_id={travel_id}")

    def edit_nights(self, travel_id: str, index: int, requested_value: int) -> Voucher:
        """Set one stay's nights on a stored voucher and rebalance the rest.

        Raises:
            VoucherNotFoundError: If the voucher does not exist
            NightAllocationError: If index is out of range
        """
        voucher = self.get(travel_id)
        stays = allocate_nights(voucher.hotel_stays, index, requested_value, voucher.total_nights)

        draft = VoucherDraft(
            **voucher.model_dump(exclude={"hotel_stays", "created_at", "updated_at"}),
            hotel_stays=stays,
        )
        return self.update(travel_id, draft)
