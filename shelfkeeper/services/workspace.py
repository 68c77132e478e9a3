import logging
import secrets
import time
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Callable, Optional

from shelfkeeper.core.constants import BATCH_STATUSES
from shelfkeeper.core.enrichment import EnrichedBatch, enrich, index_products
from shelfkeeper.core.errors import NotAuthenticatedError, StoreError
from shelfkeeper.core.expiry_rules import AlertSettings, default_alert_settings
from shelfkeeper.core.records import BatchRecord, ProductRecord, StoreProfileRecord
from shelfkeeper.core.stats import ReportSummary, build_report

logger = logging.getLogger(__name__)


class OperationState(str, Enum):
    PENDING = "pending"
    APPLIED = "applied"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a locally-applied change and its remote write.

    ``previous`` is the snapshot taken before the local change was made.
    """

    state: OperationState
    previous: tuple
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == OperationState.APPLIED and self.error is None


def new_batch_id() -> str:
    return "batch-{}-{}".format(int(time.time() * 1000), secrets.token_hex(2))


class InventoryWorkspace:
    """The caller's working copy of products, batches and profile.

    Derived views (enrichment, stats) are recomputed from whatever snapshot
    is held here; nothing is cached between calls.
    """

    def __init__(
        self,
        gateway,
        *,
        alert_settings: Optional[AlertSettings] = None,
        today: Callable[[], date] = date.today,
    ):
        self.gateway = gateway
        self.alert_settings = alert_settings or default_alert_settings()
        self._today = today
        self.products: tuple[ProductRecord, ...] = ()
        self.batches: tuple[BatchRecord, ...] = ()
        self.profile: StoreProfileRecord = StoreProfileRecord.default()

    @property
    def user_id(self):
        return self.gateway.user_id

    def today(self) -> date:
        return self._today()

    def load(self) -> "InventoryWorkspace":
        try:
            batches = self.gateway.get_batches()
            products = self.gateway.get_products()
            profile = self.gateway.get_profile()
        except NotAuthenticatedError:
            raise
        except StoreError:
            logger.exception("Failed to load data", extra={"user_id": self.user_id})
            raise
        self.batches = tuple(batches)
        self.products = tuple(products)
        self.profile = profile
        return self

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def enriched(self) -> list[EnrichedBatch]:
        return enrich(self.batches, self.products, self.today())

    def enriched_all(self) -> list[EnrichedBatch]:
        return enrich(self.batches, self.products, self.today(), active_only=False)

    def find_batch(self, batch_id: str) -> Optional[EnrichedBatch]:
        for batch in self.enriched_all():
            if batch.id == batch_id:
                return batch
        return None

    def find_product(self, barcode: str) -> Optional[ProductRecord]:
        return index_products(self.products).get(str(barcode or "").strip())

    def report(self) -> ReportSummary:
        return build_report(self.batches, self.products, self.today())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_batch(self, batch: BatchRecord, new_product: Optional[ProductRecord] = None) -> BatchRecord:
        """Save a new product (if any) and the batch; local state follows the server."""
        if batch.quantity <= 0:
            raise ValueError("quantity must be a positive integer")
        if not batch.id:
            batch = replace(batch, id=new_batch_id())
        if batch.added_date is None:
            batch = replace(batch, added_date=self.today())

        if new_product is not None:
            if new_product.barcode != batch.barcode:
                raise ValueError("New product barcode does not match the batch barcode")
            self.gateway.save_product(new_product)
            self.products = tuple(p for p in self.products if p.barcode != new_product.barcode) + (
                new_product,
            )
        self.gateway.add_batch(batch)
        self.batches = self.batches + (batch,)
        logger.info(
            "Added batch %s (%s x%d)",
            batch.id,
            batch.barcode,
            batch.quantity,
            extra={"user_id": self.user_id, "batch_id": batch.id},
        )
        return batch

    def update_batch_status(self, batch_id: str, status: str) -> OperationResult:
        """Apply a status change locally, write it, and roll back if the write fails."""
        if status not in BATCH_STATUSES:
            raise ValueError("Unknown batch status {!r}".format(status))
        if not any(batch.id == batch_id for batch in self.batches):
            raise LookupError("Batch {} not found".format(batch_id))

        result = OperationResult(state=OperationState.PENDING, previous=self.batches)
        self.batches = tuple(
            replace(batch, status=status) if batch.id == batch_id else batch
            for batch in result.previous
        )

        try:
            self.gateway.update_batch_status(batch_id, status)
        except (StoreError, NotAuthenticatedError) as exc:
            logger.error(
                "Status sync failed for %s: %s",
                batch_id,
                exc,
                extra={"user_id": self.user_id, "batch_id": batch_id},
            )
            self.batches = result.previous
            return replace(
                result,
                state=OperationState.ROLLED_BACK,
                error="Could not update status. Check connection.",
            )
        return replace(result, state=OperationState.APPLIED)

    def update_profile(self, profile: StoreProfileRecord) -> OperationResult:
        """Apply the profile locally, then persist it.

        A failed save is reported but the local profile is kept.
        """
        result = OperationResult(state=OperationState.PENDING, previous=(self.profile,))
        self.profile = profile
        try:
            self.gateway.save_profile(profile)
        except (StoreError, NotAuthenticatedError) as exc:
            logger.error(
                "Failed to save store profile: %s",
                exc,
                extra={"user_id": self.user_id},
            )
            return replace(
                result,
                state=OperationState.APPLIED,
                error="Failed to save store profile.",
            )
        logger.info("Store profile saved", extra={"user_id": self.user_id})
        return replace(result, state=OperationState.APPLIED)


__all__ = [
    "InventoryWorkspace",
    "OperationResult",
    "OperationState",
    "new_batch_id",
]
