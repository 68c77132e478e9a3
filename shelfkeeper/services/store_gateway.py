"""Persistence gateway: owner-scoped reads and writes of products, batches and the store profile.

Two backends implement the same interface. ``database`` stores rows through
SQLAlchemy; ``simulated`` keeps seeded demo data in process memory. The choice
is made once, from configuration, when the :class:`GatewayFactory` is built.
"""
import logging
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from datetime import date

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from shelfkeeper.core.constants import BATCH_STATUSES
from shelfkeeper.core.dates import normalize_date
from shelfkeeper.core.demo_data import DEMO_PRODUCTS, demo_batches
from shelfkeeper.core.errors import ConfigurationError, NotAuthenticatedError, StoreError
from shelfkeeper.core.records import BatchRecord, ProductRecord, StoreProfileRecord, parse_category
from shelfkeeper.models.batch import Batch
from shelfkeeper.models.product import Product
from shelfkeeper.models.store_profile import StoreProfile

logger = logging.getLogger(__name__)

PERSISTENCE_BACKENDS = ("database", "simulated")


def _require_user(user_id) -> str:
    value = str(user_id or "").strip()
    if not value:
        raise NotAuthenticatedError()
    return value


def _validate_status(status: str) -> str:
    value = str(status or "").strip().lower()
    if value not in BATCH_STATUSES:
        raise ValueError(
            "Unknown batch status {!r}; expected one of {}".format(status, ", ".join(BATCH_STATUSES))
        )
    return value


class PersistenceGateway(ABC):
    def __init__(self, user_id):
        self.user_id = _require_user(user_id)

    @abstractmethod
    def get_products(self) -> list[ProductRecord]:
        ...

    @abstractmethod
    def save_product(self, product: ProductRecord) -> None:
        ...

    @abstractmethod
    def get_batches(self) -> list[BatchRecord]:
        ...

    @abstractmethod
    def add_batch(self, batch: BatchRecord) -> None:
        ...

    @abstractmethod
    def update_batch_status(self, batch_id: str, status: str) -> None:
        ...

    @abstractmethod
    def get_profile(self) -> StoreProfileRecord:
        ...

    @abstractmethod
    def save_profile(self, profile: StoreProfileRecord) -> None:
        ...


def _product_record(row: Product) -> ProductRecord:
    return ProductRecord(
        barcode=row.barcode,
        name=row.name,
        category=parse_category(row.category),
        price=float(row.price or 0.0),
    )


def _batch_record(row: Batch) -> BatchRecord:
    return BatchRecord(
        id=row.id,
        barcode=row.barcode,
        expiry_date=normalize_date(row.expiry_date),
        quantity=int(row.quantity),
        status=row.status,
        added_date=normalize_date(row.added_date),
    )


def _profile_record(row: StoreProfile) -> StoreProfileRecord:
    default = StoreProfileRecord.default()
    return StoreProfileRecord(
        store_name=row.store_name or "",
        owner_name=row.owner_name or "",
        email=row.email or "",
        phone=row.phone or "",
        currency=row.currency or default.currency,
        default_markdown_percent=(
            float(row.default_markdown_percent)
            if row.default_markdown_percent is not None
            else default.default_markdown_percent
        ),
    )


class SqlPersistenceGateway(PersistenceGateway):
    def __init__(self, session_factory, user_id):
        super().__init__(user_id)
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str):
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(
                "Store operation %s failed",
                operation,
                extra={"user_id": self.user_id, "operation": operation},
            )
            raise StoreError("Failed to {}".format(operation.replace("_", " "))) from exc
        finally:
            db.close()

    def get_products(self) -> list[ProductRecord]:
        with self._session("get_products") as db:
            rows = (
                db.execute(
                    select(Product)
                    .where(Product.user_id == self.user_id)
                    .order_by(Product.id)
                )
                .scalars()
                .all()
            )
            return [_product_record(row) for row in rows]

    def save_product(self, product: ProductRecord) -> None:
        with self._session("save_product") as db:
            row = (
                db.execute(
                    select(Product).where(
                        Product.user_id == self.user_id,
                        Product.barcode == product.barcode,
                    )
                )
                .scalars()
                .first()
            )
            if row is None:
                row = Product(user_id=self.user_id, barcode=product.barcode)
                db.add(row)
            row.name = product.name
            row.category = parse_category(product.category).value
            row.price = float(product.price)

    def get_batches(self) -> list[BatchRecord]:
        with self._session("get_batches") as db:
            rows = (
                db.execute(
                    select(Batch)
                    .where(Batch.user_id == self.user_id)
                    .order_by(Batch.created_at, Batch.id)
                )
                .scalars()
                .all()
            )
            return [_batch_record(row) for row in rows]

    def add_batch(self, batch: BatchRecord) -> None:
        status = _validate_status(batch.status)
        with self._session("add_batch") as db:
            db.add(
                Batch(
                    id=batch.id,
                    user_id=self.user_id,
                    barcode=batch.barcode,
                    expiry_date=batch.expiry_date,
                    quantity=batch.quantity,
                    status=status,
                    added_date=batch.added_date or date.today(),
                )
            )

    def update_batch_status(self, batch_id: str, status: str) -> None:
        status = _validate_status(status)
        with self._session("update_batch_status") as db:
            result = db.execute(
                update(Batch)
                .where(Batch.id == batch_id, Batch.user_id == self.user_id)
                .values(status=status)
            )
            if result.rowcount == 0:
                raise StoreError("Batch {} not found".format(batch_id))

    def get_profile(self) -> StoreProfileRecord:
        with self._session("get_profile") as db:
            row = db.get(StoreProfile, self.user_id)
            if row is None:
                return StoreProfileRecord.default()
            return _profile_record(row)

    def save_profile(self, profile: StoreProfileRecord) -> None:
        with self._session("save_profile") as db:
            row = db.get(StoreProfile, self.user_id)
            if row is None:
                row = StoreProfile(user_id=self.user_id)
                db.add(row)
            row.store_name = profile.store_name
            row.owner_name = profile.owner_name
            row.email = profile.email
            row.phone = profile.phone
            row.currency = profile.currency
            row.default_markdown_percent = float(profile.default_markdown_percent)


class SimulatedBackend:
    """Process-local stand-in for the hosted store, seeded with demo data per user."""

    def __init__(self, *, seed: bool = True):
        self._seed = seed
        self._lock = threading.Lock()
        self._users: dict[str, dict] = {}

    def state_for(self, user_id: str) -> dict:
        with self._lock:
            state = self._users.get(user_id)
            if state is None:
                state = {
                    "products": list(DEMO_PRODUCTS) if self._seed else [],
                    "batches": demo_batches() if self._seed else [],
                    "profile": None,
                }
                self._users[user_id] = state
            return state

    @property
    def lock(self):
        return self._lock


class SimulatedPersistenceGateway(PersistenceGateway):
    def __init__(self, backend: SimulatedBackend, user_id):
        super().__init__(user_id)
        self._backend = backend
        self._state = backend.state_for(self.user_id)

    def get_products(self) -> list[ProductRecord]:
        return list(self._state["products"])

    def save_product(self, product: ProductRecord) -> None:
        product = replace(product, category=parse_category(product.category), price=float(product.price))
        with self._backend.lock:
            products = self._state["products"]
            for index, existing in enumerate(products):
                if existing.barcode == product.barcode:
                    products[index] = product
                    return
            products.append(product)

    def get_batches(self) -> list[BatchRecord]:
        return list(self._state["batches"])

    def add_batch(self, batch: BatchRecord) -> None:
        batch = replace(batch, status=_validate_status(batch.status))
        with self._backend.lock:
            if any(existing.id == batch.id for existing in self._state["batches"]):
                raise StoreError("Batch {} already exists".format(batch.id))
            self._state["batches"].append(batch)

    def update_batch_status(self, batch_id: str, status: str) -> None:
        status = _validate_status(status)
        with self._backend.lock:
            batches = self._state["batches"]
            for index, existing in enumerate(batches):
                if existing.id == batch_id:
                    batches[index] = replace(existing, status=status)
                    return
        raise StoreError("Batch {} not found".format(batch_id))

    def get_profile(self) -> StoreProfileRecord:
        return self._state["profile"] or StoreProfileRecord.default()

    def save_profile(self, profile: StoreProfileRecord) -> None:
        with self._backend.lock:
            self._state["profile"] = profile


class GatewayFactory:
    def __init__(self, backend: str, *, session_factory=None, simulated_backend=None):
        backend = str(backend or "").strip().lower()
        if backend not in PERSISTENCE_BACKENDS:
            raise ConfigurationError(
                "PERSISTENCE_BACKEND must be one of {}".format(", ".join(PERSISTENCE_BACKENDS))
            )
        if backend == "database" and session_factory is None:
            raise ConfigurationError("A session factory is required for the database backend")
        self.backend = backend
        self._session_factory = session_factory
        self._simulated = simulated_backend
        if backend == "simulated" and self._simulated is None:
            self._simulated = SimulatedBackend()

    def for_user(self, user_id) -> PersistenceGateway:
        if self.backend == "simulated":
            return SimulatedPersistenceGateway(self._simulated, user_id)
        return SqlPersistenceGateway(self._session_factory, user_id)


def build_gateway_factory(settings, session_factory=None) -> GatewayFactory:
    backend = str(settings.PERSISTENCE_BACKEND or "").strip().lower()
    if backend == "database" and session_factory is None:
        from shelfkeeper.database.session import SessionLocal

        session_factory = SessionLocal
    logger.info("Persistence backend: %s", backend or "<unset>")
    return GatewayFactory(backend, session_factory=session_factory)


__all__ = [
    "GatewayFactory",
    "PERSISTENCE_BACKENDS",
    "PersistenceGateway",
    "SimulatedBackend",
    "SimulatedPersistenceGateway",
    "SqlPersistenceGateway",
    "build_gateway_factory",
]
