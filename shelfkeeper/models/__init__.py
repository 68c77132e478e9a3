import importlib

from shelfkeeper.models.batch import Batch
from shelfkeeper.models.product import Product
from shelfkeeper.models.store_profile import StoreProfile


def import_all_models() -> None:
    for module_name in (
        "shelfkeeper.models.batch",
        "shelfkeeper.models.product",
        "shelfkeeper.models.store_profile",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Batch",
    "Product",
    "StoreProfile",
    "import_all_models",
]
