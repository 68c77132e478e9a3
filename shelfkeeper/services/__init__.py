from shelfkeeper.services.dashboard_service import dashboard_summary, inventory_listing, report_summary
from shelfkeeper.services.store_gateway import GatewayFactory, build_gateway_factory
from shelfkeeper.services.workspace import InventoryWorkspace, OperationResult, OperationState

__all__ = [
    "GatewayFactory",
    "InventoryWorkspace",
    "OperationResult",
    "OperationState",
    "build_gateway_factory",
    "dashboard_summary",
    "inventory_listing",
    "report_summary",
]
