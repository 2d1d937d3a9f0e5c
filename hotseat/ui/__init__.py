from hotseat.ui.base import GameUI, ManageAction, ManageRequest, PurchaseRequest
from hotseat.ui.autopilot import AutopilotUI

__all__ = [
    "GameUI",
    "ManageAction",
    "ManageRequest",
    "PurchaseRequest",
    "AutopilotUI",
]
