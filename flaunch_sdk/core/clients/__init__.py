from flaunch_sdk.core.clients.PositionManagerClient import (
    POSITION_MANAGER_CLIENTS,
    ReadAnyPositionManager,
    ReadFlaunchPositionManager,
    ReadFlaunchPositionManagerV1_1,
    ReadPositionManager,
)

__all__ = [
    "POSITION_MANAGER_CLIENTS",
    "ReadAnyPositionManager",
    "ReadFlaunchPositionManager",
    "ReadFlaunchPositionManagerV1_1",
    "ReadPositionManager",
]
