from flaunch_sdk.adapters.flaunch_adapter.adapter import FlaunchAdapter

__all__ = ["FlaunchAdapter"]
