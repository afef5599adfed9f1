"""Driver package"""
from .adb import AdbShell
from .artifact_capture import ArtifactCapture
from .controller import StepExecutor
from .session import LifecycleController, remote_driver

__all__ = [
    "AdbShell",
    "ArtifactCapture",
    "StepExecutor",
    "LifecycleController",
    "remote_driver",
]
