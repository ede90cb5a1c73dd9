from .phase_10_elevate import ElevatePhase
from .phase_20_update_manager import UpdateManagerPhase
from .phase_30_subsystem import SubsystemPhase
from .phase_40_drivers import DriversPhase
from .phase_50_packages import PackagesPhase
from .phase_60_cleanup import CleanupPhase
from .phase_70_restart_prompt import RestartPromptPhase

__all__ = [
    "ElevatePhase",
    "UpdateManagerPhase",
    "SubsystemPhase",
    "DriversPhase",
    "PackagesPhase",
    "CleanupPhase",
    "RestartPromptPhase",
]
