"""JSON shapes exchanged with the Drycc controller."""

from .base import Model
from .apps import App, AppCreateRequest, AppUpdateRequest, AppRunRequest, AppLogsRequest
from .config import (
    Config,
    ConfigVar,
    ConfigValue,
    ConfigSet,
    ConfigUnset,
    Healthcheck,
    ContainerProbe,
    Lifecycle,
    LifecycleHandler,
    ExecAction,
    HTTPGetAction,
    TCPSocketAction,
    GRPCAction,
    SleepAction,
    KVPair,
)
from .limits import LimitSpec, LimitPlan
from .pods import Pod, PodType, ContainerState, Command, PodLogsRequest, PodIDs
from .volumes import Volume

__all__ = [
    "Model",
    "App",
    "AppCreateRequest",
    "AppUpdateRequest",
    "AppRunRequest",
    "AppLogsRequest",
    "Config",
    "ConfigVar",
    "ConfigValue",
    "ConfigSet",
    "ConfigUnset",
    "Healthcheck",
    "ContainerProbe",
    "Lifecycle",
    "LifecycleHandler",
    "ExecAction",
    "HTTPGetAction",
    "TCPSocketAction",
    "GRPCAction",
    "SleepAction",
    "KVPair",
    "LimitSpec",
    "LimitPlan",
    "Pod",
    "PodType",
    "ContainerState",
    "Command",
    "PodLogsRequest",
    "PodIDs",
    "Volume",
]
