"""Shapes of an app's configuration: env values, limits, lifecycle hooks and healthchecks.

Probe and action shapes carry `__str__` renderings used when displaying a
configuration; absent actions render as ``N/A``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .base import Model


def _or_na(value: Any) -> str:
    return str(value) if value is not None else "N/A"


@dataclass
class KVPair(Model):
    name: str = ""
    value: str = ""

    def __str__(self) -> str:
        return f"{self.name}={self.value}"


@dataclass
class ExecAction(Model):
    command: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Command=[{' '.join(self.command)}]"


@dataclass
class HTTPGetAction(Model):
    _aliases = {"http_headers": "httpHeaders"}
    _nested = {"http_headers": (list, KVPair)}

    path: str | None = None
    port: int = 0
    http_headers: Optional[List[KVPair]] = None

    def __str__(self) -> str:
        headers = " ".join(str(h) for h in self.http_headers or [])
        return f'Path="{self.path or ""}" Port={self.port} HTTPHeaders=[{headers}]'


@dataclass
class TCPSocketAction(Model):
    port: int = 0

    def __str__(self) -> str:
        return f"Port={self.port}"


@dataclass
class GRPCAction(Model):
    port: int = 0
    service: str | None = None

    def __str__(self) -> str:
        return f'Port={self.port} Service="{self.service or ""}"'


@dataclass
class SleepAction(Model):
    seconds: int = 0

    def __str__(self) -> str:
        return f"Seconds={self.seconds}"


@dataclass
class LifecycleHandler(Model):
    _aliases = {"http_get": "httpGet", "tcp_socket": "tcpSocket"}
    _nested = {
        "exec": (None, ExecAction),
        "http_get": (None, HTTPGetAction),
        "sleep": (None, SleepAction),
        "tcp_socket": (None, TCPSocketAction),
    }

    exec: Optional[ExecAction] = None
    http_get: Optional[HTTPGetAction] = None
    sleep: Optional[SleepAction] = None
    tcp_socket: Optional[TCPSocketAction] = None

    def __str__(self) -> str:
        return "\n".join(
            [
                f"Exec Probe: {_or_na(self.exec)}",
                f"HTTP GET Action: {_or_na(self.http_get)}",
                f"Sleep Action: {_or_na(self.sleep)}",
                f"TCP Socket Action: {_or_na(self.tcp_socket)}",
            ]
        )


@dataclass
class Lifecycle(Model):
    """Container lifecycle hooks.

    A handler sent as null removes it: ``Lifecycle().mark_null("post_start")``.
    """

    _aliases = {"post_start": "postStart", "pre_stop": "preStop", "stop_signal": "stopSignal"}
    _nested = {"post_start": (None, LifecycleHandler), "pre_stop": (None, LifecycleHandler)}

    post_start: Optional[LifecycleHandler] = None
    pre_stop: Optional[LifecycleHandler] = None
    stop_signal: str | None = None


@dataclass
class ContainerProbe(Model):
    _aliases = {
        "initial_delay_seconds": "initialDelaySeconds",
        "timeout_seconds": "timeoutSeconds",
        "period_seconds": "periodSeconds",
        "success_threshold": "successThreshold",
        "failure_threshold": "failureThreshold",
        "http_get": "httpGet",
        "tcp_socket": "tcpSocket",
    }
    _nested = {
        "exec": (None, ExecAction),
        "grpc": (None, GRPCAction),
        "http_get": (None, HTTPGetAction),
        "tcp_socket": (None, TCPSocketAction),
    }

    initial_delay_seconds: int = 0
    timeout_seconds: int = 0
    period_seconds: int = 0
    success_threshold: int = 0
    failure_threshold: int = 0
    exec: Optional[ExecAction] = None
    grpc: Optional[GRPCAction] = None
    http_get: Optional[HTTPGetAction] = None
    tcp_socket: Optional[TCPSocketAction] = None

    def __str__(self) -> str:
        return "\n".join(
            [
                f"Initial Delay (seconds): {self.initial_delay_seconds}",
                f"Timeout (seconds): {self.timeout_seconds}",
                f"Period (seconds): {self.period_seconds}",
                f"Success Threshold: {self.success_threshold}",
                f"Failure Threshold: {self.failure_threshold}",
                f"Exec Probe: {_or_na(self.exec)}",
                f"GRPC Probe: {_or_na(self.grpc)}",
                f"HTTP GET Probe: {_or_na(self.http_get)}",
                f"TCP Socket Probe: {_or_na(self.tcp_socket)}",
            ]
        )


@dataclass
class Healthcheck(Model):
    """Probes of one process type; use `mark_null` to remove a probe."""

    _aliases = {
        "startup_probe": "startupProbe",
        "liveness_probe": "livenessProbe",
        "readiness_probe": "readinessProbe",
    }
    _nested = {
        "startup_probe": (None, ContainerProbe),
        "liveness_probe": (None, ContainerProbe),
        "readiness_probe": (None, ContainerProbe),
    }

    startup_probe: Optional[ContainerProbe] = None
    liveness_probe: Optional[ContainerProbe] = None
    readiness_probe: Optional[ContainerProbe] = None


@dataclass
class ConfigVar(Model):
    _keep_null = frozenset({"value"})

    name: str = ""
    value: Any = None


@dataclass
class ConfigValue(ConfigVar):
    """A config variable scoped to a process type and/or a group."""

    ptype: str | None = None
    group: str | None = None


@dataclass
class ConfigSet(Model):
    """Body of POST /v2/apps/<app id>/config/."""

    _nested = {"values": (list, ConfigValue)}

    values: List[ConfigValue] = field(default_factory=list)


@dataclass
class ConfigUnset(Model):
    """Body of POST /v2/apps/<app id>/config/; every value is sent as null."""

    _nested = {"values": (list, ConfigValue)}

    values: List[ConfigValue] = field(default_factory=list)


@dataclass
class Config(Model):
    """An app's configuration.

    `owner` cannot be changed here (see `drycc.resources.apps.transfer`);
    `app`, `created`, `updated` and `uuid` are set by the controller.
    `limits` maps process types to limit plans, `timeout` maps process types to
    a termination grace period in seconds.
    """

    _aliases = {"timeout": "termination_grace_period"}
    _nested = {
        "values": (list, ConfigValue),
        "lifecycle": (dict, Lifecycle),
        "healthcheck": (dict, Healthcheck),
    }

    owner: str | None = None
    app: str | None = None
    values: Optional[List[ConfigValue]] = None
    values_refs: Optional[Dict[str, List[str]]] = None
    limits: Optional[Dict[str, Any]] = None
    timeout: Optional[Dict[str, Any]] = None
    lifecycle: Optional[Dict[str, Lifecycle]] = None
    healthcheck: Optional[Dict[str, Healthcheck]] = None
    tags: Optional[Dict[str, Dict[str, Any]]] = None
    registry: Optional[Dict[str, Dict[str, Any]]] = None
    created: str | None = None
    updated: str | None = None
    uuid: str | None = None
