"""Maps tool calls onto orchestrator operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Tuple

from pydantic import BaseModel, ValidationError

from .config import RelaySettings
from .exceptions import ToolRegistrationError, ToolValidationError
from .logger import get_logger
from .tools.catalog import (
    CheckServicesHealthArgs,
    DeployCloudflareWorkerArgs,
    DeployMcpServerArgs,
    GetInfrastructureStatusArgs,
    RestartServiceArgs,
    TriggerAutoRecoveryArgs,
)
from .tools.registry import ToolRegistry

logger = get_logger(__name__)

Params = Dict[str, str]
Shaper = Callable[[Any, RelaySettings], Params]


class Runner(Protocol):
    def run(self, operation: str, params: Mapping[str, str]) -> Any: ...


@dataclass(frozen=True)
class Route:
    """Where a tool goes: the orchestrator operation and how its arguments are flattened."""

    operation: str
    shape: Shaper


def _source_dir(given: Optional[str], name: str, settings: RelaySettings) -> str:
    if given:
        return given
    return f"{settings.source_root.rstrip('/')}/{name}"


def _flag(value: Optional[bool]) -> str:
    # Only an explicit false turns a flag off
    return "false" if value is False else "true"


def shape_deploy_mcp_server(args: DeployMcpServerArgs, settings: RelaySettings) -> Params:
    return {
        "app_name": args.app_name,
        "source_dir": _source_dir(args.source_dir, args.app_name, settings),
        "region": args.region or "dfw",
    }


def shape_deploy_cloudflare_worker(args: DeployCloudflareWorkerArgs, settings: RelaySettings) -> Params:
    return {
        "worker_name": args.worker_name,
        "source_dir": _source_dir(args.source_dir, args.worker_name, settings),
        "env": args.env or "production",
    }


def shape_restart_service(args: RestartServiceArgs, settings: RelaySettings) -> Params:
    params = {"service_name": args.service_name, "service_type": args.service_type}
    if args.health_check_url:
        params["health_check_url"] = args.health_check_url
    return params


def shape_check_services_health(args: CheckServicesHealthArgs, settings: RelaySettings) -> Params:
    params: Params = {}
    if args.service_group:
        params["service_group"] = args.service_group
    if args.service_names is not None:
        params["service_names"] = ",".join(args.service_names)
    return params


def shape_trigger_auto_recovery(args: TriggerAutoRecoveryArgs, settings: RelaySettings) -> Params:
    return {"service_name": args.service_name, "failure_type": args.failure_type}


def shape_get_infrastructure_status(args: GetInfrastructureStatusArgs, settings: RelaySettings) -> Params:
    return {
        "include_history": _flag(args.include_history),
        "include_locks": _flag(args.include_locks),
    }


ROUTES: Dict[str, Route] = {
    "deploy_mcp_server": Route("deploy/mcp-server", shape_deploy_mcp_server),
    "deploy_cloudflare_worker": Route("deploy/cloudflare-worker", shape_deploy_cloudflare_worker),
    "restart_service": Route("maintain/restart-service", shape_restart_service),
    "check_services_health": Route("maintain/health-check", shape_check_services_health),
    "trigger_auto_recovery": Route("recovery/auto-recovery", shape_trigger_auto_recovery),
    "get_infrastructure_status": Route("status/infrastructure", shape_get_infrastructure_status),
}


class Dispatcher:
    """
    Turns a tool call into one orchestrator run.

    Every registered tool must have a route and every route a registered tool;
    the check happens in the constructor so a mismatch stops the relay at startup.
    """

    def __init__(
        self,
        registry: ToolRegistry,
        runner: Runner,
        settings: RelaySettings,
        routes: Optional[Mapping[str, Route]] = None,
    ):
        self.registry = registry
        self.runner = runner
        self.settings = settings
        self.routes: Dict[str, Route] = dict(ROUTES if routes is None else routes)
        self._check_routes()

    def _check_routes(self) -> None:
        unrouted = self.registry.names - set(self.routes)
        unregistered = set(self.routes) - self.registry.names
        if unrouted or unregistered:
            msg = (
                "Tool registry and dispatch routes disagree. "
                f"Tools without a route: {sorted(unrouted)}. Routes without a tool: {sorted(unregistered)}."
            )
            logger.error(msg)
            raise ToolRegistrationError(msg)

    def shape(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Tuple[str, Params]:
        """Validates the arguments and flattens them into orchestrator parameters.

        Args:
            name: Tool name.
            arguments: Raw arguments from the client; None is treated as empty.

        Returns:
            The operation path and the string parameters.

        Raises:
            ToolNotFoundError: If the tool is unknown.
            ToolValidationError: If the arguments do not fit the tool's schema.
        """
        tool = self.registry.get(name)
        route = self.routes[name]

        try:
            args: BaseModel = tool.args_model.model_validate(dict(arguments or {}))
        except ValidationError as e:
            msg = f"Invalid arguments for tool '{name}': {e}"
            logger.error(msg)
            raise ToolValidationError(msg) from e

        return route.operation, route.shape(args, self.settings)

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Any:
        """Runs the tool and returns the runner's payload unchanged."""
        operation, params = self.shape(name, arguments)
        logger.info("Dispatching '%s' to '%s'", name, operation)
        logger.debug("Parameters: %s", params)
        return self.runner.run(operation, params)
