"""The fixed set of tools the relay exposes, with their argument models."""

from typing import List, Optional, Type

from pydantic import BaseModel, Field, StrictBool

from .models import ToolDefinition
from .schema import SchemaValidator


class DeployMcpServerArgs(BaseModel):
    """Input for deploy_mcp_server."""

    app_name: str = Field(description="Fly.io app name (e.g., 'garza-home-mcp')")
    source_dir: Optional[str] = Field(default=None, description="Source directory containing the MCP server code")
    region: Optional[str] = Field(default=None, description="Fly.io region (default: dfw)")


class DeployCloudflareWorkerArgs(BaseModel):
    """Input for deploy_cloudflare_worker."""

    worker_name: str = Field(description="Worker name (e.g., 'voicenotes-webhook')")
    source_dir: Optional[str] = Field(default=None, description="Source directory containing wrangler.toml")
    env: Optional[str] = Field(default=None, description="Environment (production/staging, default: production)")


class RestartServiceArgs(BaseModel):
    """Input for restart_service."""

    service_name: str = Field(description="Service name (e.g., 'garza-home-mcp', 'nginx', 'postgres')")
    service_type: str = Field(description="Service type (fly_app/docker/systemd)")
    health_check_url: Optional[str] = Field(default=None, description="Optional URL to check service health")


class CheckServicesHealthArgs(BaseModel):
    """Input for check_services_health."""

    service_group: Optional[str] = Field(
        default=None, description="Service group: 'all', 'mcp_servers', 'workers', 'infrastructure'"
    )
    service_names: Optional[List[str]] = Field(default=None, description="Optional specific service names to check")


class TriggerAutoRecoveryArgs(BaseModel):
    """Input for trigger_auto_recovery."""

    service_name: str = Field(description="Service that failed")
    failure_type: str = Field(description="Type of failure: 'crash', 'health_check_failed', 'deployment_failed'")


class GetInfrastructureStatusArgs(BaseModel):
    """Input for get_infrastructure_status."""

    include_history: Optional[StrictBool] = Field(
        default=None, description="Include recent operation history (default: true)"
    )
    include_locks: Optional[StrictBool] = Field(default=None, description="Include active locks (default: true)")


def define_tool(name: str, description: str, args_model: Type[BaseModel]) -> ToolDefinition:
    """Creates a ToolDefinition whose schema is generated from ``args_model``."""
    return ToolDefinition(
        name=name,
        description=description,
        args_model=args_model,
        parameters=SchemaValidator.schema_for(args_model),
    )


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    define_tool(
        "deploy_mcp_server",
        "Deploy MCP server to Fly.io with state tracking, locks, and health checks. "
        "DO NOT use ssh_exec for deployments - always use this tool instead.",
        DeployMcpServerArgs,
    ),
    define_tool(
        "deploy_cloudflare_worker",
        "Deploy Cloudflare Worker with state tracking and health checks. "
        "DO NOT use ssh_exec('wrangler deploy') - always use this tool instead.",
        DeployCloudflareWorkerArgs,
    ),
    define_tool(
        "restart_service",
        "Restart a service with pre/post health checks and automatic rollback. "
        "DO NOT use ssh_exec('docker restart') - always use this tool instead.",
        RestartServiceArgs,
    ),
    define_tool(
        "check_services_health",
        "Check health of one or more services. Safe read-only operation.",
        CheckServicesHealthArgs,
    ),
    define_tool(
        "trigger_auto_recovery",
        "Trigger automatic recovery for a failed service using predefined playbooks.",
        TriggerAutoRecoveryArgs,
    ),
    define_tool(
        "get_infrastructure_status",
        "Get comprehensive overview of entire infrastructure. Safe read-only operation.",
        GetInfrastructureStatusArgs,
    ),
)
