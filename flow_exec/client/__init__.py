"""Flow execution HTTP client."""

from flow_exec.client.config import AccessTokenCredential, ApiKeyCredential, ClientConfig
from flow_exec.client.flow_client import FlowClient

__all__ = ["AccessTokenCredential", "ApiKeyCredential", "ClientConfig", "FlowClient"]
