"""Client library for invoking remote flows over HTTP."""

from flow_exec.client import AccessTokenCredential, ApiKeyCredential, ClientConfig, FlowClient
from flow_exec.errors import ConfigurationError, FlowClientError, NetworkError, ParseError
from flow_exec.models import FlowExecutionRequest, FlowExecutionResponse

__version__ = "0.1.0"
__all__ = [
    "AccessTokenCredential",
    "ApiKeyCredential",
    "ClientConfig",
    "ConfigurationError",
    "FlowClient",
    "FlowClientError",
    "FlowExecutionRequest",
    "FlowExecutionResponse",
    "NetworkError",
    "ParseError",
]
