"""Request and response models for flow execution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class FlowExecutionRequest:
    """One invocation of a remote flow. The payload is passed through untouched."""

    flow_id: str
    payload: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.flow_id, str) or not self.flow_id.strip():
            raise ValueError("flow_id must be a non-empty string")

    def path(self, route: str, project_id: str) -> str:
        return route.format(
            project_id=quote(project_id, safe=""),
            flow_id=quote(self.flow_id, safe=""),
        )


class FlowExecutionResponse(BaseModel):
    """Body returned by the flow execution endpoint.

    A ``status`` of ``"error"`` is a workflow-level outcome, not a transport
    failure, so it is returned to the caller like any other response.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    status: Literal["success", "error"] = Field(
        ..., description="'success' when the flow ran, 'error' when it reported a failure."
    )
    result: Any = Field(None, description="Flow output. Shape is defined by the flow, not by this client.")
    # Kept untyped so the body round-trips exactly as the server sent it.
    message: Any = Field(None, description="Failure reason (present on errors). Usually a string.")
    status_code: Any = Field(
        None,
        alias="statusCode",
        description="Status code reported in the body, or the HTTP status for non-2xx replies.",
    )

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        """Return the body with wire names and only the keys that were present."""
        return self.model_dump(by_alias=True, exclude_unset=True)
