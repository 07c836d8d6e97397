"""Async flow execution client using httpx."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any

import httpx
from pydantic import ValidationError

from flow_exec.client.config import AccessTokenCredential, ClientConfig, Credential
from flow_exec.errors import ConfigurationError, NetworkError, ParseError
from flow_exec.models import FlowExecutionRequest, FlowExecutionResponse

logger = logging.getLogger("flow_exec.client")


class FlowClient:
    """Invokes remote flows by id, authenticating with an API key or an access token.

    The credential is read when each request is built, so a token rotated with
    update_access_token applies to every request issued after the call returns.
    Requests already in flight keep the header they were built with.
    """

    def __init__(self, config: ClientConfig) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.endpoint,
            timeout=httpx.Timeout(config.timeout, connect=10.0),
            proxy=None,
        )

    @classmethod
    def from_env(cls) -> FlowClient:
        return cls(ClientConfig.from_env())

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> FlowClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def credential(self) -> Credential:
        return self._config.credential

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def project_id(self) -> str:
        return self._config.project_id

    # ------------------------------------------------------------------
    # Credential rotation
    # ------------------------------------------------------------------

    def update_access_token(self, new_token: str) -> None:
        """Replace the stored access token. No network call is made.

        Raises ConfigurationError when the client was built with an API key,
        which stays fixed for the client's lifetime, or when new_token is empty.
        """
        if not isinstance(self._config.credential, AccessTokenCredential):
            raise ConfigurationError(
                "update_access_token requires a client configured with an access token; "
                "this client uses an API key"
            )
        self._config = replace(self._config, credential=AccessTokenCredential(new_token))
        logger.info("Access token rotated for project %s", self._config.project_id)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": self._config.credential.authorization_header(),
            "Content-Type": "application/json",
        }

    async def execute_flow(
        self,
        flow_id: str,
        payload: Any = None,
        timeout: float | None = None,
    ) -> FlowExecutionResponse:
        """POST payload to the flow and return the parsed response body.

        A body reporting ``status: "error"`` is returned, not raised; only
        transport failures (NetworkError) and unparseable bodies (ParseError)
        raise. The payload is not validated here.
        """
        request = FlowExecutionRequest(flow_id, payload)
        path = request.path(self._config.route, self._config.project_id)
        headers = self._headers()
        body = json.dumps(request.payload, allow_nan=False)

        kwargs: dict[str, Any] = {"content": body, "headers": headers}
        if timeout is not None:
            kwargs["timeout"] = timeout

        logger.debug("POST %s", path)
        try:
            r = await self._client.post(path, **kwargs)
        except httpx.DecodingError as e:
            logger.warning("POST %s returned an undecodable body: %s", path, e)
            raise ParseError(f"response body could not be decoded: {e}") from e
        except httpx.RequestError as e:
            logger.warning("POST %s failed: %s", path, e)
            raise NetworkError(f"request to flow {flow_id!r} failed: {e}", url=self._config.url_for(path)) from e

        return self._parse(r, path)

    @staticmethod
    def _parse(r: httpx.Response, path: str) -> FlowExecutionResponse:
        try:
            data = r.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("POST %s -> %s with non-JSON body", path, r.status_code)
            raise ParseError(
                f"response body is not valid JSON: {e}", status_code=r.status_code, body=r.text
            ) from e

        if not isinstance(data, dict):
            raise ParseError(
                f"expected a JSON object, got {type(data).__name__}", status_code=r.status_code, body=r.text
            )

        if r.is_error and "statusCode" not in data:
            data = {**data, "statusCode": r.status_code}

        try:
            return FlowExecutionResponse.model_validate(data)
        except ValidationError as e:
            raise ParseError(
                f"response is not a flow execution result: {e}", status_code=r.status_code, body=r.text
            ) from e
