"""ClientConfig and credential variants."""

from __future__ import annotations

import dataclasses
import os
from unittest.mock import patch

import pytest

from flow_exec.client.config import (
    AccessTokenCredential,
    ApiKeyCredential,
    ClientConfig,
    select_credential,
)
from flow_exec.errors import ConfigurationError

BASE_ENV = {
    "FLOW_ENDPOINT": "https://e",
    "FLOW_PROJECT_ID": "p1",
    "FLOW_API_KEY": "k1",
}


class TestCredentials:
    """Credential variants render headers and hide their secrets."""

    def test_api_key_header(self):
        """ApiKeyCredential renders a Bearer header."""
        assert ApiKeyCredential("k1").authorization_header() == "Bearer k1"
        assert ApiKeyCredential.kind == "api_key"

    def test_access_token_header(self):
        """AccessTokenCredential renders a Bearer header."""
        assert AccessTokenCredential("t1").authorization_header() == "Bearer t1"
        assert AccessTokenCredential.kind == "access_token"

    def test_secret_not_in_repr(self):
        """Secrets never appear in repr()."""
        assert "sekrit" not in repr(ApiKeyCredential("sekrit"))
        assert "sekrit" not in repr(AccessTokenCredential("sekrit"))

    def test_empty_secret_rejected(self):
        """Empty secrets are a configuration error."""
        with pytest.raises(ConfigurationError):
            ApiKeyCredential("")
        with pytest.raises(ConfigurationError):
            AccessTokenCredential("")

    def test_frozen(self):
        """Credentials are immutable."""
        cred = AccessTokenCredential("t1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cred.access_token = "t2"  # type: ignore[misc]


class TestSelectCredential:
    """select_credential enforces exactly one credential."""

    def test_api_key_only(self):
        """Only an API key gives ApiKeyCredential."""
        assert isinstance(select_credential("k", None), ApiKeyCredential)

    def test_access_token_only(self):
        """Only an access token gives AccessTokenCredential."""
        assert isinstance(select_credential(None, "t"), AccessTokenCredential)

    def test_both(self):
        """Both credentials are rejected."""
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            select_credential("k", "t")

    def test_neither(self):
        """No credential is rejected."""
        with pytest.raises(ConfigurationError):
            select_credential(None, None)

    def test_empty_strings_count_as_missing(self):
        """Empty strings are treated as absent."""
        with pytest.raises(ConfigurationError):
            select_credential("", "")


class TestClientConfig:
    """ClientConfig validates and normalises its fields."""

    def test_create_strips_trailing_slash(self):
        """Trailing slash on the endpoint is stripped."""
        cfg = ClientConfig.create(endpoint="https://e/", project_id="p1", api_key="k1")
        assert cfg.endpoint == "https://e"
        assert cfg.url_for("p1/f") == "https://e/p1/f"

    @pytest.mark.parametrize("endpoint,project_id", [("", "p1"), ("https://e", ""), ("  ", "p1")])
    def test_required_fields(self, endpoint, project_id):
        """Blank endpoint or project id is rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig.create(endpoint=endpoint, project_id=project_id, api_key="k1")

    def test_route_needs_flow_placeholder(self):
        """A route without {flow_id} is rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig.create(endpoint="https://e", project_id="p1", api_key="k1", route="{project_id}/run")

    @pytest.mark.parametrize("timeout", [0, -1.0, float("nan"), float("inf")])
    def test_bad_timeout(self, timeout):
        """Zero, negative, NaN and infinite timeouts are rejected."""
        with pytest.raises(ConfigurationError):
            ClientConfig.create(endpoint="https://e", project_id="p1", api_key="k1", timeout=timeout)

    def test_log_level_upper_cased(self):
        """Known log level names are accepted in any case."""
        cfg = ClientConfig.create(endpoint="https://e", project_id="p1", api_key="k1", log_level="info")
        assert cfg.log_level == "INFO"

    def test_unknown_log_level(self):
        """An unknown log level name is a configuration error."""
        with pytest.raises(ConfigurationError, match="log level"):
            ClientConfig.create(endpoint="https://e", project_id="p1", api_key="k1", log_level="verbose")

    def test_frozen(self):
        """ClientConfig is immutable."""
        cfg = ClientConfig.create(endpoint="https://e", project_id="p1", api_key="k1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.project_id = "p2"  # type: ignore[misc]


class TestFromEnv:
    """ClientConfig.from_env reads FLOW_* variables."""

    def test_api_key_env(self):
        """Defaults apply when only the required variables are set."""
        env = {**BASE_ENV, "FLOW_ENDPOINT": "https://flows.example.com/"}
        with patch.dict(os.environ, env, clear=True):
            cfg = ClientConfig.from_env()
        assert cfg.endpoint == "https://flows.example.com"
        assert cfg.project_id == "p1"
        assert isinstance(cfg.credential, ApiKeyCredential)
        assert cfg.timeout == 120.0
        assert cfg.log_level == "WARNING"
        assert cfg.route == "{project_id}/{flow_id}"

    def test_overrides(self):
        """Optional variables override the defaults."""
        env = {
            "FLOW_ENDPOINT": "https://e",
            "FLOW_PROJECT_ID": "p1",
            "FLOW_ACCESS_TOKEN": "t1",
            "FLOW_TIMEOUT": "30",
            "FLOW_ROUTE": "run/{flow_id}",
            "FLOW_LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            cfg = ClientConfig.from_env()
        assert isinstance(cfg.credential, AccessTokenCredential)
        assert cfg.timeout == 30.0
        assert cfg.route == "run/{flow_id}"
        assert cfg.log_level == "DEBUG"

    def test_missing_everything(self):
        """An empty environment is a configuration error."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                ClientConfig.from_env()

    def test_both_credentials_in_env(self):
        """Both credential variables set is a configuration error."""
        env = {**BASE_ENV, "FLOW_ACCESS_TOKEN": "t1"}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigurationError):
                ClientConfig.from_env()

    def test_non_numeric_timeout(self):
        """A non-numeric FLOW_TIMEOUT is a configuration error."""
        with patch.dict(os.environ, {**BASE_ENV, "FLOW_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ConfigurationError, match="FLOW_TIMEOUT"):
                ClientConfig.from_env()

    def test_nan_timeout(self):
        """FLOW_TIMEOUT=nan parses as a float but is still rejected."""
        with patch.dict(os.environ, {**BASE_ENV, "FLOW_TIMEOUT": "nan"}, clear=True):
            with pytest.raises(ConfigurationError, match="timeout"):
                ClientConfig.from_env()

    def test_unknown_log_level_env(self):
        """An unknown FLOW_LOG_LEVEL is a configuration error."""
        with patch.dict(os.environ, {**BASE_ENV, "FLOW_LOG_LEVEL": "verbose"}, clear=True):
            with pytest.raises(ConfigurationError):
                ClientConfig.from_env()
