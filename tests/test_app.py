"""
Tests for Flask Application
===========================

Endpoint tests using the Flask test client.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests
from flask.testing import FlaskClient

from missive_drafts.app import create_app
from missive_drafts.config import get_settings


@pytest.fixture
def client() -> FlaskClient:
    """Create a test client."""
    return create_app().test_client()


@pytest.fixture
def draft_request(recipient: dict[str, Any], sender: dict[str, Any]) -> dict[str, Any]:
    """Sample request body for POST /drafts."""
    return {
        "subject": "Hello",
        "body": "<p>World</p>",
        "to": recipient,
        "from": sender,
        "labels": ["lead"],
    }


class TestHealth:
    """Tests for the health endpoint."""
    
    def test_health(self, client: FlaskClient) -> None:
        """Test health check response."""
        response = client.get("/health")
        
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"
    
    def test_request_id_echoed(self, client: FlaskClient) -> None:
        """Test the request ID header is returned."""
        response = client.get("/health", headers={"X-Request-ID": "req-42"})
        
        assert response.headers["X-Request-ID"] == "req-42"


class TestCreateDraftEndpoint:
    """Tests for POST /drafts."""
    
    def test_create_draft_with_header_token(
        self,
        client: FlaskClient,
        mock_post: MagicMock,
        draft_request: dict[str, Any]
    ) -> None:
        """Test the bearer token from the request is forwarded."""
        response = client.post(
            "/drafts",
            json=draft_request,
            headers={"Authorization": "Bearer header-token"}
        )
        
        assert response.status_code == 200
        assert response.get_json() == {"status": "delivered"}
        kwargs = mock_post.call_args.kwargs
        assert kwargs["headers"]["Authorization"] == "Bearer header-token"
        assert kwargs["json"]["drafts"]["from_field"]["address"] == "sender@company.com"
        assert kwargs["json"]["drafts"]["add_shared_labels"] == ["lead"]
    
    def test_token_falls_back_to_settings(
        self,
        client: FlaskClient,
        mock_post: MagicMock,
        draft_request: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test MISSIVE_API_TOKEN is used when no header is sent."""
        monkeypatch.setenv("MISSIVE_API_TOKEN", "env-token")
        get_settings.cache_clear()
        
        response = client.post("/drafts", json=draft_request)
        
        assert response.status_code == 200
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "Bearer env-token"
    
    def test_missing_token_rejected(
        self,
        client: FlaskClient,
        mock_post: MagicMock,
        draft_request: dict[str, Any],
        monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a request without any token is a 400."""
        monkeypatch.delenv("MISSIVE_API_TOKEN", raising=False)
        get_settings.cache_clear()
        
        response = client.post("/drafts", json=draft_request)
        
        assert response.status_code == 400
        assert response.get_json()["code"] == "ERR_1001"
        mock_post.assert_not_called()
    
    def test_invalid_body_rejected(
        self,
        client: FlaskClient,
        mock_post: MagicMock
    ) -> None:
        """Test a body without recipient fails validation."""
        response = client.post(
            "/drafts",
            json={"subject": "Hi", "body": "Body"},
            headers={"Authorization": "Bearer header-token"}
        )
        
        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"
        mock_post.assert_not_called()
    
    def test_upstream_error_body_passed_through(
        self,
        client: FlaskClient,
        mock_post: MagicMock,
        make_response,
        draft_request: dict[str, Any]
    ) -> None:
        """Test a Missive 422 body is returned as the result."""
        mock_post.return_value = make_response(422, b'{"status":"error"}')
        
        response = client.post(
            "/drafts",
            json=draft_request,
            headers={"Authorization": "Bearer header-token"}
        )
        
        assert response.status_code == 200
        assert response.get_json() == {"status": "error"}
    
    def test_transport_failure_is_bad_gateway(
        self,
        client: FlaskClient,
        mock_post: MagicMock,
        draft_request: dict[str, Any]
    ) -> None:
        """Test an unreachable Missive maps to 502."""
        mock_post.side_effect = requests.exceptions.ConnectTimeout("timed out")
        
        response = client.post(
            "/drafts",
            json=draft_request,
            headers={"Authorization": "Bearer header-token"}
        )
        
        assert response.status_code == 502
        assert response.get_json()["code"] == "ERR_2000"
