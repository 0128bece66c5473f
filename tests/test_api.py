"""
Tests for Liquid Validations API
"""

import pytest
from fastapi import status
from main import app
from api.liquid_validations.controller import get_validation_service
from api.liquid_validations.service import LiquidValidationService

VALIDATE_URL = "/api/liquid-validations/validate"
CHECK_URL = "/api/liquid-validations/rules/check"


class TestLiquidValidationsAPI:
    """Test suite for Liquid Validations endpoints"""

    def test_root(self, test_client):
        """Test the welcome endpoint"""
        response = test_client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "running"

    def test_health(self, test_client):
        """Test the health endpoint reports the parser"""
        response = test_client.get("/api/health")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["services"]["liquid_parser"] == "healthy"

    def test_valid_content(self, test_client, sample_validation_request):
        """Test content passing every rule"""
        response = test_client.post(VALIDATE_URL, json=sample_validation_request)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["valid"] is True
        assert data["errors"] == []

    def test_invalid_content(self, test_client, sample_validation_request):
        """Test rule failures are returned as messages"""
        sample_validation_request["content"] = "{{ unsubscribe_url }}"
        response = test_client.post(VALIDATE_URL, json=sample_validation_request)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["valid"] is False
        assert data["errors"] == [
            "You must include {{ unsubscribe_url }} inside the <footer> tag of your email body",
            "You must supply {% include %} in your email body",
        ]

    def test_syntax_error(self, test_client):
        """Test syntax errors are reported with the default attribute name"""
        response = test_client.post(VALIDATE_URL, json={"content": "{{ oops"})
        data = response.json()
        assert data["valid"] is False
        assert data["errors"] == [" syntax error: Variable '{{' was not properly closed in your content"]

    def test_presence_when(self, test_client):
        """Test presence decided by a record field"""
        request = {
            "content": "no tags",
            "attribute": "body",
            "record": {"state": "draft"},
            "tags": [{"tag": "include", "max": 1, "presence_when": {"field": "state", "equals": "published"}}]
        }
        assert test_client.post(VALIDATE_URL, json=request).json()["valid"] is True

        request["record"]["state"] = "published"
        data = test_client.post(VALIDATE_URL, json=request).json()
        assert data["errors"] == ["You must supply {% include %} in your body"]

    def test_configuration_error(self, test_client):
        """Test a rule without max is rejected before validation"""
        request = {"content": "{% include 'x' %}", "tags": [{"tag": "include"}]}
        response = test_client.post(VALIDATE_URL, json=request)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "You must supply a tag and max" in response.json()["detail"]

    def test_content_too_large(self, test_client):
        """Test oversized content is rejected"""
        app.dependency_overrides[get_validation_service] = lambda: LiquidValidationService(max_template_size=8)
        try:
            response = test_client.post(VALIDATE_URL, json={"content": "x" * 9})
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_check_rules(self, test_client, sample_validation_request):
        """Test the configuration check lists rule kinds"""
        response = test_client.post(CHECK_URL, json=sample_validation_request)
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert data["attribute"] == "email_body"
        assert data["rules"] == ["syntax", "variable", "tag"]

    def test_check_rules_configuration_error(self, test_client):
        """Test the configuration check rejects a missing variable"""
        response = test_client.post(CHECK_URL, json={"variables": [{"variable": ""}]})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
