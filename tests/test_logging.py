import logging
import uuid

import pytest


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_correlation_id_in_logs(self, client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        found = any(custom_id in record.getMessage() for record in caplog.records)
        assert found, (
            f"correlation_id '{custom_id}' not found in log records: "
            f"{[r.getMessage() for r in caplog.records]}"
        )

    def test_correlation_id_on_api_responses(self, api_client_with_correlation):
        client, cid = api_client_with_correlation
        response = client.get("/api/v1/products")
        assert response["X-Request-ID"] == cid

    def test_catalog_events_are_logged(self, api_client, caplog):
        payload = {
            "name": "Logged Tee",
            "description": "Tee",
            "category": "shirt",
            "available": True,
            "variations": [
                {"size_name": "M", "description": "Medium", "price": "10.00", "available": True}
            ],
        }
        with caplog.at_level(logging.INFO):
            api_client.post("/api/v1/products", payload, format="json")
        assert any("product.created" in record.getMessage() for record in caplog.records)


class TestSensitiveDataMasking:
    def test_password_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]
        assert "***MASKED***" in result["header"]

    def test_api_key_masked_in_log_output(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "api_key: k-998877"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "k-998877" not in result["header"]

    @pytest.mark.parametrize("value", ["product.created", "size M"])
    def test_non_sensitive_data_unchanged(self, value):
        from config.settings import mask_sensitive_data

        event_dict = {"event": value, "product_id": 42}
        result = mask_sensitive_data(None, None, event_dict)
        assert result["event"] == value
        assert result["product_id"] == 42
