def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"

def test_validation_error_structure(client, simulated_service):
    response = client.post("/api/v1/sms/bulk", json={"phone_numbers": "0712345678", "message": "hi"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert data["error"] == "Input validation failed"
    assert len(data["details"]) > 0

def test_custom_exception(client):
    from app.main import app
    from app.core.exceptions import ExternalServiceError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ExternalServiceError(message="Gateway unreachable")

    response = client.get("/test-custom-error")
    assert response.status_code == 502
    data = response.json()
    assert data["code"] == "EXTERNAL_SERVICE_ERROR"
    assert data["error"] == "Gateway unreachable"
