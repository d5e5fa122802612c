def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200

    payload = response.json()
    assert payload["status_code"] == 200
    assert payload["status"] == "success"
    assert payload["message"] == "Service is healthy"
    assert payload["data"]["status"] == "ok"
    assert payload["data"]["service"] == "WebSense Backend"


def test_root_info(client):
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()
    assert payload["app_name"] == "WebSense Backend"
    assert payload["version"] == "1.0.0"
    assert payload["docs_url"] == "/docs"
    assert payload["api_base"] == "/api"


def test_dashboard_summary(client):
    response = client.get("/api/dashboard")
    assert response.status_code == 200

    payload = response.json()
    assert payload["status"] == "success"
    data = payload["data"]
    assert data["totalAnalyses"] == 0
    assert data["recentAnalyses"] == []
    assert data["systemStatus"] == "operational"
    assert data["lastUpdated"].endswith("Z")


def test_missing_url_returns_validation_envelope(client):
    response = client.post("/api/analyze/security-headers", json={})
    assert response.status_code == 422

    payload = response.json()
    assert payload["status"] == "error"
    assert payload["message"] == "Validation failed"
    assert payload["data"]["errors"]


def test_unknown_route_returns_error_envelope(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert response.json()["status"] == "error"
