"""
Tests for health check endpoints.
"""


class TestHealth:
    def test_root_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_liveness(self, client):
        data = client.get("/api/health/live").json()
        assert data["ok"] is True
        assert data["status"] == "alive"
        assert "uptime" in data

    def test_readiness_checks_database(self, client, upload_dir):
        data = client.get("/api/health/ready").json()
        assert data["checks"]["database"]["status"] == "healthy"
        assert "storage" in data["checks"]
