"""Tests for the dashboard summary and health routes."""


def test_dashboard_summary(client):
    response = client.get("/api/dashboard/summary")

    assert response.status_code == 200
    summary = response.json()
    assert summary["statusCounts"] == {"pending": 2, "inProgress": 2, "resolved": 1}
    assert summary["severity"] == {"low": 1, "medium": 2, "high": 2, "critical": 2, "total": 5}
    assert summary["defectTypes"] == [
        {"type": "Surface Crack", "count": 2, "percentage": "40.0"},
        {"type": "Deep Crack", "count": 2, "percentage": "40.0"},
        {"type": "Weld Failure", "count": 1, "percentage": "20.0"},
    ]
    assert [report["id"] for report in summary["recentActivity"]] == ["3", "2", "1", "5"]
    assert summary["activeTeamCount"] == 1
    assert isinstance(summary["resolvedThisMonth"], int)


def test_dashboard_summary_reflects_updates(client):
    client.put("/api/reports/2", json={"status": "Resolved"})

    severity = client.get("/api/dashboard/summary").json()["severity"]

    assert severity["high"] == 2
    assert severity["critical"] == 1


def test_dashboard_summary_empty(empty_client):
    summary = empty_client.get("/api/dashboard/summary").json()

    assert summary["severity"]["total"] == 0
    assert summary["defectTypes"] == []
    assert summary["recentActivity"] == []
    assert summary["activeTeamCount"] == 0


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["store"] == "memory"
    assert body["reports"] == 5
    assert body["users"] == 2
    assert body["timestamp"]
