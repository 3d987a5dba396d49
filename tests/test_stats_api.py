"""
Tests for GET /api/stats
"""

import asyncio
from datetime import timedelta

from wifi_portal.services.stats_service import success_rate
from wifi_portal.services.visitor_service import utcnow


class TestSuccessRate:
    def test_rounded_percentage(self):
        assert success_rate(1, 3) == 33.3
        assert success_rate(2, 2) == 100.0

    def test_zero_when_nobody_contacted(self):
        assert success_rate(0, 0) == 0


class TestStatsEndpoint:
    def test_empty(self, client):
        data = client.get("/api/stats").json()["data"]

        assert data["totalUsers"] == 0
        assert data["todayUsers"] == 0
        assert data["byMigrationStatus"] == {}
        assert data["byDepartment"] == []
        assert data["outreach"] == {"contacted": 0, "successful": 0, "successRate": 0}

    def test_counts(self, client, provider, register):
        a = register(migrationStatus="retornado", instagram="@ana", location={"department": "Petén"})["userId"]
        register(migrationStatus="retornado", location={"department": "Petén"})
        register(migrationStatus="deportado", location={"department": "Quiché"})
        register()
        old = asyncio.run(provider.fallback.create({
            "fullName": "Antiguo",
            "phone": "55551234",
            "email": "old@example.com",
            "createdAt": utcnow() - timedelta(days=3),
        }))

        client.post(f"/api/contact/{a}", json={"channel": "sms"})
        client.post(f"/api/contact/{old['id']}", json={"channel": "email"})
        client.put(f"/api/user/{a}", json={"contactSuccess": True})

        data = client.get("/api/stats").json()["data"]

        assert data["totalUsers"] == 5
        assert data["todayUsers"] == 4
        assert data["withSocialMedia"] == 1
        assert data["byMigrationStatus"] == {"retornado": 2, "no_especificado": 2, "deportado": 1}
        assert data["byDepartment"] == [{"department": "Petén", "count": 2}, {"department": "Quiché", "count": 1}]
        assert data["outreach"] == {"contacted": 2, "successful": 1, "successRate": 50.0}

    def test_idempotent_without_new_registrations(self, client, register):
        register(migrationStatus="residente")
        first = client.get("/api/stats").json()
        second = client.get("/api/stats").json()
        assert first == second

    def test_top_ten_departments(self, client, register):
        for n in range(12):
            register(location={"department": f"Depto {n:02d}"})
        assert len(client.get("/api/stats").json()["data"]["byDepartment"]) == 10

    def test_success_only_counts_contacted_visitors(self, client, register):
        contacted = register()["userId"]
        never_contacted = register()["userId"]
        client.post(f"/api/contact/{contacted}", json={"channel": "sms"})
        client.put(f"/api/user/{contacted}", json={"contactSuccess": True})
        client.put(f"/api/user/{never_contacted}", json={"contactSuccess": True})

        outreach = client.get("/api/stats").json()["data"]["outreach"]

        assert outreach == {"contacted": 1, "successful": 1, "successRate": 100.0}
