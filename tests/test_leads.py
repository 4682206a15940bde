"""
Lead Capture Tests

- newsletter signup is idempotent on the case-folded email
- sales leads are plain appends
- admin-only listings
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.leads import count_subscribers, list_sales_leads, submit_sales_lead, subscribe
from app.store.models import Locale


class TestNewsletter:

    def test_case_insensitive_dedup(self, store):
        assert subscribe(store, "Foo@Bar.com", Locale.NL) is False
        assert subscribe(store, "foo@bar.com", Locale.NL) is True
        assert count_subscribers(store) == 1

    def test_stored_lowercase(self, store):
        subscribe(store, "  Foo@Bar.com ", Locale.EN, source="footer")
        with store.session() as s:
            lead = s.newsletter.find_by_email("foo@bar.com")
        assert lead.email == "foo@bar.com"
        assert lead.source == "footer"

    def test_endpoint_reports_already_subscribed(self, client):
        first = client.post("/api/v1/newsletter/subscribe", json={"email": "Foo@Bar.com", "locale": "nl"})
        second = client.post("/api/v1/newsletter/subscribe", json={"email": "foo@bar.com", "locale": "nl"})
        assert first.json() == {"success": True, "alreadySubscribed": False}
        assert second.json() == {"success": True, "alreadySubscribed": True}

    def test_invalid_email_rejected(self, client):
        response = client.post("/api/v1/newsletter/subscribe", json={"email": "not-an-email", "locale": "nl"})
        assert response.status_code == 422

    def test_count_is_admin_only(self, client, admin_client):
        client.post("/api/v1/newsletter/subscribe", json={"email": "a@example.com", "locale": "es"})
        assert client.get("/api/v1/newsletter/count").status_code == 401
        assert admin_client.get("/api/v1/newsletter/count").json()["count"] == 1


class TestSalesLeads:

    def test_no_dedup(self, store):
        for _ in range(2):
            submit_sales_lead(store, name="Ann", email="Ann@Example.com", message="Hi", locale=Locale.EN)
        leads = list_sales_leads(store)
        assert len(leads) == 2
        assert all(lead.email == "ann@example.com" for lead in leads)

    def test_endpoint(self, client, admin_client):
        response = client.post("/api/v1/sales-leads", json={
            "name": "Ann",
            "email": "ann@example.com",
            "message": "We need a team plan",
            "locale": "en",
            "companySize": "11_50",
            "plan": "team",
        })
        assert response.status_code == 201

        assert client.get("/api/v1/sales-leads").status_code == 401
        body = admin_client.get("/api/v1/sales-leads").json()
        assert body["total"] == 1
        assert body["leads"][0]["companySize"] == "11_50"

    def test_missing_message_rejected(self, client):
        response = client.post("/api/v1/sales-leads", json={
            "name": "Ann", "email": "ann@example.com", "locale": "en",
        })
        assert response.status_code == 422
