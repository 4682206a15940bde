"""
Problem Intake Tests

Mandatory coverage:
- lifecycle new -> reviewing -> accepted | declined, terminal end states
- invalid moves raise InvalidState (409 over HTTP)
- case linkage only for accepted intakes and existing cases
- admin gate on everything except the public form
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from app.intake import (
    ALLOWED_TRANSITIONS,
    IntakeCreateRequest,
    can_transition,
    create_intake,
    get_intake,
    link_case,
    list_intakes,
    update_notes,
    update_status,
)
from app.shared.errors import InvalidState, NotFound
from app.store.models import (
    Case,
    CaseStatus,
    IntakeLanguage,
    IntakeStatus,
    Locale,
    ProblemIntake,
    new_id,
)

INTAKE_PAYLOAD = {
    "title": "Invoice reminders",
    "problemDescription": "We chase unpaid invoices by hand every week.",
    "desiredOutcome": "Automatic reminders after 14 days.",
    "country": "NL",
    "language": "nl",
    "email": "owner@example.com",
    "companySize": "2_10",
    "budgetRange": "1k_5k",
    "urgency": "medium",
}


@pytest.fixture
def intake_id(store):
    return create_intake(store, IntakeCreateRequest(**INTAKE_PAYLOAD))


@pytest.fixture
def case_id(store):
    with store.session() as s:
        return s.cases.insert(Case(
            id=new_id(), slug="reminders", title="Reminders", one_liner="x",
            locale=Locale.NL, status=CaseStatus.DRAFT,
        ))


class TestLifecycle:

    def test_created_new(self, store, intake_id):
        intake = get_intake(store, intake_id)
        assert intake.status == IntakeStatus.NEW
        assert intake.problem_description.startswith("We chase")

    @pytest.mark.parametrize("path", [
        [IntakeStatus.REVIEWING, IntakeStatus.ACCEPTED],
        [IntakeStatus.REVIEWING, IntakeStatus.DECLINED],
        [IntakeStatus.ACCEPTED],
        [IntakeStatus.DECLINED],
    ])
    def test_allowed_paths(self, store, intake_id, path):
        for status in path:
            intake = update_status(store, intake_id, status, processed_by="admin")
        assert intake.status == path[-1]
        assert intake.processed_by == "admin"
        assert intake.updated_at is not None

    @pytest.mark.parametrize("terminal", [IntakeStatus.ACCEPTED, IntakeStatus.DECLINED])
    def test_terminal_states(self, store, intake_id, terminal):
        update_status(store, intake_id, terminal)
        for target in IntakeStatus:
            with pytest.raises(InvalidState):
                update_status(store, intake_id, target)
        assert get_intake(store, intake_id).status == terminal

    def test_no_move_back_to_new(self, store, intake_id):
        update_status(store, intake_id, IntakeStatus.REVIEWING)
        with pytest.raises(InvalidState):
            update_status(store, intake_id, IntakeStatus.NEW)

    def test_transition_table_consistent(self):
        assert set(ALLOWED_TRANSITIONS) == set(IntakeStatus)
        assert not can_transition(IntakeStatus.NEW, IntakeStatus.NEW)

    def test_unknown_intake(self, store):
        with pytest.raises(NotFound):
            update_status(store, "missing", IntakeStatus.REVIEWING)


class TestListing:

    def test_newest_first_and_filter(self, store):
        base = datetime(2025, 3, 1, tzinfo=timezone.utc)
        with store.session() as s:
            for offset, status in [(1, IntakeStatus.REVIEWING), (3, IntakeStatus.NEW), (2, IntakeStatus.NEW)]:
                s.intakes.insert(ProblemIntake(
                    id=f"intake-{offset}",
                    title="t", problem_description="p", desired_outcome="o",
                    country="BE", language=IntakeLanguage.NL, email="a@example.com",
                    status=status, created_at=base + timedelta(hours=offset),
                ))

        assert [i.id for i in list_intakes(store)] == ["intake-3", "intake-2", "intake-1"]
        assert [i.id for i in list_intakes(store, IntakeStatus.REVIEWING)] == ["intake-1"]
        assert [i.id for i in list_intakes(store, IntakeStatus.NEW)] == ["intake-3", "intake-2"]


class TestNotesAndLinking:

    def test_notes_replaced(self, store, intake_id):
        update_notes(store, intake_id, "first call done")
        intake = update_notes(store, intake_id, "quote sent")
        assert intake.internal_notes == "quote sent"

    def test_link_requires_accepted(self, store, intake_id, case_id):
        with pytest.raises(InvalidState):
            link_case(store, intake_id, case_id)
        assert get_intake(store, intake_id).case_id is None

    def test_link_after_accept(self, store, intake_id, case_id):
        update_status(store, intake_id, IntakeStatus.ACCEPTED)
        assert link_case(store, intake_id, case_id).case_id == case_id

    def test_link_unknown_case(self, store, intake_id):
        update_status(store, intake_id, IntakeStatus.ACCEPTED)
        with pytest.raises(NotFound):
            link_case(store, intake_id, "missing-case")


class TestIntakeEndpoints:

    def test_public_create(self, client):
        response = client.post("/api/v1/intakes", json=INTAKE_PAYLOAD)
        assert response.status_code == 201
        assert response.json()["workflowStatus"] == "new"

    def test_invalid_budget_rejected(self, client):
        response = client.post("/api/v1/intakes", json={**INTAKE_PAYLOAD, "budgetRange": "millions"})
        assert response.status_code == 422

    def test_admin_routes_gated(self, client, intake_id):
        assert client.get("/api/v1/intakes").status_code == 401
        assert client.get(f"/api/v1/intakes/{intake_id}").status_code == 401
        response = client.post(f"/api/v1/intakes/{intake_id}/status", json={"status": "accepted"})
        assert response.status_code == 401

    def test_status_flow_over_http(self, admin_client, intake_id):
        url = f"/api/v1/intakes/{intake_id}/status"
        response = admin_client.post(url, json={"status": "reviewing", "processedBy": "sam"})
        assert response.status_code == 200
        assert response.json()["intake"]["processedBy"] == "sam"

        assert admin_client.post(url, json={"status": "declined"}).status_code == 200
        conflict = admin_client.post(url, json={"status": "accepted"})
        assert conflict.status_code == 409
        assert conflict.json()["detail"]["error"] == "INVALID_STATE"

    def test_list_filter_over_http(self, admin_client, intake_id):
        body = admin_client.get("/api/v1/intakes", params={"status": "new"}).json()
        assert body["total"] == 1
        assert body["intakes"][0]["problemDescription"] == INTAKE_PAYLOAD["problemDescription"]

    def test_detail_404(self, admin_client):
        response = admin_client.get("/api/v1/intakes/missing")
        assert response.status_code == 404
        assert response.json()["detail"]["error"] == "NOT_FOUND"

    def test_notes_and_link_over_http(self, admin_client, intake_id, case_id):
        notes = admin_client.post(f"/api/v1/intakes/{intake_id}/notes", json={"internalNotes": "called"})
        assert notes.json()["intake"]["internalNotes"] == "called"

        link_url = f"/api/v1/intakes/{intake_id}/link-case"
        assert admin_client.post(link_url, json={"caseId": case_id}).status_code == 409
        admin_client.post(f"/api/v1/intakes/{intake_id}/status", json={"status": "accepted"})
        linked = admin_client.post(link_url, json={"caseId": case_id})
        assert linked.json()["intake"]["caseId"] == case_id
