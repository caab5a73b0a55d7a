"""
HTTP-level tests: envelopes, auth gate, role checks and workflow actions.
"""
from datetime import datetime, timedelta

import pytest

from sahaya_api.security import create_access_token

YEAR = datetime.utcnow().year


def create(client, name, payload, headers=None):
    response = client.post(f"/api/{name}", json=payload, headers=headers or {})
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestAuthGate:

    @pytest.mark.parametrize("name", ["cmrelief", "disputes", "temples"])
    def test_protected_router_without_token(self, client, name):
        response = client.get(f"/api/{name}")
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "No token provided. Authorization required."
        assert body["code"] == "TOKEN_MISSING"

    def test_invalid_token(self, client):
        response = client.get("/api/cmrelief", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid token. Authorization failed."

    def test_expired_token(self, client, users):
        token = create_access_token(users["L3_CITIZEN"], "L3_CITIZEN", expires_delta=timedelta(minutes=-5))
        response = client.get("/api/cmrelief", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Token expired. Please login again."

    @pytest.mark.parametrize("name", ["appointments", "cases", "csrindustrial", "education", "emergencies", "programs"])
    def test_open_router_without_token(self, client, name):
        response = client.get(f"/api/{name}")
        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_open_router_rejects_bad_token(self, client, sample_payload):
        # Anonymous is fine, a forged token is not
        assert client.post("/api/cases", json=sample_payload("cases")).status_code == 201
        response = client.post("/api/cases", json=sample_payload("cases"), headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_close_requires_admin_role(self, client, sample_payload, citizen_headers, exec_headers):
        record = create(client, "cmrelief", sample_payload("cmrelief"), citizen_headers)

        forbidden = client.delete(f"/api/cmrelief/{record['human_id']}", headers=citizen_headers)
        assert forbidden.status_code == 403
        assert forbidden.json()["message"] == "Access denied. Insufficient permissions."

        closed = client.delete(f"/api/cmrelief/{record['human_id']}", headers=exec_headers)
        assert closed.status_code == 200
        assert closed.json()["data"]["status"] == "CANCELLED"


class TestEntityRoutes:

    def test_relief_ids_are_sequential_per_district(self, client, sample_payload, citizen_headers):
        first = create(client, "cmrelief", sample_payload("cmrelief"), citizen_headers)
        second = create(client, "cmrelief", sample_payload("cmrelief"), citizen_headers)

        assert first["human_id"] == f"CMRF-GUN-{YEAR}-000001"
        assert second["human_id"] == f"CMRF-GUN-{YEAR}-000002"

    def test_create_response_envelope(self, client, sample_payload, citizen_headers, users):
        response = client.post("/api/cmrelief", json=sample_payload("cmrelief"), headers=citizen_headers)
        body = response.json()

        assert response.status_code == 201
        assert body["success"] is True
        assert body["message"] == "CM Relief request created successfully"
        assert body["data"]["status"] == "REQUESTED"
        assert len(body["data"]["status_history"]) == 1
        assert body["data"]["status_history"][0]["changed_by_id"] == users["L3_CITIZEN"]
        assert body["data"]["created_by_id"] == users["L3_CITIZEN"]

    def test_get_by_either_id(self, client, sample_payload):
        record = create(client, "appointments", sample_payload("appointments"))

        by_human = client.get(f"/api/appointments/{record['human_id']}").json()["data"]
        by_surrogate = client.get(f"/api/appointments/{record['id']}").json()["data"]
        assert by_human["id"] == by_surrogate["id"] == record["id"]

    @pytest.mark.parametrize("identifier", ["APP-AP-1999-000001", "987654", "garbage!"])
    def test_unknown_id_is_404_envelope(self, client, identifier):
        response = client.get(f"/api/appointments/{identifier}")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Appointment not found", "code": "NOT_FOUND"}

    def test_missing_required_field_is_400_with_field_errors(self, client, sample_payload, citizen_headers):
        payload = sample_payload("cmrelief")
        del payload["relief_type"]
        response = client.post("/api/cmrelief", json=payload, headers=citizen_headers)

        body = response.json()
        assert response.status_code == 400
        assert body["success"] is False
        assert body["code"] == "VALIDATION_ERROR"
        assert any(error["field"] == "relief_type" for error in body["errors"])

    def test_invalid_enum_in_body_is_400(self, client, sample_payload):
        payload = sample_payload("emergencies")
        payload["emergency_type"] = "ALIENS"
        response = client.post("/api/emergencies", json=payload)
        assert response.status_code == 400

    def test_temple_double_approve_appends_one_entry(self, client, sample_payload, exec_headers):
        """Re-submitting the same status is a no-op on history."""
        record = create(client, "temples", sample_payload("temples"), exec_headers)
        url = f"/api/temples/{record['human_id']}/status"

        first = client.patch(url, json={"status": "APPROVED", "comments": "Quota available"}, headers=exec_headers)
        second = client.patch(url, json={"status": "APPROVED"}, headers=exec_headers)

        assert first.status_code == second.status_code == 200
        history = second.json()["data"]["status_history"]
        assert [entry["status"] for entry in history] == ["REQUESTED", "APPROVED"]
        assert history[-1]["comments"] == "Quota available"

    def test_invalid_status_is_400(self, client, sample_payload, exec_headers):
        record = create(client, "temples", sample_payload("temples"), exec_headers)
        response = client.patch(
            f"/api/temples/{record['id']}/status", json={"status": "TELEPORTED"}, headers=exec_headers
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "status"

    def test_put_changes_fields_and_appends_history_on_status(self, client, sample_payload):
        record = create(client, "education", sample_payload("education"))

        response = client.put(
            f"/api/education/{record['human_id']}",
            json={"status": "UNDER_REVIEW", "status_comment": "Documents received", "approved_amount": 20000,
                  "human_id": "EDU-XXX-2000-000001"},
        )
        data = response.json()["data"]

        assert response.status_code == 200
        assert data["human_id"] == record["human_id"]
        assert data["approved_amount"] == 20000
        assert data["status_history"][-1]["status"] == "UNDER_REVIEW"
        assert data["status_history"][-1]["comments"] == "Documents received"

    def test_status_change_attributes_body_user_without_token(self, client, sample_payload, users):
        record = create(client, "cases", sample_payload("cases"))
        response = client.patch(
            f"/api/cases/{record['id']}/status",
            json={"status": "in-progress", "changed_by": users["L2_EXEC_ADMIN"]},
        )
        assert response.json()["data"]["status_history"][-1]["changed_by_id"] == users["L2_EXEC_ADMIN"]

    def test_assign(self, client, sample_payload, users):
        record = create(client, "appointments", sample_payload("appointments"))
        response = client.patch(
            f"/api/appointments/{record['id']}/assign",
            json={"assigned_to": users["L2_EXEC_ADMIN"], "notes": "Handle personally", "priority": "HIGH"},
        )
        data = response.json()["data"]

        assert response.status_code == 200
        assert data["assigned_to_id"] == users["L2_EXEC_ADMIN"]
        assert data["assigned_to"]["username"] == "executive"
        assert data["assigned_at"] is not None
        assert data["priority"] == "HIGH"

    def test_comments_endpoint_returns_full_log(self, client, sample_payload, users):
        record = create(client, "programs", sample_payload("programs"))
        url = f"/api/programs/{record['id']}/comments"

        client.post(url, json={"text": "Venue booked", "author": users["L2_EXEC_ADMIN"]})
        response = client.post(url, json={"text": "Stalls allotted"})

        body = response.json()
        assert response.status_code == 200
        assert [c["text"] for c in body["data"]] == ["Venue booked", "Stalls allotted"]
        assert body["data"][0]["author_id"] == users["L2_EXEC_ADMIN"]

    def test_empty_comment_rejected(self, client, sample_payload):
        record = create(client, "programs", sample_payload("programs"))
        response = client.post(f"/api/programs/{record['id']}/comments", json={"text": ""})
        assert response.status_code == 400

    def test_pagination_envelope(self, client, sample_payload):
        for _ in range(25):
            create(client, "appointments", sample_payload("appointments"))

        body = client.get("/api/appointments", params={"page": 2, "limit": 10}).json()

        assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "pages": 3}
        assert [int(item["human_id"][-6:]) for item in body["data"]] == list(range(15, 5, -1))

    def test_list_filters_by_query_params(self, client, sample_payload):
        create(client, "appointments", sample_payload("appointments"))
        vip = sample_payload("appointments")
        vip.update({"is_vip": True, "district": "Krishna"})
        create(client, "appointments", vip)

        body = client.get("/api/appointments", params={"is_vip": "true"}).json()
        assert body["pagination"]["total"] == 1
        assert body["data"][0]["district"] == "Krishna"

    def test_bad_filter_value_is_400(self, client):
        response = client.get("/api/appointments", params={"status": "SLEEPING"})
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "status"

    def test_stats_summary(self, client, sample_payload, citizen_headers):
        create(client, "cmrelief", sample_payload("cmrelief"), citizen_headers)
        create(client, "cmrelief", sample_payload("cmrelief"), citizen_headers)

        body = client.get("/api/cmrelief/stats/summary", headers=citizen_headers).json()

        assert body["success"] is True
        assert body["data"]["total"] == 2
        assert body["data"]["by_status"] == {"REQUESTED": 2}
        assert body["data"]["total_requested_amount"] == 100000

    @pytest.mark.parametrize("name,path", [
        ("appointments", "/stats/overview"),
        ("cases", "/stats/dashboard"),
        ("csrindustrial", "/stats/overview"),
        ("emergencies", "/stats/overview"),
        ("programs", "/stats/overview"),
    ])
    def test_stats_served_on_type_specific_path(self, client, sample_payload, name, path):
        create(client, name, sample_payload(name))

        summary = client.get(f"/api/{name}/stats/summary").json()
        aliased = client.get(f"/api/{name}{path}")

        assert aliased.status_code == 200
        assert aliased.json()["data"]["total"] == summary["data"]["total"] == 1

    @pytest.mark.parametrize("field", ["applicant_name", "mobile", "purpose", "is_vip"])
    def test_null_for_required_field_is_400(self, client, sample_payload, field):
        record = create(client, "appointments", sample_payload("appointments"))

        response = client.put(f"/api/appointments/{record['human_id']}", json={field: None})

        assert response.status_code == 400
        assert response.json()["errors"] == [{"field": field, "message": "may not be null"}]
        unchanged = client.get(f"/api/appointments/{record['id']}").json()["data"]
        assert unchanged["applicant_name"] == "Ravi Kumar"

    def test_null_for_optional_field_clears_it(self, client, sample_payload):
        payload = sample_payload("appointments")
        payload["agenda"] = "Drainage"
        record = create(client, "appointments", payload)

        response = client.put(f"/api/appointments/{record['id']}", json={"agenda": None})

        assert response.status_code == 200
        assert response.json()["data"]["agenda"] is None

    def test_unknown_comment_author_is_400(self, client, sample_payload):
        record = create(client, "appointments", sample_payload("appointments"))

        response = client.post(f"/api/appointments/{record['id']}/comments", json={"author": 99999, "text": "hi"})

        assert response.status_code == 400
        assert response.json()["errors"][0] == {"field": "author", "message": "no such user"}
        stored = client.get(f"/api/appointments/{record['id']}").json()["data"]
        assert stored["comments"] == []

    def test_unknown_changed_by_is_400(self, client, sample_payload):
        record = create(client, "cases", sample_payload("cases"))

        response = client.patch(
            f"/api/cases/{record['id']}/status", json={"status": "in-progress", "changed_by": 99999}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "changed_by"
        stored = client.get(f"/api/cases/{record['id']}").json()["data"]
        assert stored["status"] == "pending"
        assert len(stored["status_history"]) == 1

    def test_unknown_user_in_update_body_is_400(self, client, sample_payload, exec_headers):
        record = create(client, "disputes", sample_payload("disputes"), exec_headers)

        response = client.put(f"/api/disputes/{record['id']}", json={"mediator_id": 99999}, headers=exec_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "mediator_id"

    def test_unknown_record_on_every_write_route(self, client, master_headers):
        for method, suffix, payload in (
            ("put", "", {"purpose": "x"}),
            ("patch", "/status", {"status": "CANCELLED"}),
            ("patch", "/assign", {"assigned_to": None}),
            ("post", "/comments", {"text": "x"}),
            ("delete", "", None),
        ):
            kwargs = {"headers": master_headers}
            if payload is not None:
                kwargs["json"] = payload
            response = getattr(client, method)(f"/api/cmrelief/CMRF-GUN-1999-000001{suffix}", **kwargs)
            assert response.status_code == 404, (method, suffix)


class TestWorkflowActions:

    def test_confirm_and_check_in_appointment(self, client, sample_payload):
        record = create(client, "appointments", sample_payload("appointments"))

        confirmed = client.patch(
            f"/api/appointments/{record['id']}/confirm",
            json={"confirmed_date": "2025-05-02T00:00:00", "confirmed_time": "10:30",
                  "meeting_place": "SECRETARIAT"},
        ).json()["data"]
        assert confirmed["status"] == "CONFIRMED"
        assert confirmed["confirmed_slot"] == "2025-05-02T10:30:00"
        assert confirmed["confirmation_sent"] is True

        checked_in = client.patch(f"/api/appointments/{record['id']}/checkin", json={}).json()["data"]
        assert checked_in["status"] == "CHECKED_IN"
        assert checked_in["check_in_time"] is not None
        assert [e["status"] for e in checked_in["status_history"]] == ["REQUESTED", "CONFIRMED", "CHECKED_IN"]

    def test_confirm_rejects_impossible_time(self, client, sample_payload):
        record = create(client, "appointments", sample_payload("appointments"))
        response = client.patch(
            f"/api/appointments/{record['id']}/confirm",
            json={"confirmed_date": "2025-05-02T00:00:00", "confirmed_time": "25:00",
                  "meeting_place": "SECRETARIAT"},
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "confirmed_time"

    def test_csr_milestones(self, client, sample_payload):
        record = create(client, "csrindustrial", sample_payload("csrindustrial"))

        added = client.post(
            f"/api/csrindustrial/{record['id']}/milestones",
            json={"title": "Lab equipment procured", "amount": 250000},
        )
        assert added.status_code == 201
        milestone = added.json()["data"]["milestones"][0]
        assert milestone["status"] == "PENDING"
        assert milestone["milestone_id"]

        updated = client.patch(
            f"/api/csrindustrial/{record['id']}/milestones/{milestone['milestone_id']}",
            json={"status": "COMPLETED"},
        ).json()["data"]["milestones"][0]
        assert updated["status"] == "COMPLETED"
        assert updated["completed_date"] is not None

        missing = client.patch(f"/api/csrindustrial/{record['id']}/milestones/nope", json={"status": "DELAYED"})
        assert missing.status_code == 404

    def test_program_team_and_feedback(self, client, sample_payload):
        record = create(client, "programs", sample_payload("programs"))
        base = f"/api/programs/{record['id']}"

        team = client.post(f"{base}/team-members", json={"name": "Kiran", "role": "Coordinator"})
        assert team.json()["data"]["team_members"][0]["name"] == "Kiran"

        client.post(f"{base}/feedback", json={"rating": 5, "comments": "Well organised"})
        data = client.post(f"{base}/feedback", json={"rating": 4}).json()["data"]

        assert len(data["feedback"]) == 2
        assert data["statistics"]["feedback_count"] == 2
        assert data["statistics"]["feedback_rating"] == 4.5

    def test_emergency_escalation(self, client, sample_payload, users):
        record = create(client, "emergencies", sample_payload("emergencies"))
        data = client.patch(
            f"/api/emergencies/{record['id']}/escalate",
            json={"escalated_to": users["L1_MASTER_ADMIN"], "reason": "Spreading to nearby houses"},
        ).json()["data"]

        assert data["escalated"] is True
        assert data["priority"] == "CRITICAL"
        assert data["escalated_to_id"] == users["L1_MASTER_ADMIN"]
        assert data["escalation_date"] is not None

    def test_dispute_hearing(self, client, sample_payload, exec_headers, users):
        record = create(client, "disputes", sample_payload("disputes"), exec_headers)
        data = client.patch(
            f"/api/disputes/{record['human_id']}/hearing",
            json={"hearing_date": "2025-07-15T11:00:00", "hearing_place": "Mandal office",
                  "mediator": users["L2_EXEC_ADMIN"]},
            headers=exec_headers,
        ).json()["data"]

        assert data["status"] == "MEDIATION_SCHEDULED"
        assert data["mediator_id"] == users["L2_EXEC_ADMIN"]
        assert data["status_history"][-1]["comments"] == "Hearing scheduled for 2025-07-15"

    def test_action_user_references_must_exist(self, client, sample_payload, exec_headers):
        emergency = create(client, "emergencies", sample_payload("emergencies"))
        escalate = client.patch(
            f"/api/emergencies/{emergency['id']}/escalate", json={"escalated_to": 99999, "reason": "Spreading"}
        )
        assert escalate.status_code == 400
        assert escalate.json()["errors"][0]["field"] == "escalated_to"

        dispute = create(client, "disputes", sample_payload("disputes"), exec_headers)
        hearing = client.patch(
            f"/api/disputes/{dispute['id']}/hearing",
            json={"hearing_date": "2025-07-15T11:00:00", "mediator": 99999},
            headers=exec_headers,
        )
        assert hearing.status_code == 400
        assert hearing.json()["errors"][0]["field"] == "mediator"

        appointment = create(client, "appointments", sample_payload("appointments"))
        confirm = client.patch(
            f"/api/appointments/{appointment['id']}/confirm",
            json={"confirmed_date": "2025-05-02T00:00:00", "confirmed_time": "10:30",
                  "meeting_place": "SECRETARIAT", "coordinator_id": 99999},
        )
        assert confirm.status_code == 400
        assert client.get(f"/api/appointments/{appointment['id']}").json()["data"]["status"] == "REQUESTED"

    def test_dispute_hearing_requires_token(self, client):
        response = client.patch("/api/disputes/1/hearing", json={"hearing_date": "2025-07-15T11:00:00"})
        assert response.status_code == 401


class TestUsers:

    def test_register_never_returns_password(self, client):
        response = client.post("/api/users/register", json={
            "username": "NewCitizen",
            "email": "New@Example.org",
            "password": "hunter22",
            "first_name": "New",
            "last_name": "Citizen",
        })
        data = response.json()["data"]

        assert response.status_code == 201
        assert data["username"] == "newcitizen"
        assert data["email"] == "new@example.org"
        assert data["role"] == "L3_CITIZEN"
        assert "password" not in data
        assert "password_hash" not in data

    def test_only_master_admin_can_register_admins(self, client, master_headers):
        payload = {
            "username": "officer",
            "email": "officer@example.org",
            "password": "hunter22",
            "first_name": "Field",
            "last_name": "Officer",
            "role": "L2_EXEC_ADMIN",
        }
        assert client.post("/api/users/register", json=payload).status_code == 403
        assert client.post("/api/users/register", json=payload, headers=master_headers).status_code == 201

    def test_duplicate_username_conflicts(self, client, users):
        response = client.post("/api/users/register", json={
            "username": "citizen",
            "email": "other@example.org",
            "password": "hunter22",
            "first_name": "Dup",
            "last_name": "User",
        })
        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"

    def test_login_and_me(self, client, users):
        login = client.post("/api/users/login", json={"username": "citizen", "password": "secret123"})
        body = login.json()["data"]

        assert login.status_code == 200
        assert body["user"]["login_count"] == 1
        me = client.get("/api/users/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.json()["data"]["id"] == users["L3_CITIZEN"]

    def test_login_by_email(self, client, users):
        login = client.post("/api/users/login", json={"username": "citizen@example.org", "password": "secret123"})
        assert login.status_code == 200

    def test_wrong_password(self, client, users):
        response = client.post("/api/users/login", json={"username": "citizen", "password": "wrong"})
        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_listing_requires_admin(self, client, citizen_headers, exec_headers):
        assert client.get("/api/users", headers=citizen_headers).status_code == 403

        body = client.get("/api/users", params={"role": "L3_CITIZEN"}, headers=exec_headers).json()
        assert body["pagination"]["total"] == 1
        assert body["data"][0]["username"] == "citizen"

    def test_citizen_cannot_promote_self(self, client, users, citizen_headers):
        response = client.put(
            f"/api/users/{users['L3_CITIZEN']}", json={"role": "L1_MASTER_ADMIN"}, headers=citizen_headers
        )
        assert response.status_code == 403

    def test_password_change_rehashes(self, client, users, citizen_headers):
        client.put(f"/api/users/{users['L3_CITIZEN']}", json={"password": "newsecret"}, headers=citizen_headers)

        assert client.post("/api/users/login", json={"username": "citizen", "password": "secret123"}).status_code == 401
        assert client.post("/api/users/login", json={"username": "citizen", "password": "newsecret"}).status_code == 200

    def test_deactivation(self, client, users, exec_headers, master_headers):
        url = f"/api/users/{users['L3_CITIZEN']}"
        assert client.delete(url, headers=exec_headers).status_code == 403

        response = client.delete(url, headers=master_headers)
        assert response.status_code == 200
        assert response.json()["data"]["is_active"] is False

        login = client.post("/api/users/login", json={"username": "citizen", "password": "secret123"})
        assert login.status_code == 403


class TestHealth:

    def test_health(self, client):
        body = client.get("/api/health").json()
        assert body["status"] == "ok"
        assert body["database"]["status"] == "connected"

    def test_database_ping(self, client):
        assert client.get("/api/health/db").json()["message"] == "Database connection is healthy"

    def test_root_banner(self, client):
        assert client.get("/").json()["success"] is True
