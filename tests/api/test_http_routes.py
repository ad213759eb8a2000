from __future__ import annotations


def test_login_route(client):
    resp = client.post("/api/login", json={"email": "user1@company.com", "password": "admin123"})

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["user"]["employee_id"] == "EMP001"
    assert body["token"]


def test_login_route_bad_credentials(client):
    resp = client.post("/api/login", json={"email": "user1@company.com", "password": "wrong"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials"}


def test_protected_route_without_token(client):
    resp = client.get("/api/dashboard")

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Access token required"}


def test_protected_route_with_bad_token(client):
    resp = client.get("/api/dashboard", headers={"Authorization": "Bearer junk"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid token"}


def test_punch_flow(client, clock, auth_header):
    headers = auth_header(2)

    resp = client.post("/api/attendance/punch", json={"type": "in"}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Punched in successfully", "time": "09:00:00"}

    again = client.post("/api/attendance/punch", json={"type": "in"}, headers=headers)
    assert again.status_code == 409
    assert again.get_json() == {"error": "Already punched in today"}

    clock.advance(hours=8, minutes=30)
    out = client.post("/api/attendance/punch", json={"type": "out"}, headers=headers)
    assert out.status_code == 200
    assert out.get_json() == {"message": "Punched out successfully", "time": "17:30:00", "totalHours": 8.5}

    today = client.get("/api/attendance/today", headers=headers).get_json()
    assert today["total_hours"] == 8.5
    assert today["status"] == "present"


def test_punch_out_without_punch_in(client, auth_header):
    resp = client.post("/api/attendance/punch", json={"type": "out"}, headers=auth_header(2))

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "No punch-in record found"}


def test_punch_with_bad_type(client, auth_header):
    resp = client.post("/api/attendance/punch", json={"type": "lunch"}, headers=auth_header(2))

    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_today_is_null_before_punching(client, auth_header):
    resp = client.get("/api/attendance/today", headers=auth_header(2))

    assert resp.status_code == 200
    assert resp.get_json() is None


def test_employee_cannot_read_other_users_history(client, auth_header):
    resp = client.get("/api/attendance?user_id=3", headers=auth_header(2))

    assert resp.status_code == 403


def test_admin_reads_other_users_history(client, stores, auth_header):
    from datetime import date

    stores.attendance.add_closed(3, date(2026, 1, 30), 8.0)

    resp = client.get("/api/attendance?user_id=3", headers=auth_header(1))

    assert resp.status_code == 200
    rows = resp.get_json()
    assert [r["date"] for r in rows] == ["2026-01-30"]


def test_non_integer_user_id_is_rejected(client, auth_header):
    resp = client.get("/api/attendance?user_id=abc", headers=auth_header(1))

    assert resp.status_code == 400


def test_leave_lifecycle(client, auth_header):
    created = client.post(
        "/api/leave-requests",
        json={"leave_type": "Annual", "start_date": "2026-03-01", "end_date": "2026-03-02", "reason": "Trip"},
        headers=auth_header(2),
    )
    assert created.status_code == 201
    request_id = created.get_json()["id"]

    forbidden = client.put(f"/api/leave-requests/{request_id}", json={"status": "approved"}, headers=auth_header(2))
    assert forbidden.status_code == 403

    approved = client.put(f"/api/leave-requests/{request_id}", json={"status": "approved"}, headers=auth_header(1))
    assert approved.status_code == 200
    assert approved.get_json() == {"message": "Leave request approved successfully"}

    twice = client.put(f"/api/leave-requests/{request_id}", json={"status": "rejected"}, headers=auth_header(1))
    assert twice.status_code == 409

    listed = client.get("/api/leave-requests", headers=auth_header(1)).get_json()
    assert listed[0]["status"] == "approved"
    assert listed[0]["employee_name"] == "Alice"


def test_leave_with_bad_dates(client, stores, auth_header):
    resp = client.post(
        "/api/leave-requests",
        json={"leave_type": "Annual", "start_date": "2026-03-05", "end_date": "2026-03-01"},
        headers=auth_header(2),
    )

    assert resp.status_code == 400
    assert stores.leaves.count() == 0


def test_resolve_unknown_leave(client, auth_header):
    resp = client.put("/api/leave-requests/999", json={"status": "approved"}, headers=auth_header(1))

    assert resp.status_code == 404


def test_dashboard_by_role(client, auth_header):
    client.post("/api/attendance/punch", json={"type": "in"}, headers=auth_header(2))

    admin = client.get("/api/dashboard", headers=auth_header(1)).get_json()
    assert admin == {"totalEmployees": 2, "presentToday": 1, "pendingLeaves": 0, "avgHours": 0.0}

    employee = client.get("/api/dashboard", headers=auth_header(3)).get_json()
    assert employee == {"daysPresent": 0, "totalHours": 0.0, "pendingLeaves": 0}


def test_employees_routes_are_admin_only(client, auth_header):
    assert client.get("/api/employees", headers=auth_header(2)).status_code == 403

    created = client.post(
        "/api/employees",
        json={"employee_id": "EMP050", "name": "Dan", "email": "dan@company.com", "password": "dan12345"},
        headers=auth_header(1),
    )
    assert created.status_code == 201

    names = [e["name"] for e in client.get("/api/employees", headers=auth_header(1)).get_json()]
    assert "Dan" in names


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_leave_with_non_string_date_is_rejected(client, stores, auth_header):
    resp = client.post(
        "/api/leave-requests",
        json={"leave_type": "Annual", "start_date": 20260301, "end_date": "2026-03-02"},
        headers=auth_header(2),
    )

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Invalid start_date (expected YYYY-MM-DD)"}
    assert stores.leaves.count() == 0


def test_leave_with_non_string_reason_is_rejected(client, stores, auth_header):
    resp = client.post(
        "/api/leave-requests",
        json={"leave_type": "Annual", "start_date": "2026-03-01", "end_date": "2026-03-02", "reason": 5},
        headers=auth_header(2),
    )

    assert resp.status_code == 400
    assert stores.leaves.count() == 0


def test_leave_with_non_string_type_is_rejected(client, stores, auth_header):
    resp = client.post(
        "/api/leave-requests",
        json={"leave_type": 1, "start_date": "2026-03-01", "end_date": "2026-03-02"},
        headers=auth_header(2),
    )

    assert resp.status_code == 400
    assert stores.leaves.count() == 0


def test_login_with_non_string_password(client):
    resp = client.post("/api/login", json={"email": "user1@company.com", "password": 123456})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid credentials"}


def test_login_with_non_string_email(client):
    resp = client.post("/api/login", json={"email": 7, "password": "admin123"})

    assert resp.status_code == 401


def test_create_employee_with_non_string_field(client, auth_header):
    resp = client.post(
        "/api/employees",
        json={"employee_id": 51, "name": "Eve", "email": "eve@company.com", "password": "eve12345"},
        headers=auth_header(1),
    )

    assert resp.status_code == 400


def test_history_limit_zero_is_rejected(client, auth_header):
    resp = client.get("/api/attendance?limit=0", headers=auth_header(2))

    assert resp.status_code == 400


def test_history_user_id_zero_is_not_treated_as_self(client, auth_header):
    resp = client.get("/api/attendance?user_id=0", headers=auth_header(2))

    assert resp.status_code == 403
