from datetime import date


def _post(client, path, payload):
    response = client.post(f"/v1{path}", json=payload)
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["success"] is True
    return body["data"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert "X-Latency-Ms" in response.headers


def test_full_grade_flow(client):
    term = _post(client, "/terms/", {
        "name": "2025-1", "start_date": "2025-02-01", "end_date": "2025-06-30", "active": True,
    })
    discipline = _post(client, "/disciplines/", {"code": "FIS101", "name": "Física", "credit_hours": 60})
    teacher = _post(client, "/people/", {"role": "Teacher", "name": "Ana Souza", "email": "ana@escola.edu"})
    student = _post(client, "/people/", {"role": "Student", "name": "Bruno Lima", "email": "bruno@escola.edu"})
    offering = _post(client, "/offerings/", {
        "discipline_id": discipline["id"], "teacher_id": teacher["id"],
        "term_id": term["id"], "section_code": "FIS-2025-A",
    })
    p1 = _post(client, "/assessments/", {"offering_id": offering["id"], "name": "P1", "weight": 1.0})
    p2 = _post(client, "/assessments/", {"offering_id": offering["id"], "name": "P2", "weight": 2.0})
    enrollment = _post(client, "/enrollments/", {"offering_id": offering["id"], "student_id": student["id"]})

    assert enrollment["status"] == "InProgress"
    assert enrollment["final_average"] is None
    assert enrollment["attendance_percentage"] == 100.0

    first = _post(client, "/grades/", {"enrollment_id": enrollment["id"], "assessment_id": p1["id"], "value": 8.0})
    assert first["enrollment"]["final_average"] == 8.0
    assert first["enrollment"]["status"] == "Passed"

    second = _post(client, "/grades/", {"enrollment_id": enrollment["id"], "assessment_id": p2["id"], "value": 6.0})
    assert second["enrollment"]["final_average"] == 6.667
    assert second["enrollment"]["status"] == "Recovery"

    # 중복 입력 → 409
    response = client.post("/v1/grades/", json={
        "enrollment_id": enrollment["id"], "assessment_id": p1["id"], "value": 1.0,
    })
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_GRADE"

    # 범위 밖 점수 → 422
    response = client.put(f"/v1/grades/{second['grade']['id']}", json={"value": 12})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "INVALID_VALUE"

    response = client.put(f"/v1/grades/{second['grade']['id']}", json={"value": 3.5})
    assert response.status_code == 200
    assert response.json()["data"]["enrollment"]["final_average"] == 5.0

    for day, present in [("2025-03-03", True), ("2025-03-05", True), ("2025-03-10", False)]:
        _post(client, "/attendance/", {"enrollment_id": enrollment["id"], "class_date": day, "present": present})

    response = client.get(f"/v1/enrollments/{enrollment['id']}")
    data = response.json()["data"]
    assert data["attendance_percentage"] == 66.67
    assert data["final_average"] == 5.0

    response = client.get(f"/v1/transcripts/{student['id']}", params={"term_id": term["id"]})
    assert response.status_code == 200
    lines = response.json()["data"]
    assert lines == [{
        "enrollment_id": enrollment["id"],
        "term": "2025-1",
        "student": "Bruno Lima",
        "discipline": "Física",
        "section_code": "FIS-2025-A",
        "grades": "P1: 8.00 | P2: 3.50",
        "final_average": 5.0,
        "attendance_percentage": 66.67,
        "status": "Recovery",
    }]


def test_duplicate_attendance_returns_conflict(client, school):
    payload = {"enrollment_id": school.enrollment_id, "class_date": "2025-03-03", "present": True}
    assert client.post("/v1/attendance/", json=payload).status_code == 200

    response = client.post("/v1/attendance/", json=payload)
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "DUPLICATE_ATTENDANCE"


def test_attendance_update_and_delete(client, school):
    payload = {"enrollment_id": school.enrollment_id, "class_date": "2025-03-03", "present": False}
    client.post("/v1/attendance/", json=payload)

    response = client.put(f"/v1/attendance/{school.enrollment_id}/2025-03-03", json={"present": True})
    assert response.json()["data"]["enrollment"]["attendance_percentage"] == 100.0

    response = client.delete(f"/v1/attendance/{school.enrollment_id}/2025-03-03")
    assert response.status_code == 200
    assert client.get(f"/v1/enrollments/{school.enrollment_id}/attendance").json()["data"] == []


def test_blocked_discipline_delete(client, school):
    response = client.delete(f"/v1/disciplines/{school.discipline_id}")
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "REFERENTIAL_ERROR"


def test_enrollment_delete_and_not_found(client, school):
    client.post("/v1/grades/", json={
        "enrollment_id": school.enrollment_id, "assessment_id": school.p1_id, "value": 5,
    })
    assert client.delete(f"/v1/enrollments/{school.enrollment_id}").status_code == 200

    response = client.get(f"/v1/enrollments/{school.enrollment_id}")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "ENROLLMENT_NOT_FOUND"


def test_recompute_endpoint_zero_grades(client, school):
    response = client.post(f"/v1/enrollments/{school.enrollment_id}/recompute")
    data = response.json()["data"]
    assert data["final_average"] == 0.0
    assert data["status"] == "Failed"


def test_active_term_endpoint(client, school):
    response = client.get("/v1/terms/active")
    assert response.json()["data"]["id"] == school.term_id
    assert response.json()["data"]["start_date"] == date(2025, 2, 1).isoformat()


def test_non_numeric_grade_value_uses_error_envelope(client, school):
    response = client.post("/v1/grades/", json={
        "enrollment_id": school.enrollment_id, "assessment_id": school.p1_id, "value": "abc",
    })
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_VALUE"
    assert client.get(f"/v1/enrollments/{school.enrollment_id}/grades").json()["data"] == []


def test_malformed_request_body_uses_error_envelope(client, school):
    response = client.post("/v1/grades/", json={"assessment_id": school.p1_id, "value": 5})
    assert response.status_code == 422
    assert response.json()["success"] is False
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
