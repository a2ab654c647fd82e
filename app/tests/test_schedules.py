"""
Tests for shift (schedule) endpoints.
"""


class TestSchedulesAPI:

    def test_create_schedule(self, admin_client):
        response = admin_client.post(
            "/api/schedules",
            json={"title": "Morning", "description": "6am - 12pm", "time": "06:00", "event_date": "2026-01-05"},
        )

        assert response.status_code == 201
        schedule = response.json()
        assert schedule["title"] == "Morning"
        assert schedule["time"] == "06:00:00"
        assert schedule["event_date"] == "2026-01-05"

    def test_title_is_required(self, admin_client):
        response = admin_client.post("/api/schedules", json={"description": "no title"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Title is required"

    def test_get_and_list(self, admin_client, shift, other_shift):
        assert admin_client.get(f"/api/schedules/{shift.id}").json()["title"] == "Morning"

        titles = [s["title"] for s in admin_client.get("/api/schedules").json()["schedules"]]
        assert sorted(titles) == ["Evening", "Morning"]

    def test_get_unknown_schedule(self, admin_client):
        response = admin_client.get("/api/schedules/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Schedule not found"

    def test_partial_update(self, admin_client, shift):
        response = admin_client.put(f"/api/schedules/{shift.id}", json={"title": "Early morning"})

        assert response.status_code == 200
        assert response.json()["title"] == "Early morning"
        assert response.json()["description"] == "6am - 12pm"

    def test_update_unknown_schedule(self, admin_client):
        assert admin_client.put("/api/schedules/999", json={"title": "x"}).status_code == 404

    def test_student_counts(self, admin_client, shift, other_shift, make_student):
        make_student(name="Asha", shift_id=shift.id)
        make_student(name="Ravi", shift_id=shift.id)

        rows = admin_client.get("/api/schedules/with-students").json()["schedules"]
        counts = {row["title"]: row["student_count"] for row in rows}

        assert counts == {"Morning": 2, "Evening": 0}

    def test_delete_releases_shift_and_seat(self, admin_client, shift, make_seats, make_student):
        seat, = make_seats("1")
        student = make_student(shift_id=shift.id, seat_id=seat.id)

        response = admin_client.delete(f"/api/schedules/{shift.id}")

        assert response.status_code == 200
        assert admin_client.get(f"/api/schedules/{shift.id}").status_code == 404
        body = admin_client.get(f"/api/students/{student.id}").json()
        assert body["shift_id"] is None
        assert body["seat_id"] is None

    def test_staff_without_schedule_permission(self, login_client, shift):
        viewer = login_client("viewer", role="staff", permissions=["view_dashboard"])

        assert viewer.get("/api/schedules").status_code == 200
        assert viewer.post("/api/schedules", json={"title": "Night"}).status_code == 403
        assert viewer.delete(f"/api/schedules/{shift.id}").status_code == 403
