"""
Tests for seat inventory endpoints.
"""
import pytest

from app.core.exceptions import ValidationFailed
from app.services.membership.seats import parse_seat_numbers


class TestParseSeatNumbers:

    def test_trims_and_drops_empty_parts(self):
        assert parse_seat_numbers(" 1, 2 ,,3 ") == ["1", "2", "3"]

    @pytest.mark.parametrize("raw,message", [
        (None, "seat_numbers must be a comma-separated string"),
        (" , ,", "No seat numbers provided"),
        ("1,2,2", "Duplicate seat numbers in input"),
    ])
    def test_rejects_bad_input(self, raw, message):
        with pytest.raises(ValidationFailed) as excinfo:
            parse_seat_numbers(raw)
        assert excinfo.value.message == message


class TestSeatsAPI:

    def test_add_and_list_seats(self, admin_client):
        response = admin_client.post("/api/seats", json={"seat_numbers": "2,1,3"})

        assert response.status_code == 201
        assert response.json()["message"] == "Seats added successfully"

        seats = admin_client.get("/api/seats").json()["seats"]
        assert [s["seat_number"] for s in seats] == ["1", "2", "3"]
        assert not any(s["is_assigned"] for s in seats)

    def test_duplicate_in_input_creates_nothing(self, admin_client):
        response = admin_client.post("/api/seats", json={"seat_numbers": "1,2,2"})

        assert response.status_code == 400
        assert admin_client.get("/api/seats").json()["seats"] == []

    def test_existing_number_rejects_whole_batch(self, admin_client, make_seats):
        make_seats("4")

        response = admin_client.post("/api/seats", json={"seat_numbers": "3,4"})

        assert response.status_code == 400
        assert "4" in response.json()["detail"]
        numbers = [s["seat_number"] for s in admin_client.get("/api/seats").json()["seats"]]
        assert numbers == ["4"]

    def test_missing_seat_numbers(self, admin_client):
        response = admin_client.post("/api/seats", json={})
        assert response.status_code == 400

    def test_assignment_is_derived_per_shift(self, admin_client, make_seats, make_student, shift, other_shift):
        seat_a, seat_b = make_seats("A1", "A2")
        make_student(name="Asha", shift_id=shift.id, seat_id=seat_a.id)

        overall = {s["seat_number"]: s["is_assigned"] for s in admin_client.get("/api/seats").json()["seats"]}
        in_shift = {
            s["seat_number"]: s["is_assigned"]
            for s in admin_client.get(f"/api/seats?shift_id={shift.id}").json()["seats"]
        }
        in_other = {
            s["seat_number"]: s["is_assigned"]
            for s in admin_client.get(f"/api/seats?shift_id={other_shift.id}").json()["seats"]
        }

        assert overall == {"A1": True, "A2": False}
        assert in_shift == {"A1": True, "A2": False}
        assert in_other == {"A1": False, "A2": False}

    def test_delete_seat_releases_student(self, admin_client, make_seats, make_student, shift):
        seat, = make_seats("9")
        student = make_student(shift_id=shift.id, seat_id=seat.id)

        response = admin_client.delete(f"/api/seats/{seat.id}")

        assert response.status_code == 200
        assert admin_client.get("/api/seats").json()["seats"] == []
        body = admin_client.get(f"/api/students/{student.id}").json()
        assert body["seat_id"] is None
        assert body["shift_id"] == shift.id

    def test_delete_unknown_seat(self, admin_client):
        response = admin_client.delete("/api/seats/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Seat not found"

    def test_staff_with_seat_permission(self, login_client):
        manager = login_client("seats", role="staff", permissions=["manage_seats"])

        assert manager.post("/api/seats", json={"seat_numbers": "1"}).status_code == 201
