"""
Tests for key casing transforms and the HTTP client.
"""
from unittest.mock import MagicMock

import pytest

from app.client import ApiError, LibraryClient
from app.utils.casing import camel_to_snake, snake_to_camel, to_camel_case, to_snake_case


class TestCasing:

    def test_key_conversion(self):
        assert snake_to_camel("membership_end") == "membershipEnd"
        assert snake_to_camel("id") == "id"
        assert camel_to_snake("membershipEnd") == "membership_end"
        assert camel_to_snake("totalStudents") == "total_students"

    def test_nested_structures(self):
        payload = {"students": [{"seat_number": "1", "shift": {"shift_title": "Morning"}}], "total_count": 1}

        assert to_camel_case(payload) == {
            "students": [{"seatNumber": "1", "shift": {"shiftTitle": "Morning"}}],
            "totalCount": 1,
        }

    def test_values_are_untouched(self):
        assert to_snake_case({"name": "firstName", "tags": ["someTag"]}) == {"name": "firstName", "tags": ["someTag"]}
        assert to_camel_case(None) is None
        assert to_camel_case("a_string") == "a_string"
        assert to_camel_case({1: "x"}) == {1: "x"}

    @pytest.mark.parametrize("payload", [
        {"membershipStart": "2026-01-01", "seat": {"seatNumber": "4", "isAssigned": True}},
        {"_id": 1, "__typename": "Student", "seatNumber": "4"},
        {"students": [{"_id": 1, "shiftTitle": "Morning"}, {"userID": 2, "shift2Id": None}], "totalCount": 2},
        [{"seatNumber": "1"}, [{"isAssigned": False}], "plainValue", 3],
        {},
    ])
    def test_camel_input_survives_a_round_trip(self, payload):
        assert to_camel_case(to_snake_case(payload)) == payload

    def test_leading_underscores_are_kept(self):
        assert snake_to_camel("_id") == "_id"
        assert snake_to_camel("__typename") == "__typename"
        assert snake_to_camel("_private_field") == "_privateField"


def _response(status_code=200, payload=None, reason="OK"):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    response.json.return_value = payload
    return response


class TestLibraryClient:

    def test_request_and_response_casing(self):
        session = MagicMock()
        session.request.return_value = _response(payload={"student": {"seat_number": "4", "is_expired": False}})
        api = LibraryClient("http://localhost:8000/api/", session=session)

        result = api.add_student({"name": "Asha", "membershipStart": "2026-01-01"})

        assert result == {"student": {"seatNumber": "4", "isExpired": False}}
        args, kwargs = session.request.call_args
        assert args == ("POST", "http://localhost:8000/api/students")
        assert kwargs["json"] == {"name": "Asha", "membership_start": "2026-01-01"}

    def test_query_parameters_drop_none_and_use_snake_case(self):
        session = MagicMock()
        session.request.return_value = _response(payload={"seats": []})
        api = LibraryClient("http://localhost:8000/api", session=session)

        api.get_seats(shift_id=2)
        api.get_students(from_date="2026-01-01")

        first, second = session.request.call_args_list
        assert first.kwargs["params"] == {"shift_id": 2}
        assert second.kwargs["params"] == {"from_date": "2026-01-01"}

    def test_error_response_raises(self):
        session = MagicMock()
        session.request.return_value = _response(403, {"detail": "Forbidden"}, reason="Forbidden")
        api = LibraryClient("http://localhost:8000/api", session=session)

        with pytest.raises(ApiError) as excinfo:
            api.get_users()

        assert excinfo.value.status_code == 403
        assert excinfo.value.message == "Forbidden"

    def test_error_without_json_body(self):
        session = MagicMock()
        response = _response(502, reason="Bad Gateway")
        response.json.side_effect = ValueError("no json")
        session.request.return_value = response
        api = LibraryClient("http://localhost:8000/api", session=session)

        with pytest.raises(ApiError) as excinfo:
            api.get_settings()

        assert excinfo.value.message == "Bad Gateway"
