"""
HTTP client for the membership API.

Requests are sent with snake_case keys and responses are returned with
camelCase keys, matching what the browser front end works with. The
underlying requests.Session keeps the session cookie between calls.
"""
from typing import Any, Dict, Optional
import logging

import requests

from app.utils.casing import to_camel_case, to_snake_case

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class LibraryClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Any:
        body = to_snake_case(json) if json is not None else None
        query = to_snake_case({k: v for k, v in params.items() if v is not None}) if params else None

        response = self.session.request(
            method,
            f"{self.base_url}{path}",
            json=body,
            params=query,
            files=files,
            timeout=self.timeout,
        )
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not response.ok:
            message = payload.get("detail") if isinstance(payload, dict) else None
            logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message or response.reason or "Request failed")
        return to_camel_case(payload)

    # Auth
    def login(self, username: str, password: str) -> Dict[str, Any]:
        return self.request("POST", "/auth/login", json={"username": username, "password": password})["user"]

    def logout(self) -> Dict[str, Any]:
        return self.request("GET", "/auth/logout")

    def auth_status(self) -> Dict[str, Any]:
        return self.request("GET", "/auth/status")

    # Students
    def get_students(self, from_date: Optional[str] = None, to_date: Optional[str] = None):
        return self.request("GET", "/students", params={"fromDate": from_date, "toDate": to_date})

    def get_student(self, student_id: int):
        return self.request("GET", f"/students/{student_id}")

    def get_active_students(self):
        return self.request("GET", "/students/active")

    def get_expired_memberships(self):
        return self.request("GET", "/students/expired")

    def get_expiring_soon(self):
        return self.request("GET", "/students/expiring-soon")

    def get_students_by_shift(self, shift_id: int, search: Optional[str] = None, status: Optional[str] = None):
        return self.request("GET", f"/students/shift/{shift_id}", params={"search": search, "status": status})

    def add_student(self, student: Dict[str, Any]):
        return self.request("POST", "/students", json=student)

    def update_student(self, student_id: int, student: Dict[str, Any]):
        return self.request("PUT", f"/students/{student_id}", json=student)

    def delete_student(self, student_id: int):
        return self.request("DELETE", f"/students/{student_id}")

    def renew_membership(self, student_id: int, membership_start: str, membership_end: str):
        return self.request(
            "POST",
            f"/students/{student_id}/renew",
            json={"membershipStart": membership_start, "membershipEnd": membership_end},
        )

    def get_dashboard_stats(self):
        return self.request("GET", "/students/stats/dashboard")

    # Seats
    def get_seats(self, shift_id: Optional[int] = None):
        return self.request("GET", "/seats", params={"shiftId": shift_id})

    def add_seats(self, seat_numbers: str):
        return self.request("POST", "/seats", json={"seatNumbers": seat_numbers})

    def delete_seat(self, seat_id: int):
        return self.request("DELETE", f"/seats/{seat_id}")

    # Schedules
    def get_schedules(self):
        return self.request("GET", "/schedules")

    def get_schedules_with_students(self):
        return self.request("GET", "/schedules/with-students")

    def add_schedule(self, schedule: Dict[str, Any]):
        return self.request("POST", "/schedules", json=schedule)

    def update_schedule(self, schedule_id: int, schedule: Dict[str, Any]):
        return self.request("PUT", f"/schedules/{schedule_id}", json=schedule)

    def delete_schedule(self, schedule_id: int):
        return self.request("DELETE", f"/schedules/{schedule_id}")

    # Users and settings
    def get_user_profile(self):
        return self.request("GET", "/users/profile")

    def update_user_profile(self, profile: Dict[str, Any]):
        return self.request("PUT", "/users/profile", json=profile)

    def change_password(self, current_password: str, new_password: str):
        return self.request(
            "PUT",
            "/users/change-password",
            json={"currentPassword": current_password, "newPassword": new_password},
        )

    def get_users(self):
        return self.request("GET", "/users")

    def add_user(self, user: Dict[str, Any]):
        return self.request("POST", "/users", json=user)

    def delete_user(self, user_id: int):
        return self.request("DELETE", f"/users/{user_id}")

    def get_settings(self):
        return self.request("GET", "/settings")

    def update_settings(self, values: Dict[str, Any]):
        return self.request("PUT", "/settings", json=values)

    def upload_image(self, filename: str, content: bytes, content_type: str = "image/jpeg"):
        return self.request("POST", "/upload-image", files={"image": (filename, content, content_type)})
