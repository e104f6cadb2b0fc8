from __future__ import annotations

import json
from datetime import date, datetime

import pytest
import requests

from hr_portal.api.client import ApiClient
from hr_portal.auth.api_auth_gateway import ApiAuthGateway
from hr_portal.core.enums import HolidayType, LeaveStatus, LeaveType, Role
from hr_portal.core.exceptions import AuthenticationError, ExternalServiceError, NotFoundError
from hr_portal.employees.api_employee_repository import ApiEmployeeRepository
from hr_portal.employees.service import EmployeeService
from hr_portal.holidays.api_holiday_repository import ApiHolidayRepository
from hr_portal.holidays.model import HolidayFields
from hr_portal.holidays.service import HolidayService
from hr_portal.leaves.api_leave_repository import ApiLeaveRepository


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.text = json.dumps(body) if body is not None else ""
        self.content = self.text.encode()

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Replays queued responses and records every call."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        r = self.responses.pop(0)
        if isinstance(r, Exception):
            raise r
        return r


def _client(*responses, token="tok-1"):
    session = FakeSession(*responses)
    return ApiClient("http://hr.local/api/", token_provider=lambda: token, session=session), session


def test_bearer_token_and_url_join():
    client, session = _client(FakeResponse(200, {"data": []}))
    client.get("/admin/holidays", params={"x": 1})

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "http://hr.local/api/admin/holidays")
    assert kwargs["headers"]["Authorization"] == "Bearer tok-1"
    assert kwargs["params"] == {"x": 1}


def test_no_authorization_header_without_token():
    client, session = _client(FakeResponse(200, {}), token=None)
    client.get("/anything")
    assert "Authorization" not in session.calls[0][2]["headers"]


def test_connection_failure_is_retryable_external_error():
    client, _ = _client(requests.ConnectionError("refused"))
    with pytest.raises(ExternalServiceError) as exc:
        client.get("/admin/holidays")
    assert exc.value.status_code is None


def test_server_error_hides_backend_message():
    client, _ = _client(FakeResponse(503, {"message": "mongo exploded"}))
    with pytest.raises(ExternalServiceError) as exc:
        client.get("/admin/holidays")
    assert exc.value.status_code == 503
    assert "mongo" not in str(exc.value)


def test_client_error_carries_backend_message():
    client, _ = _client(FakeResponse(422, {"message": "Name too short"}))
    with pytest.raises(ExternalServiceError) as exc:
        client.post("/admin/holiday", json={})
    assert exc.value.status_code == 422
    assert str(exc.value) == "Name too short"


def test_leave_list_mapping():
    client, session = _client(
        FakeResponse(
            200,
            {
                "data": [
                    {
                        "_id": "L1",
                        "user": {"_id": "U9", "email": "u9@example.com"},
                        "leaveType": "Sick",
                        "fromDate": "2024-05-10T00:00:00.000Z",
                        "toDate": "2024-05-11T00:00:00.000Z",
                        "reason": "Flu and fever",
                        "status": "Approved",
                        "createdAt": "2024-05-01T08:00:00.000Z",
                        "updatedAt": "2024-05-02T10:30:00.000Z",
                    }
                ]
            },
        )
    )
    [leave] = ApiLeaveRepository(client).list_all()

    assert session.calls[0][2]["params"] == {"sortBy": "createdAt", "order": "asc"}
    assert leave.request_id == "L1"
    assert leave.requester_id == "U9"
    assert leave.leave_type == LeaveType.SICK
    assert (leave.start_date, leave.end_date) == (date(2024, 5, 10), date(2024, 5, 11))
    assert leave.status == LeaveStatus.APPROVED
    assert leave.decided_at == datetime(2024, 5, 2, 10, 30)


def test_leave_status_conflict_returns_none():
    client, session = _client(FakeResponse(409, {"message": "Already decided"}))
    result = ApiLeaveRepository(client).update_status(
        request_id="L1",
        expected=LeaveStatus.PENDING,
        status=LeaveStatus.APPROVED,
        decided_at=datetime(2024, 5, 2),
    )
    assert result is None
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("PUT", "http://hr.local/api/user/leave-form/L1/status")
    assert kwargs["json"] == {"status": "Approved"}


def test_leave_status_server_error_propagates():
    client, _ = _client(FakeResponse(500, {}))
    with pytest.raises(ExternalServiceError):
        ApiLeaveRepository(client).update_status(
            request_id="L1",
            expected=LeaveStatus.PENDING,
            status=LeaveStatus.REJECTED,
            decided_at=datetime(2024, 5, 2),
        )


def test_holiday_create_payload_and_mapping():
    client, session = _client(FakeResponse(201, {"data": {"_id": "H1"}}))
    fields = HolidayFields(
        name="Year-end shutdown",
        holiday_type=HolidayType.CORPORATE,
        start_date=date(2025, 12, 24),
        end_date=date(2026, 1, 1),
        is_range=True,
    )
    h = ApiHolidayRepository(client).create(fields)

    assert session.calls[0][2]["json"] == {
        "name": "Year-end shutdown",
        "startDate": "2025-12-24",
        "endDate": "2026-01-01",
        "isDateRange": True,
        "type": "Corporate",
    }
    assert h.holiday_id == "H1"
    assert h.last_day == date(2026, 1, 1)


def test_holiday_range_flag_inferred_when_missing():
    client, _ = _client(
        FakeResponse(
            200,
            {
                "data": [
                    {"_id": "a", "name": "Tet", "startDate": "2024-02-08", "endDate": "2024-02-14"},
                    {"_id": "b", "name": "Labour", "startDate": "2024-05-01", "endDate": "2024-05-01"},
                ]
            },
        )
    )
    tet, labour = ApiHolidayRepository(client).list_all()
    assert tet.is_range and tet.end_date == date(2024, 2, 14)
    assert not labour.is_range and labour.end_date is None
    assert labour.holiday_type == HolidayType.OTHER


def test_holiday_update_and_delete_not_found():
    client, _ = _client(FakeResponse(404, {"message": "nope"}), FakeResponse(404, {}))
    repo = ApiHolidayRepository(client)
    fields = HolidayFields(
        name="Gone", holiday_type=HolidayType.OTHER, start_date=date(2024, 1, 1), end_date=None, is_range=False
    )
    assert repo.update("missing", fields) is None
    assert repo.delete("missing") is False


def test_employee_mapping():
    client, _ = _client(
        FakeResponse(
            200,
            {
                "data": {
                    "users": [
                        {"_id": "U1", "username": "alice", "email": "a@example.com", "role": "ADMIN"},
                        {"_id": "U2", "email": "b@example.com", "deletedAt": "2024-01-01T00:00:00Z"},
                    ]
                }
            },
        )
    )
    alice, bob = ApiEmployeeRepository(client).list_all()
    assert alice.role == Role.ADMIN and alice.active
    assert bob.name == "b@example.com" and not bob.active
    assert bob.department == "General"


def test_login_success_and_rejection():
    client, _ = _client(
        FakeResponse(200, {"details": {"token": "jwt", "role": "admin", "_id": "U1"}}),
        FakeResponse(401, {"message": "Invalid credentials"}),
        token=None,
    )
    gateway = ApiAuthGateway(client)

    user = gateway.authenticate("a@example.com", "secret")
    assert (user.user_id, user.role, user.token) == ("U1", Role.ADMIN, "jwt")

    with pytest.raises(AuthenticationError):
        gateway.authenticate("a@example.com", "wrong")


def test_employee_session_reads_employee_holiday_listing():
    role = {"current": Role.USER}
    client, session = _client(FakeResponse(200, {"data": []}), FakeResponse(200, {"data": []}))
    service = HolidayService(ApiHolidayRepository(client, role_provider=lambda: role["current"]))

    service.list_upcoming(date(2024, 1, 1))
    role["current"] = Role.ADMIN
    service.list_upcoming(date(2024, 1, 1))

    assert [url for _, url, _ in session.calls] == [
        "http://hr.local/api/user/holidays",
        "http://hr.local/api/admin/holidays",
    ]


def test_profile_mapping():
    client, session = _client(
        FakeResponse(
            200,
            {
                "data": {
                    "_id": "U7",
                    "firstName": "Linh",
                    "lastName": "Tran",
                    "email": "linh@example.com",
                    "phone": "+84 90 000 0000",
                    "department": "Finance",
                    "position": "Accountant",
                    "joinDate": "2023-04-03T00:00:00.000Z",
                }
            },
        )
    )
    profile = EmployeeService(ApiEmployeeRepository(client)).get_profile("U7")

    assert session.calls[0][1] == "http://hr.local/api/user/get-user"
    assert profile.name == "Linh Tran"
    assert profile.phone_number == "+84 90 000 0000"
    assert profile.department == "Finance"
    assert profile.joined_at == datetime(2023, 4, 3)


def test_missing_profile_is_not_found():
    client, _ = _client(FakeResponse(404, {"message": "User not found"}))
    with pytest.raises(NotFoundError):
        EmployeeService(ApiEmployeeRepository(client)).get_profile("U7")
