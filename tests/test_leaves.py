from datetime import date

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from hrfleet.core.errors import InvalidRangeError, NotFoundError, ValidationError
from hrfleet.models.leave import Leave, LeaveStatus, LeaveType
from hrfleet.services.leaves import LeaveLedger


async def _count(session) -> int:
    return (await session.execute(select(func.count(Leave.id)))).scalar_one()


async def test_bulk_leave_creates_one_row_per_employee(session, make_employee):
    employees = [await make_employee(first_name=name) for name in ("Ali", "Can", "Ece")]

    leaves = await LeaveLedger(session).create_bulk_leave(
        [e.id for e in employees], "2025-06-02", "2025-06-06", "Summer"
    )

    assert len(leaves) == 3
    assert {leave.employee_id for leave in leaves} == {e.id for e in employees}
    for leave in leaves:
        assert leave.type == LeaveType.ANNUAL.value
        assert leave.status == LeaveStatus.APPROVED.value
        assert leave.start_date == date(2025, 6, 2)
        assert leave.end_date == date(2025, 6, 6)
        assert leave.reason == "Summer"


async def test_bulk_leave_with_unknown_employee_writes_nothing(session, make_employee):
    ali = await make_employee(first_name="Ali")
    can = await make_employee(first_name="Can")

    with pytest.raises(ValidationError):
        await LeaveLedger(session).create_bulk_leave(
            [ali.id, can.id, 9999], "2025-06-02", "2025-06-06"
        )

    assert await _count(session) == 0


async def test_bulk_leave_rejects_inverted_range(session, make_employee):
    ali = await make_employee()
    with pytest.raises(InvalidRangeError):
        await LeaveLedger(session).create_bulk_leave([ali.id], "2025-06-06", "2025-06-02")
    assert await _count(session) == 0


async def test_bulk_leave_requires_employees(session):
    with pytest.raises(ValidationError):
        await LeaveLedger(session).create_bulk_leave([], "2025-06-02", "2025-06-06")


async def test_bulk_leave_ignores_duplicate_ids(session, make_employee):
    ali = await make_employee()
    leaves = await LeaveLedger(session).create_bulk_leave(
        [ali.id, ali.id], "2025-06-02", "2025-06-03"
    )
    assert len(leaves) == 1


async def test_create_leave_validates_type_and_employee(session, make_employee):
    ali = await make_employee()
    ledger = LeaveLedger(session)

    with pytest.raises(ValidationError):
        await ledger.create_leave(ali.id, "2025-06-01", "2025-06-02", type="HOLIDAY")
    with pytest.raises(ValidationError):
        await ledger.create_leave(9999, "2025-06-01", "2025-06-02")

    leave = await ledger.create_leave(ali.id, "2025-06-01", "2025-06-02", type="SICK")
    assert leave.type == "SICK"
    assert leave.status == "APPROVED"


async def test_list_is_newest_first(session, make_employee):
    ali = await make_employee()
    ledger = LeaveLedger(session)
    await ledger.create_leave(ali.id, "2025-01-10", "2025-01-12")
    await ledger.create_leave(ali.id, "2025-03-01", "2025-03-02")
    await ledger.create_leave(ali.id, "2025-02-01", "2025-02-05")

    starts = [leave.start_date.month for leave in await ledger.list_leaves(ali.id)]
    assert starts == [3, 2, 1]


async def test_month_query_matches_either_endpoint(session, make_employee):
    ali = await make_employee()
    ledger = LeaveLedger(session)
    await ledger.create_leave(ali.id, "2025-05-28", "2025-06-03")  # ends in June
    await ledger.create_leave(ali.id, "2025-06-28", "2025-07-03")  # starts in June
    await ledger.create_leave(ali.id, "2025-05-20", "2025-07-10")  # spans June

    leaves = await ledger.leaves_overlapping_month(ali.id, "2025-06-01", "2025-06-30")

    assert [(l.start_date, l.end_date) for l in leaves] == [
        (date(2025, 5, 28), date(2025, 6, 3)),
        (date(2025, 6, 28), date(2025, 7, 3)),
    ]


async def test_delete_unknown_leave(session):
    with pytest.raises(NotFoundError):
        await LeaveLedger(session).delete_leave(12345)


async def test_bulk_endpoint(auth_client):
    ids = []
    for name in ("Ali", "Can"):
        resp = await auth_client.post(
            "/api/employees",
            json={"firstName": name, "lastName": "Demir", "phone": "1", "salary": 100},
        )
        assert resp.status_code == 201
        ids.append(resp.json()["id"])

    resp = await auth_client.post(
        "/api/leaves/bulk",
        json={"employeeIds": ids, "startDate": "2025-06-02", "endDate": "2025-06-04"},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert len(body) == 2
    assert body[0]["type"] == "ANNUAL"

    resp = await auth_client.post(
        "/api/leaves/bulk",
        json={"employeeIds": ids + [777], "startDate": "2025-07-01", "endDate": "2025-07-02"},
    )
    assert resp.status_code == 400
    assert "777" in resp.json()["message"]

    resp = await auth_client.get("/api/leaves")
    assert len(resp.json()) == 2


async def test_bulk_endpoint_rejects_inverted_range(auth_client):
    resp = await auth_client.post(
        "/api/leaves/bulk",
        json={"employeeIds": [1], "startDate": "2025-06-04", "endDate": "2025-06-02"},
    )
    assert resp.status_code == 400
    assert "message" in resp.json()


async def test_bulk_leave_storage_failure_writes_nothing(session, make_employee, monkeypatch):
    employees = [await make_employee(first_name=name) for name in ("Ali", "Can", "Ece")]

    async def failing_commit(self):
        raise OperationalError("INSERT INTO leaves", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)

    with pytest.raises(ValidationError):
        await LeaveLedger(session).create_bulk_leave(
            [e.id for e in employees], "2025-06-01", "2025-06-03"
        )

    monkeypatch.undo()
    assert await _count(session) == 0
