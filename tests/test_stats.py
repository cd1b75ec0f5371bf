from datetime import date

from hrfleet.models.achievement import Achievement
from hrfleet.models.employee import Employee
from hrfleet.models.leave import Leave
from hrfleet.services import stats


def _employee(id, first_name, allowance=30):
    return Employee(
        id=id, first_name=first_name, last_name="Kaya", total_leave_allowance=allowance
    )


def _leave(employee_id, start, end, type="ANNUAL", status="APPROVED"):
    return Leave(
        employee_id=employee_id, start_date=start, end_date=end, type=type, status=status
    )


def _achievements(employee_id, kind, n):
    return [Achievement(employee_id=employee_id, type=kind, date=date(2025, 6, 1)) for _ in range(n)]


def test_top_performer_tie_keeps_first_employee():
    a, b, c = _employee(1, "A"), _employee(2, "B"), _employee(3, "C")
    achievements = (
        _achievements(1, "STAR", 2)
        + _achievements(2, "STAR", 3)
        + _achievements(3, "STAR", 3)
        + _achievements(3, "CHEF", 2)
    )

    result = stats.top_performers([a, b, c], achievements)

    assert result.top_star.employee is b
    assert result.top_star.count == 3
    assert result.top_chef.employee is c
    assert result.most_damage is None


def test_top_performers_with_no_achievements():
    result = stats.top_performers([_employee(1, "A")], [])
    assert result.top_star is None
    assert result.top_chef is None
    assert result.most_damage is None


def test_on_leave_today():
    a, b = _employee(1, "A"), _employee(2, "B")
    leaves = [
        _leave(1, date(2025, 6, 1), date(2025, 6, 10)),
        _leave(2, date(2025, 6, 11), date(2025, 6, 12)),
    ]

    entries = stats.employees_on_leave_today([a, b], leaves, date(2025, 6, 10))

    assert len(entries) == 1
    assert entries[0].employee is a
    assert entries[0].duration_days == 10


def test_monthly_leave_total_counts_whole_leave():
    leaves = [
        _leave(1, date(2025, 5, 28), date(2025, 6, 3)),  # 7 days, ends in June
        _leave(1, date(2025, 6, 10), date(2025, 6, 11)),  # 2 days
        _leave(1, date(2025, 5, 20), date(2025, 7, 10)),  # spans June, not counted
        _leave(2, date(2025, 6, 10), date(2025, 6, 11)),  # someone else
    ]
    assert stats.monthly_leave_total(1, leaves, date(2025, 6, 1), date(2025, 6, 30)) == 9


def test_monthly_achievement_stats():
    achievements = _achievements(1, "STAR", 2) + _achievements(1, "CHEF", 1) + _achievements(2, "X", 4)
    result = stats.monthly_achievement_stats(1, achievements, date(2025, 6, 1), date(2025, 6, 30))
    assert result == {"STAR": 2, "CHEF": 1, "X": 0}


def test_leave_balance_counts_annual_non_rejected():
    employee = _employee(1, "A", allowance=20)
    leaves = [
        _leave(1, date(2025, 3, 1), date(2025, 3, 5)),
        _leave(1, date(2025, 4, 1), date(2025, 4, 2), status="PENDING"),
        _leave(1, date(2025, 5, 1), date(2025, 5, 9), status="REJECTED"),
        _leave(1, date(2025, 6, 1), date(2025, 6, 3), type="SICK"),
        _leave(1, date(2024, 3, 1), date(2024, 3, 5)),
    ]

    balance = stats.leave_balance(employee, leaves, 2025)

    assert balance.allowance == 20
    assert balance.used_days == 7
    assert balance.remaining == 13


async def test_stats_endpoints(auth_client):
    ids = []
    for name in ("Ali", "Can"):
        resp = await auth_client.post(
            "/api/employees",
            json={"firstName": name, "lastName": "Demir", "phone": "1", "salary": 100},
        )
        ids.append(resp.json()["id"])

    await auth_client.post(
        "/api/leaves",
        json={"employeeId": ids[0], "startDate": "2025-06-09", "endDate": "2025-06-11"},
    )
    for kind in ("STAR", "STAR", "X"):
        await auth_client.post(
            "/api/achievements",
            json={"employeeId": ids[1], "date": "2025-06-05", "type": kind},
        )

    resp = await auth_client.get("/api/stats/on-leave", params={"date": "2025-06-10"})
    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 1
    assert body[0]["employee"]["firstName"] == "Ali"
    assert body[0]["durationDays"] == 3

    resp = await auth_client.get("/api/stats/top-performers", params={"date": "2025-06"})
    body = resp.json()
    assert body["topStar"]["employee"]["id"] == ids[1]
    assert body["topStar"]["count"] == 2
    assert body["topChef"] is None

    resp = await auth_client.get(
        "/api/stats/monthly", params={"employeeId": ids[1], "date": "2025-06"}
    )
    assert resp.json() == {
        "employeeId": ids[1],
        "month": "2025-06",
        "leaveDays": 0,
        "achievements": {"STAR": 2, "CHEF": 0, "X": 1},
    }
