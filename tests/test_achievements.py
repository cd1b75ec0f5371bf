from datetime import date

import pytest

from hrfleet.core.errors import NotFoundError, ValidationError
from hrfleet.models.achievement import Achievement
from hrfleet.services.achievements import AchievementLedger, count_by_kind


def test_count_by_kind_has_every_kind():
    records = [Achievement(type="STAR"), Achievement(type="STAR"), Achievement(type="CHEF")]
    assert count_by_kind(records) == {"STAR": 2, "CHEF": 1, "X": 0}
    assert count_by_kind([]) == {"STAR": 0, "CHEF": 0, "X": 0}


async def test_create_and_update(session, make_employee):
    ali = await make_employee()
    ledger = AchievementLedger(session)

    achievement = await ledger.create_achievement(ali.id, "2025-06-03", "STAR", "Great week")
    assert achievement.date == date(2025, 6, 3)

    updated = await ledger.update_achievement(achievement.id, {"type": "X", "notes": None})
    assert updated.type == "X"
    assert updated.notes is None
    assert updated.date == date(2025, 6, 3)


async def test_invalid_kind_and_unknown_employee(session, make_employee):
    ali = await make_employee()
    ledger = AchievementLedger(session)

    with pytest.raises(ValidationError):
        await ledger.create_achievement(ali.id, "2025-06-03", "GOLD")
    with pytest.raises(ValidationError):
        await ledger.create_achievement(9999, "2025-06-03", "STAR")


async def test_update_rejects_other_fields(session, make_employee):
    ali = await make_employee()
    ledger = AchievementLedger(session)
    achievement = await ledger.create_achievement(ali.id, "2025-06-03", "CHEF")

    with pytest.raises(ValidationError):
        await ledger.update_achievement(achievement.id, {"employee_id": 2})


async def test_delete_missing(session):
    with pytest.raises(NotFoundError):
        await AchievementLedger(session).delete_achievement(404)


async def test_list_filters_by_range(session, make_employee):
    ali = await make_employee()
    ledger = AchievementLedger(session)
    for day in ("2025-05-31", "2025-06-01", "2025-06-15", "2025-07-01"):
        await ledger.create_achievement(ali.id, day, "STAR")

    june = await ledger.list_achievements(ali.id, "2025-06-01", "2025-06-30")
    assert [a.date.day for a in june] == [15, 1]


async def test_achievement_endpoints(auth_client):
    resp = await auth_client.post(
        "/api/employees",
        json={"firstName": "Ali", "lastName": "Demir", "phone": "1", "salary": 100},
    )
    employee_id = resp.json()["id"]

    resp = await auth_client.post(
        "/api/achievements",
        json={"employeeId": employee_id, "date": "2025-06-03", "type": "STAR"},
    )
    assert resp.status_code == 201
    achievement_id = resp.json()["id"]

    resp = await auth_client.put(f"/api/achievements/{achievement_id}", json={"type": "CHEF"})
    assert resp.status_code == 200
    assert resp.json()["type"] == "CHEF"

    resp = await auth_client.get("/api/achievements", params={"employeeId": employee_id})
    assert [a["id"] for a in resp.json()] == [achievement_id]

    resp = await auth_client.delete(f"/api/achievements/{achievement_id}")
    assert resp.status_code == 204
    resp = await auth_client.delete(f"/api/achievements/{achievement_id}")
    assert resp.status_code == 404
