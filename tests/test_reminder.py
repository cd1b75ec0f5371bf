import logging
from datetime import date, datetime, timedelta

from hrfleet.core.config import Settings
from hrfleet.core.errors import ExternalServiceError
from hrfleet.core.mailer import Mailer, render_reminder
from hrfleet.jobs.inspection_reminder import InspectionReminderJob, seconds_until_next_run
from hrfleet.models.vehicle import Vehicle

TODAY = date(2025, 6, 1)


class FakeMailer:
    configured = True

    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    async def send_inspection_reminder(self, name, plate, inspection_date, days_remaining):
        if plate in self.fail_for:
            raise ExternalServiceError("smtp down", code="ECONNECTION")
        self.sent.append((plate, days_remaining))
        return f"Vehicle inspection reminder - {plate}"


async def _add_vehicles(session, offsets):
    for i, offset in enumerate(offsets):
        session.add(
            Vehicle(
                name=f"Van {i}",
                plate=f"34VAN{i:03d}",
                mileage=0,
                inspection_date=TODAY + timedelta(days=offset),
            )
        )
    await session.commit()


async def test_only_exact_thresholds_fire(session, session_factory):
    await _add_vehicles(session, [9, 10, 11, 20, 3, 0, -3])
    mailer = FakeMailer()

    result = await InspectionReminderJob(session_factory, mailer).run_once(TODAY)

    assert sorted(mailer.sent) == [("34VAN001", 10), ("34VAN003", 20), ("34VAN004", 3)]
    assert result.sent == 3
    assert result.skipped == 4
    assert result.failed == 0


async def test_second_run_sends_again(session, session_factory):
    await _add_vehicles(session, [10])
    mailer = FakeMailer()
    job = InspectionReminderJob(session_factory, mailer)

    await job.run_once(TODAY)
    await job.run_once(TODAY)

    assert mailer.sent == [("34VAN000", 10), ("34VAN000", 10)]


async def test_one_failure_does_not_stop_the_run(session, session_factory, caplog):
    await _add_vehicles(session, [10, 3])
    mailer = FakeMailer(fail_for={"34VAN000"})

    with caplog.at_level(logging.ERROR):
        result = await InspectionReminderJob(session_factory, mailer).run_once(TODAY)

    assert mailer.sent == [("34VAN001", 3)]
    assert result.failed == 1
    assert "34VAN000" in caplog.text


async def test_missing_credentials_skip_run(session, session_factory, caplog):
    await _add_vehicles(session, [10])
    mailer = Mailer(Settings(MAIL_USER=None, MAIL_PASSWORD=None))

    with caplog.at_level(logging.ERROR):
        result = await InspectionReminderJob(session_factory, mailer).run_once(TODAY)

    assert result.sent == 0
    assert "Mail credentials missing" in caplog.text


async def test_send_test_mail_without_credentials():
    mailer = Mailer(Settings(MAIL_USER=None, MAIL_PASSWORD=None))
    result = await mailer.send_test_mail()
    assert result["success"] is False
    assert result["code"] == "ECONFIG"


def test_reminder_body_mentions_vehicle():
    html = render_reminder("Van <1>", "34ABC123", date(2025, 6, 11), 10)
    assert "34ABC123" in html
    assert "11.06.2025" in html
    assert "10 day(s) left" in html
    assert "Van &lt;1&gt;" in html


def test_next_run_is_today_or_tomorrow():
    assert seconds_until_next_run(datetime(2025, 6, 1, 8, 30), 9) == 30 * 60
    assert seconds_until_next_run(datetime(2025, 6, 1, 9, 0), 9) == 24 * 3600
