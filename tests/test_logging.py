import logging

from hrfleet.core.logging import RingBufferHandler


def _logger(handler):
    logger = logging.getLogger("hrfleet.tests.ring")
    logger.handlers = [handler]
    logger.propagate = False
    logger.setLevel(logging.DEBUG)
    return logger


def test_buffer_keeps_latest_entries():
    handler = RingBufferHandler(capacity=3)
    logger = _logger(handler)

    for i in range(5):
        logger.info("line %s", i)

    entries = handler.entries()
    assert [e["message"] for e in entries] == ["line 2", "line 3", "line 4"]
    assert entries[0]["level"] == "info"
    assert entries[0]["logger"] == "hrfleet.tests.ring"


def test_exception_is_recorded_and_buffer_clears():
    handler = RingBufferHandler(capacity=10)
    logger = _logger(handler)

    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("failed")

    assert "boom" in handler.entries()[0]["error"]
    handler.clear()
    assert handler.entries() == []


async def test_logs_endpoint(auth_client):
    await auth_client.get("/api/vehicles")

    resp = await auth_client.get("/api/logs")
    assert resp.status_code == 200
    assert any("/api/vehicles" in e["message"] for e in resp.json())

    assert (await auth_client.delete("/api/logs")).status_code == 204


async def test_test_mail_without_credentials(auth_client):
    resp = await auth_client.post("/api/test-mail")
    assert resp.status_code == 500
    assert resp.json()["code"] == "ECONFIG"


async def test_health(client):
    resp = await client.get("/health")
    assert resp.json()["status"] == "ok"


def test_log_buffer_lives_on_app_state():
    import hrfleet.main
    from hrfleet.main import app

    assert isinstance(app.state.log_buffer, RingBufferHandler)
    assert app.state.log_buffer in logging.getLogger().handlers
    assert not hasattr(hrfleet.main, "log_buffer")
