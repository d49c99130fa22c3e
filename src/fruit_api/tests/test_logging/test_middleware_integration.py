import json

from fastapi.testclient import TestClient

from fruit_api.main import create_app

from ..test_fixtures.settings_fixtures import make_settings


def test_request_id_in_response_and_logs(tmp_path, capsys):
    """
    Behavior:
                - A request against the real app with JSON logging on stderr.

    Importance:
                - The id echoed in X-Request-ID is the one stamped on log lines
                  emitted while the request was served.
    """
    # logging is installed inside the test so the handlers write to the captured stderr
    settings = make_settings(tmp_path, LOG_FORMAT="json")
    app = create_app(settings)

    with TestClient(app) as client:
        resp = client.post("/fruits", json={"name": "Apple"}, headers={"X-Request-ID": "log-req-1"})

    assert resp.status_code == 201
    assert resp.headers["X-Request-ID"] == "log-req-1"

    stderr = capsys.readouterr().err.strip()
    assert stderr, "Expected log lines on stderr"

    matching = []
    for line in stderr.splitlines():
        try:
            rec = json.loads(line)
        except ValueError:
            continue
        if rec.get("request_id") == "log-req-1":
            matching.append(rec)

    assert any(rec["message"] == "fruit.created" for rec in matching)


def test_unexpected_failure_logged_with_request_id(tmp_path, capsys):
    """
    Behavior:
                - An endpoint raises RuntimeError under a known X-Request-ID.

    Importance:
                - The ERROR line written by the translator carries the request id of
                  the failing request instead of the "-" sentinel.
    """
    settings = make_settings(tmp_path, LOG_FORMAT="json")
    app = create_app(settings)

    async def explode():
        raise RuntimeError("kaboom")

    app.add_api_route("/explode", explode)

    with TestClient(app) as client:
        resp = client.get("/explode", headers={"X-Request-ID": "req-500"})

    assert resp.status_code == 500
    assert resp.headers["X-Request-ID"] == "req-500"

    errors = []
    for line in capsys.readouterr().err.splitlines():
        try:
            rec = json.loads(line)
        except ValueError:
            continue
        if rec.get("message") == "Failed to handle request":
            errors.append(rec)

    assert errors
    assert all(rec["request_id"] == "req-500" for rec in errors)
    assert "RuntimeError: kaboom" in errors[0]["exc_info"]
