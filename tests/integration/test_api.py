"""HTTP API through FastAPI's TestClient."""

import json

import pytest
from fastapi.testclient import TestClient

import app.utils
from app.main import app as api
from app.services import CheckerService
from leftover_checker.metrics_store import MetricsStore
from leftover_checker.notifier import SlackNotifier

FLOWS = [
    {"id": "tab1", "type": "tab", "label": "Orders"},
    {"id": "fn1", "type": "function", "z": "tab1", "name": "Parse", "func": "debugger;\nreturn msg;"},
    {"id": "fn2", "type": "function", "z": "tab1", "name": "Pass", "func": "return msg;"},
]


@pytest.fixture
def store(tmp_path):
    s = MetricsStore(tmp_path / "api_metrics.db")
    yield s
    s.close()


@pytest.fixture
def client(monkeypatch, store):
    service = CheckerService(store=store, notifier=SlackNotifier(None))
    monkeypatch.setattr(app.utils, "checker_svc", service)
    return TestClient(api)


def test_root_and_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert "Node-RED Function Quality API" in r.text
    assert client.get("/health").json() == {"status": "ok"}


def test_check_usage_page(client):
    r = client.get("/check")
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]
    assert "@nr-analyzer-ignore-start" in r.text


def test_check_detects_and_scores(client):
    r = client.post("/check", json={"code": "debugger;\nreturn msg;", "detection_level": 2, "include_report": True})
    assert r.status_code == 200
    body = r.json()
    assert [i["kind"] for i in body["issues"]] == ["debugger-statement"]
    assert body["issues"][0]["line"] == 1
    assert body["summary"] == {"debugger-statement": 1}
    assert body["quality"]["has_critical_issue"] is True
    assert body["quality"]["lines_of_code"] == 2
    assert "Debugging Leftover Report: input" in body["report"]


def test_check_clean_code(client):
    body = client.post("/check", json={"code": "msg.payload = 1;\nreturn msg;"}).json()
    assert body["issues"] == []
    assert body["quality"]["quality_score"] == 100
    assert body["report"] is None


def test_check_requires_code(client):
    assert client.post("/check", json={}).status_code == 422


def test_score_unit(client):
    r = client.post("/score/unit", json={"issues": [{"kind": "console-output-call"}], "lines_of_code": 10})
    assert r.status_code == 200
    body = r.json()
    assert body["has_critical_issue"] is False
    assert body["quality_score"] < 100


def test_score_unit_rejects_unknown_kind(client):
    r = client.post("/score/unit", json={"issues": [{"kind": "not-a-kind"}]})
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Invalid issue:")


def test_score_group(client):
    r = client.post(
        "/score/group",
        json={
            "group_id": "flow1",
            "group_name": "Orders",
            "units": [
                {"unit_id": "a", "unit_name": "Break", "issues": [{"kind": "debugger-statement"}], "lines_of_code": 1},
                {"unit_id": "b", "unit_name": "Pass", "lines_of_code": 1},
            ],
        },
    )
    assert r.status_code == 200
    body = r.json()
    assert body["total_units"] == 2
    assert body["units_with_critical_issues"] == 1
    assert body["health_percentage"] == 50
    assert body["recommendations"][0]["message"] == "Remove debugger statements"


def test_score_system_empty(client):
    assert client.post("/score/system", json={"groups": []}).json() == {
        "overall_quality": 100.0,
        "technical_debt": 0.0,
        "complexity": 0.0,
        "group_count": 0,
        "affected_units": 0,
        "critical_units": 0,
    }


def test_scan_inline_flows(client):
    r = client.post("/scan", json={"flows": FLOWS})
    assert r.status_code == 200
    body = r.json()
    assert [g["group_name"] for g in body["groups"]] == ["Orders"]
    assert body["groups"][0]["total_issues"] == 1
    assert body["system"]["critical_units"] == 1
    assert body["persisted"] is False
    assert body["notified"] == []


def test_scan_requires_a_source(client):
    r = client.post("/scan", json={})
    assert r.status_code == 400
    assert r.json()["detail"] == "Provide either flows_path or flows."


def test_scan_rejects_relative_path(client):
    assert client.post("/scan", json={"flows_path": "flows.json"}).status_code == 400


def test_scan_missing_file(client, tmp_path):
    r = client.post("/scan", json={"flows_path": str(tmp_path / "nope.json")})
    assert r.status_code == 404


def test_scan_invalid_file(client, tmp_path):
    path = tmp_path / "flows.json"
    path.write_text("{not json", encoding="utf-8")
    assert client.post("/scan", json={"flows_path": str(path)}).status_code == 400


def test_scan_from_path_persists_and_serves_metrics(client, tmp_path):
    path = tmp_path / "flows.json"
    path.write_text(json.dumps(FLOWS), encoding="utf-8")

    r = client.post("/scan", json={"flows_path": str(path), "persist": True})
    assert r.status_code == 200
    assert r.json()["persisted"] is True

    r = client.get("/metrics/groups/tab1")
    assert r.status_code == 200
    body = r.json()
    assert body["latest"]["group_name"] == "Orders"
    assert body["latest"]["total_units"] == 2
    assert len(body["history"]) == 1


def test_metrics_unknown_group(client):
    r = client.get("/metrics/groups/missing")
    assert r.status_code == 404
    assert r.json()["detail"] == "No quality records for group: missing"


def test_metrics_limit_is_validated(client):
    assert client.get("/metrics/groups/tab1", params={"limit": 0}).status_code == 422
