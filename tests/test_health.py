def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}

def test_ready_reports_each_dependency(client, monkeypatch):
    monkeypatch.setattr("taskmaster.routes.health.db_ping", lambda: True)
    monkeypatch.setattr("taskmaster.routes.health.redis_ping", lambda: False)

    r = client.get("/ready")
    assert r.status_code == 503
    body = r.json()
    assert body["status"] == "unready"
    assert body["checks"] == {"db": True, "redis": False}

    monkeypatch.setattr("taskmaster.routes.health.redis_ping", lambda: True)
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
