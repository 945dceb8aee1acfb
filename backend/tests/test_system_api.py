from athletic_balance.db.query import TableClient


def test_health_reports_key_presence(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["timestamp"]
    assert body["environment"]["pythonVersion"]
    assert body["environment"]["apiKeysConfigured"] == {"primary": True, "secondary": False}


def test_init_db_is_idempotent(client, db_session):
    first = client.post("/api/init-db")
    second = client.post("/api/init-db")
    assert first.json() == {"success": True, "message": "Database initialized successfully"}
    assert second.status_code == 200

    rows = TableClient(db_session).table("coaches").select("id").eq("id", "coach-fuel").execute()
    assert len(rows.data) == 1
