from taskmaster.models.enums import Role

def auth(jwt: str) -> dict[str, str]:
    return {"authorization": f"bearer {jwt}"}

def test_lead_sees_full_user_records(client, lead, team, lead_jwt):
    r = client.get("/users", headers=auth(lead_jwt))
    assert r.status_code == 200
    users = r.json()

    # ordered by name
    assert [u["name"] for u in users] == ["Lead User", "Team Member 1"]
    assert users[1] == {"id": str(team.id), "name": team.name, "email": team.email, "role": "TEAM"}

def test_team_sees_names_without_emails(client, lead, team, team_jwt, user_factory):
    user_factory(Role.TEAM, name="Aaron")

    r = client.get("/users", headers=auth(team_jwt))
    assert r.status_code == 200
    users = r.json()

    assert [u["name"] for u in users] == ["Aaron", "Lead User", "Team Member 1"]
    for u in users:
        assert set(u) == {"id", "name", "role"}

def test_users_requires_auth(client):
    assert client.get("/users").status_code == 401
