"""HTTP-level tests: status codes, payload shapes and placeholder names."""

import pytest
from sqlalchemy.exc import OperationalError
from sqlmodel import select

from karta_backend.models.match_model import Goal
from karta_backend.models.team_model import Team


def _create_group(client, group="A", size=4):
    team_ids = []
    for i in range(size):
        team = client.post("/teams", json={"name": f"{group}{i + 1}", "group": group}).json()
        client.post(f"/teams/{team['id']}/players", json={"name": f"{group}{i + 1} striker", "number": 9, "position": "FW"})
        team_ids.append(team["id"])
    return team_ids


def test_home(client):
    response = client.get("/")

    assert response.status_code == 200
    assert "Karta Cup V" in response.json()["message"]


def test_team_crud(client):
    created = client.post("/teams", json={"name": "Karta Muda", "group": "A"})
    team_id = created.json()["id"]

    assert created.status_code == 201
    assert client.get(f"/teams/{team_id}").json()["players"] == []

    player = client.post(f"/teams/{team_id}/players", json={"name": "Adi", "number": 10, "position": "FW"})
    assert player.status_code == 201

    renamed = client.put(f"/teams/{team_id}", json={"name": "Karta Muda FC"})
    assert renamed.json()["name"] == "Karta Muda FC"
    assert [p["name"] for p in client.get("/teams").json()[0]["players"]] == ["Adi"]

    deleted = client.delete(f"/teams/{team_id}")
    assert deleted.status_code == 200
    assert deleted.json()["players_removed"] == 1
    assert client.get(f"/teams/{team_id}").status_code == 404


def test_validation_and_not_found_errors(client):
    assert client.post("/teams", json={"name": " ", "group": "A"}).status_code == 400
    assert client.post("/teams/5/players", json={"name": "Adi", "number": 1}).status_code == 404
    assert client.put("/players/5", json={"name": "Adi"}).status_code == 404
    assert client.delete("/players/5").status_code == 404
    assert client.get("/matches/5").status_code == 404
    assert client.get("/standings/Z").status_code == 404
    assert client.post("/teams", json={"group": "A"}).status_code == 422


def test_player_update_and_delete(client):
    team_id = _create_group(client, size=1)[0]
    player_id = client.get(f"/teams/{team_id}").json()["players"][0]["id"]

    updated = client.put(f"/players/{player_id}", json={"number": 7})
    assert updated.json()["number"] == 7

    assert client.delete(f"/players/{player_id}").status_code == 200
    assert client.get(f"/teams/{team_id}").json()["players"] == []


def test_generate_and_view_schedule(client):
    _create_group(client)

    generated = client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    schedule = client.get("/schedule").json()

    assert generated.status_code == 201
    assert generated.json()["matches_created"] == 6
    assert schedule[0]["date"] == "2026-11-01"
    first = schedule[0]["matches"][0]
    assert first["time"] == "13:30"
    assert first["home_team_name"].startswith("A")
    assert first["kickoff_at"] == "2026-11-01T13:30:00+07:00"
    assert sum(len(day["matches"]) for day in schedule) == 6


def test_generate_schedule_requires_start_date(client):
    _create_group(client)

    response = client.post("/schedule/generate", json={})

    assert response.status_code == 400
    assert client.get("/matches").json() == []


def test_clear_schedule(client):
    _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})

    response = client.delete("/schedule")

    assert response.json()["matches_removed"] == 6
    assert client.get("/schedule").json() == []


def test_match_result_goals_and_standings(client):
    _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    match = client.get("/matches").json()[0]
    home = client.get(f"/teams/{match['home_team_id']}").json()

    goal = client.post(f"/matches/{match['id']}/goals", json={
        "player_id": home["players"][0]["id"], "team_id": home["id"], "minute": 33,
    })
    updated = client.put(f"/matches/{match['id']}", json={"home_score": 1, "away_score": 0, "status": "completed"})
    table = client.get("/standings/A").json()

    assert goal.status_code == 201
    assert goal.json()["goals"][0]["player_name"] == home["players"][0]["name"]
    assert updated.json()["status"] == "completed"
    assert table[0]["team_name"] == home["name"]
    assert (table[0]["position"], table[0]["points"], table[0]["goal_difference"]) == (1, 3, 1)
    assert list(client.get("/standings").json()) == ["A"]

    scorers = client.get("/statistics/top-scorers", params={"limit": 1}).json()
    assert scorers == [{
        "player_id": home["players"][0]["id"], "team_id": home["id"], "goals": 1,
        "player_name": home["players"][0]["name"], "team_name": home["name"],
    }]
    assert client.get("/statistics/top-scorers", params={"limit": 0}).status_code == 422


def test_goal_for_team_outside_the_match(client):
    team_ids = _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    match = client.get("/matches").json()[0]
    outsider = next(t for t in team_ids if t not in (match["home_team_id"], match["away_team_id"]))

    response = client.post(f"/matches/{match['id']}/goals", json={"player_id": 1, "team_id": outsider})

    assert response.status_code == 400


def test_match_filters(client):
    _create_group(client, "A")
    _create_group(client, "B")
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    first = client.get("/matches", params={"group": "B"}).json()[0]
    client.put(f"/matches/{first['id']}", json={"home_score": 0, "away_score": 0, "status": "completed"})

    assert len(client.get("/matches", params={"group": "A"}).json()) == 6
    assert [m["id"] for m in client.get("/matches", params={"status": "completed"}).json()] == [first["id"]]


def test_cards_and_suspensions(client):
    _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    match = client.get("/matches").json()[0]
    away = client.get(f"/teams/{match['away_team_id']}").json()
    player_id = away["players"][0]["id"]

    for minute in (20, 75):
        client.post(f"/matches/{match['id']}/cards", json={"player_id": player_id, "team_id": away["id"], "minute": minute})
    detail = client.get(f"/matches/{match['id']}").json()
    suspensions = client.get("/statistics/card-accumulation").json()
    team_cards = client.get("/statistics/team-cards").json()

    assert [c["type"] for c in detail["cards"]] == ["yellow", "yellow"]
    assert suspensions == [{
        "player_id": player_id, "player_name": away["players"][0]["name"],
        "team_id": away["id"], "team_name": away["name"],
        "yellow_cards": 2, "red_cards": 0, "ban_matches": 1,
    }]
    assert team_cards[0]["team_id"] == away["id"]
    assert team_cards[0]["total_cards"] == 2


def test_deleted_references_render_placeholder(client, session):
    _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    match = client.get("/matches").json()[0]
    home = client.get(f"/teams/{match['home_team_id']}").json()
    player_id = home["players"][0]["id"]
    client.post(f"/matches/{match['id']}/cards", json={"player_id": player_id, "team_id": home["id"], "type": "red"})
    client.post(f"/matches/{match['id']}/goals", json={"player_id": player_id, "team_id": home["id"]})

    client.delete(f"/teams/{home['id']}")

    detail = client.get(f"/matches/{match['id']}").json()
    suspension = client.get("/statistics/card-accumulation").json()[0]
    assert detail["home_team_name"] == "not found"
    assert detail["goals"][0]["player_name"] == "not found"
    assert (suspension["player_name"], suspension["team_name"]) == ("not found", "not found")
    assert session.get(Team, home["id"]) is None
    assert len(session.exec(select(Goal)).all()) == 1


def test_summary_and_dashboard(client):
    _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})

    summary = client.get("/statistics/summary").json()
    dashboard = client.get("/dashboard").json()

    assert summary == {"matches": 0, "goals": 0, "yellow_cards": 0, "red_cards": 0, "avg_goals_per_match": 0.0}
    assert dashboard["total_teams"] == 4
    assert len(dashboard["upcoming_matches"]) == 3
    assert "home_team_name" in dashboard["upcoming_matches"][0]


def test_team_schedule_stats_route(client):
    team_id = _create_group(client)[0]
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})

    stats = client.get(f"/teams/{team_id}/schedule-stats").json()

    assert stats["team_id"] == team_id
    assert stats["total_matches"] == 3
    assert client.get("/teams/999/schedule-stats").status_code == 404


def _locked(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("database is locked"))


def test_database_faults_return_503(client, session, monkeypatch):
    team_id = _create_group(client, size=1)[0]
    monkeypatch.setattr(session, "get", _locked)

    deleted = client.delete(f"/teams/{team_id}")
    renamed = client.put(f"/teams/{team_id}", json={"name": "X"})
    monkeypatch.setattr(session, "exec", _locked)
    listed = client.get("/teams")

    assert (deleted.status_code, renamed.status_code, listed.status_code) == (503, 503, 503)
    assert "locked" not in deleted.json()["detail"]


def test_match_search_and_summary(client):
    _create_group(client, "A")
    _create_group(client, "B")
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    first = client.get("/matches", params={"search": "a1"}).json()

    client.put(f"/matches/{first[0]['id']}", json={"home_score": 2, "away_score": 2, "status": "completed"})
    summary = client.get("/matches/summary").json()

    assert len(first) == 3
    assert all("A1" in (m["home_team_name"], m["away_team_name"]) for m in first)
    assert summary["total_matches"] == 12
    assert summary["completed_matches"] == 1
    assert summary["matches_by_group"] == {"A": 6, "B": 6}


def test_latest_matches_route(client):
    _create_group(client)
    client.post("/schedule/generate", json={"start_date": "2026-11-01"})
    matches = client.get("/matches").json()
    low, high = matches[0], matches[1]
    for match, goals in ((low, 1), (high, 2)):
        for _ in range(goals):
            client.post(f"/matches/{match['id']}/goals", json={"player_id": 1, "team_id": match["home_team_id"]})
        client.put(f"/matches/{match['id']}", json={"home_score": goals, "away_score": 0, "status": "completed"})

    latest = client.get("/statistics/latest-matches").json()

    assert [(m["id"], m["goal_count"], m["card_count"]) for m in latest] == [(high["id"], 2, 0), (low["id"], 1, 0)]
    assert client.get("/statistics/latest-matches", params={"group": "B"}).json() == []
    assert client.get("/statistics/latest-matches", params={"limit": 0}).status_code == 422


def test_startup_failure_is_logged_with_traceback(monkeypatch, caplog):
    from fastapi.testclient import TestClient
    from karta_backend import main

    async def _broken_init_db():
        raise RuntimeError("no disk")

    monkeypatch.setattr(main, "init_db", _broken_init_db)

    with pytest.raises(RuntimeError):
        with TestClient(main.app):
            pass

    record = next(r for r in caplog.records if r.getMessage() == "❌ Database connection error")
    assert record.exc_info is not None
