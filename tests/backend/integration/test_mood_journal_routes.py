import datetime as dt

import pytest


pytestmark = pytest.mark.asyncio


def _days_ago(days: int) -> str:
    return (dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=days)).isoformat()


async def test_mood_log_and_list(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.username, password)

    older = await client.post(
        "/api/v1/moods",
        headers=headers,
        json={"mood": "Anxious", "score": 3, "notes": "exam tomorrow", "entryDate": _days_ago(2)},
    )
    assert older.status_code == 201
    assert older.json()["data"]["mood"] == "anxious"
    assert older.json()["data"]["notes"] == "exam tomorrow"

    newer = await client.post("/api/v1/moods", headers=headers, json={"mood": "calm", "score": 7})
    assert newer.status_code == 201

    list_resp = await client.get("/api/v1/moods", headers=headers)
    assert list_resp.status_code == 200
    assert [m["mood"] for m in list_resp.json()["data"]["items"]] == ["calm", "anxious"]


async def test_mood_validation(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.username, password)

    bad_mood = await client.post("/api/v1/moods", headers=headers, json={"mood": "elated", "score": 5})
    assert bad_mood.status_code == 400
    assert bad_mood.json()["detail"]["code"] == "INVALID_MOOD"

    bad_score = await client.post("/api/v1/moods", headers=headers, json={"mood": "happy", "score": 11})
    assert bad_score.status_code == 422


async def test_mood_chart_window(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.username, password)

    for days, mood in ((10, "sad"), (3, "stressed"), (0, "happy")):
        await client.post(
            "/api/v1/moods", headers=headers, json={"mood": mood, "score": 5, "entryDate": _days_ago(days)}
        )

    chart_resp = await client.get("/api/v1/moods/chart", headers=headers, params={"days": 7})
    assert chart_resp.status_code == 200
    data = chart_resp.json()["data"]
    assert data["days"] == 7
    assert [m["mood"] for m in data["items"]] == ["stressed", "happy"]

    bad_days = await client.get("/api/v1/moods/chart", headers=headers, params={"days": 0})
    assert bad_days.status_code == 400
    assert bad_days.json()["detail"] == "INVALID_DAYS"


async def test_moods_are_private(client, create_user, auth_header_factory):
    owner, owner_password = await create_user()
    other, other_password = await create_user()
    owner_headers = await auth_header_factory(owner.username, owner_password)
    other_headers = await auth_header_factory(other.username, other_password)

    await client.post("/api/v1/moods", headers=owner_headers, json={"mood": "sad", "score": 2})

    list_resp = await client.get("/api/v1/moods", headers=other_headers)
    assert list_resp.json()["data"]["items"] == []


async def test_journal_crud(client, create_user, auth_header_factory):
    user, password = await create_user()
    headers = await auth_header_factory(user.username, password)

    create_resp = await client.post(
        "/api/v1/journal",
        headers=headers,
        json={"content": "Walked by the river.", "associatedMood": "Calm"},
    )
    assert create_resp.status_code == 201
    entry = create_resp.json()["data"]
    assert entry["title"] == "Untitled Entry"
    assert entry["associatedMood"] == "calm"
    entry_id = entry["id"]

    update_resp = await client.put(
        f"/api/v1/journal/{entry_id}",
        headers=headers,
        json={"title": "Evening walk"},
    )
    assert update_resp.status_code == 200
    assert update_resp.json()["data"]["title"] == "Evening walk"
    assert update_resp.json()["data"]["content"] == "Walked by the river."

    reset_resp = await client.put(f"/api/v1/journal/{entry_id}", headers=headers, json={"title": ""})
    assert reset_resp.json()["data"]["title"] == "Untitled Entry"

    get_resp = await client.get(f"/api/v1/journal/{entry_id}", headers=headers)
    assert get_resp.status_code == 200
    assert get_resp.json()["data"]["id"] == entry_id

    list_resp = await client.get("/api/v1/journal", headers=headers)
    assert len(list_resp.json()["data"]["items"]) == 1

    delete_resp = await client.delete(f"/api/v1/journal/{entry_id}", headers=headers)
    assert delete_resp.status_code == 200
    assert delete_resp.json()["data"] == {"id": entry_id, "deleted": True}

    gone_resp = await client.get(f"/api/v1/journal/{entry_id}", headers=headers)
    assert gone_resp.status_code == 404


async def test_journal_validation_and_privacy(client, create_user, auth_header_factory):
    owner, owner_password = await create_user()
    other, other_password = await create_user()
    owner_headers = await auth_header_factory(owner.username, owner_password)
    other_headers = await auth_header_factory(other.username, other_password)

    no_content = await client.post("/api/v1/journal", headers=owner_headers, json={"title": "empty"})
    assert no_content.status_code == 400
    assert no_content.json()["detail"]["code"] == "BAD_REQUEST"

    bad_mood = await client.post(
        "/api/v1/journal", headers=owner_headers, json={"content": "x", "associatedMood": "elated"}
    )
    assert bad_mood.status_code == 400
    assert bad_mood.json()["detail"]["code"] == "INVALID_MOOD"

    create_resp = await client.post("/api/v1/journal", headers=owner_headers, json={"content": "private"})
    entry_id = create_resp.json()["data"]["id"]

    empty_update = await client.put(f"/api/v1/journal/{entry_id}", headers=owner_headers, json={"content": " "})
    assert empty_update.status_code == 400

    assert (await client.get(f"/api/v1/journal/{entry_id}", headers=other_headers)).status_code == 404
    assert (await client.delete(f"/api/v1/journal/{entry_id}", headers=other_headers)).status_code == 404
    assert (await client.get(f"/api/v1/journal/{entry_id}", headers=owner_headers)).status_code == 200
