"""
프로필 수정 테스트
"""
import json
import time
import pytest
from pathlib import Path

from repository import user_repo

LOCALES = Path(__file__).parent.parent / "locales"
en = json.loads((LOCALES / "en" / "translation.json").read_text(encoding="utf-8"))
np = json.loads((LOCALES / "np" / "translation.json").read_text(encoding="utf-8"))


def login(client, email="user1@mail.com", password="P4ssword") -> dict:
    token = client.post("/api/1.0/auth", json={"email": email, "password": password}).json()["token"]
    return {"Authorization": f"Bearer {token}"}


def test_토큰_없이_수정하면_403(client):
    response = client.put("/api/1.0/users/5")
    assert response.status_code == 403


@pytest.mark.parametrize("language, message", [
    ("en", en["unauthorized_user_update"]),
    ("np", np["unauthorized_user_update"]),
])
def test_권한_없음_에러_본문(client, language, message):
    now_in_millis = int(time.time() * 1000)
    response = client.put("/api/1.0/users/5", headers={"Accept-Language": language})
    body = response.json()
    assert body["path"] == "/api/1.0/users/5"
    assert body["timestamp"] >= now_in_millis
    assert body["message"] == message


def test_잘못된_토큰으로_수정하면_403(client, add_user):
    user = add_user()
    response = client.put(
        f"/api/1.0/users/{user.id}",
        json={"username": "user1-updated"},
        headers={"Authorization": "Bearer not-a-real-token"},
    )
    assert response.status_code == 403


def test_다른_유저_수정하면_403(client, add_user, auth_headers):
    other = add_user(username="user2", email="user2@mail.com")
    response = client.put(f"/api/1.0/users/{other.id}", json={"username": "hacked"}, headers=auth_headers)
    assert response.status_code == 403


def test_다른_유저_수정시_변경_없음(client, add_user, auth_headers, db_run):
    other = add_user(username="user2", email="user2@mail.com")
    client.put(f"/api/1.0/users/{other.id}", json={"username": "hacked"}, headers=auth_headers)
    saved = db_run(lambda db: user_repo.find_by_email(db, "user2@mail.com"))
    assert saved.username == "user2"


def test_본인_수정_성공(client, add_user):
    user = add_user()
    headers = login(client)
    response = client.put(f"/api/1.0/users/{user.id}", json={"username": "user1-updated"}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {"id": user.id, "username": "user1-updated", "email": "user1@mail.com"}


def test_본인_수정시_사용자명만_변경(client, add_user, db_run):
    user = add_user()
    headers = login(client)
    client.put(f"/api/1.0/users/{user.id}", json={"username": "user1-updated"}, headers=headers)

    saved = db_run(lambda db: user_repo.find_by_email(db, "user1@mail.com"))
    assert saved.username == "user1-updated"
    assert saved.email == "user1@mail.com"
    assert saved.password_hash == user.password_hash
    assert saved.inactive is False


@pytest.mark.parametrize("username, message_key", [
    (None, "username_null"),
    ("usr", "username_size"),
    ("a" * 33, "username_size"),
])
def test_본인_수정시_사용자명_검증(client, add_user, username, message_key):
    user = add_user()
    headers = login(client)
    response = client.put(f"/api/1.0/users/{user.id}", json={"username": username}, headers=headers)
    assert response.status_code == 400
    assert response.json()["validationErrors"]["username"] == en[message_key]


def test_권한_확인이_검증보다_먼저(client, add_user, auth_headers):
    other = add_user(username="user2", email="user2@mail.com")
    response = client.put(f"/api/1.0/users/{other.id}", json={"username": None}, headers=auth_headers)
    assert response.status_code == 403


def test_로그아웃한_토큰으로는_수정_불가(client, add_user):
    user = add_user()
    headers = login(client)
    client.post("/api/1.0/logout", headers=headers)

    response = client.put(f"/api/1.0/users/{user.id}", json={"username": "user1-updated"}, headers=headers)
    assert response.status_code == 403


def test_토큰_없이_타입이_틀린_본문이어도_403(client, add_user):
    user = add_user()
    response = client.put(f"/api/1.0/users/{user.id}", json={"username": 1234})
    assert response.status_code == 403
    assert "validationErrors" not in response.json()


def test_다른_유저에게_타입이_틀린_본문이어도_403(client, add_user, auth_headers):
    other = add_user(username="user2", email="user2@mail.com")
    response = client.put(f"/api/1.0/users/{other.id}", json=["not", "an", "object"], headers=auth_headers)
    assert response.status_code == 403


def test_본인_수정시_타입이_틀린_본문은_400(client, add_user):
    user = add_user()
    headers = login(client)
    response = client.put(f"/api/1.0/users/{user.id}", json={"username": 1234}, headers=headers)
    assert response.status_code == 400
    assert response.json()["validationErrors"] == {"username": en["field_invalid"]}


def test_본인_수정시_본문이_없으면_사용자명_누락(client, add_user):
    user = add_user()
    headers = login(client)
    response = client.put(f"/api/1.0/users/{user.id}", headers=headers)
    assert response.status_code == 400
    assert response.json()["validationErrors"]["username"] == en["username_null"]
