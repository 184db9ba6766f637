"""
헬스체크 & 공통 에러 처리 테스트
"""


def test_헬스체크(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_경로_파라미터_타입_오류는_400(client):
    response = client.get("/api/1.0/users/abc")
    assert response.status_code == 400
    body = response.json()
    assert body["path"] == "/api/1.0/users/abc"
    assert "user_id" in body["validationErrors"]


def test_깨진_JSON은_400(client):
    response = client.post(
        "/api/1.0/users",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
