"""헤드샷 API (create, get, list, pending, update) 테스트."""


class TestCreate:
    def test_create_headshot(self, client, user, make_headshot):
        """새 요청은 항상 pending + 결과/에러 필드 null."""
        data = make_headshot(user.id)
        assert data["user_id"] == user.id
        assert data["original_image_url"] == "https://x/1.jpg"
        assert data["background_style"] == "plain"
        assert data["attire"] == "casual"
        assert data["expression"] == "smiling"
        assert data["status"] == "pending"
        assert data["generated_image_url"] is None
        assert data["error_message"] is None

    def test_create_for_unknown_user(self, client):
        """없는 user_id → 404 USER_NOT_FOUND, 행은 생성되지 않는다."""
        resp = client.post(
            "/api/headshots",
            json={
                "user_id": 99999,
                "original_image_url": "https://x/1.jpg",
                "background_style": "office",
                "attire": "formal",
                "expression": "serious",
            },
        )
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "USER_NOT_FOUND"

        assert client.get("/api/headshots").json() == []

    def test_url_stored_as_sent(self, client, user, make_headshot):
        """경로 없는 URL도 정규화(소문자화, 끝 슬래시) 없이 그대로 저장된다."""
        created = make_headshot(user.id, original_image_url="https://Example.com")
        assert created["original_image_url"] == "https://Example.com"

        fetched = client.get(f"/api/headshots/{created['id']}").json()
        assert fetched["original_image_url"] == "https://Example.com"

    def test_invalid_enum_rejected(self, client, user):
        resp = client.post(
            "/api/headshots",
            json={
                "user_id": user.id,
                "original_image_url": "https://x/1.jpg",
                "background_style": "beach",
                "attire": "casual",
                "expression": "smiling",
            },
        )
        assert resp.status_code == 422

    def test_invalid_url_rejected(self, client, user):
        resp = client.post(
            "/api/headshots",
            json={
                "user_id": user.id,
                "original_image_url": "not a url",
                "background_style": "plain",
                "attire": "casual",
                "expression": "smiling",
            },
        )
        assert resp.status_code == 422


class TestGet:
    def test_get_headshot_with_user(self, client, user, make_headshot):
        created = make_headshot(user.id)

        resp = client.get(f"/api/headshots/{created['id']}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == created["id"]
        assert data["user"]["id"] == user.id
        assert data["user"]["email"] == "a@x.com"
        assert data["user"]["name"] == "A"

    def test_get_missing_returns_null(self, client):
        """없는 id → 200 + null (에러 아님)."""
        resp = client.get("/api/headshots/99999")
        assert resp.status_code == 200
        assert resp.json() is None


class TestList:
    def test_list_all_across_users(self, client, user, second_user, make_headshot):
        make_headshot(user.id)
        make_headshot(second_user.id, background_style="studio", attire="formal")

        data = client.get("/api/headshots").json()
        assert len(data) == 2
        emails = {h["user"]["email"] for h in data}
        assert emails == {"a@x.com", "b@x.com"}

    def test_list_empty(self, client):
        resp = client.get("/api/headshots")
        assert resp.status_code == 200
        assert resp.json() == []


class TestPending:
    def test_only_pending_returned(self, client, user, second_user, make_headshot):
        """pending만 반환, processing/completed/failed는 제외 (소유자 무관)."""
        keep_a = make_headshot(user.id)
        keep_b = make_headshot(second_user.id)
        processing = make_headshot(user.id)
        completed = make_headshot(user.id)
        failed = make_headshot(second_user.id)

        client.patch(f"/api/headshots/{processing['id']}", json={"status": "processing"})
        client.patch(
            f"/api/headshots/{completed['id']}",
            json={"status": "completed", "generated_image_url": "https://x/done.jpg"},
        )
        client.patch(
            f"/api/headshots/{failed['id']}",
            json={"status": "failed", "error_message": "boom"},
        )

        resp = client.get("/api/headshots/pending")
        assert resp.status_code == 200
        data = resp.json()
        assert [h["id"] for h in data] == [keep_a["id"], keep_b["id"]]
        # 워커용 목록에는 user가 붙지 않는다
        assert "user" not in data[0]


class TestUpdate:
    def test_partial_update_keeps_other_fields(self, client, user, make_headshot):
        """status만 보내면 status와 updated_at만 바뀐다."""
        created = make_headshot(user.id)
        client.patch(
            f"/api/headshots/{created['id']}",
            json={"error_message": "first attempt timed out"},
        )

        resp = client.patch(f"/api/headshots/{created['id']}", json={"status": "processing"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "processing"
        assert data["error_message"] == "first attempt timed out"
        assert data["generated_image_url"] is None
        assert data["created_at"] == created["created_at"]

    def test_explicit_null_clears_field(self, client, user, make_headshot):
        created = make_headshot(user.id)
        client.patch(f"/api/headshots/{created['id']}", json={"error_message": "oops"})

        resp = client.patch(f"/api/headshots/{created['id']}", json={"error_message": None})
        assert resp.status_code == 200
        assert resp.json()["error_message"] is None

    def test_generated_url_stored_as_sent(self, client, user, make_headshot):
        created = make_headshot(user.id)

        resp = client.patch(
            f"/api/headshots/{created['id']}",
            json={"generated_image_url": "https://cdn.example.com?x=a b"},
        )
        assert resp.status_code == 200
        assert resp.json()["generated_image_url"] == "https://cdn.example.com?x=a b"

    def test_invalid_generated_url_rejected(self, client, user, make_headshot):
        created = make_headshot(user.id)
        resp = client.patch(
            f"/api/headshots/{created['id']}", json={"generated_image_url": "done.jpg"}
        )
        assert resp.status_code == 422

    def test_null_status_rejected(self, client, user, make_headshot):
        created = make_headshot(user.id)
        resp = client.patch(f"/api/headshots/{created['id']}", json={"status": None})
        assert resp.status_code == 422

    def test_update_missing_headshot(self, client):
        """없는 id → 404 HEADSHOT_NOT_FOUND."""
        resp = client.patch("/api/headshots/99999", json={"status": "processing"})
        assert resp.status_code == 404
        assert resp.json()["error_code"] == "HEADSHOT_NOT_FOUND"

    def test_transitions_not_enforced_by_default(self, client, user, make_headshot):
        """completed → pending 같은 역방향 전이도 기본값에서는 허용된다."""
        created = make_headshot(user.id)
        client.patch(
            f"/api/headshots/{created['id']}",
            json={"status": "completed", "generated_image_url": "https://x/done.jpg"},
        )

        resp = client.patch(f"/api/headshots/{created['id']}", json={"status": "pending"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "pending"

    def test_transitions_enforced_when_enabled(self, client, user, make_headshot, monkeypatch):
        from core.config import settings

        monkeypatch.setattr(settings, "ENFORCE_STATUS_TRANSITIONS", True)
        created = make_headshot(user.id)
        client.patch(f"/api/headshots/{created['id']}", json={"status": "processing"})
        client.patch(f"/api/headshots/{created['id']}", json={"status": "completed"})

        resp = client.patch(f"/api/headshots/{created['id']}", json={"status": "pending"})
        assert resp.status_code == 409
        assert resp.json()["error_code"] == "INVALID_STATUS_TRANSITION"


class TestScenario:
    def test_submit_then_complete(self, client):
        """가입 → 요청 → 완료 처리 → 조회까지 한 흐름."""
        user = client.post("/api/users", json={"email": "a@x.com", "name": "A"}).json()
        created = client.post(
            "/api/headshots",
            json={
                "user_id": user["id"],
                "original_image_url": "https://x/1.jpg",
                "background_style": "plain",
                "attire": "casual",
                "expression": "smiling",
            },
        ).json()
        assert created["status"] == "pending"

        client.patch(
            f"/api/headshots/{created['id']}",
            json={"status": "completed", "generated_image_url": "https://x/done.jpg"},
        )

        data = client.get(f"/api/headshots/{created['id']}").json()
        assert data["status"] == "completed"
        assert data["generated_image_url"] == "https://x/done.jpg"
        assert data["user"]["email"] == "a@x.com"
