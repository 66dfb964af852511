"""
HTTP tests through the FastAPI app:
- submission status codes (400 malformed answers, 404 scenario / empty steps)
- guest submission scores without writing anything
- signed-in submission returns level progress, badge and scenario snapshot
- auth flow, token rejection and admin-only routes
- admin deletes cascade to dependent rows; partial updates reject nulls
- admin user management and per-user progress reads
"""
import pytest
from sqlalchemy import func, select

from app.core.config import get_settings
from app.models.attempt import Attempt
from app.models.step_attempt import StepAttempt
from app.models.user_badge import UserBadge
from app.models.user_level import UserLevel
from app.repositories import LevelRepository, ScenarioRepository, UserLevelRepository, UserRepository
from app.services.auth import AuthService

from conftest import make_level, make_scenario

PASSWORD = "correct-horse-battery"


async def _register_and_login(client, email="learner@example.com"):
    resp = await client.post(
        "/auth/register", json={"email": email, "username": "learner", "password": PASSWORD}
    )
    assert resp.status_code == 201
    resp = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


async def _admin_headers(client, db):
    auth = AuthService(UserRepository(db), UserLevelRepository(db), get_settings())
    await auth.register("admin@example.com", "admin", PASSWORD, role="admin")
    resp = await client.post("/auth/login", json={"email": "admin@example.com", "password": PASSWORD})
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


async def _count(db, model):
    result = await db.execute(select(func.count(model.id)))
    return result.scalar_one()


class TestSubmissionErrors:
    @pytest.mark.asyncio
    async def test_answers_must_be_a_list(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        resp = await client.post(f"/scenarios/{scenario.id}/submit", json={"userAnswers": "ABCD"})
        assert resp.status_code == 400
        assert resp.json() == {"error": True, "message": "userAnswers must be an array."}

    @pytest.mark.asyncio
    async def test_missing_answers_field(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        resp = await client.post(f"/scenarios/{scenario.id}/submit", json={})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_answers_checked_before_lookup(self, client):
        resp = await client.post("/scenarios/999/submit", json={"userAnswers": {"a": 1}})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_scenario(self, client):
        resp = await client.post("/scenarios/999/submit", json={"userAnswers": ["A"]})
        assert resp.status_code == 404
        assert resp.json()["message"] == "Scenario not found"

    @pytest.mark.asyncio
    async def test_scenario_without_steps(self, client, db):
        await make_level(db, 1)
        scenario = await ScenarioRepository(db).create(level_id=1, title="Empty")
        resp = await client.post(f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A"]})
        assert resp.status_code == 404
        assert resp.json()["message"] == "No steps found for this scenario."

    @pytest.mark.asyncio
    async def test_invalid_token_rejected(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        resp = await client.post(
            f"/scenarios/{scenario.id}/submit",
            json={"userAnswers": ["A", "B", "C", "D"]},
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert resp.status_code == 401


class TestGuestSubmission:
    @pytest.mark.asyncio
    async def test_scored_but_not_recorded(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)

        resp = await client.post(f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A", "B", "C", "D"]})

        assert resp.status_code == 200
        body = resp.json()
        assert body["score"] == 100
        assert body["all_correct"] is True
        assert body["level_id"] == 1
        assert body["scenario_id"] == scenario.id
        assert "level_progress" not in body
        assert "awarded_badge" not in body
        assert "updated_scenario" not in body
        assert await _count(db, Attempt) == 0
        assert await _count(db, UserLevel) == 0

    @pytest.mark.asyncio
    async def test_answers_alias(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        resp = await client.post(f"/scenarios/{scenario.id}/submit", json={"answers": ["a", "b", "x", "d"]})
        assert resp.json()["score"] == 75


class TestSignedInSubmission:
    @pytest.mark.asyncio
    async def test_partial_score_reports_level_counts(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        await make_scenario(db, 1)
        headers = await _register_and_login(client)

        resp = await client.post(
            f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["a", "b", "x", "d"]}, headers=headers
        )

        body = resp.json()
        assert resp.status_code == 200
        assert body["score"] == 75
        assert body["correct_count"] == 3
        assert body["level_progress"] == {
            "level_id": 1,
            "completed": False,
            "perfect_in_level": 0,
            "total_in_level": 2,
        }
        assert "awarded_badge" not in body
        assert body["updated_scenario"]["id"] == scenario.id

    @pytest.mark.asyncio
    async def test_completing_level_awards_badge_once(self, client, db):
        await make_level(db, 1)
        await make_level(db, 2)
        scenario = await make_scenario(db, 1, orders=[4, 3, 2, 1])
        headers = await _register_and_login(client)
        payload = {"userAnswers": ["A", "B", "C", "D"]}

        first = (await client.post(f"/scenarios/{scenario.id}/submit", json=payload, headers=headers)).json()
        second = (await client.post(f"/scenarios/{scenario.id}/submit", json=payload, headers=headers)).json()

        assert first["level_progress"] == {"level_id": 1, "completed": True, "next_level_unlocked": 2}
        assert first["awarded_badge"]["name"] == "Level 1 Badge"
        assert first["awarded_badge"]["icon_url"] == "/icons/level-1.png"
        assert "awarded_badge" not in second
        assert second["level_progress"]["completed"] is True

        badges = (await client.get("/me/badges", headers=headers)).json()
        assert [b["badge"]["level_id"] for b in badges] == [1]
        levels = (await client.get("/me/levels", headers=headers)).json()
        assert levels == [
            {"level_id": 1, "unlocked": True, "completed": True},
            {"level_id": 2, "unlocked": True, "completed": False},
        ]

    @pytest.mark.asyncio
    async def test_step_results_of_best_attempt(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        headers = await _register_and_login(client)
        await client.post(
            f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A", "C"]}, headers=headers
        )

        attempts = (await client.get("/me/attempts", headers=headers)).json()
        assert len(attempts) == 1
        assert attempts[0]["score"] == 25

        steps = (await client.get(f"/me/attempts/{attempts[0]['id']}/steps", headers=headers)).json()
        assert [s["is_correct"] for s in steps] == [True, False, False, False]
        assert [s["chosen_action"] for s in steps] == ["A", "C", None, None]

        by_level = (await client.get("/me/attempts/level/1", headers=headers)).json()
        assert [a["scenario_id"] for a in by_level] == [scenario.id]

    @pytest.mark.asyncio
    async def test_other_users_attempt_steps_hidden(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        alice = await _register_and_login(client, "alice@example.com")
        bob = await _register_and_login(client, "bob@example.com")
        await client.post(f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A"]}, headers=alice)
        attempt_id = (await client.get("/me/attempts", headers=alice)).json()[0]["id"]

        resp = await client.get(f"/me/attempts/{attempt_id}/steps", headers=bob)
        assert resp.status_code == 404


class TestAuth:
    @pytest.mark.asyncio
    async def test_register_unlocks_first_level(self, client):
        headers = await _register_and_login(client)
        me = (await client.get("/auth/me", headers=headers)).json()
        assert me["email"] == "learner@example.com"
        assert me["role"] == "user"
        levels = (await client.get("/me/levels", headers=headers)).json()
        assert levels == [{"level_id": 1, "unlocked": True, "completed": False}]

    @pytest.mark.asyncio
    async def test_duplicate_email(self, client):
        await _register_and_login(client)
        resp = await client.post(
            "/auth/register", json={"email": "Learner@Example.com", "username": "x", "password": PASSWORD}
        )
        assert resp.status_code == 409

    @pytest.mark.asyncio
    async def test_short_password(self, client):
        resp = await client.post(
            "/auth/register", json={"email": "a@example.com", "username": "a", "password": "short"}
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_bad_credentials(self, client):
        await _register_and_login(client)
        resp = await client.post("/auth/login", json={"email": "learner@example.com", "password": "wrong-password"})
        assert resp.status_code == 401

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        assert (await client.get("/auth/me")).status_code == 401
        assert (await client.get("/me/levels")).status_code == 401


class TestScenarioRoutes:
    @pytest.mark.asyncio
    async def test_detail_hides_answers_and_orders_steps(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1, orders=[3, 1, 2, 4])

        body = (await client.get(f"/scenarios/{scenario.id}")).json()

        assert [s["step_order"] for s in body["steps"]] == [1, 2, 3, 4]
        assert all("correct_action" not in s for s in body["steps"])
        assert body["steps"][0]["options"]["A"] == "a"

    @pytest.mark.asyncio
    async def test_list_by_level(self, client, db):
        await make_level(db, 1)
        await make_level(db, 2)
        await make_scenario(db, 1)
        in_two = await make_scenario(db, 2)
        body = (await client.get("/scenarios/level/2")).json()
        assert [s["id"] for s in body] == [in_two.id]

    @pytest.mark.asyncio
    async def test_admin_only_writes(self, client, db):
        await make_level(db, 1)
        learner = await _register_and_login(client)
        resp = await client.post("/scenarios", json={"level_id": 1, "title": "New"}, headers=learner)
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_builds_scenario(self, client, db):
        await make_level(db, 1)
        admin = await _admin_headers(client, db)

        created = await client.post("/scenarios", json={"level_id": 1, "title": "Tailgating"}, headers=admin)
        assert created.status_code == 201
        scenario_id = created.json()["id"]

        step = {"step_order": 1, "prompt": "Someone follows you in", "options": {"A": "Hold door", "B": "Ask for badge"}, "correct_action": "b"}
        resp = await client.post(f"/scenarios/{scenario_id}/steps", json=step, headers=admin)
        assert resp.status_code == 201
        assert resp.json()["correct_action"] == "B"

        duplicate = await client.post(f"/scenarios/{scenario_id}/steps", json=step, headers=admin)
        assert duplicate.status_code == 409

        step_id = resp.json()["id"]
        updated = await client.put(f"/steps/{step_id}", json={"feedback": "Always check badges"}, headers=admin)
        assert updated.json()["feedback"] == "Always check badges"

        listed = (await client.get(f"/scenarios/{scenario_id}/steps", headers=admin)).json()
        assert [s["correct_action"] for s in listed] == ["B"]

        assert (await client.delete(f"/scenarios/{scenario_id}", headers=admin)).status_code == 204
        assert (await client.get(f"/scenarios/{scenario_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_one_badge_per_level(self, client, db):
        await make_level(db, 1)
        admin = await _admin_headers(client, db)
        resp = await client.post("/badges", json={"level_id": 1, "name": "Again"}, headers=admin)
        assert resp.status_code == 409


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok", "database": True}


class TestAdminDeletes:
    @pytest.mark.asyncio
    async def test_deleting_awarded_badge_removes_it_from_holders(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        learner = await _register_and_login(client)
        admin = await _admin_headers(client, db)
        body = (await client.post(
            f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A", "B", "C", "D"]}, headers=learner
        )).json()
        badge_id = body["awarded_badge"]["badge_id"]

        assert (await client.delete(f"/badges/{badge_id}", headers=admin)).status_code == 204

        resp = await client.get("/me/badges", headers=learner)
        assert resp.status_code == 200
        assert resp.json() == []
        assert await _count(db, UserBadge) == 0

    @pytest.mark.asyncio
    async def test_deleting_scenario_removes_its_attempts(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        learner = await _register_and_login(client)
        admin = await _admin_headers(client, db)
        await client.post(f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A"]}, headers=learner)

        assert (await client.delete(f"/scenarios/{scenario.id}", headers=admin)).status_code == 204

        assert (await client.get("/me/attempts", headers=learner)).json() == []
        assert await _count(db, Attempt) == 0
        assert await _count(db, StepAttempt) == 0

    @pytest.mark.asyncio
    async def test_deleting_level_removes_its_content_and_progress(self, client, db):
        await make_level(db, 1)
        await make_scenario(db, 1)
        learner = await _register_and_login(client)
        admin = await _admin_headers(client, db)

        assert (await client.delete("/levels/1", headers=admin)).status_code == 204

        assert (await client.get("/me/levels", headers=learner)).json() == []
        assert (await client.get("/scenarios")).json() == []
        assert (await client.get("/badges")).json() == []


class TestPartialUpdates:
    @pytest.mark.asyncio
    async def test_null_for_required_field_is_rejected(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        admin = await _admin_headers(client, db)
        step_id = (await client.get(f"/scenarios/{scenario.id}/steps", headers=admin)).json()[0]["id"]
        badge_id = (await client.get("/badges")).json()[0]["id"]

        assert (await client.put("/levels/1", json={"title": None}, headers=admin)).status_code == 422
        assert (await client.put(f"/scenarios/{scenario.id}", json={"title": None}, headers=admin)).status_code == 422
        assert (await client.put(f"/steps/{step_id}", json={"prompt": None}, headers=admin)).status_code == 422
        assert (await client.put(f"/steps/{step_id}", json={"correct_action": None}, headers=admin)).status_code == 422
        assert (await client.put(f"/badges/{badge_id}", json={"name": None}, headers=admin)).status_code == 422
        assert (await client.get("/levels/1")).json()["title"] == "Level 1"

    @pytest.mark.asyncio
    async def test_optional_field_can_be_cleared(self, client, db):
        await LevelRepository(db).create(id=1, title="Basics", description="Warm-up")
        admin = await _admin_headers(client, db)

        resp = await client.put("/levels/1", json={"description": None}, headers=admin)
        assert resp.status_code == 200
        assert resp.json() == {"id": 1, "title": "Basics", "description": None}


class TestUserAdmin:
    @pytest.mark.asyncio
    async def test_admin_only(self, client, db):
        learner = await _register_and_login(client)
        assert (await client.get("/users", headers=learner)).status_code == 403
        assert (await client.get("/users")).status_code == 401

    @pytest.mark.asyncio
    async def test_create_update_delete(self, client, db):
        admin = await _admin_headers(client, db)
        new_user = {"email": "coach@example.com", "username": "coach", "password": PASSWORD, "role": "admin"}

        created = await client.post("/users", json=new_user, headers=admin)
        assert created.status_code == 201
        assert created.json()["role"] == "admin"
        user_id = created.json()["id"]
        assert (await client.post("/users", json=new_user, headers=admin)).status_code == 409

        listed = (await client.get("/users", headers=admin)).json()
        assert [u["email"] for u in listed] == ["admin@example.com", "coach@example.com"]

        updated = await client.put(f"/users/{user_id}", json={"username": "Coach", "role": "user"}, headers=admin)
        assert updated.json()["username"] == "Coach"
        assert updated.json()["role"] == "user"
        assert (await client.put(f"/users/{user_id}", json={"role": "owner"}, headers=admin)).status_code == 422
        assert (await client.put(f"/users/{user_id}", json={"username": None}, headers=admin)).status_code == 422

        assert (await client.delete(f"/users/{user_id}", headers=admin)).status_code == 204
        assert (await client.get(f"/users/{user_id}", headers=admin)).status_code == 404

    @pytest.mark.asyncio
    async def test_admin_cannot_delete_self(self, client, db):
        admin = await _admin_headers(client, db)
        admin_id = (await client.get("/auth/me", headers=admin)).json()["id"]
        assert (await client.delete(f"/users/{admin_id}", headers=admin)).status_code == 400

    @pytest.mark.asyncio
    async def test_reads_progress_of_any_user(self, client, db):
        await make_level(db, 1)
        await make_level(db, 2)
        scenario = await make_scenario(db, 1)
        learner = await _register_and_login(client)
        learner_id = (await client.get("/auth/me", headers=learner)).json()["id"]
        admin = await _admin_headers(client, db)
        await client.post(
            f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A", "B", "C", "D"]}, headers=learner
        )

        levels = (await client.get(f"/users/{learner_id}/levels", headers=admin)).json()
        assert levels == [
            {"level_id": 1, "unlocked": True, "completed": True},
            {"level_id": 2, "unlocked": True, "completed": False},
        ]
        attempts = (await client.get(f"/users/{learner_id}/attempts", headers=admin)).json()
        assert [a["score"] for a in attempts] == [100]
        in_level = (await client.get(f"/users/{learner_id}/attempts/level/1", headers=admin)).json()
        assert [a["scenario_id"] for a in in_level] == [scenario.id]
        one = await client.get(f"/users/{learner_id}/attempts/scenario/{scenario.id}", headers=admin)
        assert one.json()["all_correct"] is True
        assert (await client.get(f"/users/{learner_id}/attempts/scenario/999", headers=admin)).status_code == 404
        badges = (await client.get(f"/users/{learner_id}/badges", headers=admin)).json()
        assert [b["badge"]["level_id"] for b in badges] == [1]
        assert (await client.get("/users/999/levels", headers=admin)).status_code == 404

    @pytest.mark.asyncio
    async def test_manual_award_and_revoke(self, client, db):
        await make_level(db, 1)
        learner = await _register_and_login(client)
        learner_id = (await client.get("/auth/me", headers=learner)).json()["id"]
        admin = await _admin_headers(client, db)
        badge_id = (await client.get("/badges")).json()[0]["id"]

        awarded = await client.post(f"/users/{learner_id}/badges", json={"badge_id": badge_id}, headers=admin)
        assert awarded.status_code == 201
        assert awarded.json()["badge"]["name"] == "Level 1 Badge"
        again = await client.post(f"/users/{learner_id}/badges", json={"badge_id": badge_id}, headers=admin)
        assert again.status_code == 409
        missing = await client.post(f"/users/{learner_id}/badges", json={"badge_id": 999}, headers=admin)
        assert missing.status_code == 404
        assert [b["badge_id"] for b in (await client.get("/me/badges", headers=learner)).json()] == [badge_id]

        assert (await client.delete(f"/users/{learner_id}/badges/{badge_id}", headers=admin)).status_code == 204
        assert (await client.delete(f"/users/{learner_id}/badges/{badge_id}", headers=admin)).status_code == 404
        assert (await client.get("/me/badges", headers=learner)).json() == []

    @pytest.mark.asyncio
    async def test_deleting_user_removes_their_progress(self, client, db):
        await make_level(db, 1)
        scenario = await make_scenario(db, 1)
        learner = await _register_and_login(client)
        learner_id = (await client.get("/auth/me", headers=learner)).json()["id"]
        admin = await _admin_headers(client, db)
        await client.post(
            f"/scenarios/{scenario.id}/submit", json={"userAnswers": ["A", "B", "C", "D"]}, headers=learner
        )

        assert (await client.delete(f"/users/{learner_id}", headers=admin)).status_code == 204

        assert await _count(db, Attempt) == 0
        assert await _count(db, StepAttempt) == 0
        assert await _count(db, UserBadge) == 0
        result = await db.execute(select(func.count(UserLevel.id)).where(UserLevel.user_id == learner_id))
        assert result.scalar_one() == 0
        assert (await client.get("/me/levels", headers=learner)).status_code == 401
