"""HTTP tests: gate middleware, RPC procedures, misc endpoints."""

import pytest
from fastapi.testclient import TestClient

from littlecook.db import client as db
from littlecook.web.app import create_app

ALICE = {"Authorization": "Bearer alice-token"}
BOB = {"Authorization": "Bearer bob-token"}

ALICE_ID = "00000000-0000-0000-0000-000000000002"


class TestProtectedPages:
    """Route gate applied by the middleware."""

    def test_anonymous_gets_not_found(self, client):
        response = client.get("/planning/week")

        assert response.status_code == 404
        assert response.json() == client.get("/no-such-page").json()

    def test_forged_token_gets_not_found(self, client):
        response = client.get("/recettes", headers={"Authorization": "Bearer forged"})
        assert response.status_code == 404

    def test_incomplete_onboarding_redirects(self, client, bob):
        response = client.get("/recettes", headers=BOB, follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "/onboarding/foyer"

    @pytest.mark.parametrize("path", ["/planning", "/recettes/12", "/liste-de-courses", "/admin/x"])
    def test_onboarded_user_gets_page(self, client, alice, path):
        response = client.get(path, headers=ALICE)

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        assert "animate-pulse" in response.text

    def test_session_cookie_is_accepted(self, client, alice):
        response = client.get("/planning", headers={"Cookie": "mlc_session=alice-token"})
        assert response.status_code == 200

    def test_onboarding_page_is_not_gated(self, client):
        assert client.get("/onboarding/foyer").status_code == 200

    def test_redirect_lands_on_onboarding(self, client, bob):
        response = client.get("/planning", headers=BOB)

        assert response.status_code == 200
        assert response.url.path == "/onboarding/foyer"

    def test_admin_page_uses_table_skeleton(self, client, alice):
        response = client.get("/admin", headers=ALICE)

        assert response.status_code == 200
        assert "<title>Administration - My Little Cook</title>" in response.text


class TestUserSettingsProcedures:

    def test_get_requires_authentication(self, client):
        response = client.get("/api/trpc/userSettings.get")
        assert response.status_code == 401

    def test_get_creates_defaults(self, client, fake_db, alice):
        response = client.get("/api/trpc/userSettings.get", headers=ALICE)

        assert response.status_code == 200
        assert response.json() == {"userId": alice["id"], "defaultPeopleCount": 2}
        assert len(fake_db.tables["user_settings"]) == 1

    def test_update_then_get(self, client, alice):
        response = client.post(
            "/api/trpc/userSettings.update",
            json={"defaultPeopleCount": 5},
            headers=ALICE,
        )
        assert response.status_code == 200
        assert response.json()["defaultPeopleCount"] == 5

        response = client.get("/api/trpc/userSettings.get", headers=ALICE)
        assert response.json()["defaultPeopleCount"] == 5

    @pytest.mark.parametrize("value", [0, 21, -5, 2.5, "4"])
    def test_update_rejects_invalid_values(self, client, fake_db, alice, value):
        response = client.post(
            "/api/trpc/userSettings.update",
            json={"defaultPeopleCount": value},
            headers=ALICE,
        )

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "defaultPeopleCount"]
        assert fake_db.writes == []

    def test_update_requires_authentication(self, client, fake_db):
        response = client.post("/api/trpc/userSettings.update", json={"defaultPeopleCount": 3})

        assert response.status_code == 401
        assert fake_db.writes == []

    def test_complete_onboarding_unlocks_pages(self, client, bob):
        response = client.post("/api/trpc/userSettings.completeOnboarding", headers=BOB)

        assert response.status_code == 200
        assert response.json()["hasCompletedOnboarding"] is True
        assert client.get("/planning", headers=BOB, follow_redirects=False).status_code == 200

    def test_complete_onboarding_without_user_row(self, client, fake_db, alice):
        fake_db.tables["users"].clear()

        response = client.post("/api/trpc/userSettings.completeOnboarding", headers=ALICE)

        assert response.status_code == 404

    def test_complete_onboarding_reports_stored_flag(self, client, bob, monkeypatch):
        """The flag comes from the updated row, never from a default."""
        async def stale_update(client, user_id):
            return {"id": user_id, "email": "bob@example.com", "has_completed_onboarding": False}

        monkeypatch.setattr(db, "mark_onboarding_complete", stale_update)

        response = client.post("/api/trpc/userSettings.completeOnboarding", headers=BOB)

        assert response.status_code == 200
        assert response.json()["hasCompletedOnboarding"] is False


class TestMiscEndpoints:

    def test_me(self, client, alice):
        response = client.get("/api/me", headers=ALICE)

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == alice["id"]
        assert data["display_name"] == "alice"
        assert data["has_completed_onboarding"] is True

    def test_me_prefers_display_name(self, client, fake_db):
        fake_db.add_user("carol-token", "carol-id", email="c@example.com", display_name="Carol")

        response = client.get("/api/me", headers={"Authorization": "Bearer carol-token"})

        assert response.json()["display_name"] == "Carol"

    def test_recipe_types_for_breakfast(self, client):
        response = client.get("/api/recipe-types", params={"mealType": "BREAKFAST"})

        assert [t["value"] for t in response.json()] == ["BREAKFAST", "BEVERAGE"]

    def test_recipe_types_unknown_meal_type(self, client):
        response = client.get("/api/recipe-types", params={"mealType": "BRUNCH"})
        assert response.status_code == 422


class TestGateFailures:

    def test_database_error_is_not_masked_as_not_found(self, fake_db, alice):
        app = create_app(db_factory=lambda: fake_db)

        with TestClient(app, raise_server_exceptions=False) as client:
            fake_db.error = ConnectionError("database unreachable")
            response = client.get("/planning", headers=ALICE)

        assert response.status_code == 500
        assert "grid grid-cols-3 gap-4" in response.text


class TestDefaultSlotSettingsProcedures:

    def test_requires_authentication(self, client):
        response = client.get("/api/trpc/defaultSlotSettings.getUserSettings")
        assert response.status_code == 401

    def test_upsert_then_list_and_map(self, client, household):
        response = client.post(
            "/api/trpc/defaultSlotSettings.upsertSlotSetting",
            json={"dayOfWeek": 0, "mealType": "LUNCH", "mealUserIds": ["alice-profile", "leo-profile"]},
            headers=ALICE,
        )

        assert response.status_code == 200
        created = response.json()
        assert created["slotKey"] == "0-LUNCH"
        assert created["mealTypeLabel"] == "Déjeuner"

        listed = client.get("/api/trpc/defaultSlotSettings.getUserSettings", headers=ALICE).json()
        assert [s["slotKey"] for s in listed] == ["0-LUNCH"]

        mapping = client.get("/api/trpc/defaultSlotSettings.getMap", headers=ALICE).json()
        assert mapping == {"0-LUNCH": ["alice-profile", "leo-profile"]}

    @pytest.mark.parametrize("day", [-1, 7, "2"])
    def test_rejects_invalid_day(self, client, fake_db, household, day):
        response = client.post(
            "/api/trpc/defaultSlotSettings.upsertSlotSetting",
            json={"dayOfWeek": day, "mealType": "LUNCH", "mealUserIds": ["alice-profile"]},
            headers=ALICE,
        )

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "dayOfWeek"]
        assert fake_db.writes == []

    def test_foreign_profile_is_bad_request(self, client, fake_db, household):
        response = client.post(
            "/api/trpc/defaultSlotSettings.upsertSlotSetting",
            json={"dayOfWeek": 1, "mealType": "DINNER", "mealUserIds": ["other-profile"]},
            headers=ALICE,
        )

        assert response.status_code == 400
        assert fake_db.writes == []

    def test_default_meal_users(self, client, household):
        client.post(
            "/api/trpc/defaultSlotSettings.upsertSlotSetting",
            json={"dayOfWeek": 3, "mealType": "DINNER", "mealUserIds": ["leo-profile"]},
            headers=ALICE,
        )

        response = client.post(
            "/api/trpc/defaultSlotSettings.getDefaultMealUsers",
            json={"dayOfWeek": 3, "mealType": "DINNER"},
            headers=ALICE,
        )

        assert [u["pseudo"] for u in response.json()] == ["Leo"]

    def test_copy_delete_and_reset(self, client, fake_db, household):
        client.post(
            "/api/trpc/defaultSlotSettings.upsertSlotSetting",
            json={"dayOfWeek": 0, "mealType": "DINNER", "mealUserIds": ["alice-profile"]},
            headers=ALICE,
        )

        copied = client.post(
            "/api/trpc/defaultSlotSettings.copyDaySettings",
            json={"sourceDayOfWeek": 0, "targetDayOfWeek": 6},
            headers=ALICE,
        ).json()
        assert [s["slotKey"] for s in copied] == ["6-DINNER"]

        response = client.post(
            "/api/trpc/defaultSlotSettings.deleteSlotSetting",
            json={"dayOfWeek": 0, "mealType": "DINNER"},
            headers=ALICE,
        )
        assert response.json() == {"success": True}
        assert len(fake_db.tables["default_slot_settings"]) == 1

        response = client.post("/api/trpc/defaultSlotSettings.resetAllSettings", headers=ALICE)
        assert response.json() == {"success": True}
        assert fake_db.tables["default_slot_settings"] == []


class TestShoppingAndImportProcedures:

    def test_generate_requires_authentication(self, client):
        response = client.post(
            "/api/trpc/shoppingList.generate",
            json={"mealUserIds": ["a"], "startDate": "2026-10-12"},
        )
        assert response.status_code == 401

    def test_generate(self, client, fake_db, household):
        fake_db.tables["meal_plans"].append({
            "id": "plan-1",
            "owner_id": ALICE_ID,
            "meal_date": "2026-10-14",
            "meal_type": "DINNER",
            "recipes": {
                "id": "recipe-1",
                "title": "Gratin",
                "servings": 4,
                "minimal_servings": None,
                "recipe_types": [{"type": "MAIN_COURSE"}],
                "recipe_ingredients": [{
                    "id": "ri-1",
                    "quantity": "800",
                    "notes": None,
                    "ingredients": {"id": "ing-1", "name": "pommes de terre", "unit": "g", "category": "Légumes"},
                }],
            },
            "meal_plan_assignments": [{"meal_user_id": "alice-profile"}, {"meal_user_id": "leo-profile"}],
        })

        response = client.post(
            "/api/trpc/shoppingList.generate",
            json={"mealUserIds": ["alice-profile"], "startDate": "2026-10-12"},
            headers=ALICE,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == [{
            "ingredient": {"id": "ing-1", "name": "pommes de terre", "unit": "g", "category": "Légumes"},
            "totalQuantity": "400",
            "notes": [],
            "recipes": ["Gratin"],
        }]
        assert data["recipes"][0]["slot"] == "Mercredi - Dîner"

    def test_parse_ingredients(self, client, alice):
        response = client.post(
            "/api/trpc/recipeImport.parseIngredients",
            json={"lines": ["200g de beurre", "", "deux oignons, émincés"]},
            headers=ALICE,
        )

        assert response.status_code == 200
        assert response.json() == [
            {"quantity": 200.0, "unit": "g", "name": "beurre", "notes": None, "category": "produits laitiers"},
            {"quantity": 2.0, "unit": "pièce", "name": "oignons", "notes": "émincés", "category": "légumes"},
        ]