import unittest

from metaverse_sns.tests.fakes import AppTestCase


class PagesTests(AppTestCase):
    def setUp(self):
        super().setUp()
        self.user, self.session = self.backend.add_user("aki@mail.com", username="aki")
        self.sign_in_as(self.session)

    def test_auth_page_lists_fields_per_mode(self):
        self.client.cookies.clear()
        response = self.client.get("/auth", params={"mode": "sign-up"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["fields"], ["username", "email", "password"])

    def test_home_without_query_shows_no_results_indicator_off(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["user"]["id"], self.user.id)
        self.assertEqual(payload["search"]["profiles"], [])
        self.assertFalse(payload["search"]["no_results"])
        self.assertEqual(self.backend.queries, [])

    def test_home_with_query_searches(self):
        payload = self.client.get("/", params={"q": "AK"}).json()
        self.assertEqual([p["username"] for p in payload["search"]["profiles"]], ["aki"])

    def test_profile_page_loads_profile_and_avatars(self):
        self.backend.tables["avatars"].append({
            "id": "a1", "user_id": self.user.id, "name": "Kit", "platform": "VRChat",
            "description": None, "image_url": None, "is_primary": True,
            "created_at": "2024-01-01T00:00:00+00:00",
        })
        payload = self.client.get("/profile").json()
        self.assertEqual(payload["profile"], {"username": "aki", "bio": "", "avatar_url": ""})
        self.assertEqual([a["name"] for a in payload["avatars"]], ["Kit"])
        self.assertEqual(payload["errors"], [])

    def test_profile_page_renders_avatars_when_profile_is_missing(self):
        self.backend.tables["profiles"].clear()
        payload = self.client.get("/profile").json()
        self.assertIsNone(payload["profile"])
        self.assertEqual(payload["avatars"], [])
        self.assertEqual(payload["errors"], ["Failed to load profile"])


if __name__ == "__main__":
    unittest.main()
