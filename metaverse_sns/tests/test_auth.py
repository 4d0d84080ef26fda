import unittest

from fastapi import HTTPException

from metaverse_sns.config import settings
from metaverse_sns.modules.auth.controller import AuthFormController
from metaverse_sns.modules.auth.schemas import AuthDraft
from metaverse_sns.modules.auth.service import AuthService
from metaverse_sns.tests.fakes import AppTestCase, FakeBackend, FakeSupabase


class AuthFormControllerTests(unittest.TestCase):
    def setUp(self):
        self.backend = FakeBackend()
        self.service = AuthService(FakeSupabase(self.backend))

    def controller(self, mode="sign-up", **fields):
        draft = AuthDraft(email="aki@mail.com", password="secret-pass", **fields)
        return AuthFormController(self.service, mode=mode, draft=draft)

    def test_toggle_keeps_field_values(self):
        controller = self.controller(mode="sign-in", username="aki")
        self.assertEqual(controller.toggle(), "sign-up")
        self.assertEqual(controller.toggle(), "sign-in")
        self.assertEqual(controller.draft.username, "aki")
        self.assertEqual(controller.draft.email, "aki@mail.com")

    def test_sign_up_requires_username_before_any_call(self):
        controller = self.controller(username="   ")
        with self.assertRaises(HTTPException) as ctx:
            controller.submit()
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.detail, "Please enter a username")
        self.assertEqual(self.backend.users, {})
        self.assertEqual(self.backend.queries, [])
        self.assertFalse(controller.is_loading)

    def test_sign_up_creates_profile_with_trimmed_username(self):
        outcome = self.controller(username="  aki  ").submit()
        self.assertEqual(outcome.message, "Account created")
        self.assertEqual(self.backend.tables["profiles"], [{"id": outcome.user.id, "username": "aki"}])

    def test_profile_failure_after_sign_up_is_not_rolled_back(self):
        self.backend.failing.add("profiles")
        with self.assertRaises(HTTPException) as ctx:
            self.controller(username="aki").submit()
        self.assertEqual(ctx.exception.detail, "Failed to create account")
        self.assertIn("aki@mail.com", self.backend.users)
        self.assertEqual(self.backend.tables["profiles"], [])

    def test_sign_in_failures_share_one_message(self):
        self.backend.add_user("aki@mail.com", password="other-pass")
        with self.assertRaises(HTTPException) as wrong_password:
            self.controller(mode="sign-in").submit()
        self.backend.failing.add("auth")
        with self.assertRaises(HTTPException) as unavailable:
            self.controller(mode="sign-in").submit()
        self.assertEqual(wrong_password.exception.detail, "Failed to sign in")
        self.assertEqual(unavailable.exception.detail, "Failed to sign in")

    def test_sign_in(self):
        user, _ = self.backend.add_user("aki@mail.com")
        outcome = self.controller(mode="sign-in").submit()
        self.assertEqual(outcome.user.id, user.id)
        self.assertIsNotNone(outcome.session)
        self.assertEqual(outcome.message, "Signed in")

    def test_submit_while_loading_is_rejected(self):
        controller = self.controller(mode="sign-in")
        controller.is_loading = True
        with self.assertRaises(HTTPException) as ctx:
            controller.submit()
        self.assertEqual(ctx.exception.status_code, 409)


class AuthRoutesTests(AppTestCase):
    def test_sign_up_then_load_profile_returns_username(self):
        response = self.client.post(
            "/api/v1/auth/sign-up",
            json={"email": "aki@mail.com", "password": "secret-pass", "username": " aki "},
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["message"], "Account created")

        profile = self.client.get("/api/v1/profile")
        self.assertEqual(profile.status_code, 200)
        self.assertEqual(profile.json()["username"], "aki")

    def test_sign_up_without_username(self):
        response = self.client.post(
            "/api/v1/auth/sign-up",
            json={"email": "aki@mail.com", "password": "secret-pass"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["detail"], "Please enter a username")

    def test_submit_in_sign_in_mode_stores_session_cookies(self):
        self.backend.add_user("aki@mail.com", username="aki")
        response = self.client.post(
            "/api/v1/auth/submit",
            json={"mode": "sign-in", "email": "aki@mail.com", "password": "secret-pass"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Signed in")
        self.assertIsNotNone(self.client.cookies.get(settings.access_token_cookie))
        self.assertEqual(self.client.get("/", follow_redirects=False).status_code, 200)

    def test_failed_sign_in_is_generic(self):
        response = self.client.post(
            "/api/v1/auth/sign-in",
            json={"email": "nobody@mail.com", "password": "secret-pass"},
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["detail"], "Failed to sign in")

    def test_sign_out_revokes_session(self):
        _, session = self.backend.add_user("aki@mail.com", username="aki")
        self.sign_in_as(session)
        response = self.client.post("/api/v1/auth/sign-out")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Signed out")
        self.assertNotIn(session.access_token, self.backend.sessions)
        home = self.client.get("/", follow_redirects=False)
        self.assertEqual(home.headers["location"], "/auth")


if __name__ == "__main__":
    unittest.main()
