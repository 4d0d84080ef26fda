import re
import unittest

from fastapi import HTTPException

from metaverse_sns.core.image_storage import ImageStorage, ImageUpload
from metaverse_sns.modules.profiles.schemas import ProfileForm
from metaverse_sns.modules.profiles.service import ProfileService
from metaverse_sns.tests.fakes import PUBLIC_URL_BASE, AppTestCase, FakeBackend, FakeSupabase


def png(name="photo.png"):
    return ImageUpload(filename=name, content=b"\x89PNG", content_type="image/png")


class ImageStorageTests(unittest.TestCase):
    def test_build_path_keeps_extension(self):
        path = ImageStorage.build_path("user-1", "me.final.jpeg")
        self.assertRegex(path, r"^user-1/[0-9a-f-]{36}\.jpeg$")

    def test_path_from_url_takes_last_two_segments(self):
        url = f"{PUBLIC_URL_BASE}/avatar-images/user-1/abc.png"
        self.assertEqual(ImageStorage.path_from_url(url), "user-1/abc.png")

    def test_delete_image_outside_owner_folder_is_skipped(self):
        backend = FakeBackend()
        storage = ImageStorage(FakeSupabase(backend))
        self.assertFalse(storage.delete_image("user-1", f"{PUBLIC_URL_BASE}/avatar-images/user-2/abc.png"))
        self.assertTrue(storage.delete_image("user-1", f"{PUBLIC_URL_BASE}/avatar-images/user-1/abc.png"))
        self.assertEqual(backend.removed, [("avatar-images", "user-1/abc.png")])


class ProfileServiceTests(unittest.TestCase):
    def setUp(self):
        self.backend = FakeBackend()
        self.user, _ = self.backend.add_user("aki@mail.com", username="aki")
        self.service = ProfileService(FakeSupabase(self.backend))

    def profile_row(self):
        return next(r for r in self.backend.tables["profiles"] if r["id"] == self.user.id)

    def test_load_profile_form_blanks_missing_fields(self):
        form = self.service.load_profile_form(self.user.id)
        self.assertEqual(form, ProfileForm(username="aki", bio="", avatar_url=""))

    def test_load_missing_profile_is_generic_failure(self):
        with self.assertRaises(HTTPException) as ctx:
            self.service.load_profile_form("someone-else")
        self.assertEqual(ctx.exception.detail, "Failed to load profile")

    def test_save_requires_username(self):
        with self.assertRaises(HTTPException) as ctx:
            self.service.save_profile(self.user.id, ProfileForm(username="  ", bio="hi"))
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.detail, "Username is required")
        self.assertEqual(self.backend.queries, [])

    def test_save_upserts_with_timestamp(self):
        self.service.save_profile(self.user.id, ProfileForm(username="aki2", bio="hello"))
        row = self.profile_row()
        self.assertEqual(row["username"], "aki2")
        self.assertEqual(row["bio"], "hello")
        self.assertIsNone(row["avatar_url"])
        self.assertIsNotNone(row["updated_at"])

    def test_upload_requires_file(self):
        with self.assertRaises(HTTPException) as ctx:
            self.service.upload_profile_image(self.user.id, None)
        self.assertEqual(ctx.exception.detail, "Please select an image")

    def test_upload_replaces_image_and_removes_previous(self):
        first = self.service.upload_profile_image(self.user.id, png())
        second = self.service.upload_profile_image(self.user.id, png("new.png"))

        self.assertRegex(first, re.escape(f"{PUBLIC_URL_BASE}/avatar-images/{self.user.id}/") + r".+\.png$")
        self.assertEqual(self.profile_row()["avatar_url"], second)
        self.assertEqual(self.backend.removed, [("avatar-images", ImageStorage.path_from_url(first))])
        self.assertEqual(list(self.backend.objects), [("avatar-images", ImageStorage.path_from_url(second))])

    def test_upload_survives_failed_removal_of_previous_image(self):
        self.service.upload_profile_image(self.user.id, png())
        self.backend.failing.add("storage.remove")
        second = self.service.upload_profile_image(self.user.id, png())
        self.assertEqual(self.profile_row()["avatar_url"], second)
        self.assertEqual(len(self.backend.removed), 1)

    def test_upload_failure_is_generic(self):
        self.backend.failing.add("storage.upload")
        with self.assertRaises(HTTPException) as ctx:
            self.service.upload_profile_image(self.user.id, png())
        self.assertEqual(ctx.exception.detail, "Failed to update profile image")
        self.assertIsNone(self.profile_row()["avatar_url"])


class ProfileRoutesTests(AppTestCase):
    def setUp(self):
        super().setUp()
        self.user, session = self.backend.add_user("aki@mail.com", username="aki")
        self.sign_in_as(session)

    def test_update_profile(self):
        response = self.client.put("/api/v1/profile", json={"username": "aki", "bio": "VR fan"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Profile updated")
        self.assertEqual(self.client.get("/api/v1/profile").json()["bio"], "VR fan")

    def test_upload_profile_image(self):
        response = self.client.post(
            "/api/v1/profile/image",
            files={"file": ("me.png", b"\x89PNG", "image/png")},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Profile image updated")
        self.assertTrue(response.json()["avatar_url"].endswith(".png"))

    def test_upload_rejects_non_images(self):
        response = self.client.post(
            "/api/v1/profile/image",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.backend.objects, {})


if __name__ == "__main__":
    unittest.main()
