import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from sitecms.app import create_app
from sitecms.config import Settings
from sitecms.kv import InMemoryKeyValueClient, KeyValueStore
from sitecms.uploads import (
    InMemoryUploadStorage,
    LocalUploadStorage,
    UploadRejected,
    generate_filename,
    validate_image,
)

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class ValidateImageTests(unittest.TestCase):
    def test_accepts_known_image_types(self):
        self.assertEqual(validate_image("photo.PNG", "image/png", 10), "png")
        self.assertEqual(validate_image("a.jpeg", "image/jpeg", 10), "jpeg")
        self.assertEqual(validate_image("a.webp", "image/webp", 10), "webp")

    def test_rejects_empty_and_oversized(self):
        with self.assertRaisesRegex(UploadRejected, "empty"):
            validate_image("a.png", "image/png", 0)
        with self.assertRaisesRegex(UploadRejected, "too large"):
            validate_image("a.png", "image/png", 5 * 1024 * 1024 + 1)

    def test_rejects_bad_extension_or_type(self):
        with self.assertRaises(UploadRejected):
            validate_image("script.js", "image/png", 10)
        with self.assertRaises(UploadRejected):
            validate_image("noext", "image/png", 10)
        with self.assertRaises(UploadRejected):
            validate_image("a.png", "text/html", 10)

    def test_generated_names_are_unique(self):
        first = generate_filename("png")
        self.assertTrue(first.endswith(".png"))
        self.assertNotEqual(first, generate_filename("png"))


class UploadEndpointTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.upload_dir = Path(self.tmp.name) / "uploads"
        settings = Settings(
            _env_file=None,
            use_in_memory_backends=True,
            redis_url=None,
            admin_api_token=None,
            upload_dir=str(self.upload_dir),
            max_upload_bytes=1024,
        )
        storage = LocalUploadStorage(directory=str(self.upload_dir))
        self.client = TestClient(
            create_app(
                settings,
                store=KeyValueStore(local=InMemoryKeyValueClient()),
                uploads=storage,
            )
        )

    def tearDown(self):
        self.tmp.cleanup()

    def _stored_files(self):
        if not self.upload_dir.exists():
            return []
        return list(self.upload_dir.iterdir())

    def test_valid_image_is_saved_and_served(self):
        response = self.client.post(
            "/api/admin/upload",
            files={"file": ("logo.png", PNG_BYTES, "image/png")},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIs(body["success"], True)
        self.assertRegex(body["imageUrl"], r"^/uploads/[0-9a-f]{32}\.png$")

        files = self._stored_files()
        self.assertEqual(len(files), 1)
        self.assertEqual(files[0].read_bytes(), PNG_BYTES)

        served = self.client.get(body["imageUrl"])
        self.assertEqual(served.status_code, 200)
        self.assertEqual(served.content, PNG_BYTES)

    def test_oversized_file_is_rejected(self):
        response = self.client.post(
            "/api/admin/upload",
            files={"file": ("big.png", b"x" * 2048, "image/png")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("too large", response.json()["error"])
        self.assertEqual(self._stored_files(), [])

    def test_non_image_is_rejected(self):
        response = self.client.post(
            "/api/admin/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._stored_files(), [])

        response = self.client.post(
            "/api/admin/upload",
            files={"file": ("fake.png", b"hello", "text/plain")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self._stored_files(), [])

    def test_missing_file(self):
        response = self.client.post("/api/admin/upload", data={"other": "x"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "No file uploaded"})


class GuardedUploadTests(unittest.TestCase):
    def test_upload_requires_token(self):
        settings = Settings(
            _env_file=None,
            use_in_memory_backends=True,
            redis_url=None,
            admin_api_token="upload-token",
        )
        storage = InMemoryUploadStorage()
        client = TestClient(
            create_app(
                settings,
                store=KeyValueStore(local=InMemoryKeyValueClient()),
                uploads=storage,
            )
        )
        files = {"file": ("logo.png", PNG_BYTES, "image/png")}

        self.assertEqual(client.post("/api/admin/upload", files=files).status_code, 401)
        self.assertEqual(storage.stored_objects, {})

        response = client.post(
            "/api/admin/upload",
            files=files,
            headers={"Authorization": "Bearer upload-token"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(storage.stored_objects), 1)


if __name__ == "__main__":
    unittest.main()
