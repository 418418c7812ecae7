"""Tests for the command-line interface."""

import io
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from lockerlink.cli import main
from lockerlink.media import UploadResult


class TestCli(unittest.TestCase):
    def setUp(self):
        self.db_fd, self.db_path = tempfile.mkstemp(suffix=".db")
        patcher = mock.patch.dict(os.environ, {"LOCKERLINK_DB_PATH": self.db_path})
        patcher.start()
        self.addCleanup(patcher.stop)
        # Vendor credentials from the surrounding shell must not leak in
        for name in list(os.environ):
            if name.startswith(("EMAILJS_", "CLOUDINARY_")):
                del os.environ[name]

    def tearDown(self):
        os.close(self.db_fd)
        os.unlink(self.db_path)

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return out.getvalue()

    def test_format(self):
        self.assertEqual(self.run_cli("format", "weight", "250 lbs").strip(), "250 lbs (113 kg)")
        self.assertEqual(self.run_cli("format", "height", "72").strip(), '72" (183 cm)')

    def test_profile_roundtrip(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai", "--height", "6'2\"")
        output = self.run_cli("profile", "show", "kai")
        self.assertIn("Kai", output)
        self.assertIn("188 cm", output)

    def test_duplicate_profile(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        with self.assertRaises(SystemExit):
            self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")

    def test_missing_profile_exits(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_cli("profile", "show", "nobody")
        self.assertEqual(ctx.exception.code, 1)

    def test_chat_flow(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        self.run_cli("profile", "create", "--uid", "ana", "--name", "Ana")
        self.assertIn("Chat #1 with Ana", self.run_cli("chat", "start", "kai", "ana"))
        self.run_cli("chat", "send", "1", "--as", "kai", "Practice at six?")
        self.assertIn("Practice at six?", self.run_cli("chat", "show", "1"))
        self.assertIn("Ana", self.run_cli("chat", "list", "kai"))

    def test_highlight_awards_points(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        self.assertIn("+10 points", self.run_cli("highlight", "add", "kai", "Block", "--url", "https://v/1.mp4"))
        self.assertIn("Kai", self.run_cli("points", "leaderboard"))

    def test_welcome_email_needs_config(self):
        with self.assertRaises(SystemExit):
            self.run_cli("email", "welcome", "kai@example.com")

    def test_profile_search_and_filter(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai", "--city", "Austin",
                     "--position", "Setter", "--birth-month", "March", "--birth-year", "2008")
        self.run_cli("profile", "create", "--uid", "ana", "--name", "Ana", "--city", "Dallas")
        self.assertIn("kai", self.run_cli("profile", "search", "austin"))
        self.assertIn("No users match", self.run_cli("profile", "search", "zzz"))
        output = self.run_cli("profile", "filter", "--city", "Austin", "--min-age", "10")
        self.assertIn("Athletes (1)", output)
        self.assertIn("Kai", output)

    def test_profile_delete(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        self.assertIn("deleted", self.run_cli("profile", "delete", "kai"))
        with self.assertRaises(SystemExit):
            self.run_cli("profile", "delete", "kai")

    def test_highlight_engagement(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        self.run_cli("profile", "create", "--uid", "ana", "--name", "Ana")
        self.run_cli("highlight", "add", "kai", "Block", "--url", "https://v/1.mp4")

        self.assertIn("Upvoted (1 upvotes)", self.run_cli("highlight", "upvote", "ana", "1"))
        self.assertIn("#1", self.run_cli("highlight", "list"))
        self.assertIn("+5 points", self.run_cli("highlight", "comment", "ana", "1", "Huge block, great timing"))
        self.assertIn("Huge block", self.run_cli("highlight", "comments", "1"))
        self.assertIn("Comment 1 deleted", self.run_cli("highlight", "uncomment", "1", "--as", "ana"))
        self.assertIn("Upvote removed", self.run_cli("highlight", "upvote", "ana", "1"))

        with self.assertRaises(SystemExit):
            self.run_cli("highlight", "delete", "1", "--as", "ana")
        self.assertIn("deleted", self.run_cli("highlight", "delete", "1", "--as", "kai"))
        self.assertIn("unranked", self.run_cli("points", "show", "kai"))

    def test_post_with_uploaded_image(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        uploaded = UploadResult(secure_url="https://res.cloudinary.com/demo/a.jpg", public_id="a",
                                resource_type="image")
        cloudinary = {"CLOUDINARY_CLOUD_NAME": "demo", "CLOUDINARY_UPLOAD_PRESET": "unsigned"}
        with mock.patch.dict(os.environ, cloudinary), \
                mock.patch("lockerlink.cli.upload_image", return_value=uploaded) as upload:
            self.assertIn("Posted", self.run_cli("post", "add", "kai", "Game day", "--media", "a.jpg"))
        upload.assert_called_once()

    def test_upload_without_config_exits(self):
        self.run_cli("profile", "create", "--uid", "kai", "--name", "Kai")
        with self.assertRaises(SystemExit):
            self.run_cli("highlight", "add", "kai", "Block", "--file", "clip.mp4")


if __name__ == "__main__":
    unittest.main()
