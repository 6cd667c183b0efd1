import pathlib
import tempfile
import unittest

from readme_sync.config import MAX_POSTS, SyncConfig


class SyncConfigTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dir = pathlib.Path(self.tmp.name)

    def test_defaults(self):
        config = SyncConfig()
        self.assertEqual(config.max_posts, MAX_POSTS)
        self.assertEqual(
            config.listing_url,
            "https://api.github.com/repos/alicelond/alicelond.github.io/contents/_posts",
        )
        self.assertEqual(config.site_base_url, "https://signaltosoftware.com")

    def test_missing_file_means_defaults(self):
        self.assertEqual(SyncConfig.from_yaml(self.dir / "nope.yml"), SyncConfig())

    def test_yaml_overrides(self):
        path = self.dir / "readme-sync.yml"
        path.write_text(
            "blog_repo: someone/blog\nmax_posts: 3\nsite_base_url: https://blog.example/\n",
            encoding="utf-8",
        )
        config = SyncConfig.from_yaml(path)

        self.assertEqual(config.max_posts, 3)
        self.assertEqual(config.site_base_url, "https://blog.example")
        self.assertTrue(config.listing_url.startswith("https://api.github.com/repos/someone/blog/"))

    def test_empty_yaml(self):
        path = self.dir / "empty.yml"
        path.write_text("", encoding="utf-8")
        self.assertEqual(SyncConfig.from_yaml(path), SyncConfig())

    def test_unknown_key(self):
        path = self.dir / "bad.yml"
        path.write_text("max_post: 3\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            SyncConfig.from_yaml(path)

    def test_not_a_mapping(self):
        path = self.dir / "list.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            SyncConfig.from_yaml(path)

    def test_bad_max_posts(self):
        for value in (0, -1, "5", True):
            with self.assertRaises(ValueError):
                SyncConfig(max_posts=value)

    def test_with_readme(self):
        config = SyncConfig()
        self.assertIs(config.with_readme(None), config)
        self.assertEqual(config.with_readme("docs/README.md").readme_file, "docs/README.md")


if __name__ == "__main__":
    unittest.main()
