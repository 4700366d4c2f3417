#!/usr/bin/env python3
"""Tests for configuration lookup and alias table building."""

import json
import os

import pytest

from importnorm.jsonc import ParseErrorCode
from importnorm.tsconfig import (
    ConfigNotFound,
    MalformedConfig,
    ProjectConfig,
    common_path_segment_count,
    get_base_url,
    get_paths,
    import_prefix_to_alias,
    locate_config,
)


def write_config(directory, data, name="tsconfig.json"):
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(data if isinstance(data, str) else json.dumps(data, indent=2))
    return path


@pytest.fixture
def monorepo(tmp_path):
    """Create a monorepo with a root config and a package config."""
    root = tmp_path.resolve()
    write_config(root, {"compilerOptions": {"baseUrl": "."}})
    write_config(root / "packages" / "web", {"compilerOptions": {"baseUrl": "src"}})
    (root / "packages" / "web" / "src").mkdir()
    return root


def web_file(root):
    return str(root / "packages" / "web" / "src" / "main.ts")


class TestCommonPathSegmentCount:
    """Tests for the root matching score."""

    def test_root_contains_file(self):
        """Test a containing root scores its own segment count."""
        assert common_path_segment_count("/a/b", "/a/b/c/d.ts") == 3

    def test_parent_steps_subtract(self):
        """Test each '..' step needed costs one segment."""
        assert common_path_segment_count("/a/b/x", "/a/b/c/d.ts") == 3
        assert common_path_segment_count("/a/b/x/y", "/a/b/c/d.ts") == 3

    def test_deeper_root_scores_higher(self):
        """Test a more specific containing root wins."""
        assert common_path_segment_count("/a/b/c", "/a/b/c/d.ts") > common_path_segment_count(
            "/a/b", "/a/b/c/d.ts"
        )


class TestLocateConfig:
    """Tests for locate_config."""

    def test_most_specific_root(self, monorepo):
        """Test the deeper root wins regardless of order."""
        roots = [str(monorepo), str(monorepo / "packages" / "web")]
        for ordering in (roots, list(reversed(roots))):
            found = locate_config(ordering, web_file(monorepo))
            assert isinstance(found, ProjectConfig)
            assert found.root == str(monorepo / "packages" / "web")
            assert found.data == {"compilerOptions": {"baseUrl": "src"}}

    def test_tie_keeps_first(self, tmp_path):
        """Test equally scored roots keep the earliest candidate."""
        root = tmp_path.resolve()
        write_config(root / "b", {"compilerOptions": {"baseUrl": "b"}})
        write_config(root / "c", {"compilerOptions": {"baseUrl": "c"}})
        (root / "a").mkdir()

        found = locate_config([str(root / "b"), str(root / "c")], str(root / "a" / "f.ts"))
        assert found.root == str(root / "b")

    def test_jsconfig_wins_over_tsconfig(self, tmp_path):
        """Test jsconfig.json replaces tsconfig.json in the same root."""
        root = tmp_path.resolve()
        write_config(root, {"compilerOptions": {"baseUrl": "ts"}})
        write_config(root, {"compilerOptions": {"baseUrl": "js"}}, name="jsconfig.json")

        found = locate_config([str(root)], str(root / "index.js"))
        assert found.path == str(root / "jsconfig.json")
        assert found.data["compilerOptions"]["baseUrl"] == "js"

    def test_jsconfig_alone(self, tmp_path):
        """Test a jsconfig.json is used when there is no tsconfig.json."""
        root = tmp_path.resolve()
        write_config(root, {"compilerOptions": {"baseUrl": "."}}, name="jsconfig.json")
        assert isinstance(locate_config([str(root)], str(root / "a.js")), ProjectConfig)

    def test_root_without_config_is_skipped(self, monorepo):
        """Test a higher scoring root without a config does not win."""
        (monorepo / "packages" / "web" / "src" / "deep").mkdir()
        roots = [str(monorepo), str(monorepo / "packages" / "web" / "src" / "deep")]
        found = locate_config(roots, web_file(monorepo))
        assert found.root == str(monorepo)

    def test_not_found(self, tmp_path):
        """Test no config anywhere."""
        assert locate_config([str(tmp_path)], str(tmp_path / "a.ts")) == ConfigNotFound()

    def test_no_roots(self, tmp_path):
        """Test an empty candidate list."""
        assert isinstance(locate_config([], str(tmp_path / "a.ts")), ConfigNotFound)

    def test_malformed_short_circuits(self, monorepo):
        """Test a parse failure stops the search even if a better root follows."""
        broken = write_config(monorepo, '{ "compilerOptions": { "baseUrl": "." ,, }')
        roots = [str(monorepo), str(monorepo / "packages" / "web")]

        found = locate_config(roots, web_file(monorepo))
        assert isinstance(found, MalformedConfig)
        assert found.path == str(broken)
        assert found.errors
        assert found.errors[0].code == ParseErrorCode.PROPERTY_NAME_EXPECTED

    def test_malformed_in_lower_scoring_root_is_not_read(self, monorepo):
        """Test roots that cannot beat the best match are never parsed."""
        write_config(monorepo, "{ not json")
        roots = [str(monorepo / "packages" / "web"), str(monorepo)]

        found = locate_config(roots, web_file(monorepo))
        assert isinstance(found, ProjectConfig)

    def test_comments_and_trailing_commas(self, tmp_path):
        """Test tolerant parsing of real-world tsconfig files."""
        root = tmp_path.resolve()
        write_config(
            root,
            """{
              // Generated by tsc --init
              "compilerOptions": {
                "baseUrl": "./src", /* relative to this file */
                "paths": { "@/*": ["*"], },
              },
            }""",
        )
        found = locate_config([str(root)], str(root / "src" / "a.ts"))
        assert get_base_url(found) == str(root / "src")

    def test_describe(self, tmp_path):
        """Test the one-line diagnostic names the file and the error."""
        path = write_config(tmp_path, '{"a": }')
        found = locate_config([str(tmp_path)], str(tmp_path / "a.ts"))
        message = found.describe()
        assert str(path) in message
        assert "ValueExpected at offset 6" in message


class TestBaseUrl:
    """Tests for get_base_url."""

    def test_joined_with_config_dir(self):
        """Test baseUrl is resolved against the config directory."""
        config = ProjectConfig(root="/proj", data={"compilerOptions": {"baseUrl": "./src"}})
        assert get_base_url(config) == os.path.normpath("/proj/src")

    def test_dot(self):
        """Test '.' is the config directory itself."""
        config = ProjectConfig(root="/proj", data={"compilerOptions": {"baseUrl": "."}})
        assert get_base_url(config) == os.path.normpath("/proj")

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"compilerOptions": {}},
            {"compilerOptions": {"baseUrl": 1}},
            {"compilerOptions": "src"},
            ["not", "an", "object"],
        ],
    )
    def test_missing(self, data):
        """Test configurations without a usable baseUrl."""
        assert get_base_url(ProjectConfig(root="/proj", data=data)) is None


class TestPaths:
    """Tests for get_paths and import_prefix_to_alias."""

    def test_filters_entries(self):
        """Test non-list values and non-string items are dropped."""
        config = ProjectConfig(
            root="/proj",
            data={
                "compilerOptions": {
                    "paths": {
                        "@/*": ["src/*", 1, None],
                        "bad": "src/*",
                        "~/*": [],
                        "#cfg": [{"path": "x"}, "config/index.ts"],
                    }
                }
            },
        )
        assert get_paths(config) == {"@/*": ["src/*"], "~/*": [], "#cfg": ["config/index.ts"]}

    def test_paths_not_an_object(self):
        """Test a non-object paths value gives no aliases."""
        config = ProjectConfig(root="/proj", data={"compilerOptions": {"paths": ["src/*"]}})
        assert get_paths(config) == {}

    def test_inversion_keeps_declaration_order(self):
        """Test each target becomes one entry, in declaration order."""
        paths = {"@components/*": ["src/components/*"], "@/*": ["src/*", "shared/*"]}
        assert list(import_prefix_to_alias(paths).items()) == [
            ("src/components/*", "@components/*"),
            ("src/*", "@/*"),
            ("shared/*", "@/*"),
        ]

    def test_duplicate_target_last_alias_wins(self):
        """Test a target shared by two aliases keeps its first position."""
        paths = {"@/*": ["src/*"], "~/*": ["shared/*", "src/*"]}
        assert list(import_prefix_to_alias(paths).items()) == [
            ("src/*", "~/*"),
            ("shared/*", "~/*"),
        ]
