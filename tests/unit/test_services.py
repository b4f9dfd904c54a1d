"""Unit tests for the command services."""

from __future__ import annotations

from pathlib import Path

import pytest

from adapters.modrinth_api import ModrinthApi
from conftest import CDN, FakeModrinth, project_payload
from core.domain.errors import (
    DownloadError,
    FileExistsWriteError,
    NoDependenciesError,
    NoMatchingFileError,
    NoResultsError,
    NoVersionsError,
)
from core.domain.models import ResolvedDependency, VersionFile
from core.services.download import download_file, find_version_file
from core.services.projects import project_dependencies, project_info
from core.services.search import search_mods

HITS = {
    "hits": [
        {"slug": "sodium", "title": "Sodium", "description": "Rendering engine"},
        {"slug": "lithium", "title": "Lithium", "description": "Server optimizations"},
    ],
    "total_hits": 2,
}


def _file(name: str) -> dict[str, str]:
    return {"url": f"{CDN}/data/x/{name}", "filename": name}


class TestSearchMods:
    """Tests for search_mods."""

    def test_returns_hits_in_order(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/search", HITS)

        # Act
        hits = search_mods(api, "  optimization  ", "1.20.1", ["fabric"])

        # Assert
        assert [h.slug for h in hits] == ["sodium", "lithium"]
        params = fake.requests[0].url.params
        assert params["query"] == "optimization"
        assert "categories:fabric" in params["facets"]
        assert "versions:1.20.1" in params["facets"]

    def test_without_categories_sends_no_facets(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/search", HITS)

        # Act
        search_mods(api, "sodium", "1.20.1")

        # Assert
        assert "facets" not in fake.requests[0].url.params

    def test_no_hits_raises_no_results(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/search", {"hits": [], "total_hits": 0})

        # Act & Assert
        with pytest.raises(NoResultsError, match="zzz"):
            search_mods(api, "zzz", "1.20.1")


class TestProjectInfo:
    def test_returns_detail(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/project/sodium", project_payload("sodium", "Sodium"))

        # Act
        detail = project_info(api, "sodium")

        # Assert
        assert (detail.project_type, detail.title) == ("mod", "Sodium")


class TestProjectDependencies:
    """Tests for project_dependencies."""

    def test_resolves_first_version_dependencies(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add(
            "/v2/project/sodium-extra/version",
            [
                {"dependencies": [{"project_id": "P1", "dependency_type": "required"}]},
                {"dependencies": [{"project_id": "P2", "dependency_type": "optional"}]},
            ],
        )
        fake.add("/v2/project/P1", project_payload("foo", "Foo"))

        # Act
        resolved = project_dependencies(api, "sodium-extra", "fabric", "1.20.1")

        # Assert
        assert resolved == [ResolvedDependency(dependency_type="required", title="Foo", slug="foo")]
        assert [r.url.path for r in fake.requests] == ["/v2/project/sodium-extra/version", "/v2/project/P1"]

    def test_keeps_dependency_order(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add(
            "/v2/project/mod/version",
            [
                {
                    "dependencies": [
                        {"project_id": "P2", "dependency_type": "optional"},
                        {"project_id": "P1", "dependency_type": "required"},
                    ]
                }
            ],
        )
        fake.add("/v2/project/P1", project_payload("foo", "Foo"))
        fake.add("/v2/project/P2", project_payload("bar", "Bar"))

        # Act
        resolved = project_dependencies(api, "mod", "fabric", "1.20.1")

        # Assert
        assert [(r.dependency_type, r.slug) for r in resolved] == [("optional", "bar"), ("required", "foo")]

    def test_empty_version_list_raises_no_versions(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/project/sodium/version", [])

        # Act & Assert
        with pytest.raises(NoVersionsError, match="loader 'forge' at game version '1.7.10'"):
            project_dependencies(api, "sodium", "forge", "1.7.10")

    def test_empty_dependency_list_raises_no_dependencies(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add(
            "/v2/project/sodium/version",
            [{"dependencies": []}, {"dependencies": [{"project_id": "P1", "dependency_type": "required"}]}],
        )

        # Act & Assert
        with pytest.raises(NoDependenciesError):
            project_dependencies(api, "sodium", "fabric", "1.20.1")

    def test_skips_dependency_without_project(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add(
            "/v2/project/mod/version",
            [
                {
                    "dependencies": [
                        {"project_id": None, "dependency_type": "embedded", "file_name": "lib.jar"},
                        {"project_id": "P1", "dependency_type": "required"},
                    ]
                }
            ],
        )
        fake.add("/v2/project/P1", project_payload("foo", "Foo"))

        # Act
        resolved = project_dependencies(api, "mod", "fabric", "1.20.1")

        # Assert
        assert [r.slug for r in resolved] == ["foo"]

    def test_only_dependencies_without_project_raise_no_dependencies(
        self, fake: FakeModrinth, api: ModrinthApi
    ) -> None:
        # Arrange
        fake.add(
            "/v2/project/mod/version",
            [{"dependencies": [{"project_id": None, "dependency_type": "embedded", "file_name": "x.jar"}]}],
        )

        # Act & Assert
        with pytest.raises(NoDependenciesError, match="'mod'"):
            project_dependencies(api, "mod", "fabric", "1.20.1")
        assert [r.url.path for r in fake.requests] == ["/v2/project/mod/version"]


class TestFindVersionFile:
    """Tests for find_version_file."""

    def test_first_match_wins(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add(
            "/v2/project/sodium/version",
            [
                {"loaders": ["forge"], "files": [_file("forge.jar")]},
                {"loaders": ["fabric"], "files": [_file("first.jar"), _file("sources.jar")]},
                {"loaders": ["fabric", "quilt"], "files": [_file("second.jar")]},
            ],
        )

        # Act
        version_file = find_version_file(api, "sodium", "fabric", "1.20.1")

        # Assert
        assert version_file.filename == "first.jar"

    def test_no_matching_loader(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/project/sodium/version", [{"loaders": ["forge"], "files": [_file("forge.jar")]}])

        # Act & Assert
        with pytest.raises(NoMatchingFileError, match="'fabric'"):
            find_version_file(api, "sodium", "fabric", "1.20.1")

    def test_matching_version_without_files(self, fake: FakeModrinth, api: ModrinthApi) -> None:
        # Arrange
        fake.add("/v2/project/sodium/version", [{"loaders": ["fabric"], "files": []}])

        # Act & Assert
        with pytest.raises(NoMatchingFileError):
            find_version_file(api, "sodium", "fabric", "1.20.1")


class TestDownloadFile:
    """Tests for download_file."""

    VERSION_FILE = VersionFile(url=f"{CDN}/data/x/sodium.jar", filename="sodium.jar")

    def test_saves_into_target_dir(self, fake: FakeModrinth, api: ModrinthApi, tmp_path: Path) -> None:
        # Arrange
        fake.add("/data/x/sodium.jar", content=b"jar bytes")

        # Act
        result = download_file(api, self.VERSION_FILE, tmp_path)

        # Assert
        assert result.path == tmp_path / "sodium.jar"
        assert result.path.read_bytes() == b"jar bytes"

    def test_refuses_to_overwrite_without_force(
        self, fake: FakeModrinth, api: ModrinthApi, tmp_path: Path
    ) -> None:
        # Arrange
        (tmp_path / "sodium.jar").write_bytes(b"old")

        # Act & Assert
        with pytest.raises(FileExistsWriteError):
            download_file(api, self.VERSION_FILE, tmp_path)
        assert fake.requests == []
        assert (tmp_path / "sodium.jar").read_bytes() == b"old"

    def test_force_overwrites(self, fake: FakeModrinth, api: ModrinthApi, tmp_path: Path) -> None:
        # Arrange
        (tmp_path / "sodium.jar").write_bytes(b"old")
        fake.add("/data/x/sodium.jar", content=b"new")

        # Act
        download_file(api, self.VERSION_FILE, tmp_path, force=True)

        # Assert
        assert (tmp_path / "sodium.jar").read_bytes() == b"new"

    def test_failed_download_leaves_no_file(self, fake: FakeModrinth, api: ModrinthApi, tmp_path: Path) -> None:
        # Arrange
        fake.add("/data/x/sodium.jar", content=b"denied", status=403)

        # Act & Assert
        with pytest.raises(DownloadError):
            download_file(api, self.VERSION_FILE, tmp_path)
        assert not (tmp_path / "sodium.jar").exists()

    def test_filename_directory_part_is_dropped(
        self, fake: FakeModrinth, api: ModrinthApi, tmp_path: Path
    ) -> None:
        # Arrange
        fake.add("/data/x/evil.jar", content=b"x")
        version_file = VersionFile(url=f"{CDN}/data/x/evil.jar", filename="../evil.jar")

        # Act
        result = download_file(api, version_file, tmp_path)

        # Assert
        assert result.path == tmp_path / "evil.jar"
