"""Tests for the file system and package loaders and PropertiesReader."""

from __future__ import annotations

import locale as locale_module
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from propsource.diagnostics import PropSourceError, ResourceResolutionError
from propsource.localization import (
    PackageResourceLoader,
    PathResourceLoader,
    PatternResourceLoader,
    PropertiesReader,
)
from propsource.localization.loading import PathResource
from tests.helpers.loaders import StubLoader


def write(path: Path, data: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_bytes(data)
    return path


class TestPathResourceLoader:
    """Single-path resolution below a root directory."""

    def test_resolves_existing_file(self, tmp_path: Path) -> None:
        file = write(tmp_path / "app_en.properties", "a=1")
        (resource,) = PathResourceLoader(tmp_path).resolve("app_en.properties")
        assert resource.exists()
        assert resource.filename == "app_en.properties"
        assert resource.display_name == str(file.resolve())
        assert resource.last_modified() == file.stat().st_mtime
        with resource.open() as stream:
            assert stream.read() == b"a=1"

    def test_missing_file_still_returns_handle(self, tmp_path: Path) -> None:
        (resource,) = PathResourceLoader(tmp_path).resolve("nothing.properties")
        assert not resource.exists()

    def test_subdirectory_location(self, tmp_path: Path) -> None:
        write(tmp_path / "i18n" / "app.properties", "a=1")
        (resource,) = PathResourceLoader(tmp_path).resolve("i18n/app.properties")
        assert resource.exists()

    @pytest.mark.parametrize(
        "location",
        ["../secret.properties", "i18n/../../x.properties", "/etc/passwd", "", " app.properties"],
    )
    def test_unsafe_locations_rejected(self, tmp_path: Path, location: str) -> None:
        with pytest.raises(ValueError):
            PathResourceLoader(tmp_path).resolve(location)

    def test_symlink_escape_rejected(self, tmp_path: Path) -> None:
        outside = write(tmp_path / "outside" / "secret.properties", "a=1")
        root = tmp_path / "root"
        root.mkdir()
        (root / "link.properties").symlink_to(outside)
        with pytest.raises(ValueError, match="outside root"):
            PathResourceLoader(root).resolve("link.properties")


class TestPatternResourceLoader:
    """Multi-root wildcard resolution."""

    def test_roots_searched_in_order(self, tmp_path: Path) -> None:
        write(tmp_path / "core" / "app.properties", "a=core")
        write(tmp_path / "plugin" / "app.properties", "a=plugin")
        loader = PatternResourceLoader(tmp_path / "plugin", tmp_path / "core")
        names = [Path(r.display_name).parent.name for r in loader.resolve("app.properties")]
        assert names == ["plugin", "core"]

    def test_wildcards_sorted_within_root(self, tmp_path: Path) -> None:
        for module in ("beta", "alpha", "gamma"):
            write(tmp_path / module / "app.properties", f"m={module}")
        write(tmp_path / "alpha" / "other.properties", "x=1")
        resources = PatternResourceLoader(tmp_path).resolve("*/app.properties")
        assert [Path(r.display_name).parent.name for r in resources] == [
            "alpha",
            "beta",
            "gamma",
        ]

    def test_recursive_wildcard(self, tmp_path: Path) -> None:
        write(tmp_path / "a" / "b" / "app.properties", "x=1")
        write(tmp_path / "app.properties", "x=2")
        resources = PatternResourceLoader(tmp_path).resolve("**/app.properties")
        assert len(resources) == 2

    def test_directories_and_missing_files_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "dir.properties").mkdir()
        loader = PatternResourceLoader(tmp_path)
        assert loader.resolve("dir.properties") == []
        assert loader.resolve("missing.properties") == []

    def test_absolute_pattern_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Absolute"):
            PatternResourceLoader(tmp_path).resolve("/tmp/*.properties")

    def test_requires_root(self) -> None:
        with pytest.raises(ValueError, match="at least one root"):
            PatternResourceLoader()

    def test_repr_lists_roots(self, tmp_path: Path) -> None:
        loader = PatternResourceLoader(tmp_path)
        assert loader.root_dirs == (tmp_path.resolve(),)
        assert repr(loader) == f"PatternResourceLoader({str(tmp_path.resolve())!r})"


class TestPackageResourceLoader:
    """Resolution inside an importable package."""

    @pytest.fixture
    def package(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
        root = tmp_path / "sitepkgs" / "bundled_i18n"
        write(root / "__init__.py", "")
        write(root / "messages_en.properties", "hello=Hello")
        write(root / "nested" / "messages.properties", "hello=Nested")
        monkeypatch.syspath_prepend(str(tmp_path / "sitepkgs"))
        yield "bundled_i18n"
        sys.modules.pop("bundled_i18n", None)

    def test_resolves_packaged_file(self, package: str) -> None:
        (resource,) = PackageResourceLoader(package).resolve("messages_en.properties")
        assert resource.exists()
        assert resource.display_name == "bundled_i18n:messages_en.properties"
        assert resource.filename == "messages_en.properties"
        assert resource.last_modified() is None
        with resource.open() as stream:
            assert stream.read() == b"hello=Hello"

    def test_nested_and_missing(self, package: str) -> None:
        loader = PackageResourceLoader(package)
        assert loader.resolve("nested/messages.properties")[0].exists()
        assert not loader.resolve("messages_fr.properties")[0].exists()

    def test_traversal_rejected(self, package: str) -> None:
        with pytest.raises(ValueError):
            PackageResourceLoader(package).resolve("../escape.properties")

    def test_unknown_package(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            PackageResourceLoader("propsource_no_such_package")


class TestPropertiesReader:
    """Suffix resolution and encoding policy."""

    def test_encoding_chain(self, stub_loader: StubLoader) -> None:
        reader = PropertiesReader(stub_loader, "utf-8", {"app_ja": "shift_jis"})
        assert reader.encoding_for("app_ja") == "shift_jis"
        assert reader.encoding_for("app_en") == "utf-8"
        assert reader.file_encodings == {"app_ja": "shift_jis"}

    def test_platform_default_encoding(self, stub_loader: StubLoader) -> None:
        reader = PropertiesReader(stub_loader)
        assert reader.encoding_for("app") == locale_module.getpreferredencoding(False)

    def test_file_encoding_override_used(self, tmp_path: Path) -> None:
        write(tmp_path / "app_fr.properties", "drink=café".encode("latin-1"))
        write(tmp_path / "app.properties", "drink=café")
        reader = PropertiesReader(PathResourceLoader(tmp_path), "utf-8", {"app_fr": "latin-1"})
        for candidate in ("app_fr", "app"):
            (resource,) = reader.resolve(candidate)
            assert reader.read(resource, candidate) == {"drink": "café"}

    def test_xml_ignores_configured_encoding(self, tmp_path: Path) -> None:
        xml = (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            '<properties><entry key="drink">café</entry></properties>'
        )
        write(tmp_path / "app.xml", xml)
        reader = PropertiesReader(PathResourceLoader(tmp_path), "ascii", {"app": "ascii"})
        (resource,) = reader.resolve("app")
        assert isinstance(resource, PathResource)
        assert reader.read(resource, "app") == {"drink": "café"}

    def test_properties_preferred_over_xml(self, tmp_path: Path) -> None:
        write(tmp_path / "app.properties", "a=1")
        write(tmp_path / "app.xml", '<properties><entry key="a">2</entry></properties>')
        (resource,) = PropertiesReader(PathResourceLoader(tmp_path)).resolve("app")
        assert resource.filename == "app.properties"

    def test_nothing_resolved(self, tmp_path: Path) -> None:
        assert PropertiesReader(PathResourceLoader(tmp_path)).resolve("app") == ()

    def test_oversized_resource(
        self, stub_loader: StubLoader, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr("propsource.localization.reading.MAX_RESOURCE_SIZE", 8)
        stub_loader.add("app.properties", "key=0123456789")
        reader = PropertiesReader(stub_loader, "utf-8")
        (resource,) = reader.resolve("app")
        with pytest.raises(PropSourceError, match="byte limit"):
            reader.read(resource, "app")

    def test_resolution_errors_propagate(self, stub_loader: StubLoader) -> None:
        stub_loader.fail("app.properties")
        with pytest.raises(ResourceResolutionError):
            PropertiesReader(stub_loader).resolve("app")
