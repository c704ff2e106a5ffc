"""
Tests for the local file manager.
"""

import asyncio
import os
import tempfile
from pathlib import Path

import pytest

from runtime_files.filesystem import (
    DEFAULT_CONTENT_TYPE,
    File,
    FileCategory,
    FileManager,
    FileManagerConfigurationError,
    FileNotFound,
    LocalFileManager,
    MemoryFileManager,
    PathOutsideRootError,
)
from runtime_files.storage import LocalStorageBackend, MimeTypesResolver


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def manager(temp_dir):
    """Create a LocalFileManager rooted at the temporary directory."""
    return LocalFileManager(temp_dir)


@pytest.fixture
def tree(temp_dir):
    """Create a small application tree."""
    files = {
        "plain.js": "export default 1;",
        "x.segment.local.js": "// node",
        "x.segment.repository.js": "// repository",
        "lib/util.js": "export const util = 1;",
        "lib/util.remote.js": "// remote",
        "config/app.segment.json": "{}",
        "assets/logo.png": "png",
        "assets/logo.local.png": "local png",
        "assets/site.css": "body {}",
        ".hidden/secret.js": "// hidden",
    }
    for name, content in files.items():
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return temp_dir


def _relative(manager: FileManager, locations: list[str]) -> set[str]:
    return {Path(manager.get_relative_location(location)).as_posix() for location in locations}


class TestLocations:
    """Test location resolution through the file manager."""

    def test_is_file_manager(self, manager):
        """Test that the local manager implements the capability."""
        assert isinstance(manager, FileManager)

    def test_root_location(self, temp_dir, manager):
        """Test the canonical root location."""
        assert manager.get_root_location() == str(temp_dir)

    def test_absolute_and_relative(self, temp_dir, manager):
        """Test resolving and reversing a filename."""
        location = manager.get_absolute_location("lib/../lib/util.js")
        assert location == str(temp_dir / "lib" / "util.js")
        assert manager.get_relative_location(location) == os.path.join("lib", "util.js")

    def test_absolute_filename_passes_through(self, manager):
        """Test that absolute filenames ignore the root."""
        assert manager.get_absolute_location("/var/../opt/x.js") == os.path.realpath("/opt/x.js")

    def test_contained_location(self, manager):
        """Test the opt-in containment check."""
        with pytest.raises(PathOutsideRootError):
            manager.get_contained_location("../outside.js")

    def test_empty_extension_rejected(self, temp_dir):
        """Test that empty extensions are rejected."""
        with pytest.raises(FileManagerConfigurationError):
            LocalFileManager(temp_dir, module_extension="")


class TestContent:
    """Test reading and writing content."""

    @pytest.mark.asyncio
    async def test_get_type(self, manager):
        """Test content type lookup by extension."""
        assert await manager.get_type("assets/logo.png") == "image/png"
        assert await manager.get_type("styles/site.css") == "text/css"
        assert await manager.get_type("index.js") in ("text/javascript", "application/javascript")

    @pytest.mark.asyncio
    async def test_get_type_fallback(self, manager):
        """Test the generic fallback for unknown extensions."""
        assert await manager.get_type("data.unknownext") == DEFAULT_CONTENT_TYPE
        assert await manager.get_type("Makefile") == DEFAULT_CONTENT_TYPE

    @pytest.mark.asyncio
    async def test_get_type_extra_mapping(self, temp_dir):
        """Test that configured content types take precedence."""
        manager = LocalFileManager(
            temp_dir, content_types=MimeTypesResolver({".seg": "application/x-segment"})
        )
        assert await manager.get_type("a.seg") == "application/x-segment"

    @pytest.mark.asyncio
    async def test_get_content(self, tree, manager):
        """Test reading raw bytes."""
        assert await manager.get_content("lib/util.js") == b"export const util = 1;"

    @pytest.mark.asyncio
    async def test_get_content_absolute_filename(self, tree, manager):
        """Test reading by an already resolved location."""
        location = manager.get_absolute_location("plain.js")
        assert await manager.get_content(location) == b"export default 1;"

    @pytest.mark.asyncio
    async def test_get_content_missing_file(self, temp_dir, manager):
        """Test that a missing file raises FileNotFound without the location."""
        with pytest.raises(FileNotFound) as exc_info:
            await manager.get_content("missing/file.txt")

        message = str(exc_info.value)
        assert "missing/file.txt" in message
        assert str(temp_dir) not in message
        assert manager.get_absolute_location("missing/file.txt") not in message
        assert exc_info.value.filename == "missing/file.txt"

    @pytest.mark.asyncio
    async def test_load(self, tree, manager):
        """Test loading a file record."""
        file = await manager.load("assets/site.css")

        assert isinstance(file, File)
        assert file.filename == "assets/site.css"
        assert file.type == "text/css"
        assert file.content == b"body {}"
        assert file.size == 7
        assert file.text() == "body {}"

    @pytest.mark.asyncio
    async def test_load_missing_file(self, manager):
        """Test that loading a missing file fails."""
        with pytest.raises(FileNotFound):
            await manager.load("nothing.css")

    @pytest.mark.asyncio
    async def test_store_creates_directories(self, temp_dir, manager):
        """Test that storing creates intermediate directories."""
        data = b"\x00\x01binary\xff"
        await manager.store("a/b/c.txt", data)

        assert (temp_dir / "a").is_dir()
        assert (temp_dir / "a" / "b").is_dir()
        assert await manager.get_content("a/b/c.txt") == data

    @pytest.mark.asyncio
    async def test_store_overwrites(self, manager):
        """Test that storing replaces existing content."""
        await manager.store("note.txt", b"first version")
        await manager.store("note.txt", "second")

        assert await manager.get_content("note.txt") == b"second"

    @pytest.mark.asyncio
    async def test_store_text_is_utf8(self, manager):
        """Test that text content is encoded as UTF-8."""
        await manager.store("unicode.txt", "héllo")
        assert await manager.get_content("unicode.txt") == "héllo".encode("utf-8")

    @pytest.mark.asyncio
    async def test_exists(self, tree, manager):
        """Test the existence check."""
        assert await manager.exists("plain.js") is True
        assert await manager.exists("lib") is True
        assert await manager.exists("nope.js") is False

    @pytest.mark.asyncio
    async def test_copy_then_remove_source(self, manager):
        """Test that a copy survives removal of its source."""
        await manager.store("source.txt", b"original")
        await manager.copy("source.txt", "backup/destination.txt")
        await manager.remove("source.txt")

        assert await manager.exists("source.txt") is False
        assert await manager.get_content("backup/destination.txt") == b"original"

    @pytest.mark.asyncio
    async def test_copy_overwrites(self, manager):
        """Test that copying replaces the destination."""
        await manager.store("source.txt", b"new")
        await manager.store("destination.txt", b"old content")
        await manager.copy("source.txt", "destination.txt")

        assert await manager.get_content("destination.txt") == b"new"

    @pytest.mark.asyncio
    async def test_copy_directory(self, tree, manager):
        """Test that directories are copied recursively."""
        await manager.copy("lib", "vendor/lib")

        assert await manager.get_content("vendor/lib/util.js") == b"export const util = 1;"
        assert await manager.exists("vendor/lib/util.remote.js") is True

    @pytest.mark.asyncio
    async def test_copy_missing_source(self, temp_dir, manager):
        """Test that copying a missing source fails without side effects."""
        with pytest.raises(FileNotFoundError):
            await manager.copy("ghost.txt", "copy.txt")
        with pytest.raises(FileNotFoundError):
            await manager.copy("missing.txt", "new/deep/out.txt")

        assert not (temp_dir / "new").exists()

    @pytest.mark.asyncio
    async def test_store_beneath_file_rejected(self, temp_dir, manager):
        """Test that a file cannot be used as a parent directory."""
        await manager.store("a", b"x")

        with pytest.raises(OSError):
            await manager.store("a/b.txt", b"y")
        assert (temp_dir / "a").read_bytes() == b"x"

    @pytest.mark.asyncio
    async def test_remove_missing_file(self, manager):
        """Test that removing a missing file succeeds."""
        await manager.remove("never/existed.txt")
        await manager.remove("never/existed.txt")

    @pytest.mark.asyncio
    async def test_remove_directory(self, tree, manager):
        """Test that directories are removed recursively."""
        await manager.remove("assets")
        assert not (tree / "assets").exists()

    @pytest.mark.asyncio
    async def test_context_manager(self, temp_dir):
        """Test use as an async context manager."""
        async with LocalFileManager(temp_dir) as manager:
            await manager.store("x.txt", b"x")
        assert (temp_dir / "x.txt").read_bytes() == b"x"


class TestDiscovery:
    """Test file discovery by naming convention."""

    @pytest.mark.asyncio
    async def test_match_files(self, tree, manager):
        """Test glob expansion beneath the root."""
        locations = await manager.match_files("assets/*.png")

        assert all(os.path.isabs(location) for location in locations)
        assert _relative(manager, locations) == {"assets/logo.png", "assets/logo.local.png"}

    @pytest.mark.asyncio
    async def test_match_files_skips_hidden(self, tree, manager):
        """Test that wildcards do not enter hidden directories."""
        locations = await manager.match_files("**/*.js")
        assert ".hidden/secret.js" not in _relative(manager, locations)

    @pytest.mark.asyncio
    async def test_match_files_no_matches(self, tree, manager):
        """Test that an unmatched pattern yields an empty list."""
        assert await manager.match_files("**/*.wasm") == []

    @pytest.mark.asyncio
    async def test_module_files(self, tree, manager):
        """Test that all modules are listed, including generated ones."""
        names = _relative(manager, await manager.get_module_file_names())

        assert names == {
            "plain.js",
            "x.segment.local.js",
            "x.segment.repository.js",
            "lib/util.js",
            "lib/util.remote.js",
        }

    @pytest.mark.asyncio
    async def test_segment_files(self, tree, manager):
        """Test segment configuration discovery."""
        names = _relative(manager, await manager.get_segment_files())
        assert names == {"config/app.segment.json"}

    @pytest.mark.asyncio
    async def test_node_segment_files(self, tree, manager):
        """Test node segment discovery."""
        names = _relative(manager, await manager.get_node_segment_files())
        assert names == {"x.segment.local.js"}

    @pytest.mark.asyncio
    async def test_repository_segment_files(self, tree, manager):
        """Test repository segment discovery."""
        names = _relative(manager, await manager.get_repository_segment_files())
        assert names == {"x.segment.repository.js"}

    @pytest.mark.asyncio
    async def test_asset_files_exclude_generated(self, tree, manager):
        """Test that generated variants are left out of assets."""
        assets = await manager.get_asset_files(["**/*.png"])
        assert [Path(a).as_posix() for a in assets] == ["assets/logo.png"]

    @pytest.mark.asyncio
    async def test_asset_files_are_relative(self, tree, manager):
        """Test that asset filenames are relative to the root."""
        assets = await manager.get_asset_files(["assets/*", "**/*.js"])
        names = {Path(a).as_posix() for a in assets}

        assert names == {"assets/logo.png", "assets/site.css", "plain.js", "lib/util.js"}
        assert not any(os.path.isabs(a) for a in assets)

    @pytest.mark.asyncio
    async def test_asset_files_keep_duplicates(self, tree, manager):
        """Test that overlapping patterns list a file once per match."""
        assets = await manager.get_asset_files(["assets/*.css", "**/*.css"])
        assert [Path(a).as_posix() for a in assets] == ["assets/site.css", "assets/site.css"]

    @pytest.mark.asyncio
    async def test_asset_files_no_patterns(self, tree, manager):
        """Test that no patterns yield no assets."""
        assert await manager.get_asset_files([]) == []

    @pytest.mark.asyncio
    async def test_concurrent_discovery(self, tree, manager):
        """Test that discovery calls can run concurrently."""
        modules, segments, assets = await asyncio.gather(
            manager.get_module_file_names(),
            manager.get_segment_files(),
            manager.get_asset_files(["**/*.png"]),
        )

        assert len(modules) == 5
        assert len(segments) == 1
        assert len(assets) == 1

    def test_classify(self, manager):
        """Test classification with the manager's extensions."""
        assert manager.classify("x.segment.local.js") == FileCategory.NODE_SEGMENT
        assert manager.classify("assets/logo.local.png") == FileCategory.GENERATED


class TestLocalStorageBackend:
    """Test LocalStorageBackend directly."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, temp_dir):
        """Test that written bytes read back unchanged."""
        backend = LocalStorageBackend()
        location = str(temp_dir / "data.bin")

        await backend.write_bytes(location, b"\x00\x01binary")

        assert await backend.read_bytes(location) == b"\x00\x01binary"
        assert await backend.exists(location) is True

    @pytest.mark.asyncio
    async def test_write_creates_parents(self, temp_dir):
        """Test that missing parent directories are created."""
        backend = LocalStorageBackend()
        location = str(temp_dir / "a" / "b" / "c.txt")

        await backend.write_bytes(location, b"c")

        assert (temp_dir / "a" / "b").is_dir()
        assert (temp_dir / "a" / "b" / "c.txt").read_bytes() == b"c"

    @pytest.mark.asyncio
    async def test_read_missing_file(self, temp_dir):
        """Test that reading a missing file raises FileNotFoundError."""
        backend = LocalStorageBackend()

        with pytest.raises(FileNotFoundError):
            await backend.read_bytes(str(temp_dir / "missing.bin"))

    @pytest.mark.asyncio
    async def test_glob_results_are_normalized(self, tree):
        """Test that dot segments in a pattern do not leak into results."""
        backend = LocalStorageBackend()

        matches = await backend.glob(str(tree), "./assets/*.css")

        assert matches == [str(tree / "assets" / "site.css")]


class TestBackendConformance:
    """Test that the local and memory managers agree on the same tree."""

    PATTERNS = [
        "**/*.png",
        "./assets/*.png",
        "assets/./*.png",
        "lib/../assets/*.png",
        "/assets/*.css",
        "**/*.js",
        "*.js",
        "missing/*.png",
    ]

    @pytest.fixture
    def memory_manager(self, tree):
        """Create a MemoryFileManager holding the same files as the tree."""
        files = {
            path.relative_to(tree).as_posix(): path.read_bytes()
            for path in tree.rglob("*")
            if path.is_file()
        }
        return MemoryFileManager("/app", files=files)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pattern", PATTERNS)
    async def test_asset_files_agree(self, manager, memory_manager, pattern):
        """Test that both managers find the same assets."""
        local = await manager.get_asset_files([pattern])
        memory = await memory_manager.get_asset_files([pattern])

        assert sorted(local) == sorted(memory)

    @pytest.mark.asyncio
    async def test_dot_pattern_finds_assets(self, manager, memory_manager):
        """Test that a leading ./ is treated as the root itself."""
        assert await manager.get_asset_files(["./assets/*.png"]) == ["assets/logo.png"]
        assert await memory_manager.get_asset_files(["./assets/*.png"]) == [
            "assets/logo.png"
        ]

    @pytest.mark.asyncio
    async def test_store_beneath_file_rejected(self, manager, memory_manager):
        """Test that both managers refuse to use a file as a directory."""
        for candidate in (manager, memory_manager):
            await candidate.store("a", b"x")

            with pytest.raises(OSError):
                await candidate.store("a/b.txt", b"y")
            assert await candidate.get_content("a") == b"x"
