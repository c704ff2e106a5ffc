"""
Example: Discovering segments and assets of a built application

Builds a small tree in memory, lists what the runtime would load from it
and then mirrors the same tree to disk with LocalFileManager.
"""

import asyncio
import sys
import tempfile

from runtime_files.filesystem import (
    FileManager,
    FileNotFound,
    LocalFileManager,
    MemoryFileManager,
)


async def describe(manager: FileManager) -> None:
    """Print modules, segments and assets of a tree."""
    print(f"Root: {manager.get_root_location()}")

    for location in sorted(await manager.get_module_file_names()):
        filename = manager.get_relative_location(location)
        print(f"  module   {filename:<40} {manager.classify(filename).value}")

    for location in await manager.get_segment_files():
        print(f"  segment  {manager.get_relative_location(location)}")

    for filename in await manager.get_asset_files(["**/*.css", "**/*.png"]):
        print(f"  asset    {filename}")


async def main() -> None:
    memory = MemoryFileManager(
        "/app",
        files={
            "index.js": b"import './shared/util.js';",
            "shared/util.js": b"export const util = () => 1;",
            "shared/util.remote.js": b"// generated",
            "default.segment.json": b'{"./shared/util.js": {}}',
            "default.segment.local.js": b"// generated",
            "assets/site.css": b"body { margin: 0 }",
            "assets/site.local.css": b"/* generated */",
        },
    )

    await describe(memory)

    try:
        await memory.load("shared/missing.js")
    except FileNotFound as e:
        print(f"Expected error: {e}")

    with tempfile.TemporaryDirectory() as tmpdir:
        local = LocalFileManager(tmpdir)

        for filename, content in memory.files.items():
            await local.store(filename, content)

        print()
        await describe(local)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(130)
