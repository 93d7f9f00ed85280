"""Basic usage example for rwfs."""

import tempfile
from pathlib import Path

from rwfs import DELETE_CHUNK, rewrite


def main():
    """Example of rewriting a small config-style file."""

    path = Path(tempfile.mkdtemp()) / "settings.txt"
    path.write_text("# generated\nname = demo\n\ndebug = true\nport = 8080\n", encoding="utf-8")

    # Drop comments and blank lines, switch debug off
    rewrite(
        path,
        updates=[
            {
                "constraint": lambda ctx, sep: ctx.chunk.startswith("#"),
                "update": lambda ctx, sep: DELETE_CHUNK,
            },
            {
                "constraint": lambda ctx, sep: ctx.chunk.startswith("debug"),
                "update": lambda ctx, sep: "debug = false",
            },
        ],
        remove_empty=True,
        debug=True,
        debug_output_limit={"start": 1, "end": 3},
    )

    # Bump only the last port entry
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk.startswith("port"),
        update=lambda ctx, sep: "port = 9090",
        invert=True,
        bail_on_first_match=True,
    )

    print("Rewritten file:")
    print(path.read_text(encoding="utf-8"))


if __name__ == "__main__":
    main()
