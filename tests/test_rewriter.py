"""Tests for the rewrite engine and file rewriting."""

import pytest
from rwfs import DELETE_CHUNK, rewrite, rwfs
from rwfs.core.options import RewriteOptions
from rwfs.core.rewriter import ChunkRewriter, assemble, invert_chunks, restore_order, rewrite_text
from rwfs.core.rules import NoRules, resolve_rules


def read(path):
    return path.read_bytes().decode("utf-8")


def test_invert_and_restore():
    chunks = ["a", "b", "c"]
    inverted = invert_chunks(chunks)
    assert inverted == ["c", "b", "a"]
    assert chunks == ["a", "b", "c"]
    assert restore_order(inverted, invert=True) == chunks
    assert restore_order(inverted, invert=True, preserve_inverted_order=True) == inverted
    assert restore_order(chunks, invert=False, preserve_inverted_order=True) == chunks


def test_assemble_drops_deleted_chunks():
    assert assemble(["a", DELETE_CHUNK, "", "b"], "\n") == "a\n\nb"


def test_assemble_remove_empty():
    assert assemble(["a", DELETE_CHUNK, "", "b"], "\n", remove_empty=True) == "a\nb"


def test_round_trip_identity(make_file):
    """A never-matching rule leaves the file byte for byte unchanged."""
    content = "first line\r\n\n  indented\n\ttabbed\n\nlast\n"
    path = make_file(content)
    rewrite(path, constraint=lambda ctx, sep: False, update=lambda ctx, sep: ctx.chunk)
    assert read(path) == content


def test_pass_through_without_rules(make_file):
    content = "x\ny\n"
    path = make_file(content)
    rewrite(path)
    assert read(path) == content


def test_deletion_keeps_relative_order(make_file):
    path = make_file("keep1\ndrop\nkeep2\ndrop\nkeep3")
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk == "drop",
        update=lambda ctx, sep: DELETE_CHUNK,
    )
    assert read(path) == "keep1\nkeep2\nkeep3"


def test_invert_processes_in_reverse_and_restores_order(make_file):
    content = "line1\nline2\nline3\nline4"
    path = make_file(content)
    processed = []

    def update(context, separator):
        processed.append(context.chunk)
        return context.chunk

    rewrite(path, constraint=lambda ctx, sep: True, update=update, invert=True)

    assert processed == ["line4", "line3", "line2", "line1"]
    assert read(path) == content


def test_invert_preserving_inverted_order(make_file):
    path = make_file("line1\nline2\nline3\nline4")
    processed = []

    def update(context, separator):
        processed.append(context.chunk)
        return context.chunk

    rewrite(
        path,
        constraint=lambda ctx, sep: True,
        update=update,
        invert=True,
        preserve_inverted_order=True,
    )

    assert processed == ["line4", "line3", "line2", "line1"]
    assert read(path) == "line4\nline3\nline2\nline1"


def test_invert_updates_matching_chunk_in_place(make_file):
    path = make_file("first\nsecond\nthird")
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk == "third",
        update=lambda ctx, sep: f"MODIFIED-{ctx.chunk}",
        invert=True,
    )
    assert read(path) == "first\nsecond\nMODIFIED-third"


def test_invert_update_with_preserved_order(make_file):
    path = make_file("first\nsecond\nthird")
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk == "third",
        update=lambda ctx, sep: f"MODIFIED-{ctx.chunk}",
        invert=True,
        preserve_inverted_order=True,
    )
    assert read(path) == "MODIFIED-third\nsecond\nfirst"


def test_invert_with_bail_on_first_match(make_file):
    path = make_file("line1\nline2\nline3\nline4")
    match_count = []

    def update(context, separator):
        match_count.append(context.chunk)
        return context.chunk.upper()

    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk.startswith("line"),
        update=update,
        invert=True,
        bail_on_first_match=True,
    )

    assert match_count == ["line4"]
    assert read(path) == "line1\nline2\nline3\nLINE4"


def test_invert_context_uses_reversed_neighbors(make_file):
    path = make_file("a\nb\nc")
    seen = []

    def constraint(context, separator):
        seen.append((context.index, context.prev_chunk, context.chunk, context.next_chunk))
        return False

    rewrite(path, constraint=constraint, update=lambda ctx, sep: ctx.chunk, invert=True)
    assert seen == [(0, None, "c", "b"), (1, "c", "b", "a"), (2, "b", "a", None)]


def test_remove_empty_with_whitespace_deletion(make_file):
    path = make_file("a\n \nb")
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk.strip() == "",
        update=lambda ctx, sep: DELETE_CHUNK,
        remove_empty=True,
    )
    assert read(path) == "a\nb"


def test_remove_empty_drops_chunks_emptied_by_update(make_file):
    path = make_file("a\n# comment\nb\n")
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk.startswith("#"),
        update=lambda ctx, sep: "",
        remove_empty=True,
    )
    assert read(path) == "a\nb"


def test_multi_rule_rewrite(make_file):
    path = make_file("TODO: a\nkeep\nDEBUG x")
    rewrite(
        path,
        updates=[
            {"constraint": lambda ctx, sep: ctx.chunk.startswith("TODO"),
             "update": lambda ctx, sep: ctx.chunk.replace("TODO", "DONE")},
            {"constraint": lambda ctx, sep: ctx.chunk.startswith("DEBUG"),
             "update": lambda ctx, sep: DELETE_CHUNK},
        ],
    )
    assert read(path) == "DONE: a\nkeep"


def test_custom_separator_and_neighbors(make_file):
    path = make_file("a,b,c")
    rewrite(
        path,
        separator=",",
        constraint=lambda ctx, sep: ctx.prev_chunk == "a",
        update=lambda ctx, sep: ctx.chunk + sep + "x",
    )
    assert read(path) == "a,b,x,c"


def test_encoding_is_used_for_read_and_write(make_file):
    path = make_file("café\nnaïve", encoding="latin-1")
    rewrite(
        path,
        encoding="latin-1",
        constraint=lambda ctx, sep: ctx.index == 0,
        update=lambda ctx, sep: ctx.chunk.upper(),
    )
    assert path.read_bytes().decode("latin-1") == "CAFÉ\nnaïve"


def test_missing_file_raises_and_writes_nothing(tmp_path):
    path = tmp_path / "missing.txt"
    with pytest.raises(FileNotFoundError):
        rewrite(path, constraint=lambda ctx, sep: True, update=lambda ctx, sep: "x")
    assert not path.exists()


def test_decode_error_propagates(make_file):
    path = make_file("x")
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(UnicodeError):
        rewrite(path, constraint=lambda ctx, sep: True, update=lambda ctx, sep: "x")
    assert path.read_bytes() == b"\xff\xfe\xfa"


def test_encode_error_leaves_file_untouched(make_file):
    """Content the encoding cannot represent fails before the file is opened for writing."""
    path = make_file("price\nother", encoding="latin-1")
    with pytest.raises(UnicodeError):
        rewrite(
            path,
            encoding="latin-1",
            constraint=lambda ctx, sep: ctx.index == 1,
            update=lambda ctx, sep: "€5",
        )
    assert path.read_bytes() == b"price\nother"


def test_rewriter_defaults_to_file_handler_and_previewer():
    from rwfs.debug.preview import DebugPreviewer
    from rwfs.io.file_handler import FileHandler

    rewriter = ChunkRewriter()
    assert isinstance(rewriter.file_handler, FileHandler)
    assert isinstance(rewriter.previewer, DebugPreviewer)


def test_debug_range_missing_bound_does_not_break_rewrite(make_file, console):
    path = make_file("a\nb\nc")
    rewrite(
        path,
        constraint=lambda ctx, sep: ctx.chunk == "b",
        update=lambda ctx, sep: "B",
        debug=True,
        debug_output_limit={"start": 2},
        console=console,
    )
    assert read(path) == "a\nB\nc"
    assert "--- Chunk 3 ---" in console.file.getvalue()


def test_empty_separator_is_rejected(make_file):
    path = make_file("abc")
    with pytest.raises(ValueError):
        rewrite(path, separator="")


def test_rwfs_alias():
    assert rwfs is rewrite


@pytest.mark.parametrize("content", ["a\nb\nc\nd", "x\n\ny\n", "solo"])
def test_invert_restore_matches_forward_run(content):
    """Without bail, inverting and restoring gives the same text as a forward run."""
    rules = resolve_rules(
        constraint=lambda ctx, sep: ctx.chunk in ("b", "y", "solo"),
        update=lambda ctx, sep: ctx.chunk * 2,
    )
    forward = rewrite_text(content, rules, RewriteOptions())
    inverted = rewrite_text(content, rules, RewriteOptions(invert=True))
    assert forward == inverted


def test_rewriter_uses_injected_file_handler():
    class MemoryFiles:
        def __init__(self):
            self.files = {"doc": "a\nb"}

        def read_text(self, file_path, encoding="utf-8"):
            return self.files[file_path]

        def write_text(self, file_path, content, encoding="utf-8"):
            self.files[file_path] = content

    files = MemoryFiles()
    rewriter = ChunkRewriter(RewriteOptions(separator="\n"), file_handler=files)
    rewriter.rewrite("doc", resolve_rules(
        constraint=lambda ctx, sep: ctx.chunk == "b",
        update=lambda ctx, sep: "B",
    ))
    assert files.files["doc"] == "a\nB"


def test_debug_preview_does_not_change_result(console):
    from rwfs.debug.preview import DebugPreviewer

    options = RewriteOptions(debug=True, debug_output_limit=1)
    result = rewrite_text("a\nb", NoRules(), options, previewer=DebugPreviewer(console))
    assert result == "a\nb"
    assert "--- Chunk 1 ---" in console.file.getvalue()
