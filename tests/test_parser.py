"""
Unit tests for line classification, parsing and serialization.
"""

from pathlib import Path

import pytest

from todolist.errors import StorageError
from todolist.models import Document, Line, LineKind, format_line
from todolist.parser import (
    classify_line,
    parse_content,
    parse_file,
    serialize,
    write_file,
)


SAMPLE = "* [ ] buy milk\n* [x] pay rent\n== Shopping\n* eggs\n\nnote to self"


def _kinds(document):
    return [line.kind for line in document.lines]


# ============================================================
# classify_line
# ============================================================

class TestClassifyLine:
    def test_open_todo(self):
        line = classify_line("* [ ] Write report")
        assert line.kind is LineKind.TODO
        assert line.completed is False
        assert line.text == "Write report"

    def test_done_todo_lowercase(self):
        line = classify_line("* [x] Write report")
        assert line.kind is LineKind.TODO
        assert line.completed is True
        assert line.text == "Write report"

    def test_done_todo_uppercase(self):
        line = classify_line("* [X] Write report")
        assert line.kind is LineKind.TODO
        assert line.completed is True

    def test_todo_text_is_trimmed(self):
        assert classify_line("   * [ ]    spaced out   ").text == "spaced out"

    def test_todo_without_space_after_checkbox(self):
        line = classify_line("* [ ]glued")
        assert line.kind is LineKind.TODO
        assert line.text == "glued"

    def test_empty_todo(self):
        line = classify_line("* [ ]")
        assert line.kind is LineKind.TODO
        assert line.text == ""

    def test_headers(self):
        assert classify_line("= Title") == Line("Title", LineKind.HEADER1)
        assert classify_line("== Section") == Line("Section", LineKind.HEADER2)
        assert classify_line("=== Sub") == Line("Sub", LineKind.HEADER3)

    def test_header_needs_space(self):
        assert classify_line("==Section").kind is LineKind.TEXT
        assert classify_line("=").kind is LineKind.TEXT

    def test_bullet(self):
        line = classify_line("* eggs")
        assert line.kind is LineKind.BULLET
        assert line.text == "eggs"

    def test_bullet_with_brackets(self):
        line = classify_line("* [link] somewhere")
        assert line.kind is LineKind.BULLET
        assert line.text == "[link] somewhere"

    def test_bare_star_is_text(self):
        line = classify_line("*")
        assert line.kind is LineKind.TEXT
        assert line.text == "*"

    def test_blank(self):
        assert classify_line("") == Line("", LineKind.BLANK)
        assert classify_line("   \t ") == Line("", LineKind.BLANK)

    def test_free_text(self):
        line = classify_line("  just a note  ")
        assert line.kind is LineKind.TEXT
        assert line.text == "just a note"

    def test_carriage_return_is_ignored(self):
        line = classify_line("* [ ] windows line\r")
        assert line.text == "windows line"

    def test_completed_is_only_for_todos(self):
        line = Line("Title", LineKind.HEADER1, completed=True)
        assert line.completed is False


# ============================================================
# parse_content / serialize
# ============================================================

def test_parse_sample():
    """Every construct of the grammar lands in the right record."""
    document = parse_content(SAMPLE)

    assert document.lines == [
        Line("buy milk", LineKind.TODO, False),
        Line("pay rent", LineKind.TODO, True),
        Line("Shopping", LineKind.HEADER2),
        Line("eggs", LineKind.BULLET),
        Line("", LineKind.BLANK),
        Line("note to self", LineKind.TEXT),
    ]


def test_serialize_sample_roundtrip():
    """Clean input comes back byte for byte."""
    assert serialize(parse_content(SAMPLE + "\n")) == SAMPLE + "\n"
    # The last line always gets a terminator
    assert serialize(parse_content(SAMPLE)) == SAMPLE + "\n"


def test_parse_empty_content():
    assert parse_content("").lines == []


def test_trailing_blank_lines_are_kept():
    document = parse_content("* [ ] a\n\n\n")
    assert _kinds(document) == [LineKind.TODO, LineKind.BLANK, LineKind.BLANK]


def test_serialize_normalizes_whitespace_and_case():
    content = "  = Title  \n*   [ ] not a todo\n* [X]   Done thing\n\t* bullet\n"
    assert serialize(parse_content(content)) == (
        "= Title\n"
        "*   [ ] not a todo\n"
        "* [x] Done thing\n"
        "* bullet\n"
    )


@pytest.mark.parametrize("content", [
    SAMPLE,
    "   = Title   \n\n* [ ]\n* [x]\n*\n* \n",
    "=== a\n==  b\n= = c\n* [X]x\n  \t \n",
    "* [link] text\n*[ ] odd\n- dash\n# markdown\n",
    "\n\n\n",
])
def test_serialize_is_idempotent_after_one_pass(content):
    once = serialize(parse_content(content))
    twice = serialize(parse_content(once))
    assert twice == once


def test_every_record_is_one_line():
    document = Document(lines=[
        Line("a", LineKind.TODO),
        Line("", LineKind.BLANK),
        Line("b", LineKind.BULLET),
    ])
    assert serialize(document).count("\n") == len(document)


def test_format_line():
    assert format_line(Line("x", LineKind.TODO, False)) == "* [ ] x"
    assert format_line(Line("x", LineKind.TODO, True)) == "* [x] x"
    assert format_line(Line("x", LineKind.HEADER3)) == "=== x"
    assert format_line(Line("", LineKind.BLANK)) == ""


# ============================================================
# Document helpers
# ============================================================

def test_counts():
    document = parse_content(SAMPLE)
    assert document.counts() == (1, 1)
    assert document.has_todos
    assert document.has_incomplete
    assert not document.all_complete


def test_all_complete_without_todos():
    document = parse_content("= Title\nnotes\n")
    assert not document.has_todos
    assert document.all_complete


def test_append_todo():
    document = parse_content(SAMPLE)
    line = document.append_todo("  call mum ")

    assert document.lines[-1] is line
    assert line == Line("call mum", LineKind.TODO, False)
    assert serialize(document).endswith("note to self\n* [ ] call mum\n")


@pytest.mark.parametrize("text", ["buy milk\nand eggs", "buy milk\r\nand eggs", "a\rb"])
def test_append_todo_rejects_multiline_text(text):
    document = parse_content(SAMPLE)
    before = list(document.lines)

    with pytest.raises(ValueError):
        document.append_todo(text)
    assert document.lines == before


def test_append_todo_stays_one_line_on_disk():
    document = parse_content("")
    document.append_todo("buy milk\n")

    reparsed = parse_content(serialize(document))
    assert reparsed.lines == [Line("buy milk", LineKind.TODO, False)]


# ============================================================
# parse_file / write_file
# ============================================================

def test_parse_missing_file_is_empty(tmp_path):
    document = parse_file(tmp_path / "nope.adoc")
    assert document.lines == []
    assert document.name == "nope.adoc"
    assert document.path == tmp_path / "nope.adoc"


def test_parse_file_uses_given_name(tmp_path):
    path = tmp_path / "work.adoc"
    path.write_text(SAMPLE, encoding='utf-8')

    document = parse_file(path, "Work")
    assert document.name == "Work"
    assert len(document) == 6


def test_parse_file_unreadable(tmp_path):
    with pytest.raises(StorageError):
        parse_file(tmp_path)


def test_write_file_roundtrip(tmp_path):
    path = tmp_path / "list.adoc"
    path.write_text(SAMPLE, encoding='utf-8')

    document = parse_file(path)
    document.lines[0].completed = True
    write_file(document)

    assert path.read_text(encoding='utf-8') == (
        "* [x] buy milk\n* [x] pay rent\n== Shopping\n* eggs\n\nnote to self\n"
    )


def test_write_file_to_other_path(tmp_path):
    document = parse_content(SAMPLE)
    target = tmp_path / "copy.adoc"
    write_file(document, target)
    assert target.read_text(encoding='utf-8') == SAMPLE + "\n"


def test_write_file_without_path():
    with pytest.raises(ValueError):
        write_file(parse_content(SAMPLE))


def test_write_file_failure(tmp_path):
    document = parse_content(SAMPLE)
    with pytest.raises(StorageError) as excinfo:
        write_file(document, tmp_path / "missing-dir" / "list.adoc")
    assert isinstance(excinfo.value.reason, OSError)
    assert excinfo.value.path == tmp_path / "missing-dir" / "list.adoc"


def test_unicode_roundtrip(tmp_path):
    path = tmp_path / "unicode.adoc"
    path.write_text("* [ ] café ☕\n= Überschrift\n", encoding='utf-8')

    write_file(parse_file(path))
    assert path.read_text(encoding='utf-8') == "* [ ] café ☕\n= Überschrift\n"
