"""Tests for codecrafter/export.py."""

import pytest

from codecrafter.errors import ValidationError
from codecrafter.export import copy_payload, export_file


@pytest.mark.parametrize("framework_id, suffix, mime", [
    ("angular", ".ts", "text/typescript"),
    ("react-js", ".jsx", "text/javascript"),
    ("next-js", ".jsx", "text/javascript"),
    ("html-tailwind", ".html", "text/html"),
    ("no-such-framework", ".html", "text/html"),
])
def test_extension_and_mime(framework_id, suffix, mime):
    exported = export_file("<code/>", framework_id)
    assert exported.filename == f"CodeCrafter-Code{suffix}"
    assert exported.mime_type == mime


def test_data_is_utf8():
    exported = export_file("<p>héllo</p>", "html-css")
    assert exported.data == "<p>héllo</p>".encode("utf-8")


@pytest.mark.parametrize("code", ["", "   \n"])
def test_empty_code_cannot_be_exported(code):
    with pytest.raises(ValidationError, match="No code to download"):
        export_file(code, "react-js")


@pytest.mark.parametrize("code", ["", "\t"])
def test_empty_code_cannot_be_copied(code):
    with pytest.raises(ValidationError, match="No code to copy"):
        copy_payload(code)


def test_copy_returns_code_unchanged():
    assert copy_payload("  <div/>\n") == "  <div/>\n"
