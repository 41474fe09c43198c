"""Unit tests for tenantcat.entrypoints.cli.helpers.messages.

Glyph selection follows the encoding of the stderr stream Click reports, and
every message goes to stderr, never stdout.
"""

import io
import sys

import click
import pytest

from tenantcat.entrypoints.cli.helpers import messages

SET_BOLD = "\x1b[1m"


class FakeTTY(io.StringIO):
    """Text stream posing as a TTY with a chosen encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:  # type: ignore[override]
        return self._encoding

    def isatty(self) -> bool:
        return True


@pytest.mark.parametrize(
    "encoding,expected", [("utf-8", True), ("ascii", False)], ids=["utf8", "ascii"]
)
def test_glyph_support_follows_stream_encoding(monkeypatch, encoding, expected):
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(encoding))
    assert messages._supports_character("✅") is expected  # pylint: disable=protected-access


@pytest.mark.parametrize(
    "encoding,glyph,color,emit",
    [
        ("ascii", "[!]", "\x1b[33m", messages.warn),
        ("utf-8", "⚠️", "\x1b[33m", messages.warn),
        ("ascii", "[OK]", "\x1b[32m", messages.success),
        ("utf-8", "✅", "\x1b[32m", messages.success),
        ("ascii", "[X]", "\x1b[31m", messages.error),
        ("utf-8", "❌", "\x1b[31m", messages.error),
    ],
)
def test_messages_are_styled_with_matching_glyph(monkeypatch, encoding, glyph, color, emit):
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    monkeypatch.setattr(sys, "stderr", stream, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)

    emit("catalog is ready")

    written = stream.getvalue()
    assert f"{glyph}  catalog is ready" in written
    assert color in written
    assert SET_BOLD in written


def test_messages_leave_stdout_alone(monkeypatch, capsys):
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))

    messages.success("Registered")

    captured = capsys.readouterr()
    assert "Registered" in captured.err
    assert captured.out == ""
