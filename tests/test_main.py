"""Tests for argument parsing, theme loading and submission."""

from __future__ import annotations

import os

import pytest

from main import Arguments, parse_args, parse_colors, submit, validate_colors
from navigation import PayloadTab
from render import BorderStyle, ColorMode, RenderState, populate_borders
from req_struct import HttpMethod, Response, TransportError
from state import ComposerState, FieldSlot


def make_render_state() -> RenderState:
    args = Arguments()
    return RenderState(
        borders=populate_borders(args.border_style),
        theme=parse_colors(args),
        color_mode=args.color_mode,
        size=os.terminal_size((120, 40)),
    )


def make_composer(uri: str = "", body: str = "") -> ComposerState:
    composer = ComposerState()
    for value in uri:
        composer.fields[FieldSlot.Uri].insert_char(value)
    for value in body:
        composer.fields[FieldSlot.Body].insert_char(value)
    return composer


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])

        assert args.method is None
        assert args.color_mode == ColorMode.Bit24
        assert args.border_style == BorderStyle.Rounded
        assert args.tabs == [PayloadTab.Headers, PayloadTab.Body]
        assert args.policy.require_valid_json is False

    def test_options(self):
        args = parse_args(["-X", "put", "-m", "8bit", "-b", "double",
                           "--timeout", "3", "--tabs", "body", "--strict"])

        assert args.method == HttpMethod.PUT
        assert args.color_mode == ColorMode.Bit8
        assert args.border_style == BorderStyle.Double
        assert args.timeout == 3.0
        assert args.tabs == [PayloadTab.Body]
        assert args.policy.require_valid_json is True

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            parse_args(["-X", "fetch"])

    def test_missing_theme_file(self, tmp_path):
        with pytest.raises(Exception, match="No theme file"):
            parse_args(["-t", str(tmp_path / "missing.ini")])

    def test_negative_timeout(self):
        with pytest.raises(Exception, match="Timeout"):
            parse_args(["--timeout", "-1"])


class TestThemes:

    def test_theme_file_overrides_defaults(self, tmp_path):
        theme_file = tmp_path / "theme.ini"
        theme_file.write_text("[4bit]\ntext_color = 32\n")
        args = Arguments(theme_file=str(theme_file), color_mode=ColorMode.Bit4)

        theme = parse_colors(args)
        assert theme.text_color == "32"
        assert theme.invalid_color == "31"

    def test_bad_rgb(self):
        with pytest.raises(Exception, match="Invalid RGB"):
            validate_colors("text_color", "1,2", ColorMode.Bit24)

    def test_bad_integer(self):
        with pytest.raises(Exception, match="must be an integer"):
            validate_colors("text_color", "red", ColorMode.Bit8)


class TestSubmit:

    def test_invalid_uri_not_sent(self):
        sent = []
        lines = submit(make_composer("notaurl"), Arguments(),
                       make_render_state(), lambda r, t: sent.append(r))

        assert sent == []
        assert lines == ["Invalid URI [notaurl]"]

    def test_response_lines(self):
        def transport(request, timeout):
            assert request.method == "POST"
            assert request.body == '{"a":1}'
            return Response(status=201, body="done", reason="Created",
                            url=request.uri)

        lines = submit(make_composer("http://a", '{"a":1}'), Arguments(),
                       make_render_state(), transport)

        assert lines[0] == "Status code -> 201 Created"
        assert lines[-1] == "done"

    def test_transport_error_shown(self):
        def transport(request, timeout):
            raise TransportError("connection refused")

        lines = submit(make_composer("http://a"), Arguments(),
                       make_render_state(), transport)

        assert lines == ["connection refused"]

    def test_strict_rejects_plain_body(self):
        args = parse_args(["--strict"])
        lines = submit(make_composer("http://a", "text"), args,
                       make_render_state(), lambda r, t: None)

        assert lines == ["Body is not valid JSON"]
