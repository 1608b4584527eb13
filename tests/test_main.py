import json

import pytest

from bdecode.main import main, parse_args


def test_decode_prints_json(capsys):
    assert main(["decode", "d3:cow3:moo4:spaml1:a1:bee"]) == 0
    out = capsys.readouterr().out
    assert json.loads(out) == {"cow": "moo", "spam": ["a", "b"]}
    assert out == '{"cow": "moo", "spam": ["a", "b"]}\n'


def test_decode_integer(capsys):
    assert main(["decode", "i-52e"]) == 0
    assert capsys.readouterr().out == "-52\n"


def test_decode_malformed(capsys):
    assert main(["decode", "l4:spam"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "position 0" in captured.err


def test_decode_strict(capsys):
    assert main(["decode", "i3eXYZ"]) == 0
    assert main(["decode", "--strict", "i3eXYZ"]) == 1


def test_unknown_command(capsys):
    assert main(["info", "file.torrent"]) == 1
    assert capsys.readouterr().out == "unknown command: info\n"


def test_parse_args():
    args = parse_args(["-v", "decode", "--max-depth", "3", "i1e"])
    assert args["command"] == "decode"
    assert args["bencoded_string"] == "i1e"
    assert args["max_depth"] == 3
    assert args["verbose"] is True
    assert args["strict"] is False


def test_parse_args_rejects_negative_depth():
    with pytest.raises(SystemExit):
        parse_args(["decode", "--max-depth", "-1", "i1e"])


def test_decode_prints_non_ascii_unescaped(capsys):
    assert main(["decode", "3:üab"]) == 0
    assert capsys.readouterr().out == '"üab"\n'
