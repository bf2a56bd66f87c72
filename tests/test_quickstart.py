"""Test that the quickstart API works for ambit."""
from __future__ import annotations


def test_quickstart_parse_import() -> None:
    import ambit

    assert callable(ambit.parse)
    assert callable(ambit.resolve)


def test_quickstart_version(expected_version: str) -> None:
    import ambit

    assert ambit.__version__ == expected_version


def test_quickstart_parse_and_resolve() -> None:
    import ambit

    document = ambit.parse("a/[b, c];")
    links = ambit.resolve(document, ambit.EvaluationContext("linux", "box"))
    assert [str(link) for link in links] == ["a/b => a/b", "a/c => a/c"]


def test_quickstart_config_object() -> None:
    from ambit import AmbitConfig, EvaluationContext

    config = AmbitConfig("{os(linux): .Xresources, default: .Xdefaults};")
    assert len(config) == 1
    links = config.links(EvaluationContext("macos", "box"))
    assert links[0].repo_path == ".Xdefaults"


def test_quickstart_config_from_file(tmp_path) -> None:
    from ambit import AmbitConfig

    path = tmp_path / "config.ambit"
    path.write_text(".vimrc;\n.bashrc;\n")
    config = AmbitConfig.from_file(path)
    assert len(config) == 2
    assert config.source.startswith(".vimrc")
    assert "config.ambit" in repr(config)


def test_quickstart_config_from_file_with_bom(tmp_path) -> None:
    from ambit import AmbitConfig

    path = tmp_path / "config.ambit"
    path.write_bytes(b"\xef\xbb\xbf.vimrc;\n")
    config = AmbitConfig.from_file(path)
    assert config.source == ".vimrc;\n"
    assert len(config) == 1


def test_quickstart_errors_share_a_root() -> None:
    import pytest

    import ambit
    from ambit.parser import ParseError

    assert issubclass(ParseError, ambit.AmbitError)
    with pytest.raises(ambit.AmbitError):
        ambit.parse("[];")
