"""Pytest configuration and shared fixtures."""

import zipfile

import pytest
from click.testing import CliRunner

from zipupdate.cli import cli


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args.

    Usage:
        result = invoke(["--command", "cat", "a.zip"])
        result = invoke(["a.zip"], env={"ZIPUPDATE_COMMAND": "cat"})

    Click mixes stderr into result.output, so error lines can be asserted
    there as well.
    """

    def _invoke(args, env=None):
        return cli_runner.invoke(cli, [str(a) for a in args], env=env)

    return _invoke


@pytest.fixture
def make_zip(tmp_path):
    """Factory building a zip archive under tmp_path.

    Members are given as a mapping of name to content; names ending in "/"
    become directory entries.
    """

    def _make(
        name,
        members,
        *,
        compression=zipfile.ZIP_DEFLATED,
        comment=b"",
    ):
        path = tmp_path / name
        with zipfile.ZipFile(path, "w", compression) as zf:
            for member, data in members.items():
                zf.writestr(member, data)
            zf.comment = comment
        return path

    return _make


@pytest.fixture
def read_members():
    """Return an archive's members as an ordered {name: bytes} dict."""

    def _read(path):
        with zipfile.ZipFile(path) as zf:
            return {info.filename: zf.read(info) for info in zf.infolist()}

    return _read


@pytest.fixture
def sample_zip(make_zip):
    """a.zip with x.xml (<a/>) and y.txt (hello)."""
    return make_zip("a.zip", {"x.xml": b"<a/>", "y.txt": b"hello"})
