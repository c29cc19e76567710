"""Tests for the ``python -m nuget_feed_tools`` dispatcher."""

from unittest.mock import Mock

import pytest

from nuget_feed_tools import __main__ as entry
from nuget_feed_tools import __version__


@pytest.mark.parametrize("tool", ["lister", "deleter"])
def test_dispatches_to_tool(monkeypatch, tool):
    tool_main = Mock(return_value=0)
    monkeypatch.setitem(entry.TOOLS, tool, tool_main)

    assert entry.main([tool]) == 0
    tool_main.assert_called_once_with()


def test_unknown_tool_rejected():
    with pytest.raises(SystemExit) as exc_info:
        entry.main(["uploader"])
    assert exc_info.value.code == 2


def test_version_flag(capsys):
    with pytest.raises(SystemExit):
        entry.main(["--version"])
    assert __version__ in capsys.readouterr().out
