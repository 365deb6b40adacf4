from __future__ import annotations

from relsync.core.structured import (
    as_obj_list,
    as_str_dict,
    get_bool,
    get_int,
    get_raw_str,
    get_str,
    get_table,
    is_str_dict,
)


def test_is_str_dict() -> None:
    assert is_str_dict({"a": 1})
    assert not is_str_dict({1: "a"})
    assert not is_str_dict(["a"])


def test_as_helpers() -> None:
    assert as_str_dict({"id": 1}) == {"id": 1}
    assert as_str_dict("nope") is None
    assert as_obj_list([1, 2]) == [1, 2]
    assert as_obj_list({"a": 1}) is None


def test_get_str_strips_and_drops_empty() -> None:
    data: dict[str, object] = {"sha": "  abc  ", "blank": "   ", "num": 3}
    assert get_str(data, "sha") == "abc"
    assert get_str(data, "blank") is None
    assert get_str(data, "num") is None
    assert get_str(data, "missing") is None


def test_get_raw_str_keeps_whitespace() -> None:
    data: dict[str, object] = {"name": " nightly ", "body": None}
    assert get_raw_str(data, "name") == " nightly "
    assert get_raw_str(data, "body") == ""
    assert get_raw_str(data, "missing") == ""


def test_get_int_rejects_bool() -> None:
    data: dict[str, object] = {"id": 12, "flag": True, "text": "12"}
    assert get_int(data, "id") == 12
    assert get_int(data, "flag") is None
    assert get_int(data, "text") is None


def test_get_bool_default() -> None:
    data: dict[str, object] = {"draft": True, "prerelease": "yes"}
    assert get_bool(data, "draft") is True
    assert get_bool(data, "prerelease") is False
    assert get_bool(data, "prerelease", default=True) is True


def test_get_table() -> None:
    data: dict[str, object] = {"commit": {"sha": "abc"}, "name": "v1"}
    assert get_table(data, "commit") == {"sha": "abc"}
    assert get_table(data, "name") is None
