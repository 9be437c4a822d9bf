"""Unit tests — merge_env."""

from __future__ import annotations

import pytest

from edgelet_docker.env import merge_env


@pytest.mark.unit
class TestMergeEnv:
    def test_none_and_empty(self) -> None:
        assert merge_env(None, {}) == []

    def test_empty_list_and_empty_mapping(self) -> None:
        assert merge_env([], {}) == []

    def test_new_empty_keeps_current(self) -> None:
        assert sorted(merge_env(["k1=v1", "k2=v2"], {})) == ["k1=v1", "k2=v2"]

    def test_extend_with_new_key(self) -> None:
        merged = merge_env(["k1=v1", "k2=v2"], {"k3": "v3"})
        assert sorted(merged) == ["k1=v1", "k2=v2", "k3=v3"]

    def test_new_value_wins_on_collision(self) -> None:
        merged = merge_env(["k1=v1", "k2=v2"], {"k2": "v02", "k3": "v3"})
        assert sorted(merged) == ["k1=v1", "k2=v02", "k3=v3"]

    def test_current_none_returns_new(self) -> None:
        assert sorted(merge_env(None, {"a": "1", "b": "2"})) == ["a=1", "b=2"]

    def test_splits_on_first_equals_only(self) -> None:
        merged = merge_env(["CONN=HostName=hub;Key=abc=="], {})
        assert merged == ["CONN=HostName=hub;Key=abc=="]

    def test_entry_without_equals_is_empty_value(self) -> None:
        assert merge_env(["FLAG"], {}) == ["FLAG="]

    def test_inputs_not_modified(self) -> None:
        cur = ["k1=v1"]
        new = {"k1": "x"}
        merge_env(cur, new)
        assert cur == ["k1=v1"]
        assert new == {"k1": "x"}

    @pytest.mark.parametrize(
        "cur,new",
        [
            (["a=1", "b=2", "c=3"], {"b": "20", "d": "40"}),
            (["a=", "b"], {"a": "set"}),
            ([], {"x": "y"}),
            (["x=1", "y=2"], {"x": "1", "y": "2"}),
        ],
    )
    def test_key_set_is_union_and_new_wins(self, cur: list[str], new: dict[str, str]) -> None:
        merged = dict(entry.partition("=")[::2] for entry in merge_env(cur, new))
        current = dict(entry.partition("=")[::2] for entry in cur)
        assert set(merged) == set(current) | set(new)
        for key, value in merged.items():
            assert value == new.get(key, current.get(key))

    def test_repeated_current_key_keeps_last(self) -> None:
        assert merge_env(["K=1", "K=2"], {}) == ["K=2"]

    def test_repeated_current_key_still_overridden(self) -> None:
        assert merge_env(["K=1", "K=2"], {"K": "3"}) == ["K=3"]
