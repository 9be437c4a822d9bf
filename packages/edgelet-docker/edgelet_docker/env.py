"""Environment variable merging for module create options."""

from __future__ import annotations

from collections.abc import Iterable, Mapping


def merge_env(cur_env: Iterable[str] | None, new_env: Mapping[str, str]) -> list[str]:
    """Merge a ``KEY=VALUE`` list with a mapping; the mapping wins on collision.

    Entries of *cur_env* are split on the first ``=`` only; an entry without
    ``=`` is a key with an empty value.  Keys that only appear in *cur_env*
    are kept unchanged; when a key repeats in *cur_env* the last entry
    counts.  Neither input is modified and the order of the
    returned list is unspecified.

    >>> sorted(merge_env(["k1=v1", "k2=v2"], {"k2": "v02"}))
    ['k1=v1', 'k2=v02']
    """
    merged: dict[str, str] = {}
    for entry in cur_env or ():
        key, _, value = entry.partition("=")
        merged[key] = value
    merged.update(new_env)
    return [f"{key}={value}" for key, value in merged.items()]
