# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import functools
import logging

logger = logging.getLogger(__name__)

VERSION_PREFIXES = ('v', 'V')


def tag_key(tag: str) -> str:
    '''
    returns the comparison key of the given tag name, i.e. the tag name with (at most) one
    leading `v` or `V` stripped away. `v1.2.0` and `1.2.0` thus share the same key, whereas
    `vv1.0` yields `v1.0`.
    '''
    if tag[:1] in VERSION_PREFIXES:
        return tag[1:]
    return tag


def _is_numeric(segment: str) -> bool:
    # only ASCII digits (`str.isdigit` also accepts e.g. superscripts, which `int` rejects)
    return segment.isascii() and segment.isdigit()


def _compare_segments(left: str, right: str) -> int:
    if _is_numeric(left) and _is_numeric(right):
        left, right = int(left), int(right)

    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def compare_versions(left: str, right: str) -> int:
    '''
    compares two (dotted) version strings, returning -1, 0, or 1 (cmp-semantics).

    Versions are split at `.`. Segments are compared pairwise, numerically if both segments
    consist of ASCII digits only, lexically otherwise. If all common segments are equal, the version
    with fewer segments is considered smaller (`1.0` < `1.0.0`).

    Different from strict semver, there is no special treatment of prerelease- or
    build-metadata-suffixes.
    '''
    left_segments = left.split('.')
    right_segments = right.split('.')

    for left_segment, right_segment in zip(left_segments, right_segments):
        if (result := _compare_segments(left_segment, right_segment)):
            return result

    # all common segments are equal - a strict prefix is smaller
    return (len(left_segments) > len(right_segments)) - (len(left_segments) < len(right_segments))


def compare_tags(left: str, right: str) -> int:
    return compare_versions(tag_key(left), tag_key(right))


def sort_tags(
    tags: collections.abc.Iterable[str],
) -> list[str]:
    '''
    returns a new list containing the given tag names in ascending version order (see
    `compare_versions`). Sorting is stable, i.e. tags with equal keys (e.g. `v1.0` and `1.0`, or
    duplicates) retain their relative order. The passed-in iterable is not modified.
    '''
    return sorted(
        tags,
        key=functools.cmp_to_key(compare_tags),
    )


def smallest_tag(tags: collections.abc.Iterable[str]) -> str | None:
    if not (sorted_tags := sort_tags(tags)):
        return None
    return sorted_tags[0]


def greatest_tag(tags: collections.abc.Iterable[str]) -> str | None:
    if not (sorted_tags := sort_tags(tags)):
        return None
    return sorted_tags[-1]
