# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging
import re

import commit_range.model as crm
import version

logger = logging.getLogger(__name__)

_unsafe_chars = re.compile(r'[^A-Za-z0-9._-]')


def single_range(from_tag: str, to_tag: str) -> crm.ResolvedRange:
    return crm.ResolvedRange(from_tag=from_tag, to_tag=to_tag)


def tags_between(
    tags: collections.abc.Iterable[str],
    from_tag: str,
    to_tag: str,
) -> list[str]:
    '''
    returns the ascending-sorted tags between (and including) the given tags. Order of
    `from_tag` and `to_tag` is irrelevant. If either of them is not contained in `tags`, an
    empty list is returned. For duplicate tags, the first occurrence is used.
    '''
    sorted_tags = version.sort_tags(tags)

    try:
        start_idx = sorted_tags.index(from_tag)
        end_idx = sorted_tags.index(to_tag)
    except ValueError:
        return []

    if start_idx > end_idx:
        start_idx, end_idx = end_idx, start_idx

    return sorted_tags[start_idx:end_idx + 1]


def step_plan(
    tags: collections.abc.Iterable[str],
    from_tag: str,
    to_tag: str,
) -> tuple[crm.ResolvedRange, ...]:
    '''
    returns the sequence of ranges between each pair of consecutive tags between `from_tag` and
    `to_tag` (ascending), e.g. for tags a, b, c, d: (a, b), (b, c), (c, d).

    @raises InsufficientTags if less than two tags are in range
    '''
    in_range = tags_between(tags, from_tag, to_tag)

    if len(in_range) < 2:
        raise crm.InsufficientTags(
            f"Not enough tags between '{from_tag}' and '{to_tag}' to step."
        )

    return tuple(
        crm.ResolvedRange(from_tag=left, to_tag=right)
        for left, right in zip(in_range, in_range[1:])
    )


def plan_ranges(
    tags: collections.abc.Iterable[str],
    resolved: crm.ResolvedRange,
    step: bool=False,
) -> tuple[crm.ResolvedRange, ...]:
    if not step:
        return (single_range(resolved.from_tag, resolved.to_tag),)

    plan = step_plan(tags, resolved.from_tag, resolved.to_tag)
    logger.info(f'stepping through {len(plan)} range(s) between {resolved}')
    return plan


def safe_tag(tag: str) -> str:
    return _unsafe_chars.sub('-', tag)


def step_file_path(output_path: str, from_tag: str, to_tag: str) -> str:
    return f'{output_path}.{safe_tag(from_tag)}..{safe_tag(to_tag)}.txt'
