# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import enum
import logging

import commit_range.model as crm
import version

logger = logging.getLogger(__name__)

FIRST_KEYWORDS = ('first', '')
LATEST_KEYWORDS = ('current', 'latest', '')
PREVIEW_LIMIT = 20


class Bound(enum.Enum):
    MIN = 'min'
    MAX = 'max'


def tag_preview(
    tags: collections.abc.Sequence[str],
    limit: int=PREVIEW_LIMIT,
) -> str:
    '''
    returns a comma-separated listing of (at most) `limit` of the given tags, in the given order,
    with a trailing `, ...` if tags were omitted.
    '''
    preview = ', '.join(tags[:limit])
    if len(tags) > limit:
        preview += ', ...'
    return preview


def filter_by_prefix(
    tags: collections.abc.Iterable[str],
    prefix: str,
) -> list[str]:
    '''
    returns those tags whose comparison key (see `version.tag_key`) is either equal to the given
    prefix, or starts with the prefix followed by a `.` (i.e. prefix matches honour dot-separated
    segment boundaries: `1.0` matches `v1.0` and `v1.0.3`, but neither `v1.01` nor `v1.0-rc1`).

    An empty prefix matches all tags. The prefix itself is also passed through `version.tag_key`,
    so `v1.0` selects the same tags as `1.0` (a literal match against keys would never match a
    `v`-prefixed request).
    '''
    tags = list(tags)
    if not prefix:
        return tags

    prefix = version.tag_key(prefix)
    segment_prefix = prefix.rstrip('.') + '.'

    return [
        tag for tag in tags
        if (key := version.tag_key(tag)) == prefix or key.startswith(segment_prefix)
    ]


def resolve_one(
    request: str,
    tags: collections.abc.Sequence[str],
    which: Bound,
) -> str | None:
    if request:
        candidates = filter_by_prefix(tags, request)
    else:
        candidates = list(tags)

    if not candidates:
        logger.debug(f'no tag matches {request=}')
        return None

    if which is Bound.MAX:
        return version.greatest_tag(candidates)
    return version.smallest_tag(candidates)


def resolve_endpoints(
    from_request: str,
    to_request: str,
    tags: collections.abc.Sequence[str],
) -> tuple[str | None, str | None]:
    '''
    resolves the given (symbolic, or partial) tag requests into actual tag names.

    `from_request`: `first` (or empty) resolves to the earliest tag, any other value is treated as
                    a version-prefix, resolving to the earliest matching tag.
    `to_request`:   `current`, `latest` (or empty) resolve to the latest tag, any other value is
                    treated as a version-prefix, resolving to the latest matching tag.

    Keywords are matched case-insensitively. Unresolvable requests yield `None`.
    '''
    from_request = from_request or ''
    to_request = to_request or ''

    if from_request.lower() in FIRST_KEYWORDS:
        resolved_from = version.smallest_tag(tags)
    else:
        resolved_from = resolve_one(from_request, tags, Bound.MIN)

    if to_request.lower() in LATEST_KEYWORDS:
        resolved_to = version.greatest_tag(tags)
    else:
        resolved_to = resolve_one(to_request, tags, Bound.MAX)

    return resolved_from, resolved_to


def resolve_range(
    from_request: str,
    to_request: str,
    tags: collections.abc.Sequence[str],
) -> crm.ResolvedRange:
    '''
    like `resolve_endpoints`, but raises if either endpoint cannot be resolved.

    @raises TagSetEmpty if no tags were passed
    @raises EndpointUnresolved if (at least) one of the endpoints did not match any tag
    '''
    if not tags:
        raise crm.TagSetEmpty('No tags found in repository.')

    resolved_from, resolved_to = resolve_endpoints(from_request, to_request, tags)

    if not resolved_from or not resolved_to:
        raise crm.EndpointUnresolved(
            from_request=from_request,
            to_request=to_request,
            resolved_from=resolved_from,
            resolved_to=resolved_to,
            preview=tag_preview(version.sort_tags(tags)),
        )

    logger.debug(f'resolved {from_request=} {to_request=} to {resolved_from}...{resolved_to}')
    return crm.ResolvedRange(from_tag=resolved_from, to_tag=resolved_to)
