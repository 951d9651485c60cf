# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import dataclasses
import enum
import logging

logger = logging.getLogger(__name__)


class Provider(enum.StrEnum):
    GITHUB = 'github'
    GITLAB = 'gitlab'

    @staticmethod
    def parse(value: 'str | Provider') -> 'Provider':
        '''
        parses the given (case-insensitive) provider name. Any value other than `gitlab` is
        treated as `github`.
        '''
        if isinstance(value, Provider):
            return value

        normalised = str(value).strip().lower()
        if normalised == Provider.GITLAB:
            return Provider.GITLAB
        if normalised != Provider.GITHUB:
            logger.warning(f'unknown provider {value=} - falling back to {Provider.GITHUB}')
        return Provider.GITHUB


class FileChangeStatus(enum.StrEnum):
    ADDED = 'added'
    MODIFIED = 'modified'
    REMOVED = 'removed'
    RENAMED = 'renamed'


@dataclasses.dataclass(frozen=True)
class RangeRequest:
    '''
    the (raw) range requested by the user. `from_tag` and `to_tag` need not be actual tag names;
    they may also be empty, one of the keywords `first`, `current`, `latest`, or a version-prefix.
    '''
    from_tag: str = ''
    to_tag: str = ''
    step: bool = False


@dataclasses.dataclass(frozen=True)
class ResolvedRange:
    from_tag: str
    to_tag: str

    def __str__(self):
        return f'{self.from_tag}...{self.to_tag}'


@dataclasses.dataclass(frozen=True)
class CommitSummary:
    short_id: str
    author_name: str
    date: str
    first_line: str
    extra_lines: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class FileChange:
    path: str
    status: FileChangeStatus | str
    additions: int = 0
    deletions: int = 0
    patch: str | None = None

    @property
    def removed(self) -> bool:
        return self.status == FileChangeStatus.REMOVED


@dataclasses.dataclass(frozen=True)
class CompareResult:
    '''
    provider-neutral outcome of comparing two tags.

    `reported_total` is the commit count as reported by the provider (if it reports one at
    all), which may differ from the amount of returned commits for large ranges.
    '''
    commits: tuple[CommitSummary, ...] = ()
    changes: tuple[FileChange, ...] = ()
    reported_total: int | None = None

    @property
    def empty(self) -> bool:
        return not self.commits


class RangeReportError(RuntimeError):
    pass


class ConfigurationError(RangeReportError, ValueError):
    pass


class TagSetEmpty(RangeReportError):
    pass


class EndpointUnresolved(RangeReportError):
    def __init__(
        self,
        from_request: str,
        to_request: str,
        resolved_from: str | None,
        resolved_to: str | None,
        preview: str,
    ):
        self.from_request = from_request
        self.to_request = to_request
        self.resolved_from = resolved_from
        self.resolved_to = resolved_to
        self.preview = preview

        super().__init__(
            'Could not resolve fromTag/toTag. '
            f"fromTag='{from_request}' -> '{resolved_from or 'none'}', "
            f"toTag='{to_request}' -> '{resolved_to or 'none'}'. "
            f'Available tags (first 20): {preview}'
        )


class InsufficientTags(RangeReportError):
    pass


class ProviderApiError(RangeReportError):
    def __init__(self, msg: str, status_code: int | None=None):
        self.status_code = status_code
        super().__init__(msg)


class TransportFailure(RangeReportError):
    pass
