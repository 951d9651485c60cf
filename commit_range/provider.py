# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import abc
import collections.abc
import logging

import dateutil.parser

import commit_range.config
import commit_range.model as crm

logger = logging.getLogger(__name__)

UNKNOWN_AUTHOR = 'Unknown'
SHORT_ID_LENGTH = 7
DATE_FORMAT = '%Y-%m-%d %H:%M'
AUTH_HINT = (
    'Hint: For GitLab, use PRIVATE-TOKEN: <PAT> or a valid OAuth token. '
    'On self-hosted instances, verify gitlab_host.'
)


def split_message(message: str) -> tuple[str, tuple[str, ...]]:
    '''
    splits the given commit message into its first line, and the remaining (non-blank) lines.
    '''
    lines = (message or '').strip().splitlines()
    if not lines:
        return '', ()

    first_line, *extra_lines = lines
    return first_line, tuple(line for line in extra_lines if line.strip())


def format_date(iso_timestamp: str | None) -> str:
    '''
    formats the given ISO-8601 timestamp as `YYYY-MM-DD HH:MM`, retaining its timezone offset.
    Returns an empty str for absent timestamps.
    '''
    if not iso_timestamp:
        return ''

    try:
        return dateutil.parser.isoparse(iso_timestamp).strftime(DATE_FORMAT)
    except ValueError:
        logger.warning(f'failed to parse commit date {iso_timestamp=} - using it verbatim')
        return iso_timestamp


def short_id(commit_id: str | None) -> str:
    return (commit_id or '')[:SHORT_ID_LENGTH]


def api_error_hint(status_code: int | None) -> str | None:
    if status_code in (401, 403):
        return AUTH_HINT
    return None


class ProviderAdapter(abc.ABC):
    '''
    base class for provider-specific access to tags, and tag-comparisons. Implementations are
    expected to translate the provider's payloads into provider-neutral `CompareResult`s, and
    to raise `ProviderApiError` / `TransportFailure` for failed requests.
    '''
    provider: crm.Provider

    def __init__(self, cfg: commit_range.config.RangeReportConfig):
        self.cfg = cfg

    @abc.abstractmethod
    def fetch_tags(self) -> list[str]:
        '''
        returns the names of all of the repository's tags, in the order returned by the provider
        '''
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_compare_payload(self, from_tag: str, to_tag: str) -> dict:
        raise NotImplementedError

    @abc.abstractmethod
    def compare_url(self, from_tag: str, to_tag: str) -> str:
        '''
        returns the URL of the provider's web-view comparing the given tags
        '''
        raise NotImplementedError

    @abc.abstractmethod
    def normalise_commit(self, raw: dict) -> crm.CommitSummary:
        raise NotImplementedError

    @abc.abstractmethod
    def normalise_file_change(self, raw: dict) -> crm.FileChange:
        raise NotImplementedError

    @abc.abstractmethod
    def raw_changes(self, payload: dict) -> collections.abc.Iterable[dict]:
        '''
        returns the (raw) file-changes contained in the given compare-payload
        '''
        raise NotImplementedError

    def reported_total(self, payload: dict) -> int | None:
        return None

    def fetch_compare(self, from_tag: str, to_tag: str) -> crm.CompareResult:
        logger.debug(f'comparing {from_tag}...{to_tag} ({self.provider}:{self.cfg.repo_path})')
        payload = self.fetch_compare_payload(from_tag, to_tag)
        return self.normalise_compare(payload)

    def normalise_compare(self, payload: dict) -> crm.CompareResult:
        commits = tuple(
            self.normalise_commit(raw_commit)
            for raw_commit in payload.get('commits') or ()
        )
        if not commits:
            return crm.CompareResult()

        return crm.CompareResult(
            commits=commits,
            changes=tuple(
                self.normalise_file_change(raw_change)
                for raw_change in self.raw_changes(payload)
            ),
            reported_total=self.reported_total(payload),
        )

    def _commit_summary(
        self,
        commit_id: str | None,
        author_name: str | None,
        iso_date: str | None,
        message: str | None,
    ) -> crm.CommitSummary:
        first_line, extra_lines = split_message(message)
        return crm.CommitSummary(
            short_id=short_id(commit_id),
            author_name=author_name or UNKNOWN_AUTHOR,
            date=format_date(iso_date),
            first_line=first_line,
            extra_lines=extra_lines,
        )


def create_adapter(cfg: commit_range.config.RangeReportConfig) -> ProviderAdapter:
    # late import - provider modules import this module
    import commit_range.github
    import commit_range.gitlab

    adapters = {
        crm.Provider.GITHUB: commit_range.github.GithubAdapter,
        crm.Provider.GITLAB: commit_range.gitlab.GitlabAdapter,
    }
    return adapters[crm.Provider.parse(cfg.provider)](cfg)
