# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import functools
import logging

import github3
import github3.exceptions
import github3.github
import github3.repos
import github3.session

import commit_range.config
import commit_range.model as crm
import commit_range.provider as crp
import http_requests

logger = logging.getLogger(__name__)

GITHUB_URL = 'https://github.com'


def github_api(
    cfg: commit_range.config.RangeReportConfig,
) -> github3.github.GitHub:
    '''
    returns a github3 api-object for github.com, using a session that neither retries, nor
    follows more than the configured amount of redirects.
    '''
    session = github3.session.GitHubSession(
        default_connect_timeout=cfg.timeout,
        default_read_timeout=cfg.timeout,
    )
    session = http_requests.mount_default_adapter(
        session=session,
        max_redirects=cfg.max_redirects,
    )
    session.headers['User-Agent'] = http_requests.USER_AGENT

    return github3.github.GitHub(
        token=cfg.github_token or '',
        session=session,
    )


def _provider_api_error(
    e: github3.exceptions.GitHubError,
) -> crm.ProviderApiError:
    status_code = e.code
    msg = e.msg or f'HTTP {status_code}'

    response = getattr(e, 'response', None)
    if response is not None:
        msg = http_requests.error_message(response)

    if (hint := crp.api_error_hint(status_code)):
        msg = f'{msg} - {hint}'

    return crm.ProviderApiError(
        f'API error ({status_code}): {msg}',
        status_code=status_code,
    )


def _translate_errors(function):
    @functools.wraps(function)
    def translating_errors(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except github3.exceptions.GitHubError as e:
            raise _provider_api_error(e) from e
        except github3.exceptions.TransportError as e:
            raise crm.TransportFailure(f'request against GitHub failed: {e}') from e
    return translating_errors


class GithubAdapter(crp.ProviderAdapter):
    provider = crm.Provider.GITHUB

    def __init__(
        self,
        cfg: commit_range.config.RangeReportConfig,
        github_api: github3.github.GitHub=None,
    ):
        super().__init__(cfg)
        self._github_api = github_api
        self._repository = None

    @property
    def repository(self) -> github3.repos.Repository:
        if not self._repository:
            if not self._github_api:
                self._github_api = github_api(self.cfg)
            self._repository = self._github_api.repository(self.cfg.owner, self.cfg.repo)
        return self._repository

    @_translate_errors
    def fetch_tags(self) -> list[str]:
        return [
            tag.name for tag in self.repository.tags()
            if tag.name
        ]

    @_translate_errors
    def fetch_compare_payload(self, from_tag: str, to_tag: str) -> dict:
        comparison = self.repository.compare_commits(base=from_tag, head=to_tag)
        return comparison.as_dict()

    def raw_changes(self, payload: dict):
        return payload.get('files') or ()

    def compare_url(self, from_tag: str, to_tag: str) -> str:
        return f'{GITHUB_URL}/{self.cfg.owner}/{self.cfg.repo}/compare/{from_tag}...{to_tag}'

    def normalise_commit(self, raw: dict) -> crm.CommitSummary:
        commit = raw.get('commit') or {}
        commit_author = commit.get('author') or {}
        account = raw.get('author') or {}

        return self._commit_summary(
            commit_id=raw.get('sha'),
            author_name=commit_author.get('name') or account.get('login'),
            iso_date=commit_author.get('date'),
            message=commit.get('message'),
        )

    def normalise_file_change(self, raw: dict) -> crm.FileChange:
        return crm.FileChange(
            path=raw.get('filename') or 'unknown',
            status=raw.get('status') or crm.FileChangeStatus.MODIFIED,
            additions=int(raw.get('additions') or 0),
            deletions=int(raw.get('deletions') or 0),
            patch=raw.get('patch') or None,
        )

    def reported_total(self, payload: dict) -> int:
        total = payload.get('total_commits')
        if total is None:
            return len(payload.get('commits') or ())
        return int(total)
