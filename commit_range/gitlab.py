# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import logging
import urllib.parse

import requests

import ci.util
import commit_range.config
import commit_range.model as crm
import commit_range.provider as crp
import http_requests

logger = logging.getLogger(__name__)

TAGS_PAGE_SIZE = 100


def count_diff_lines(diff: str | None) -> tuple[int, int]:
    '''
    counts added and removed lines in the given unified diff. File-header lines (`+++` and
    `---`) are not counted.

    @returns (additions, deletions)
    '''
    additions = 0
    deletions = 0

    for line in (diff or '').split('\n'):
        if not line:
            continue
        if line.startswith('+') and not line.startswith('+++'):
            additions += 1
        elif line.startswith('-') and not line.startswith('---'):
            deletions += 1

    return additions, deletions


def file_change_status(raw: dict) -> crm.FileChangeStatus:
    if raw.get('new_file'):
        return crm.FileChangeStatus.ADDED
    if raw.get('deleted_file'):
        return crm.FileChangeStatus.REMOVED
    if raw.get('renamed_file'):
        return crm.FileChangeStatus.RENAMED
    return crm.FileChangeStatus.MODIFIED


class GitlabAdapter(crp.ProviderAdapter):
    provider = crm.Provider.GITLAB

    def __init__(
        self,
        cfg: commit_range.config.RangeReportConfig,
        request_builder: http_requests.AuthenticatedRequestBuilder=None,
    ):
        super().__init__(cfg)

        if not request_builder:
            headers = {'Accept': 'application/json'}
            if cfg.gitlab_token:
                headers['PRIVATE-TOKEN'] = cfg.gitlab_token
            request_builder = http_requests.AuthenticatedRequestBuilder(
                auth_token=cfg.gitlab_token,
                headers=headers,
                timeout=cfg.timeout,
                max_redirects=cfg.max_redirects,
            )

        self.request_builder = request_builder

    @property
    def project_id(self) -> str:
        return urllib.parse.quote(self.cfg.repo_path, safe='')

    def _api_url(self, *parts: str) -> str:
        return ci.util.urljoin(
            self.cfg.effective_gitlab_host,
            'api/v4/projects',
            self.project_id,
            'repository',
            *parts,
        )

    def _get(self, url: str, params: dict=None) -> requests.Response:
        try:
            return self.request_builder.get(url, return_type=None, params=params)
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            msg = http_requests.error_message(e.response) if e.response is not None else str(e)
            if (hint := crp.api_error_hint(status_code)):
                msg = f'{msg} - {hint}'
            raise crm.ProviderApiError(
                f'API error ({status_code}): {msg}',
                status_code=status_code,
            ) from e
        except requests.RequestException as e:
            raise crm.TransportFailure(f'request against GitLab failed: {e}') from e

    def _json(self, response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise crm.ProviderApiError(
                f'unexpected (non-JSON) response from {response.url}',
                status_code=response.status_code,
            ) from e

    def fetch_tags(self) -> list[str]:
        tags = []
        url = self._api_url('tags')
        params = {'per_page': TAGS_PAGE_SIZE}

        while url:
            response = self._get(url, params=params)
            tags.extend(
                name for tag in self._json(response) or ()
                if (name := str(tag.get('name') or ''))
            )
            # the `next`-link carries all query-params
            url = response.links.get('next', {}).get('url')
            params = None

        return tags

    def fetch_compare_payload(self, from_tag: str, to_tag: str) -> dict:
        response = self._get(
            self._api_url('compare'),
            params={'from': from_tag, 'to': to_tag},
        )
        return self._json(response) or {}

    def compare_url(self, from_tag: str, to_tag: str) -> str:
        return (
            f'{self.cfg.effective_gitlab_host}/{self.cfg.owner}/{self.cfg.repo}'
            f'/-/compare/{from_tag}...{to_tag}'
        )

    def raw_changes(self, payload: dict):
        return payload.get('diffs') or ()

    def normalise_commit(self, raw: dict) -> crm.CommitSummary:
        return self._commit_summary(
            commit_id=raw.get('id') or raw.get('short_id'),
            author_name=raw.get('author_name'),
            iso_date=raw.get('created_at'),
            message=raw.get('message') or raw.get('title'),
        )

    def normalise_file_change(self, raw: dict) -> crm.FileChange:
        additions, deletions = count_diff_lines(raw.get('diff'))

        return crm.FileChange(
            path=raw.get('new_path') or raw.get('old_path') or 'unknown',
            status=file_change_status(raw),
            additions=additions,
            deletions=deletions,
            patch=raw.get('diff') or None,
        )
