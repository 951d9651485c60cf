# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import pytest

import commit_range.config
import commit_range.github


class FakeGithubAdapter(commit_range.github.GithubAdapter):
    '''
    GitHub adapter serving tags and compare payloads from memory, recording the issued
    compare-requests.
    '''
    def __init__(self, cfg, tags, payloads=None, default_payload=None):
        super().__init__(cfg, github_api=object())
        self.tags = list(tags)
        self.payloads = payloads or {}
        self.default_payload = default_payload
        self.compare_requests = []

    def fetch_tags(self):
        return list(self.tags)

    def fetch_compare_payload(self, from_tag, to_tag):
        self.compare_requests.append((from_tag, to_tag))
        if (from_tag, to_tag) in self.payloads:
            return self.payloads[(from_tag, to_tag)]
        return self.default_payload or {'commits': [], 'files': []}


@pytest.fixture
def cfg_factory():
    def _cfg(**kwargs):
        return commit_range.config.RangeReportConfig(
            **({'owner': 'gardener', 'repo': 'cc-utils'} | kwargs)
        )
    return _cfg


@pytest.fixture
def tags():
    return ['v1.0.0', 'v1.1.0', 'v1.2.0']


@pytest.fixture
def github_commit():
    return {
        'sha': '0123456789abcdef0123456789abcdef01234567',
        'commit': {
            'author': {
                'name': 'Jane Doe',
                'date': '2024-03-01T12:34:56Z',
            },
            'message': 'Add tag ordering\n\nversions are compared by\ndotted segments\n',
        },
        'author': {'login': 'jdoe'},
    }


@pytest.fixture
def github_payload(github_commit):
    return {
        'total_commits': 1,
        'commits': [github_commit],
        'files': [
            {
                'filename': 'version.py',
                'status': 'modified',
                'additions': 2,
                'deletions': 1,
                'patch': '@@ -1,2 +1,3 @@\n-old\n+new\n+newer',
            },
            {
                'filename': 'obsolete.py',
                'status': 'removed',
                'additions': 0,
                'deletions': 10,
                'patch': '@@ -1,10 +0,0 @@\n-gone',
            },
        ],
    }


@pytest.fixture
def gitlab_payload():
    return {
        'commits': [
            {
                'id': 'fedcba9876543210fedcba9876543210fedcba98',
                'short_id': 'fedcba98',
                'author_name': 'John Roe',
                'created_at': '2024-03-02T08:15:00.000+02:00',
                'title': 'Fix step plan',
                'message': 'Fix step plan\n',
            },
        ],
        'diffs': [
            {
                'old_path': 'plan.py',
                'new_path': 'plan.py',
                'new_file': False,
                'renamed_file': False,
                'deleted_file': False,
                'diff': '--- a/plan.py\n+++ b/plan.py\n@@ -1 +1 @@\n-a\n+b\n',
            },
            {
                'old_path': 'added.py',
                'new_path': 'added.py',
                'new_file': True,
                'renamed_file': False,
                'deleted_file': False,
                'diff': '+x\n+y\n',
            },
            {
                'old_path': 'dropped.py',
                'new_path': 'dropped.py',
                'new_file': False,
                'renamed_file': False,
                'deleted_file': True,
                'diff': '-z\n',
            },
        ],
    }


@pytest.fixture
def fake_adapter_factory(cfg_factory):
    def _adapter(tags, cfg=None, **kwargs):
        return FakeGithubAdapter(
            cfg=cfg or cfg_factory(),
            tags=tags,
            **kwargs,
        )
    return _adapter
