# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import textwrap

import pytest

import commit_range.github
import commit_range.gitlab
import commit_range.model as crm
import commit_range.report as examinee


COMPARE_URL = 'https://github.com/gardener/cc-utils/compare/v1.0.0...v1.1.0'


@pytest.fixture
def assembler(cfg_factory):
    return examinee.ReportAssembler(cfg=cfg_factory())


@pytest.fixture
def github_result(cfg_factory, github_payload):
    adapter = commit_range.github.GithubAdapter(cfg=cfg_factory(), github_api=object())
    return adapter.normalise_compare(github_payload)


def test_render(assembler, github_result):
    report = assembler.render(
        from_tag='v1.0.0',
        to_tag='v1.1.0',
        result=github_result,
        compare_url=COMPARE_URL,
    )

    expected_listing = textwrap.dedent('''\
        Commits for [github] gardener/cc-utils from v1.0.0 to v1.1.0
        ============================================================
        - [0123456] Add tag ordering
          by Jane Doe on 2024-03-01 12:34
          versions are compared by
          dotted segments
        ------------------------------------------------------------
        Commit count: 1 (reported total: 1)

        File changes:
        - version.py (modified, +2/-1)
        -----------------------------
        @@ -1,2 +1,3 @@
        -old
        +new
        +newer
        -----------------------------

        Please generate Release Notes in the following style:
    ''')

    assert report.startswith(expected_listing)
    # removed files are omitted
    assert 'obsolete.py' not in report


def test_render_release_notes_prompt(assembler, github_result):
    report = assembler.render(
        from_tag='v1.0.0',
        to_tag='v1.1.0',
        result=github_result,
        compare_url=COMPARE_URL,
    )

    assert '## Release v1.1.0 – Changelog Summary' in report
    assert f'\n{COMPARE_URL}\n' in report
    assert f'**Full Changelog**: [{COMPARE_URL}]({COMPARE_URL})' in report


def test_render_gitlab_omits_reported_total(cfg_factory, gitlab_payload):
    cfg = cfg_factory(provider=crm.Provider.GITLAB)
    adapter = commit_range.gitlab.GitlabAdapter(cfg=cfg, request_builder=object())
    assembler = examinee.ReportAssembler(cfg=cfg)

    report = assembler.render(
        from_tag='v1.0.0',
        to_tag='v1.1.0',
        result=adapter.normalise_compare(gitlab_payload),
        compare_url='https://gitlab.com/gardener/cc-utils/-/compare/v1.0.0...v1.1.0',
    )

    assert report.startswith('Commits for [gitlab] gardener/cc-utils from v1.0.0 to v1.1.0\n')
    assert '\nCommit count: 1\n' in report
    assert 'reported total' not in report
    assert '- added.py (added, +2/-0)' in report
    assert 'dropped.py' not in report


def test_render_without_commits(assembler):
    report = assembler.render(
        from_tag='v1.0.0',
        to_tag='v1.1.0',
        result=crm.CompareResult(),
        compare_url=COMPARE_URL,
        available_tags=['v1.1.0', 'v1.0.0'],
    )

    assert report == textwrap.dedent('''\
        Commits for [github] gardener/cc-utils from v1.0.0 to v1.1.0
        ============================================================
        No commits found or tags are invalid.
        Available tags: v1.1.0, v1.0.0

    ''')
    assert 'Release Notes' not in report


def test_no_commits_lines_caps_available_tags(assembler):
    tags = [f'v1.{minor}.0' for minor in range(30)]

    lines = assembler.no_commits_lines(tags)

    assert lines[1].startswith('Available tags: v1.0.0, v1.1.0')
    assert lines[1].endswith('v1.19.0, ...')


def test_file_change_lines(assembler):
    changes = (
        crm.FileChange(path='a.py', status='modified', additions=1, deletions=0),
        crm.FileChange(path='b.py', status='removed', deletions=3, patch='-x'),
    )

    assert assembler.file_change_lines(changes) == [
        '',
        'File changes:',
        '- a.py (modified, +1/-0)',
    ]
    assert assembler.file_change_lines(()) == []
