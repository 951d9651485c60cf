# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import commit_range.github
import commit_range.gitlab
import commit_range.model as crm
import commit_range.provider as examinee


def test_split_message():
    assert examinee.split_message('Subject') == ('Subject', ())
    assert examinee.split_message('Subject\n\nBody line 1\n\n  indented\n') == \
        ('Subject', ('Body line 1', '  indented'))
    assert examinee.split_message('\n  Subject\r\nbody\r\n') == ('Subject', ('body',))
    assert examinee.split_message('') == ('', ())
    assert examinee.split_message(None) == ('', ())


def test_format_date():
    assert examinee.format_date('2024-03-01T12:34:56Z') == '2024-03-01 12:34'
    # offset is retained (no conversion to UTC)
    assert examinee.format_date('2024-03-02T08:15:00.000+02:00') == '2024-03-02 08:15'
    assert examinee.format_date('') == ''
    assert examinee.format_date(None) == ''


def test_format_date_falls_back_to_verbatim_value():
    assert examinee.format_date('yesterday') == 'yesterday'


def test_short_id():
    assert examinee.short_id('0123456789abcdef') == '0123456'
    assert examinee.short_id('abc') == 'abc'
    assert examinee.short_id(None) == ''


def test_api_error_hint():
    assert examinee.api_error_hint(401) == examinee.AUTH_HINT
    assert examinee.api_error_hint(403) == examinee.AUTH_HINT
    assert examinee.api_error_hint(404) is None


def test_create_adapter(cfg_factory):
    github_adapter = examinee.create_adapter(cfg_factory(provider=crm.Provider.GITHUB))
    gitlab_adapter = examinee.create_adapter(cfg_factory(provider=crm.Provider.GITLAB))

    assert isinstance(github_adapter, commit_range.github.GithubAdapter)
    assert isinstance(gitlab_adapter, commit_range.gitlab.GitlabAdapter)


def test_empty_compare_yields_empty_result(cfg_factory):
    adapter = examinee.create_adapter(cfg_factory())

    result = adapter.normalise_compare({'commits': [], 'files': [{'filename': 'a'}]})

    assert result.empty
    assert result.changes == ()


def test_raw_changes_is_provider_specific():
    assert 'raw_changes' in examinee.ProviderAdapter.__abstractmethods__
