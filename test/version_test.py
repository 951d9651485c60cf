# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import pytest

import version


@pytest.mark.parametrize('tag,expected', (
    ('v1.2.0', '1.2.0'),
    ('V1.2.0', '1.2.0'),
    ('1.2.0', '1.2.0'),
    ('vv1.0', 'v1.0'),
    ('', ''),
    ('release-1', 'release-1'),
))
def test_tag_key(tag, expected):
    assert version.tag_key(tag) == expected


def test_tag_key_reapplication():
    assert version.tag_key(version.tag_key('1.2.0')) == '1.2.0'
    assert version.tag_key(version.tag_key('vv1.0')) == '1.0'


def test_compare_versions():
    assert version.compare_versions('1.0.0', '1.0.0') == 0
    assert version.compare_versions('1.2.0', '1.10.0') == -1
    assert version.compare_versions('2.0', '1.99.99') == 1

    # strict prefix is smaller
    assert version.compare_versions('1.0', '1.0.0') == -1
    assert version.compare_versions('1.0.0', '1.0') == 1

    # non-numeric segments are compared lexically
    assert version.compare_versions('1.0.a', '1.0.b') == -1
    assert version.compare_versions('1.0-rc1', '1.0-rc2') == -1


def test_sort_tags():
    tags = ['v2.0.0', 'v1.10.0', 'v1.2.0', '1.9.1', 'v1.2']

    assert version.sort_tags(tags) == ['v1.2', 'v1.2.0', '1.9.1', 'v1.10.0', 'v2.0.0']


def test_sort_tags_does_not_modify_input():
    tags = ['v2.0.0', 'v1.0.0']

    version.sort_tags(tags)

    assert tags == ['v2.0.0', 'v1.0.0']


def test_sort_tags_is_stable():
    # equal keys retain their relative order
    assert version.sort_tags(['1.0.0', 'v0.1', 'v1.0.0', 'V1.0.0']) == \
        ['v0.1', '1.0.0', 'v1.0.0', 'V1.0.0']
    assert version.sort_tags(['v1.0.0', '1.0.0', 'v1.0.0']) == ['v1.0.0', '1.0.0', 'v1.0.0']


def test_sort_tags_is_idempotent():
    tags = ['v3.0', 'v1.0.0', '1.0.0', 'v2.1.0', 'v2.0.9']
    sorted_once = version.sort_tags(tags)

    assert version.sort_tags(sorted_once) == sorted_once


def test_smallest_and_greatest_tag():
    tags = ['v2.0.0', 'v1.0.0', 'v1.1.0']

    assert version.smallest_tag(tags) == 'v1.0.0'
    assert version.greatest_tag(tags) == 'v2.0.0'

    assert version.smallest_tag([]) is None
    assert version.greatest_tag([]) is None


def test_non_ascii_digits_are_compared_lexically():
    assert version.compare_versions('1.²', '1.2') == 1
    assert version.sort_tags(['v1.²', 'v1.2', 'v1.10']) == ['v1.2', 'v1.10', 'v1.²']
