# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import functools
import logging
import os

import mako.template

import commit_range.config
import commit_range.model as crm
import commit_range.resolve

logger = logging.getLogger(__name__)

own_dir = os.path.abspath(os.path.dirname(__file__))
PROMPT_TEMPLATE_FILE = os.path.join(own_dir, 'release_notes_prompt.mako')

HEADER_RULE = '=' * 60
DIVIDER = '-' * 60
PATCH_FENCE = '-' * 29
NO_COMMITS_NOTICE = 'No commits found or tags are invalid.'


@functools.cache
def prompt_template(path: str=PROMPT_TEMPLATE_FILE) -> mako.template.Template:
    return mako.template.Template(
        filename=path,
        input_encoding='utf-8',
    )


class ReportAssembler:
    '''
    renders commit-range-reports (commits, file-changes, and a prompt for authoring release
    notes) from provider-neutral compare results.
    '''

    def __init__(self, cfg: commit_range.config.RangeReportConfig):
        self.cfg = cfg

    def header_lines(self, from_tag: str, to_tag: str) -> list[str]:
        return [
            f'Commits for [{self.cfg.provider}] {self.cfg.repo_path} from {from_tag} to {to_tag}',
            HEADER_RULE,
        ]

    def commit_lines(self, commit: crm.CommitSummary) -> list[str]:
        return [
            f'- [{commit.short_id}] {commit.first_line}',
            f'  by {commit.author_name} on {commit.date}',
            *(f'  {line}' for line in commit.extra_lines),
        ]

    def commit_count_line(self, result: crm.CompareResult) -> str:
        line = f'Commit count: {len(result.commits)}'
        if result.reported_total is not None:
            line += f' (reported total: {result.reported_total})'
        return line

    def file_change_lines(self, changes: collections.abc.Sequence[crm.FileChange]) -> list[str]:
        if not changes:
            return []

        lines = ['', 'File changes:']
        for change in changes:
            # removed files are listed in the payload, but not rendered
            if change.removed:
                continue

            lines.append(
                f'- {change.path} ({change.status}, +{change.additions}/-{change.deletions})'
            )
            if change.patch:
                lines.extend((PATCH_FENCE, change.patch, PATCH_FENCE))

        return lines

    def no_commits_lines(self, available_tags: collections.abc.Sequence[str]) -> list[str]:
        lines = [NO_COMMITS_NOTICE]
        if available_tags:
            lines.append(
                f'Available tags: {commit_range.resolve.tag_preview(available_tags)}'
            )
        lines.append('')
        return lines

    def release_notes_prompt(self, from_tag: str, to_tag: str, compare_url: str) -> str:
        return prompt_template().render(
            from_tag=from_tag,
            to_tag=to_tag,
            provider=str(self.cfg.provider),
            owner=self.cfg.owner,
            repo=self.cfg.repo,
            compare_url=compare_url,
        )

    def render(
        self,
        from_tag: str,
        to_tag: str,
        result: crm.CompareResult,
        compare_url: str,
        available_tags: collections.abc.Sequence[str]=(),
    ) -> str:
        '''
        renders the report for the given range. If `result` contains no commits, the report is
        reduced to a notice listing (some of) the `available_tags`.
        '''
        lines = self.header_lines(from_tag, to_tag)

        if result.empty:
            logger.info(f'no commits found between {from_tag} and {to_tag}')
            lines.extend(self.no_commits_lines(available_tags))
            return '\n'.join(lines) + '\n'

        for commit in result.commits:
            lines.extend(self.commit_lines(commit))

        lines.append(DIVIDER)
        lines.append(self.commit_count_line(result))
        lines.extend(self.file_change_lines(result.changes))
        lines.append('')

        return '\n'.join(lines) + '\n' + self.release_notes_prompt(
            from_tag=from_tag,
            to_tag=to_tag,
            compare_url=compare_url,
        )
