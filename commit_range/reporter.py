# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import collections.abc
import logging
import os

import commit_range.config
import commit_range.model as crm
import commit_range.plan
import commit_range.provider
import commit_range.report
import commit_range.resolve

logger = logging.getLogger(__name__)


def ensure_dir(path: str):
    if not path or path == '.' or os.path.isdir(path):
        return

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise crm.RangeReportError(f'Could not create output directory: {path}') from e


def write_report(path: str, content: str):
    try:
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
    except OSError as e:
        raise crm.RangeReportError(f'Could not write to output file: {path}') from e


class RangeReporter:
    '''
    creates commit-range-reports for the repository and tag-range specified by the given
    configuration.

    Tags are resolved, and ranges are planned before any report is written. Reports are then
    created strictly sequentially (one compare-request, and one output file per range).
    '''

    def __init__(
        self,
        cfg: commit_range.config.RangeReportConfig,
        adapter: commit_range.provider.ProviderAdapter=None,
    ):
        self.cfg = cfg
        self.adapter = adapter or commit_range.provider.create_adapter(cfg)
        self.assembler = commit_range.report.ReportAssembler(cfg)

    def fetch_tags(self) -> list[str]:
        tags = self.adapter.fetch_tags()
        if not tags:
            raise crm.TagSetEmpty('No tags found in repository.')
        logger.debug(f'found {len(tags)} tag(s) in {self.cfg.repo_path}')
        return tags

    def plan(
        self,
        tags: collections.abc.Sequence[str],
        request: crm.RangeRequest=None,
    ) -> tuple[crm.ResolvedRange, ...]:
        request = request or self.cfg.range_request

        resolved = commit_range.resolve.resolve_range(
            from_request=request.from_tag,
            to_request=request.to_tag,
            tags=tags,
        )
        return commit_range.plan.plan_ranges(
            tags=tags,
            resolved=resolved,
            step=request.step,
        )

    def render_range(
        self,
        resolved: crm.ResolvedRange,
        tags: collections.abc.Sequence[str],
    ) -> str:
        result = self.adapter.fetch_compare(resolved.from_tag, resolved.to_tag)

        return self.assembler.render(
            from_tag=resolved.from_tag,
            to_tag=resolved.to_tag,
            result=result,
            compare_url=self.adapter.compare_url(resolved.from_tag, resolved.to_tag),
            available_tags=tags,
        )

    def run(
        self,
        output_path: str,
        request: crm.RangeRequest=None,
    ) -> list[str]:
        '''
        writes the report(s) for the configured (or passed) range request.

        In single mode, exactly one report is written to `output_path`. In step mode, one
        report is written per pair of consecutive tags, named
        `{output_path}.{from}..{to}.txt`.

        @returns the paths of the written reports
        '''
        request = request or self.cfg.range_request
        tags = self.fetch_tags()
        ranges = self.plan(tags, request)

        ensure_dir(os.path.dirname(output_path))

        written = []
        for resolved in ranges:
            if request.step:
                path = commit_range.plan.step_file_path(
                    output_path,
                    resolved.from_tag,
                    resolved.to_tag,
                )
            else:
                path = output_path

            write_report(path, self.render_range(resolved, tags))
            logger.info(f'report written to: {path} (from {resolved.from_tag} to {resolved.to_tag})')
            written.append(path)

        return written
