#! /usr/bin/env python3
# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import argparse
import logging
import os
import sys

import ci.log
import ci.util
import commit_range.config
import commit_range.model as crm
import commit_range.reporter

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_FILE = 'commits.txt'


def parse_args(argv: list[str] | None=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='commit-range',
        description=(
            'Write a report of the commits and file-changes between two tags of a GitHub or '
            'GitLab repository, including a prompt for authoring release notes.'
        ),
    )
    parser.add_argument(
        'output',
        nargs='?',
        default=DEFAULT_OUTPUT_FILE,
        help=f'path to write the report to (default: {DEFAULT_OUTPUT_FILE})',
    )
    parser.add_argument(
        '--config', '-c',
        type=ci.util.existing_file,
        help=(
            'JSON configuration file (default: '
            f'{commit_range.config.DEFAULT_CONFIG_FILE_NAME} in working directory)'
        ),
    )
    parser.add_argument(
        '--from-tag',
        help='overwrites `fromTag` (tag, version-prefix, or `first`)',
    )
    parser.add_argument(
        '--to-tag',
        help='overwrites `toTag` (tag, version-prefix, `latest`, or `current`)',
    )
    parser.add_argument(
        '--step',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='overwrites `stepTag` (one report per pair of consecutive tags)',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='enable debug logging',
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None=None) -> int:
    args = parse_args(argv)

    ci.log.configure_default_logging(
        stdout_level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        cfg = commit_range.config.load_config(
            commit_range.config.find_config_file(explicit_path=args.config),
            fromTag=args.from_tag,
            toTag=args.to_tag,
            stepTag=args.step,
        )
        reporter = commit_range.reporter.RangeReporter(cfg)
        reporter.run(output_path=os.path.abspath(args.output))
    except crm.RangeReportError as e:
        ci.util.error(str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
