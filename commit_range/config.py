# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import dataclasses
import json
import logging
import os
import sys

import dacite

import commit_range.model as crm
import http_requests

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE_NAME = 'git.json'
DEFAULT_GITLAB_HOST = 'https://gitlab.com'


@dataclasses.dataclass(frozen=True)
class RangeReportConfig:
    '''
    configuration for creating commit-range-reports. Attribute names match the keys of the
    JSON configuration file (`git.json`).
    '''
    provider: crm.Provider = crm.Provider.GITHUB
    owner: str = 'owner-name'
    repo: str = 'repo-name'
    fromTag: str = ''
    toTag: str = ''
    stepTag: bool = False
    github_token: str | None = None
    gitlab_token: str | None = None
    gitlab_host: str = ''
    timeout: float = http_requests.DEFAULT_TIMEOUT_SECONDS
    max_redirects: int = http_requests.DEFAULT_MAX_REDIRECTS

    @property
    def range_request(self) -> crm.RangeRequest:
        return crm.RangeRequest(
            from_tag=self.fromTag,
            to_tag=self.toTag,
            step=self.stepTag,
        )

    @property
    def effective_gitlab_host(self) -> str:
        return self.gitlab_host.rstrip('/') or DEFAULT_GITLAB_HOST

    @property
    def repo_path(self) -> str:
        return f'{self.owner}/{self.repo}'


def _to_float(value) -> float:
    if isinstance(value, bool):
        raise ValueError(f'not a number: {value=}')
    return float(value)


def from_dict(raw: dict) -> RangeReportConfig:
    if not isinstance(raw, dict):
        raise crm.ConfigurationError(f'expected a JSON object, but got {type(raw).__name__}')

    # `null` values fall back to defaults
    raw = {k: v for k, v in raw.items() if v is not None}

    try:
        return dacite.from_dict(
            data_class=RangeReportConfig,
            data=raw,
            config=dacite.Config(
                type_hooks={
                    crm.Provider: crm.Provider.parse,
                    float: _to_float,
                },
            ),
        )
    except (dacite.DaciteError, ValueError) as e:
        raise crm.ConfigurationError(f'invalid configuration: {e}') from e


def find_config_file(
    explicit_path: str | None=None,
    cwd: str | None=None,
    script_dir: str | None=None,
) -> str:
    '''
    returns the path of the configuration file to use: either the explicitly passed one (which
    must exist), or `git.json` from the given (or current) working directory, or, lastly,
    `git.json` next to the invoked script (defaults to the directory of `sys.argv[0]`).

    @raises ConfigurationError if no configuration file was found
    '''
    if explicit_path:
        if not os.path.isfile(explicit_path):
            raise crm.ConfigurationError(f'Config file not found: {explicit_path}')
        return explicit_path

    if not script_dir:
        script_dir = os.path.dirname(os.path.abspath(sys.argv[0]))

    for directory in (cwd or os.getcwd(), script_dir):
        fallback = os.path.join(directory, DEFAULT_CONFIG_FILE_NAME)
        if os.path.isfile(fallback):
            return fallback

    raise crm.ConfigurationError(
        f'No configuration file found (expected: {DEFAULT_CONFIG_FILE_NAME} or explicit path)'
    )


def load_config(
    path: str,
    **overrides,
) -> RangeReportConfig:
    '''
    reads the given JSON configuration file. Passed `overrides` (e.g. `fromTag`) take precedence
    over values from the file; overrides with a value of `None` are ignored.
    '''
    try:
        with open(path, encoding='utf-8') as f:
            raw = json.load(f)
    except OSError as e:
        raise crm.ConfigurationError(f'Could not read configuration file: {path}') from e
    except ValueError as e:
        raise crm.ConfigurationError(f'Invalid JSON in {path}: {e}') from e

    if isinstance(raw, dict):
        raw = raw | {k: v for k, v in overrides.items() if v is not None}

    cfg = from_dict(raw)
    logger.debug(f'loaded configuration from {path} for {cfg.provider}:{cfg.repo_path}')
    return cfg
