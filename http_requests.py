# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import logging

import requests

from requests.adapters import HTTPAdapter

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 20
DEFAULT_MAX_REDIRECTS = 5
USER_AGENT = 'commit-range-reporter/1.0'


def mount_default_adapter(
    session: requests.Session,
    connection_pool_cache_size=32, # requests-library default
    max_pool_size=32, # requests-library default
    max_redirects: int=DEFAULT_MAX_REDIRECTS,
):
    '''
    mounts an adapter to the given session that does _not_ retry failed requests (a failed
    request is expected to abort the calling operation), and limits the amount of redirects
    that are followed.
    '''
    default_http_adapter = HTTPAdapter(
        pool_connections=connection_pool_cache_size,
        pool_maxsize=max_pool_size,
        max_retries=0,
    )
    session.mount('http://', default_http_adapter)
    session.mount('https://', default_http_adapter)
    session.max_redirects = max_redirects

    return session


def error_message(response: requests.Response) -> str:
    '''
    extracts a human-readable error message from the given (failed) response. GitHub and GitLab
    both return JSON documents for errors, carrying either a `message`, or an `error` attribute.
    '''
    msg = f'HTTP {response.status_code}'
    try:
        body = response.json()
    except ValueError:
        return msg

    if not isinstance(body, dict):
        return msg

    msg = str(body.get('message') or body.get('error') or msg)
    if (docs_url := body.get('documentation_url')):
        msg += f' | Docs: {docs_url}'

    return msg


class AuthenticatedRequestBuilder:
    '''
    Wrapper around the 'requests' library, handling authentication headers and also checking
    for http response codes.
    '''

    def __init__(
            self,
            auth_token: str=None,
            headers: dict[str, str]=None,
            timeout: float=DEFAULT_TIMEOUT_SECONDS,
            max_redirects: int=DEFAULT_MAX_REDIRECTS,
            verify_ssl: bool=True,
    ):
        self.headers = {'User-Agent': USER_AGENT}
        if auth_token:
            self.headers['Authorization'] = f'Bearer {auth_token}'
        if headers:
            self.headers.update(headers)

        self.session = mount_default_adapter(
            requests.Session(),
            max_redirects=max_redirects,
        )

        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def _check_http_code(self, result, url):
        if not result.ok:
            logger.warning(
                f'rq against {url=} returned {result.status_code=} {result.content=}'
            )
            result.raise_for_status()

    def _request(self,
            method, url: str,
            return_type: str='json',
            check_http_code=True,
            **kwargs
        ):
        headers = self.headers.copy()
        if 'headers' in kwargs:
            headers.update(kwargs['headers'])
            del kwargs['headers']

        result = method(
            url,
            headers=headers,
            verify=self.verify_ssl,
            timeout=kwargs.pop('timeout', self.timeout),
            **kwargs
        )

        if check_http_code:
            self._check_http_code(result, url)

        if return_type == 'json':
            return result.json()

        return result

    def get(self, url: str, return_type: str='json', **kwargs):
        logger.debug(f'GET {url}')
        return self._request(
                method=self.session.get,
                url=url,
                return_type=return_type,
                **kwargs
        )
