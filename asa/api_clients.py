# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# pylint: disable=C0330, g-bad-import-order, g-multiple-import

"""Module for defining client to interact with Search Ads API."""

from __future__ import annotations

import dataclasses
import datetime
import logging
import os
from pathlib import Path
from typing import Any, Final

import requests
import smart_open
import yaml

from asa import exceptions

SEARCH_ADS_API_VERSION: Final = 'v5'
DEFAULT_BASE_URL: Final = (
  f'https://api.searchads.apple.com/api/{SEARCH_ADS_API_VERSION}/'
)
TOKEN_URL: Final = 'https://appleid.apple.com/auth/oauth2/token'
DEFAULT_TIMEOUT: Final = 30

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class PageDetail:
  """Pagination details of a listing response."""

  total_results: int | None = None
  start_index: int | None = None
  items_per_page: int | None = None

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> PageDetail:
    return cls(
      total_results=data.get('totalResults'),
      start_index=data.get('startIndex'),
      items_per_page=data.get('itemsPerPage'),
    )


@dataclasses.dataclass
class ErrorResponseItem:
  """Single error reported by the API."""

  message_code: str | None = None
  message: str | None = None
  field: str | None = None

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> ErrorResponseItem:
    return cls(
      message_code=data.get('messageCode'),
      message=data.get('message'),
      field=data.get('field'),
    )


@dataclasses.dataclass
class ErrorResponseBody:
  """Error envelope returned alongside (or instead of) response data."""

  errors: list[ErrorResponseItem] = dataclasses.field(default_factory=list)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> ErrorResponseBody:
    return cls(
      errors=[
        ErrorResponseItem.from_dict(error)
        for error in data.get('errors') or []
        if isinstance(error, dict)
      ]
    )

  def __str__(self) -> str:
    return '; '.join(
      f'{error.message_code}: {error.message}'
      + (f' (field {error.field})' if error.field else '')
      for error in self.errors
    )


class AppleSearchAdsApiClient:
  """Client to interact with Search Ads API.

  Attributes:
      default_asa_yaml: Default location for asa.yaml file.
      org_id: Search Ads organization all requests are made for.
      base_url: Root of Search Ads API.
      timeout: Seconds to wait for each request before giving up.
  """

  default_asa_yaml = str(Path.home() / 'asa.yaml')

  def __init__(
    self,
    path_to_config: str | os.PathLike[str] | None = None,
    config_dict: dict[str, Any] | None = None,
    yaml_str: str | None = None,
    session: requests.Session | None = None,
  ) -> None:
    """Initializes AppleSearchAdsApiClient based on one of the methods.

    Args:
        path_to_config: Path to asa.yaml file (local or remote).
        config_dict: A dictionary containing authentication details.
        yaml_str: Strings representation of asa.yaml.
        session: Instantiated session to send requests with.

    Raises:
        AsaApiClientError:
            When config is missing org_id or any way to get access token.
    """
    config = self._init_config(
      path=path_to_config, config_dict=config_dict, yaml_str=yaml_str
    )
    if not (org_id := config.get('org_id')):
      raise exceptions.AsaApiClientError('org_id is missing.')
    self.org_id = str(org_id)
    self.base_url = config.get('base_url') or DEFAULT_BASE_URL
    self.timeout = float(config.get('timeout') or DEFAULT_TIMEOUT)
    self.client_id = config.get('client_id')
    self.client_secret = config.get('client_secret')
    self._access_token = config.get('access_token')
    self._token_expires_at: datetime.datetime | None = None
    if not self._access_token and not (self.client_id and self.client_secret):
      raise exceptions.AsaApiClientError(
        'Either access_token or client_id and client_secret are required.'
      )
    self._session = session or requests.Session()

  def _init_config(
    self,
    path: str | os.PathLike[str] | None = None,
    config_dict: dict[str, Any] | None = None,
    yaml_str: str | None = None,
  ) -> dict[str, Any]:
    """Finds client configuration based on one of the methods.

    Explicit dictionary has the highest priority, followed by yaml string,
    path to config file, ASA_* environment variables and finally the
    default asa.yaml location.

    Returns:
      Configuration as a dictionary.

    Raises:
      AsaApiClientError: If no configuration can be found.
    """
    if config_dict:
      return config_dict
    if yaml_str:
      return yaml.safe_load(yaml_str) or {}
    if path := path or os.getenv('ASA_CONFIGURATION_FILE_PATH'):
      with smart_open.open(os.fspath(path), 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}
    env_config = {
      key: value
      for key in ('org_id', 'access_token', 'client_id', 'client_secret')
      if (value := os.getenv(f'ASA_{key.upper()}'))
    }
    if env_config:
      return env_config
    if os.path.exists(self.default_asa_yaml):
      with smart_open.open(self.default_asa_yaml, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}
    raise exceptions.AsaApiClientError(
      'Cannot instantiate AppleSearchAdsApiClient: no configuration found'
    )

  def get(
    self, path: str, params: dict[str, Any] | None = None
  ) -> dict[str, Any]:
    """Sends authenticated GET request to Search Ads API.

    Args:
        path: Endpoint relative to base_url, i.e. 'custom-reports'.
        params: Query parameters.

    Returns:
        Decoded JSON body.
    """
    response = self._send(
      'GET', self._url(path), params=params, headers=self._headers()
    )
    return self._decode(response)

  def post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
    """Sends authenticated POST request with JSON body to Search Ads API.

    Args:
        path: Endpoint relative to base_url, i.e. 'custom-reports'.
        body: Request payload.

    Returns:
        Decoded JSON body.
    """
    response = self._send(
      'POST', self._url(path), json_body=body, headers=self._headers()
    )
    return self._decode(response)

  def download(self, uri: str) -> bytes:
    """Fetches raw content of a report from its download uri.

    Download uris are pre-signed, so no authentication is sent.

    Raises:
        AsaRemoteException: When server responds with non-2xx status.
    """
    response = self._send('GET', uri)
    if not response.ok:
      raise exceptions.AsaRemoteException(
        f'Cannot download {uri}: status {response.status_code}',
        status_code=response.status_code,
      )
    logger.debug('Downloaded %d bytes from %s', len(response.content), uri)
    return response.content

  def _url(self, path: str) -> str:
    return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

  def _headers(self) -> dict[str, str]:
    return {
      'Authorization': f'Bearer {self._get_access_token()}',
      'X-AP-Context': f'orgId={self.org_id}',
    }

  def _get_access_token(self) -> str:
    """Returns valid access token, requesting a new one when needed.

    Tokens obtained with client credentials are refreshed 5 minutes
    before they expire; a configured access_token is used as-is.
    """
    if self._access_token and (
      self._token_expires_at is None
      or datetime.datetime.now()
      < self._token_expires_at - datetime.timedelta(minutes=5)
    ):
      return self._access_token
    logger.debug('Requesting access token for client %s', self.client_id)
    response = self._send(
      'POST',
      TOKEN_URL,
      data={
        'grant_type': 'client_credentials',
        'client_id': self.client_id,
        'client_secret': self.client_secret,
        'scope': 'searchadsorg',
      },
    )
    token_data = self._decode(response)
    if not (access_token := token_data.get('access_token')):
      raise exceptions.AsaMalformedResponseException(
        'Token response missing access_token'
      )
    self._access_token = access_token
    self._token_expires_at = datetime.datetime.now() + datetime.timedelta(
      seconds=int(token_data.get('expires_in', 3600))
    )
    return self._access_token

  def _send(
    self,
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    json_body: dict[str, Any] | None = None,
    data: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
  ) -> requests.Response:
    """Sends request, converting transport errors to AsaNetworkException."""
    logger.debug('Sending %s request to %s', method, url)
    try:
      return self._session.request(
        method,
        url,
        params=params,
        json=json_body,
        data=data,
        headers=headers,
        timeout=self.timeout,
      )
    except requests.RequestException as e:
      logger.error('%s request to %s failed: %s', method, url, e)
      raise exceptions.AsaNetworkException(
        f'{method} request to {url} failed'
      ) from e

  def _decode(self, response: requests.Response) -> dict[str, Any]:
    """Decodes JSON body and surfaces errors reported by the API.

    Raises:
        AsaRemoteException:
            When status is not 2xx or body contains error envelope.
        AsaMalformedResponseException:
            When successful response is not a JSON object.
    """
    try:
      body = response.json()
    except ValueError as e:
      if not response.ok:
        raise exceptions.AsaRemoteException(
          f'Request to {response.url} failed with status '
          f'{response.status_code}',
          status_code=response.status_code,
        ) from e
      raise exceptions.AsaMalformedResponseException(
        f'Response from {response.url} is not valid JSON'
      ) from e
    if not isinstance(body, dict):
      if not response.ok:
        raise exceptions.AsaRemoteException(
          f'Request to {response.url} failed with status '
          f'{response.status_code}',
          status_code=response.status_code,
        )
      raise exceptions.AsaMalformedResponseException(
        f'Response from {response.url} is not a JSON object'
      )
    error = body.get('error')
    error_body = (
      ErrorResponseBody.from_dict(error) if isinstance(error, dict) else None
    )
    has_error = bool(error_body.errors) if error_body else bool(error)
    if not response.ok or has_error:
      details = str(error_body) if error_body else error
      message = (
        f'Request to {response.url} failed with status {response.status_code}'
      )
      if details:
        message = f'{message}: {details}'
      logger.error('%s', message)
      raise exceptions.AsaRemoteException(
        message,
        status_code=response.status_code,
        error=error_body,
      )
    return body
