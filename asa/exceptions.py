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
"""Module for defining exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
  from asa import api_clients


class AsaException(Exception):
  """Base exception."""


class AsaCliException(AsaException):
  """Base exception for CLI tools."""


class AsaMissingCommandException(AsaCliException):
  """Specifies missing command to CLI tool."""


class AsaConfigException(AsaCliException):
  """Specifies invalid CLI config."""


class AsaMoneyException(AsaException):
  """Specifies amount that cannot be converted to cents."""


class AsaApiClientError(AsaException):
  """Search Ads client errors."""


class AsaNetworkException(AsaException):
  """Specifies transport failure while talking to Search Ads API."""


class AsaMalformedResponseException(AsaException):
  """Specifies response body that cannot be decoded."""


class AsaRemoteException(AsaException):
  """Specifies error reported by Search Ads API.

  Attributes:
      status_code: HTTP status of the response.
      error: Parsed error envelope, if the body contained one.
  """

  def __init__(
    self,
    message: str,
    status_code: int | None = None,
    error: api_clients.ErrorResponseBody | None = None,
  ) -> None:
    super().__init__(message)
    self.status_code = status_code
    self.error = error


class AsaReportException(AsaException):
  """Base exception for custom reports."""


class AsaReportRequestException(AsaReportException):
  """Specifies invalid report creation request."""


class AsaReportNotReadyException(AsaReportException):
  """Specifies report without download uri."""


class AsaReportParseException(AsaReportException):
  """Specifies CSV report that cannot be parsed."""
