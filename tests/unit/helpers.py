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
"""Contains helpers classes to simulate Search Ads API responses."""

from __future__ import annotations

import json
from typing import Any

import requests

IMPRESSION_SHARE_CSV = (
  'date,appName,adamId,countryOrRegion,searchTerm,lowImpressionShare,'
  'highImpressionShare,rank,searchPopularity\n'
  '2024-03-01,My App,123456789,US,my app,0.1,0.2,ONE,5\n'
  '2024-03-02,My App,123456789,GB,best app,0.31,0.4,GREATER_THAN_FIVE,3\n'
)


def make_response(
  status_code: int = 200,
  body: Any = None,
  content: bytes | None = None,
  url: str = 'https://api.searchads.apple.com/api/v5/custom-reports',
) -> requests.Response:
  """Builds requests.Response with JSON body or raw content."""
  response = requests.Response()
  response.status_code = status_code
  response.url = url
  if content is None:
    response.headers['Content-Type'] = 'application/json'
    content = json.dumps(body).encode('utf-8')
  response._content = content
  return response


class FakeSession(requests.Session):
  """Returns prepared responses in order and records every request.

  Exceptions put among responses are raised instead of being returned.
  """

  def __init__(self, *responses: requests.Response | Exception) -> None:
    super().__init__()
    self.responses = list(responses)
    self.calls: list[dict[str, Any]] = []

  def request(self, method, url, **kwargs):
    self.calls.append({'method': method, 'url': url, **kwargs})
    response = self.responses.pop(0)
    if isinstance(response, Exception):
      raise response
    return response


def report_descriptor(**overrides: Any) -> dict[str, Any]:
  """Impression Share report descriptor as returned by API."""
  descriptor = {
    'id': 1001,
    'name': 'weekly share',
    'startTime': '2024-03-01',
    'endTime': '2024-03-07',
    'granularity': 'DAILY',
    'downloadUri': 'https://reports.example.com/1001.csv',
    'dimensions': ['adamId', 'searchTerm'],
    'metrics': ['lowImpressionShare', 'highImpressionShare'],
    'state': 'COMPLETED',
    'creationTime': '2024-03-08T10:00:00.000',
    'modificationTime': '2024-03-08T10:05:00.000',
    'dateRange': 'CUSTOM',
  }
  descriptor.update(overrides)
  return descriptor
