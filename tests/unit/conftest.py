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
from __future__ import annotations

import pytest

from asa import api_clients
from tests.unit import helpers


@pytest.fixture
def config_dict():
  return {'org_id': 42, 'access_token': 'test-token'}


@pytest.fixture
def make_client(config_dict):
  def _make_client(*responses):
    session = helpers.FakeSession(*responses)
    return api_clients.AppleSearchAdsApiClient(
      config_dict=config_dict, session=session
    )

  return _make_client
