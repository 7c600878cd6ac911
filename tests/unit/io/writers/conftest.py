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

import datetime

import pytest

from asa import report


@pytest.fixture
def adam_ids_report():
  return report.AsaReport([[111], [222], [333]], ['adamId'])


@pytest.fixture
def descriptors_report():
  return report.AsaReport(
    [[1001, 'weekly share', ['adamId', 'searchTerm']]],
    ['id', 'name', 'dimensions'],
  )


@pytest.fixture
def dated_report():
  return report.AsaReport(
    [
      [
        1001,
        datetime.datetime(2024, 3, 8, 10, 0),
        datetime.date(2024, 3, 1),
      ]
    ],
    ['id', 'creation_time', 'date'],
  )
