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
"""Module for writing data to JSON."""

# pylint: disable=C0330, g-bad-import-order, g-multiple-import, g-bare-generic

from __future__ import annotations

import json

from asa.io.writers import file_writer
from asa.report import AsaReport


class JsonWriter(file_writer.FileWriter):
  """Writes AsaReport to JSON array of objects.

  Attributes:
      destination_folder: Destination where JSON files are stored.
  """

  extension = '.json'
  label = 'JSON'

  def _write_to_file(self, report: AsaReport, file) -> None:
    json.dump(report.to_list(row_type='dict'), file, default=str)
