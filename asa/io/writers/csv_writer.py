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
"""Module for writing data with CSV."""

# pylint: disable=C0330, g-bad-import-order, g-multiple-import, g-bare-generic

from __future__ import annotations

import csv
import os
from typing import Literal, Union

from asa.io.writers import file_writer
from asa.report import AsaReport


class CsvWriter(file_writer.FileWriter):
  """Writes AsaReport to CSV.

  Attributes:
      destination_folder: Destination where CSV files are stored.
      delimiter: CSV delimiter.
      quotechar: CSV writer quotechar.
      quoting: CSV writer quoting.
  """

  extension = '.csv'
  label = 'CSV'

  def __init__(
    self,
    destination_folder: Union[str, os.PathLike, None] = None,
    delimiter: str = ',',
    quotechar: str = '"',
    quoting: Literal[0] = csv.QUOTE_MINIMAL,
    **kwargs,
  ) -> None:
    """Initializes CsvWriter based on a destination_folder.

    Args:
      destination_folder: Destination where CSV files are stored.
      delimiter: CSV delimiter.
      quotechar: CSV writer quotechar.
      quoting: CSV writer quoting.
      kwargs: Optional keyword arguments to initialize writer.
    """
    super().__init__(destination_folder=destination_folder, **kwargs)
    self.delimiter = delimiter
    self.quotechar = quotechar
    self.quoting = int(quoting)

  def _write_to_file(self, report: AsaReport, file) -> None:
    writer = csv.writer(
      file,
      delimiter=self.delimiter,
      quotechar=self.quotechar,
      quoting=self.quoting,
    )
    writer.writerow(report.column_names)
    writer.writerows(report.results)
