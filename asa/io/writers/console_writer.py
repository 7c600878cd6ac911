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
"""Module for writing data with console."""

from __future__ import annotations

import rich
from rich import console, table
from rich import json as rich_json

from asa.io.writers import abs_writer
from asa.report import AsaReport


class ConsoleWriter(abs_writer.AbsWriter):
  """Writes reports to standard output.

  Attributes:
    page_size: How many row of report should be written
    format: Type of output ('table', 'json').
  """

  label = 'Console'

  def __init__(
    self, page_size: int = 10, format: str = 'table', **kwargs: str
  ) -> None:
    """Initializes ConsoleWriter.

    Args:
        page_size: How many row of report should be written
        format: Type of output ('table', 'json').
        kwargs: Optional parameter to initialize writer.
    """
    super().__init__(**kwargs)
    self.page_size = int(page_size)
    self.format = format

  @property
  def location(self) -> str:
    return 'standard output'

  def write(self, report: AsaReport, destination: str) -> None:
    """Writes report to standard output.

    Args:
      report: Report to be written.
      destination: Name shown in table title.
    """
    report = self.format_for_write(report)
    if self.format == 'json':
      output = rich_json.JSON(report.to_json())
    else:
      output = table.Table(
        title=f"showing results for <{destination.split('/')[-1]}>",
        caption=(
          f'showing rows 1-{min(self.page_size, len(report))} '
          f'out of total {len(report)}'
        ),
        box=rich.box.MARKDOWN,
      )
      for header in report.column_names:
        output.add_column(header)
      for row in report.results[: self.page_size]:
        output.add_row(*[str(field) for field in row])
    console.Console().print(output)
