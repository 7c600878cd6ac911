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
"""Defines base class for all writers of AsaReport.

Writers receive either downloaded Impression Share rows or listed report
descriptors. Descriptors carry `dimensions` and `metrics` arrays, so every
writer flattens arrays before output unless asked to keep them.
"""

from __future__ import annotations

import abc
from typing import Literal

from asa.io import formatter
from asa.report import AsaReport


class AbsWriter(abc.ABC):
  """Writes AsaReport to a particular location.

  `str(writer)` describes where data end up; the CLI reports it when a
  writer does not return a path of its own.

  Attributes:
      array_handling: Keep arrays as-is ('arrays') or join them ('strings').
      array_separator: Delimiter for joined arrays.
  """

  label = 'Writer'

  def __init__(
    self,
    array_handling: Literal['strings', 'arrays'] = 'strings',
    array_separator: str = '|',
    **kwargs,
  ) -> None:
    self.array_handling = array_handling
    self.array_separator = array_separator

  @property
  @abc.abstractmethod
  def location(self) -> str:
    """Human readable place where written data can be found."""

  @abc.abstractmethod
  def write(self, report: AsaReport, destination: str) -> str | None:
    """Writes report.

    Args:
        report: Report to be written.
        destination: Base name of the output, i.e. `report_1001`.

    Returns:
        Path of written file, None if data do not end up in a file.
    """

  def format_for_write(self, report: AsaReport) -> AsaReport:
    """Flattens arrays in report according to array_handling."""
    return formatter.format_report_for_writing(
      report,
      [
        formatter.ArrayHandlingStrategy(
          type_=self.array_handling, delimiter=self.array_separator
        )
      ],
    )

  def __str__(self) -> str:
    return f'[{self.label}] - data are written to {self.location}'
