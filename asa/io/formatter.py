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
"""Module for formatting reports before writing."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, Union, get_args

from typing_extensions import TypeAlias

from asa.report import AsaReport

_NESTED_FIELD: TypeAlias = Union[list, tuple]


class FormattingStrategy:
  """Interface for all formatting strategies applied to AsaReport."""

  def apply_transformations(self, report: AsaReport) -> AsaReport:
    """Applies class transformation to report."""
    raise NotImplementedError

  def _cast_to_enum(self, enum: type[Enum], value: str | Enum) -> Enum:
    """Ensures that strings are always converted to Enums."""
    return enum[value.upper()] if isinstance(value, str) else value


class ArrayHandling(Enum):
  """Specifies acceptable options for ArrayHandlingStrategy."""

  STRINGS = 1
  ARRAYS = 2


class ArrayHandlingStrategy(FormattingStrategy):
  """Handles arrays (i.e. report dimensions and metrics) in the report.

  Arrays can be left as-is or converted to strings with required delimiter.

  Attributes:
      type_: Type of array handling (ARRAYS, STRINGS).
      delimiter: Symbol used as delimiter when type_ is STRINGS.
  """

  def __init__(
    self,
    type_: ArrayHandling | str = ArrayHandling.STRINGS,
    delimiter: str = '|',
  ) -> None:
    self.type_ = self._cast_to_enum(ArrayHandling, type_)
    self.delimiter = delimiter

  def apply_transformations(self, report: AsaReport) -> AsaReport:
    """Replaces arrays in the report."""
    if self.type_ == ArrayHandling.ARRAYS:
      return report
    return AsaReport(
      results=self._format_rows(report.results, self._delimiter_join),
      column_names=report.column_names,
    )

  def _format_rows(
    self, rows: list[list], nested_field_handler: Callable
  ) -> list[list]:
    return [
      [
        nested_field_handler(field)
        if isinstance(field, get_args(_NESTED_FIELD))
        else field
        for field in row
      ]
      for row in rows
    ]

  def _delimiter_join(self, field: _NESTED_FIELD) -> str:
    return self.delimiter.join([str(element) for element in field])


def format_report_for_writing(
  report: AsaReport, formatting_strategies: list[FormattingStrategy]
) -> AsaReport:
  """Applies formatting strategies to report.

  Args:
      report: Report that needs to be formatted.
      formatting_strategies: Strategies to be applied to report.

  Returns:
      New report with updated data.
  """
  for strategy in formatting_strategies:
    report = strategy.apply_transformations(report)
  return report


def format_extension(path_object: str, new_extension: str = '') -> str:
  """Replaces extension of the file name with a new one.

  Args:
      path_object: File name, with or without extension.
      new_extension: Required extension, i.e. '.csv'.

  Returns:
     File name with an updated extension.
  """
  path = Path(path_object)
  if path.suffix:
    return path.with_suffix(new_extension).name
  return f'{path_object}{new_extension}'
