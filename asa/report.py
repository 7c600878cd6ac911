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

"""Simplifies handling data fetched from Search Ads API.

AsaReport holds rows of downloaded records (or report descriptors) with
their column names and is the unit all writers work with.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Generator, Literal


class AsaReport:
  """Provides convenient handling of tabular data.

  Attributes:
      results: Rows of data.
      column_names: Names of each column in a row.
  """

  def __init__(
    self,
    results: Sequence[Sequence[Any]] | None = None,
    column_names: Sequence[str] | None = None,
  ) -> None:
    self.results = [list(row) for row in results or []]
    self.column_names = list(column_names or [])

  def __len__(self) -> int:
    return len(self.results)

  def __iter__(self) -> Generator[list[Any], None, None]:
    yield from self.results

  def __getitem__(self, index: int) -> list[Any]:
    return self.results[index]

  def __bool__(self) -> bool:
    return bool(self.results)

  def __eq__(self, other: object) -> bool:
    if not isinstance(other, AsaReport):
      return NotImplemented
    return (
      self.column_names == other.column_names and self.results == other.results
    )

  def __repr__(self) -> str:
    return (
      f'AsaReport(columns={self.column_names}, rows={len(self.results)})'
    )

  def to_list(
    self, row_type: Literal['list', 'dict'] = 'list'
  ) -> list[list[Any]] | list[dict[str, Any]]:
    """Converts report to a list of lists or dictionaries.

    Args:
        row_type: Whether each row should be a list or a dict.

    Raises:
        ValueError: When unsupported row_type is provided.
    """
    if row_type == 'list':
      return [list(row) for row in self.results]
    if row_type == 'dict':
      return [dict(zip(self.column_names, row)) for row in self.results]
    raise ValueError(f'Unsupported row_type: {row_type}')

  def to_json(self) -> str:
    """Converts report to JSON array of objects; dates become ISO strings."""
    return json.dumps(self.to_list(row_type='dict'), default=str)
