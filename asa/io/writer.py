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
"""Module for creating writers by their type."""

from __future__ import annotations

from asa.io.writers import (
  abs_writer,
  console_writer,
  csv_writer,
  json_writer,
)

_WRITERS: dict[str, type[abs_writer.AbsWriter]] = {
  'console': console_writer.ConsoleWriter,
  'csv': csv_writer.CsvWriter,
  'json': json_writer.JsonWriter,
}


def create_writer(writer_option: str, **kwargs: str) -> abs_writer.AbsWriter:
  """Creates concrete writer.

  Args:
      writer_option: Type of writer ('console', 'csv', 'json').
      kwargs: Parameters passed to writer constructor.

  Returns:
      Instantiated writer.

  Raises:
      ValueError: When writer_option is not supported.
  """
  if not (writer_class := _WRITERS.get(writer_option)):
    raise ValueError(
      f'Unsupported writer {writer_option}, '
      f'supported writers: {", ".join(_WRITERS)}'
    )
  return writer_class(**kwargs)
