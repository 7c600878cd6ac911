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
"""Module for writing reports to local or remote files."""

# pylint: disable=C0330, g-bad-import-order, g-multiple-import, g-bare-generic

from __future__ import annotations

import abc
import logging
import os
from typing import Union

import smart_open

from asa.io import formatter
from asa.io.writers.abs_writer import AbsWriter
from asa.report import AsaReport

logger = logging.getLogger(__name__)


class FileWriter(AbsWriter):
  """Writes AsaReport to a local or remote file.

  Subclasses define the file extension and how report is serialized.

  Attributes:
      destination_folder: Destination where output file is stored.
  """

  extension = ''

  def __init__(
    self,
    destination_folder: Union[str, os.PathLike, None] = None,
    **kwargs: str,
  ) -> None:
    """Initializes FileWriter based on destination folder."""
    super().__init__(**kwargs)
    self.destination_folder = str(destination_folder or os.getcwd())

  @property
  def location(self) -> str:
    return self.destination_folder

  def create_dir(self) -> None:
    """Creates folders if needed or destination is not remote."""
    if (
      not os.path.isdir(self.destination_folder)
      and '://' not in self.destination_folder
    ):
      os.makedirs(self.destination_folder)

  def write(self, report: AsaReport, destination: str) -> str:
    """Writes report to a file in destination_folder.

    Args:
        report: Report to be written.
        destination: Base file name report should be written to.

    Returns:
        Full path where data are written.
    """
    report = self.format_for_write(report)
    destination = formatter.format_extension(
      destination, new_extension=self.extension
    )
    self.create_dir()
    output_path = os.path.join(self.destination_folder, destination)
    logger.debug('Writing %d rows of data to %s', len(report), output_path)
    with smart_open.open(output_path, 'w', encoding='utf-8', newline='') as f:
      self._write_to_file(report, f)
    logger.debug('Writing to %s is completed', output_path)
    return output_path

  @abc.abstractmethod
  def _write_to_file(self, report: AsaReport, file) -> None:
    raise NotImplementedError
