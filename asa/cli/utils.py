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
"""Module for various helpers for executing asa as CLI tool."""

from __future__ import annotations

import dataclasses
import datetime
import logging
import sys
from collections.abc import MutableSequence, Sequence
from typing import Any

import smart_open
import yaml
from dateutil import relativedelta
from rich import logging as rich_logging

from asa import custom_reports, exceptions


@dataclasses.dataclass
class AsaConfig:
  """Stores values to run asa from command line.

  Attributes:
      output: Specifies where to write fetched data (console, csv, json).
      writer_params: Any parameters that can be passed to writer.
      report_name: Name of report to create.
      date_range: LAST_WEEK, LAST_2_WEEKS or LAST_4_WEEKS.
      granularity: DAILY or WEEKLY.
      start_date: Report start, YYYY-MM-DD or :YYYYMMDD-N macro.
      end_date: Report end, YYYY-MM-DD or :YYYYMMDD-N macro.
      countries: Alpha-2 country codes to filter report by.
      adam_ids: App identifiers to filter report by.
  """

  output: str = 'console'
  writer_params: dict[str, str | int] = dataclasses.field(default_factory=dict)
  report_name: str | None = None
  date_range: str | None = None
  granularity: str | None = None
  start_date: str | None = None
  end_date: str | None = None
  countries: str | list[str] | None = None
  adam_ids: str | list[str] | None = None

  def __post_init__(self) -> None:
    """Ensures that values passed during __init__ correctly formatted."""
    self.countries = _split_values(self.countries)
    self.adam_ids = _split_values(self.adam_ids)
    if self.date_range:
      self.date_range = self.date_range.upper()
    if self.granularity:
      self.granularity = self.granularity.upper()
    self.writer_params = {
      key.replace('-', '_'): value for key, value in self.writer_params.items()
    }

  @classmethod
  def from_dict(cls, config_parameters: dict[str, Any]) -> AsaConfig:
    """Builds config from provided parameters ignoring empty ones."""
    return cls(**_remove_empty_values(config_parameters))

  def to_report_request(self) -> custom_reports.CustomReportRequest:
    """Builds report creation request from config values.

    Raises:
        AsaConfigException: When date_range or granularity are invalid.
    """
    try:
      date_range = (
        custom_reports.CustomReportDateRange[self.date_range]
        if self.date_range
        else None
      )
      granularity = (
        custom_reports.CustomReportGranularity[self.granularity]
        if self.granularity
        else None
      )
    except KeyError as e:
      raise exceptions.AsaConfigException(
        f'Unsupported date_range or granularity: {e}'
      ) from e
    return custom_reports.CustomReportRequest(
      name=self.report_name or '',
      date_range=date_range,
      granularity=granularity,
      start_time=_to_date(self.start_date),
      end_time=_to_date(self.end_date),
      selector=custom_reports.Selector.from_filters(
        countries=self.countries, adam_ids=self.adam_ids
      ),
    )


class ConfigBuilder:
  """Builds AsaConfig from file, from CLI arguments or both."""

  _section = 'asa'

  def build(
    self, parameters: dict[str, Any], cli_named_args: Sequence[str]
  ) -> AsaConfig:
    """Builds config from file, from arguments or both.

    When there are both config file and CLI arguments the latter have more
    priority.

    Args:
        parameters: Parsed CLI arguments.
        cli_named_args: Unparsed CLI args in a form `--writer.key=value`.

    Returns:
        Config with injected values.
    """
    config_parameters = {}
    if config_path := parameters.get('asa_config'):
      config_parameters = self._load_config(config_path)
    config_parameters.update(
      _remove_empty_values(
        {
          k: v
          for k, v in parameters.items()
          if k in AsaConfig.__annotations__
        }
      )
    )
    output = config_parameters.get('output', 'console')
    if writer_params := ParamsParser([output]).parse(cli_named_args)[output]:
      config_parameters['writer_params'] = {
        **config_parameters.get('writer_params', {}),
        **writer_params,
      }
    return AsaConfig.from_dict(config_parameters)

  def _load_config(self, config_path: str) -> dict[str, Any]:
    """Loads config parameters from provided path.

    Args:
        config_path: Path to local or remote storage.

    Returns:
        Parameters taken from `asa` section of config file.

    Raises:
        AsaConfigException: If config file missing `asa` section.
    """
    with smart_open.open(config_path, encoding='utf-8') as f:
      config = yaml.safe_load(f) or {}
    if not (section := config.get(self._section)):
      raise exceptions.AsaConfigException(
        f'Invalid config, must have `{self._section}` section!'
      )
    config_parameters = {
      k: v for k, v in section.items() if k in AsaConfig.__annotations__
    }
    if writer_params := section.get(section.get('output', '')):
      config_parameters['writer_params'] = writer_params
    return _remove_empty_values(config_parameters)


class ParamsParser:
  """Extracts `--identifier.key=value` pairs from unparsed CLI arguments."""

  def __init__(self, identifiers: Sequence[str]) -> None:
    self.identifiers = identifiers

  def parse(self, params: Sequence[str]) -> dict[str, dict[str, str]]:
    return {
      identifier: self._parse_params(identifier, params)
      for identifier in self.identifiers
    }

  def _parse_params(
    self, identifier: str, params: Sequence[str]
  ) -> dict[str, str]:
    parsed_params = {}
    for param in params or []:
      key, *value = param.split('=', maxsplit=1)
      provided_identifier, _, key = key.removeprefix('--').partition('.')
      if provided_identifier != identifier:
        continue
      if not key or not value:
        raise exceptions.AsaCliException(
          f'{param} is invalid, '
          f'--{identifier}.key=value is the correct format'
        )
      parsed_params[key.replace('-', '_')] = value[0]
    return parsed_params


def convert_date(date_string: str | None) -> str | None:
  """Converts dynamic date macros to actual dates.

  Supports :YYYY, :YYYYMM and :YYYYMMDD with optional lookback, i.e.
  :YYYYMMDD-7 is a week ago.

  Returns:
      Date string in YYYY-MM-DD format.

  Raises:
      ValueError:
          If dynamic lookback value (:YYYYMMDD-N) is incorrect.
  """
  if not date_string or not date_string.startswith(':YYYY'):
    return date_string
  current_date = datetime.date.today()
  base_date, *lookback = date_string.split('-')
  try:
    days_ago = int(lookback[0]) if lookback else 0
  except ValueError as e:
    raise ValueError(
      'Must provide numeric value for a number lookback period, '
      'i.e. :YYYYMMDD-1'
    ) from e
  if base_date == ':YYYY':
    new_date = datetime.date(current_date.year, 1, 1)
    delta = relativedelta.relativedelta(years=days_ago)
  elif base_date == ':YYYYMM':
    new_date = datetime.date(current_date.year, current_date.month, 1)
    delta = relativedelta.relativedelta(months=days_ago)
  elif base_date == ':YYYYMMDD':
    new_date = current_date
    delta = relativedelta.relativedelta(days=days_ago)
  else:
    raise ValueError(f'Unsupported date macro: {date_string}')
  return (new_date - delta).strftime('%Y-%m-%d')


def _to_date(date_string: str | None) -> datetime.date | None:
  if not date_string:
    return None
  try:
    converted = convert_date(date_string)
    return datetime.datetime.strptime(converted, '%Y-%m-%d').date()
  except ValueError as e:
    raise exceptions.AsaConfigException(
      f'Date must be in YYYY-MM-DD format, got {date_string}'
    ) from e


def _split_values(values: str | int | list | None) -> list[str] | None:
  if values is None:
    return None
  if isinstance(values, MutableSequence):
    return [str(value).strip() for value in values]
  return [value.strip() for value in str(values).split(',') if value.strip()]


def _remove_empty_values(dict_object: dict[str, Any]) -> dict[str, Any]:
  """Remove all empty elements: strings, dictionaries from a dictionary."""
  if isinstance(dict_object, dict):
    return {
      key: value
      for key, value in (
        (key, _remove_empty_values(value)) for key, value in dict_object.items()
      )
      if value
    }
  return dict_object


def init_logging(
  loglevel: str = 'INFO', logger_type: str = 'local', name: str = __name__
) -> logging.Logger:
  if logger_type == 'rich':
    logging.basicConfig(
      format='%(message)s',
      level=loglevel,
      datefmt='%Y-%m-%d %H:%M:%S',
      handlers=[
        rich_logging.RichHandler(rich_tracebacks=True),
      ],
    )
  else:
    logging.basicConfig(
      format='[%(asctime)s][%(name)s][%(levelname)s] %(message)s',
      stream=sys.stdout,
      level=loglevel,
      datefmt='%Y-%m-%d %H:%M:%S',
    )
  logging.getLogger('smart_open.smart_open_lib').setLevel(logging.WARNING)
  logging.getLogger('urllib3.connectionpool').setLevel(logging.WARNING)
  return logging.getLogger(name)
