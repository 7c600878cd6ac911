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

"""Module for working with Impression Share (custom) reports.

Report lifecycle is create -> poll by id -> download CSV from `downloadUri`
once the report is ready -> parse rows.

ImpressionShareReportService performs these calls via
AppleSearchAdsApiClient and returns flat data shapes defined here.
"""

from __future__ import annotations

import csv
import dataclasses
import datetime
import enum
import io
import logging
from collections.abc import Sequence
from typing import Any, Callable, Iterator

from asa import api_clients, exceptions, report

logger = logging.getLogger(__name__)

_MAX_REPORT_NAME_LENGTH = 50
_DATE_FORMAT = '%Y-%m-%d'


class CustomReportDateRange(enum.Enum):
  """Relative window used in lieu of start and end dates."""

  LAST_WEEK = 'LAST_WEEK'
  LAST_2_WEEKS = 'LAST_2_WEEKS'
  LAST_4_WEEKS = 'LAST_4_WEEKS'


class CustomReportGranularity(enum.Enum):
  """Time bucketing of report rows."""

  DAILY = 'DAILY'
  WEEKLY = 'WEEKLY'


def _format_date(value: datetime.date | None) -> str | None:
  return value.strftime(_DATE_FORMAT) if value else None


def _parse_date(value: str) -> datetime.date:
  return datetime.datetime.strptime(value, _DATE_FORMAT).date()


def _remove_empty_values(dict_object: dict[str, Any]) -> dict[str, Any]:
  """Removes None, empty strings and empty containers from a dictionary."""
  return {
    key: value
    for key, value in dict_object.items()
    if value is not None and value != '' and value != [] and value != {}
  }


@dataclasses.dataclass
class Condition:
  """Selector condition, i.e. countryOrRegion IN [US, GB]."""

  field: str
  operator: str
  values: list[str] = dataclasses.field(default_factory=list)

  def to_dict(self) -> dict[str, Any]:
    return {
      'field': self.field,
      'operator': self.operator,
      'values': list(self.values),
    }


@dataclasses.dataclass
class OrderBy:
  field: str
  sort_order: str = 'ASCENDING'

  def to_dict(self) -> dict[str, str]:
    return {'field': self.field, 'sortOrder': self.sort_order}


@dataclasses.dataclass
class Pagination:
  offset: int | None = None
  limit: int | None = None

  def to_dict(self) -> dict[str, int]:
    return _remove_empty_values({'offset': self.offset, 'limit': self.limit})


@dataclasses.dataclass
class Selector:
  """Filters report results by countryOrRegion and adamId fields.

  Attributes:
      conditions: Filtering conditions; IN is the only operator supported
          by Impression Share reports.
      order_by: Sorting of results.
      pagination: Offset and limit of results.
  """

  conditions: list[Condition] = dataclasses.field(default_factory=list)
  order_by: list[OrderBy] = dataclasses.field(default_factory=list)
  pagination: Pagination | None = None

  @classmethod
  def from_filters(
    cls,
    countries: Sequence[str] | None = None,
    adam_ids: Sequence[str | int] | None = None,
  ) -> Selector | None:
    """Builds selector with IN conditions; None when there are no filters."""
    conditions = []
    if countries:
      conditions.append(
        Condition('countryOrRegion', 'IN', [str(c).upper() for c in countries])
      )
    if adam_ids:
      conditions.append(Condition('adamId', 'IN', [str(a) for a in adam_ids]))
    return cls(conditions=conditions) if conditions else None

  def to_dict(self) -> dict[str, Any]:
    return _remove_empty_values(
      {
        'conditions': [condition.to_dict() for condition in self.conditions],
        'orderBy': [order.to_dict() for order in self.order_by],
        'pagination': self.pagination.to_dict() if self.pagination else None,
      }
    )


@dataclasses.dataclass
class CustomReportRequest:
  """The Impression Share report request body.

  https://developer.apple.com/documentation/apple_search_ads/customreportrequest

  Attributes:
      name: (Required) A free-text field, at most 50 characters.
      date_range: Date range of the report; required only for WEEKLY
          granularity. API default is LAST_WEEK.
      granularity: Report data organized by day or week. API default is
          DAILY.
      start_time: Start of the report.
      end_time: End of the report.
      selector: Optional filter by countryOrRegion and adamId.
  """

  name: str
  date_range: CustomReportDateRange | None = None
  granularity: CustomReportGranularity | None = None
  start_time: datetime.date | None = None
  end_time: datetime.date | None = None
  selector: Selector | None = None

  def validate(self) -> None:
    """Checks constraints that API imposes on the request.

    Raises:
        AsaReportRequestException:
            When name is empty or too long, or WEEKLY report has explicit
            start_time / end_time.
    """
    if not self.name:
      raise exceptions.AsaReportRequestException('Report name is required')
    if len(self.name) > _MAX_REPORT_NAME_LENGTH:
      raise exceptions.AsaReportRequestException(
        f'Report name must be at most {_MAX_REPORT_NAME_LENGTH} characters, '
        f'got {len(self.name)}'
      )
    if self.granularity == CustomReportGranularity.WEEKLY and (
      self.start_time or self.end_time
    ):
      raise exceptions.AsaReportRequestException(
        'WEEKLY reports cannot have start_time and end_time, '
        'use date_range instead'
      )

  def to_dict(self) -> dict[str, Any]:
    return _remove_empty_values(
      {
        'name': self.name,
        'dateRange': self.date_range.value if self.date_range else None,
        'granularity': self.granularity.value if self.granularity else None,
        'startTime': _format_date(self.start_time),
        'endTime': _format_date(self.end_time),
        'selector': self.selector.to_dict() if self.selector else None,
      }
    )


@dataclasses.dataclass
class ImpressionShareReportRequest:
  """Query parameters for listing Impression Share reports."""

  field: str | None = None
  limit: int | None = None
  offset: int | None = None
  sort_order: str | None = None

  def to_params(self) -> dict[str, Any]:
    return _remove_empty_values(
      {
        'field': self.field,
        'limit': self.limit,
        'offset': self.offset,
        'sortOrder': self.sort_order,
      }
    )


@dataclasses.dataclass
class ImpressionShareReport:
  """Report metadata returned by the API."""

  id: int | None = None
  name: str | None = None
  state: str | None = None
  granularity: str | None = None
  date_range: str | None = None
  start_time: str | None = None
  end_time: str | None = None
  dimensions: list[str] = dataclasses.field(default_factory=list)
  metrics: list[str] = dataclasses.field(default_factory=list)
  download_uri: str | None = None
  creation_time: str | None = None
  modification_time: str | None = None

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> ImpressionShareReport:
    return cls(
      id=data.get('id'),
      name=data.get('name'),
      state=data.get('state'),
      granularity=data.get('granularity'),
      date_range=data.get('dateRange'),
      start_time=data.get('startTime'),
      end_time=data.get('endTime'),
      dimensions=list(data.get('dimensions') or []),
      metrics=list(data.get('metrics') or []),
      download_uri=data.get('downloadUri'),
      creation_time=data.get('creationTime'),
      modification_time=data.get('modificationTime'),
    )

  @property
  def is_ready(self) -> bool:
    return bool(self.download_uri)


def _envelope_parts(
  body: dict[str, Any],
) -> tuple[api_clients.PageDetail | None, api_clients.ErrorResponseBody | None]:
  pagination = body.get('pagination')
  error = body.get('error')
  return (
    api_clients.PageDetail.from_dict(pagination) if pagination else None,
    api_clients.ErrorResponseBody.from_dict(error)
    if isinstance(error, dict)
    else None,
  )


@dataclasses.dataclass
class ImpressionShareReportResponse:
  data: ImpressionShareReport | None = None
  pagination: api_clients.PageDetail | None = None
  error: api_clients.ErrorResponseBody | None = None

  @classmethod
  def from_dict(cls, body: dict[str, Any]) -> ImpressionShareReportResponse:
    pagination, error = _envelope_parts(body)
    data = body.get('data')
    return cls(
      data=ImpressionShareReport.from_dict(data) if data else None,
      pagination=pagination,
      error=error,
    )


@dataclasses.dataclass
class ImpressionShareReportsResponse:
  data: list[ImpressionShareReport] = dataclasses.field(default_factory=list)
  pagination: api_clients.PageDetail | None = None
  error: api_clients.ErrorResponseBody | None = None

  @classmethod
  def from_dict(cls, body: dict[str, Any]) -> ImpressionShareReportsResponse:
    pagination, error = _envelope_parts(body)
    return cls(
      data=[
        ImpressionShareReport.from_dict(item) for item in body.get('data') or []
      ],
      pagination=pagination,
      error=error,
    )


@dataclasses.dataclass
class DailyImpressionShareReportRecord:
  """Single row of downloaded Impression Share report.

  Field metadata holds the CSV header and converter for each column.
  """

  date: datetime.date = dataclasses.field(
    metadata={'csv': 'date', 'converter': _parse_date}
  )
  app_name: str = dataclasses.field(
    metadata={'csv': 'appName', 'converter': str}
  )
  adam_id: int = dataclasses.field(metadata={'csv': 'adamId', 'converter': int})
  country_or_region: str = dataclasses.field(
    metadata={'csv': 'countryOrRegion', 'converter': str}
  )
  search_term: str = dataclasses.field(
    metadata={'csv': 'searchTerm', 'converter': str}
  )
  low_impression_share: float = dataclasses.field(
    metadata={'csv': 'lowImpressionShare', 'converter': float}
  )
  high_impression_share: float = dataclasses.field(
    metadata={'csv': 'highImpressionShare', 'converter': float}
  )
  rank: str = dataclasses.field(metadata={'csv': 'rank', 'converter': str})
  search_popularity: int = dataclasses.field(
    metadata={'csv': 'searchPopularity', 'converter': int}
  )


@dataclasses.dataclass
class DailyImpressionShareReport:
  records: list[DailyImpressionShareReportRecord] = dataclasses.field(
    default_factory=list
  )

  def to_report(self) -> report.AsaReport:
    """Converts records to AsaReport with CSV headers as column names."""
    fields = dataclasses.fields(DailyImpressionShareReportRecord)
    return report.AsaReport(
      results=[
        [getattr(record, field.name) for field in fields]
        for record in self.records
      ],
      column_names=[field.metadata['csv'] for field in fields],
    )


def reports_to_report(
  reports: Sequence[ImpressionShareReport],
) -> report.AsaReport:
  """Converts report descriptors to AsaReport, one row per descriptor."""
  fields = dataclasses.fields(ImpressionShareReport)
  return report.AsaReport(
    results=[
      [getattr(descriptor, field.name) for field in fields]
      for descriptor in reports
    ],
    column_names=[field.name for field in fields],
  )


def parse_impression_share_csv(
  csv_data: str,
) -> list[DailyImpressionShareReportRecord]:
  """Parses Impression Share CSV into records.

  Columns are matched by header name so their order does not matter;
  columns without a matching record field are ignored.

  Args:
      csv_data: Content of downloaded report.

  Returns:
      One record per data row.

  Raises:
      AsaReportParseException:
          When header or required column is missing or a value cannot be
          converted to the field type.
  """
  reader = csv.DictReader(io.StringIO(csv_data))
  try:
    header = reader.fieldnames
  except csv.Error as e:
    raise exceptions.AsaReportParseException(
      f'CSV report header cannot be read: {e}'
    ) from e
  if not header:
    raise exceptions.AsaReportParseException('CSV report has no header')
  fields = dataclasses.fields(DailyImpressionShareReportRecord)
  if missing_columns := [
    field.metadata['csv']
    for field in fields
    if field.metadata['csv'] not in header
  ]:
    raise exceptions.AsaReportParseException(
      f'CSV report is missing columns: {", ".join(missing_columns)}'
    )
  return [
    _parse_record(row_number, row, fields)
    for row_number, row in _read_rows(reader)
  ]


def _read_rows(
  reader: csv.DictReader,
) -> Iterator[tuple[int, dict[str, str | None]]]:
  """Yields numbered data rows, converting csv errors to parse errors."""
  row_number = 0
  while True:
    row_number += 1
    try:
      row = next(reader)
    except StopIteration:
      return
    except csv.Error as e:
      raise exceptions.AsaReportParseException(
        f'Row {row_number} cannot be read: {e}'
      ) from e
    yield row_number, row


def _parse_record(
  row_number: int,
  row: dict[str, str | None],
  fields: tuple[dataclasses.Field, ...],
) -> DailyImpressionShareReportRecord:
  values = {}
  for field in fields:
    column = field.metadata['csv']
    converter: Callable[[str], Any] = field.metadata['converter']
    if (value := row.get(column)) is None:
      raise exceptions.AsaReportParseException(
        f'Row {row_number} has no value for column "{column}"'
      )
    try:
      values[field.name] = converter(value)
    except ValueError as e:
      raise exceptions.AsaReportParseException(
        f'Row {row_number} has invalid value "{value}" '
        f'for column "{column}"'
      ) from e
  return DailyImpressionShareReportRecord(**values)


class ImpressionShareReportService:
  """Creates, lists and downloads Impression Share reports.

  Attributes:
      api_client: Client used for connecting to Search Ads API.
  """

  _PATH = 'custom-reports'

  def __init__(self, api_client: api_clients.AppleSearchAdsApiClient) -> None:
    self.api_client = api_client

  def create_impression_share_report(
    self, request: CustomReportRequest
  ) -> ImpressionShareReportResponse:
    """Creates report and returns its descriptor with assigned id.

    Up to 10 reports can be generated within 24 hours, for a range of up
    to 30 days for any time period after 2020-04-12.

    https://developer.apple.com/documentation/apple_search_ads/impression_share_report

    Raises:
        AsaReportRequestException: When request is invalid.
    """
    request.validate()
    logger.info('Creating Impression Share report "%s"', request.name)
    body = self.api_client.post(self._PATH, request.to_dict())
    return ImpressionShareReportResponse.from_dict(body)

  def get_all_impression_share_reports(
    self, params: ImpressionShareReportRequest | None = None
  ) -> ImpressionShareReportsResponse:
    """Fetches all Impression Share reports.

    Rate limit for this endpoint is 150 requests within 15 minutes.

    https://developer.apple.com/documentation/apple_search_ads/get_all_impression_share_reports
    """
    query_params = params.to_params() if params else None
    body = self.api_client.get(self._PATH, params=query_params)
    return ImpressionShareReportsResponse.from_dict(body)

  def get_single_impression_share_report(
    self, report_id: int
  ) -> ImpressionShareReportResponse:
    """Fetches a single Impression Share report by its id.

    Rate limit for this endpoint is 30 requests within 15 minutes.

    https://developer.apple.com/documentation/apple_search_ads/get_a_single_impression_share_report
    """
    body = self.api_client.get(f'{self._PATH}/{int(report_id)}')
    return ImpressionShareReportResponse.from_dict(body)

  def download_report(
    self, impression_share_report: ImpressionShareReport
  ) -> DailyImpressionShareReport:
    """Downloads report from its download uri and parses CSV data.

    Raises:
        AsaReportNotReadyException: When report has no download uri yet.
        AsaReportParseException: When CSV cannot be parsed.
    """
    if not impression_share_report.download_uri:
      raise exceptions.AsaReportNotReadyException(
        f'Report {impression_share_report.id} is not ready, '
        f'state: {impression_share_report.state}'
      )
    content = self.api_client.download(impression_share_report.download_uri)
    try:
      csv_data = content.decode('utf-8-sig')
    except UnicodeDecodeError as e:
      raise exceptions.AsaReportParseException(
        f'Report {impression_share_report.id} is not valid UTF-8'
      ) from e
    records = parse_impression_share_csv(csv_data)
    logger.debug(
      'Parsed %d rows of report %s', len(records), impression_share_report.id
    )
    return DailyImpressionShareReport(records=records)
