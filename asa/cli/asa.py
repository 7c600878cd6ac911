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
"""Module for defining `asa` CLI utility.

`asa` creates Impression Share reports in Apple Search Ads, lists them and
downloads ready reports to console, CSV or JSON.
"""

from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata

from asa import (
  api_clients,
  custom_reports,
  exceptions,
)
from asa.cli import utils
from asa.io import writer
from asa.io.writers import abs_writer

logger = logging.getLogger(__name__)

_COMMANDS = ('create', 'list', 'get', 'download')


def main(argv: list[str] | None = None) -> None:
  parser = argparse.ArgumentParser()
  parser.add_argument('command', nargs='?', choices=_COMMANDS)
  parser.add_argument('report_id', nargs='?', type=int, default=None)
  parser.add_argument('-c', '--config', dest='asa_config', default=None)
  parser.add_argument('--asa-config', dest='api_config', default=None)
  parser.add_argument('--output', dest='output', default=None)
  parser.add_argument('--name', dest='report_name', default=None)
  parser.add_argument('--date-range', dest='date_range', default=None)
  parser.add_argument('--granularity', dest='granularity', default=None)
  parser.add_argument('--start-date', dest='start_date', default=None)
  parser.add_argument('--end-date', dest='end_date', default=None)
  parser.add_argument('--countries', dest='countries', default=None)
  parser.add_argument('--adam-ids', dest='adam_ids', default=None)
  parser.add_argument('--field', dest='field', default=None)
  parser.add_argument('--limit', dest='limit', type=int, default=None)
  parser.add_argument('--offset', dest='offset', type=int, default=None)
  parser.add_argument('--sort-order', dest='sort_order', default=None)
  parser.add_argument('--log', '--loglevel', dest='loglevel', default='info')
  parser.add_argument('--logger', dest='logger', default='local')
  parser.add_argument('--dry-run', dest='dry_run', action='store_true')
  parser.add_argument('-v', '--version', dest='version', action='store_true')
  parser.set_defaults(dry_run=False)
  main_args, cli_named_args = parser.parse_known_args(argv)

  if main_args.version:
    version = metadata.version('apple-search-ads-report-fetcher')
    print(f'asa version {version}')
    return

  utils.init_logging(
    loglevel=main_args.loglevel.upper(), logger_type=main_args.logger
  )
  if not main_args.command:
    logger.error('Please provide one of commands: %s', ', '.join(_COMMANDS))
    raise exceptions.AsaMissingCommandException(
      f'Please provide one of commands: {", ".join(_COMMANDS)}'
    )

  config = utils.ConfigBuilder().build(vars(main_args), cli_named_args)
  logger.debug('config: %s', config)
  if main_args.dry_run:
    return

  service = custom_reports.ImpressionShareReportService(
    api_clients.AppleSearchAdsApiClient(path_to_config=main_args.api_config)
  )
  writer_client = writer.create_writer(config.output, **config.writer_params)
  try:
    destination = run_command(main_args, config, service, writer_client)
  except exceptions.AsaRemoteException as e:
    logger.error(
      '%s failed with status %s and includes the following errors:',
      main_args.command,
      e.status_code,
    )
    for error in e.error.errors if e.error else []:
      logger.error('\tError with message %s .', error.message)
      if error.field:
        logger.error('\t\tOn field %s', error.field)
    sys.exit(1)
  except exceptions.AsaException as e:
    logger.error('%s generated an exception: %s', main_args.command, str(e))
    sys.exit(1)
  logger.info('%s executed successfully %s', main_args.command, destination)


def run_command(
  main_args: argparse.Namespace,
  config: utils.AsaConfig,
  service: custom_reports.ImpressionShareReportService,
  writer_client: abs_writer.AbsWriter,
) -> str:
  """Executes CLI command and writes its results.

  Returns:
      Where results are written.

  Raises:
      AsaCliException: When report_id is missing for get and download.
  """
  if main_args.command == 'create':
    response = service.create_impression_share_report(
      config.to_report_request()
    )
    descriptor = _require_data(response)
    return _write_descriptors(
      writer_client, [descriptor], f'report_{descriptor.id}'
    )
  if main_args.command == 'list':
    response = service.get_all_impression_share_reports(
      custom_reports.ImpressionShareReportRequest(
        field=main_args.field,
        limit=main_args.limit,
        offset=main_args.offset,
        sort_order=main_args.sort_order,
      )
    )
    if response.pagination:
      logger.info(
        'Showing %d of %s reports',
        len(response.data),
        response.pagination.total_results,
      )
    return _write_descriptors(
      writer_client, response.data, 'impression_share_reports'
    )
  if main_args.report_id is None:
    raise exceptions.AsaCliException(
      f'report_id is required for {main_args.command} command'
    )
  descriptor = _require_data(
    service.get_single_impression_share_report(main_args.report_id)
  )
  if main_args.command == 'get':
    return _write_descriptors(
      writer_client, [descriptor], f'report_{main_args.report_id}'
    )
  downloaded_report = service.download_report(descriptor)
  return writer_client.write(
    downloaded_report.to_report(),
    f'impression_share_report_{main_args.report_id}',
  ) or str(writer_client)


def _require_data(
  response: custom_reports.ImpressionShareReportResponse,
) -> custom_reports.ImpressionShareReport:
  if not response.data:
    raise exceptions.AsaMalformedResponseException(
      'Response does not contain report data'
    )
  return response.data


def _write_descriptors(
  writer_client: abs_writer.AbsWriter,
  descriptors: list[custom_reports.ImpressionShareReport],
  destination: str,
) -> str:
  report = custom_reports.reports_to_report(descriptors)
  return writer_client.write(report, destination) or str(writer_client)


if __name__ == '__main__':
  main()
