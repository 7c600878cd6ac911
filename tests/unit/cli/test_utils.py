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
from __future__ import annotations

import datetime

import pytest
import yaml
from dateutil.relativedelta import relativedelta

from asa import custom_reports, exceptions
from asa.cli import utils


class TestAsaConfig:
  @pytest.mark.parametrize(
    'input_values, output_values',
    [
      (None, None),
      ('us, gb', ['us', 'gb']),
      ('us,,gb,', ['us', 'gb']),
      (['us', ' gb '], ['us', 'gb']),
      (123456789, ['123456789']),
    ],
  )
  def test_post_init_returns_correctly_formatted_values(
    self, input_values, output_values
  ):
    config = utils.AsaConfig(countries=input_values, adam_ids=input_values)
    assert config.countries == output_values
    assert config.adam_ids == output_values

  def test_post_init_returns_correctly_formatted_writer_params(self):
    config = utils.AsaConfig(
      output='console',
      writer_params={
        'page-size': 10,
      },
    )
    assert config.writer_params == {'page_size': 10}

  def test_post_init_upper_cases_enum_values(self):
    config = utils.AsaConfig(date_range='last_week', granularity='weekly')
    assert config.date_range == 'LAST_WEEK'
    assert config.granularity == 'WEEKLY'

  def test_from_dict_ignores_empty_values(self):
    config = utils.AsaConfig.from_dict(
      {'output': '', 'report_name': 'share', 'countries': None}
    )
    assert config == utils.AsaConfig(output='console', report_name='share')

  def test_to_report_request_returns_correct_request(self):
    config = utils.AsaConfig(
      report_name='share',
      granularity='daily',
      start_date='2024-03-01',
      end_date='2024-03-07',
      countries='us,gb',
      adam_ids='123',
    )
    assert config.to_report_request() == custom_reports.CustomReportRequest(
      name='share',
      granularity=custom_reports.CustomReportGranularity.DAILY,
      start_time=datetime.date(2024, 3, 1),
      end_time=datetime.date(2024, 3, 7),
      selector=custom_reports.Selector(
        conditions=[
          custom_reports.Condition('countryOrRegion', 'IN', ['US', 'GB']),
          custom_reports.Condition('adamId', 'IN', ['123']),
        ]
      ),
    )

  def test_to_report_request_converts_date_macros(self):
    config = utils.AsaConfig(report_name='share', start_date=':YYYYMMDD-1')
    request = config.to_report_request()
    assert request.start_time == datetime.date.today() - datetime.timedelta(
      days=1
    )
    assert request.end_time is None
    assert request.selector is None

  @pytest.mark.parametrize(
    'config_values',
    [
      {'granularity': 'hourly'},
      {'date_range': 'yesterday'},
      {'start_date': '01/03/2024'},
      {'end_date': ':YYYYMMDD-N'},
    ],
  )
  def test_to_report_request_raises_error_for_invalid_values(
    self, config_values
  ):
    config = utils.AsaConfig(report_name='share', **config_values)
    with pytest.raises(exceptions.AsaConfigException):
      config.to_report_request()


class TestConfigBuilder:
  @pytest.fixture
  def config_path(self, tmp_path):
    config = {
      'asa': {
        'output': 'csv',
        'csv': {'destination-folder': '/tmp/out'},
        'report_name': 'from file',
        'granularity': 'daily',
        'countries': ['us', 'gb'],
      }
    }
    path = tmp_path / 'config.yaml'
    with open(path, 'w', encoding='utf-8') as f:
      yaml.dump(config, f)
    return str(path)

  def test_build_returns_config_from_cli_arguments(self):
    config = utils.ConfigBuilder().build(
      {
        'asa_config': None,
        'output': 'json',
        'report_name': 'from cli',
        'date_range': None,
        'loglevel': 'info',
      },
      ['--json.destination-folder=/tmp/json'],
    )
    assert config == utils.AsaConfig(
      output='json',
      report_name='from cli',
      writer_params={'destination_folder': '/tmp/json'},
    )

  def test_build_returns_config_from_file(self, config_path):
    config = utils.ConfigBuilder().build({'asa_config': config_path}, [])
    assert config == utils.AsaConfig(
      output='csv',
      report_name='from file',
      granularity='DAILY',
      countries=['us', 'gb'],
      writer_params={'destination_folder': '/tmp/out'},
    )

  def test_build_cli_arguments_override_file_values(self, config_path):
    config = utils.ConfigBuilder().build(
      {'asa_config': config_path, 'output': None, 'report_name': 'from cli'},
      ['--csv.array-separator=,'],
    )
    assert config.output == 'csv'
    assert config.report_name == 'from cli'
    assert config.writer_params == {
      'destination_folder': '/tmp/out',
      'array_separator': ',',
    }

  def test_build_raises_error_when_asa_section_is_missing(self, tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text('other:\n  output: csv\n', encoding='utf-8')
    with pytest.raises(exceptions.AsaConfigException):
      utils.ConfigBuilder().build({'asa_config': str(path)}, [])


class TestParamsParser:
  @pytest.fixture
  def param_parser(self):
    return utils.ParamsParser(['csv', 'console'])

  def test_parse(self, param_parser):
    parsed_params = param_parser.parse(
      ['--csv.destination-folder=/tmp', '--csv.delimiter=;']
    )
    assert parsed_params == {
      'csv': {'destination_folder': '/tmp', 'delimiter': ';'},
      'console': {},
    }

  def test_parse_ignores_unknown_identifiers(self, param_parser):
    parsed_params = param_parser.parse(['--json.destination-folder=/tmp'])
    assert parsed_params == {'csv': {}, 'console': {}}

  @pytest.mark.parametrize(
    'params', [['--csv.delimiter'], ['--csv=;'], ['--csv.']]
  )
  def test_parse_raises_error_for_incorrect_param(self, param_parser, params):
    with pytest.raises(exceptions.AsaCliException):
      param_parser.parse(params)


def test_convert_date():
  current_date = datetime.date.today()
  current_year = datetime.date(current_date.year, 1, 1)
  current_month = datetime.date(current_date.year, current_date.month, 1)
  last_year = current_year - relativedelta(years=1)
  last_month = current_month - relativedelta(months=1)
  yesterday = current_date - relativedelta(days=1)

  assert utils.convert_date('2022-01-01') == '2022-01-01'
  assert utils.convert_date(':YYYY') == current_year.strftime('%Y-%m-%d')
  assert utils.convert_date(':YYYYMM') == current_month.strftime('%Y-%m-%d')
  assert utils.convert_date(':YYYYMMDD') == current_date.strftime('%Y-%m-%d')
  assert utils.convert_date(':YYYY-1') == last_year.strftime('%Y-%m-%d')
  assert utils.convert_date(':YYYYMM-1') == last_month.strftime('%Y-%m-%d')
  assert utils.convert_date(':YYYYMMDD-1') == yesterday.strftime('%Y-%m-%d')
  assert utils.convert_date(None) is None


@pytest.mark.parametrize('date_string', [':YYYYMMDD-N', ':YYYYWW-1'])
def test_wrong_convert_date(date_string):
  with pytest.raises(ValueError):
    utils.convert_date(date_string)
