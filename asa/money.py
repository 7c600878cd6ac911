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
"""Handles budget amounts returned by Search Ads API.

Amounts are delivered as decimal strings (i.e. "100.12") alongside
a currency code. Conversions between the string and integer number of
cents never go through floating point; the only float operation is a single
multiplication in `Money.mul`.

    * Money - immutable amount + currency pair.
    * amount_to_cents / strict_amount_to_cents - string to cents.
    * cents_to_amount - cents to string.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import re
from typing import Any

from asa import exceptions

logger = logging.getLogger(__name__)

_CENT_DIGITS = 2
_INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')


def strict_amount_to_cents(amount: str) -> int:
  """Converts decimal string to a whole number of cents.

  Args:
      amount: Decimal string, i.e. "100", "100.1" or "100.12".

  Returns:
      Amount in cents; extra fractional digits are truncated toward zero.

  Raises:
      AsaMoneyException: When amount is not a decimal string.
  """
  if not isinstance(amount, str):
    raise exceptions.AsaMoneyException(
      f'Amount must be a string, got {type(amount).__name__}'
    )
  integer_part, separator, fractional_part = amount.partition('.')
  digits = integer_part + fractional_part
  if not _INTEGER_PATTERN.fullmatch(digits):
    raise exceptions.AsaMoneyException(f'Invalid amount: "{amount}"')
  value = int(digits)
  decimal_places = len(fractional_part) if separator else 0
  if decimal_places <= _CENT_DIGITS:
    return value * 10 ** (_CENT_DIGITS - decimal_places)
  divisor = 10 ** (decimal_places - _CENT_DIGITS)
  cents = abs(value) // divisor
  return -cents if value < 0 else cents


def amount_to_cents(amount: str) -> int:
  """Converts decimal string to cents, returning 0 for malformed amounts."""
  try:
    return strict_amount_to_cents(amount)
  except exceptions.AsaMoneyException:
    logger.debug('Cannot convert amount "%s" to cents, using 0', amount)
    return 0


def cents_to_amount(cents: int) -> str:
  """Formats whole number of cents as a decimal string.

  Zero is rendered as "0", other values always get two decimal places
  (5 -> "0.05", 10012 -> "100.12", -5 -> "-0.05").
  """
  if cents == 0:
    return '0'
  sign = '-' if cents < 0 else ''
  digits = str(abs(cents)).rjust(_CENT_DIGITS + 1, '0')
  return f'{sign}{digits[:-_CENT_DIGITS]}.{digits[-_CENT_DIGITS:]}'


@dataclasses.dataclass(frozen=True)
class Money:
  """Budget amount in a given currency.

  https://developer.apple.com/documentation/apple_search_ads/money

  Attributes:
      amount: Decimal string as returned by the API.
      currency: Currency code, carried without validation.
  """

  amount: str
  currency: str

  @classmethod
  def from_cents(cls, cents: int, currency: str) -> Money:
    """Builds Money from a whole number of cents."""
    return cls(amount=cents_to_amount(cents), currency=currency)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> Money:
    return cls(
      amount=str(data.get('amount', '0')), currency=data.get('currency', '')
    )

  def to_dict(self) -> dict[str, str]:
    return {'amount': self.amount, 'currency': self.currency}

  def amount_cents(self) -> int:
    """Whole amount in cents."""
    return amount_to_cents(self.amount)

  def mul(self, factor: float) -> Money:
    """Scales amount by factor.

    Cents are multiplied by the factor and the product is truncated toward
    zero, so Money('0.05', 'USD').mul(0.5) is Money('0.02', 'USD').

    Args:
        factor: Multiplier applied to the amount.

    Returns:
        New Money in the same currency.

    Raises:
        AsaMoneyException: When factor is NaN or infinite or the product
            overflows.
    """
    if not math.isfinite(product := self.amount_cents() * factor):
      raise exceptions.AsaMoneyException(
        f'Cannot scale {self} by {factor}: product is not finite'
      )
    return Money.from_cents(int(product), self.currency)

  def __mul__(self, factor: float) -> Money:
    return self.mul(factor)

  def __str__(self) -> str:
    return f'{self.amount} {self.currency}'
