"""Shared base for domain entities"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from sqlalchemy import BigInteger, Integer
from sqlmodel import SQLModel

# BIGINT primary keys; SQLite only autoincrements INTEGER PRIMARY KEY
IdType = BigInteger().with_variant(Integer(), "sqlite")

MONEY_PLACES = Decimal("0.01")


class BaseModel(SQLModel):
    """Base class for all SQLModel entities of the service"""

    pass


def to_money(value: Optional[Union[Decimal, int, str]]) -> Decimal:
    """Quantize a monetary value to two decimal places (None counts as zero)"""
    if value is None:
        return Decimal("0.00")
    return Decimal(value).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
