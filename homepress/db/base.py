from advanced_alchemy.base import BigIntBase


class Base(BigIntBase):
    """Declarative base for homepress models (integer primary key ``id``)."""

    __abstract__ = True
