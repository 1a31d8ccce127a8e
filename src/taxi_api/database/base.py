"""
Declarative base shared by every ORM model in the service.

Import `Base` in each model module; `Base.metadata` is what `create_all()`
and the test fixtures operate on.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


# Constraint names are predictable so integrity errors can be traced back to a column
# (e.g. "uq_passengers_email", "fk_rides_passenger_id_passengers").
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
