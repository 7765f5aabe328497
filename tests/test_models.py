from sqlalchemy import DateTime

from election import db
from election.database.models import utcnow


def test_timestamp_columns_keep_their_offset(app):
    columns = [
        (table.name, column.name)
        for table in db.metadata.sorted_tables
        for column in table.columns
        if isinstance(column.type, DateTime)
    ]
    assert ("votes", "timestamp") in columns
    for table_name, column_name in columns:
        assert db.metadata.tables[table_name].c[column_name].type.timezone is True, (table_name, column_name)


def test_utcnow_is_timezone_aware():
    assert utcnow().utcoffset().total_seconds() == 0
