"""SQLAlchemy models backing the partition/row table store."""

from datetime import datetime

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import Column, DateTime, ForeignKey, String, Text

db: SQLAlchemy = SQLAlchemy()


class DBTable(db.Model):
    """A named table; entities only exist inside one."""

    __tablename__ = 'fs_table'

    name = Column(String(255), primary_key=True)
    created = Column(DateTime, default=datetime.now)


class DBEntity(db.Model):
    """An entity, addressed by (table, partition, row)."""

    __tablename__ = 'fs_entity'

    table_name = Column(ForeignKey('fs_table.name'), primary_key=True)
    partition_key = Column(String(255), primary_key=True)
    row_key = Column(String(255), primary_key=True)

    properties = Column(Text, nullable=False, default='{}')
    """JSON object of string property values."""

    updated = Column(DateTime, default=datetime.now, onupdate=datetime.now)
