"""
Durable entities keyed by (table, partition, row).

Every operation reports its result as a :class:`.TableResult`; missing tables
or entities and storage failures are outcomes, not exceptions. Must be called
inside an application context.
"""

import json
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError

from ... import logging
from ...domain import Entity
from . import util
from .models import DBEntity, DBTable

logger = logging.getLogger(__name__)

PARTITION = 'Partition'
ROW = 'Row'

init_app = util.init_app
create_all = util.create_all
drop_all = util.drop_all


class Outcome(Enum):
    """How a table operation turned out."""

    OK = 'ok'
    CREATED = 'created'
    NOT_FOUND = 'not_found'
    ERROR = 'error'


class TableResult(NamedTuple):
    """The outcome of a table operation, and whatever it produced."""

    outcome: Outcome
    entity: Optional[Entity] = None
    entities: List[Entity] = []

    @property
    def ok(self) -> bool:
        return self.outcome in (Outcome.OK, Outcome.CREATED)


OK = TableResult(Outcome.OK)
CREATED = TableResult(Outcome.CREATED)
NOT_FOUND = TableResult(Outcome.NOT_FOUND)
ERROR = TableResult(Outcome.ERROR)


def _to_entity(db_entity: DBEntity) -> Entity:
    return Entity(partition=db_entity.partition_key,
                  row=db_entity.row_key,
                  properties=json.loads(db_entity.properties or '{}'))


def _get_table(name: str) -> Optional[DBTable]:
    return util.db.session.get(DBTable, name)


def _get_entity(table: str, partition: str, row: str) -> Optional[DBEntity]:
    return util.db.session.get(DBEntity, (table, partition, row))


def create_table_if_not_exists(name: str) -> TableResult:
    """Create table ``name``; ``OK`` if it was already there."""
    try:
        with util.transaction() as session:
            if _get_table(name) is not None:
                return OK
            session.add(DBTable(name=name))
    except SQLAlchemyError as e:
        logger.error('Could not create table %s: %s', name, e)
        return ERROR
    logger.info('Created table %s', name)
    return CREATED


def delete_table(name: str) -> TableResult:
    """Delete table ``name`` and everything in it."""
    try:
        with util.transaction() as session:
            db_table = _get_table(name)
            if db_table is None:
                return NOT_FOUND
            session.query(DBEntity).filter(DBEntity.table_name == name) \
                .delete(synchronize_session=False)
            session.delete(db_table)
    except SQLAlchemyError as e:
        logger.error('Could not delete table %s: %s', name, e)
        return ERROR
    logger.info('Deleted table %s', name)
    return OK


def table_exists(name: str) -> bool:
    """Determine whether table ``name`` exists."""
    try:
        return _get_table(name) is not None
    except SQLAlchemyError as e:
        logger.error('Could not look up table %s: %s', name, e)
        return False


def retrieve_entity(table: str, partition: str, row: str) -> TableResult:
    """Load a single entity."""
    try:
        db_entity = _get_entity(table, partition, row)
    except SQLAlchemyError as e:
        logger.error('Could not load %s/%s/%s: %s', table, partition, row, e)
        return ERROR
    if db_entity is None:
        return NOT_FOUND
    return TableResult(Outcome.OK, entity=_to_entity(db_entity))


def insert_or_merge_entity(table: str, partition: str, row: str,
                           properties: Dict[str, str]) -> TableResult:
    """
    Create an entity, or merge ``properties`` into the existing one.

    Properties not named in ``properties`` are left alone.

    Returns
    -------
    :class:`.TableResult`
        ``NOT_FOUND`` if the table does not exist.

    """
    try:
        with util.transaction() as session:
            if _get_table(table) is None:
                return NOT_FOUND
            db_entity = _get_entity(table, partition, row)
            if db_entity is None:
                db_entity = DBEntity(table_name=table,
                                     partition_key=partition,
                                     row_key=row,
                                     properties=json.dumps(properties))
                session.add(db_entity)
            else:
                merged = json.loads(db_entity.properties or '{}')
                merged.update(properties)
                db_entity.properties = json.dumps(merged)
    except SQLAlchemyError as e:
        logger.error('Could not write %s/%s/%s: %s', table, partition, row, e)
        return ERROR
    return OK


def merge_entity(table: str, partition: str, row: str,
                 properties: Dict[str, str]) -> TableResult:
    """Merge ``properties`` into an entity that must already exist."""
    try:
        with util.transaction():
            db_entity = _get_entity(table, partition, row)
            if db_entity is None:
                return NOT_FOUND
            merged = json.loads(db_entity.properties or '{}')
            merged.update(properties)
            db_entity.properties = json.dumps(merged)
    except SQLAlchemyError as e:
        logger.error('Could not merge %s/%s/%s: %s', table, partition, row, e)
        return ERROR
    return OK


def delete_entity(table: str, partition: str, row: str) -> TableResult:
    """Delete a single entity."""
    try:
        with util.transaction() as session:
            db_entity = _get_entity(table, partition, row)
            if db_entity is None:
                return NOT_FOUND
            session.delete(db_entity)
    except SQLAlchemyError as e:
        logger.error('Could not delete %s/%s/%s: %s', table, partition, row, e)
        return ERROR
    return OK


def scan(table: str, partition: Optional[str] = None,
         properties: Optional[List[str]] = None) -> TableResult:
    """
    List the entities in a table.

    Parameters
    ----------
    table : str
    partition : str
        If given, only entities in this partition are returned.
    properties : list
        If given, only entities that have every one of these properties are
        returned. ``Partition`` and ``Row`` count as properties of every
        entity.

    Returns
    -------
    :class:`.TableResult`
        ``NOT_FOUND`` if the table does not exist; otherwise ``OK`` with a
        (possibly empty) list of entities.

    """
    try:
        if _get_table(table) is None:
            return NOT_FOUND
        query = util.db.session.query(DBEntity) \
            .filter(DBEntity.table_name == table)
        if partition is not None:
            query = query.filter(DBEntity.partition_key == partition)
        query = query.order_by(DBEntity.partition_key, DBEntity.row_key)
        entities = [_to_entity(db_entity) for db_entity in query]
    except SQLAlchemyError as e:
        logger.error('Could not scan %s: %s', table, e)
        return ERROR

    if properties:
        wanted = set(properties)
        entities = [
            entity for entity in entities
            if wanted <= {PARTITION, ROW} | set(entity.properties)
        ]
    return TableResult(Outcome.OK, entities=entities)
