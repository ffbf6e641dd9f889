"""Tests for :mod:`friendstatus.services.tables`."""

from unittest import TestCase, mock

from flask import Flask
from sqlalchemy.exc import OperationalError

from ... import tables
from ...tables import Outcome


class TableStoreTestCase(TestCase):
    """Each test gets a fresh in-memory database."""

    def setUp(self):
        self.app = Flask('test')
        self.app.config['SQLALCHEMY_DATABASE_URI'] = 'sqlite://'
        tables.init_app(self.app)
        self.ctx = self.app.app_context()
        self.ctx.push()
        tables.create_all()

    def tearDown(self):
        tables.drop_all()
        self.ctx.pop()


class TestTables(TableStoreTestCase):
    """Creating and deleting tables."""

    def test_create_table(self):
        """A new table is created, and creating it again is a no-op."""
        self.assertFalse(tables.table_exists('DataTable'))
        result = tables.create_table_if_not_exists('DataTable')
        self.assertEqual(result.outcome, Outcome.CREATED)
        self.assertTrue(tables.table_exists('DataTable'))

        result = tables.create_table_if_not_exists('DataTable')
        self.assertEqual(result.outcome, Outcome.OK)

    def test_delete_table(self):
        """Deleting a table also deletes its entities."""
        tables.create_table_if_not_exists('DataTable')
        tables.insert_or_merge_entity('DataTable', 'USA', 'Franklin,Aretha',
                                      {'Status': 'Singing'})
        self.assertEqual(tables.delete_table('DataTable').outcome, Outcome.OK)
        self.assertFalse(tables.table_exists('DataTable'))

        tables.create_table_if_not_exists('DataTable')
        result = tables.retrieve_entity('DataTable', 'USA', 'Franklin,Aretha')
        self.assertEqual(result.outcome, Outcome.NOT_FOUND)

    def test_delete_missing_table(self):
        """Deleting a table that does not exist is ``NOT_FOUND``."""
        self.assertEqual(tables.delete_table('Nope').outcome,
                         Outcome.NOT_FOUND)


class TestEntities(TableStoreTestCase):
    """Reading and writing entities."""

    def setUp(self):
        super(TestEntities, self).setUp()
        tables.create_table_if_not_exists('DataTable')

    def test_insert_and_retrieve(self):
        """An inserted entity can be read back."""
        result = tables.insert_or_merge_entity(
            'DataTable', 'USA', 'Franklin,Aretha', {'Song': 'RESPECT'}
        )
        self.assertEqual(result.outcome, Outcome.OK)

        result = tables.retrieve_entity('DataTable', 'USA', 'Franklin,Aretha')
        self.assertEqual(result.outcome, Outcome.OK)
        self.assertEqual(result.entity.properties, {'Song': 'RESPECT'})
        self.assertEqual(result.entity.partition, 'USA')
        self.assertEqual(result.entity.row, 'Franklin,Aretha')

    def test_insert_into_missing_table(self):
        """Writing to a table that does not exist is ``NOT_FOUND``."""
        result = tables.insert_or_merge_entity('Nope', 'a', 'b', {'c': 'd'})
        self.assertEqual(result.outcome, Outcome.NOT_FOUND)

    def test_merge_keeps_other_properties(self):
        """Merging only touches the named properties."""
        tables.insert_or_merge_entity('DataTable', 'USA', 'Franklin,Aretha',
                                      {'Song': 'RESPECT', 'Born': '1942'})
        result = tables.merge_entity('DataTable', 'USA', 'Franklin,Aretha',
                                     {'Song': 'Think'})
        self.assertEqual(result.outcome, Outcome.OK)

        entity = tables.retrieve_entity(
            'DataTable', 'USA', 'Franklin,Aretha'
        ).entity
        self.assertEqual(entity.properties, {'Song': 'Think', 'Born': '1942'})

    def test_merge_missing_entity(self):
        """Merging requires the entity to exist."""
        result = tables.merge_entity('DataTable', 'USA', 'Nobody', {'a': 'b'})
        self.assertEqual(result.outcome, Outcome.NOT_FOUND)
        result = tables.retrieve_entity('DataTable', 'USA', 'Nobody')
        self.assertEqual(result.outcome, Outcome.NOT_FOUND)

    def test_delete_entity(self):
        """A deleted entity is gone."""
        tables.insert_or_merge_entity('DataTable', 'USA', 'Franklin,Aretha',
                                      {'Song': 'RESPECT'})
        result = tables.delete_entity('DataTable', 'USA', 'Franklin,Aretha')
        self.assertEqual(result.outcome, Outcome.OK)
        result = tables.delete_entity('DataTable', 'USA', 'Franklin,Aretha')
        self.assertEqual(result.outcome, Outcome.NOT_FOUND)

    @mock.patch(f'{tables.__name__}._get_entity')
    def test_storage_failure(self, mock_get_entity):
        """A database error is reported as ``ERROR``."""
        mock_get_entity.side_effect = OperationalError('SELECT', {}, None)
        result = tables.retrieve_entity('DataTable', 'USA', 'Franklin,Aretha')
        self.assertEqual(result.outcome, Outcome.ERROR)
        result = tables.merge_entity('DataTable', 'USA', 'Franklin,Aretha',
                                     {'a': 'b'})
        self.assertEqual(result.outcome, Outcome.ERROR)


class TestScan(TableStoreTestCase):
    """Listing entities."""

    def setUp(self):
        super(TestScan, self).setUp()
        tables.create_table_if_not_exists('DataTable')
        tables.insert_or_merge_entity('DataTable', 'USA', 'Franklin,Aretha',
                                      {'Song': 'RESPECT', 'Born': '1942'})
        tables.insert_or_merge_entity('DataTable', 'USA', 'Khaled,DJ',
                                      {'Song': 'All I Do Is Win'})
        tables.insert_or_merge_entity('DataTable', 'Canada', 'Drake',
                                      {'Born': '1986'})

    def test_full_scan(self):
        """All entities come back."""
        result = tables.scan('DataTable')
        self.assertEqual(result.outcome, Outcome.OK)
        self.assertEqual(len(result.entities), 3)

    def test_partition_scan(self):
        """Only entities in the partition come back."""
        result = tables.scan('DataTable', partition='USA')
        self.assertEqual([e.row for e in result.entities],
                         ['Franklin,Aretha', 'Khaled,DJ'])
        result = tables.scan('DataTable', partition='Mexico')
        self.assertEqual(result.outcome, Outcome.OK)
        self.assertEqual(result.entities, [])

    def test_property_scan(self):
        """Entities must have every requested property."""
        result = tables.scan('DataTable', properties=['Born'])
        self.assertEqual({e.row for e in result.entities},
                         {'Franklin,Aretha', 'Drake'})
        result = tables.scan('DataTable', properties=['Born', 'Song'])
        self.assertEqual([e.row for e in result.entities],
                         ['Franklin,Aretha'])

    def test_property_scan_with_keys(self):
        """``Partition`` and ``Row`` match every entity."""
        result = tables.scan('DataTable', properties=['Partition', 'Row'])
        self.assertEqual(len(result.entities), 3)

    def test_scan_missing_table(self):
        """Scanning a table that does not exist is ``NOT_FOUND``."""
        self.assertEqual(tables.scan('Nope').outcome, Outcome.NOT_FOUND)
