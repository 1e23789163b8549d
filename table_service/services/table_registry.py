"""
Table Registry — Table Service
Hosted table CRUD. Reads are public; deletes are host-only.
"""

import logging

from table_service.errors import Forbidden, NotFound
from table_service.extensions import db
from table_service.models import Table

logger = logging.getLogger(__name__)


def create_table(host_id, fields):
    """fields: validated TableFields dump (snake_case keys)."""
    table = Table(host_id=host_id, **fields)
    db.session.add(table)
    db.session.commit()
    logger.info("Table %s created by %s", table.table_id, host_id)
    return table


def list_hosted_tables(host_id):
    return Table.query.filter_by(host_id=host_id).all()


def list_all_tables():
    return Table.query.all()


def get_table(table_id):
    table = db.session.get(Table, table_id)
    if table is None:
        raise NotFound("Table not found")
    return table


def get_hosted_table(host_id, table_id):
    table = get_table(table_id)
    if table.host_id != host_id:
        raise Forbidden("Not your table")
    return table


def delete_table(host_id, table_id):
    # Bids on the table are left in place.
    table = get_hosted_table(host_id, table_id)
    db.session.delete(table)
    db.session.commit()
    logger.info("Table %s deleted by %s", table_id, host_id)
