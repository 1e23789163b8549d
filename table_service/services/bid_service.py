"""
Bid Lifecycle Manager — Table Service
Handles join requests against hosted tables.

    pending -> approved | denied   (host decision, may be repeated)
    pending -> deleted             (bidder cancels)
    approved -> deleted            (host removes the member)
"""

import logging

from table_service.errors import Forbidden, InvalidState, InvalidStatus, NotFound
from table_service.extensions import db
from table_service.models import Bid
from table_service.services.table_registry import get_hosted_table

logger = logging.getLogger(__name__)

HOST_DECISIONS = ("approved", "denied")


def create_bid(bidder_id, table_id, fields):
    """
    Any authenticated user may bid on any table id, including their own
    table or one that no longer exists.
    """
    bid = Bid(
        table_id=table_id,
        user_id=bidder_id,
        status="pending",
        **fields,
    )
    db.session.add(bid)
    db.session.commit()
    logger.info("Bid %s placed on table %s by %s", bid.bid_id, table_id, bidder_id)
    return bid


def get_bid(bid_id):
    bid = db.session.get(Bid, bid_id)
    if bid is None:
        raise NotFound("Bid not found")
    return bid


def list_bids_for_table(host_id, table_id):
    get_hosted_table(host_id, table_id)
    return Bid.query.filter_by(table_id=table_id).all()


def set_bid_status(host_id, table_id, bid_id, new_status):
    """
    Host approves or denies a bid. The prior status is not checked, so a
    decision can be changed or repeated.
    """
    get_hosted_table(host_id, table_id)

    bid = get_bid(bid_id)
    if bid.table_id != table_id:
        raise NotFound("Bid not found")

    if new_status not in HOST_DECISIONS:
        raise InvalidStatus("Invalid status")

    bid.status = new_status
    db.session.commit()
    logger.info("Bid %s on table %s set to %s", bid_id, table_id, new_status)
    return bid


def list_own_bids(bidder_id):
    return Bid.query.filter_by(user_id=bidder_id).all()


def cancel_own_bid(bidder_id, bid_id):
    bid = get_bid(bid_id)
    if bid.user_id != bidder_id:
        raise Forbidden("Not your bid")
    if bid.status != "pending":
        raise InvalidState("Cannot remove a bid that is not pending")

    db.session.delete(bid)
    db.session.commit()
    logger.info("Bid %s cancelled by %s", bid_id, bidder_id)


def remove_approved_member(host_id, table_id, member_id):
    """
    Evict an approved member by deleting their approved bid. If several
    approved bids exist for the member, the oldest one goes.
    """
    get_hosted_table(host_id, table_id)

    bid = (
        Bid.query
        .filter_by(table_id=table_id, user_id=member_id, status="approved")
        .order_by(Bid.created_at, Bid.bid_id)
        .first()
    )
    if bid is None:
        raise NotFound("No approved bid for this member")

    bid_id = bid.bid_id
    db.session.delete(bid)
    db.session.commit()
    logger.info("Member %s removed from table %s (bid %s)", member_id, table_id, bid_id)
    return bid_id
