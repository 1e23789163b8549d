"""
Bid Model — Table Service
Status: pending | approved | denied
table_id is a plain column so bids survive deletion of their table.
"""

import uuid
from table_service.extensions import db, utcnow

BID_STATUSES = ("pending", "approved", "denied")


class Bid(db.Model):
    __tablename__ = "bids"

    bid_id = db.Column(db.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    table_id = db.Column(db.Uuid(as_uuid=True), nullable=False, index=True)
    user_id = db.Column(db.Text, nullable=False, index=True)
    status = db.Column(
        db.Enum(*BID_STATUSES, name="bid_status"),
        nullable=False,
        default="pending"
    )
    bid_amount = db.Column(db.Float)
    phone_number = db.Column(db.Text)
    user_social_links = db.Column(db.JSON, nullable=False, default=list)
    referred_by = db.Column(db.String(255))
    photo_uri = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    version = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def to_dict(self):
        return {
            "id":              str(self.bid_id),
            "tableId":         str(self.table_id),
            "userId":          self.user_id,
            "status":          self.status,
            "bidAmount":       self.bid_amount,
            "phoneNumber":     self.phone_number,
            "userSocialLinks": self.user_social_links or [],
            "referredBy":      self.referred_by,
            "photoUri":        self.photo_uri,
            "createdAt":       self.created_at.isoformat() if self.created_at else None,
        }
