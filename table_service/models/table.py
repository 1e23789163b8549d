"""
Table Model — Table Service
A reservation hosted by one user. host_id is always taken from the session.
"""

import uuid
from table_service.extensions import db, utcnow


class Table(db.Model):
    __tablename__ = 'tables'

    table_id = db.Column(db.Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    host_id = db.Column(db.Text, nullable=False, index=True)
    table_name = db.Column(db.String(255))
    host_name = db.Column(db.String(255))
    club_name = db.Column(db.String(255))
    reservation_date = db.Column(db.String(64))
    available_spots = db.Column(db.Integer)
    min_joining_fee = db.Column(db.Float)
    host_social_links = db.Column(db.JSON, nullable=False, default=list)
    host_phone_number = db.Column(db.Text)
    host_bio = db.Column(db.Text)
    table_details = db.Column(db.Text)
    reservation_confirmation_uri = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    version = db.Column(db.Integer, nullable=False)

    __mapper_args__ = {'version_id_col': version}

    def to_dict(self):
        return {
            'id': str(self.table_id),
            'hostId': self.host_id,
            'tableName': self.table_name,
            'hostName': self.host_name,
            'clubName': self.club_name,
            'reservationDate': self.reservation_date,
            'availableSpots': self.available_spots,
            'minJoiningFee': self.min_joining_fee,
            'hostSocialLinks': self.host_social_links or [],
            'hostPhoneNumber': self.host_phone_number,
            'hostBio': self.host_bio,
            'tableDetails': self.table_details,
            'reservationConfirmationUri': self.reservation_confirmation_uri,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
