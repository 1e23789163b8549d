from table_service.models.user import User, UserSession
from table_service.models.otp import OtpChallenge
from table_service.models.table import Table
from table_service.models.bid import Bid, BID_STATUSES
