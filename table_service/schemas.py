"""
Request payloads — Table Service
Clients send camelCase keys; anything not declared here is rejected so
server-owned fields (hostId, userId, status, ...) can never be supplied.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from table_service.errors import InvalidInput


class Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class TableFields(Payload):
    table_name: Optional[str] = None
    host_name: Optional[str] = None
    club_name: Optional[str] = None
    reservation_date: Optional[str] = None
    available_spots: Optional[int] = None
    min_joining_fee: Optional[float] = None
    host_social_links: Optional[List[str]] = None
    host_phone_number: Optional[str] = None
    host_bio: Optional[str] = None
    table_details: Optional[str] = None
    reservation_confirmation_uri: Optional[str] = None


class BidFields(Payload):
    bid_amount: Optional[float] = None
    phone_number: Optional[str] = None
    user_social_links: Optional[List[str]] = None
    referred_by: Optional[str] = None
    photo_uri: Optional[str] = None


def parse_payload(model, data):
    """Validate a JSON body against ``model`` and return the set fields."""
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    try:
        parsed = model.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        if error["type"] == "extra_forbidden":
            raise InvalidInput(f"Unknown field: {field}")
        raise InvalidInput(f"Invalid field {field}: {error['msg']}")
    return parsed.model_dump(exclude_none=True)


def require_fields(data, *fields):
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    missing = [f for f in fields if data.get(f) in (None, "")]
    if missing:
        raise InvalidInput(f"Missing fields: {', '.join(missing)}")
    return data
