from .base import Endpoint, Resource, encode_query, valid_id
from .job import Job
from .invitation import Invitation
from .offer import Offer

__all__ = [
    "Endpoint", "Resource", "encode_query", "valid_id",
    "Job", "Invitation", "Offer",
    "RESOURCES",
]

RESOURCES: tuple[type[Resource], ...] = (Job, Offer, Invitation)
