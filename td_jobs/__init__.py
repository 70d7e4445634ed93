"""Client library for the TD jobs marketplace service."""
from td_jobs.config import (
    Configuration,
    configuration,
    configure,
    configure_from_env,
    configure_from_file,
    load_configuration,
    on_configure,
)
from td_jobs.exceptions import (
    EntityNotFound,
    InvalidStatus,
    NotConfigured,
    RequestFailed,
    TDJobsError,
    UnauthorizedRequest,
    WrongAttributes,
)
from td_jobs.models import Page
from td_jobs.resources import Invitation, Job, Offer
from td_jobs.client import Client

__version__ = "0.1.0"

__all__ = [
    "Configuration", "configuration", "configure", "configure_from_env",
    "configure_from_file", "load_configuration", "on_configure",
    "EntityNotFound", "InvalidStatus", "NotConfigured", "RequestFailed",
    "TDJobsError", "UnauthorizedRequest", "WrongAttributes",
    "Page", "Job", "Offer", "Invitation", "Client",
]
