"""Explicitly configured access to the jobs service without the global registry."""
from __future__ import annotations

from typing import Any

import requests

from td_jobs.config import Configuration
from td_jobs.log import get_logger
from td_jobs.resources import Endpoint, Invitation, Job, Offer

log = get_logger(__name__)


class Client:
    """Holds resource classes bound to one configuration.

    Example::

        client = Client(base_url="https://jobs.example.com", application_secret="s3cr3t")
        job = client.jobs.find(1)

    Building a new client is how to switch to another configuration; this
    one keeps the values it was created with.
    """

    def __init__(
        self,
        config: Configuration | None = None,
        session: requests.Session | None = None,
        **options: Any,
    ) -> None:
        self.config = (config or Configuration()).copy()
        if options:
            self.config.update(**options)
        self.session = session or requests.Session()

        self.jobs: type[Job] = Job.bound_to(self._endpoint(Job.path))
        self.invitations: type[Invitation] = Invitation.bound_to(
            self._endpoint(Invitation.path), job_class=self.jobs
        )
        self.offers: type[Offer] = Offer.bound_to(
            self._endpoint(Offer.path), job_class=self.jobs, invitation_class=self.invitations
        )
        log.debug("Client created for %s", self.config.base_url)

    def _endpoint(self, path: str) -> Endpoint:
        return Endpoint(self.config, path, session=self.session)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
