"""Offers: /offers, a provider's proposal for a job."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from td_jobs.config import configuration, on_configure
from td_jobs.exceptions import EntityNotFound, WrongAttributes
from td_jobs.models import Page
from td_jobs.resources.base import Resource, hybridmethod
from td_jobs.resources.invitation import Invitation
from td_jobs.resources.job import Job


@dataclass
class Offer(Resource):
    """An offer made by a provider on a job, optionally through an invitation.

    ``job`` and ``invitation`` hold embedded entities when the server returns
    them; only their ids are sent back on create.
    """

    path = "offers"
    collection = "offers"
    read_only = ("status", "records")
    job_class = Job
    invitation_class = Invitation

    id: int | None = None
    status: str | None = None
    job: Job | None = None
    job_id: int | None = None
    provider_id: str | None = None
    invitation_id: int | None = None
    invitation: Invitation | None = None
    description: str | None = None
    metadata: dict[str, Any] | None = None
    records: list[Any] | None = None

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        job = values.get("job")
        if isinstance(job, Mapping):
            job = values["job"] = cls.job_class.from_dict(job)
        if isinstance(job, Job) and values.get("job_id") is None:
            values["job_id"] = job.id

        invitation = values.get("invitation")
        if isinstance(invitation, Mapping):
            invitation = values["invitation"] = cls.invitation_class.from_dict(invitation)
        if isinstance(invitation, Invitation):
            values["invitation_id"] = invitation.id
        return values

    @hybridmethod
    def create(cls, attrs: Mapping[str, Any]) -> "Offer":
        body = cls._replace_nested(attrs, "job", "invitation")
        data = cls._call(
            "POST", body=body, errors={400: WrongAttributes, 404: EntityNotFound}
        )
        return cls.from_dict(data)

    @create.instancemethod
    def create(self) -> bool:
        return self._copy(type(self).create(self.to_dict(include_read_only=False)))

    @classmethod
    def find(cls, id: Any) -> "Offer":
        id = cls._check_id(id)
        data = cls._call("GET", str(id), errors={404: EntityNotFound})
        return cls.from_dict(data)

    @classmethod
    def search(cls, query: Mapping[str, Any]) -> list["Offer"]:
        """Filter by provider_id, job_id, status, created_at_from/_to and job_filter."""
        data = cls._call("GET", params=query, errors={400: WrongAttributes})
        return cls._list(data)

    @classmethod
    def paginated_search(
        cls,
        query: Mapping[str, Any],
        page: int | None = None,
        per_page: int | None = None,
    ) -> Page:
        params = cls._pagination_params(dict(query), page, per_page)
        data = cls._call("GET", "pagination", params=params, errors={400: WrongAttributes})
        return cls._page(data)

    @hybridmethod
    def send(cls, id: Any) -> "Offer":
        return cls._status_request(id, "send")

    @send.instancemethod
    def send(self) -> bool:
        return self._copy(type(self).send(self.id))

    @hybridmethod
    def resend(cls, id: Any, attrs: Mapping[str, Any] | None = None) -> "Offer":
        attrs = attrs or {}
        body = {"reason": attrs.get("reason"), "metadata": attrs.get("metadata")}
        return cls._status_request(id, "resend", body)

    @resend.instancemethod
    def resend(self, reason: str | None = None) -> bool:
        return self._copy(type(self).resend(self.id, {"reason": reason, "metadata": self.metadata}))

    @hybridmethod
    def withdraw(cls, id: Any) -> "Offer":
        return cls._status_request(id, "withdraw")

    @withdraw.instancemethod
    def withdraw(self) -> bool:
        return self._copy(type(self).withdraw(self.id))

    @hybridmethod
    def return_(cls, id: Any, attrs: Mapping[str, Any] | None = None) -> "Offer":
        """PUT /offers/:id/return; ``return`` is a keyword, hence the underscore."""
        attrs = attrs or {}
        return cls._status_request(id, "return", {"reason": attrs.get("reason")})

    @return_.instancemethod
    def return_(self, reason: str | None = None) -> bool:
        return self._copy(type(self).return_(self.id, {"reason": reason}))

    @hybridmethod
    def accept(cls, id: Any) -> "Offer":
        return cls._status_request(id, "accept")

    @accept.instancemethod
    def accept(self) -> bool:
        return self._copy(type(self).accept(self.id))

    @hybridmethod
    def reject(cls, id: Any) -> "Offer":
        return cls._status_request(id, "reject")

    @reject.instancemethod
    def reject(self) -> bool:
        return self._copy(type(self).reject(self.id))


# Offer.return_ is also reachable as getattr(Offer, "return").
setattr(Offer, "return", Offer.__dict__["return_"])


@on_configure
def _bind() -> None:
    Offer.bind(configuration())
