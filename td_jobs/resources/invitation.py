"""Invitations: /invitations, sent by job owners to providers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from td_jobs.config import configuration, on_configure
from td_jobs.exceptions import EntityNotFound, WrongAttributes
from td_jobs.models import Page
from td_jobs.resources.base import Resource, hybridmethod
from td_jobs.resources.job import Job


@dataclass
class Invitation(Resource):
    path = "invitations"
    collection = "invitations"
    read_only = ("status", "created_at")
    job_class = Job

    id: int | None = None
    provider_id: str | None = None
    job: Job | None = None
    job_id: int | None = None
    description: str | None = None
    status: str | None = None
    created_at: str | None = None

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        job = values.get("job")
        if isinstance(job, Mapping):
            values["job"] = cls.job_class.from_dict(job)
        return values

    @hybridmethod
    def create(cls, attrs: Mapping[str, Any]) -> "Invitation":
        """Create an invitation for ``provider_id`` on ``job_id``.

        Raises WrongAttributes on a 400 and EntityNotFound when the job does
        not exist.
        """
        body = cls._replace_nested(attrs, "job")
        data = cls._call(
            "POST", body=body, errors={400: WrongAttributes, 404: EntityNotFound}
        )
        return cls.from_dict(data)

    @create.instancemethod
    def create(self) -> bool:
        return self._copy(type(self).create(self.to_dict(include_read_only=False)))

    @classmethod
    def find(cls, id: Any) -> "Invitation":
        id = cls._check_id(id)
        data = cls._call("GET", str(id), errors={404: EntityNotFound})
        return cls.from_dict(data)

    @classmethod
    def search(cls, query: Mapping[str, Any]) -> list["Invitation"]:
        """Filter by provider_id, job_id, status (one or a list), created_at_from/_to."""
        data = cls._call("GET", params=query, errors={})
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
    def send(cls, id: Any) -> "Invitation":
        return cls._status_request(id, "send")

    @send.instancemethod
    def send(self) -> bool:
        return self._copy(type(self).send(self.id))

    @hybridmethod
    def withdraw(cls, id: Any) -> "Invitation":
        return cls._status_request(id, "withdraw")

    @withdraw.instancemethod
    def withdraw(self) -> bool:
        return self._copy(type(self).withdraw(self.id))

    @hybridmethod
    def accept(cls, id: Any) -> "Invitation":
        return cls._status_request(id, "accept")

    @accept.instancemethod
    def accept(self) -> bool:
        return self._copy(type(self).accept(self.id))

    @hybridmethod
    def reject(cls, id: Any) -> "Invitation":
        return cls._status_request(id, "reject")

    @reject.instancemethod
    def reject(self) -> bool:
        return self._copy(type(self).reject(self.id))


@on_configure
def _bind() -> None:
    Invitation.bind(configuration())
