"""Jobs resource: /jobs and the activate/deactivate/close/start/finish transitions."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping

from td_jobs.config import configuration, on_configure
from td_jobs.exceptions import EntityNotFound, WrongAttributes
from td_jobs.models import Page
from td_jobs.resources.base import Resource, hybridmethod, jsonable


def _query_param(query: str | Mapping[str, Any]) -> str:
    """The jobs search endpoint takes its filters as one JSON document."""
    if isinstance(query, str):
        return query
    return json.dumps(jsonable(query))


@dataclass
class Job(Resource):
    """A job posted on the marketplace.

    Search filters support the modifiers ``gt``, ``lt``, ``geq``, ``leq``,
    ``like`` and ``in``, including on metadata keys::

        Job.search({"status": {"in": ["CREATED", "ACTIVE"]},
                    "metadata": {"price": {"lt": 2.25}}})
    """

    path = "jobs"
    collection = "jobs"
    read_only = ("status",)

    id: int | None = None
    name: str | None = None
    description: str | None = None
    owner_id: str | None = None
    due_date: Any = None
    invitation_only: bool | None = None
    metadata: dict[str, Any] | None = None
    start_date: Any = None
    finish_date: Any = None
    status: str | None = None

    @hybridmethod
    def create(cls, attrs: Mapping[str, Any]) -> "Job":
        data = cls._call("POST", body=attrs, errors={400: WrongAttributes})
        return cls.from_dict(data)

    @create.instancemethod
    def create(self) -> bool:
        return self._copy(type(self).create(self.to_dict(include_read_only=False)))

    @classmethod
    def find(cls, id: Any) -> "Job":
        id = cls._check_id(id)
        data = cls._call("GET", str(id), errors={404: EntityNotFound})
        return cls.from_dict(data)

    @classmethod
    def search(cls, query: str | Mapping[str, Any]) -> list["Job"]:
        data = cls._call(
            "GET", "search", params={"query": _query_param(query)}, errors={400: WrongAttributes}
        )
        return cls._list(data)

    @classmethod
    def paginated_search(
        cls,
        query: str | Mapping[str, Any],
        page: int | None = None,
        per_page: int | None = None,
    ) -> Page:
        params = cls._pagination_params({"query": _query_param(query)}, page, per_page)
        data = cls._call("GET", "search/pagination", params=params, errors={400: WrongAttributes})
        return cls._page(data)

    @hybridmethod
    def update(cls, id: Any, attrs: Mapping[str, Any]) -> "Job":
        id = cls._check_id(id)
        data = cls._call(
            "PUT", str(id), body=attrs, errors={400: WrongAttributes, 404: EntityNotFound}
        )
        return cls.from_dict(data)

    @update.instancemethod
    def update(self) -> bool:
        return self._copy(type(self).update(self.id, self.to_dict(include_read_only=False)))

    @hybridmethod
    def activate(cls, id: Any) -> "Job":
        return cls._status_request(id, "activate")

    @activate.instancemethod
    def activate(self) -> bool:
        return self._copy(type(self).activate(self.id))

    @hybridmethod
    def deactivate(cls, id: Any) -> "Job":
        return cls._status_request(id, "deactivate")

    @deactivate.instancemethod
    def deactivate(self) -> bool:
        return self._copy(type(self).deactivate(self.id))

    @hybridmethod
    def close(cls, id: Any) -> "Job":
        return cls._status_request(id, "close")

    @close.instancemethod
    def close(self) -> bool:
        return self._copy(type(self).close(self.id))

    @hybridmethod
    def start(cls, id: Any) -> "Job":
        return cls._status_request(id, "start")

    @start.instancemethod
    def start(self) -> bool:
        return self._copy(type(self).start(self.id))

    @hybridmethod
    def finish(cls, id: Any) -> "Job":
        return cls._status_request(id, "finish")

    @finish.instancemethod
    def finish(self) -> bool:
        return self._copy(type(self).finish(self.id))


@on_configure
def _bind() -> None:
    Job.bind(configuration())
