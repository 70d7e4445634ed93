"""Shared HTTP plumbing and attribute handling for the jobs service resources."""
from __future__ import annotations

import functools
from collections.abc import Mapping
from dataclasses import fields
from datetime import date, datetime
from typing import Any, Callable, ClassVar

import requests

from td_jobs.config import Configuration
from td_jobs.exceptions import (
    EntityNotFound,
    InvalidStatus,
    NotConfigured,
    RequestFailed,
    TDJobsError,
    UnauthorizedRequest,
    WrongAttributes,
)
from td_jobs.log import get_logger
from td_jobs.models import Page

log = get_logger(__name__)

SECRET_HEADER = "Application-Secret"

ErrorMap = Mapping[int, type[TDJobsError]]


def jsonable(value: Any) -> Any:
    """Convert entities, dates and containers into JSON-serializable values."""
    if isinstance(value, Resource):
        return value.to_dict()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [jsonable(v) for v in value]
    return value


def _query_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def encode_query(params: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, str]]:
    """Flatten nested params into bracketed pairs.

    ``{"metadata": {"price": {"lt": 2.25}}}`` becomes ``[("metadata[price][lt]", "2.25")]``
    and lists become repeated ``key[]`` pairs.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        pairs.extend(_encode_value(name, value))
    return pairs


def _encode_value(name: str, value: Any) -> list[tuple[str, str]]:
    if isinstance(value, Resource):
        value = value.to_dict()
    if isinstance(value, Mapping):
        return encode_query(value, name)
    if isinstance(value, (list, tuple, set)):
        pairs: list[tuple[str, str]] = []
        for item in value:
            pairs.extend(_encode_value(f"{name}[]", item))
        return pairs
    return [(name, _query_scalar(value))]


def valid_id(id: Any) -> bool:
    """True if ``id`` parses as an integer (ints and numeric strings)."""
    if isinstance(id, bool):
        return False
    if isinstance(id, float):
        return id.is_integer()
    try:
        int(id)
    except (TypeError, ValueError):
        return False
    return True


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, Mapping) and "error" in body:
        return str(body["error"])
    return response.text


class Endpoint:
    """A resource collection URL plus the session that talks to it.

    The configuration is copied on construction; reconfiguring means building
    a new endpoint.
    """

    def __init__(
        self,
        config: Configuration,
        path: str,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config.copy()
        self.path = path.strip("/")
        self.session = session or requests.Session()
        self.session.headers["Accept"] = "application/json"
        if self.config.application_secret:
            self.session.headers[SECRET_HEADER] = self.config.application_secret

    @property
    def base_uri(self) -> str:
        if not self.config.base_url:
            raise NotConfigured(f"No base_url configured for /{self.path}")
        return f"{self.config.base_url.rstrip('/')}/{self.path}"

    def url(self, subpath: str = "") -> str:
        subpath = subpath.strip("/")
        return f"{self.base_uri}/{subpath}" if subpath else self.base_uri

    def request(
        self,
        method: str,
        subpath: str = "",
        *,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> requests.Response:
        url = self.url(subpath)
        response = self.session.request(
            method,
            url,
            params=encode_query(params) if params else None,
            json=jsonable(body) if body is not None else None,
            timeout=self.config.timeout,
        )
        log.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def get(self, subpath: str = "", params: Mapping[str, Any] | None = None) -> requests.Response:
        return self.request("GET", subpath, params=params)

    def post(self, subpath: str = "", body: Any = None) -> requests.Response:
        return self.request("POST", subpath, body=body)

    def put(self, subpath: str = "", body: Any = None) -> requests.Response:
        return self.request("PUT", subpath, body=body)


def check_response(response: requests.Response, errors: ErrorMap) -> Any:
    """Raise the mapped error for a non-2xx response, else return the parsed body."""
    code = response.status_code
    if 200 <= code < 300:
        return response.json()

    error_cls = errors.get(code)
    if error_cls is None:
        error_cls = UnauthorizedRequest if code in (401, 403) else RequestFailed
    message = _error_message(response)
    log.info("Request failed with %d: %s", code, message)
    raise error_cls(message, status_code=code)


class hybridmethod:
    """A method with one implementation on the class and another on instances.

    ``Job.activate(5)`` runs the class-level function; ``job.activate()`` runs
    the function registered with ``@activate.instancemethod``.
    """

    def __init__(self, fclass: Callable[..., Any]) -> None:
        self.fclass = fclass
        self.finstance: Callable[..., Any] | None = None
        functools.update_wrapper(self, fclass)

    def instancemethod(self, finstance: Callable[..., Any]) -> "hybridmethod":
        self.finstance = finstance
        return self

    def __get__(self, obj: Any, objtype: type | None = None) -> Callable[..., Any]:
        owner = objtype if objtype is not None else type(obj)
        if obj is None or self.finstance is None:
            return self.fclass.__get__(owner, owner)
        return self.finstance.__get__(obj, owner)


class Resource:
    """Base for the dataclass entities exposed by the jobs service.

    Subclasses set ``path`` (the collection endpoint), ``collection`` (the key
    holding items in a pagination envelope) and ``read_only`` (fields never
    sent back to the server).
    """

    path: ClassVar[str] = ""
    collection: ClassVar[str] = "items"
    read_only: ClassVar[tuple[str, ...]] = ()
    _endpoint: ClassVar[Endpoint | None] = None

    # -- binding ----------------------------------------------------------

    @classmethod
    def bind(cls, config: Configuration) -> Endpoint:
        previous = cls.__dict__.get("_endpoint")
        if previous is not None:
            previous.session.close()
        cls._endpoint = Endpoint(config, cls.path)
        log.debug("Bound %s to /%s", cls.__name__, cls.path)
        return cls._endpoint

    @classmethod
    def bound_to(cls, endpoint: Endpoint, **attrs: Any) -> type:
        """Return a subclass whose operations go through ``endpoint``."""
        namespace = {"_endpoint": endpoint, "__module__": cls.__module__, **attrs}
        return type(cls.__name__, (cls,), namespace)

    @classmethod
    def endpoint(cls) -> Endpoint:
        if cls._endpoint is None:
            raise NotConfigured(f"{cls.__name__} is not bound; call td_jobs.configure() first")
        return cls._endpoint

    # -- attributes -------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Any:
        if not isinstance(data, Mapping):
            raise TypeError(f"Cannot build {cls.__name__} from {type(data).__name__}")
        attrs = {str(k): v for k, v in data.items()}
        values = {f.name: attrs[f.name] for f in fields(cls) if f.name in attrs}
        return cls(**cls._coerce(values))

    @classmethod
    def _coerce(cls, values: dict[str, Any]) -> dict[str, Any]:
        return values

    def to_dict(self, include_read_only: bool = True) -> dict[str, Any]:
        """Serialize the non-None fields, nested entities included."""
        out: dict[str, Any] = {}
        for f in fields(self):
            if not include_read_only and f.name in self.read_only:
                continue
            value = getattr(self, f.name)
            if value is not None:
                out[f.name] = jsonable(value)
        return out

    def _copy(self, other: "Resource") -> bool:
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))
        return True

    # -- requests ---------------------------------------------------------

    valid_id = staticmethod(valid_id)

    @classmethod
    def _check_id(cls, id: Any) -> int:
        if not valid_id(id):
            raise WrongAttributes("id has to be an integer.")
        return int(id)

    @classmethod
    def _call(
        cls,
        method: str,
        subpath: str = "",
        *,
        errors: ErrorMap,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        response = cls.endpoint().request(method, subpath, params=params, body=body)
        return check_response(response, errors)

    @staticmethod
    def _replace_nested(attrs: Mapping[str, Any], *keys: str) -> dict[str, Any]:
        """Copy ``attrs`` sending ``<key>_id`` in place of each embedded entity.

        The embedded value may be an entity, a mapping with an ``id`` or a bare
        id; anything else raises WrongAttributes.
        """
        body = dict(attrs)
        for key in keys:
            nested = body.pop(key, None)
            if nested is None:
                continue
            if isinstance(nested, Mapping):
                nested_id = nested.get("id")
            elif isinstance(nested, Resource):
                nested_id = getattr(nested, "id", None)
            elif valid_id(nested):
                nested_id = int(nested)
            else:
                raise WrongAttributes(f"{key} has to be an entity or an integer id.")
            if nested_id is not None:
                body[f"{key}_id"] = nested_id
        return body

    @classmethod
    def _list(cls, data: Any) -> list[Any]:
        return [cls.from_dict(item) for item in data]

    @classmethod
    def _page(cls, data: Mapping[str, Any]) -> Page:
        return Page.from_response(data, cls.from_dict, key=cls.collection)

    @staticmethod
    def _pagination_params(
        params: dict[str, Any], page: int | None, per_page: int | None
    ) -> dict[str, Any]:
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = per_page
        return params

    @classmethod
    def _status_request(cls, id: Any, action: str, body: Any = None) -> Any:
        id = cls._check_id(id)
        data = cls._call(
            "PUT",
            f"{id}/{action}",
            body=body,
            errors={400: InvalidStatus, 404: EntityNotFound},
        )
        return cls.from_dict(data)
