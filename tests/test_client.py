from unittest.mock import MagicMock

import pytest

from td_jobs import Client, Configuration, Invitation, Job, Offer

from tests.conftest import make_response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    return session


def test_client_binds_all_resources_to_its_own_url(session):
    client = Client(base_url="http://client.url.com", application_secret="s", session=session)

    assert client.jobs.endpoint().url() == "http://client.url.com/jobs"
    assert client.offers.endpoint().url() == "http://client.url.com/offers"
    assert client.invitations.endpoint().url() == "http://client.url.com/invitations"
    assert session.headers["Application-Secret"] == "s"


def test_client_does_not_touch_global_binding(session):
    Client(Configuration(base_url="http://client.url.com"), session=session)
    assert Job.endpoint().url() == "http://an.url.com/jobs"


def test_bound_classes_are_resource_subclasses(session):
    client = Client(base_url="http://client.url.com", session=session)
    assert issubclass(client.jobs, Job)
    assert issubclass(client.offers, Offer)
    assert issubclass(client.invitations, Invitation)


def test_requests_go_through_client_session(session):
    session.request.return_value = make_response(
        200, {"id": 7, "job": {"id": 1}, "invitation": {"id": 4, "job": {"id": 1}}}
    )
    client = Client(base_url="http://client.url.com", session=session)

    offer = client.offers.find(7)

    method, url = session.request.call_args.args
    assert (method, url) == ("GET", "http://client.url.com/offers/7")
    assert isinstance(offer, client.offers)
    assert isinstance(offer.job, client.jobs)
    assert isinstance(offer.invitation, client.invitations)
    assert isinstance(offer.invitation.job, client.jobs)


def test_instance_methods_use_client_binding(session):
    session.request.return_value = make_response(200, {"id": 7, "status": "ACTIVE"})
    client = Client(base_url="http://client.url.com", session=session)
    job = client.jobs(id=7)

    assert job.activate() is True
    assert session.request.call_args.args == ("PUT", "http://client.url.com/jobs/7/activate")
    assert job.status == "ACTIVE"


def test_context_manager_closes_session(session):
    with Client(base_url="http://client.url.com", session=session):
        pass
    session.close.assert_called_once()
