import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def chat():
    """Every test hands off to a fresh in-memory chat channel."""
    from ordering.handoff import reset_channel, set_channel
    from ordering.handoff.fake_chat import FakeChatChannel

    channel = FakeChatChannel()
    set_channel(channel)
    yield channel
    reset_channel()


@pytest.fixture(autouse=True)
def _reset_sink():
    from ordering.checkout.sink import reset_sink

    yield
    reset_sink()
