import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def administration_bed():
    from administration.domain import administration

    bed = DomainFixture(administration)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(administration_bed):
    with administration_bed.domain_context():
        yield
