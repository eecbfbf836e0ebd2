from collections.abc import Iterator

import pytest

from vagrant_cloud.api.http_client import VagrantCloudClient
from vagrant_cloud.config import ClientConfig
from vagrant_cloud.tests.constants import BASE_URL, TOKEN
from vagrant_cloud.tests.utils.stub_transport import StubTransport


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig()


@pytest.fixture
def stub_transport() -> StubTransport:
    return StubTransport()


@pytest.fixture
def client(config: ClientConfig, stub_transport: StubTransport) -> Iterator[VagrantCloudClient]:
    with VagrantCloudClient(BASE_URL, TOKEN, config=config, transport=stub_transport) as c:
        yield c
