"""Shared fixtures for prompteus tests."""

import pytest

from prompteus import NeuronClient


FAKE_CREDENTIAL = "pk_test_credential_1234567890"
FAKE_BASE_URL = "https://test.prompteus.com"


@pytest.fixture
def credential():
    return FAKE_CREDENTIAL


@pytest.fixture
def base_url():
    return FAKE_BASE_URL


@pytest.fixture
def client(base_url, credential):
    c = NeuronClient(base_url=base_url, credential=credential)
    yield c
    c.close()


@pytest.fixture
def anon_client(base_url):
    c = NeuronClient(base_url=base_url)
    yield c
    c.close()
