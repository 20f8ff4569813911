"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Sample cards, addresses and options
- A stub transport that records requests and replays canned responses
- Gateways configured with throwaway credentials
"""

import pytest

from unified_gateway.gateways import MerchantESolutionsGateway, PlexoGateway
from unified_gateway.models import CreditCard
from unified_gateway.transports.base import Transport


class StubTransport(Transport):
    """
    Transport that replays queued responses instead of calling a provider.

    Queue bytes to return them, or an exception instance to raise it.
    Every request is kept in `requests` for assertions.
    """

    def __init__(self, *responses):
        super().__init__()
        self.responses = list(responses)
        self.requests = []

    def respond_with(self, *responses):
        self.responses.extend(responses)
        return self

    def send(self, method, url, body, headers):
        self.requests.append(
            {"method": method, "url": url, "body": body, "headers": dict(headers)}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            self.record(method, url, headers, body, None)
            raise response
        self.record(method, url, headers, body, response)
        return response

    @property
    def last_body(self) -> str:
        return self.requests[-1]["body"].decode("utf-8")


@pytest.fixture
def stub_transport():
    """Create an empty stub transport."""
    return StubTransport()


@pytest.fixture
def credit_card():
    """Card the sandbox approves."""
    return CreditCard(
        number="5555555555554444",
        month=12,
        year=2024,
        verification_value="111",
        first_name="Santiago",
        last_name="Navatta",
    )


@pytest.fixture
def declined_card():
    """Card the sandbox denies with result code 10."""
    return CreditCard(
        number="5555555555554445",
        month=9,
        year=2025,
        verification_value="123",
        first_name="Longbob",
        last_name="Longsen",
    )


@pytest.fixture
def address():
    """Standard billing address."""
    return {
        "address1": "456 My Street",
        "address2": "Apt 1",
        "city": "Ottawa",
        "state": "ON",
        "zip": "K1C2N6",
        "country": "CA",
        "phone": "(555)555-5555",
    }


@pytest.fixture
def mes_gateway():
    """Merchant e-Solutions gateway in test mode."""
    return MerchantESolutionsGateway(login="login", password="password", test_mode=True)


@pytest.fixture
def plexo_gateway():
    """Plexo gateway in test mode."""
    return PlexoGateway(client_id="abcd", api_key="copyabcdefghijklmnopqrstuvwxyz", test_mode=True)


@pytest.fixture
def plexo_options(address):
    """Options accepted by Plexo for card payments."""
    return {
        "email": "snavatta@plexo.com.uy",
        "ip": "127.0.0.1",
        "items": [
            {
                "name": "prueba",
                "description": "prueba desc",
                "quantity": "1",
                "price": "100",
                "discount": "0",
            }
        ],
        "amount_details": {"tip_amount": "5"},
        "identification_type": "1",
        "identification_value": "123456",
        "billing_address": address,
    }
