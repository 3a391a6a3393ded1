"""Integration tests for the checkout-calculate-taxes webhook."""

from typing import Any

import httpx
import orjson
import pytest
from fastapi import FastAPI
from httpx import AsyncClient
from pytest_mock import MockerFixture, MockType

from src.api.dependencies import (
    get_calculate_taxes_use_case,
    get_configuration_logger,
)
from src.core.result import Err, Ok, Result
from src.domain.avatax import (
    ConfigBrokenError,
    ExpectedIncompletePayloadError,
    FailedCalculatingTaxesError,
    MetadataCache,
    TaxComputation,
    TaxError,
    UnhandledError,
)
from src.domain.avatax.payload import CalculateTaxesPayload
from src.infrastructure.saleor import AuthData
from tests.fixtures.saleor_payloads import (
    CHECKOUT_ID,
    avatax_error,
    avatax_metadata,
    avatax_transaction,
    calculate_taxes_payload,
    company_address,
    provider_connections,
    webhook_headers,
)
from tests.fixtures.upstream import AVATAX_SANDBOX_HOST, SALEOR_HOST, Upstream

URL = "/api/webhooks/checkout-calculate-taxes"


class StubUseCase:
    """Use case returning a fixed result."""

    def __init__(self, result: Result[TaxComputation, TaxError]) -> None:
        self.result = result
        self.calls = 0

    async def calculate_taxes(
        self,
        payload: CalculateTaxesPayload,
        auth_data: AuthData,
        metadata_cache: MetadataCache,
    ) -> Result[TaxComputation, TaxError]:
        _ = payload, auth_data, metadata_cache
        self.calls += 1
        return self.result


async def _post(client: AsyncClient, payload: dict[str, Any]) -> httpx.Response:
    body = orjson.dumps(payload)
    return await client.post(URL, content=body, headers=webhook_headers(body))


def _use_stub(app: FastAPI, result: Result[TaxComputation, TaxError]) -> StubUseCase:
    stub = StubUseCase(result)
    app.dependency_overrides[get_calculate_taxes_use_case] = lambda: stub
    return stub


@pytest.fixture
def capture(mocker: MockerFixture) -> MockType:
    return mocker.patch("src.api.routes.avatax.capture_exception")


@pytest.mark.integration
class TestCalculateTaxesEndToEnd:
    """The webhook against a fake AvaTax."""

    async def test_taxes_are_calculated(
        self, client: AsyncClient, upstream: Upstream
    ) -> None:
        """A valid delivery is answered with the computed taxes."""
        upstream.handlers[AVATAX_SANDBOX_HOST] = lambda request: httpx.Response(
            201, json=avatax_transaction()
        )

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 200
        assert response.json() == {
            "shipping_price_gross_amount": 5.0,
            "shipping_price_net_amount": 5.0,
            "shipping_tax_rate": 0.0,
            "lines": [
                {"total_gross_amount": 21.7, "total_net_amount": 20.0, "tax_rate": 8.5}
            ],
        }
        assert "X-Correlation-ID" in response.headers

    async def test_transaction_sent_to_avatax(
        self, client: AsyncClient, upstream: Upstream
    ) -> None:
        """AvaTax receives a sales order with the tenant's credentials."""
        upstream.handlers[AVATAX_SANDBOX_HOST] = lambda request: httpx.Response(
            201, json=avatax_transaction()
        )

        await _post(client, calculate_taxes_payload())

        [request] = upstream.requests_to(AVATAX_SANDBOX_HOST)
        model = orjson.loads(request.content)["createTransactionModel"]
        assert model["type"] == "SalesOrder"
        assert model["addresses"]["shipTo"]["postalCode"] == "94111"
        assert request.headers["Authorization"].startswith("Basic ")

    async def test_metadata_comes_from_payload(
        self, client: AsyncClient, upstream: Upstream
    ) -> None:
        """The payload's metadata is used; Saleor is never queried."""
        upstream.handlers[AVATAX_SANDBOX_HOST] = lambda request: httpx.Response(
            201, json=avatax_transaction()
        )

        await _post(client, calculate_taxes_payload())

        assert upstream.requests_to(SALEOR_HOST) == []

    async def test_known_avatax_error(
        self, client: AsyncClient, upstream: Upstream, capture: MockType
    ) -> None:
        """Known AvaTax rejections are answered with 500 and not reported."""
        upstream.handlers[AVATAX_SANDBOX_HOST] = lambda request: httpx.Response(
            400, json=avatax_error("InvalidAddress")
        )

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 500
        assert response.json() == {
            "message": f"Failed to calculate taxes for checkout: {CHECKOUT_ID}"
        }
        capture.assert_not_called()

    async def test_rejected_credentials(
        self, client: AsyncClient, upstream: Upstream
    ) -> None:
        """AvaTax refusing the credentials means broken configuration."""
        upstream.handlers[AVATAX_SANDBOX_HOST] = lambda request: httpx.Response(
            401, json=avatax_error("AuthenticationException")
        )

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 500
        assert response.json()["message"] == (
            "Failed to calculate taxes due to invalid configuration "
            f"for checkout: {CHECKOUT_ID}"
        )

    async def test_avatax_unreachable_is_reported_once(
        self, client: AsyncClient, upstream: Upstream, capture: MockType
    ) -> None:
        """Transport failures are unhandled and reported exactly once."""

        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        upstream.handlers[AVATAX_SANDBOX_HOST] = unreachable

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 500
        assert response.json()["message"] == (
            f"Failed to calculate taxes (Unhandled error) for checkout: {CHECKOUT_ID}"
        )
        capture.assert_called_once()
        assert isinstance(capture.call_args.args[0], UnhandledError)

    async def test_incomplete_customer_address(self, client: AsyncClient) -> None:
        """A checkout without address is answered with 400."""
        response = await _post(client, calculate_taxes_payload(address=None))

        assert response.status_code == 400
        assert response.json()["message"] == (
            "Taxes can't be calculated due to incomplete payload "
            f"for checkout: {CHECKOUT_ID}"
        )

    async def test_invalid_company_address(
        self, client: AsyncClient, upstream: Upstream
    ) -> None:
        """An incomplete ship-from address is answered with 400."""
        payload = calculate_taxes_payload(
            metadata=avatax_metadata(
                connections=provider_connections(address=company_address(city=""))
            )
        )

        response = await _post(client, payload)

        assert response.status_code == 400
        assert response.json() == {
            "message": "InvalidAppAddressError: Check address in app configuration"
        }
        assert upstream.requests_to(AVATAX_SANDBOX_HOST) == []


@pytest.mark.integration
class TestCalculateTaxesResponses:
    """Mapping of use case results onto responses."""

    @pytest.mark.parametrize(
        ("error", "status_code", "message"),
        [
            (
                ExpectedIncompletePayloadError("no address"),
                400,
                "Taxes can't be calculated due to incomplete payload for checkout: {id}",
            ),
            (
                ConfigBrokenError("no connection"),
                500,
                "Failed to calculate taxes due to invalid configuration for checkout: {id}",
            ),
            (
                FailedCalculatingTaxesError("InvalidAddress"),
                500,
                "Failed to calculate taxes for checkout: {id}",
            ),
            (
                UnhandledError("boom"),
                500,
                "Failed to calculate taxes (Unhandled error) for checkout: {id}",
            ),
        ],
    )
    async def test_error_variants(
        self,
        app: FastAPI,
        client: AsyncClient,
        capture: MockType,
        error: TaxError,
        status_code: int,
        message: str,
    ) -> None:
        """Each error variant has its own status and message."""
        _use_stub(app, Err(error))

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == status_code
        assert response.json() == {"message": message.format(id=CHECKOUT_ID)}
        assert capture.call_count == (1 if isinstance(error, UnhandledError) else 0)

    async def test_success_body(self, app: FastAPI, client: AsyncClient) -> None:
        """The computation is returned as-is with 200."""
        _use_stub(app, Ok(TaxComputation(shipping_tax_rate=23.0)))

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 200
        assert response.json()["shipping_tax_rate"] == 23.0
        assert response.json()["lines"] == []

    async def test_missing_configuration_skips_use_case(
        self, app: FastAPI, client: AsyncClient
    ) -> None:
        """Without provider connections the use case is never called."""
        stub = _use_stub(app, Ok(TaxComputation()))

        response = await _post(client, calculate_taxes_payload(metadata=[]))

        assert response.status_code == 400
        assert response.json() == {
            "message": f"App configuration is broken for checkout: {CHECKOUT_ID}"
        }
        assert stub.calls == 0

    async def test_malformed_configuration_skips_use_case(
        self, app: FastAPI, client: AsyncClient
    ) -> None:
        """Unparseable provider connections are answered with 400."""
        stub = _use_stub(app, Ok(TaxComputation()))
        metadata = [{"key": "provider-connections", "value": "{not json"}]

        response = await _post(client, calculate_taxes_payload(metadata=metadata))

        assert response.status_code == 400
        assert response.json() == {
            "message": f"App configuration is broken for checkout: {CHECKOUT_ID}"
        }
        assert stub.calls == 0

    async def test_unknown_error_variant_fails_loudly(
        self, app: FastAPI, client: AsyncClient, capture: MockType
    ) -> None:
        """An error outside the known variants is reported as unhandled."""
        _use_stub(app, Err(object()))  # type: ignore[arg-type]

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 500
        assert response.json() == {"message": "Unhandled error"}
        capture.assert_called_once()
        assert isinstance(capture.call_args.args[0], AssertionError)

    async def test_configuration_logging_failure_is_ignored(
        self, app: FastAPI, client: AsyncClient, capture: MockType
    ) -> None:
        """A failing configuration log line does not change the response."""

        class BrokenLogger:
            def log_configuration(self, config: object, channel_slug: str) -> None:
                raise RuntimeError("metrics backend down")

        computation = TaxComputation(shipping_tax_rate=23.0)
        _use_stub(app, Ok(computation))
        app.dependency_overrides[get_configuration_logger] = lambda: BrokenLogger()

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 200
        assert response.json() == computation.model_dump(mode="json")
        capture.assert_called_once()

    async def test_unexpected_exception(
        self, app: FastAPI, client: AsyncClient, capture: MockType
    ) -> None:
        """Exceptions escaping the use case become a reported 500."""

        class ExplodingUseCase:
            async def calculate_taxes(self, *args: object) -> None:
                raise KeyError("bug")

        app.dependency_overrides[get_calculate_taxes_use_case] = lambda: ExplodingUseCase()

        response = await _post(client, calculate_taxes_payload())

        assert response.status_code == 500
        assert response.json() == {"message": "Unhandled error"}
        capture.assert_called_once()

    async def test_invalid_payload(self, app: FastAPI, client: AsyncClient) -> None:
        """A body that is not a tax payload is answered with 400."""
        stub = _use_stub(app, Ok(TaxComputation()))

        response = await _post(client, {"unexpected": True})

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid payload"}
        assert stub.calls == 0

    async def test_subscription_errors_are_reported(
        self, app: FastAPI, client: AsyncClient, mocker: MockerFixture
    ) -> None:
        """Payload errors are reported but the calculation continues."""
        checker_capture = mocker.patch(
            "src.domain.avatax.subscription_errors.capture_exception"
        )
        _use_stub(app, Ok(TaxComputation()))

        response = await _post(
            client, calculate_taxes_payload(errors=[{"message": "No permission"}])
        )

        assert response.status_code == 200
        checker_capture.assert_called_once()


@pytest.mark.integration
class TestWebhookVerification:
    """Signature, event and tenant checks."""

    async def test_bad_signature(self, client: AsyncClient) -> None:
        """A body signed with another secret is rejected."""
        body = orjson.dumps(calculate_taxes_payload())

        response = await client.post(
            URL, content=body, headers=webhook_headers(body, secret="wrong")
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    async def test_missing_signature(self, client: AsyncClient) -> None:
        """Unsigned deliveries are rejected."""
        body = orjson.dumps(calculate_taxes_payload())
        headers = webhook_headers(body)
        del headers["saleor-signature"]

        response = await client.post(URL, content=body, headers=headers)

        assert response.status_code == 401

    async def test_unknown_tenant(self, client: AsyncClient) -> None:
        """Deliveries from unregistered Saleor instances are rejected."""
        body = orjson.dumps(calculate_taxes_payload())

        response = await client.post(
            URL,
            content=body,
            headers=webhook_headers(
                body, saleor_api_url="https://intruder.example.com/graphql/"
            ),
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Saleor instance is not registered"

    async def test_wrong_event(self, client: AsyncClient) -> None:
        """Deliveries for other events are rejected."""
        body = orjson.dumps(calculate_taxes_payload())

        response = await client.post(
            URL, content=body, headers=webhook_headers(body, event="order_calculate_taxes")
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_missing_api_url(self, client: AsyncClient) -> None:
        """Deliveries without saleor-api-url are rejected."""
        body = orjson.dumps(calculate_taxes_payload())
        headers = webhook_headers(body)
        del headers["saleor-api-url"]

        response = await client.post(URL, content=body, headers=headers)

        assert response.status_code == 400
