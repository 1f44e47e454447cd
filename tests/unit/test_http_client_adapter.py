import json

import httpx
import pytest

from contact_quality.service.exceptions import AnalysisServiceError, AnalysisServiceNetworkError
from contact_quality.service.http_client_adapter import HttpAnalysisClient

BASE_URL = "https://service.example/api_tools"


def _make_client(handler) -> tuple[HttpAnalysisClient, list[httpx.Request]]:  # type: ignore[no-untyped-def]
    seen: list[httpx.Request] = []

    def recording(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = HttpAnalysisClient(
        base_url=BASE_URL + "/",
        api_token="tok",
        transport=httpx.MockTransport(recording),
    )
    return client, seen


class TestRequests:
    def test_input_data_posts_payload(self) -> None:
        client, seen = _make_client(lambda _: httpx.Response(200, text="created"))

        result = client.input_data(
            object_name="contact_data", data_type="strings", input_data=["File: a.csv\nx"]
        )

        assert result == "created"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/input_data"
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "created_object_name": "contact_data",
            "data_type": "strings",
            "input_data": ["File: a.csv\nx"],
        }

    def test_apply_prompt_posts_payload(self) -> None:
        client, seen = _make_client(lambda _: httpx.Response(200, text="ok"))

        client.apply_prompt(
            created_object_names=["quality_issues"],
            prompt_string="Analyze {contact_data}",
            inputs=[{"input_object_name": "contact_data", "mode": "combine_events"}],
        )

        assert str(seen[0].url) == f"{BASE_URL}/apply_prompt"
        assert json.loads(seen[0].content)["created_object_names"] == ["quality_issues"]

    def test_return_data_decodes_json(self) -> None:
        client, seen = _make_client(lambda _: httpx.Response(200, json={"text_value": "[]"}))

        assert client.return_data("quality_issues") == {"text_value": "[]"}
        assert seen[0].method == "GET"
        assert str(seen[0].url) == f"{BASE_URL}/return_data/quality_issues"

    def test_delete_object(self) -> None:
        client, seen = _make_client(lambda _: httpx.Response(200, text="gone"))

        assert client.delete_object("corrected_data") == "gone"
        assert seen[0].method == "DELETE"
        assert str(seen[0].url) == f"{BASE_URL}/objects/corrected_data"

    def test_error_status_body_is_returned(self) -> None:
        client, _ = _make_client(lambda _: httpx.Response(500, text="server error"))
        assert client.delete_object("contact_data") == "server error"


class TestErrors:
    def test_return_data_non_json_raises(self) -> None:
        client, _ = _make_client(lambda _: httpx.Response(200, text="<html>"))
        with pytest.raises(AnalysisServiceError, match="did not return JSON"):
            client.return_data("quality_issues")

    def test_return_data_non_object_raises(self) -> None:
        client, _ = _make_client(lambda _: httpx.Response(200, json=["a"]))
        with pytest.raises(AnalysisServiceError, match="JSON object"):
            client.return_data("quality_issues")

    def test_connect_error_is_network_error(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client, _ = _make_client(fail)
        with pytest.raises(AnalysisServiceNetworkError, match="network error"):
            client.input_data(object_name="contact_data", data_type="strings", input_data=[])

    def test_timeout_is_network_error(self) -> None:
        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client, _ = _make_client(fail)
        with pytest.raises(AnalysisServiceNetworkError):
            client.return_data("corrected_data")
