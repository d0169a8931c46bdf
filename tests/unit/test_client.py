"""
Unit tests for the GraphQL API client
"""

import pytest
import requests
from unittest.mock import Mock, patch

from unraid_cli import queries
from unraid_cli.client import APIClient, decode_envelope
from unraid_cli.exceptions import DecodeError, GraphQLError, NoDataError, TransportError


def make_response(payload=None, status_code=200, json_error=None):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if response.ok else "Bad Gateway"
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def client():
    api_client = APIClient("https://tower.local/graphql", "secret-key", timeout=5)
    yield api_client
    api_client.close()


class TestDecodeEnvelope:
    """Test GraphQL envelope decoding"""

    def test_data_with_null_errors(self):
        assert decode_envelope({"data": "x", "errors": None}) == "x"

    def test_data_with_empty_errors(self):
        assert decode_envelope({"data": "x", "errors": []}) == "x"

    def test_no_data_no_errors(self):
        with pytest.raises(NoDataError):
            decode_envelope({"data": None, "errors": None})

    def test_errors_joined(self):
        """Test all error messages are reported"""
        with pytest.raises(GraphQLError) as exc_info:
            decode_envelope({"data": "x", "errors": [{"message": "a"}, {"message": "b"}]})

        assert "a, b" in str(exc_info.value)
        assert exc_info.value.messages == ["a", "b"]

    def test_errors_not_a_list(self):
        with pytest.raises(DecodeError):
            decode_envelope({"data": "x", "errors": "boom"})


class TestAPIClient:
    """Test APIClient requests"""

    def test_session_headers(self, client):
        assert client.session.headers["x-api-key"] == "secret-key"
        assert client.session.headers["Content-Type"] == "application/json"

    def test_execute_posts_query(self, client):
        with patch.object(client.session, "post", return_value=make_response({"data": {"ok": True}})) as mock_post:
            result = client.execute("query { ok }", {"id": "1"})

        assert result == {"ok": True}
        mock_post.assert_called_once_with(
            "https://tower.local/graphql",
            json={"query": "query { ok }", "variables": {"id": "1"}},
            timeout=5,
            verify=False
        )

    def test_verify_ssl_opt_in(self):
        api_client = APIClient("https://tower.local/graphql", "key", verify_ssl=True)

        with patch.object(api_client.session, "post", return_value=make_response({"data": {}})) as mock_post:
            api_client.execute("query { ok }")

        assert mock_post.call_args.kwargs["verify"] is True

    def test_transport_error(self, client):
        error = requests.exceptions.ConnectionError("connection refused")
        with patch.object(client.session, "post", side_effect=error):
            with pytest.raises(TransportError) as exc_info:
                client.execute("query { ok }")

        assert exc_info.value.__cause__ is error

    def test_timeout_is_transport_error(self, client):
        with patch.object(client.session, "post", side_effect=requests.exceptions.Timeout("timed out")):
            with pytest.raises(TransportError):
                client.execute("query { ok }")

    def test_decode_error(self, client):
        error = ValueError("Expecting value")
        with patch.object(client.session, "post", return_value=make_response(json_error=error)):
            with pytest.raises(DecodeError) as exc_info:
                client.execute("query { ok }")

        assert exc_info.value.__cause__ is error

    def test_non_object_body(self, client):
        with patch.object(client.session, "post", return_value=make_response(["not", "an", "object"])):
            with pytest.raises(DecodeError):
                client.execute("query { ok }")

    def test_http_error_without_envelope(self, client):
        response = make_response(json_error=ValueError("html page"), status_code=502)
        with patch.object(client.session, "post", return_value=response):
            with pytest.raises(TransportError) as exc_info:
                client.execute("query { ok }")

        assert exc_info.value.status_code == 502

    def test_http_error_with_graphql_errors(self, client):
        """Test server messages are surfaced even on an error status"""
        response = make_response({"errors": [{"message": "Invalid API key"}]}, status_code=401)
        with patch.object(client.session, "post", return_value=response):
            with pytest.raises(GraphQLError) as exc_info:
                client.execute("query { ok }")

        assert "Invalid API key" in str(exc_info.value)

    def test_list_containers(self, client):
        payload = {"data": {"docker": {"containers": [
            {"id": "1", "names": ["/plex"], "image": "plex", "state": "RUNNING", "status": "Up", "ports": []},
        ]}}}
        with patch.object(client.session, "post", return_value=make_response(payload)) as mock_post:
            containers = client.list_containers()

        assert [c.id for c in containers] == ["1"]
        assert mock_post.call_args.kwargs["json"]["query"] == queries.LIST_CONTAINERS

    def test_list_containers_unexpected_shape(self, client):
        with patch.object(client.session, "post", return_value=make_response({"data": {"docker": None}})):
            with pytest.raises(DecodeError):
                client.list_containers()

    @pytest.mark.parametrize("method,query", [
        ("start_container", queries.START_CONTAINER),
        ("stop_container", queries.STOP_CONTAINER),
        ("update_container", queries.UPDATE_CONTAINER),
    ])
    def test_container_mutations(self, client, method, query):
        with patch.object(client.session, "post", return_value=make_response({"data": {"docker": {}}})) as mock_post:
            getattr(client, method)("abc123")

        assert mock_post.call_args.kwargs["json"] == {"query": query, "variables": {"id": "abc123"}}
