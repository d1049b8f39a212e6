"""Unit tests for ClientFacade."""

import httpx
import pytest

from apiwrap import APIClient, ClientConfig, ClientFacade, ClientMetrics, Entity


class Recorder:
    def __init__(self):
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if request.url.path.endswith("/login"):
            return httpx.Response(200, json={"accessToken": "tok"})
        return httpx.Response(200, json={"path": request.url.path})


class ExampleFacade(ClientFacade):
    def __init__(self, config=None):
        super().__init__(config)
        self.recorder = Recorder()
        self.built = 0

    def client(self, **options):
        self.built += 1
        return APIClient(
            self.config,
            connection_options={"transport": httpx.MockTransport(self.recorder)},
            metrics=ClientMetrics(),
            **options,
        )


@pytest.fixture
def facade():
    facade = ExampleFacade(ClientConfig(endpoint="https://api.example.com/"))
    yield facade
    facade.reset()


class TestClientFacade:
    def test_client_must_be_implemented(self):
        with pytest.raises(NotImplementedError, match="client"):
            ClientFacade().get("users")

    def test_default_config(self):
        assert ClientFacade().config == ClientConfig()

    def test_forwards_verbs(self, facade):
        assert facade.get("users") == Entity({"path": "/users"})
        assert isinstance(facade.post("users", {"a": 1}), httpx.Response)
        assert isinstance(facade.put("users/1", {"a": 1}), httpx.Response)
        assert facade.delete("users/1") == Entity({"path": "/users/1"})
        assert [r.method for r in facade.recorder.requests] == ["GET", "POST", "PUT", "DELETE"]

    def test_forwards_pagination(self, facade):
        assert facade.get_paged("users") == [Entity({"path": "/users"})]
        assert list(facade.iter_paged("users")) == [Entity({"path": "/users"})]

    def test_forwards_authenticate(self, facade):
        assert facade.authenticate("login") == "tok"
        assert facade.current_client.config.access_token == "tok"

    def test_client_cached(self, facade):
        assert facade.current_client is facade.current_client
        facade.get("a")
        facade.get("b")
        assert facade.built == 1

    def test_configure_rebuilds(self, facade):
        first = facade.current_client
        assert facade.configure(access_token="abc") is facade
        assert facade.config.access_token == "abc"

        second = facade.current_client
        assert second is not first
        assert second.config.access_token == "abc"
        assert facade.built == 2

    def test_reset(self, facade):
        first = facade.current_client
        facade.reset()
        assert facade.current_client is not first
