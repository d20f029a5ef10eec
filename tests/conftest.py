import json

import pytest

from flickr_client import client as client_module
from flickr_client import config, reflection

METHODS = [
    "flickr.people.getPhotos",
    "flickr.people.getInfo",
    "flickr.photos.search",
    "flickr.photos.getInfo",
    "flickr.photos.upload.checkTickets",
    "flickr.photos.comments.getList",
    "flickr.reflection.getMethods",
    "flickr.test.echo",
]


def methods_body(methods=METHODS):
    return json.dumps({
        "methods": {"method": [{"_content": m} for m in methods]},
        "stat": "ok",
    })


class FakeResponse(object):
    def __init__(self, text):
        self.text = text


class FakeOAuthClient(object):
    """
        Stands for OAuthClient: records the requests and answers them
        from 'responses', keyed by flickr method (or url for uploads).
    """
    instances = []

    def __init__(self, consumer_key, consumer_secret):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.requests = []
        self.responses = {"flickr.reflection.getMethods": methods_body()}
        FakeOAuthClient.instances.append(self)

    def _answer(self, key):
        body = self.responses.get(key, '{"stat": "ok"}')
        if isinstance(body, Exception):
            raise body
        return FakeResponse(body)

    def post_form(self, url, token_secret, oauth_params=None, params=None):
        self.requests.append(("form", url, token_secret, dict(oauth_params or {}), dict(params or {})))
        return self._answer(params.get("method"))

    def post_multipart(self, url, token_secret, oauth_params=None, params=None):
        self.requests.append(("multipart", url, token_secret, dict(oauth_params or {}), dict(params or {})))
        return self._answer(url)


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    reflection.reset()
    monkeypatch.setattr(config, "API_KEY", None)
    monkeypatch.setattr(config, "SHARED_SECRET", None)
    monkeypatch.setattr(config, "CACHE", None)
    monkeypatch.setattr(config, "DEBUG", False)
    monkeypatch.setattr(config, "SECURE", True)
    for name in ("FLICKR_API_KEY", "FLICKR_SHARED_SECRET", "FLICKR_DEBUG", "FLICKR_CACHE"):
        monkeypatch.delenv(name, raising=False)
    yield
    reflection.reset()


@pytest.fixture
def fake_transport(monkeypatch):
    FakeOAuthClient.instances = []
    monkeypatch.setattr(client_module, "OAuthClient", FakeOAuthClient)
    return FakeOAuthClient


@pytest.fixture
def flickr(fake_transport):
    return client_module.Flickr("key", "secret")
