import base64
import hashlib
import hmac
import io
import logging
from urllib.parse import parse_qsl, quote, unquote

import pytest
import requests
from oauthlib.oauth1.rfc5849.utils import parse_authorization_header

from flickr_client.auth import OAuthClient, _clean_params
from flickr_client.base import FlickrError, FlickrOAuthError, Response

URL = "https://api.flickr.com/services/rest/"


class Recorder(object):
    def __init__(self, text=""):
        self.text = text
        self.calls = []

    def __call__(self, url, **kwargs):
        self.calls.append((url, kwargs))
        r = requests.Response()
        r.status_code = 200
        r._content = self.text.encode("utf-8")
        r.encoding = "utf-8"
        return r


@pytest.fixture
def recorder(monkeypatch):
    recorder = Recorder()
    monkeypatch.setattr(requests.Session, "post", lambda session, url, **kwargs: recorder(url, **kwargs))
    return recorder


def _enc(value):
    return quote(value, safe="~")


def expected_signature(url, params, consumer_secret, token_secret):
    """
        HMAC-SHA1 signature of a POST request, computed by the book.
    """
    pairs = sorted((_enc(k), _enc(v)) for k, v in params.items()
                   if k not in ("oauth_signature", "realm"))
    normalized = "&".join("%s=%s" % p for p in pairs)
    base_string = "&".join(["POST", _enc(url), _enc(normalized)])
    key = "%s&%s" % (_enc(consumer_secret), _enc(token_secret or ""))
    digest = hmac.new(key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1).digest()
    return base64.b64encode(digest).decode("utf-8")


def oauth_header(kwargs):
    header = kwargs["headers"]["Authorization"]
    return dict((k, unquote(v)) for k, v in parse_authorization_header(header))


def sent_params(kwargs):
    data = kwargs["data"]
    if isinstance(data, dict):
        return dict(data)
    return dict(parse_qsl(data))


def test_form_post_signs_body_parameters(recorder):
    client = OAuthClient("key", "secret")
    client.user_agent = "flickr-client/test"
    client.post_form(URL, "token-secret", {"oauth_token": "token"},
                     {"method": "flickr.test.echo", "safe": True, "extras": ["tags", "views"],
                      "title": "a b&c", "empty": None})

    url, kwargs = recorder.calls[-1]
    assert url == URL
    assert kwargs["headers"]["User-Agent"] == "flickr-client/test"
    body = sent_params(kwargs)
    assert body == {"method": "flickr.test.echo", "safe": "1", "extras": "tags,views", "title": "a b&c"}

    oauth = oauth_header(kwargs)
    assert oauth["oauth_consumer_key"] == "key"
    assert oauth["oauth_token"] == "token"
    assert oauth["oauth_signature_method"] == "HMAC-SHA1"
    params = dict(oauth)
    params.update(body)
    assert oauth["oauth_signature"] == expected_signature(URL, params, "secret", "token-secret")


def test_no_token_before_the_handshake(recorder):
    OAuthClient("key", "secret").post_form(URL, None, {"oauth_token": None}, {"method": "flickr.test.echo"})
    oauth = oauth_header(recorder.calls[-1][1])
    assert "oauth_token" not in oauth
    body = sent_params(recorder.calls[-1][1])
    params = dict(oauth)
    params.update(body)
    assert oauth["oauth_signature"] == expected_signature(URL, params, "secret", None)


def test_multipart_signature_leaves_the_file_out(recorder):
    upload = "https://up.flickr.com/services/upload/"
    photo = io.BytesIO(b"\xff\xd8\xff")
    OAuthClient("key", "secret").post_multipart(
        upload, "token-secret", {"oauth_token": "token"},
        {"title": "Title", "is_public": False, "photo": photo})

    url, kwargs = recorder.calls[-1]
    assert kwargs["files"] == {"photo": photo}
    assert kwargs["data"] == {"title": "Title", "is_public": "0"}
    assert "Content-Type" not in kwargs["headers"]
    oauth = oauth_header(kwargs)
    params = dict(oauth)
    params.update(kwargs["data"])
    assert oauth["oauth_signature"] == expected_signature(upload, params, "secret", "token-secret")


@pytest.mark.parametrize("check,ca_file,ca_path,expected", [
    (True, None, None, True),
    (False, "/etc/ca.pem", None, False),
    (True, "/etc/ca.pem", "/etc/certs", "/etc/ca.pem"),
    (True, None, "/etc/certs", "/etc/certs"),
])
def test_certificate_settings(recorder, check, ca_file, ca_path, expected):
    client = OAuthClient("key", "secret")
    client.check_certificate = check
    client.ca_file = ca_file
    client.ca_path = ca_path
    client.post_form(URL, None)
    assert recorder.calls[-1][1]["verify"] == expected


def test_proxy(recorder):
    client = OAuthClient("key", "secret")
    client.proxy = "http://proxy:3128"
    client.post_form(URL, None)
    assert recorder.calls[-1][1]["proxies"] == {"http": "http://proxy:3128", "https": "http://proxy:3128"}


def test_request_token(recorder):
    recorder.text = "oauth_callback_confirmed=true&oauth_token=rt&oauth_token_secret=rts"
    token = OAuthClient("key", "secret").request_token("https://api.flickr.com/services/oauth/request_token")
    assert token == {"oauth_callback_confirmed": "true", "oauth_token": "rt", "oauth_token_secret": "rts"}
    assert oauth_header(recorder.calls[-1][1])["oauth_callback"] == "oob"


def test_access_token(recorder):
    recorder.text = "fullname=Cal&oauth_token=at&oauth_token_secret=ats&user_nsid=12%40N00&username=bees"
    token = OAuthClient("key", "secret").access_token(
        "https://api.flickr.com/services/oauth/access_token", "rts",
        {"oauth_token": "rt", "oauth_verifier": "v"})
    assert token["oauth_token"] == "at"
    assert token["user_nsid"] == "12@N00"
    oauth = oauth_header(recorder.calls[-1][1])
    assert oauth["oauth_verifier"] == "v"
    assert oauth["oauth_signature"] == expected_signature(
        "https://api.flickr.com/services/oauth/access_token", oauth, "secret", "rts")


def test_token_problem(recorder):
    recorder.text = "oauth_problem=token_rejected"
    with pytest.raises(FlickrOAuthError) as e:
        OAuthClient("key", "secret").request_token("https://api.flickr.com/services/oauth/request_token")
    assert e.value.problem == "token_rejected"


def test_authorize_url():
    url = OAuthClient("key", "secret").authorize_url(
        "https://api.flickr.com/services/oauth/authorize", oauth_token="rt", perms="delete")
    assert url.startswith("https://api.flickr.com/services/oauth/authorize?")
    assert dict(parse_qsl(url.split("?", 1)[1])) == {"oauth_token": "rt", "perms": "delete"}


def test_unsupported_oauth_override(recorder):
    with pytest.raises(FlickrError):
        OAuthClient("key", "secret").post_form(URL, None, {"oauth_nonce": "x"})


def test_handshake_through_the_client(recorder):
    from flickr_client import config, reflection
    from flickr_client.client import Flickr

    reflection.namespace_root(lambda: ["flickr.test.echo"])
    f = Flickr("key", "secret")
    assert recorder.calls == []

    recorder.text = "oauth_callback_confirmed=true&oauth_token=rt&oauth_token_secret=rts"
    token = f.get_request_token(oauth_callback="https://example.com/cb")
    assert recorder.calls[-1][0] == "https://api.flickr.com/services/oauth/request_token"
    assert oauth_header(recorder.calls[-1][1])["oauth_callback"] == "https://example.com/cb"

    url = f.get_authorize_url(token["oauth_token"], perms="write")
    assert url == "https://api.flickr.com/services/oauth/authorize?perms=write&oauth_token=rt"

    recorder.text = "oauth_token=at&oauth_token_secret=ats"
    f.get_access_token(token["oauth_token"], token["oauth_token_secret"], "verifier")
    assert (f.access_token, f.access_secret) == ("at", "ats")

    recorder.text = '{"stat": "ok"}'
    f.test.echo()
    url, kwargs = recorder.calls[-1]
    assert url == "https://api.flickr.com/services/rest/"
    assert oauth_header(kwargs)["oauth_token"] == "at"
    assert kwargs["headers"]["User-Agent"] == config.USER_AGENT


def test_responses_are_sent_as_their_id():
    photo = Response({"id": "123", "secret": "abc"}, "photo")
    other = Response({"id": "456"}, "photo")
    assert _clean_params({"photo_id": photo, "photo_ids": [photo, other]}) == \
        {"photo_id": "123", "photo_ids": "123,456"}


def test_ca_file_wins_over_ca_path(recorder, caplog):
    client = OAuthClient("key", "secret")
    client.ca_file = "/etc/ca.pem"
    client.ca_path = "/etc/certs"
    with caplog.at_level(logging.WARNING, logger="flickr_client.auth"):
        client.post_form(URL, None)
    assert recorder.calls[-1][1]["verify"] == "/etc/ca.pem"
    assert "/etc/certs" in caplog.text
