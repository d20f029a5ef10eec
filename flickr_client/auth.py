"""
    OAuth 1.0a signing and HTTP transport.

    Every request sent to flickr is signed with HMAC-SHA1 using the
    consumer key/secret of the application and, once the handshake is
    done, the access token secret of the user.

    The handshake goes as follows:

    >>> client = OAuthClient(api_key, shared_secret)
    >>> token = client.request_token(request_token_url)
    >>> url = client.authorize_url(authorize_url, oauth_token = token["oauth_token"], perms = "read")
    # the user visits 'url' and gets a verifier
    >>> access = client.access_token(access_token_url, token["oauth_token_secret"],
    ...     oauth_token = token["oauth_token"], oauth_verifier = verifier)
"""
import logging
from urllib.parse import parse_qsl, urlencode

import requests
from oauthlib import oauth1

from .base import FlickrError, FlickrOAuthError, Response

log = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# oauth parameters that can be overridden for a single request
_OAUTH_OVERRIDES = {
    "oauth_token": "resource_owner_key",
    "oauth_callback": "callback_uri",
    "oauth_verifier": "verifier",
}


class OAuthClient(object):
    """
        Signs and sends requests on behalf of one consumer.

        proxy, check_certificate, ca_file, ca_path and user_agent are
        meant to be set right after construction and are applied to
        every request. requests takes a single CA bundle: when both
        ca_file and ca_path are set, ca_file is used.
    """
    def __init__(self, consumer_key, consumer_secret):
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.proxy = None
        self.check_certificate = True
        self.ca_file = None
        self.ca_path = None
        self.user_agent = None
        self.session = requests.Session()

    def request_token(self, url, oauth_params=None):
        params = {"oauth_callback": "oob"}
        params.update(oauth_params or {})
        r = self.post_form(url, None, params)
        return _decode_token_response(r.text)

    def authorize_url(self, url, **params):
        return "%s?%s" % (url, urlencode(_clean_params(params)))

    def access_token(self, url, token_secret, oauth_params=None):
        r = self.post_form(url, token_secret, oauth_params)
        return _decode_token_response(r.text)

    def post_form(self, url, token_secret, oauth_params=None, params=None):
        """
            Sends a signed url-encoded POST request, the body
            parameters being part of the signature.
        """
        params = _clean_params(params or {})
        headers = {"Content-Type": FORM_CONTENT_TYPE}
        url, headers, body = self._signer(token_secret, oauth_params).sign(
            url, http_method="POST", body=params or None,
            headers=headers if params else {})
        if not params:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        return self._post(url, headers, data=body)

    def post_multipart(self, url, token_secret, oauth_params=None, params=None):
        """
            Sends a signed multipart POST request. 'params' must hold the
            file to send under the 'photo' key. The file itself is not
            part of the signature, every other parameter is.
        """
        params = dict(params or {})
        photo = params.pop("photo")
        params = _clean_params(params)
        url, headers, _ = self._signer(token_secret, oauth_params).sign(
            url, http_method="POST", body=params or None,
            headers={"Content-Type": FORM_CONTENT_TYPE} if params else {})
        # requests builds the multipart content type and boundary
        headers.pop("Content-Type", None)
        return self._post(url, headers, data=params, files={"photo": photo})

    def _signer(self, token_secret, oauth_params):
        kwargs = {}
        for k, v in (oauth_params or {}).items():
            if v is None:
                continue
            try:
                kwargs[_OAUTH_OVERRIDES[k]] = v
            except KeyError:
                raise FlickrError("Unsupported oauth parameter: %s" % k)
        return oauth1.Client(
            self.consumer_key,
            client_secret=self.consumer_secret,
            resource_owner_secret=token_secret,
            signature_method=oauth1.SIGNATURE_HMAC,
            **kwargs
        )

    def _verify(self):
        if not self.check_certificate:
            return False
        if self.ca_file and self.ca_path:
            log.warning("Both ca_file and ca_path are set, ignoring ca_path %s", self.ca_path)
        return self.ca_file or self.ca_path or True

    def _post(self, url, headers, **kwargs):
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        proxies = {"http": self.proxy, "https": self.proxy} if self.proxy else None
        return self.session.post(url, headers=headers, proxies=proxies,
                                 verify=self._verify(), **kwargs)


def _clean_params(params):
    """
        Turns argument values into the strings flickr expects.
    """
    clean = {}
    for k, v in params.items():
        if v is None:
            continue
        if isinstance(v, bool):
            v = "1" if v else "0"
        elif isinstance(v, (list, tuple)):
            v = ",".join(_param_value(vi) for vi in v)
        else:
            v = _param_value(v)
        clean[str(k)] = v
    return clean


def _param_value(v):
    if isinstance(v, Response):
        v = v.id
    return v if isinstance(v, str) else str(v)


def _decode_token_response(text):
    response = dict(parse_qsl(text or ""))
    if "oauth_problem" in response:
        raise FlickrOAuthError(response)
    return response
