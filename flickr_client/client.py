"""
    The Flickr client.

    >>> flickr = Flickr(api_key, shared_secret)
    >>> photos = flickr.people.getPhotos(user_id = "12345678@N00")
    >>> for photo in photos :
    >>>     print(photo.title)

    Any method published by flickr.reflection.getMethods can be called
    that way, the leading 'flickr.' being omitted.
"""
import logging

from . import config, reflection, tools
from .auth import OAuthClient
from .base import FlickrAppNotConfigured
from .method_call import build_args, process_response
from .objects import BoundNamespace

log = logging.getLogger(__name__)


class Flickr(object):
    """
        Entry point to the flickr API.

        arguments:
        - api_key, shared_secret: the credentials of the application.
          When omitted, config.API_KEY / config.SHARED_SECRET are used,
          then the FLICKR_API_KEY / FLICKR_SHARED_SECRET environment
          variables.

        The access token of the user is set by get_access_token or by
        assigning 'access_token' and 'access_secret' directly.
    """
    def __init__(self, api_key=None, shared_secret=None):
        api_key, shared_secret = config.get_credentials(api_key, shared_secret)
        if api_key is None:
            raise FlickrAppNotConfigured("No API key defined!")
        if shared_secret is None:
            raise FlickrAppNotConfigured("No shared secret defined!")

        self.api_key = api_key
        self.shared_secret = shared_secret
        self.access_token = None
        self.access_secret = None
        self.client = self._oauth_client(api_key, shared_secret)
        self._root = reflection.namespace_root(lambda: tools.retrieve_endpoints(self))

    def _oauth_client(self, api_key, shared_secret):
        client = OAuthClient(api_key, shared_secret)
        client.proxy = config.PROXY
        client.check_certificate = config.CHECK_CERTIFICATE
        client.ca_file = config.CA_FILE
        client.ca_path = config.CA_PATH
        client.user_agent = config.USER_AGENT
        return client

    def call(self, method, args=None, /, **kwargs):
        """
            Calls the flickr method 'method' (e.g. "flickr.photos.search")
            and returns the processed answer.

            Arguments are given as a dictionary and/or as keywords. An
            'oauth' dictionary is used to override oauth parameters of
            the request (e.g. {"oauth_callback": url}) and is not sent as
            a method argument.

            Raises FlickrAPIError if flickr reports a failure.
        """
        args = dict(args or {}, **kwargs)
        oauth_params = self._oauth_params(args.pop("oauth", None))
        log.debug("Calling %s", method)
        r = self.client.post_form(config.rest_path(), self.access_secret, oauth_params,
                                  build_args(args, method))
        return process_response(method, r.text)

    def get_request_token(self, **oauth_args):
        """
            Gets an oauth request token.

            >>> token = flickr.get_request_token(oauth_callback = "https://example.com")
        """
        return self.client.request_token(config.request_token_url(), oauth_args)

    def get_authorize_url(self, token, **args):
        """
            Gets the url the user must visit to authorize the application.

            >>> url = flickr.get_authorize_url(token["oauth_token"], perms = "delete")
        """
        args["oauth_token"] = token
        return self.client.authorize_url(config.authorize_url(), **args)

    def get_access_token(self, token, secret, verifier):
        """
            Exchanges an authorized request token for an access token,
            which is used by all subsequent calls.

            >>> flickr.get_access_token(token["oauth_token"], token["oauth_token_secret"], verifier)
        """
        access_token = self.client.access_token(
            config.access_token_url(), secret,
            {"oauth_token": token, "oauth_verifier": verifier}
        )
        self.access_token = access_token.get("oauth_token")
        self.access_secret = access_token.get("oauth_token_secret")
        return access_token

    def upload_photo(self, photo, **args):
        """
            Uploads the photo 'photo' (a path or an open binary file).

            >>> flickr.upload_photo("/path/to/the/photo", title = "Title", description = "...")

            See https://www.flickr.com/services/api/upload.api.html
        """
        return self._upload(config.upload_path(), photo, args)

    def replace_photo(self, photo, **args):
        """
            Replaces the photo with id 'photo_id' by 'photo'.

            >>> flickr.replace_photo("/path/to/the/photo", photo_id = "12345")

            See https://www.flickr.com/services/api/replace.api.html
        """
        return self._upload(config.replace_path(), photo, args)

    def _upload(self, url, photo, args):
        oauth_params = self._oauth_params(args.pop("oauth", None))
        args = build_args(args)
        close_after = not hasattr(photo, "read")
        if close_after:
            photo = open(photo, "rb")
        try:
            args["photo"] = photo
            log.debug("Uploading to %s", url)
            r = self.client.post_multipart(url, self.access_secret, oauth_params, args)
        finally:
            if close_after:
                photo.close()
        return process_response(url, r.text)

    def _oauth_params(self, oauth_args):
        params = {"oauth_token": self.access_token}
        params.update(oauth_args or {})
        return params

    @property
    def root(self):
        return BoundNamespace(self._root, self)

    def namespace(self, name):
        return self.root.namespace(name)

    def resolve(self, endpoint):
        """
            Returns the function calling 'endpoint' (e.g.
            "flickr.people.getPhotos").
        """
        breadcrumbs = endpoint.split(".")
        tail = breadcrumbs.pop()
        if breadcrumbs and breadcrumbs[0] == reflection.ROOT:
            breadcrumbs.pop(0)
        node = self._root.find(breadcrumbs)
        return BoundNamespace(node, self).method(tail)

    def __getattr__(self, name):
        if name.startswith("_") or "_root" not in self.__dict__:
            raise AttributeError(name)
        return getattr(self.root, name)

    def __dir__(self):
        return sorted(set(object.__dir__(self)) | set(dir(self.root)))
