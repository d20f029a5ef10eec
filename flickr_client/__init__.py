"""
    Client of the Flickr REST API.

    The methods are discovered from flickr.reflection.getMethods and
    exposed as a tree of namespaces:

    >>> import flickr_client
    >>> flickr = flickr_client.Flickr(api_key, shared_secret)
    >>> flickr.photos.search(tags = "animals", per_page = 10)
"""
from . import config, urls
from .base import (FlickrAPIError, FlickrAppNotConfigured, FlickrError,
                   FlickrOAuthError, Response, ResponseList, UnknownMethod)
from .client import Flickr
from .config import __version__, configure
from .objects import Walker
