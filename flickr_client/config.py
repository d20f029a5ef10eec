"""
    Process-wide settings of the client.

    The values are plain module attributes, read by every Flickr object
    created after they have been set. Use 'configure' to change them:

    >>> from flickr_client import config
    >>> config.configure(cache = "/tmp/flickr-methods.yml", proxy = "http://proxy:3128")
"""
import logging
import os
import sys

from .base import FlickrError

__version__ = "2.1.0"

API_KEY = None
SHARED_SECRET = None

PROXY = None
SECURE = True
CHECK_CERTIFICATE = True
CA_FILE = None
CA_PATH = None
CACHE = os.environ.get("FLICKR_CACHE") or None
DEBUG = False

USER_AGENT = "flickr-client/%s (+python-requests)" % __version__

API_HOST = "api.flickr.com/services"
UPLOAD_HOST = "up.flickr.com/services"

_SETTINGS = ["api_key", "shared_secret", "proxy", "secure", "check_certificate",
             "ca_file", "ca_path", "cache", "debug"]


def configure(**settings):
    """
        Sets one or more process-wide settings.

        Accepted names: api_key, shared_secret, proxy, secure,
        check_certificate, ca_file, ca_path, cache, debug.
    """
    module = sys.modules[__name__]
    for name, value in settings.items():
        if name not in _SETTINGS:
            raise FlickrError("Unknown setting: %s" % name)
        setattr(module, name.upper(), value)


def get_credentials(api_key=None, shared_secret=None):
    if api_key is None:
        api_key = API_KEY or os.environ.get("FLICKR_API_KEY")
    if shared_secret is None:
        shared_secret = SHARED_SECRET or os.environ.get("FLICKR_SHARED_SECRET")
    return api_key, shared_secret


def _scheme():
    return "https" if SECURE else "http"


def end_point():
    return "%s://%s" % (_scheme(), API_HOST)


def upload_end_point():
    return "%s://%s" % (_scheme(), UPLOAD_HOST)


def rest_path():
    return end_point() + "/rest/"


def request_token_url():
    return end_point() + "/oauth/request_token"


def authorize_url():
    return end_point() + "/oauth/authorize"


def access_token_url():
    return end_point() + "/oauth/access_token"


def upload_path():
    return upload_end_point() + "/upload/"


def replace_path():
    return upload_end_point() + "/replace/"


def debug_enabled():
    return bool(DEBUG or os.environ.get("FLICKR_DEBUG"))


def debug_logger():
    """
        Logger of the debug channel. A stderr handler is attached the
        first time it is requested.
    """
    logger = logging.getLogger("flickr_client.debug")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
    return logger
