"""
    Urls of photos, profiles and photo pages, computed from the fields of
    a response.

    Every function takes a Response (or a plain dictionary) with the
    fields flickr sends for a photo: id, farm, server, secret and, for
    url_o, originalsecret and originalformat.

    >>> photo = flickr.photos.getInfo(photo_id = "4379822687")
    >>> urls.url_z(photo)
    'https://farm5.staticflickr.com/4062/4379822687_0123456789_z.jpg'
    >>> urls.url_short(photo)
    'https://flic.kr/p/7F2JGg'
"""
from .base import Response

PHOTO_SOURCE_URL = "https://farm%s.staticflickr.com/%s/%s_%s%s.%s"
URL_PROFILE = "https://www.flickr.com/people/"
URL_PHOTOSTREAM = "https://www.flickr.com/photos/"
URL_SHORT = "https://flic.kr/p/"

BASE58_ALPHABET = "123456789abcdefghijkmnopqrstuvwxyzABCDEFGHJKLMNPQRSTUVWXYZ"


def base58(id):
    """
        Encodes a numeric id (int or string) the way flic.kr short urls do.
    """
    id = int(id)
    base = len(BASE58_ALPHABET)
    r = ""
    while True:
        id, m = divmod(id, base)
        r = BASE58_ALPHABET[m] + r
        if id == 0:
            return r


def _field(r, key):
    if isinstance(r, (Response, dict)):
        return r.get(key)
    return getattr(r, key, None)


def _owner(r):
    owner = _field(r, "owner")
    nsid = _field(owner, "nsid") if not isinstance(owner, str) else None
    return nsid or owner


def gen_url(r, size):
    return PHOTO_SOURCE_URL % (_field(r, "farm"), _field(r, "server"), _field(r, "id"),
                               _field(r, "secret"), size, "jpg")


def url(r):
    return gen_url(r, "")


def _sized_url(size):
    def sized_url(r):
        return gen_url(r, "_" + size)
    sized_url.__name__ = "url_" + size
    sized_url.__doc__ = "Url of the photo with the '%s' size suffix." % size
    return sized_url


url_m = _sized_url("m")
url_s = _sized_url("s")
url_t = _sized_url("t")
url_b = _sized_url("b")
url_z = _sized_url("z")
url_q = _sized_url("q")
url_n = _sized_url("n")
url_c = _sized_url("c")
url_h = _sized_url("h")
url_k = _sized_url("k")


def url_o(r):
    """
        Url of the original file: uses the original secret and format.
    """
    return PHOTO_SOURCE_URL % (_field(r, "farm"), _field(r, "server"), _field(r, "id"),
                               _field(r, "originalsecret"), "_o", _field(r, "originalformat"))


def url_profile(r):
    return URL_PROFILE + _owner(r) + "/"


def url_photostream(r):
    return URL_PHOTOSTREAM + (_field(r, "pathalias") or _owner(r)) + "/"


def url_photopage(r):
    return url_photostream(r) + str(_field(r, "id"))


def url_photosets(r):
    return url_photostream(r) + "sets/"


def url_photoset(r):
    return url_photosets(r) + str(_field(r, "id"))


def url_short(r):
    return URL_SHORT + base58(_field(r, "id"))


def _short_img_url(suffix):
    def short_img_url(r):
        return URL_SHORT + "img/" + base58(_field(r, "id")) + suffix + ".jpg"
    return short_img_url


url_short_m = _short_img_url("_m")
url_short_s = _short_img_url("")
url_short_t = _short_img_url("_t")
url_short_q = _short_img_url("_q")
url_short_n = _short_img_url("_n")
