"""
    Some base objects for the Flickr API client: the error hierarchy
    and the objects the server responses are turned into.
"""


class FlickrError(Exception):
    pass


class FlickrAppNotConfigured(FlickrError):
    """
        Raised when the client is built without an API key or
        a shared secret.
    """
    pass


class FlickrAPIError(FlickrError):
    """
        The server answered with 'stat = fail'.

        Attributes:
        - msg: the message sent by the server
        - code: the error code, as received (int for json responses,
          string for upload responses)
        - method: the flickr method (or upload url) that failed
    """
    def __init__(self, msg, code, method):
        FlickrError.__init__(self, "'%s' - %s" % (method, msg))
        self.msg = msg
        self.code = code
        self.method = method


class FlickrOAuthError(FlickrError):
    """
        One of the OAuth endpoints refused the handshake.
    """
    def __init__(self, response):
        self.response = response
        self.problem = response.get("oauth_problem")
        FlickrError.__init__(self, self.problem)


class UnknownMethod(FlickrError, AttributeError):
    pass


class Response(object):
    """
        Read-only view of a server response.

        Nested dictionaries are recursively transformed into Response
        objects named after their key, so that values can be reached
        either as items (r["id"]) or as attributes (r.id).
        'flickr_type' is the name of the object in the flickr answer
        (for instance 'photos' or 'photoid') or None when unknown.
    """
    def __init__(self, data, flickr_type=None):
        d = {}
        for k, v in data.items():
            if isinstance(v, dict):
                v = Response.build(v, k)
            elif isinstance(v, list):
                v = [Response.build(vi, k) for vi in v]
            d[k] = v
        self.__dict__["_data"] = d
        self.__dict__["flickr_type"] = flickr_type

    @staticmethod
    def build(data, flickr_type=None):
        """
            Builds the most appropriate object for 'data':
            - a ResponseList when data is a list, or a dictionary holding
              a list under the singular form of 'flickr_type'
              (e.g. {"photo": [...]} for 'photos'),
            - the bare value for {"_content": value},
            - a Response otherwise.
        """
        if isinstance(data, Response):
            return data
        if isinstance(data, dict):
            if flickr_type and flickr_type.endswith("s"):
                item_type = flickr_type[:-1]
                items = data.get(item_type)
                if isinstance(items, list):
                    info = dict((k, v) for k, v in data.items() if k != item_type)
                    return ResponseList(
                        [Response.build(i, item_type) for i in items],
                        info, flickr_type
                    )
            if list(data.keys()) == ["_content"]:
                return data["_content"]
            return Response(data, flickr_type)
        if isinstance(data, list):
            return ResponseList([Response.build(i, flickr_type) for i in data], {}, flickr_type)
        return data

    def __getattr__(self, name):
        if name.startswith("__") or name in ("_data", "_items"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError("'%s' response has no attribute '%s'" % (self.flickr_type, name))

    def __setattr__(self, name, value):
        raise FlickrError("Read-only attribute")

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        raise FlickrError("Read-only attribute")

    def __contains__(self, key):
        return key in self._data

    def __eq__(self, other):
        if isinstance(other, Response):
            return self.to_dict() == other.to_dict()
        return NotImplemented

    __hash__ = None

    def get(self, key, default=None):
        return self._data.get(key, default)

    def keys(self):
        return self._data.keys()

    def to_dict(self):
        return dict((k, _to_python(v)) for k, v in self._data.items())

    def __repr__(self):
        return "%s(%s, %r)" % (self.__class__.__name__, self.flickr_type, self.to_dict())


class ResponseList(Response):
    """
        A list of responses along with the information sent beside it
        (page, pages, perpage, total for paginated results).
    """
    def __init__(self, items, info=None, flickr_type=None):
        Response.__init__(self, info or {}, flickr_type)
        self.__dict__["_items"] = list(items)

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(self._items)

    def __getitem__(self, key):
        if isinstance(key, (int, slice)):
            return self._items[key]
        return Response.__getitem__(self, key)

    def __eq__(self, other):
        if isinstance(other, ResponseList):
            return self.to_list() == other.to_list() and self.to_dict() == other.to_dict()
        return NotImplemented

    __hash__ = None

    def to_list(self):
        return [_to_python(i) for i in self._items]

    def __repr__(self):
        return "%s(%s, %r;%r)" % (self.__class__.__name__, self.flickr_type,
                                  self.to_list(), self.to_dict())


def _to_python(value):
    if isinstance(value, ResponseList):
        return value.to_list()
    if isinstance(value, Response):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_python(v) for v in value]
    return value
