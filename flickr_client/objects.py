"""
    Objects mapping the flickr method namespace.

    A Namespace is one segment of the dotted method names
    ('people' in 'flickr.people.getPhotos'). It knows its child
    namespaces and the methods declared directly under it. Namespaces
    are shared by all Flickr objects of the process and never change
    once built: a BoundNamespace attaches one of them to a given Flickr
    object so that methods can be called.

    >>> flickr.people.getPhotos(user_id = "12345678@N00")
    >>> flickr.namespace("people").method("getPhotos")(user_id = "12345678@N00")
"""
from .base import UnknownMethod


class Namespace(object):
    def __init__(self, name, path=None):
        self.name = name
        self.path = path or name
        self.children = {}
        self.methods = {}

    def add_namespace(self, name):
        """
            Returns the child namespace called 'name', creating it
            if needed.
        """
        try:
            return self.children[name]
        except KeyError:
            child = Namespace(name, "%s.%s" % (self.path, name))
            self.children[name] = child
            return child

    def add_method(self, name, endpoint):
        """
            Declares 'name' as a method bound to 'endpoint'. Returns False
            when the method was already declared.
        """
        if name in self.methods:
            return False
        self.methods[name] = endpoint
        return True

    def find(self, breadcrumbs):
        node = self
        for name in breadcrumbs:
            try:
                node = node.children[name]
            except KeyError:
                raise UnknownMethod("No namespace '%s' in '%s'" % (name, node.path))
        return node

    def walk(self):
        """
            Yields every endpoint reachable from this namespace.
        """
        for endpoint in self.methods.values():
            yield endpoint
        for child in self.children.values():
            for endpoint in child.walk():
                yield endpoint

    def __repr__(self):
        return "Namespace(%s)" % self.path


class BoundNamespace(object):
    """
        A namespace seen from a Flickr object: children are reached as
        attributes and methods are called with keyword arguments.
    """
    def __init__(self, node, client):
        self._node = node
        self._client = client

    def namespace(self, name):
        try:
            return BoundNamespace(self._node.children[name], self._client)
        except KeyError:
            raise UnknownMethod("No namespace '%s' in '%s'" % (name, self._node.path))

    def method(self, name):
        try:
            endpoint = self._node.methods[name]
        except KeyError:
            raise UnknownMethod("No method '%s' in '%s'" % (name, self._node.path))
        return caller(self._client, endpoint)

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        if name in self._node.children:
            return self.namespace(name)
        return self.method(name)

    def __dir__(self):
        return sorted(set(self._node.children) | set(self._node.methods))

    def __repr__(self):
        return "<BoundNamespace %s>" % self._node.path


def caller(client, endpoint):
    """
        Returns a function calling the flickr method 'endpoint'
        through 'client'.
    """
    def call(args=None, /, **kwargs):
        return client.call(endpoint, args, **kwargs)
    call.__name__ = endpoint.rsplit(".", 1)[-1]
    call.__qualname__ = endpoint
    call.__doc__ = "flickr method: %s" % endpoint
    call.flickr_method = endpoint
    return call


class Walker(object):
    """
        Object to walk along paginated results. This allows
        to loop on all the results corresponding to a query
        regardless pagination.

        w = Walker(method, **kwargs)

        arguments:
        - method: a callable returning a paginated ResponseList,
          typically a flickr method (flickr.photos.search)
        - **kwargs: named arguments to call 'method' with

        ex:
        >>> w = Walker(flickr.photos.search, tags = "animals")
        >>> for photo in w :
        >>>     print(photo.title)
    """
    def __init__(self, method, **kwargs):
        self.method = method
        self.kwargs = kwargs

        self._curr_list = self.method(**self.kwargs)
        self._curr_index = 0
        self._page = int(self._curr_list.get("page", 1))

    def __len__(self):
        return int(self._curr_list.get("total", len(self._curr_list)))

    def __iter__(self):
        return self

    def __next__(self):
        while self._curr_index == len(self._curr_list):
            if self._page >= int(self._curr_list.get("pages", 1)):
                raise StopIteration()
            self._page += 1
            self.kwargs["page"] = self._page
            self._curr_list = self.method(**self.kwargs)
            self._curr_index = 0

        curr = self._curr_list[self._curr_index]
        self._curr_index += 1
        return curr
