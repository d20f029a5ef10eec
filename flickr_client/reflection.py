"""
    Construction of the method namespace from the list of methods
    published by flickr.

    The namespace is built once per process, the first time a Flickr
    object is created, and shared by every Flickr object afterwards.
"""
import logging
import threading

from .objects import Namespace

log = logging.getLogger(__name__)

ROOT = "flickr"

_lock = threading.Lock()
_root = None


def build_classes(endpoints, root=None):
    """
        Adds every dotted method name of 'endpoints' to the namespace
        'root' (a new one if None) and returns it.

        Existing namespaces and methods are kept, so building twice from
        the same list leaves the tree unchanged.
    """
    if root is None:
        root = Namespace(ROOT)
    for endpoint in sorted(endpoints):
        breadcrumbs = endpoint.split(".")
        tail = breadcrumbs.pop()
        if not breadcrumbs or breadcrumbs.pop(0) != ROOT:
            raise RuntimeError("Invalid namespace: %s" % endpoint)
        node = root
        for name in breadcrumbs:
            node = node.add_namespace(name)
        node.add_method(tail, endpoint)
    return root


def namespace_root(retrieve):
    """
        Returns the namespace shared by the process, building it from
        retrieve() if it does not exist yet. Concurrent callers wait for
        the build to complete; a failing retrieve() leaves nothing built.
    """
    global _root
    with _lock:
        if _root is None:
            endpoints = retrieve()
            _root = build_classes(endpoints)
            log.info("Built the flickr namespace from %i methods", len(endpoints))
        return _root


def is_built():
    return _root is not None


def reset():
    """
        Forgets the shared namespace. The next Flickr object will
        build it again.
    """
    global _root
    with _lock:
        _root = None
