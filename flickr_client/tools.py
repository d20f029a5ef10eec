"""
    Retrieval of the list of methods exposed by flickr.

    The list is asked to flickr.reflection.getMethods, unless a cache
    file is configured (config.CACHE) and exists, in which case it is
    read from it. A freshly retrieved list is written to the cache file
    when one is configured.
"""
import logging
import os

import yaml

from . import config

log = logging.getLogger(__name__)

REFLECTION_METHOD = "flickr.reflection.getMethods"


def load_methods(flickr):
    """
        Loads the list of all methods from the server.
    """
    r = flickr.call(REFLECTION_METHOD)
    return [str(m) for m in r]


def dump_endpoints(path, endpoints):
    with open(path, "w") as f:
        yaml.safe_dump(list(endpoints), f, default_flow_style=False)
    log.info("Wrote %i flickr methods to %s", len(endpoints), path)


def load_endpoints(path):
    with open(path, "r") as f:
        endpoints = yaml.safe_load(f) or []
    log.info("Loaded %i flickr methods from %s", len(endpoints), path)
    return endpoints


def retrieve_endpoints(flickr):
    cache = config.CACHE
    if cache and os.path.exists(cache):
        return load_endpoints(cache)
    endpoints = load_methods(flickr)
    log.info("Retrieved %i flickr methods from the server", len(endpoints))
    if cache:
        dump_endpoints(cache, endpoints)
    return endpoints
