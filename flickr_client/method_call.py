"""
    Preparation of the arguments sent to flickr and normalization of
    its answers.

    Method calls are answered in json. Upload and replace requests are
    answered with a small xml document whatever the requested format.
"""
import json
import xml.etree.ElementTree as ET

from . import config
from .base import FlickrAPIError, Response

DEFAULT_ARGS = {"format": "json", "nojsoncallback": "1"}


def build_args(args=None, method=None):
    """
        Returns a copy of 'args' with the protocol arguments added.
    """
    args = dict(args or {})
    if method:
        args["method"] = method
    args.update(DEFAULT_ARGS)
    return args


def process_response(method, body):
    """
        Turns the body of a flickr answer into a Response (or a plain
        value), raising FlickrAPIError when flickr reports a failure.
    """
    body = body or ""
    if config.debug_enabled():
        config.debug_logger().debug("%s: %s", method, body)
    if body.lstrip().startswith("<?xml"):
        data, flickr_type = _parse_xml(method, body)
    else:
        data, flickr_type = _parse_json(method, body)
    if config.debug_enabled():
        config.debug_logger().debug("%s: [%s] %r", method, flickr_type, data)
    return Response.build(data, flickr_type)


def _parse_json(method, body):
    data = json.loads(body.strip() or "{}")
    if not isinstance(data, dict):
        return data, None
    if data.pop("stat", None) == "fail":
        raise FlickrAPIError(data.get("message"), data.get("code"), method)
    if len(data) == 1:
        flickr_type, value = list(data.items())[0]
        if isinstance(value, dict):
            return value, flickr_type
    return data, None


def _parse_xml(method, body):
    root = ET.fromstring(body.strip().encode("utf-8"))
    stat = root.get("stat")
    # flickr wraps the answer in <rsp>, error details being either
    # attributes of <rsp> or of an <err> child.
    if stat == "fail":
        err = root
        if root.get("code") is None and len(root):
            err = root[0]
        raise FlickrAPIError(err.get("msg"), err.get("code"), method)
    elem = root
    if root.tag == "rsp" and len(root):
        elem = root[0]
    data = {}
    for attr in ("secret", "originalsecret"):
        value = elem.get(attr)
        if value is not None:
            data[attr] = value
    content = (elem.text or "").strip()
    if content:
        data["_content"] = content
    return data, elem.tag
