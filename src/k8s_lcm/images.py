"""
Image reference parsing.

Turns a raw image string as found in a pod spec (e.g.
"myregistry.io/team/app:1.2") into a ContainerRecord holding the
registry host, image name and version.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_HTTPS_PORT, DEFAULT_VERSION
from .errors import MissingImageName, UnsupportedPortSyntax


@dataclass(frozen=True)
class ContainerRecord:
    """
    A parsed image reference.

    Attributes:
        full_path: The image string exactly as it appeared in the pod spec.
        registry_url: Registry host, or "" when the default registry is implied.
        name: Repository path without registry host or version.
        version: Tag, or "0" when the reference has none.
    """

    full_path: str
    registry_url: str
    name: str
    version: str


def strip_default_port(image: str) -> str:
    """Remove every ":443" from an image reference."""
    return image.replace(DEFAULT_HTTPS_PORT, "")


def parse_image(image: str) -> ContainerRecord:
    """
    Parse a raw image reference into a ContainerRecord.

    Image names are assumed never to contain a dot, so a dot means the
    first path segment is a registry host. An empty tag ("nginx:") is
    treated like no tag.

    Args:
        image: Raw reference, e.g. "nginx", "nginx:1.19" or
            "myregistry.io:443/nginx:1.19".

    Returns:
        ContainerRecord for the reference.

    Raises:
        UnsupportedPortSyntax: Two or more colons remain after stripping
            ":443", i.e. the registry carries an explicit port.
        MissingImageName: The name is empty once registry and tag are
            removed (e.g. ":1.0" or "myregistry.io/:1.0").
    """
    working = strip_default_port(image)

    if working.count(":") >= 2:
        raise UnsupportedPortSyntax(image)

    version = DEFAULT_VERSION
    if ":" in working:
        working, version = working.split(":", 1)
        version = version or DEFAULT_VERSION

    registry_url = ""
    name = working
    if "." in working and "/" in working:
        registry_url, name = working.split("/", 1)

    if not name:
        raise MissingImageName(image)

    return ContainerRecord(
        full_path=image,
        registry_url=registry_url,
        name=name,
        version=version,
    )
