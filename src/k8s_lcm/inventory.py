"""
Container inventory: resolve namespaces, collect images, parse them.

Provides get_containers_from_namespaces() which walks the requested (or
all) namespaces one at a time, merges the images of every container and
init container into one set, and parses each unique reference. A
reference that cannot be parsed is logged and skipped; a cluster access
failure aborts the whole inventory.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from .errors import ImageParseError
from .images import ContainerRecord, parse_image
from .kubectl import ClusterClient

_logger = logging.getLogger(__name__)


def resolve_namespaces(
    cluster: ClusterClient,
    requested: Sequence[str],
    logger: Optional[logging.Logger] = None,
) -> list[str]:
    """
    Namespaces to inventory.

    Args:
        cluster: Client used to list every namespace when none are requested.
        requested: Explicit namespaces; returned as-is without checking they exist.
        logger: Logger to report on; defaults to this module's.

    Returns:
        The requested namespaces, or all namespaces in the cluster.
    """
    log = logger or _logger
    if requested:
        log.info("Get all containers from the namespaces %s", list(requested))
        return list(requested)
    log.debug("No namespaces defined, fetching all namespaces from Kubernetes")
    return cluster.list_namespaces()


def pod_images(pod: dict) -> set[str]:
    """Images of a pod's containers and init containers."""
    spec = pod.get("spec") or {}
    images = set()
    for key in ("containers", "initContainers"):
        for container in spec.get(key) or []:
            image = container.get("image")
            if image:
                images.add(image)
    return images


def collect_images(
    cluster: ClusterClient,
    namespace: str,
    logger: Optional[logging.Logger] = None,
) -> set[str]:
    """Distinct images used by any pod in namespace."""
    log = logger or _logger
    log.info("Fetching containers for namespace %s", namespace)
    images: set[str] = set()
    for pod in cluster.list_pods(namespace):
        images |= pod_images(pod)
    log.debug("Fetched containers in namespace %s: %s", namespace, sorted(images))
    return images


def parse_images(
    images: Iterable[str],
    logger: Optional[logging.Logger] = None,
) -> list[ContainerRecord]:
    """Parse each image, dropping (and logging) the ones that cannot be parsed."""
    log = logger or _logger
    containers = []
    for image in images:
        try:
            containers.append(parse_image(image))
        except ImageParseError as exc:
            log.error("%s", exc)
    return containers


def aggregate(
    cluster: ClusterClient,
    namespaces: Sequence[str],
    logger: Optional[logging.Logger] = None,
) -> list[ContainerRecord]:
    """
    Inventory an already-resolved list of namespaces.

    Images are deduplicated by exact string before parsing, so the same
    reference seen in several pods or namespaces yields one record.
    Order of the result is not meaningful.
    """
    log = logger or _logger
    running: set[str] = set()
    for namespace in namespaces:
        running |= collect_images(cluster, namespace, log)
    return parse_images(running, log)


def get_containers_from_namespaces(
    cluster: ClusterClient,
    namespaces: Sequence[str] = (),
    logger: Optional[logging.Logger] = None,
) -> list[ContainerRecord]:
    """
    Fetch and parse all container and init container images.

    Args:
        cluster: Client to list namespaces and pods with.
        namespaces: Namespaces to inventory; empty means every namespace.
        logger: Logger to report on; defaults to this module's.

    Returns:
        One ContainerRecord per unique, parsable image reference.

    Raises:
        ClusterAccessError: Listing namespaces or pods failed.
    """
    log = logger or _logger
    containers = aggregate(cluster, resolve_namespaces(cluster, namespaces, log), log)
    log.info("Finished fetching all containers")
    return containers
