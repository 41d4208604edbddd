"""Exceptions raised by k8s-lcm."""


class LcmError(Exception):
    """Base class for k8s-lcm errors."""


class ClusterAccessError(LcmError):
    """Listing namespaces or pods failed. Fatal for the whole inventory."""


class ImageParseError(LcmError, ValueError):
    """An image reference could not be turned into a ContainerRecord."""

    reason = "Could not parse image"

    def __init__(self, image: str) -> None:
        super().__init__(f"{self.reason}: {image}")
        self.image = image


class UnsupportedPortSyntax(ImageParseError):
    """Image reference names a registry with a non-default port."""

    reason = "We do not support URLs with ports"


class MissingImageName(ImageParseError):
    """Nothing is left for the image name once registry and tag are removed."""

    reason = "Image reference has no name"
