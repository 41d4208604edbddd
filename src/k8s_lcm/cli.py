"""
CLI entry point for k8s-lcm.

Parses options, configures logging, then runs the container inventory
and prints one row per unique image. Run inside the cluster, or with
--local against ~/.kube/config.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from . import __version__
from .config import BOLD, SGR0, log_level
from .errors import ClusterAccessError
from .images import ContainerRecord
from .inventory import get_containers_from_namespaces
from .kubectl import Kubectl

# Shown at the bottom of lcm --help / lcm -h
EPILOG = """
Examples:

  lcm -h                         # Show help (same as --help)
  lcm                            # Inventory all namespaces (in-cluster config)
  lcm --local                    # Inventory all namespaces using ~/.kube/config
  lcm --local -n app -n infra    # Only namespaces app and infra
  lcm --local --verbose          # Also log progress per namespace
  lcm --local --debug            # Debug information, includes verbose
"""


def print_containers(containers: list[ContainerRecord]) -> None:
    """Print a REGISTRY | NAME | VERSION table, sorted by full image path."""
    print()
    print(f"{BOLD}Running container images{SGR0}")
    print("----------------------------------------")
    if not containers:
        print("  (none found)")
        print()
        return
    rows = [
        (c.registry_url or "-", c.name, c.version)
        for c in sorted(containers, key=lambda c: c.full_path)
    ]
    headers = ("REGISTRY", "NAME", "VERSION")
    widths = [max(len(headers[i]), max(len(r[i]) for r in rows)) for i in range(3)]
    fmt = f"  {{0:<{widths[0]}}}  {{1:<{widths[1]}}}  {{2:<{widths[2]}}}"
    print(fmt.format(*headers))
    print(fmt.format(*("-" * w for w in widths)))
    for row in rows:
        print(fmt.format(*row))
    print()


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=EPILOG,
)
@click.version_option(__version__, prog_name="lcm")
@click.option(
    "--local",
    is_flag=True,
    help="Run locally, default expected behavior is to run in the cluster",
)
@click.option(
    "--kubeconfig",
    metavar="PATH",
    help="Use this kubeconfig file (implies running outside the cluster)",
)
@click.option(
    "-n",
    "--namespace",
    "namespaces",
    metavar="NS",
    multiple=True,
    help="Only inventory namespace NS (repeatable); default is all namespaces",
)
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Show more information",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Show debug information, debug includes verbose",
)
def main(
    local: bool,
    kubeconfig: Optional[str],
    namespaces: tuple[str, ...],
    verbose: bool,
    debug: bool,
) -> int:
    """
    Kubernetes platform lifecycle management: list running container images.

    Collects the images of all containers and init containers in the given
    namespaces (or all of them), deduplicates them, and shows registry,
    name and version for each.
    """
    logging.basicConfig(
        stream=sys.stdout,
        level=log_level(verbose=verbose, debug=debug),
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
    logger = logging.getLogger("k8s_lcm")
    logger.info("Running version %s", __version__)

    cluster = Kubectl(local=local, kubeconfig=kubeconfig)
    try:
        containers = get_containers_from_namespaces(cluster, list(namespaces), logger)
    except ClusterAccessError as exc:
        raise click.ClickException(str(exc)) from exc

    print_containers(containers)
    return 0


if __name__ == "__main__":
    sys.exit(main())
