"""
Kubectl invocation and Kubernetes resource JSON helpers.

All cluster access goes through subprocess kubectl calls. This module
provides a small wrapper, a JSON fetch helper that fails loudly, and the
Kubectl client used by the inventory to list namespaces and pods.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from typing import Optional, Protocol

from .config import KUBECTL_TIMEOUT
from .errors import ClusterAccessError

logger = logging.getLogger(__name__)


class ClusterClient(Protocol):
    """What the inventory needs from the cluster."""

    def list_namespaces(self) -> list[str]:
        ...

    def list_pods(self, namespace: str) -> list[dict]:
        ...


def run_kubectl(
    args: list[str],
    kubeconfig: Optional[str] = None,
) -> subprocess.CompletedProcess:
    """
    Run kubectl with the given args.

    Args:
        args: List of arguments (e.g. ["get", "pods", "-n", "default", "-o", "json"]).
        kubeconfig: Optional kubeconfig path passed as --kubeconfig.

    Returns:
        CompletedProcess with returncode, stdout, stderr. Times out after
        KUBECTL_TIMEOUT seconds.
    """
    cmd = ["kubectl"]
    if kubeconfig:
        cmd.extend(["--kubeconfig", kubeconfig])
    cmd.extend(args)
    logger.debug("Running %s", " ".join(cmd))
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        timeout=KUBECTL_TIMEOUT,
    )


def kubectl_get_json(
    kind: str,
    namespace: Optional[str] = None,
    kubeconfig: Optional[str] = None,
    all_ns: bool = False,
) -> dict:
    """
    Get a list of resources as JSON.

    Args:
        kind: Resource kind (plural), e.g. "pods", "namespaces".
        namespace: Namespace for namespaced kinds; omitted for cluster-scoped ones.
        kubeconfig: Optional kubeconfig path.
        all_ns: Pass -A instead of -n (namespaced kinds across all namespaces).

    Returns:
        Parsed JSON dict (List-style with "items").

    Raises:
        ClusterAccessError: kubectl is missing, timed out, exited non-zero,
            or printed something that is not JSON.
    """
    args = ["get", kind, "-o", "json"]
    if all_ns:
        args.append("-A")
    elif namespace:
        args.extend(["-n", namespace])
    try:
        result = run_kubectl(args, kubeconfig=kubeconfig)
    except FileNotFoundError as exc:
        raise ClusterAccessError("kubectl not found on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise ClusterAccessError(f"kubectl get {kind} timed out") from exc
    if result.returncode != 0:
        reason = (result.stderr or "").strip() or f"kubectl exited {result.returncode}"
        raise ClusterAccessError(f"Could not fetch {kind}: {reason}")
    if not result.stdout:
        raise ClusterAccessError(f"Could not fetch {kind}: empty response")
    try:
        return json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise ClusterAccessError(f"Could not fetch {kind}: invalid JSON from kubectl") from exc


def home_dir() -> str:
    """Home directory from HOME, or USERPROFILE on Windows."""
    return os.environ.get("HOME") or os.environ.get("USERPROFILE", "")


class Kubectl:
    """
    ClusterClient backed by kubectl.

    With local=True the user's ~/.kube/config is used; otherwise kubectl
    resolves its config itself (in-cluster service account when running
    inside a pod). An explicit kubeconfig path always wins.
    """

    def __init__(self, local: bool = False, kubeconfig: Optional[str] = None) -> None:
        if kubeconfig:
            self.kubeconfig: Optional[str] = kubeconfig
        elif local:
            self.kubeconfig = os.path.join(home_dir(), ".kube", "config")
        else:
            self.kubeconfig = None
        if self.kubeconfig:
            logger.debug("Accessing Kubernetes with kubeconfig %s", self.kubeconfig)
        else:
            logger.debug("Accessing Kubernetes inside the cluster")

    def list_namespaces(self) -> list[str]:
        """Names of every namespace in the cluster."""
        obj = kubectl_get_json("namespaces", kubeconfig=self.kubeconfig)
        names = []
        for item in obj.get("items", []):
            name = item.get("metadata", {}).get("name")
            if name:
                names.append(name)
        return names

    def list_pods(self, namespace: str) -> list[dict]:
        """Pod objects in namespace, as returned by kubectl. "" means every namespace."""
        obj = kubectl_get_json(
            "pods",
            namespace=namespace or None,
            kubeconfig=self.kubeconfig,
            all_ns=not namespace,
        )
        return obj.get("items", [])
