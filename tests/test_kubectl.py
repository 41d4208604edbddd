"""Tests for the kubectl wrapper."""

import json
import subprocess
from unittest.mock import patch

import pytest

from k8s_lcm.errors import ClusterAccessError
from k8s_lcm.kubectl import Kubectl, home_dir, kubectl_get_json, run_kubectl


def _completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(args=["kubectl"], returncode=returncode, stdout=stdout, stderr=stderr)


NAMESPACES = {"items": [{"metadata": {"name": "default"}}, {"metadata": {"name": "kube-system"}}]}
PODS = {"items": [{"metadata": {"name": "web"}, "spec": {"containers": [{"image": "nginx"}]}}]}


def test_run_kubectl_passes_kubeconfig():
    """--kubeconfig goes before the kubectl subcommand."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed()) as run:
        run_kubectl(["get", "pods"], kubeconfig="/tmp/kc")
    assert run.call_args[0][0] == ["kubectl", "--kubeconfig", "/tmp/kc", "get", "pods"]
    assert run.call_args[1]["capture_output"] is True


def test_get_json_namespaced_args():
    """A namespace is passed with -n."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed(json.dumps(PODS))) as run:
        assert kubectl_get_json("pods", namespace="app") == PODS
    assert run.call_args[0][0] == ["kubectl", "get", "pods", "-o", "json", "-n", "app"]


def test_get_json_all_namespaces_args():
    """all_ns asks kubectl for every namespace with -A."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed(json.dumps(PODS))) as run:
        kubectl_get_json("pods", all_ns=True)
    assert run.call_args[0][0] == ["kubectl", "get", "pods", "-o", "json", "-A"]


def test_get_json_nonzero_exit_raises():
    """A failing kubectl call surfaces stderr in a ClusterAccessError."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed(returncode=1, stderr="Forbidden")):
        with pytest.raises(ClusterAccessError, match="Forbidden"):
            kubectl_get_json("namespaces")


def test_get_json_invalid_json_raises():
    """Output that is not JSON is an access error, not an empty result."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed("not json")):
        with pytest.raises(ClusterAccessError):
            kubectl_get_json("namespaces")


def test_get_json_empty_output_raises():
    """Empty output is an access error."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed("")):
        with pytest.raises(ClusterAccessError):
            kubectl_get_json("namespaces")


def test_missing_kubectl_raises():
    """No kubectl binary on PATH is an access error."""
    with patch("k8s_lcm.kubectl.subprocess.run", side_effect=FileNotFoundError("kubectl")):
        with pytest.raises(ClusterAccessError, match="not found"):
            kubectl_get_json("namespaces")


def test_timeout_raises():
    """A kubectl timeout is an access error."""
    with patch("k8s_lcm.kubectl.subprocess.run", side_effect=subprocess.TimeoutExpired("kubectl", 60)):
        with pytest.raises(ClusterAccessError, match="timed out"):
            kubectl_get_json("pods", namespace="app")


def test_list_namespaces():
    """Namespace names come from items[].metadata.name."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed(json.dumps(NAMESPACES))):
        assert Kubectl().list_namespaces() == ["default", "kube-system"]


def test_list_pods():
    """Pods are returned as kubectl's item dicts."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed(json.dumps(PODS))) as run:
        assert Kubectl().list_pods("app") == PODS["items"]
    assert run.call_args[0][0][-2:] == ["-n", "app"]


def test_list_pods_empty_namespace_means_all():
    """An empty namespace lists pods across all namespaces, never the context default."""
    with patch("k8s_lcm.kubectl.subprocess.run", return_value=_completed(json.dumps(PODS))) as run:
        Kubectl().list_pods("")
    cmd = run.call_args[0][0]
    assert cmd[-1] == "-A"
    assert "-n" not in cmd


def test_local_uses_home_kubeconfig(monkeypatch):
    """--local reads ~/.kube/config."""
    monkeypatch.setenv("HOME", "/home/me")
    assert Kubectl(local=True).kubeconfig == "/home/me/.kube/config"


def test_home_dir_falls_back_to_userprofile(monkeypatch):
    """Without HOME (Windows) USERPROFILE is the home directory."""
    monkeypatch.delenv("HOME", raising=False)
    monkeypatch.setenv("USERPROFILE", "C:/Users/me")
    assert home_dir() == "C:/Users/me"


def test_explicit_kubeconfig_wins(monkeypatch):
    """An explicit kubeconfig overrides --local."""
    monkeypatch.setenv("HOME", "/home/me")
    assert Kubectl(local=True, kubeconfig="/etc/kc").kubeconfig == "/etc/kc"


def test_in_cluster_has_no_kubeconfig():
    """Without --local kubectl picks its own (in-cluster) config."""
    assert Kubectl().kubeconfig is None
