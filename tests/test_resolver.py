"""Tests for operating mode resolution."""

from unittest.mock import MagicMock, patch

import pytest
from structlog.testing import capture_logs

from trident_connect.any.exceptions import (
    TridentCLINotFoundError,
    TridentCommandError,
    TridentDecodeError,
    TridentPodNotFoundError,
)
from trident_connect.config.session import POD_SERVER, SessionConfig
from trident_connect.resolver import ModeResolver
from trident_connect.types import OperatingMode


def _resolver(cli="kubectl", namespace="trident", pod="trident-7d8f9c6b5-x2x7q"):
    """Build a resolver whose lookups are mocks."""
    detect_cli = MagicMock(return_value=cli)
    current_namespace = MagicMock(return_value=namespace)
    locate_pod = MagicMock(return_value=pod)
    if isinstance(pod, Exception):
        locate_pod = MagicMock(side_effect=pod)
    return ModeResolver(detect_cli, current_namespace, locate_pod), detect_cli, current_namespace, locate_pod


class TestDirectMode:
    """Test that an explicit server short-circuits discovery."""

    @patch("subprocess.Popen")
    @patch("subprocess.run")
    def test_server_flag(self, mock_run, mock_popen):
        """Test that --server yields direct mode without spawning anything."""
        resolver, detect_cli, current_namespace, locate_pod = _resolver()

        connection = resolver.resolve(SessionConfig(server="10.0.0.1:8000"), "get", environ={})

        assert connection.mode == OperatingMode.DIRECT
        assert connection.server == "10.0.0.1:8000"
        detect_cli.assert_not_called()
        current_namespace.assert_not_called()
        locate_pod.assert_not_called()
        mock_run.assert_not_called()
        mock_popen.assert_not_called()

    @patch("subprocess.Popen")
    @patch("subprocess.run")
    def test_environment_server(self, mock_run, mock_popen):
        """Test that TRIDENT_SERVER yields direct mode without spawning anything."""
        resolver, detect_cli, _, _ = _resolver()

        connection = resolver.resolve(SessionConfig(), "get", environ={"TRIDENT_SERVER": "trident.example:8000"})

        assert connection.mode == OperatingMode.DIRECT
        assert connection.server == "trident.example:8000"
        detect_cli.assert_not_called()
        mock_run.assert_not_called()
        mock_popen.assert_not_called()

    def test_flag_beats_environment(self):
        """Test that the command line takes precedence over the environment."""
        resolver, _, _, _ = _resolver()

        connection = resolver.resolve(
            SessionConfig(server="10.0.0.1:8000"), "get", environ={"TRIDENT_SERVER": "trident.example:8000"}
        )

        assert connection.server == "10.0.0.1:8000"

    def test_reads_os_environ_by_default(self, monkeypatch):
        """Test that os.environ is consulted when no environment is passed."""
        monkeypatch.setenv("TRIDENT_SERVER", "192.168.1.5:8000")
        resolver, detect_cli, _, _ = _resolver()

        connection = resolver.resolve(SessionConfig(), "version")

        assert connection.mode == OperatingMode.DIRECT
        assert connection.server == "192.168.1.5:8000"
        detect_cli.assert_not_called()

    def test_blank_environment_server_ignored(self):
        """Test that an empty TRIDENT_SERVER falls through to discovery."""
        resolver, detect_cli, _, _ = _resolver()

        connection = resolver.resolve(SessionConfig(), "get", environ={"TRIDENT_SERVER": "  "})

        assert connection.mode == OperatingMode.TUNNEL
        detect_cli.assert_called_once()


class TestTunnelMode:
    """Test discovery of the Trident pod."""

    def test_single_pod(self):
        """Test that one matching pod yields tunnel mode on the pod's loopback server."""
        resolver, detect_cli, current_namespace, locate_pod = _resolver(cli="oc")

        connection = resolver.resolve(SessionConfig(), "get", environ={})

        assert connection.mode == OperatingMode.TUNNEL
        assert connection.pod_name == "trident-7d8f9c6b5-x2x7q"
        assert connection.namespace == "trident"
        assert connection.server == POD_SERVER == "127.0.0.1:8000"
        assert connection.cli == "oc"
        detect_cli.assert_called_once_with()
        current_namespace.assert_called_once_with("oc")
        locate_pod.assert_called_once_with("oc", "trident")

    def test_explicit_namespace_skips_lookup(self):
        """Test that --namespace is used as given."""
        resolver, _, current_namespace, locate_pod = _resolver()

        connection = resolver.resolve(SessionConfig(namespace="storage"), "get", environ={})

        current_namespace.assert_not_called()
        locate_pod.assert_called_once_with("kubectl", "storage")
        assert connection.namespace == "storage"

    def test_no_cli(self):
        """Test that a missing CLI fails resolution before any lookup."""
        resolver, detect_cli, current_namespace, locate_pod = _resolver()
        detect_cli.side_effect = TridentCLINotFoundError("Could not find the Kubernetes CLI.")

        with pytest.raises(TridentCLINotFoundError):
            resolver.resolve(SessionConfig(), "get", environ={})

        current_namespace.assert_not_called()
        locate_pod.assert_not_called()

    def test_namespace_lookup_failure(self):
        """Test that namespace lookup failures propagate."""
        resolver, _, current_namespace, locate_pod = _resolver()
        current_namespace.side_effect = TridentCommandError("exited with status 1", returncode=1)

        with pytest.raises(TridentCommandError):
            resolver.resolve(SessionConfig(), "logs", environ={})

        locate_pod.assert_not_called()

    def test_multiple_pods(self):
        """Test that an ambiguous pod lookup fails for ordinary commands."""
        resolver, _, _, _ = _resolver(pod=TridentPodNotFoundError("trident"))

        with pytest.raises(TridentPodNotFoundError) as exc_info:
            resolver.resolve(SessionConfig(), "get", environ={})

        assert exc_info.value.namespace == "trident"
        assert "trident namespace" in str(exc_info.value)


class TestLogsMode:
    """Test the degraded mode reserved for the logs command."""

    def test_logs_without_pod(self):
        """Test that logs continues with no pod target."""
        resolver, _, _, _ = _resolver(pod=TridentPodNotFoundError("trident"))

        connection = resolver.resolve(SessionConfig(), "logs", environ={})

        assert connection.mode == OperatingMode.LOGS
        assert connection.pod_name == ""
        assert connection.namespace == "trident"
        assert connection.cli == "kubectl"

    @pytest.mark.parametrize("command_name", ["get", "version", "install", "log", ""])
    def test_only_logs_degrades(self, command_name):
        """Test that no other command gets the logs exception."""
        resolver, _, _, _ = _resolver(pod=TridentPodNotFoundError("trident"))

        with pytest.raises(TridentPodNotFoundError):
            resolver.resolve(SessionConfig(), command_name, environ={})

    def test_logs_with_pod_tunnels(self):
        """Test that logs still tunnels when the pod exists."""
        resolver, _, _, _ = _resolver()

        connection = resolver.resolve(SessionConfig(), "logs", environ={})

        assert connection.mode == OperatingMode.TUNNEL


class TestDebugSummary:
    """Test the debug summary line."""

    def test_summary_logged_when_debug(self):
        """Test that the resolved mode is summarized once in debug."""
        resolver, _, _, _ = _resolver()

        with capture_logs() as logs:
            resolver.resolve(SessionConfig(debug=True), "get", environ={})

        summaries = [e["event"] for e in logs if e["event"].startswith("Operating mode")]
        assert summaries == [
            "Operating mode = tunnel, Trident pod = trident-7d8f9c6b5-x2x7q, Namespace = trident, CLI = kubectl"
        ]

    def test_direct_summary(self):
        """Test the direct mode summary."""
        resolver, _, _, _ = _resolver()

        with capture_logs() as logs:
            resolver.resolve(SessionConfig(server="10.0.0.1:8000", debug=True), "get", environ={})

        assert "Operating mode = direct, Server = 10.0.0.1:8000" in [e["event"] for e in logs]

    def test_no_summary_without_debug(self):
        """Test that nothing is summarized without debug."""
        resolver, _, _, _ = _resolver()

        with capture_logs() as logs:
            resolver.resolve(SessionConfig(), "get", environ={})

        assert not [e for e in logs if e["event"].startswith("Operating mode")]

    def test_no_summary_on_failure(self):
        """Test that a failed resolution reports no mode."""
        resolver, detect_cli, _, _ = _resolver()
        detect_cli.side_effect = TridentCLINotFoundError("Could not find the Kubernetes CLI.")

        with capture_logs() as logs:
            with pytest.raises(TridentCLINotFoundError):
                resolver.resolve(SessionConfig(debug=True), "get", environ={})

        assert not [e for e in logs if e["event"].startswith("Operating mode")]


class TestClusterLookups:
    """Test resolution against stand-in cluster CLIs."""

    def test_nameless_pod_is_a_trident_error(self, fake_bin):
        """Test that malformed pod output surfaces as a decode error."""
        fake_bin("oc", "exit 1")
        fake_bin(
            "kubectl",
            'case "$1 $2" in\n'
            '  "version "*) echo "Client Version: v1.29.0" ;;\n'
            """  "get serviceaccount") echo '{"metadata": {"name": "default", "namespace": "trident"}}' ;;\n"""
            """  "get pod") echo '{"items": [{"metadata": {}}]}' ;;\n"""
            "  *) exit 9 ;;\n"
            "esac",
        )

        with pytest.raises(TridentDecodeError, match="carries no name"):
            ModeResolver().resolve(SessionConfig(), "get", environ={})
