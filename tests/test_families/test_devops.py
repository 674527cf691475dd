"""Tests for kubectl, docker-compose and ssh-keygen composition."""

from __future__ import annotations


class TestKubectl:
    def test_get_defaults(self, run_family) -> None:
        assert run_family("kubectl") == "kubectl get pods"

    def test_describe_named_resource_in_namespace(self, run_family) -> None:
        command = run_family("kubectl", action="describe", resource="deployment", name="web", namespace="prod")
        assert command == "kubectl describe deployment web -n prod"

    def test_logs_takes_pod_name_only(self, run_family) -> None:
        command = run_family("kubectl", action="logs", resource="services", name="api-7d9")
        assert command == "kubectl logs api-7d9"

    def test_logs_without_name_uses_placeholder(self, run_family) -> None:
        assert run_family("kubectl", action="logs", namespace="kube-system") == (
            "kubectl logs pod-name -n kube-system"
        )

    def test_blank_resource_falls_back(self, run_family) -> None:
        assert run_family("kubectl", resource=" ") == "kubectl get pods"


class TestSshKeygen:
    def test_default_is_rsa_4096(self, run_family) -> None:
        assert run_family("ssh-keygen") == 'ssh-keygen -t rsa -b 4096 -C "your-email@example.com"'

    def test_ed25519_has_no_bits(self, run_family) -> None:
        command = run_family("ssh-keygen", key_type="ed25519", email="me@host")
        assert command == 'ssh-keygen -t ed25519 -C "me@host"'

    def test_ecdsa_with_output_file(self, run_family) -> None:
        command = run_family("ssh-keygen", key_type="ecdsa", email="me@host", output_file="~/.ssh/id_work")
        assert command == 'ssh-keygen -t ecdsa -b 521 -C "me@host" -f ~/.ssh/id_work'

    def test_unknown_key_type_ignored(self, run_family) -> None:
        assert run_family("ssh-keygen", key_type="dsa", email="x").startswith("ssh-keygen -t rsa -b 4096")


# ---------------------------------------------------------------------------
# docker-compose
# ---------------------------------------------------------------------------


class TestCompose:
    def test_defaults(self, run_family) -> None:
        assert run_family("docker-compose") == "docker-compose up -d"

    def test_attached_up_with_service(self, run_family) -> None:
        assert run_family("docker-compose", detached=False, service="web") == "docker-compose up web"

    def test_detached_only_applies_to_up(self, run_family) -> None:
        assert run_family("docker-compose", action="down", detached=True) == "docker-compose down"
        assert run_family("docker-compose", action="build", service="api") == "docker-compose build api"

    def test_logs_tail(self, run_family) -> None:
        assert run_family("docker-compose", action="logs", service="db") == "docker-compose logs --tail=50 db"

    def test_logs_without_lines(self, run_family) -> None:
        assert run_family("docker-compose", action="logs", lines="") == "docker-compose logs"
