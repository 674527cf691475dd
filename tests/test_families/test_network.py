"""Tests for ss/netstat, ip/ifconfig, curl/wget and rsync composition."""

from __future__ import annotations

import pytest

from cmdsheet.families import get_family


# ---------------------------------------------------------------------------
# ss / netstat
# ---------------------------------------------------------------------------


class TestSocket:
    def test_ss_defaults_keep_each_flag_hyphenated(self, run_family) -> None:
        assert run_family("socket") == "ss -l-n-p-t"

    def test_no_protocol_falls_back_to_tcp(self, run_family) -> None:
        command = run_family("socket", tool="ss", tcp=False, udp=False, listening=True)
        assert "t" in command.split()[1]

    def test_fallback_applies_in_normalize(self) -> None:
        family = get_family("socket")
        values = family.normalize({"tcp": False, "udp": False})
        assert values["tcp"] is True
        assert values["udp"] is False

    def test_udp_alone_does_not_add_tcp(self, run_family) -> None:
        assert run_family("socket", tcp=False, udp=True) == "ss -l-n-p-u"

    def test_netstat_bundles_flags(self, run_family) -> None:
        assert run_family("socket", tool="netstat", udp=True) == "netstat -lnptu"

    def test_netstat_all_drops_listening(self, run_family) -> None:
        command = run_family("socket", tool="netstat", all=True, process=False)
        assert command == "netstat -ant"

    def test_netstat_fallback_even_with_all(self, run_family) -> None:
        command = run_family("socket", tool="netstat", all=True, tcp=False, udp=False)
        assert command == "netstat -anpt"


# ---------------------------------------------------------------------------
# ip / ifconfig
# ---------------------------------------------------------------------------


class TestLink:
    @pytest.mark.parametrize(
        "action, expected",
        [
            ("addr_show", "sudo ip addr show eth0"),
            ("route_show", "ip route show"),
            ("link_up", "sudo ip link set dev eth0 up"),
            ("link_down", "sudo ip link set dev eth0 down"),
        ],
    )
    def test_ip_actions(self, run_family, action: str, expected: str) -> None:
        assert run_family("link", action=action) == expected

    @pytest.mark.parametrize(
        "action, expected",
        [
            ("addr_show", "ifconfig wlan0"),
            ("route_show", "route -n"),
            ("link_up", "sudo ifconfig wlan0 up"),
            ("link_down", "sudo ifconfig wlan0 down"),
        ],
    )
    def test_ifconfig_actions(self, run_family, action: str, expected: str) -> None:
        assert run_family("link", tool="ifconfig", action=action, interface="wlan0") == expected

    def test_ip_addr_add(self, run_family) -> None:
        command = run_family("link", action="addr_add", address="10.0.0.5")
        assert command == "sudo ip addr add 10.0.0.5/24 dev eth0"

    def test_ifconfig_addr_add(self, run_family) -> None:
        command = run_family("link", tool="ifconfig", action="addr_add", address="10.0.0.5")
        assert command == "sudo ifconfig eth0 10.0.0.5 netmask 255.255.255.0"

    def test_addr_add_without_address_shows_instead(self, run_family) -> None:
        assert run_family("link", action="addr_add") == "ip addr show"
        assert run_family("link", tool="ifconfig", action="addr_add") == "ifconfig"

    def test_blank_interface_falls_back(self, run_family) -> None:
        assert run_family("link", interface="") == "sudo ip addr show eth0"


# ---------------------------------------------------------------------------
# curl / wget
# ---------------------------------------------------------------------------


class TestTransfer:
    def test_plain_get_is_silent(self, run_family) -> None:
        assert run_family("transfer") == "curl -s https://api.example.com/data"

    def test_post_with_header_and_body(self, run_family) -> None:
        command = run_family("transfer", method="POST", data='{"a": 1}')
        assert command == (
            "curl https://api.example.com/data -X POST "
            "-H 'Content-Type: application/json' -d '{\"a\": 1}'"
        )

    def test_body_ignored_for_delete(self, run_family) -> None:
        command = run_family("transfer", method="DELETE", header="", data="x")
        assert command == "curl https://api.example.com/data -X DELETE"

    def test_get_to_file(self, run_family) -> None:
        command = run_family("transfer", header="", output_file="out.json")
        assert command == "curl https://api.example.com/data -o out.json"

    def test_single_quotes_escaped(self, run_family) -> None:
        command = run_family("transfer", method="PUT", header="", data="it's")
        assert command.endswith("-d 'it\\'s'")

    def test_wget_all_options(self, run_family) -> None:
        command = run_family(
            "transfer", tool="wget", recursive=True, limit_rate="200k",
            output_file="site.html", url="http://example.org",
        )
        assert command == "wget -r -l 10 --limit-rate=200k -O site.html http://example.org"

    def test_blank_url_falls_back(self, run_family) -> None:
        assert run_family("transfer", tool="wget", url="") == "wget http://example.com"


# ---------------------------------------------------------------------------
# rsync
# ---------------------------------------------------------------------------


class TestRsync:
    def test_push_defaults(self, run_family) -> None:
        assert run_family("rsync") == (
            "sudo rsync -e ssh -az --progress /home/user/data/ remote_user@192.168.1.100:/backup/"
        )

    def test_pull(self, run_family) -> None:
        command = run_family("rsync", mode="pull", progress=False, verbose=True)
        assert command == "sudo rsync -e ssh -avz remote_user@192.168.1.100:/home/user/data/ /backup/"

    def test_local_relative_paths_without_sudo(self, run_family) -> None:
        command = run_family("rsync", mode="local", source="src/", destination="dest/", progress=False)
        assert command == "rsync -az src/ dest/"

    def test_local_absolute_path_uses_sudo(self, run_family) -> None:
        command = run_family("rsync", mode="local", source="src/", progress=False)
        assert command == "sudo rsync -az src/ /backup/"

    def test_no_archive_uses_recursive(self, run_family) -> None:
        command = run_family("rsync", mode="local", archive=False, delete=True, progress=False,
                             source="a/", destination="b/")
        assert command == "rsync -rz --delete a/ b/"

    def test_blank_remote_falls_back(self, run_family) -> None:
        command = run_family("rsync", remote_user="", remote_host="", progress=False)
        assert command.endswith("user@host:/backup/")
