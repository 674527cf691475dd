"""Networking families: socket inspection, link configuration, transfers and rsync."""

from __future__ import annotations

from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily, escape_single_quotes
from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField, Tip


# --- ss / netstat ---


SOCKET_FLAGS = (
    ("listening", "l"),
    ("all", "a"),
    ("numeric", "n"),
    ("process", "p"),
    ("tcp", "t"),
    ("udp", "u"),
)

_SOCKET_SCHEMA = FamilySchema(
    family=FamilyName.SOCKET,
    title="ss / netstat",
    description="Inspect listening ports and open sockets.",
    fields=[
        EnumField(name="tool", label="Tool", choices=["ss", "netstat"], default="ss"),
        BooleanField(name="listening", label="Listening (-l)", default=True),
        BooleanField(name="all", label="All sockets (-a)"),
        BooleanField(name="numeric", label="Numeric (-n)", default=True),
        BooleanField(name="process", label="Show process (-p)", default=True),
        BooleanField(name="tcp", label="TCP (-t)", default=True),
        BooleanField(name="udp", label="UDP (-u)"),
    ],
)


class SocketFamily(CommandFamily):
    """``ss`` keeps every flag hyphenated (``ss -l-n-p-t``); ``netstat`` bundles
    them under one hyphen (``netstat -lnpt``) and drops ``l`` when ``a`` is set.
    """

    @property
    def schema(self) -> FamilySchema:
        return _SOCKET_SCHEMA

    def normalize(self, values: Mapping[str, Any]) -> dict[str, Any]:
        normalized = super().normalize(values)
        if not normalized["tcp"] and not normalized["udp"]:
            normalized["tcp"] = True
        return normalized

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        letters = [letter for field, letter in SOCKET_FLAGS if values[field]]
        if values["tool"] == "ss":
            flags = sorted({f"-{letter}" for letter in letters})
            return ["ss", "".join(flags)]

        if "a" in letters and "l" in letters:
            letters.remove("l")
        return ["netstat", f"-{''.join(letters)}"]


# --- ip / ifconfig ---


_LINK_SCHEMA = FamilySchema(
    family=FamilyName.LINK,
    title="ip / ifconfig",
    description="Show and configure network interfaces and routes.",
    fields=[
        EnumField(name="tool", label="Tool", choices=["ip", "ifconfig"], default="ip"),
        EnumField(
            name="action",
            label="Action",
            choices=["addr_show", "route_show", "link_up", "link_down", "addr_add"],
            default="addr_show",
        ),
        TextField(name="interface", label="Interface", default="eth0", fallback="eth0"),
        TextField(name="address", label="IP address", description="Added with a /24 mask"),
    ],
)


class LinkFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _LINK_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "action": {
                "addr_show": Tip(description="Show addresses on an interface.", example="ip addr show eth0"),
                "route_show": Tip(
                    description="Show the routing table; ifconfig has no routing verb, so route is used.",
                    example="route -n",
                ),
                "link_up": Tip(description="Bring the interface up.", example="sudo ip link set dev eth0 up"),
                "link_down": Tip(description="Take the interface down.", example="sudo ip link set dev eth0 down"),
                "addr_add": Tip(
                    description="Assign an address with a class-C mask.",
                    example="sudo ip addr add 192.168.1.10/24 dev eth0",
                ),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        iface = values["interface"]
        address = values["address"]
        action = values["action"]
        if values["tool"] == "ip":
            if action == "addr_show":
                return ["sudo", "ip", "addr", "show", iface]
            if action == "route_show":
                return ["ip", "route", "show"]
            if action in ("link_up", "link_down"):
                return ["sudo", "ip", "link", "set", "dev", iface, action[len("link_"):]]
            if address:
                return ["sudo", "ip", "addr", "add", f"{address}/24", "dev", iface]
            return ["ip", "addr", "show"]

        if action == "addr_show":
            return ["ifconfig", iface]
        if action == "route_show":
            return ["route", "-n"]
        if action in ("link_up", "link_down"):
            return ["sudo", "ifconfig", iface, action[len("link_"):]]
        if address:
            return ["sudo", "ifconfig", iface, address, "netmask", "255.255.255.0"]
        return ["ifconfig"]


# --- curl / wget ---


_TRANSFER_SCHEMA = FamilySchema(
    family=FamilyName.TRANSFER,
    title="curl / wget",
    description="Call HTTP APIs or download files.",
    fields=[
        EnumField(name="tool", label="Tool", choices=["curl", "wget"], default="curl"),
        TextField(name="url", label="URL", default="https://api.example.com/data", fallback="http://example.com"),
        EnumField(name="method", label="Method (curl)", choices=["GET", "POST", "PUT", "DELETE"], default="GET"),
        TextField(name="header", label="Header (curl)", default="Content-Type: application/json"),
        TextField(name="data", label="Body (curl POST/PUT)"),
        TextField(name="output_file", label="Save to file"),
        BooleanField(name="recursive", label="Recursive (wget)"),
        TextField(name="limit_rate", label="Rate limit (wget)", description="e.g. 200k"),
    ],
)


class TransferFamily(CommandFamily):
    """``curl`` for API calls and ``wget`` for downloads.

    A plain GET with no output file is shown as ``curl -s <url>`` so the
    progress meter does not clutter the terminal.
    """

    @property
    def schema(self) -> FamilySchema:
        return _TRANSFER_SCHEMA

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        url = values["url"]
        output_file = values["output_file"]
        if values["tool"] == "wget":
            tokens = ["wget"]
            if values["recursive"]:
                tokens.extend(["-r", "-l", "10"])
            if values["limit_rate"]:
                tokens.append(f"--limit-rate={values['limit_rate']}")
            if output_file:
                tokens.extend(["-O", output_file])
            tokens.append(url)
            return tokens

        method = values["method"]
        if method == "GET" and not output_file:
            return ["curl", "-s", url]

        tokens = ["curl", url]
        if method != "GET":
            tokens.extend(["-X", method])
        if values["header"]:
            tokens.extend(["-H", f"'{escape_single_quotes(values['header'])}'"])
        if values["data"] and method in ("POST", "PUT"):
            tokens.extend(["-d", f"'{escape_single_quotes(values['data'])}'"])
        if output_file:
            tokens.extend(["-o", output_file])
        return tokens


# --- rsync ---


_RSYNC_SCHEMA = FamilySchema(
    family=FamilyName.RSYNC,
    title="rsync",
    description="Synchronise directories locally or over SSH.",
    fields=[
        EnumField(name="mode", label="Direction", choices=["push", "pull", "local"], default="push"),
        TextField(name="source", label="Source", default="/home/user/data/", fallback="/path/to/source/"),
        TextField(name="destination", label="Destination", default="/backup/", fallback="/path/to/destination/"),
        TextField(name="remote_user", label="Remote user", default="remote_user", fallback="user"),
        TextField(name="remote_host", label="Remote host", default="192.168.1.100", fallback="host"),
        BooleanField(name="archive", label="Archive mode (-a)", default=True),
        BooleanField(name="verbose", label="Verbose (-v)"),
        BooleanField(name="progress", label="Show progress", default=True),
        BooleanField(name="delete", label="Delete extraneous files"),
    ],
)


class RsyncFamily(CommandFamily):
    """``rsync`` with ``-a`` (or ``-r`` without archive mode) bundled with ``v`` and ``z``.

    ``sudo`` is prepended for remote transfers and whenever a path is absolute.
    """

    @property
    def schema(self) -> FamilySchema:
        return _RSYNC_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "mode": {
                "push": Tip(description="Copy local files to a remote host.", example="rsync -e ssh -avz data/ user@host:/backup/"),
                "pull": Tip(description="Copy files from a remote host.", example="rsync -e ssh -avz user@host:/var/log/ logs/"),
                "local": Tip(description="Mirror two local directories.", example="rsync -avz src/ dest/"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        mode = values["mode"]
        source = values["source"]
        destination = values["destination"]
        remote = f"{values['remote_user']}@{values['remote_host']}"

        tokens = []
        if mode != "local" or source.startswith("/") or destination.startswith("/"):
            tokens.append("sudo")
        tokens.append("rsync")
        if mode != "local":
            tokens.extend(["-e", "ssh"])
        bundle = "a" if values["archive"] else "r"
        if values["verbose"]:
            bundle += "v"
        tokens.append(f"-{bundle}z")
        if values["delete"]:
            tokens.append("--delete")
        if values["progress"]:
            tokens.append("--progress")

        if mode == "push":
            tokens.extend([source, f"{remote}:{destination}"])
        elif mode == "pull":
            tokens.extend([f"{remote}:{source}", destination])
        else:
            tokens.extend([source, destination])
        return tokens
