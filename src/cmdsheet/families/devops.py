"""Families for operations tooling: ``kubectl``, ``docker-compose`` and ``ssh-keygen``."""

from __future__ import annotations

from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily
from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField, Tip


# --- kubectl ---


_KUBECTL_SCHEMA = FamilySchema(
    family=FamilyName.KUBECTL,
    title="kubectl",
    description="Inspect Kubernetes resources and pod logs.",
    fields=[
        EnumField(name="action", label="Command", choices=["get", "describe", "logs"], default="get"),
        TextField(name="resource", label="Resource", default="pods", fallback="pods"),
        TextField(name="name", label="Name"),
        TextField(name="namespace", label="Namespace"),
    ],
)


class KubectlFamily(CommandFamily):
    """``get``/``describe`` take a resource kind; ``logs`` only takes a pod name."""

    @property
    def schema(self) -> FamilySchema:
        return _KUBECTL_SCHEMA

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        action = values["action"]
        if action == "logs":
            tokens = ["kubectl", "logs", values["name"] or "pod-name"]
        else:
            tokens = ["kubectl", action, values["resource"]]
            if values["name"]:
                tokens.append(values["name"])
        if values["namespace"]:
            tokens.extend(["-n", values["namespace"]])
        return tokens


# --- docker-compose ---


_COMPOSE_SCHEMA = FamilySchema(
    family=FamilyName.COMPOSE,
    title="docker-compose",
    description="Start, stop, build and tail Compose services.",
    fields=[
        EnumField(name="action", label="Command", choices=["up", "down", "build", "logs"], default="up"),
        BooleanField(name="detached", label="Detached (-d, up only)", default=True),
        TextField(name="service", label="Service", description="Blank means every service"),
        TextField(name="lines", label="Lines (logs --tail)", default="50"),
    ],
)


class ComposeFamily(CommandFamily):
    """``docker-compose <action> [options] [service]``; the service always comes last."""

    @property
    def schema(self) -> FamilySchema:
        return _COMPOSE_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "action": {
                "up": Tip(description="Create and start the services.", example="docker-compose up -d web"),
                "down": Tip(description="Stop and remove containers and networks."),
                "build": Tip(description="Build or rebuild service images.", example="docker-compose build api"),
                "logs": Tip(description="Show recent service output.", example="docker-compose logs --tail=50 db"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        action = values["action"]
        tokens = ["docker-compose", action]
        if action == "up" and values["detached"]:
            tokens.append("-d")
        elif action == "logs" and values["lines"]:
            tokens.append(f"--tail={values['lines']}")
        if values["service"]:
            tokens.append(values["service"])
        return tokens


# --- ssh-keygen ---


KEY_SIZES = {"rsa": "4096", "ed25519": "", "ecdsa": "521"}

_SSH_KEYGEN_SCHEMA = FamilySchema(
    family=FamilyName.SSH_KEYGEN,
    title="ssh-keygen",
    description="Generate SSH key pairs.",
    fields=[
        EnumField(name="key_type", label="Key type", choices=list(KEY_SIZES), default="rsa"),
        TextField(name="email", label="Comment (email)", fallback="your-email@example.com"),
        TextField(name="output_file", label="Key file (-f)", description="e.g. ~/.ssh/id_work"),
    ],
)


class SshKeygenFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _SSH_KEYGEN_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "key_type": {
                "rsa": Tip(
                    description="RSA keys are the traditional and widely supported SSH key type. Good compatibility.",
                    example='ssh-keygen -t rsa -b 4096 -C "you@example.com"',
                ),
                "ed25519": Tip(
                    description="ED25519 keys are modern, more secure, and recommended for most cases.",
                    example='ssh-keygen -t ed25519 -C "you@example.com"',
                ),
                "ecdsa": Tip(
                    description="ECDSA keys offer good performance, but compatibility may vary depending on systems.",
                    example='ssh-keygen -t ecdsa -b 521 -C "you@example.com"',
                ),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        key_type = values["key_type"]
        tokens = ["ssh-keygen", "-t", key_type]
        if KEY_SIZES[key_type]:
            tokens.extend(["-b", KEY_SIZES[key_type]])
        tokens.extend(["-C", f'"{values["email"]}"'])
        if values["output_file"]:
            tokens.extend(["-f", values["output_file"]])
        return tokens
