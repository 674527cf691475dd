"""System administration families: process monitors, cron, journalctl, permissions, users and host info."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily
from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField, Tip


# --- top / htop ---


DEFAULT_DELAY_SECONDS = "3"
MAX_DELAY_SECONDS = Decimal(86400)

_PROCESS_SCHEMA = FamilySchema(
    family=FamilyName.PROCESS,
    title="top / htop",
    description="Interactive process monitors.",
    fields=[
        EnumField(name="tool", label="Tool", choices=["top", "htop"], default="htop"),
        EnumField(
            name="action",
            label="View",
            choices=["default", "user", "cpu_cores", "delay"],
            default="default",
        ),
        TextField(name="user", label="User", default="www-data", fallback="root"),
        TextField(
            name="delay_seconds",
            label="Refresh delay (seconds)",
            default="5",
            fallback=DEFAULT_DELAY_SECONDS,
        ),
    ],
)


def parse_seconds(text: str) -> Decimal | None:
    """Return *text* as a positive :class:`~decimal.Decimal` of at most a day, or ``None``."""
    try:
        seconds = Decimal(text)
    except InvalidOperation:
        return None
    if not seconds.is_finite() or seconds <= 0 or seconds > MAX_DELAY_SECONDS:
        return None
    return seconds


def seconds_to_ticks(seconds: Decimal) -> int:
    """Convert seconds to htop's tenths-of-a-second ticks, rounding half up.

    Delays shorter than half a tick give ``1``, htop's smallest delay.
    """
    return max(1, int((seconds * 10).quantize(Decimal(1), rounding=ROUND_HALF_UP)))


class ProcessFamily(CommandFamily):
    """The same view maps to different flags per tool.

    Thread view is ``-H`` for top and ``-t`` for htop; the delay is in
    seconds for top and in tenths of a second for htop.
    """

    @property
    def schema(self) -> FamilySchema:
        return _PROCESS_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "action": {
                "default": Tip(description="Start with the default view."),
                "user": Tip(description="Only processes owned by one user.", example="htop -u www-data"),
                "cpu_cores": Tip(description="Threads in top, tree view in htop.", example="top -H"),
                "delay": Tip(description="Change the refresh interval.", example="htop -d 50"),
            },
        }

    def normalize(self, values: Mapping[str, Any]) -> dict[str, Any]:
        normalized = super().normalize(values)
        if parse_seconds(normalized["delay_seconds"]) is None:
            normalized["delay_seconds"] = DEFAULT_DELAY_SECONDS
        return normalized

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        tool = values["tool"]
        action = values["action"]
        if action == "user":
            return [tool, "-u", values["user"]]
        if action == "cpu_cores":
            return [tool, "-H" if tool == "top" else "-t"]
        if action == "delay":
            delay = values["delay_seconds"]
            if tool == "htop":
                delay = str(seconds_to_ticks(Decimal(delay)))
            return [tool, "-d", delay]
        return [tool]


# --- cron ---


CRON_PRESETS: dict[str, tuple[str, Tip]] = {
    "every-minute": (
        "* * * * *",
        Tip(description="Runs every minute.", example="*/1 * * * * /usr/bin/php /var/www/artisan schedule:run"),
    ),
    "every-5-min": (
        "*/5 * * * *",
        Tip(description="Runs every 5 minutes.", example="*/5 * * * * curl https://yourapi.com/ping"),
    ),
    "hourly": (
        "0 * * * *",
        Tip(description="Runs at the start of every hour.", example="0 * * * * systemctl restart nginx"),
    ),
    "daily": (
        "0 0 * * *",
        Tip(description="Runs every day at midnight.", example="0 0 * * * backup.sh"),
    ),
    "weekly": (
        "0 0 * * 0",
        Tip(description="Runs every Sunday at midnight.", example="0 0 * * 0 certbot renew --quiet"),
    ),
    "monthly": (
        "0 0 1 * *",
        Tip(description="Runs on the 1st day of every month.", example="0 0 1 * * logrotate /etc/logrotate.conf"),
    ),
    "yearly": (
        "0 0 1 1 *",
        Tip(description="Runs every January 1st at midnight.", example="0 0 1 1 * echo 'Happy New Year!'"),
    ),
    "reboot": (
        "@reboot",
        Tip(description="Runs once at system startup.", example="@reboot docker start my_container"),
    ),
}

_CRON_SCHEMA = FamilySchema(
    family=FamilyName.CRON,
    title="cron",
    description="Crontab lines for common schedules.",
    fields=[
        EnumField(name="interval", label="Schedule", choices=list(CRON_PRESETS), default="daily"),
        TextField(name="command", label="Command", fallback="/path/to/script.sh"),
    ],
)


class CronFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _CRON_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {"interval": {name: tip for name, (_, tip) in CRON_PRESETS.items()}}

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        schedule, _ = CRON_PRESETS[values["interval"]]
        return [schedule, values["command"]]


# --- journalctl ---


_JOURNALCTL_SCHEMA = FamilySchema(
    family=FamilyName.JOURNALCTL,
    title="journalctl",
    description="Query the systemd journal.",
    fields=[
        EnumField(
            name="filter",
            label="Filter by",
            choices=["service", "time", "boot", "priority"],
            default="service",
        ),
        TextField(name="service", label="Unit", default="nginx.service", fallback="sshd.service"),
        TextField(name="since", label="Since", default="today", fallback="1h"),
        TextField(name="boot_offset", label="Boot offset", default="0", fallback="0"),
        EnumField(
            name="priority",
            label="Max priority",
            choices=[str(level) for level in range(8)],
            default="3",
        ),
        BooleanField(name="follow", label="Follow (-f)"),
        BooleanField(name="reverse", label="Newest first (-r)"),
        EnumField(
            name="output",
            label="Output format",
            choices=["short", "short-iso", "verbose", "json", "export"],
            default="short",
        ),
    ],
)


class JournalctlFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _JOURNALCTL_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "priority": {
                "0": Tip(description="emerg"),
                "1": Tip(description="alert"),
                "2": Tip(description="crit"),
                "3": Tip(description="err"),
                "4": Tip(description="warning"),
                "5": Tip(description="notice"),
                "6": Tip(description="info"),
                "7": Tip(description="debug"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        tokens = ["journalctl"]
        selected = values["filter"]
        if selected == "service":
            tokens.extend(["-u", values["service"]])
        elif selected == "time":
            tokens.extend(["-S", f'"{values["since"]}"'])
        elif selected == "boot":
            tokens.extend(["-b", values["boot_offset"]])
        else:
            tokens.extend(["-p", values["priority"]])

        if values["follow"]:
            tokens.append("-f")
        if values["reverse"]:
            tokens.append("-r")
        if values["output"] != "short":
            tokens.extend(["-o", values["output"]])
        return tokens


# --- chmod ---


PERMISSION_DIGITS = {
    "7": ("rwx", "Read, write and execute"),
    "6": ("rw-", "Read and write"),
    "5": ("r-x", "Read and execute"),
    "4": ("r--", "Read only"),
    "3": ("-wx", "Write and execute"),
    "2": ("-w-", "Write only"),
    "1": ("--x", "Execute only"),
    "0": ("---", "No permissions"),
}

_DIGIT_CHOICES = sorted(PERMISSION_DIGITS)

_CHMOD_SCHEMA = FamilySchema(
    family=FamilyName.CHMOD,
    title="chmod",
    description="Octal permission modes for owner, group and others.",
    fields=[
        EnumField(name="owner", label="Owner", choices=_DIGIT_CHOICES, default="7"),
        EnumField(name="group", label="Group", choices=_DIGIT_CHOICES, default="5"),
        EnumField(name="other", label="Others", choices=_DIGIT_CHOICES, default="5"),
        BooleanField(name="recursive", label="Recursive (-R)"),
        TextField(name="target", label="File or folder", fallback="<file-or-folder>"),
    ],
)


class ChmodFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _CHMOD_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        digits = {
            digit: Tip(description=f"{meaning} ({symbolic})")
            for digit, (symbolic, meaning) in PERMISSION_DIGITS.items()
        }
        return {"owner": digits, "group": digits, "other": digits}

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        tokens = ["chmod"]
        if values["recursive"]:
            tokens.append("-R")
        tokens.append(f"{values['owner']}{values['group']}{values['other']}")
        tokens.append(values["target"])
        return tokens


# --- chown / chgrp ---


_CHOWN_SCHEMA = FamilySchema(
    family=FamilyName.CHOWN,
    title="chown / chgrp",
    description="Change the owner and group of files.",
    fields=[
        TextField(name="owner", label="Owner", default="john_doe", fallback="newuser"),
        TextField(name="group", label="Group", default="webdev", description="Blank keeps the current group"),
        TextField(name="path", label="Path", default="/var/www/html/project", fallback="/path/to/file"),
        BooleanField(name="recursive", label="Recursive (-R)"),
        BooleanField(name="group_only", label="Change group only (chgrp)"),
    ],
)


class ChownFamily(CommandFamily):
    """``sudo chown [-R] owner[:group] path``, or ``chgrp`` when only the group changes."""

    @property
    def schema(self) -> FamilySchema:
        return _CHOWN_SCHEMA

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        group = values["group"]
        if values["group_only"]:
            tokens = ["sudo", "chgrp"]
            target = group or "newgroup"
        else:
            tokens = ["sudo", "chown"]
            target = f"{values['owner']}:{group}" if group else values["owner"]
        if values["recursive"]:
            tokens.append("-R")
        tokens.extend([target, values["path"]])
        return tokens


# --- user management ---


USER_ACTIONS: dict[str, tuple[list[str], Tip]] = {
    "create": (
        ["useradd"],
        Tip(description="Creates a new user without a home directory or password.", example="sudo useradd john"),
    ),
    "create_home": (
        ["useradd", "-m"],
        Tip(description="Creates a new user with a default home directory.", example="sudo useradd -m john"),
    ),
    "delete": (
        ["userdel"],
        Tip(description="Deletes a user (does NOT remove the home directory).", example="sudo userdel john"),
    ),
    "delete_home": (
        ["userdel", "-r"],
        Tip(description="Deletes a user and removes their home directory.", example="sudo userdel -r john"),
    ),
    "password": (
        ["passwd"],
        Tip(description="Sets or updates the user's password.", example="sudo passwd john"),
    ),
    "lock": (
        ["usermod", "-L"],
        Tip(description="Disables a user account (password locked).", example="sudo usermod -L john"),
    ),
    "unlock": (
        ["usermod", "-U"],
        Tip(description="Re-enables a locked user account.", example="sudo usermod -U john"),
    ),
    "add_to_group": (
        ["usermod", "-aG"],
        Tip(description="Adds the user to a supplementary group.", example="sudo usermod -aG sudo john"),
    ),
}

_USER_SCHEMA = FamilySchema(
    family=FamilyName.USER,
    title="user management",
    description="Create, delete, lock and regroup Linux user accounts.",
    fields=[
        EnumField(name="action", label="Command", choices=list(USER_ACTIONS), default="create"),
        TextField(name="username", label="User", fallback="username"),
        TextField(name="group", label="Group (add_to_group)", default="sudo", fallback="sudo"),
    ],
)


class UserFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _USER_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {"action": {action: tip for action, (_, tip) in USER_ACTIONS.items()}}

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        action = values["action"]
        tokens = ["sudo", *USER_ACTIONS[action][0]]
        if action == "add_to_group":
            tokens.append(values["group"])
        tokens.append(values["username"])
        return tokens


# --- system info ---


_SYSINFO_SCHEMA = FamilySchema(
    family=FamilyName.SYSINFO,
    title="system info",
    description="Kernel, host, uptime, release and disk usage at a glance.",
    fields=[
        EnumField(
            name="command",
            label="Command",
            choices=["uname", "hostname", "uptime", "lsb_release", "df"],
            default="uname",
        ),
        TextField(name="options", label="Options", description="e.g. -a, -h, -T"),
    ],
)


class SysinfoFamily(CommandFamily):
    """The command followed by free-form options; ``uptime`` takes none."""

    @property
    def schema(self) -> FamilySchema:
        return _SYSINFO_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "command": {
                "uname": Tip(description="Kernel name, release and architecture.", example="uname -a"),
                "hostname": Tip(description="The machine's host name and addresses.", example="hostname -I"),
                "uptime": Tip(description="Time since boot and load averages."),
                "lsb_release": Tip(description="Distribution name and version.", example="lsb_release -a"),
                "df": Tip(description="Free space per mounted filesystem.", example="df -h"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        command = values["command"]
        if command == "uptime":
            return [command]
        return [command, values["options"]]
