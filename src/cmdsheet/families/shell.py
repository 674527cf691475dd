"""General-purpose shell commands grouped by category, and ``tmux`` session commands."""

from __future__ import annotations

from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily
from cmdsheet.models import EnumField, FamilyName, FamilySchema, TextField, Tip


SHELL_CATEGORIES: dict[str, list[str]] = {
    "files": ["touch", "rm", "cat", "chmod", "mv", "cp"],
    "folders": ["mkdir", "rmdir", "ls", "cd", "tree"],
    "git": ["git clone", "git pull", "git add .", "git commit -m", "git push", "git checkout -b"],
    "system": ["sudo apt update", "sudo apt upgrade", "sudo reboot", "df -h", "top"],
    "network": ["ping", "curl", "wget", "ifconfig", "netstat -tulnp"],
}

SHELL_ACTIONS: dict[str, Tip] = {
    "touch": Tip(description="Creates a new empty file.", example="touch notes.txt"),
    "rm": Tip(description="Deletes a file.", example="rm old-photo.png"),
    "cat": Tip(description="Displays content of a file.", example="cat README.md"),
    "chmod": Tip(description="Changes file permissions.", example="chmod 755 script.sh"),
    "mv": Tip(description="Moves or renames a file/folder.", example="mv photo.jpg images/"),
    "cp": Tip(description="Copies a file or folder.", example="cp data.json backup/data.json"),
    "mkdir": Tip(description="Creates a directory.", example="mkdir projects"),
    "rmdir": Tip(description="Deletes an empty directory.", example="rmdir temp-folder"),
    "ls": Tip(description="Lists files and directories.", example="ls -la"),
    "cd": Tip(description="Changes the current directory.", example="cd documents"),
    "tree": Tip(description="Shows directory structure in tree form.", example="tree src/"),
    "git clone": Tip(
        description="Downloads a remote repository.",
        example="git clone https://github.com/user/project.git",
    ),
    "git pull": Tip(description="Downloads and merges latest changes.", example="git pull origin main"),
    "git add .": Tip(description="Stages all modified files.", example="git add ."),
    "git commit -m": Tip(description="Saves staged changes with a message.", example='git commit -m "Fix login bug"'),
    "git push": Tip(description="Uploads local commits to remote.", example="git push origin main"),
    "git checkout -b": Tip(
        description="Creates and switches to a new branch.",
        example="git checkout -b feature/ui-redesign",
    ),
    "sudo apt update": Tip(description="Updates package information.", example="sudo apt update"),
    "sudo apt upgrade": Tip(description="Installs available package upgrades.", example="sudo apt upgrade -y"),
    "sudo reboot": Tip(description="Restarts the system.", example="sudo reboot"),
    "df -h": Tip(description="Shows disk usage in human-readable format.", example="df -h"),
    "top": Tip(description="Displays running processes and system usage.", example="top"),
    "ping": Tip(description="Tests network connectivity to a host.", example="ping google.com"),
    "curl": Tip(description="Downloads or interacts with URLs.", example="curl https://api.example.com/data"),
    "wget": Tip(description="Downloads files from the internet.", example="wget https://example.com/file.zip"),
    "ifconfig": Tip(description="Shows or configures network interfaces.", example="ifconfig eth0"),
    "netstat -tulnp": Tip(description="Lists active ports and listening services.", example="netstat -tulnp"),
}

_SHELL_SCHEMA = FamilySchema(
    family=FamilyName.SHELL,
    title="bash",
    description="Everyday shell commands for files, folders, git, the system and the network.",
    fields=[
        EnumField(name="category", label="Category", choices=list(SHELL_CATEGORIES), default="files"),
        EnumField(name="action", label="Command", choices=list(SHELL_ACTIONS), default="touch"),
        TextField(
            name="target",
            label="Target (optional)",
            description="File, folder, URL, or empty for the command only",
        ),
    ],
)


def category_of(action: str) -> str | None:
    """Return the category that lists *action*, or ``None``."""
    for category, actions in SHELL_CATEGORIES.items():
        if action in actions:
            return category
    return None


class ShellFamily(CommandFamily):
    """``<action> [target]``, where the action must belong to the chosen category."""

    @property
    def schema(self) -> FamilySchema:
        return _SHELL_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {"action": dict(SHELL_ACTIONS)}

    def normalize(self, values: Mapping[str, Any]) -> dict[str, Any]:
        normalized = super().normalize(values)
        actions = SHELL_CATEGORIES[normalized["category"]]
        if normalized["action"] not in actions:
            normalized["action"] = actions[0]
        return normalized

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        return [values["action"], values["target"]]


# --- tmux ---


TMUX_ACTIONS: dict[str, Tip] = {
    "new": Tip(description="Creates a new TMUX session with a custom name.", example="tmux new -s myapp"),
    "ls": Tip(description="Displays all active TMUX sessions.", example="tmux ls"),
    "attach": Tip(description="Attach to an existing TMUX session.", example="tmux attach -t myapp"),
    "detach": Tip(
        description="Detaches from the current session and returns to the shell.",
        example="Press Ctrl+b then press d",
    ),
    "rename": Tip(description="Renames a TMUX session.", example="tmux rename-session -t myapp main_session"),
    "kill": Tip(description="Terminates a TMUX session.", example="tmux kill-session -t myapp"),
    "split_h": Tip(description="Splits the current pane horizontally.", example="tmux split-window -h"),
    "split_v": Tip(description="Splits the current pane vertically.", example="tmux split-window -v"),
    "list_keys": Tip(description="Shows all TMUX key bindings.", example="tmux list-keys"),
}

_TMUX_SCHEMA = FamilySchema(
    family=FamilyName.TMUX,
    title="tmux",
    description="Terminal multiplexer sessions and panes.",
    fields=[
        EnumField(name="action", label="Action", choices=list(TMUX_ACTIONS), default="new"),
        TextField(name="session", label="Session", fallback="session_name"),
        TextField(name="new_name", label="New name (rename)", fallback="new_name"),
    ],
)


class TmuxFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _TMUX_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {"action": dict(TMUX_ACTIONS)}

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        action = values["action"]
        session = values["session"]
        if action == "new":
            return ["tmux", "new", "-s", session]
        if action == "attach":
            return ["tmux", "attach", "-t", session]
        if action == "rename":
            return ["tmux", "rename-session", "-t", session, values["new_name"]]
        if action == "kill":
            return ["tmux", "kill-session", "-t", session]
        if action in ("split_h", "split_v"):
            return ["tmux", "split-window", f"-{action[-1]}"]
        if action == "list_keys":
            return ["tmux", "list-keys"]
        return ["tmux", action]
