"""File search families: content/filename search (``grep``/``find``) and advanced ``find``."""

from __future__ import annotations

from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily, escape_single_quotes
from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField, Tip


GREP_FLAGS = (("ignore_case", "i"), ("line_numbers", "n"), ("invert", "v"))

_SEARCH_SCHEMA = FamilySchema(
    family=FamilyName.SEARCH,
    title="grep / find",
    description="Search file contents with grep, or file names with find.",
    fields=[
        EnumField(name="mode", label="Search for", choices=["content", "filename"], default="content"),
        TextField(name="text", label="Text or regex", default="error|warning", fallback="search_term"),
        TextField(name="path", label="Path", default=".", fallback="."),
        BooleanField(name="ignore_case", label="Ignore case (-i)", default=True),
        BooleanField(name="recursive", label="Recursive (-r)", default=True),
        BooleanField(name="line_numbers", label="Line numbers (-n)"),
        BooleanField(name="invert", label="Invert match (-v)"),
        EnumField(name="file_type", label="Type (filename mode)", choices=["all", "f", "d"], default="all"),
        TextField(name="name_pattern", label="Name pattern (filename mode)", default="*.log"),
    ],
)


class SearchFamily(CommandFamily):
    """Two unrelated shapes selected by ``mode``.

    Content search is ``grep -r<flags>``; with recursion off it becomes a
    ``find -print0 | xargs -0 grep`` pipeline rather than a bare ``grep``.
    Filename search ignores every grep flag.
    """

    @property
    def schema(self) -> FamilySchema:
        return _SEARCH_SCHEMA

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        path = values["path"]
        if values["mode"] == "filename":
            tokens = ["find", path]
            if values["file_type"] != "all":
                tokens.extend(["-type", values["file_type"]])
            if values["name_pattern"]:
                tokens.extend(["-name", f'"{values["name_pattern"]}"'])
            return tokens

        letters = "".join(letter for field, letter in GREP_FLAGS if values[field])
        pattern = f'"{values["text"]}"'
        if values["recursive"]:
            return ["grep", f"-r{letters}", pattern, path]
        return [
            "find", path, "-type", "f", "-print0",
            "|", "xargs", "-0", "grep", f"-{letters}" if letters else "", pattern,
        ]


# --- find ---


FIND_ACTIONS = {"print": "-print", "delete": "-delete", "exec": "-exec"}

_FIND_SCHEMA = FamilySchema(
    family=FamilyName.FIND,
    title="find",
    description="Locate files by name, type and age, then act on them.",
    fields=[
        TextField(name="directory", label="Start directory", default=".", fallback="."),
        TextField(name="name", label="Name (case-insensitive)", description="Wildcards allowed, e.g. *.log"),
        EnumField(name="file_type", label="Type", choices=["any", "f", "d", "l"], default="any"),
        EnumField(name="time_type", label="Time filter", choices=["none", "mtime", "ctime", "atime"], default="none"),
        TextField(name="time_value", label="Days", description="+7 older than, -1 newer than"),
        EnumField(name="action", label="Action", choices=list(FIND_ACTIONS), default="print"),
        TextField(name="exec_command", label="Command for -exec"),
    ],
)


class FindFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _FIND_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "file_type": {
                "any": Tip(description="Match every kind of entry."),
                "f": Tip(description="Regular files only.", example="find . -type f"),
                "d": Tip(description="Directories only.", example="find . -type d"),
                "l": Tip(description="Symbolic links only.", example="find . -type l"),
            },
            "time_type": {
                "none": Tip(description="No time filter."),
                "mtime": Tip(description="Content last modified N days ago.", example="find . -mtime +30"),
                "ctime": Tip(description="Metadata last changed N days ago.", example="find . -ctime -1"),
                "atime": Tip(description="Last accessed N days ago.", example="find . -atime +90"),
            },
            "action": {
                "print": Tip(description="Print every match (the default action)."),
                "delete": Tip(description="Delete every match. Run with -print first.", example="find /tmp -name '*.tmp' -delete"),
                "exec": Tip(description="Run a command per match.", example="find . -name '*.sh' -exec chmod +x {} \\;"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        tokens = ["find", values["directory"]]
        if values["name"]:
            tokens.extend(["-iname", f"'{escape_single_quotes(values['name'])}'"])
        if values["file_type"] != "any":
            tokens.extend(["-type", values["file_type"]])

        time_value = values["time_value"]
        if values["time_type"] != "none" and time_value:
            if not time_value.startswith(("+", "-")):
                time_value = f"+{time_value}"
            tokens.extend([f"-{values['time_type']}", time_value])

        action = values["action"]
        if action == "exec":
            if values["exec_command"]:
                tokens.extend(["-exec", escape_single_quotes(values["exec_command"]), "{}", "\\;"])
        else:
            tokens.append(FIND_ACTIONS[action])
        return tokens
