"""Text processing families: ``sed``/``awk``, ``sort``/``uniq``, ``cut``/``paste`` and ``cat``/``echo``."""

from __future__ import annotations

from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily, close_single_quotes
from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField, Tip


# --- sed / awk ---


_SED_SCHEMA = FamilySchema(
    family=FamilyName.SED,
    title="sed / awk",
    description="Substitute text with sed, or print selected columns with awk.",
    fields=[
        EnumField(name="tool", label="Tool", choices=["sed", "awk"], default="sed"),
        TextField(name="pattern", label="Pattern (sed)", default="old_text", fallback="PATTERN"),
        TextField(name="replacement", label="Replacement (sed)", default="new_text", fallback="REPLACEMENT"),
        TextField(name="sed_file", label="File (sed)", default="log_file.txt", fallback="filename.txt"),
        BooleanField(name="global_replace", label="Replace all matches (g)", default=True),
        BooleanField(name="ignore_case", label="Ignore case (i)"),
        BooleanField(name="in_place", label="Edit in place, keep .bak (-i.bak)"),
        TextField(name="awk_file", label="File (awk)", default="data.csv", fallback="filename.txt"),
        TextField(name="separator", label="Field separator (-F)", default=","),
        TextField(name="fields", label="Fields to print", default="1,3", description="Comma separated, e.g. 1,3"),
        TextField(name="condition", label="Filter condition", default="$2 > 100"),
    ],
)


def awk_fields(text: str) -> str:
    """Turn ``"1, $3,"`` into ``"$1, $3"``; nothing selected means ``$0``."""
    fields = [field.strip() for field in text.split(",")]
    return ", ".join(f if f.startswith("$") else f"${f}" for f in fields if f) or "$0"


class SedFamily(CommandFamily):
    """A ``sed`` substitution or an ``awk`` column printer.

    Both scripts are single-quoted, so embedded quotes are closed and
    reopened (``'\\''``).
    """

    @property
    def schema(self) -> FamilySchema:
        return _SED_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "tool": {
                "sed": Tip(description="Stream editor for find and replace.", example="sed -i.bak 's/foo/bar/g' file.txt"),
                "awk": Tip(description="Column-oriented text processing.", example="awk -F',' '{ print $1, $3 }' data.csv"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        if values["tool"] == "awk":
            return self._awk(values)

        flags = ("g" if values["global_replace"] else "") + ("i" if values["ignore_case"] else "")
        pattern = close_single_quotes(values["pattern"])
        replacement = close_single_quotes(values["replacement"])
        return [
            "sed",
            "-i.bak" if values["in_place"] else "",
            f"'s/{pattern}/{replacement}/{flags}'",
            values["sed_file"],
        ]

    def _awk(self, values: Mapping[str, Any]) -> list[str]:
        action = f"{{ print {awk_fields(values['fields'])} }}"
        script = f"{values['condition']} {action}" if values["condition"] else action
        separator = values["separator"]
        return [
            "awk",
            f"-F'{close_single_quotes(separator)}'" if separator else "",
            f"'{close_single_quotes(script)}'",
            values["awk_file"],
        ]


# --- sort / uniq ---


SORT_FLAGS = (("reverse", "r"), ("numeric", "n"), ("ignore_case", "f"), ("human", "h"))

UNIQ_ACTIONS = {"none": None, "dedupe": "", "unique": "-u", "duplicates": "-d", "count": "-c"}

_SORT_SCHEMA = FamilySchema(
    family=FamilyName.SORT,
    title="sort / uniq",
    description="Sort lines, then optionally filter duplicates with uniq.",
    fields=[
        TextField(name="file", label="File", default="data.txt", fallback="input.txt"),
        BooleanField(name="reverse", label="Reverse order (-r)"),
        BooleanField(name="numeric", label="Numeric sort (-n)"),
        BooleanField(name="ignore_case", label="Case-insensitive (-f)"),
        BooleanField(name="human", label="Human numeric (-h)"),
        TextField(name="key", label="Key field (-k)", description="e.g. 2 or 2,2"),
        EnumField(name="uniq", label="uniq", choices=list(UNIQ_ACTIONS), default="none"),
    ],
)


class SortFamily(CommandFamily):
    """``sort -<flags> [-k key] file`` with an optional ``| uniq`` stage."""

    @property
    def schema(self) -> FamilySchema:
        return _SORT_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "uniq": {
                "none": Tip(description="Just sort."),
                "dedupe": Tip(description="Collapse adjacent duplicate lines.", example="sort names.txt | uniq"),
                "unique": Tip(description="Only lines that appear once.", example="sort names.txt | uniq -u"),
                "duplicates": Tip(description="Only lines that repeat.", example="sort names.txt | uniq -d"),
                "count": Tip(description="Prefix each line with its count.", example="sort access.log | uniq -c"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        tokens = ["sort"]
        letters = "".join(letter for field, letter in SORT_FLAGS if values[field])
        if letters:
            tokens.append(f"-{letters}")
        if values["key"]:
            tokens.extend(["-k", values["key"]])
        tokens.append(values["file"])

        uniq = UNIQ_ACTIONS[values["uniq"]]
        if uniq is not None:
            tokens.extend(["|", "uniq", uniq])
        return tokens


# --- cut / paste ---


_CUT_SCHEMA = FamilySchema(
    family=FamilyName.CUT,
    title="cut / paste",
    description="Extract columns with cut, or join files side by side with paste.",
    fields=[
        EnumField(name="mode", label="Mode", choices=["cut", "paste"], default="cut"),
        TextField(name="delimiter", label="Delimiter (cut)", default=",", fallback="\\t"),
        TextField(name="fields", label="Fields (cut)", default="1,3", fallback="1", description="1,3 or 1-3 or 2-"),
        TextField(name="file", label="File (cut)", default="data.csv", fallback="input.txt"),
        TextField(name="paste_delimiter", label="Delimiter (paste)", default=",", fallback="\\t"),
        TextField(
            name="paste_files",
            label="Files (paste)",
            default="file_col1.txt file_col2.txt",
            fallback="file1.txt file2.txt",
        ),
    ],
)


class CutFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _CUT_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "mode": {
                "cut": Tip(description="Keep selected fields of every line.", example="cut -d ':' -f 1,7 /etc/passwd"),
                "paste": Tip(description="Merge lines of files column by column.", example="paste -d ',' names.txt ages.txt"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        if values["mode"] == "paste":
            delimiter = close_single_quotes(values["paste_delimiter"])
            return ["paste", "-d", f"'{delimiter}'", values["paste_files"]]
        delimiter = close_single_quotes(values["delimiter"])
        return ["cut", "-d", f"'{delimiter}'", "-f", values["fields"], values["file"]]


# --- cat / echo ---


_ECHO_SCHEMA = FamilySchema(
    family=FamilyName.ECHO,
    title="cat / echo",
    description="Write text into files, or concatenate files into one.",
    fields=[
        EnumField(name="mode", label="Mode", choices=["create", "append", "concatenate"], default="create"),
        TextField(name="target", label="Target file", default="config.txt", fallback="output.txt"),
        TextField(name="text", label="Text", default="Key=Value", description="\\n adds a line break (echo -e)"),
        TextField(
            name="sources",
            label="Source files (concatenate)",
            default="part1.txt part2.txt",
            fallback="file1.txt file2.txt",
        ),
    ],
)


class EchoFamily(CommandFamily):
    """``echo`` redirected into a file (``>`` or ``>>``), or ``cat a b > target``.

    ``-e`` is added when the text contains a literal ``\\n``.
    """

    @property
    def schema(self) -> FamilySchema:
        return _ECHO_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "mode": {
                "create": Tip(description="Create or overwrite the file.", example='echo "Key=Value" > config.txt'),
                "append": Tip(description="Add a line to the end of the file.", example='echo "Key=Value" >> config.txt'),
                "concatenate": Tip(description="Join files into one.", example="cat part1.txt part2.txt > all.txt"),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        target = values["target"]
        if values["mode"] == "concatenate":
            return ["cat", values["sources"], ">", target]

        text = values["text"].replace('"', '\\"')
        redirect = ">>" if values["mode"] == "append" else ">"
        return ["echo", "-e" if "\\n" in text else "", f'"{text}"', redirect, target]
