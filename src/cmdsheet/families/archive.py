"""Archive and compression families: ``tar``, ``zip``/``unzip``, ``gzip``/``bzip2``."""

from __future__ import annotations

from typing import Any, Mapping

from cmdsheet.families.base import CommandFamily
from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField, Tip


# --- tar ---


TAR_MODE_LETTERS = {"create": "c", "extract": "x", "list": "t"}
TAR_COMPRESSION_LETTERS = {"gzip": "z", "bzip2": "j", "xz": "J", "none": ""}

_TAR_SCHEMA = FamilySchema(
    family=FamilyName.TAR,
    title="tar",
    description="Create, extract or list tape archives, optionally compressed.",
    fields=[
        EnumField(name="mode", label="Mode", choices=list(TAR_MODE_LETTERS), default="create"),
        EnumField(
            name="compression",
            label="Compression",
            choices=list(TAR_COMPRESSION_LETTERS),
            default="gzip",
        ),
        BooleanField(name="verbose", label="Verbose (v)", default=True),
        TextField(name="archive", label="Archive file", default="backup.tar.gz", fallback="archive.tar"),
        TextField(name="targets", label="Files to archive", default="src/ config/", fallback="."),
        TextField(name="exclude", label="Exclude pattern", default="node_modules"),
        TextField(name="extract_dir", label="Extract into (-C)", default="data/"),
    ],
)


class TarFamily(CommandFamily):
    """``tar`` with every short option bundled into one token before ``f``.

    The bundle is the mode letter, ``v`` when verbose (never for ``list``),
    then the compression letter: ``tar cvzf backup.tar.gz src/``.
    """

    @property
    def schema(self) -> FamilySchema:
        return _TAR_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "mode": {
                "create": Tip(description="Pack files into a new archive.", example="tar -czvf backup.tar.gz src/"),
                "extract": Tip(description="Unpack an archive.", example="tar -xzvf backup.tar.gz -C data/"),
                "list": Tip(description="Show the archive contents without extracting.", example="tar -tzf backup.tar.gz"),
            },
            "compression": {
                "gzip": Tip(description="z: fast, widely available (.tar.gz)."),
                "bzip2": Tip(description="j: smaller output, slower (.tar.bz2)."),
                "xz": Tip(description="J: best ratio, slowest (.tar.xz)."),
                "none": Tip(description="Plain, uncompressed tarball (.tar)."),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        mode = values["mode"]
        compression = TAR_COMPRESSION_LETTERS[values["compression"]]
        verbose = "v" if values["verbose"] and mode != "list" else ""
        bundle = f"{TAR_MODE_LETTERS[mode]}{verbose}{compression}f"

        tokens = ["tar", bundle, values["archive"]]
        if mode == "create":
            tokens.append(values["targets"])
            if values["exclude"]:
                tokens.append(f"--exclude='{values['exclude']}'")
        elif mode == "extract" and values["extract_dir"]:
            tokens.extend(["-C", values["extract_dir"]])
        return tokens


# --- zip / unzip ---


_ZIP_SCHEMA = FamilySchema(
    family=FamilyName.ZIP,
    title="zip / unzip",
    description="Build or unpack .zip archives.",
    fields=[
        EnumField(name="action", label="Action", choices=["zip", "unzip"], default="zip"),
        TextField(name="archive", label="Archive file", default="my_archive.zip", fallback="archive.zip"),
        TextField(name="targets", label="Files to add", default="documents/ folder.txt", fallback="."),
        BooleanField(name="encrypt", label="Password protect (-e)"),
        BooleanField(name="verbose", label="Verbose (-v)"),
        BooleanField(name="recursive", label="Recurse into folders (-r)", default=True),
        BooleanField(name="overwrite", label="Overwrite without asking (-o)"),
        TextField(name="extract_dir", label="Extract into (-d)", default="extracted_data"),
    ],
)


class ZipFamily(CommandFamily):
    @property
    def schema(self) -> FamilySchema:
        return _ZIP_SCHEMA

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        action = values["action"]
        tokens = [action]
        if values["verbose"]:
            tokens.append("-v")
        if action == "zip":
            if values["encrypt"]:
                tokens.append("-e")
            if values["recursive"]:
                tokens.append("-r")
            tokens.extend([values["archive"], values["targets"]])
        else:
            if values["overwrite"]:
                tokens.append("-o")
            tokens.append(values["archive"])
            if values["extract_dir"]:
                tokens.extend(["-d", values["extract_dir"]])
        return tokens


# --- gzip / bzip2 ---


COMPRESSION_EXTENSIONS = {"gzip": ".gz", "bzip2": ".bz2"}
COMPRESSION_LEVELS = {"default": "", "fastest": "-1", "best": "-9"}

_COMPRESSION_SCHEMA = FamilySchema(
    family=FamilyName.COMPRESSION,
    title="gzip / bzip2",
    description="Compress or decompress single files, or compress through a pipe.",
    fields=[
        EnumField(name="tool", label="Tool", choices=list(COMPRESSION_EXTENSIONS), default="gzip"),
        EnumField(name="action", label="Action", choices=["compress", "decompress", "pipe"], default="compress"),
        EnumField(name="level", label="Level", choices=list(COMPRESSION_LEVELS), default="default"),
        BooleanField(name="keep", label="Keep original (-k)"),
        TextField(name="file", label="File", default="logfile.txt", fallback="file.txt"),
    ],
)


def with_extension(filename: str, extension: str) -> str:
    """Append *extension* to *filename* unless it already ends with it."""
    return filename if filename.endswith(extension) else f"{filename}{extension}"


class CompressionFamily(CommandFamily):
    """``gzip``/``bzip2``: ``compress`` and ``decompress`` are plain invocations,
    ``pipe`` is ``cat <file> | <tool> > <file><ext>``.
    """

    @property
    def schema(self) -> FamilySchema:
        return _COMPRESSION_SCHEMA

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        return {
            "level": {
                "default": Tip(description="The tool's own default (6 for gzip, 9 for bzip2)."),
                "fastest": Tip(description="-1: least CPU, largest output."),
                "best": Tip(description="-9: most CPU, smallest output."),
            },
        }

    def compose(self, values: Mapping[str, Any]) -> list[str]:
        tool = values["tool"]
        extension = COMPRESSION_EXTENSIONS[tool]
        options = [COMPRESSION_LEVELS[values["level"]]]
        if values["keep"]:
            options.append("-k")

        action = values["action"]
        file = values["file"]
        if action == "pipe":
            return ["cat", file, "|", tool, *options, ">", f"{file}{extension}"]
        if action == "decompress":
            return [tool, *options, "-d", with_extension(file, extension)]
        return [tool, *options, file]
