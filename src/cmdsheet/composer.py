"""Entry points from an option model to a rendered command.

These are thin wrappers around the family registry: look up the family
once, run its ``normalize`` step, then its ``compose`` step, and hand the
tokens to :func:`~cmdsheet.renderer.render`.
"""

from __future__ import annotations

from typing import Any

from cmdsheet.families import get_family
from cmdsheet.models import FamilyName
from cmdsheet.options import OptionModel
from cmdsheet.renderer import render


def compose(model: OptionModel) -> list[str]:
    """Return the command tokens for *model*, in the family's canonical order."""
    family = get_family(model.family)
    return family.compose(family.normalize(model.as_dict()))


def synthesize(model: OptionModel) -> str:
    """Return the rendered command line for *model*."""
    return render(compose(model))


def build_command(family: FamilyName | str, **values: Any) -> str:
    """Render a command straight from keyword values.

    Values go through an :class:`OptionModel`, so illegal ones are ignored
    exactly as they would be in an interactive session.

    Example::

        >>> build_command("tar", archive="a.tar.gz", targets="src/", exclude="")
        'tar cvzf a.tar.gz src/'

    Raises:
        UnknownFamilyError: If *family* is not a known family name.
    """
    model = OptionModel(get_family(family).schema, values)
    return synthesize(model)
