"""Built-in CLI sub-commands for cmdsheet.

This package groups the Typer modules that form the CLI's command tree:

* :mod:`~cmdsheet.commands.generate` -- ``families``, ``schema``, ``tips``
  and ``gen``, registered directly on the root app.
* :mod:`~cmdsheet.commands.history` -- list, clear and recall recent
  commands.
* :mod:`~cmdsheet.commands.config` -- view and modify global settings.
* :mod:`~cmdsheet.commands.simulate` -- fake ping, traceroute and process
  table output.
"""
