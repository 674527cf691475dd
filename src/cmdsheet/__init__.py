"""cmdsheet -- interactive cheat sheets that compose shell command lines.

Each supported tool family (tar, gzip/bzip2, ss/netstat, ip/ifconfig,
grep/find, top/htop, cron, kubectl, ...) declares a small option schema.
Picking values for those options yields the equivalent command line as text,
ready to be copied to the clipboard. Nothing is ever executed.

Typical workflow::

    cmdsheet families                        # list the tool families
    cmdsheet schema tar                      # show the options for tar
    cmdsheet gen tar -s mode=extract --copy  # render and copy a command

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models for configuration and family schemas.
    options: The mutable option model backing a single generator.
    families: One composer per tool family, behind a closed registry.
    composer: Entry points dispatching an option model to its family.
    renderer: Joins command tokens into the displayed string.
    session: Presentation adapter tying model, history and clipboard.
    history: Bounded recent-command history persisted with diskcache.
    clipboard: Write-only clipboard access through platform tools.
    simulate: Random ping, traceroute and process-table generators.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
