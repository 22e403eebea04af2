"""
tridentctl root command.

Carries the persistent flags shared by every subcommand and resolves the operating
mode before the subcommand runs. Subcommands are registered on the app by the
surrounding tool and reach the resolved state through get_session().

Usage:
    from trident_connect.cli import create_app, get_session, run

    app = create_app()

    @app.command()
    def version(ctx: typer.Context) -> None:
        session = get_session(ctx)
        if session.mode == OperatingMode.TUNNEL:
            get_command_tunnel(session).run_and_print(["version"])
        else:
            ...  # call session.connection.base_url() directly

    sys.exit(run(app))
"""

from typing import Any

import typer
from pydantic import ValidationError

from trident_connect import container as ioc
from trident_connect.any.exceptions import TridentError
from trident_connect.any.log import setup_logging
from trident_connect.any.utils import EXIT_CODE_FAILURE, EXIT_CODE_SUCCESS
from trident_connect.config.session import SessionConfig, TridentSession

SESSION_KEY = "session"


def _resolve_session(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Debug output"),
    server: str = typer.Option("", "--server", "-s", help="Address/port of Trident REST interface"),
    output: str = typer.Option(
        "", "--output", "-o", help="Output format. One of json|yaml|name|wide"
    ),
    namespace: str = typer.Option("", "--namespace", "-n", help="Namespace of Trident deployment"),
) -> None:
    """A CLI tool for managing the NetApp Trident external storage provisioner for Kubernetes."""
    setup_logging(debug=debug)

    try:
        config = SessionConfig(server=server, namespace=namespace, debug=debug, output_format=output)
    except ValidationError:
        raise typer.BadParameter(f"unknown output format '{output}'", param_hint="--output") from None

    try:
        connection = ioc.container.mode_resolver().resolve(config, ctx.invoked_subcommand or "")
    except TridentError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CODE_FAILURE)

    ctx.ensure_object(dict)[SESSION_KEY] = TridentSession(config, connection)


def create_app(name: str = "tridentctl") -> typer.Typer:
    """
    Create the root application with mode resolution wired into its callback.

    Args:
    ----
        name: Program name shown in help output

    Returns:
    -------
        Typer app ready for subcommands

    """
    app = typer.Typer(
        name=name,
        help="A CLI tool for NetApp Trident",
        no_args_is_help=True,
        pretty_exceptions_enable=False,
    )
    app.callback()(_resolve_session)
    return app


def get_session(ctx: typer.Context) -> TridentSession:
    """Return the session resolved by the root callback."""
    obj = ctx.find_object(dict)
    if not obj or SESSION_KEY not in obj:
        raise RuntimeError("Operating mode has not been resolved for this invocation")
    return obj[SESSION_KEY]


def run(app: typer.Typer, args: list[str] | None = None) -> int:
    """
    Run the app and return the exit status for the process.

    Usage errors, aborts and typer.Exit are handled by typer itself and end in
    SystemExit, whose code is returned. When a subcommand ran to completion, the
    status is the session's last exit status, so a tunneled command's remote status
    becomes our own.

    Args:
    ----
        app: App built by create_app() with its subcommands registered
        args: Arguments (defaults to sys.argv[1:])

    Returns:
    -------
        Process exit status

    """
    command = typer.main.get_command(app)
    state: dict[str, Any] = {}

    try:
        command.main(args=args, obj=state, standalone_mode=True)
        code: Any = EXIT_CODE_SUCCESS
    except SystemExit as e:
        code = e.code

    if code is None:
        code = EXIT_CODE_SUCCESS
    elif not isinstance(code, int):
        # sys.exit("message") semantics
        typer.echo(code, err=True)
        code = EXIT_CODE_FAILURE

    if code != EXIT_CODE_SUCCESS:
        return code

    session = state.get(SESSION_KEY)
    if session is not None:
        return session.exit_code
    return EXIT_CODE_SUCCESS
