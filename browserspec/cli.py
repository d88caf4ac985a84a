# browserspec/cli.py
"""
Command-line interface for browserspec.

Commands run the browser spec suite, show which implementation the current
settings resolve to, and serve the HTML fixtures for manual browsing.
"""
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table
from typing_extensions import Annotated

from browserspec import environment, runner
from browserspec.exceptions import BrowserSpecError
from browserspec.schemas.settings import reload_settings
from browserspec.utils.logger import setup_logger

app = typer.Typer(
    name="browserspec",
    help="Launch browsers and run the browser behaviour specs.",
    add_completion=False,
)
console = Console()
logger = setup_logger(__name__)


@app.callback()
def main_callback() -> None:
    """browserspec command-line interface."""
    load_dotenv()


@app.command(
    name="run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run_specs(
    ctx: typer.Context,
    browser: Annotated[
        Optional[str], typer.Option("--browser", "-b", help="chrome, firefox, edge or safari.")
    ] = None,
    headless: Annotated[bool, typer.Option("--headless", help="Run the browser headless.")] = False,
    remote_url: Annotated[
        Optional[str], typer.Option("--remote-url", help="URL of a running Selenium grid.")
    ] = None,
) -> None:
    """
    Runs the browser spec suite. Unknown options are passed through to pytest.
    """
    args: List[str] = []
    if browser:
        args += ["--spec-browser", browser]
    if headless:
        args.append("--spec-headless")
    if remote_url:
        args += ["--spec-remote-url", remote_url]
    args += list(ctx.args)

    exit_code = runner.run(args)
    raise typer.Exit(code=exit_code)


@app.command(name="info")
def show_info(
    browser: Annotated[
        Optional[str], typer.Option("--browser", "-b", help="Override the configured browser.")
    ] = None,
) -> None:
    """
    Shows the implementation the current settings resolve to.
    """
    reload_settings(browser=browser)
    environment.reset()
    try:
        imp = environment.get_implementation()
    except BrowserSpecError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise typer.Exit(code=1)

    table = Table(title="browserspec implementation", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("name", imp.name)
    table.add_row("browser", imp.browser_name or "(none)")
    table.add_row("browser class", getattr(imp.browser_class, "__name__", "(none)"))
    table.add_row("driver", imp.driver_info or "(none)")
    table.add_row("platform", imp.platform)
    table.add_row("headless", str(imp.headless))
    table.add_row("remote", str(imp.remote))
    table.add_row("host", environment.host())
    console.print(table)
    console.print(imp.inspect_args())


@app.command(name="serve")
def serve(
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on; 0 picks one.")] = 0,
    bind: Annotated[str, typer.Option("--bind", help="Address to bind to.")] = "127.0.0.1",
) -> None:
    """
    Serves the HTML fixtures in the foreground until interrupted.
    """
    reload_settings(server_bind=bind, server_port=port)
    environment.reset()
    server = environment.get_server()
    console.print(
        f"🌐 Serving fixtures from [bold cyan]{', '.join(environment.htmls())}[/bold cyan] "
        f"at http://{server.bind}:{server.port}"
    )
    try:
        server.serve_forever()
    except BrowserSpecError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        raise typer.Exit(code=1)
