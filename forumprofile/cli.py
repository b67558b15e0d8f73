"""Command-line interface for forumprofile."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from forumprofile import __version__
from forumprofile.config import CacheBackend, LogFormat, ProfileConfig
from forumprofile.core.activity import shared_indicator
from forumprofile.core.client import ForumsClient
from forumprofile.core.renderer import TemplateRenderer
from forumprofile.core.screen import ProfileScreen
from forumprofile.exceptions import ForumProfileError
from forumprofile.models.user import User
from forumprofile.models.view_model import ProfileViewModel
from forumprofile.presentation import ConsolePresenter
from forumprofile.surface.playwright_surface import launch_surface

app = typer.Typer(
    name="forumprofile",
    help="Forum member profile viewer",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"forumprofile version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """forumprofile - forum member profile viewer."""
    pass


@app.command()
def show(
    user_id: str = typer.Argument(..., help="Forum user ID"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Username, used for the title"),
    headless: bool = typer.Option(
        False, "--headless/--no-headless", help="Run browser in headless mode"
    ),
    dark: bool = typer.Option(False, "--dark", help="Start in dark mode"),
    hold: float = typer.Option(
        0, "--hold", help="Seconds to keep the window open after loading (0 waits for the window to close)"
    ),
):
    """Open a member's profile in a browser window."""
    config = ProfileConfig(headless=headless, dark_theme=dark)
    user = User(user_id=user_id, username=username)

    indicator = shared_indicator()
    indicator.add_listener(
        lambda active: console.print("[dim]loading...[/dim]" if active else "[dim]done[/dim]")
    )

    async def run():
        async with ForumsClient(config) as client:
            async with launch_surface(headless=config.headless) as surface:
                screen = ProfileScreen(
                    user,
                    client,
                    TemplateRenderer(),
                    ConsolePresenter(console),
                    lambda: surface,
                    config,
                )
                await screen.load()
                await screen.did_appear()
                await screen.wait_idle()
                console.print(f"[bold]{screen.title}[/bold]")

                if hold > 0:
                    await asyncio.sleep(hold)
                else:
                    await surface.page.wait_for_event("close", timeout=0)
                await screen.close()

    asyncio.run(run())


@app.command()
def render(
    user_id: str = typer.Argument(..., help="Forum user ID"),
    output: Path = typer.Option(..., "--output", "-o", help="File to write the HTML to"),
    force: bool = typer.Option(False, "--force", "-f", help="Force refresh, skip cache"),
    dark: bool = typer.Option(False, "--dark", help="Render in dark mode"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output, only show errors"),
):
    """Fetch a member's profile and write the rendered document to a file."""
    config = ProfileConfig(
        dark_theme=dark,
        log_format=LogFormat.CONSOLE if not quiet else LogFormat.JSON,
    )

    async def run():
        try:
            async with ForumsClient(config) as client:
                profile = await client.fetch_profile(user_id, force_refresh=force)
        except ForumProfileError as e:
            console.print(f"[red]Failed to fetch profile: {e}[/red]")
            raise typer.Exit(1)

        try:
            html = TemplateRenderer().render(
                ProfileViewModel.from_profile(profile, dark_mode=dark),
                config.template_name,
            )
        except ForumProfileError as e:
            console.print(f"[red]Failed to render profile: {e}[/red]")
            raise typer.Exit(1)

        output.write_text(html, encoding="utf-8")
        if not quiet:
            _print_profile_table(profile)
            console.print(f"[dim]Saved to {output}[/dim]")

    asyncio.run(run())


@app.command()
def cache(
    action: str = typer.Argument(..., help="Action: clear, info"),
    user_id: Optional[str] = typer.Option(None, "--user", "-u", help="User ID to invalidate"),
):
    """Manage the profile cache."""
    config = ProfileConfig()

    async def run():
        async with ForumsClient(config) as client:
            if action == "clear":
                if user_id:
                    await client.invalidate_cache(user_id)
                    console.print(f"[green]✓[/green] Cleared cache for user {user_id}")
                else:
                    await client.clear_cache()
                    console.print("[green]✓[/green] Cleared all cache")

            elif action == "info":
                if config.cache_backend == CacheBackend.NONE:
                    console.print("Cache is disabled")
                elif Path(config.sqlite_path).exists():
                    size = Path(config.sqlite_path).stat().st_size
                    console.print(f"Cache backend: {config.cache_backend.value}")
                    console.print(f"Cache path: {config.sqlite_path}")
                    console.print(f"Cache size: {size / 1024:.1f} KB")
                    console.print(f"TTL: {config.cache_ttl_seconds}s")
                else:
                    console.print("Cache is empty")

            else:
                console.print(f"[red]Unknown action: {action}[/red]")
                console.print("Available actions: clear, info")
                raise typer.Exit(1)

    asyncio.run(run())


def _print_profile_table(profile):
    """Print profile summary as table."""
    table = Table(title=profile.username, show_header=False)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("User ID", profile.user_id)
    table.add_row("Member since", str(profile.registration_date.date()) if profile.registration_date else "-")
    table.add_row("Posts", f"{profile.post_count:,}")
    table.add_row("Post rate", profile.post_rate or "-")
    table.add_row("Location", profile.location or "-")
    table.add_row("Homepage", profile.homepage_url or "-")
    table.add_row("PMs", "✓" if profile.private_messages_work else "✗")

    console.print(table)


if __name__ == "__main__":
    app()
