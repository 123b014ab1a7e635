"""Profile and preference commands."""

from pathlib import Path

import click
from moodcapsule.cli.error_handling import handle_domain_error
from moodcapsule.cli.journal_state import load_preferences_or_exit
from moodcapsule.domain.errors import InvalidNameError


@click.group()
def profile_group():
    """Manage profile settings."""
    pass


@profile_group.command("show")
@click.pass_context
def show_profile(ctx):
    """Show current profile settings."""
    _, preferences = load_preferences_or_exit(ctx)

    click.echo(f"Display name: {preferences.display_name or '(not set)'}")
    click.echo(f"Dark mode: {'on' if preferences.dark_mode else 'off'}")
    avatar = preferences.avatar_image
    click.echo(f"Avatar: {f'{len(avatar)} bytes' if avatar is not None else '(none)'}")


@profile_group.command("name")
@click.argument("name")
@click.pass_context
def set_name(ctx, name: str):
    """Set the display name (2 to 20 characters)."""
    state, preferences = load_preferences_or_exit(ctx)
    try:
        stored = preferences.set_display_name(name)
    except InvalidNameError as e:
        handle_domain_error(ctx, e)
    state.save_preferences(preferences)
    click.echo(f"Display name set to '{stored}'")


@profile_group.command("dark-mode")
@click.argument("mode", type=click.Choice(["on", "off"], case_sensitive=False))
@click.pass_context
def set_dark_mode(ctx, mode: str):
    """Turn dark mode on or off."""
    state, preferences = load_preferences_or_exit(ctx)
    preferences.set_dark_mode(mode.lower() == "on")
    state.save_preferences(preferences)
    click.echo(f"Dark mode {mode.lower()}")


@profile_group.command("avatar")
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False, path_type=Path), required=False)
@click.option("--clear", is_flag=True, help="Remove the avatar image")
@click.pass_context
def set_avatar(ctx, image_path: Path | None, clear: bool):
    """Set the avatar image from a file, or remove it with --clear."""
    if clear == (image_path is not None):
        click.echo("Error: Provide either an image file or --clear.", err=True)
        ctx.exit(1)

    state, preferences = load_preferences_or_exit(ctx)
    if clear:
        preferences.set_avatar(None)
        state.save_preferences(preferences)
        click.echo("Avatar removed")
        return

    data = image_path.read_bytes()
    preferences.set_avatar(data)
    state.save_preferences(preferences)
    click.echo(f"Avatar set from '{image_path.name}' ({len(data)} bytes)")


def register_commands(cli):
    """Register profile commands with main CLI."""
    cli.add_command(profile_group, name="profile")
