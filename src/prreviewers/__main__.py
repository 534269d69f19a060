"""CLI interface for the reviewer assignment service.

Provides commands to write a default configuration, run the API server and
print storage statistics.
"""
import asyncio
import sys
from pathlib import Path

import click
import uvicorn

from . import __version__
from .core.config import ReviewerServiceConfig, configure_logging, init_config


@click.group()
@click.version_option(version=__version__)
def cli():
    """prreviewers - pull request reviewer assignment service."""
    pass


@cli.command()
@click.option(
    "--config-path",
    "-c",
    type=click.Path(dir_okay=False),
    default="prreviewers.yaml",
    help="Path to configuration file",
)
@click.option("--force", "-f", is_flag=True, help="Force overwrite existing config")
def init(config_path: str, force: bool):
    """Write a default configuration file."""
    config_file = Path(config_path)

    if config_file.exists() and not force:
        click.echo(f"Configuration file already exists: {config_path}")
        click.echo("Use --force to overwrite")
        return

    try:
        config = ReviewerServiceConfig.create_default_config(config_file)

        click.echo(f"✓ Created configuration file: {config_path}")
        click.echo("\nDefault configuration:")
        click.echo(f"  API Server: {config.api_host}:{config.api_port}")
        click.echo(f"  Storage: {config.storage}")
        click.echo(f"  Reviewers per PR: {config.reviewers_per_pr}")
        click.echo(f"\nEdit {config_path} to customize settings.")

    except Exception as e:
        click.echo(f"Error creating configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
@click.option("--host", help="Override API host")
@click.option("--port", type=int, help="Override API port")
def start(config: str, host: str, port: int):
    """Start the API server."""
    try:
        app_config = init_config(config) if config else init_config()

        # Override with CLI options
        if host:
            app_config.api_host = host
        if port:
            app_config.api_port = port

        configure_logging(app_config)

        click.echo("Starting reviewer assignment API...")
        click.echo(f"   API: http://{app_config.api_host}:{app_config.api_port}")
        click.echo(f"   Storage: {app_config.storage}")
        click.echo("\nPress Ctrl+C to stop\n")

        uvicorn.run(
            "prreviewers.api:create_app",
            factory=True,
            host=app_config.api_host,
            port=app_config.api_port,
            log_level=app_config.log_level.lower(),
        )

    except KeyboardInterrupt:
        click.echo("\n\nStopping reviewer assignment API...")
    except Exception as e:
        click.echo(f"Error starting server: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file",
)
def status(config: str):
    """Show configuration and reviewer load statistics."""
    try:
        app_config = init_config(config) if config else init_config()

        click.echo("Reviewer Assignment Status")
        click.echo("=" * 50)
        click.echo(f"Configuration: {config or 'default'}")
        click.echo(f"Storage: {app_config.storage}")
        click.echo(f"Database URL: {app_config.get_database_url() or '(in memory)'}")
        click.echo(f"API Server: {app_config.api_host}:{app_config.api_port}")
        click.echo(f"Reviewers per PR: {app_config.reviewers_per_pr}")
        click.echo(f"Log Level: {app_config.log_level}")

        if app_config.storage == "memory":
            click.echo(
                "\nStatistics: not available for the memory backend "
                "(data lives only inside a running server)"
            )
            return

        from .core.services import create_services
        from .core.storage import create_repositories

        async def get_statistics():
            repositories = await create_repositories(app_config)
            try:
                services = create_services(repositories, app_config)
                return await services.statistics.compute()
            finally:
                await repositories.close()

        stats = asyncio.run(get_statistics())
        click.echo(
            f"\nPull requests: {stats.by_status.open} open, {stats.by_status.merged} merged"
        )
        click.echo(f"Reviewer assignments: {stats.total_assignments}")
        for user_id, count in sorted(stats.by_user.items(), key=lambda item: -item[1]):
            click.echo(f"   {user_id}: {count}")

    except Exception as e:
        click.echo(f"Error checking status: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
