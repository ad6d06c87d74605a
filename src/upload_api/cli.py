# cli.py
import json
import logging
import shutil
from pathlib import Path

import click
from dotenv import dotenv_values

from upload_api.config.settings import get_settings
from upload_api.logging_config import configure_logging

# Configure logging
logger = logging.getLogger(__name__)

PLACEHOLDER_MARK = "%"

# (env var, prompt, default)
SETUP_PROMPTS = [
    ("S3_BUCKET_NAME", "S3 bucket name (leave empty for local storage only)", ""),
    ("AWS_DEFAULT_REGION", "AWS region", "us-east-1"),
    ("SHAREPOINT_TENANT_ID", "SharePoint tenant ID (leave empty to skip SharePoint integration)", ""),
    ("SHAREPOINT_CLIENT_ID", "SharePoint client ID", ""),
    ("SHAREPOINT_CLIENT_SECRET", "SharePoint client secret", ""),
    ("SHAREPOINT_SITE_URL", "SharePoint site URL", ""),
]

FIXED_VALUES = {
    "LOCAL_UPLOAD_PATH": "uploads",
    "MAX_FILE_SIZE": str(10 * 1024 * 1024),
}


@click.group()
def cli():
    """Setup and configuration commands for the Upload API"""
    configure_logging()


def update_local_settings(env_path: Path, settings_path: Path) -> int:
    """
    Fill ``%NAME%`` placeholders in local.settings.json from a .env file.

    Args:
        env_path: Path to the .env file
        settings_path: Path to local.settings.json

    Returns:
        Number of values replaced
    """
    env_config = dotenv_values(env_path)
    settings = json.loads(settings_path.read_text(encoding="utf-8"))

    replaced = 0
    values = settings.get("Values", {})
    for key, value in values.items():
        if isinstance(value, str) and len(value) > 2 and value.startswith(PLACEHOLDER_MARK) and value.endswith(PLACEHOLDER_MARK):
            env_key = value[1:-1]
            if env_config.get(env_key):
                values[key] = env_config[env_key]
                replaced += 1

    settings_path.write_text(json.dumps(settings, indent=2), encoding="utf-8")
    logger.info(f"Replaced {replaced} placeholder(s) in {settings_path}")
    return replaced


@cli.command("sync-settings")
@click.option("--env-file", type=click.Path(path_type=Path), default=Path(".env"), show_default=True)
@click.option("--settings-file", type=click.Path(path_type=Path), default=Path("local.settings.json"), show_default=True)
def sync_settings(env_file: Path, settings_file: Path):
    """Copy values from .env into the %PLACEHOLDER% entries of local.settings.json"""
    if not env_file.exists() or not settings_file.exists():
        click.echo("Error: Required configuration files not found. Please run \"upload-api setup\" first.", err=True)
        raise SystemExit(1)

    update_local_settings(env_file, settings_file)
    click.echo(f"Successfully updated {settings_file} with environment variables")


@cli.command()
@click.option("--project-dir", type=click.Path(file_okay=False, path_type=Path), default=Path("."), show_default=True)
@click.option("--no-input", is_flag=True, help="Accept defaults instead of prompting")
def setup(project_dir: Path, no_input: bool):
    """Create .env and the upload directory, then sync local.settings.json"""
    click.echo("Upload API - Setup")
    click.echo("==================\n")

    env_path = project_dir / ".env"
    env_example_path = project_dir / ".env.example"
    if not env_path.exists() and env_example_path.exists():
        shutil.copyfile(env_example_path, env_path)
        click.echo("Created .env file from .env.example")

    upload_dir = project_dir / FIXED_VALUES["LOCAL_UPLOAD_PATH"]
    if not upload_dir.exists():
        upload_dir.mkdir(parents=True)
        click.echo(f"Created {upload_dir.name} directory")

    config = {}
    for key, prompt, default in SETUP_PROMPTS:
        if no_input:
            config[key] = default
        else:
            config[key] = click.prompt(
                prompt,
                default=default,
                show_default=bool(default),
                hide_input=key.endswith("SECRET"),
            )
    config.update(FIXED_VALUES)

    env_content = "".join(f"{key}={value}\n" for key, value in config.items() if value)
    env_path.write_text(env_content, encoding="utf-8")
    click.echo("\nConfiguration saved to .env file")

    settings_path = project_dir / "local.settings.json"
    if settings_path.exists():
        update_local_settings(env_path, settings_path)
        click.echo("Updated local.settings.json with environment variables")

    click.echo("\nSetup complete! You can now run:")
    click.echo("1. pip install -e .")
    click.echo("2. uvicorn upload_api.main:create_app --factory\n")


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    for key, value in settings.get_environment_dict().items():
        click.echo(f"  {key}: {value}")
    click.echo(f"  Remote storage: {'configured' if settings.remote_storage_configured else 'not configured'}")
    click.echo(f"  SharePoint: {'configured' if settings.sharepoint_configured else 'not configured (mock mode)'}")


if __name__ == "__main__":
    cli()
