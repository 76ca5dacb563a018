#!/usr/bin/env python3
"""
Application Entry Script.

Main entry point for the Beyond NP API. All functionality is accessible
through command-line options.

Usage:
    python run.py --help
    python run.py --action server --verbose
    python run.py --action migrate
    python run.py --action health --debug
    python run.py --action config
    python run.py --action test --test-type unit
"""

import subprocess
import sys
from pathlib import Path

import click

# Ensure project root is in path for absolute imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from beyondnp.backend.core.logging import get_logger, setup_logging


def validate_project_root() -> Path:
    """Validate that we're running from the project root."""
    if not (PROJECT_ROOT / ".project_root").exists():
        click.echo(
            click.style("Error: .project_root not found. Run from project root.", fg="red"),
            err=True,
        )
        sys.exit(1)
    return PROJECT_ROOT


@click.command()
@click.option(
    "--action",
    type=click.Choice(["server", "migrate", "health", "config", "test", "info"]),
    default="info",
    help="Action to perform.",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output (INFO level logging).",
)
@click.option(
    "--debug", "-d",
    is_flag=True,
    help="Enable debug output (DEBUG level logging).",
)
@click.option(
    "--host",
    default=None,
    help="Server host (for server action).",
)
@click.option(
    "--port",
    default=None,
    type=int,
    help="Server port (for server action).",
)
@click.option(
    "--reload",
    is_flag=True,
    help="Enable auto-reload (for server action).",
)
@click.option(
    "--revision",
    default="head",
    help="Target revision (for migrate action).",
)
@click.option(
    "--test-type",
    type=click.Choice(["all", "unit", "integration"]),
    default="all",
    help="Test type to run (for test action).",
)
@click.option(
    "--coverage",
    is_flag=True,
    help="Run tests with coverage (for test action).",
)
def main(
    action: str,
    verbose: bool,
    debug: bool,
    host: str | None,
    port: int | None,
    reload: bool,
    revision: str,
    test_type: str,
    coverage: bool,
) -> None:
    """
    Beyond NP API Entry Point.

    Run the API server, apply database migrations, check health,
    view configuration, or run tests.

    Examples:

        # Start development server
        python run.py --action server --reload --verbose

        # Bring the database schema up to date
        python run.py --action migrate

        # View loaded configuration
        python run.py --action config

        # Run unit tests with coverage
        python run.py --action test --test-type unit --coverage
    """
    validate_project_root()

    if debug:
        log_level = "DEBUG"
    elif verbose:
        log_level = "INFO"
    else:
        log_level = "WARNING"

    setup_logging(level=log_level, format_type="console")
    logger = get_logger(__name__)

    logger.debug("Starting application", extra={"action": action, "log_level": log_level})

    if action == "server":
        run_server(logger, host, port, reload)
    elif action == "migrate":
        run_migrations(logger, revision)
    elif action == "health":
        check_health(logger)
    elif action == "config":
        show_config(logger)
    elif action == "test":
        run_tests(logger, test_type, coverage)
    elif action == "info":
        show_info(logger)


def run_server(logger, host: str | None, port: int | None, reload: bool) -> None:
    """Start the FastAPI server with uvicorn."""
    from beyondnp.backend.core.config import get_app_config

    server = get_app_config().application.server
    server_host = host or server.host
    server_port = port or server.port

    logger.info(
        "Starting server",
        extra={"host": server_host, "port": server_port, "reload": reload},
    )

    cmd = [
        sys.executable, "-m", "uvicorn",
        "beyondnp.backend.main:app",
        "--host", server_host,
        "--port", str(server_port),
    ]

    if reload:
        cmd.append("--reload")

    click.echo(f"Starting server at http://{server_host}:{server_port}")
    click.echo("Press Ctrl+C to stop\n")

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except subprocess.CalledProcessError as e:
        logger.error("Server failed to start", extra={"exit_code": e.returncode})
        sys.exit(e.returncode)


def run_migrations(logger, revision: str) -> None:
    """Upgrade the database schema with alembic."""
    cmd = [
        sys.executable, "-m", "alembic",
        "-c", str(PROJECT_ROOT / "alembic.ini"),
        "upgrade", revision,
    ]
    logger.info("Running migrations", extra={"revision": revision})
    click.echo(f"Running: {' '.join(cmd)}\n")

    result = subprocess.run(cmd, cwd=PROJECT_ROOT)
    if result.returncode != 0:
        logger.error("Migration failed", extra={"exit_code": result.returncode})
    sys.exit(result.returncode)


def check_health(logger) -> None:
    """Check application health by testing imports and configuration."""
    click.echo("Checking application health...\n")

    checks = []

    try:
        from beyondnp.backend.core.config import get_app_config, get_settings
        from beyondnp.backend.core.exceptions import ApplicationError  # noqa: F401
        checks.append(("Core imports", True, None))
        logger.debug("Core imports successful")
    except ImportError as e:
        checks.append(("Core imports", False, str(e)))
        logger.error("Core imports failed", extra={"error": str(e)})
        get_app_config = get_settings = None

    if get_app_config is not None:
        try:
            app_config = get_app_config()
            app_name = app_config.application.name
            checks.append(("YAML configuration", True, f"App: {app_name}"))
            logger.debug("Configuration loaded", extra={"app_name": app_name})
        except (ValueError, FileNotFoundError, RuntimeError) as e:
            checks.append(("YAML configuration", False, str(e)))
            logger.error("Configuration failed", extra={"error": str(e)})

    if get_settings is not None:
        try:
            get_settings()
            checks.append(("Secrets (config/.env)", True, None))
            logger.debug("Secrets loaded")
        except (ValueError, RuntimeError) as e:
            checks.append(("Secrets (config/.env)", False, str(e)))
            logger.warning("Secrets not configured", extra={"error": str(e)})

    try:
        from beyondnp.backend.main import create_app
        app = create_app()
        checks.append(("FastAPI application", True, f"Title: {app.title}"))
        logger.debug("FastAPI app loaded", extra={"title": app.title})
    except (ImportError, ValueError, FileNotFoundError, RuntimeError) as e:
        checks.append(("FastAPI application", False, str(e)))
        logger.error("FastAPI app failed", extra={"error": str(e)})

    try:
        from beyondnp.backend.models.base import Base
        import beyondnp.backend.models.document  # noqa: F401
        import beyondnp.backend.models.note  # noqa: F401
        import beyondnp.backend.models.user  # noqa: F401
        tables = ", ".join(sorted(Base.metadata.tables))
        checks.append(("Database models", True, tables))
        logger.debug("Database models loaded")
    except ImportError as e:
        checks.append(("Database models", False, str(e)))
        logger.error("Database models failed", extra={"error": str(e)})

    click.echo("Health Check Results:")
    click.echo("-" * 50)

    all_passed = True
    for name, passed, detail in checks:
        status = click.style("PASS", fg="green") if passed else click.style("FAIL", fg="red")
        detail_str = f" ({detail})" if detail else ""
        click.echo(f"  {status}  {name}{detail_str}")
        if not passed:
            all_passed = False

    click.echo("-" * 50)

    if all_passed:
        click.echo(click.style("\nAll checks passed!", fg="green"))
    else:
        click.echo(click.style("\nSome checks failed. See details above.", fg="yellow"))
        click.echo("Note: secrets require config/.env (see config/.env.example).")


def _echo_section(title: str, values: dict, indent: int = 2) -> None:
    click.echo(f"\n{title}:")
    click.echo("-" * 40)
    _echo_values(values, indent)


def _echo_values(values: dict, indent: int) -> None:
    pad = " " * indent
    for key, value in values.items():
        if isinstance(value, dict):
            click.echo(f"{pad}{key}:")
            _echo_values(value, indent + 2)
        else:
            click.echo(f"{pad}{key}: {value}")


def show_config(logger) -> None:
    """Display loaded configuration. Secrets from config/.env are never printed."""
    click.echo("Application Configuration:")

    try:
        from beyondnp.backend.core.config import get_app_config

        app_config = get_app_config()
    except (ValueError, FileNotFoundError, RuntimeError) as e:
        logger.error("Failed to load configuration", extra={"error": str(e)})
        click.echo(click.style(f"Error loading configuration: {e}", fg="red"))
        sys.exit(1)

    _echo_section("Application Settings (application.yaml)", app_config.application.model_dump())
    _echo_section("Database Settings (database.yaml)", app_config.database.model_dump())
    _echo_section("Logging Settings (logging.yaml)", app_config.logging.model_dump())
    _echo_section("Security Settings (security.yaml)", app_config.security.model_dump())
    _echo_section("Email Settings (email.yaml)", app_config.email.model_dump())

    logger.info("Configuration displayed successfully")


def run_tests(logger, test_type: str, coverage: bool) -> None:
    """Run the test suite."""
    logger.info("Running tests", extra={"type": test_type, "coverage": coverage})

    cmd = [sys.executable, "-m", "pytest"]

    if test_type == "unit":
        cmd.append("tests/unit")
    elif test_type == "integration":
        cmd.append("tests/integration")
    else:
        cmd.append("tests/")

    cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=beyondnp/backend", "--cov-report=term-missing"])

    click.echo(f"Running: {' '.join(cmd)}\n")

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except FileNotFoundError:
        logger.error("pytest not found. Install with: pip install -e '.[test]'")
        sys.exit(1)


def show_info(logger) -> None:
    """Display application information."""
    from beyondnp.backend.core.config import get_app_config

    application = get_app_config().application

    click.echo(application.name)
    click.echo("=" * 40)
    click.echo(f"Version: {application.version}")
    click.echo(f"Description: {application.description}")
    click.echo(f"Environment: {application.environment}")
    click.echo()
    click.echo("Available Actions:")
    click.echo("  --action server   Start the API server")
    click.echo("  --action migrate  Apply database migrations")
    click.echo("  --action health   Check application health")
    click.echo("  --action config   Display configuration")
    click.echo("  --action test     Run test suite")
    click.echo("  --action info     Show this information")
    click.echo()
    click.echo("Logging Options:")
    click.echo("  --verbose, -v     Enable INFO level logging")
    click.echo("  --debug, -d       Enable DEBUG level logging")
    click.echo()
    click.echo("Examples:")
    click.echo("  python run.py --action server --reload --verbose")
    click.echo("  python run.py --action migrate")
    click.echo("  python run.py --action test --test-type unit --coverage")

    logger.debug("Info displayed")


if __name__ == "__main__":
    main()
