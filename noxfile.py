import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
# Default sessions when running "nox"
nox.options.sessions = ["lint", "tests"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "LOG_LEVEL",
    "ALLOW_VOTES_AFTER_REVEAL",
    "STRICT_ESTIMATES",
]


def _set_env(session):
    """Propagate configuration variables and put the project root on PYTHONPATH."""
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "poker/", "tests/")
    session.run("black", "poker/", "tests/")
    session.run("flake8", "poker/", "tests/")
    session.run("mypy", "poker/")


@nox.session(name="tests")
def tests(session):
    """
    Run the test suite against in-memory SQLite.
    Pass positional args to target specific tests.
    Usage:
      nox -s tests
      nox -s tests -- tests/unit/test_realtime/test_engine.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    targets = session.posargs or ["tests"]
    session.run(
        "pytest",
        *targets,
        "-vv",
        "--tb=short",
        "--cov=poker",
        "--cov-report=term-missing",
        "--cov-fail-under=80",
    )
