"""Task definitions for rest-harness.

Run ``invoke --list`` from the repository root to see them.
"""

import logging
import sys

import uvicorn
import yaml
from invoke import task

from rest_harness.config import ConfigException, available_environments, load_config
from rest_harness.config.logging import bootstrap_logging
from rest_harness.fake import create_app

logger = logging.getLogger(__name__)

SUITES = {
    'unit': ['tests/unit'],
    'contract': ['tests/contract'],
    'live': ['tests/live'],
}


@task(help={
    'suite': 'Test suite to run (unit, contract, live)',
    'config_env': 'Harness environment to load (e.g., qa, local)',
    'verbose': 'Enable verbose output',
    'test_name': 'Filter to specific test(s) by pytest -k expression',
})
def test(ctx, suite='unit', config_env=None, verbose=False, test_name=None):
    """
    Run a test suite with pytest.

    Examples:
        inv test                          # Unit tests
        inv test --suite=contract         # Client against the fake catalog
        inv test --suite=live --config-env=qa
    """
    if suite not in SUITES:
        print(f"❌ Unknown suite '{suite}'. Available suites: {', '.join(SUITES)}", file=sys.stderr)
        sys.exit(1)

    cmd = [sys.executable, '-m', 'pytest', '--tb=short']
    if suite == 'live':
        cmd.append('--live')
    if config_env:
        cmd.extend(['--config-env', config_env])
    if verbose:
        cmd.append('-v')
    if test_name:
        cmd.extend(['-k', f'"{test_name}"'])
    cmd.extend(SUITES[suite])

    logger.debug(f"Running {suite} tests: {' '.join(cmd)}")
    return ctx.run(' '.join(cmd), pty=False, warn=True)


@task(help={'env': 'Harness environment name (default: $HARNESS_CONFIG or qa)'})
def show_config(ctx, env=None):
    """
    Show the resolved configuration for an environment.

    Outputs:
        stdout: YAML configuration (parseable)
        stderr: Diagnostic information
    """
    bootstrap_logging(__name__)
    try:
        harness = load_config(env)
    except ConfigException as e:
        print(e.guidance, file=sys.stderr)
        sys.exit(1)

    print(f"✅ Configuration '{harness.env}' loaded", file=sys.stderr)
    print(f"🌐 Base URL: {harness.base_url}", file=sys.stderr)
    if harness.base_url2:
        print(f"🌐 Secondary base URL: {harness.base_url2}", file=sys.stderr)
    yaml.safe_dump(harness.model_dump(by_alias=True), sys.stdout,
                   default_flow_style=False, sort_keys=True)


@task
def list_envs(ctx):
    """List available harness environments."""
    for name in available_environments():
        print(name)


@task(help={
    'host': 'Interface to bind (default: 127.0.0.1)',
    'port': 'Port to listen on (default: 8000)',
})
def serve_fake(ctx, host='127.0.0.1', port=8000):
    """Serve the fake catalog API for the 'local' environment."""
    bootstrap_logging(__name__)
    print(f"🚀 Fake catalog listening on http://{host}:{port}", file=sys.stderr)
    uvicorn.run(create_app(), host=host, port=int(port), log_level='info')
