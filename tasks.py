"""Invoke entry point: exposes the rest-harness tasks from the repository root."""

from rest_harness.tasks import list_envs, serve_fake, show_config, test  # noqa: F401
