"""
Root pytest configuration for rest-harness.

The harness fixtures themselves come from the rest_harness pytest11 plugin.
"""

pytest_plugins = ["pytester"]
