"""
Exception classes with built-in guidance for harness configuration.
"""
import sys


class ConfigException(Exception):
    """Base exception for all configuration errors."""
    def __init__(self, message: str, env_name: str = None, field_name: str = None):
        super().__init__(message)
        self.env_name = env_name
        self.field_name = field_name
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            else:
                return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your configuration and try again
"""


class InvalidConfigException(ConfigException):
    """Raised when an environment file exists but cannot be parsed or validated."""
    def __init__(self, message: str, env_name: str = None, path: str = None, **kwargs):
        self.path = path
        super().__init__(message, env_name=env_name, **kwargs)

    def _generate_guidance(self):
        return f"""
❌ Environment '{self.env_name or 'unknown'}' is invalid: {self}
💡 Fix the YAML file at {self.path or 'config/environments/<env>.yaml'}:
   1. baseURL must be an absolute http(s) URL
   2. timeout is in milliseconds and must be positive
   3. headers, endpoints and dummyEndpoints must be mappings of strings
"""


class ClientConfigurationError(ConfigException):
    """Raised when an HTTP client is built from a malformed configuration."""
    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ HTTP client could not be configured: {self}
💡 Resolve this in one of the following ways:
   1. Pass an absolute base URL, e.g. HttpClient.from_base_url("https://dummyjson.com")
   2. Or pick an environment with a valid baseURL: {command} --config-env=<env>
"""


class MissingEndpointParameterException(ConfigException):
    """Raised when an endpoint template is expanded without all of its parameters."""
    def __init__(self, message: str, template: str, missing: list = None, **kwargs):
        self.template = template
        self.missing = missing or []
        super().__init__(message, **kwargs)

    def _generate_guidance(self):
        return f"""
❌ Endpoint template '{self.template}' needs values for: {', '.join(self.missing)}
💡 Pass them as keyword arguments, e.g. expand_endpoint('{self.template}', {self.missing[0] if self.missing else 'id'}=1)
"""
