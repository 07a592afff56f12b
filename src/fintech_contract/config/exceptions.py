"""
Exception classes with built-in guidance for configuration errors.
"""
import sys


class ConfigurationError(Exception):
    """Raised when the test run configuration is invalid or unreadable."""

    def __init__(self, message: str, setting_name: str = None, config_path: str = None):
        super().__init__(message)
        self.setting_name = setting_name
        self.config_path = config_path
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            return executable
        return "unknown command"

    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ Configuration error: {self}
💡 Resolve this in one of the following ways:
   1. Set the environment variable, e.g.: export TEST_API_MODE=REMOTE API_BASE_URL=http://host:3030
   2. Or pass options to pytest: {command} --api-mode=REMOTE --api-url=http://host:3030
   3. Or fix config/api.yaml (keys under 'api:')
"""
