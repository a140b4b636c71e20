from __future__ import annotations


class ConfigValidationError(Exception):
    """A configuration problem that must be fixed by the user, never retried."""

    def __init__(
        self,
        validation_message: str,
        *,
        validation_source: str = "config",
        validation_error: str = "Config validation error",
    ) -> None:
        self.validation_source = validation_source
        self.validation_error = validation_error
        self.validation_message = validation_message
        super().__init__(validation_message)


class ConfigFetchError(ConfigValidationError):
    def __init__(self, config_file_name: str | None, base_branch: str) -> None:
        self.config_file_name = config_file_name
        self.base_branch = base_branch
        super().__init__(
            f"Error fetching config file `{config_file_name}` from branch `{base_branch}`",
            validation_source="config",
            validation_error="Error fetching config file",
        )
