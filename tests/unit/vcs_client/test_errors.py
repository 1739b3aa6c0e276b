"""Unit tests for the exception hierarchy."""

from cms_backend_azure.config.errors import ConfigError, ConfigFileError
from cms_backend_azure.vcs_client.errors import (
    APIError,
    BackendError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    NotFoundError,
)
from cms_backend_azure.workflow.errors import (
    InvalidContentKeyError,
    LockAcquisitionError,
    MissingEntryIdentifierError,
    WorkflowError,
)


class TestErrorHierarchy:
    """All library errors share BackendError as base."""

    def test_all_errors_are_backend_errors(self):
        errors = [
            APIError("x"),
            NotFoundError("File a.md"),
            InvalidCredentialsError("https://dev.azure.com"),
            NotAuthenticatedError("list media"),
            InvalidContentKeyError("", "empty"),
            MissingEntryIdentifierError(),
            LockAcquisitionError("publish entry", 15.0),
            ConfigError("bad"),
            ConfigFileError("config.yml", "not found"),
        ]
        for error in errors:
            assert isinstance(error, BackendError)

    def test_caller_errors_are_value_errors(self):
        assert isinstance(InvalidContentKeyError("", "empty"), ValueError)
        assert isinstance(MissingEntryIdentifierError(), ValueError)

    def test_lock_error_is_workflow_error(self):
        assert isinstance(LockAcquisitionError("publish entry", 1.0), WorkflowError)


class TestErrorMessages:
    """Error messages carry their context."""

    def test_api_error_with_status(self):
        error = APIError("boom", status_code=500)
        assert str(error) == "Azure DevOps API error (500): boom"
        assert error.status_code == 500

    def test_api_error_without_status(self):
        assert str(APIError("boom")) == "Azure DevOps API error: boom"

    def test_not_found(self):
        error = NotFoundError("File a.md")
        assert error.status_code == 404
        assert error.resource == "File a.md"
        assert "File a.md not found" in str(error)

    def test_lock_acquisition_names_operation(self):
        error = LockAcquisitionError("update entry status", 15.0)
        assert "update entry status" in str(error)
        assert error.timeout == 15.0

    def test_missing_identifier(self):
        assert str(MissingEntryIdentifierError()) == (
            "Missing unpublished entry id or collection and slug"
        )

    def test_config_error_with_field(self):
        error = ConfigError("must be a string", config_field="backend.repo")
        assert str(error) == "Invalid backend configuration (backend.repo): must be a string"
        assert error.reason == "must be a string"

    def test_config_error_without_field(self):
        assert str(ConfigError("empty file")) == "Invalid backend configuration: empty file"

    def test_config_file_error(self):
        error = ConfigFileError("config.yml", "Permission denied")
        assert str(error) == "Cannot read configuration file config.yml: Permission denied"
        assert error.config_path == "config.yml"
