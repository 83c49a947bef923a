"""Unit tests for application settings configuration."""

from pathlib import Path

from lead_intake.config import Settings


def test_settings_uses_project_env_file_independent_of_cwd():
    """Settings should always include the project-level .env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_project_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_project_env in normalized
    assert str(Path(".env")) in normalized


def test_default_page_size_is_clamped_to_max():
    settings = Settings(default_page_size=500, max_page_size=50, _env_file=None)
    assert settings.default_page_size == 50


def test_bootstrap_admin_email_is_normalised():
    settings = Settings(bootstrap_admin_email="  Admin@Example.com ", _env_file=None)
    assert settings.bootstrap_admin_email == "admin@example.com"
