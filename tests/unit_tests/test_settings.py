import pydantic
import pytest

from upload_api.config.settings import Settings
from tests.fixtures.settings import make_settings

CONFIG_ENV_VARS = [
    "S3_BUCKET_NAME",
    "LOCAL_UPLOAD_PATH",
    "SHAREPOINT_TENANT_ID",
    "SHAREPOINT_CLIENT_ID",
    "SHAREPOINT_CLIENT_SECRET",
    "LOG_LEVEL",
    "MAX_FILE_SIZE",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(clean_env):
    settings = Settings(_env_file=None)

    assert settings.s3_bucket_name == ""
    assert settings.local_upload_path == "uploads"
    assert settings.max_file_size == 10 * 1024 * 1024
    assert settings.remote_storage_configured is False
    assert settings.sharepoint_configured is False


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("S3_BUCKET_NAME", "my-bucket")
    monkeypatch.setenv("LOCAL_UPLOAD_PATH", "/var/uploads")
    monkeypatch.setenv("SHAREPOINT_TENANT_ID", "tenant")
    monkeypatch.setenv("SHAREPOINT_CLIENT_ID", "client")
    monkeypatch.setenv("SHAREPOINT_CLIENT_SECRET", "secret")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.s3_bucket_name == "my-bucket"
    assert settings.local_upload_path == "/var/uploads"
    assert settings.remote_storage_configured is True
    assert settings.sharepoint_configured is True
    assert settings.log_level == "DEBUG"


def test_reads_env_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("S3_BUCKET_NAME=from-file\nMAX_FILE_SIZE=42\n")

    settings = Settings(_env_file=env_file)

    assert settings.s3_bucket_name == "from-file"
    assert settings.max_file_size == 42


def test_blank_bucket_means_local_only(tmp_path):
    settings = make_settings(tmp_path, s3_bucket_name="   ")

    assert settings.s3_bucket_name == ""
    assert settings.remote_storage_configured is False


@pytest.mark.parametrize(
    "missing",
    ["sharepoint_tenant_id", "sharepoint_client_id", "sharepoint_client_secret"],
)
def test_sharepoint_needs_every_credential(tmp_path, missing):
    credentials = {
        "sharepoint_tenant_id": "tenant",
        "sharepoint_client_id": "client",
        "sharepoint_client_secret": "secret",
    }
    credentials[missing] = ""

    assert make_settings(tmp_path, **credentials).sharepoint_configured is False


def test_invalid_log_level(tmp_path):
    with pytest.raises(pydantic.ValidationError):
        make_settings(tmp_path, log_level="LOUD")


def test_environment_dict_masks_secrets(tmp_path):
    settings = make_settings(
        tmp_path,
        sharepoint_client_secret="super-secret",
        aws_secret_access_key="aws-secret",
    )

    env = settings.get_environment_dict()

    assert env["SHAREPOINT_CLIENT_SECRET"] == "****"
    assert env["AWS_SECRET_ACCESS_KEY"] == "****"
    assert "super-secret" not in env.values()
    assert env["LOCAL_UPLOAD_PATH"] == settings.local_upload_path
